"""Errors raised at the document reader boundary."""

from pathlib import Path


class LoadError(Exception):
    """A document could not be loaded."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class OpenFailed(LoadError):
    """The file could not be located or opened."""


class ParseFailed(LoadError):
    """The container is malformed or a critical resource is unreadable."""


class LoadInProgressError(RuntimeError):
    """Raised when a load is requested while another one is pending."""
