"""Factory for creating document readers based on file format."""

from abc import ABC, abstractmethod
from pathlib import Path

from epub_editor.core.errors import OpenFailed
from epub_editor.models.document import EpubDocument


class DocumentReader(ABC):
    """Abstract base class for document readers."""

    @abstractmethod
    def read(self, source: Path | str | bytes) -> EpubDocument:
        """Read a document from a path or raw bytes.

        Raises:
            OpenFailed: If the source cannot be located or opened
            ParseFailed: If the container or a spine resource is unreadable
        """


class ReaderFactory:
    """Factory for creating the appropriate reader for a file format."""

    SUPPORTED_FORMATS = {
        ".epub": "epub",
    }

    @classmethod
    def create(cls, path: Path) -> DocumentReader:
        """Create the reader for the given file.

        Args:
            path: Path to the book file

        Returns:
            DocumentReader instance for the file type

        Raises:
            OpenFailed: If the file does not exist or its format is unsupported
        """
        if not path.exists():
            raise OpenFailed("File not found", path)

        suffix = path.suffix.lower()

        if suffix not in cls.SUPPORTED_FORMATS:
            supported = ", ".join(cls.SUPPORTED_FORMATS.keys())
            raise OpenFailed(
                f"Unsupported format: {suffix or '(none)'}. Supported formats: {supported}",
                path,
            )

        from epub_editor.core.epub_reader import EpubReader

        return EpubReader()

    @classmethod
    def is_supported(cls, path: Path) -> bool:
        """Check if file format is supported."""
        return path.suffix.lower() in cls.SUPPORTED_FORMATS
