"""Browse and edit the content and metadata of EPUB books."""

__version__ = "0.1.0"
