"""Data models."""

from epub_editor.models.document import (
    DEFAULT_AUTHOR,
    DEFAULT_LANGUAGE,
    DEFAULT_TITLE,
    BookMetadata,
    EpubDocument,
    EpubItem,
    MetadataField,
)

__all__ = [
    "DEFAULT_AUTHOR",
    "DEFAULT_LANGUAGE",
    "DEFAULT_TITLE",
    "BookMetadata",
    "EpubDocument",
    "EpubItem",
    "MetadataField",
]
