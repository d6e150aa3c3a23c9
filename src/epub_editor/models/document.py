"""Data models for the in-memory EPUB document."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

DEFAULT_TITLE = "Unknown Title"
DEFAULT_AUTHOR = "Unknown Author"
DEFAULT_LANGUAGE = "en"


class MetadataField(str, Enum):
    """Editable book-level metadata field."""

    TITLE = "title"
    AUTHOR = "author"
    LANGUAGE = "language"


class BookMetadata(BaseModel):
    """Book-level metadata."""

    title: str = DEFAULT_TITLE
    author: str = DEFAULT_AUTHOR
    language: str = DEFAULT_LANGUAGE


class EpubItem(BaseModel):
    """Single manifest resource and its text content."""

    id: str
    href: str
    media_type: str = ""
    content: str = ""


class EpubDocument(BaseModel):
    """Metadata, reading order and content items of one EPUB."""

    metadata: BookMetadata = Field(default_factory=BookMetadata)
    spine: list[str] = Field(default_factory=list)
    manifest: dict[str, EpubItem] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_references(self) -> "EpubDocument":
        for key, item in self.manifest.items():
            if item.id != key:
                raise ValueError(f"Manifest key {key!r} does not match item id {item.id!r}")
        dangling = [item_id for item_id in self.spine if item_id not in self.manifest]
        if dangling:
            raise ValueError(f"Spine references unknown items: {', '.join(dangling)}")
        return self

    @classmethod
    def empty(cls) -> "EpubDocument":
        """Placeholder document used before anything is loaded."""
        return cls()

    @property
    def first_item_id(self) -> str | None:
        return self.spine[0] if self.spine else None

    def get_item(self, item_id: str) -> EpubItem | None:
        return self.manifest.get(item_id)

    def items_in_reading_order(self) -> list[EpubItem]:
        """Return manifest items in spine order."""
        return [self.manifest[item_id] for item_id in self.spine]

    def set_metadata(self, field: MetadataField, value: str) -> None:
        """Set a metadata field. Any string is accepted, including empty ones."""
        setattr(self.metadata, MetadataField(field).value, value)

    def set_item_content(self, item_id: str, content: str) -> bool:
        """Replace the content of an existing item.

        Returns False when ``item_id`` is not in the manifest; no new entry
        is created in that case.
        """
        item = self.manifest.get(item_id)
        if item is None:
            return False
        self.manifest[item_id] = item.model_copy(update={"content": content})
        return True

    def copy_for_edit(self) -> "EpubDocument":
        """Copy that can be mutated without affecting this document.

        Items are shared; ``set_item_content`` replaces them instead of
        mutating them, so sharing is safe.
        """
        return self.model_copy(
            update={
                "metadata": self.metadata.model_copy(),
                "spine": list(self.spine),
                "manifest": dict(self.manifest),
            }
        )
