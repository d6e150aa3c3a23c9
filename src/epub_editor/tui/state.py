"""Configuration and view helpers for the editor TUI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from epub_editor.core.session import EditorMode

if TYPE_CHECKING:
    from epub_editor.models.document import EpubDocument


@dataclass
class EditorConfig:
    """Startup configuration for the editor."""

    start_dir: Path = field(default_factory=lambda: Path("."))
    initial_path: Path | None = None
    mode: EditorMode = EditorMode.RICH_TEXT
    extensions: tuple[str, ...] = (".epub",)


@dataclass
class ItemRow:
    """One spine entry as shown in the item table."""

    position: int
    item_id: str
    title: str
    media_type: str
    word_count: int
    selected: bool = False


# ============================================================================
# Helper functions for the item table and file picker
# ============================================================================


def build_item_rows(document: EpubDocument, current_item_id: str | None) -> list[ItemRow]:
    """Build table rows for every spine entry, in reading order."""
    from epub_editor.core.content_utils import count_words, display_title

    rows: list[ItemRow] = []
    for position, item in enumerate(document.items_in_reading_order(), start=1):
        rows.append(
            ItemRow(
                position=position,
                item_id=item.id,
                title=display_title(item.id, item.content),
                media_type=item.media_type,
                word_count=count_words(item.content),
                selected=item.id == current_item_id,
            )
        )
    return rows


def scan_for_books(directory: Path, extensions: tuple[str, ...] = (".epub",)) -> list[Path]:
    """Find all files with a supported extension in directory."""
    if not directory.is_dir():
        return []
    books = [
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in extensions
    ]
    return sorted(books, key=lambda p: p.name.lower())


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def window_title(document: EpubDocument) -> str:
    return f"EPUB Editor - {document.metadata.title}"
