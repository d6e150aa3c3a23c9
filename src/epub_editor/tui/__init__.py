"""Textual TUI for editing EPUB content and metadata."""

from epub_editor.tui.app import EpubEditorApp
from epub_editor.tui.state import EditorConfig

__all__ = ["EpubEditorApp", "EditorConfig"]
