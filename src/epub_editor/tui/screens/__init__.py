"""TUI screens for the editor."""

from epub_editor.tui.screens.file_picker import FilePickerScreen

__all__ = ["FilePickerScreen"]
