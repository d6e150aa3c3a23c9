"""Custom widgets for the editor TUI."""

from epub_editor.tui.widgets.error_dialog import ErrorDialog
from epub_editor.tui.widgets.item_table import ItemTable

__all__ = ["ItemTable", "ErrorDialog"]
