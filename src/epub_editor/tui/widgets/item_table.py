"""Table listing the spine items of the open document."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import DataTable

from epub_editor.tui.state import ItemRow


class ItemTable(DataTable):
    """DataTable of reading-order items; row keys are spine positions."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._item_ids: list[str] = []

    def on_mount(self) -> None:
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if self.columns:
            return
        self.add_column("", key="marker", width=2)
        self.add_column("#", key="position", width=4)
        self.add_column("Item", key="title")
        self.add_column("Words", key="words", width=8)

    def populate(self, rows: list[ItemRow]) -> None:
        """Replace all rows, keeping the cursor on the selected item."""
        self._ensure_columns()
        self.clear()
        self._item_ids = [row.item_id for row in rows]

        cursor_row = 0
        for index, row in enumerate(rows):
            marker = Text("▶", style="green") if row.selected else Text("")
            title = Text(row.title, style="bold" if row.selected else "")
            self.add_row(
                marker,
                Text(str(row.position), style="dim"),
                title,
                f"{row.word_count:,}",
                key=str(index),
            )
            if row.selected:
                cursor_row = index

        if rows:
            self.move_cursor(row=cursor_row)

    def item_id_at(self, row_index: int) -> str | None:
        """Item id shown at a row index, if any."""
        if 0 <= row_index < len(self._item_ids):
            return self._item_ids[row_index]
        return None
