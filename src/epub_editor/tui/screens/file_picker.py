"""Modal screen for choosing the EPUB file to open."""

from __future__ import annotations

from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import DataTable, Input, Static


class FilePickerScreen(ModalScreen[Path | None]):
    """Pick a book from a directory listing or type a path.

    Dismisses with the chosen path, or with None when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    def __init__(
        self,
        directory: Path,
        extensions: tuple[str, ...] = (".epub",),
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.directory = directory
        self.extensions = extensions
        self.books: list[Path] = []

    def compose(self) -> ComposeResult:
        with Container(id="picker"):
            yield Static("Select a book to open:", id="picker-prompt")
            yield DataTable(id="picker-table", cursor_type="row")
            yield Input(placeholder="...or type a path and press Enter", id="picker-path")

    def on_mount(self) -> None:
        from epub_editor.tui.state import format_file_size, scan_for_books

        self.books = scan_for_books(self.directory, self.extensions)

        table = self.query_one("#picker-table", DataTable)
        table.add_columns("File", "Size")

        if not self.books:
            suffixes = ", ".join(self.extensions)
            self.query_one("#picker-prompt", Static).update(
                f"[red]No {suffixes} files found in {self.directory}.[/]\n"
                "[dim]Type a path below or press Escape to cancel.[/]"
            )
            table.display = False
            self.query_one("#picker-path", Input).focus()
        else:
            for book in self.books:
                table.add_row(book.name, format_file_size(book.stat().st_size))
            table.focus()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        row_index = event.cursor_row
        if 0 <= row_index < len(self.books):
            self.dismiss(self.books[row_index])

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        value = event.value.strip()
        if not value:
            return
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.directory / path
        self.dismiss(path)

    def action_cancel(self) -> None:
        self.dismiss(None)
