"""Main Textual application for the EPUB editor."""

from __future__ import annotations

import logging
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.widgets import Checkbox, DataTable, Footer, Header, Input, Label, Static, TextArea

from epub_editor.core.errors import LoadInProgressError
from epub_editor.core.session import (
    EditContent,
    EditorMode,
    EditorSession,
    LoadFailed,
    LoadResult,
    RefreshPreview,
    SaveContent,
    SelectItem,
    ToggleMode,
    UpdateMetadata,
)
from epub_editor.models.document import MetadataField
from epub_editor.tui.state import EditorConfig, build_item_rows, window_title
from epub_editor.tui.widgets import ErrorDialog, ItemTable

log = logging.getLogger(__name__)

METADATA_INPUTS = {
    "meta-title": MetadataField.TITLE,
    "meta-author": MetadataField.AUTHOR,
    "meta-language": MetadataField.LANGUAGE,
}


class EpubEditorApp(App):
    """Browse spine items, edit their content and the book metadata."""

    CSS_PATH = "styles.tcss"
    TITLE = "EPUB Editor"

    BINDINGS = [
        Binding("ctrl+o", "open", "Open", show=True, priority=True),
        Binding("ctrl+s", "save", "Save", show=True, priority=True),
        Binding("f2", "toggle_mode", "Markdown", show=True, priority=True),
        Binding("f5", "refresh_preview", "Preview", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        config: EditorConfig | None = None,
        session: EditorSession | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.config = config or EditorConfig()
        self.session = session or EditorSession(mode=self.config.mode)

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header()
        with Container(id="main"):
            with Horizontal(id="metadata"):
                yield Label("Title:", classes="meta-label")
                yield Input(id="meta-title", classes="meta-value")
                yield Label("Author:", classes="meta-label")
                yield Input(id="meta-author", classes="meta-value")
                yield Label("Language:", classes="meta-label")
                yield Input(id="meta-language", classes="meta-value")
            yield Checkbox("Use Markdown Editor", id="mode-toggle")
            with Horizontal(id="workspace"):
                with Vertical(id="structure"):
                    yield Static("[bold]File Structure[/]", classes="pane-title")
                    yield ItemTable(id="items")
                with Vertical(id="editor-pane"):
                    yield Static("[bold]Content Editor[/]", classes="pane-title")
                    yield TextArea(id="editor")
                    with VerticalScroll(id="preview-pane"):
                        yield Static("", id="preview", markup=False)
            yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self._sync_all()
        if self.config.initial_path is not None:
            self._load_initial(self.config.initial_path)

    @work(thread=True, group="load")
    def _load_initial(self, path: Path) -> None:
        result = self.session.load_path(path)
        self.call_from_thread(self._finish_initial_load, result)

    def _finish_initial_load(self, result: LoadResult) -> None:
        if isinstance(result, LoadFailed):
            self.notify(str(result.error), title="Could not open book", severity="error")
        self._sync_all()

    # ------------------------------------------------------------------
    # State -> widgets
    # ------------------------------------------------------------------

    def _sync_all(self) -> None:
        """Push the whole session state into the widgets."""
        state = self.session.state
        document = state.document

        with self.prevent(Input.Changed, TextArea.Changed, Checkbox.Changed):
            for input_id, metadata_field in METADATA_INPUTS.items():
                self.query_one(f"#{input_id}", Input).value = getattr(
                    document.metadata, metadata_field.value
                )
            self.query_one("#mode-toggle", Checkbox).value = state.mode is EditorMode.MARKDOWN
            self.query_one("#editor", TextArea).load_text(state.edit_buffer)

        self.query_one("#items", ItemTable).populate(
            build_item_rows(document, state.current_item_id)
        )
        self.title = window_title(document)
        self._sync_preview()
        self._sync_status()

    def _sync_preview(self) -> None:
        state = self.session.state
        self.query_one("#preview-pane").display = state.mode is EditorMode.MARKDOWN
        self.query_one("#preview", Static).update(state.preview)

    def _sync_status(self) -> None:
        state = self.session.state
        parts = []
        if state.source_path is not None:
            parts.append(state.source_path.name)
        if state.current_item_id is not None:
            parts.append(state.current_item_id)
        if state.is_dirty:
            parts.append("[yellow]modified[/]")
        self.query_one("#status", Static).update("  |  ".join(parts))

    # ------------------------------------------------------------------
    # Widgets -> messages
    # ------------------------------------------------------------------

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.data_table.id != "items":
            return
        item_id = self.query_one("#items", ItemTable).item_id_at(event.cursor_row)
        if item_id is None or item_id == self.session.state.current_item_id:
            return
        self.session.dispatch(SelectItem(item_id))
        self._sync_all()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.session.dispatch(EditContent(event.text_area.text))
        self._sync_preview()
        self._sync_status()

    def on_input_changed(self, event: Input.Changed) -> None:
        metadata_field = METADATA_INPUTS.get(event.input.id or "")
        if metadata_field is None:
            return
        self.session.dispatch(UpdateMetadata(metadata_field, event.value))
        self.title = window_title(self.session.document)

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        wants_markdown = event.value
        if wants_markdown != (self.session.state.mode is EditorMode.MARKDOWN):
            self.session.dispatch(ToggleMode())
        self._sync_preview()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_open(self) -> None:
        """Pick a file and load it."""
        self._open_document()

    @work(exclusive=False, group="load")
    async def _open_document(self) -> None:
        from epub_editor.tui.screens import FilePickerScreen
        from epub_editor.tui.widgets.error_dialog import RETRY

        while True:
            try:
                result = await self.session.open(
                    lambda: self.push_screen_wait(
                        FilePickerScreen(self.config.start_dir, self.config.extensions)
                    )
                )
            except LoadInProgressError:
                self.notify("A book is already being opened.", severity="warning")
                return

            if not isinstance(result, LoadFailed):
                break

            self.notify(str(result.error), title="Could not open book", severity="error")
            choice = await self.push_screen_wait(
                ErrorDialog("Could not open book", str(result.error))
            )
            if choice != RETRY:
                break

        self._sync_all()

    def action_save(self) -> None:
        """Commit the edit buffer to the selected item (in memory only)."""
        state = self.session.state
        if state.loading:
            self.notify("A book is being opened, nothing was saved.", severity="warning")
            return
        if state.current_item_id is None:
            self.notify("No item selected.", severity="warning")
            return
        self.session.dispatch(SaveContent())
        self.query_one("#items", ItemTable).populate(
            build_item_rows(self.session.document, self.session.state.current_item_id)
        )
        self._sync_status()
        self.notify(f"Saved {state.current_item_id} (in memory)")

    def action_toggle_mode(self) -> None:
        if self.session.state.loading:
            self.notify("A book is being opened, mode unchanged.", severity="warning")
            return
        self.session.dispatch(ToggleMode())
        with self.prevent(Checkbox.Changed):
            self.query_one("#mode-toggle", Checkbox).value = (
                self.session.state.mode is EditorMode.MARKDOWN
            )
        self._sync_preview()

    def action_refresh_preview(self) -> None:
        self.session.dispatch(RefreshPreview())
        self._sync_preview()
