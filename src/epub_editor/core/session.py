"""Editor state, messages and the reducer that applies them.

All changes to an editing session go through ``update(state, message)``,
which returns a new ``EditorState`` and leaves its input untouched.
``EditorSession`` owns the current state, applies messages one at a time
and runs the only suspending operation, loading a document.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Union

from epub_editor.core.errors import LoadError, LoadInProgressError
from epub_editor.core.markdown_renderer import MarkdownRenderer, render_markdown
from epub_editor.core.reader_factory import DocumentReader
from epub_editor.models.document import EpubDocument, EpubItem, MetadataField

log = logging.getLogger(__name__)


class EditorMode(str, Enum):
    """How the edit buffer is being edited."""

    RICH_TEXT = "rich_text"
    MARKDOWN = "markdown"

    def toggled(self) -> EditorMode:
        if self is EditorMode.RICH_TEXT:
            return EditorMode.MARKDOWN
        return EditorMode.RICH_TEXT


@dataclass(frozen=True)
class EditorState:
    """Snapshot of one editing session."""

    document: EpubDocument = field(default_factory=EpubDocument.empty)
    current_item_id: str | None = None
    edit_buffer: str = ""
    mode: EditorMode = EditorMode.RICH_TEXT
    preview: str = ""

    # Load bookkeeping
    loading: bool = False
    source_path: Path | None = None
    last_error: str | None = None

    @property
    def current_item(self) -> EpubItem | None:
        if self.current_item_id is None:
            return None
        return self.document.get_item(self.current_item_id)

    @property
    def is_dirty(self) -> bool:
        """Whether the buffer differs from the selected item's content."""
        item = self.current_item
        return item is not None and item.content != self.edit_buffer


# ============================================================================
# Messages
# ============================================================================


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class DocumentLoaded:
    document: EpubDocument
    path: Path | None = None


@dataclass(frozen=True)
class LoadFailed:
    error: LoadError


@dataclass(frozen=True)
class LoadCancelled:
    """The user dismissed the file picker."""


@dataclass(frozen=True)
class SelectItem:
    item_id: str


@dataclass(frozen=True)
class EditContent:
    text: str


@dataclass(frozen=True)
class SaveContent:
    pass


@dataclass(frozen=True)
class UpdateMetadata:
    field: MetadataField
    value: str


@dataclass(frozen=True)
class ToggleMode:
    pass


@dataclass(frozen=True)
class RefreshPreview:
    pass


LoadResult = Union[DocumentLoaded, LoadFailed, LoadCancelled]

Message = Union[
    LoadStarted,
    DocumentLoaded,
    LoadFailed,
    LoadCancelled,
    SelectItem,
    EditContent,
    SaveContent,
    UpdateMetadata,
    ToggleMode,
    RefreshPreview,
]

_LOAD_RESULTS = (DocumentLoaded, LoadFailed, LoadCancelled)


# ============================================================================
# Reducer
# ============================================================================


def update(
    state: EditorState,
    message: Message,
    render: MarkdownRenderer = render_markdown,
) -> EditorState:
    """Apply one message and return the resulting state."""
    if state.loading and not isinstance(message, _LOAD_RESULTS):
        log.debug("Ignoring %s while a load is pending", type(message).__name__)
        return state

    if isinstance(message, LoadStarted):
        return replace(state, loading=True)

    if isinstance(message, DocumentLoaded):
        document = message.document
        item_id = document.first_item_id
        buffer = document.manifest[item_id].content if item_id is not None else ""
        return replace(
            state,
            document=document,
            current_item_id=item_id,
            edit_buffer=buffer,
            preview=render(buffer),
            loading=False,
            source_path=message.path,
            last_error=None,
        )

    if isinstance(message, LoadFailed):
        log.warning("Load failed: %s", message.error)
        return replace(state, loading=False, last_error=str(message.error))

    if isinstance(message, LoadCancelled):
        return replace(state, loading=False)

    if isinstance(message, SelectItem):
        item = state.document.get_item(message.item_id)
        if item is None:
            log.debug("Ignoring selection of unknown item %r", message.item_id)
            return state
        return replace(
            state,
            current_item_id=item.id,
            edit_buffer=item.content,
            preview=render(item.content),
        )

    if isinstance(message, EditContent):
        if state.mode is EditorMode.MARKDOWN:
            return replace(state, edit_buffer=message.text, preview=render(message.text))
        # Rich text edits leave the preview as it was
        return replace(state, edit_buffer=message.text)

    if isinstance(message, SaveContent):
        if state.current_item is None:
            log.debug("Nothing selected, save ignored")
            return state
        document = state.document.copy_for_edit()
        document.set_item_content(state.current_item_id, state.edit_buffer)
        return replace(state, document=document)

    if isinstance(message, UpdateMetadata):
        document = state.document.copy_for_edit()
        document.set_metadata(message.field, message.value)
        return replace(state, document=document)

    if isinstance(message, ToggleMode):
        mode = state.mode.toggled()
        if mode is EditorMode.MARKDOWN:
            return replace(state, mode=mode, preview=render(state.edit_buffer))
        return replace(state, mode=mode)

    if isinstance(message, RefreshPreview):
        return replace(state, preview=render(state.edit_buffer))

    raise TypeError(f"Unknown message: {message!r}")


# ============================================================================
# Session
# ============================================================================


PathPicker = Callable[[], Awaitable[Union[Path, None]]]


class EditorSession:
    """Owns the editor state and applies messages one at a time."""

    def __init__(
        self,
        reader: DocumentReader | None = None,
        render: MarkdownRenderer = render_markdown,
        mode: EditorMode = EditorMode.RICH_TEXT,
    ):
        if reader is None:
            from epub_editor.core.epub_reader import EpubReader

            reader = EpubReader()
        self.reader = reader
        self.render = render
        self._state = EditorState(mode=mode)
        self._lock = threading.Lock()

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def document(self) -> EpubDocument:
        return self._state.document

    @property
    def current_item(self) -> EpubItem | None:
        return self._state.current_item

    def dispatch(self, message: Message) -> EditorState:
        """Apply a message to the current state."""
        with self._lock:
            self._state = update(self._state, message, self.render)
            return self._state

    def _begin_load(self) -> None:
        with self._lock:
            if self._state.loading:
                raise LoadInProgressError("A document is already being loaded")
            self._state = update(self._state, LoadStarted(), self.render)

    async def open(self, pick: PathPicker) -> LoadResult:
        """Ask ``pick`` for a file, then load it.

        Raises:
            LoadInProgressError: If another load has not resolved yet
        """
        self._begin_load()
        try:
            path = await pick()
            if path is None:
                log.info("No file selected")
                result: LoadResult = LoadCancelled()
            else:
                result = await asyncio.to_thread(self._read, path)
        except BaseException:
            # Release the pending load before propagating
            self.dispatch(LoadCancelled())
            raise
        self.dispatch(result)
        return result

    def load_path(self, source: Path | bytes) -> LoadResult:
        """Load a document synchronously."""
        self._begin_load()
        try:
            result = self._read(source)
        except BaseException:
            self.dispatch(LoadCancelled())
            raise
        self.dispatch(result)
        return result

    def _read(self, source: Path | bytes) -> DocumentLoaded | LoadFailed:
        try:
            document = self.reader.read(source)
        except LoadError as e:
            return LoadFailed(e)
        return DocumentLoaded(document, source if isinstance(source, Path) else None)
