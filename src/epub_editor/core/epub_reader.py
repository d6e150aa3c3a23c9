"""EPUB reading using ebooklib."""

import logging
import os
import tempfile
import warnings
from pathlib import Path

from ebooklib import epub

from epub_editor.core.errors import OpenFailed, ParseFailed
from epub_editor.core.reader_factory import DocumentReader
from epub_editor.models.document import (
    DEFAULT_AUTHOR,
    DEFAULT_LANGUAGE,
    DEFAULT_TITLE,
    BookMetadata,
    EpubDocument,
    EpubItem,
)

# ebooklib warns about its future NCX default on every read
warnings.filterwarnings("ignore", category=UserWarning, module="ebooklib")
warnings.filterwarnings("ignore", category=FutureWarning, module="ebooklib")

log = logging.getLogger(__name__)

READ_OPTIONS = {"ignore_ncx": True}
CONTAINER_PATH = "META-INF/container.xml"


class _LenientContainerReader(epub.EpubReader):
    """ebooklib reader that loads manifest files missing from the zip as empty.

    The container document and the package document are still required.
    """

    def read_file(self, name):
        try:
            return super().read_file(name)
        except KeyError:
            if name in (CONTAINER_PATH, self.opf_file):
                raise
            log.warning("Manifest file %s is missing from the container", name)
            return b""


class EpubReader(DocumentReader):
    """Read EPUB files into an EpubDocument."""

    def read(self, source: Path | str | bytes) -> EpubDocument:
        """Read an EPUB from a path or from the raw bytes of the container."""
        if isinstance(source, bytes):
            return self._read_bytes(source)
        return self._read_path(Path(source))

    def _read_bytes(self, data: bytes) -> EpubDocument:
        # ebooklib only accepts file names, so spool the bytes to disk
        fd, name = tempfile.mkstemp(suffix=".epub")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            return self._read_path(Path(name))
        finally:
            os.unlink(name)

    def _read_path(self, path: Path) -> EpubDocument:
        if not path.is_file():
            raise OpenFailed("File not found", path)

        log.info("Opening EPUB %s", path)
        try:
            reader = _LenientContainerReader(str(path), READ_OPTIONS)
            book = reader.load()
            reader.process()
        except OSError as e:
            raise OpenFailed(f"Cannot open file: {e}", path) from e
        except Exception as e:
            raise ParseFailed(f"Malformed EPUB container: {e}", path) from e

        document = EpubDocument(
            metadata=self._get_metadata(book),
            spine=[],
            manifest={},
        )
        for item_id in self._get_spine(book):
            if item_id in document.manifest:
                # Same resource listed twice; keep both spine positions
                document.spine.append(item_id)
                continue
            item = book.get_item_with_id(item_id)
            if item is None:
                raise ParseFailed(f"Spine item {item_id!r} is missing from the manifest", path)
            document.manifest[item_id] = self._to_item(item_id, item)
            document.spine.append(item_id)

        log.info(
            "Loaded %r: %d spine items",
            document.metadata.title,
            len(document.spine),
        )
        return document

    def _get_metadata(self, book: epub.EpubBook) -> BookMetadata:
        """Extract title, author and language."""
        return BookMetadata(
            title=self._first_value(book, "title", DEFAULT_TITLE),
            author=self._first_value(book, "creator", DEFAULT_AUTHOR),
            language=self._first_value(book, "language", DEFAULT_LANGUAGE),
        )

    def _first_value(self, book: epub.EpubBook, name: str, default: str) -> str:
        try:
            values = book.get_metadata("DC", name)
        except KeyError:
            values = []
        if values and values[0][0] is not None:
            return values[0][0]
        return default

    def _get_spine(self, book: epub.EpubBook) -> list[str]:
        """Get reading order from spine."""
        return [entry[0] if isinstance(entry, tuple) else entry for entry in book.spine]

    def _to_item(self, item_id: str, item: epub.EpubItem) -> EpubItem:
        """Convert a resolved ebooklib item.

        Content or media type that cannot be read falls back to an empty
        string instead of failing the load.
        """
        # Raw bytes from the container; get_content() re-serializes XHTML
        try:
            raw = item.content or b""
            content = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
        except Exception as e:
            log.warning("Could not read content of %s: %s", item_id, e)
            content = ""

        return EpubItem(
            id=item_id,
            href=item.get_name() or "",
            media_type=getattr(item, "media_type", None) or "",
            content=content,
        )
