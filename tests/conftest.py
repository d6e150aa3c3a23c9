# tests/conftest.py
"""
Shared pytest fixtures.

EPUB files are assembled by hand so tests control every part of the
container, including deliberately broken manifests.
"""

import zipfile
from pathlib import Path
from typing import Callable

import pytest

from epub_editor.models.document import BookMetadata, EpubDocument, EpubItem

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

XHTML_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>{title}</title></head>
<body><h1>{title}</h1><p>{body}</p></body>
</html>
"""


def chapter_xhtml(title: str, body: str) -> str:
    return XHTML_TEMPLATE.format(title=title, body=body)


def build_epub(
    path: Path,
    items: list[tuple[str, str, str | bytes]],
    spine: list[str] | None = None,
    title: str | None = "Test Book",
    author: str | None = "Test Author",
    language: str | None = "fr",
    missing_files: tuple[str, ...] = (),
) -> Path:
    """Write a minimal EPUB 3 container.

    Args:
        path: Destination file
        items: (id, href, content) manifest entries, all XHTML
        spine: Item ids in reading order (default: every item, in order)
        title, author, language: Dublin Core values; None omits the element
        missing_files: hrefs listed in the manifest but not stored in the zip
    """
    if spine is None:
        spine = [item_id for item_id, _, _ in items]

    dc = ['<dc:identifier id="BookId">urn:uuid:1234</dc:identifier>']
    if title is not None:
        dc.append(f"<dc:title>{title}</dc:title>")
    if author is not None:
        dc.append(f"<dc:creator>{author}</dc:creator>")
    if language is not None:
        dc.append(f"<dc:language>{language}</dc:language>")

    dc_xml = "".join(dc)
    manifest = "\n    ".join(
        f'<item id="{item_id}" href="{href}" media-type="application/xhtml+xml"/>'
        for item_id, href, _ in items
    )
    itemrefs = "\n    ".join(f'<itemref idref="{item_id}"/>' for item_id in spine)

    opf = f"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="BookId">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    {dc_xml}
  </metadata>
  <manifest>
    {manifest}
  </manifest>
  <spine>
    {itemrefs}
  </spine>
</package>
"""

    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        zf.writestr("META-INF/container.xml", CONTAINER_XML)
        zf.writestr("OEBPS/content.opf", opf)
        for _, href, content in items:
            if href in missing_files:
                continue
            zf.writestr(f"OEBPS/{href}", content)
    return path


@pytest.fixture
def make_epub(tmp_path) -> Callable[..., Path]:
    """Factory writing an EPUB into the test's temporary directory."""

    def _make(name: str = "book.epub", **kwargs) -> Path:
        kwargs.setdefault(
            "items",
            [
                ("chap1", "chap1.xhtml", chapter_xhtml("Chapter One", "It begins.")),
                ("chap2", "chap2.xhtml", chapter_xhtml("Chapter Two", "It goes on.")),
            ],
        )
        return build_epub(tmp_path / name, **kwargs)

    return _make


@pytest.fixture
def sample_epub(make_epub) -> Path:
    """Two-chapter EPUB with full metadata."""
    return make_epub()


@pytest.fixture
def sample_document() -> EpubDocument:
    """In-memory document with three items in reading order."""
    items = [
        EpubItem(id="a", href="a.xhtml", media_type="application/xhtml+xml", content="alpha"),
        EpubItem(id="b", href="b.xhtml", media_type="application/xhtml+xml", content="beta"),
        EpubItem(id="c", href="c.xhtml", media_type="application/xhtml+xml", content="# gamma"),
    ]
    return EpubDocument(
        metadata=BookMetadata(title="Sample", author="Someone", language="en"),
        spine=["a", "b", "c"],
        manifest={item.id: item for item in items},
    )


@pytest.fixture
def xhtml() -> Callable[[str, str], str]:
    """Build a small XHTML chapter from a title and a paragraph."""
    return chapter_xhtml
