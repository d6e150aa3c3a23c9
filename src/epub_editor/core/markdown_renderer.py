"""Markdown preview rendering using markdown-it-py."""

from typing import Protocol

from markdown_it import MarkdownIt


class MarkdownRenderer(Protocol):
    """Callable turning Markdown text into markup."""

    def __call__(self, text: str) -> str: ...


# CommonMark plus GFM strikethrough and tables; raw HTML is passed through
_md = MarkdownIt("commonmark", {"html": True}).enable("strikethrough").enable("table")


def render_markdown(text: str) -> str:
    """Render Markdown to HTML.

    Output is not sanitized. Malformed input still renders on a best-effort
    basis, as CommonMark defines a rendering for any text.
    """
    return _md.render(text)
