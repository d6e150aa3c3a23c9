"""Helpers for describing item content in listings."""

import warnings

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

# Suppress XML parsing warnings - EPUB files often use XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)


def extract_title(content: str) -> str | None:
    """Try to extract a title from HTML content (h1, then h2, then <title>)."""
    if not content.strip():
        return None
    soup = BeautifulSoup(content, "lxml")
    for tag in ["h1", "h2", "title"]:
        element = soup.find(tag)
        if element:
            text = element.get_text(strip=True)
            if text:
                return text
    return None


def count_words(content: str) -> int:
    """Count words in HTML or plain text content."""
    if not content.strip():
        return 0
    soup = BeautifulSoup(content, "lxml")
    text = soup.get_text(separator=" ", strip=True)
    return len(text.split())


def display_title(item_id: str, content: str, limit: int = 50) -> str:
    """Label for an item: its extracted title, else its id, truncated."""
    title = extract_title(content) or item_id
    if len(title) > limit:
        title = title[: limit - 3] + "..."
    return title
