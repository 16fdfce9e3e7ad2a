# ABOUTME: Thin markup layer over BeautifulSoup for catalog pages.
# ABOUTME: Parses raw bytes into a document and locates nodes by CSS selector or label text.

import html

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from soupsieve import SelectorSyntaxError

from bookinfo.errors import ParseError

# Characters trimmed from both ends of every extracted value.
_TRIM_CHARS = " \t\n\r\f\v\u00a0"


def parse(data: bytes) -> BeautifulSoup:
    """Parse a raw HTML body into a document tree.

    Raises:
        ParseError: If the body cannot be decoded or parsed.
    """
    try:
        return BeautifulSoup(data, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Could not parse markup: {exc}") from exc


def select(document: BeautifulSoup | Tag, pattern: str) -> list[Tag]:
    """Return every node matching a CSS selector, in document order.

    Raises:
        ParseError: If the selector itself is invalid.
    """
    try:
        return list(document.select(pattern))
    except SelectorSyntaxError as exc:
        raise ParseError(f"Invalid selector {pattern!r}: {exc}") from exc


def find_labelled(document: BeautifulSoup | Tag, tag: str, label: str) -> Tag | None:
    """Find the first ``tag`` element whose whole text equals ``label``.

    Catalog pages mark fields with a label cell (``<td>作　者：</td>``) or a
    section heading (``<h4>内容简介</h4>``); the value lives in the next
    sibling element.
    """
    for node in document.find_all(tag):
        if clean_text(node.get_text()) == label:
            return node
    return None


def next_element(node: Tag) -> Tag | None:
    """The next sibling element of ``node``, skipping bare text."""
    return node.find_next_sibling()


def first_child(node: Tag) -> Tag | NavigableString | None:
    """The first child of ``node``, skipping whitespace-only text."""
    for child in node.children:
        if isinstance(child, Tag):
            return child
        if isinstance(child, NavigableString) and not isinstance(child, Comment):
            if child.strip(_TRIM_CHARS):
                return child
    return None


def text_of(node: Tag | NavigableString) -> str:
    """Cleaned text content of an element or a bare text node."""
    if isinstance(node, Tag):
        return clean_text(node.get_text())
    return clean_text(str(node))


def clean_text(text: str) -> str:
    """Unescape HTML entities and trim whitespace, including no-break spaces."""
    return html.unescape(text).strip(_TRIM_CHARS)
