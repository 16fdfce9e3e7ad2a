# ABOUTME: Declarative field extraction rules for dushu.com book detail pages.
# ABOUTME: Each rule locates a node, reads text from it or a neighbour, and converts the value.

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup, Tag

from bookinfo.errors import ParseError
from bookinfo.metadata.markup import (
    clean_text,
    find_labelled,
    first_child,
    next_element,
    select,
    text_of,
)
from bookinfo.metadata.types import BookInfo

_CURRENCY_GLYPHS = "¥￥"
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class Strategy(Enum):
    """Where a field's text is read relative to the located node."""

    SELF_TEXT = "self"
    SIBLING_TEXT = "sibling"
    NESTED_ANCHOR_TEXT = "nested_anchor"
    FIRST_CHILD_OF_SIBLING_TEXT = "first_child_of_sibling"


def parse_text(text: str) -> str:
    return text


def parse_price(text: str) -> int:
    """Convert a price like '¥39.80' to minor units (3980). Empty text is 0.

    Raises:
        ValueError: If the text is present but not a decimal number.
    """
    stripped = text.strip(_CURRENCY_GLYPHS).strip()
    if not stripped:
        return 0
    try:
        amount = Decimal(stripped)
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal price: {text!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"not a decimal price: {text!r}")
    return int(amount * 100)


def parse_integer(text: str) -> int:
    """Parse a base-10 integer. Empty text is 0.

    Raises:
        ValueError: If the text is present but not an integer.
    """
    if not text:
        return 0
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text, 10)


def parse_tags(text: str) -> list[str]:
    """Split a comma-joined tag string. Individual tags are not trimmed."""
    if not text:
        return []
    return text.split(",")


@dataclass(frozen=True)
class FieldRule:
    """How to extract one BookInfo field from a detail page.

    The anchor node is found either by CSS ``selector`` or by an element
    ``label``: a ``(tag, text)`` pair matched against the element's whole
    text. ``convert`` turns the cleaned text into the field value and must
    map the empty string to the field's zero value.
    """

    name: str
    strategy: Strategy
    convert: Callable[[str], Any] = parse_text
    selector: str | None = None
    label: tuple[str, str] | None = None


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("title", Strategy.SELF_TEXT, selector="div.book-title h1"),
    FieldRule("price", Strategy.SELF_TEXT, parse_price, selector="p.price span.num"),
    FieldRule("author", Strategy.SIBLING_TEXT, label=("td", "作　者：")),
    FieldRule("publisher", Strategy.NESTED_ANCHOR_TEXT, label=("td", "出版社：")),
    FieldRule("series", Strategy.SIBLING_TEXT, label=("td", "丛编项：")),
    FieldRule("tags", Strategy.SIBLING_TEXT, parse_tags, label=("td", "标　签：")),
    FieldRule("isbn", Strategy.SIBLING_TEXT, label=("td", "ISBN：")),
    FieldRule("publish_date", Strategy.SIBLING_TEXT, label=("td", "出版时间：")),
    FieldRule("binding", Strategy.SIBLING_TEXT, label=("td", "包装：")),
    FieldRule("format", Strategy.SIBLING_TEXT, label=("td", "开本：")),
    FieldRule("pages", Strategy.SIBLING_TEXT, parse_integer, label=("td", "页数：")),
    FieldRule("word_count", Strategy.SIBLING_TEXT, parse_integer, label=("td", "字数：")),
    FieldRule("content_intro", Strategy.FIRST_CHILD_OF_SIBLING_TEXT, label=("h4", "内容简介")),
    FieldRule("author_intro", Strategy.FIRST_CHILD_OF_SIBLING_TEXT, label=("h4", "作者简介")),
    FieldRule("menu", Strategy.FIRST_CHILD_OF_SIBLING_TEXT, label=("h4", "图书目录")),
)


def _locate(document: BeautifulSoup | Tag, rule: FieldRule) -> Tag | None:
    if rule.selector is not None:
        matches = select(document, rule.selector)
        return matches[0] if matches else None
    if rule.label is not None:
        tag, label = rule.label
        return find_labelled(document, tag, label)
    raise ValueError(f"rule {rule.name!r} has neither a selector nor a label")


def _sibling(anchor: Tag, rule: FieldRule) -> Tag:
    sibling = next_element(anchor)
    if sibling is None:
        raise ParseError(f"{rule.name}: label found but no value element follows it")
    return sibling


def _read_text(anchor: Tag, rule: FieldRule) -> str:
    """Read the raw text for a rule, starting from its located anchor node."""
    if rule.strategy is Strategy.SELF_TEXT:
        return clean_text(anchor.get_text())

    sibling = _sibling(anchor, rule)
    if rule.strategy is Strategy.SIBLING_TEXT:
        return clean_text(sibling.get_text())

    if rule.strategy is Strategy.NESTED_ANCHOR_TEXT:
        # The value cell may wrap the link in an image or span.
        link = sibling.find("a")
        return clean_text(link.get_text()) if link is not None else ""

    child = first_child(sibling)
    if child is None:
        raise ParseError(f"{rule.name}: section found but its body is empty")
    return text_of(child)


def extract_field(document: BeautifulSoup | Tag, rule: FieldRule) -> Any:
    """Apply a single rule to a parsed document.

    A missing anchor yields the field's zero value.

    Raises:
        ParseError: If the anchor is present but its value element is missing,
            a section body is empty, or the value text cannot be converted.
    """
    anchor = _locate(document, rule)
    text = _read_text(anchor, rule) if anchor is not None else ""
    try:
        return rule.convert(text)
    except ValueError as exc:
        raise ParseError(f"{rule.name}: {exc}") from exc


def extract_book_info(
    document: BeautifulSoup | Tag,
    rules: tuple[FieldRule, ...] = FIELD_RULES,
) -> BookInfo:
    """Run every field rule against one parsed detail page.

    Raises:
        ParseError: If any present field is malformed. Missing fields never
            raise.
    """
    values = {rule.name: extract_field(document, rule) for rule in rules}
    return BookInfo(**values)
