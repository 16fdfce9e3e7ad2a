# ABOUTME: Converts between the BookInfo dataclass and SQLite rows.
# ABOUTME: Handles nullable columns, ISO publish dates, and the tag/copy row types.

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

from bookinfo.errors import ValidationError
from bookinfo.metadata.types import BookInfo

_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class TagRow:
    """A shared tag label."""

    id: int
    name: str


@dataclass(frozen=True)
class BookCopyRow:
    """One physical copy of a book, identified by its unique code."""

    id: int
    isbn: str
    volume: int
    unique_code: str


def parse_publish_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` publish date.

    Raises:
        ValidationError: If the value is empty or not a valid calendar date.
    """
    if not _ISO_DATE_RE.fullmatch(value):
        raise ValidationError(f"publish date must be YYYY-MM-DD, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"invalid publish date {value!r}: {exc}") from exc


def book_info_to_row(info: BookInfo) -> dict[str, Any]:
    """Convert a BookInfo to a dict suitable for the book_info upsert.

    Tags and the copy fields (unique_code, volume) live in their own tables
    and are excluded.

    Raises:
        ValidationError: If publish_date is not a valid ISO date.
    """
    published = parse_publish_date(info.publish_date)
    return {
        "isbn": info.isbn,
        "title": info.title,
        "price": info.price,
        "author": info.author,
        "publisher": info.publisher,
        "series": info.series,
        "publish_date": published.isoformat(),
        "binding": info.binding,
        "format": info.format,
        "pages": info.pages,
        "word_count": info.word_count,
        "content_intro": info.content_intro,
        "author_intro": info.author_intro,
        "menu": info.menu,
    }


def row_to_book_info(row: Any, tags: list[TagRow]) -> BookInfo:
    """Convert a book_info row (dict-like) and its tags back to a BookInfo.

    NULL columns become the field's zero value.
    """
    return BookInfo(
        title=row["title"] or "",
        price=row["price"] or 0,
        author=row["author"] or "",
        publisher=row["publisher"] or "",
        series=row["series"] or "",
        tags=[tag.name for tag in tags],
        isbn=row["isbn"] or "",
        publish_date=row["publish_date"] or "",
        binding=row["binding"] or "",
        format=row["format"] or "",
        pages=row["pages"] or 0,
        word_count=row["word_count"] or 0,
        content_intro=row["content_intro"] or "",
        author_intro=row["author_intro"] or "",
        menu=row["menu"] or "",
    )


def row_to_tag(row: Any) -> TagRow:
    return TagRow(id=row["id"], name=row["name"])


def row_to_book_copy(row: Any) -> BookCopyRow:
    return BookCopyRow(
        id=row["id"],
        isbn=row["isbn"],
        volume=row["volume"],
        unique_code=row["unique_code"],
    )
