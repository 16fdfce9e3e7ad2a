# ABOUTME: Core data structure for book metadata records.
# ABOUTME: BookInfo is the interchange format between crawling, storage, and the CLI.

from dataclasses import dataclass, field
from typing import Any

from bookinfo.errors import ValidationError

# Attribute name -> key used in the JSON wire form.
_WIRE_KEYS: dict[str, str] = {
    "title": "title",
    "price": "price",
    "author": "author",
    "publisher": "publisher",
    "series": "series",
    "tags": "tags",
    "isbn": "isbn",
    "publish_date": "publishDate",
    "binding": "binding",
    "format": "format",
    "pages": "pages",
    "word_count": "wordCount",
    "content_intro": "contentIntro",
    "author_intro": "authorIntro",
    "menu": "menu",
    "unique_code": "uniqueCode",
    "volume": "volume",
}

_INT_FIELDS = {"price", "pages", "word_count", "volume"}


@dataclass
class BookInfo:
    """Metadata for one book, keyed by ISBN.

    Every field defaults to its zero value so that a record built from a
    sparse catalog page is still complete. Price is stored in minor currency
    units (fen/cents). publish_date is an ISO ``YYYY-MM-DD`` string, or empty
    when unknown. unique_code and volume only matter on the write path, where
    they describe one physical copy of the book.
    """

    title: str = ""
    price: int = 0
    author: str = ""
    publisher: str = ""
    series: str = ""
    tags: list[str] = field(default_factory=list)
    isbn: str = ""
    publish_date: str = ""
    binding: str = ""
    format: str = ""
    pages: int = 0
    word_count: int = 0
    content_intro: str = ""
    author_intro: str = ""
    menu: str = ""
    unique_code: str = ""
    volume: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        result: dict[str, Any] = {}
        for attr, key in _WIRE_KEYS.items():
            value = getattr(self, attr)
            result[key] = list(value) if attr == "tags" else value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BookInfo":
        """Build a BookInfo from its wire form. Missing keys take zero values.

        Raises:
            ValidationError: If a numeric field is not an integer or tags is
                not a list of strings.
        """
        kwargs: dict[str, Any] = {}
        for attr, key in _WIRE_KEYS.items():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if attr in _INT_FIELDS:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValidationError(f"{key} must be an integer, got {value!r}")
            elif attr == "tags":
                if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
                    raise ValidationError(f"tags must be a list of strings, got {value!r}")
                value = list(value)
            elif not isinstance(value, str):
                raise ValidationError(f"{key} must be a string, got {value!r}")
            kwargs[attr] = value
        return cls(**kwargs)

    @property
    def price_display(self) -> str:
        """Price formatted in major units, e.g. 3980 -> '39.80'."""
        sign = "-" if self.price < 0 else ""
        whole, cents = divmod(abs(self.price), 100)
        return f"{sign}{whole}.{cents:02d}"
