# ABOUTME: Exception hierarchy shared by the crawler, the store, and the sync service.
# ABOUTME: Collaborator errors are wrapped into these at the module boundary.


class BookInfoError(Exception):
    """Base class for all bookinfo errors."""


class NotFoundError(BookInfoError):
    """Raised when a catalog search yields no book for an ISBN."""


class FetchError(BookInfoError):
    """Raised when an HTTP request or body decompression fails."""


class ParseError(BookInfoError):
    """Raised when markup is malformed or a present value cannot be parsed."""


class URLError(BookInfoError):
    """Raised when a search result link cannot be resolved to an absolute URL."""


class ValidationError(BookInfoError):
    """Raised when a record submitted for storage is missing or malformed."""


class DuplicateKeyError(BookInfoError):
    """Raised when a book copy with the same unique code already exists."""


class StoreError(BookInfoError):
    """Raised when a read or write against the store fails."""


class DuplicateLabelError(StoreError):
    """Raised when inserting a tag label that already exists."""
