# ABOUTME: BookInfoProvider protocol defining the contract for live metadata sources.
# ABOUTME: The sync service falls back to a provider when the store has no record.

from typing import Protocol, runtime_checkable

from bookinfo.metadata.types import BookInfo


@runtime_checkable
class BookInfoProvider(Protocol):
    """Protocol for live ISBN lookups.

    Implementations resolve an ISBN to a detail page and extract a complete
    BookInfo from it, raising a BookInfoError subclass on any failure.
    """

    @property
    def name(self) -> str: ...

    def search(self, isbn: str) -> str: ...

    def get_book_info(self, url: str) -> BookInfo: ...

    def crawl(self, isbn: str) -> BookInfo: ...
