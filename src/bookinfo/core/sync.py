# ABOUTME: Read-through lookup and write reconciliation for book metadata.
# ABOUTME: Get checks the store before crawling; Put persists a record, its copy, and its tags.

import logging

from bookinfo.db.mapping import book_info_to_row, row_to_book_info
from bookinfo.db.store import StoreGateway
from bookinfo.errors import DuplicateKeyError, DuplicateLabelError, StoreError, ValidationError
from bookinfo.metadata.provider import BookInfoProvider
from bookinfo.metadata.types import BookInfo

logger = logging.getLogger(__name__)


class BookInfoService:
    """Get/Put orchestration over a store gateway and a live provider.

    Get never writes: a store miss is answered by a live crawl whose result
    is returned as-is. Put runs every write inside one store transaction, so
    a failed Put leaves the store as it found it.
    """

    def __init__(self, store: StoreGateway, provider: BookInfoProvider) -> None:
        self._store = store
        self._provider = provider

    def get(self, isbn: str) -> BookInfo:
        """Return metadata for an ISBN from the store, or crawl it live.

        Raises:
            StoreError: If the store read fails.
            NotFoundError, FetchError, ParseError, URLError: From the live
                crawl on a store miss.
        """
        row = self._store.query_book_info_by_isbn(isbn)
        if row is None:
            logger.debug("isbn %s not in store, crawling %s", isbn, self._provider.name)
            return self._provider.crawl(isbn)

        logger.debug("isbn %s found in store", isbn)
        return row_to_book_info(row, self._store.query_tags_for_isbn(isbn))

    def put(self, record: BookInfo) -> None:
        """Persist a record, register its copy, and replace its tag set.

        Steps, all inside one transaction: upsert the metadata row by ISBN,
        check the unique code is free, insert the copy, then drop every tag
        association of the ISBN and attach the submitted tags (creating
        missing labels).

        Raises:
            ValidationError: If publish_date is not YYYY-MM-DD or unique_code
                is empty.
            DuplicateKeyError: If unique_code is already registered.
            StoreError: If any store operation fails.
        """
        row = book_info_to_row(record)
        isbn = record.isbn

        with self._store.transaction():
            self._store.upsert_book_info(row)

            existing = self._store.query_book_copy_by_unique_code(record.unique_code)
            if existing is not None:
                raise DuplicateKeyError(f"{record.unique_code} unique code already exists")
            if not record.unique_code:
                raise ValidationError("unique code can not be empty")

            self._store.insert_book_copy(isbn, record.volume, record.unique_code)
            self._replace_tags(isbn, record.tags)

        logger.info(
            "Stored isbn %s (copy %s, volume %d, %d tag(s))",
            isbn,
            record.unique_code,
            record.volume,
            len(record.tags),
        )

    def _replace_tags(self, isbn: str, tags: list[str]) -> None:
        """Make the ISBN's tag associations exactly ``tags``."""
        for tag in self._store.query_tags_for_isbn(isbn):
            self._store.remove_tag_association(isbn, tag)

        for name in tags:
            try:
                tag_row = self._store.insert_tag(name)
            except DuplicateLabelError:
                # Labels are shared across books; reuse the existing row.
                found = self._store.get_tag(name)
                if found is None:
                    raise StoreError(f"Tag '{name}' reported as duplicate but not found") from None
                tag_row = found
            self._store.add_tag_association(isbn, tag_row)
