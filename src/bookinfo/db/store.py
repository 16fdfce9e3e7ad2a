# ABOUTME: Store gateway operations for book metadata, tags, and book copies.
# ABOUTME: BookStore implements the StoreGateway protocol on top of one SQLite connection.

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Protocol, runtime_checkable

from bookinfo.db.mapping import BookCopyRow, TagRow, row_to_book_copy, row_to_tag
from bookinfo.errors import DuplicateKeyError, DuplicateLabelError, StoreError

_BOOK_INFO_COLUMNS = (
    "isbn",
    "title",
    "price",
    "author",
    "publisher",
    "series",
    "publish_date",
    "binding",
    "format",
    "pages",
    "word_count",
    "content_intro",
    "author_intro",
    "menu",
)


@runtime_checkable
class StoreGateway(Protocol):
    """Protocol for the persistence operations the sync service needs."""

    def transaction(self) -> AbstractContextManager[None]: ...

    def query_book_info_by_isbn(self, isbn: str) -> Any | None: ...

    def upsert_book_info(self, row: dict[str, Any]) -> None: ...

    def query_tags_for_isbn(self, isbn: str) -> list[TagRow]: ...

    def remove_tag_association(self, isbn: str, tag: TagRow) -> None: ...

    def insert_tag(self, name: str) -> TagRow: ...

    def get_tag(self, name: str) -> TagRow | None: ...

    def add_tag_association(self, isbn: str, tag: TagRow) -> None: ...

    def query_book_copy_by_unique_code(self, unique_code: str) -> BookCopyRow | None: ...

    def insert_book_copy(self, isbn: str, volume: int, unique_code: str) -> int: ...


class BookStore:
    """Wraps a sqlite3 connection and provides typed access to the store tables.

    Expects a connection from open_store() (autocommit mode). Every SQLite
    failure surfaces as StoreError, or one of its more specific subclasses.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._lock = threading.RLock()

    def _execute(self, sql: str, params: tuple[Any, ...] | list[Any] = ()) -> sqlite3.Cursor:
        with self._lock:
            try:
                return self._conn.execute(sql, params)
            except sqlite3.Error as exc:
                raise StoreError(f"Store operation failed: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed operations as one write transaction.

        Uses BEGIN IMMEDIATE so concurrent writers on the same database wait
        for each other instead of interleaving. Rolls back if the block or the
        commit raises. Nested calls join the outer transaction.
        """
        with self._lock:
            if self._conn.in_transaction:
                yield
                return

            self._execute("BEGIN IMMEDIATE")
            try:
                yield
            except BaseException:
                self._conn.rollback()
                raise
            try:
                self._conn.commit()
            except sqlite3.Error as exc:
                try:
                    self._conn.rollback()
                except sqlite3.Error as rollback_exc:
                    raise StoreError(
                        f"Commit failed: {exc}; rollback also failed: {rollback_exc}"
                    ) from exc
                raise StoreError(f"Commit failed: {exc}") from exc

    # --- Book metadata ---

    def query_book_info_by_isbn(self, isbn: str) -> sqlite3.Row | None:
        """Retrieve the metadata row for an ISBN, if any."""
        cursor = self._execute("SELECT * FROM book_info WHERE isbn = ?", (isbn,))
        return cursor.fetchone()

    def upsert_book_info(self, row: dict[str, Any]) -> None:
        """Insert the metadata row for its ISBN, or update it in place.

        Args:
            row: Column values as produced by book_info_to_row(); must
                contain every book_info column including isbn.
        """
        values = [row[column] for column in _BOOK_INFO_COLUMNS]
        columns = ", ".join(_BOOK_INFO_COLUMNS)
        placeholders = ", ".join("?" for _ in _BOOK_INFO_COLUMNS)
        updates = ", ".join(
            f"{column} = excluded.{column}" for column in _BOOK_INFO_COLUMNS if column != "isbn"
        )
        self._execute(
            f"INSERT INTO book_info ({columns}) VALUES ({placeholders}) "
            f"ON CONFLICT(isbn) DO UPDATE SET {updates}, "
            "date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now')",
            values,
        )

    # --- Tag operations ---

    def query_tags_for_isbn(self, isbn: str) -> list[TagRow]:
        """Get the tags attached to an ISBN, in the order they were attached."""
        cursor = self._execute(
            "SELECT t.id, t.name FROM tags t "
            "JOIN book_info_tags bt ON t.id = bt.tag_id "
            "WHERE bt.isbn = ? "
            "ORDER BY bt.rowid",
            (isbn,),
        )
        return [row_to_tag(row) for row in cursor.fetchall()]

    def remove_tag_association(self, isbn: str, tag: TagRow) -> None:
        """Detach a tag from an ISBN. The label row itself is kept."""
        self._execute(
            "DELETE FROM book_info_tags WHERE isbn = ? AND tag_id = ?",
            (isbn, tag.id),
        )

    def insert_tag(self, name: str) -> TagRow:
        """Create a tag label.

        Raises:
            DuplicateLabelError: If a tag with this name already exists.
        """
        with self._lock:
            try:
                cursor = self._conn.execute("INSERT INTO tags (name) VALUES (?)", (name,))
            except sqlite3.IntegrityError as exc:
                if "UNIQUE constraint failed: tags.name" in str(exc):
                    raise DuplicateLabelError(f"Tag '{name}' already exists") from exc
                raise StoreError(f"Could not insert tag '{name}': {exc}") from exc
            except sqlite3.Error as exc:
                raise StoreError(f"Could not insert tag '{name}': {exc}") from exc
        return TagRow(id=cursor.lastrowid, name=name)  # type: ignore[arg-type]

    def get_tag(self, name: str) -> TagRow | None:
        """Look up a tag label by name."""
        cursor = self._execute("SELECT id, name FROM tags WHERE name = ?", (name,))
        row = cursor.fetchone()
        return row_to_tag(row) if row else None

    def add_tag_association(self, isbn: str, tag: TagRow) -> None:
        """Attach a tag to an ISBN. Idempotent."""
        self._execute(
            "INSERT OR IGNORE INTO book_info_tags (isbn, tag_id) VALUES (?, ?)",
            (isbn, tag.id),
        )

    def list_tags(self) -> list[tuple[str, int]]:
        """List all attached tags with their book counts, alphabetically sorted."""
        cursor = self._execute(
            "SELECT t.name, COUNT(bt.isbn) as book_count "
            "FROM tags t "
            "JOIN book_info_tags bt ON t.id = bt.tag_id "
            "GROUP BY t.id "
            "ORDER BY t.name"
        )
        return [(row[0], row[1]) for row in cursor.fetchall()]

    # --- Book copies ---

    def query_book_copy_by_unique_code(self, unique_code: str) -> BookCopyRow | None:
        """Retrieve the book copy registered under a unique code, if any."""
        cursor = self._execute("SELECT * FROM books WHERE unique_code = ?", (unique_code,))
        row = cursor.fetchone()
        return row_to_book_copy(row) if row else None

    def insert_book_copy(self, isbn: str, volume: int, unique_code: str) -> int:
        """Register a physical copy of a book.

        Returns:
            The row ID of the inserted copy.

        Raises:
            DuplicateKeyError: If the unique code is already taken.
        """
        with self._lock:
            try:
                cursor = self._conn.execute(
                    "INSERT INTO books (isbn, volume, unique_code) VALUES (?, ?, ?)",
                    (isbn, volume, unique_code),
                )
            except sqlite3.IntegrityError as exc:
                if "UNIQUE constraint failed: books.unique_code" in str(exc):
                    raise DuplicateKeyError(f"{unique_code} unique code already exists") from exc
                raise StoreError(f"Could not insert book copy {unique_code}: {exc}") from exc
            except sqlite3.Error as exc:
                raise StoreError(f"Could not insert book copy {unique_code}: {exc}") from exc
        return cursor.lastrowid  # type: ignore[return-value]

    def count_book_copies(self, isbn: str) -> int:
        """Number of physical copies registered for an ISBN."""
        cursor = self._execute("SELECT COUNT(*) FROM books WHERE isbn = ?", (isbn,))
        return cursor.fetchone()[0]
