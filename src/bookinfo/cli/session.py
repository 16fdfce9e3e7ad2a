# ABOUTME: Builds the sync service and its collaborators for a CLI invocation.
# ABOUTME: Owns the lifetime of the database connection and the HTTP session.

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from bookinfo.core.sync import BookInfoService
from bookinfo.db.connection import DEFAULT_DB_PATH, open_store
from bookinfo.db.store import BookStore
from bookinfo.metadata.dushu import DushuProvider
from bookinfo.metadata.http import DushuHttpClient


@contextmanager
def open_provider(headers: dict[str, str], timeout: float) -> Iterator[DushuProvider]:
    """Yield a live provider, closing its HTTP session afterwards."""
    http_client = DushuHttpClient(headers, timeout=timeout)
    try:
        yield DushuProvider(fetcher=http_client)
    finally:
        http_client.close()


@contextmanager
def open_service(
    db_path: Path | None,
    headers: dict[str, str] | None = None,
    timeout: float = 30.0,
) -> Iterator[tuple[BookInfoService, BookStore]]:
    """Yield the sync service and its store, closing both afterwards."""
    conn = open_store(db_path or DEFAULT_DB_PATH)
    try:
        store = BookStore(conn)
        with open_provider(headers or {}, timeout) as provider:
            yield BookInfoService(store=store, provider=provider), store
    finally:
        conn.close()
