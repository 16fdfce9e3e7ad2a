# ABOUTME: Public API for the bookinfo store layer.
# ABOUTME: Exports connection management, the store gateway, and row types.

from bookinfo.db.connection import DEFAULT_DB_PATH, open_store
from bookinfo.db.mapping import BookCopyRow, TagRow
from bookinfo.db.store import BookStore, StoreGateway

__all__ = [
    "DEFAULT_DB_PATH",
    "BookCopyRow",
    "BookStore",
    "StoreGateway",
    "TagRow",
    "open_store",
]
