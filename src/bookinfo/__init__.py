# ABOUTME: Bookinfo - ISBN metadata lookup with a read-through SQLite store.
# ABOUTME: Crawls dushu.com on a store miss and persists canonical records on demand.

__version__ = "0.1.0"
