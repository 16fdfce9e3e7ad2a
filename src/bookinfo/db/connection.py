# ABOUTME: SQLite connection management for the bookinfo store.
# ABOUTME: Opens or creates the database, applies the schema, and configures the connection.

import logging
import sqlite3
from pathlib import Path

from bookinfo.db.schema import SCHEMA_V1, SCHEMA_VERSION
from bookinfo.errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".bookinfo" / "library.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def _apply_schema(conn: sqlite3.Connection) -> None:
    """Execute the DDL to create all tables and indexes."""
    conn.executescript(SCHEMA_V1)


def open_store(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the bookinfo database.

    Creates the database file and parent directories if they don't exist and
    applies the schema on first creation. The connection runs in autocommit
    mode (transactions are opened explicitly by BookStore), uses WAL journal
    mode and the sqlite3.Row factory, and may be shared between threads.

    Args:
        path: Path to the database file. Defaults to ~/.bookinfo/library.db.

    Returns:
        A configured sqlite3.Connection.

    Raises:
        StoreError: If the database cannot be opened or initialised.
    """
    db_path = path or DEFAULT_DB_PATH
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_path), isolation_level=None, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")

        if not _schema_exists(conn):
            logger.debug("Creating bookinfo schema v%d in %s", SCHEMA_VERSION, db_path)
            _apply_schema(conn)
    except (OSError, sqlite3.Error) as exc:
        raise StoreError(f"Could not open store at {db_path}: {exc}") from exc

    return conn
