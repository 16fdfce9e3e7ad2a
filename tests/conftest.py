# ABOUTME: Shared pytest fixtures for bookinfo tests.
# ABOUTME: Provides temporary stores and canned catalog pages.

from collections.abc import Iterator
from pathlib import Path

import pytest

from bookinfo.db.connection import open_store
from bookinfo.db.store import BookStore
from bookinfo.metadata.types import BookInfo


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "bookinfo.db"


@pytest.fixture
def store(db_path: Path) -> Iterator[BookStore]:
    """Provide a BookStore backed by a temporary database."""
    conn = open_store(db_path)
    yield BookStore(conn)
    conn.close()


@pytest.fixture
def sample_book() -> BookInfo:
    """A fully-populated BookInfo ready to be stored."""
    return BookInfo(
        title="白夜行",
        price=3980,
        author="东野圭吾 著，刘姿君 译",
        publisher="南海出版公司",
        series="新经典文库",
        tags=["fiction", "mystery"],
        isbn="9787544258609",
        publish_date="2013-01-01",
        binding="平装",
        format="32开",
        pages=467,
        word_count=380000,
        content_intro="1973年，大阪的一栋废弃建筑内发现一具男尸。",
        author_intro="东野圭吾，日本著名推理小说家。",
        menu="第一章",
        unique_code="LIB-0001",
        volume=1,
    )
