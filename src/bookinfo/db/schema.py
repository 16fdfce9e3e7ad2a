# ABOUTME: SQL DDL statements for the bookinfo store.
# ABOUTME: Defines book metadata, shared tag labels, tag associations, and book copies.

SCHEMA_VERSION = 1

SCHEMA_V1 = """
-- Bibliographic metadata, one row per ISBN
CREATE TABLE book_info (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    isbn          TEXT NOT NULL,
    title         TEXT,
    price         INTEGER,
    author        TEXT,
    publisher     TEXT,
    series        TEXT,
    publish_date  TEXT,
    binding       TEXT,
    format        TEXT,
    pages         INTEGER,
    word_count    INTEGER,
    content_intro TEXT,
    author_intro  TEXT,
    menu          TEXT,
    date_added    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    date_modified TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE UNIQUE INDEX idx_book_info_isbn ON book_info(isbn);

-- Tag labels, shared across books
CREATE TABLE tags (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);

CREATE UNIQUE INDEX idx_tags_name ON tags(name);

-- Many-to-many between ISBNs and tag labels
CREATE TABLE book_info_tags (
    isbn   TEXT NOT NULL REFERENCES book_info(isbn) ON DELETE CASCADE,
    tag_id INTEGER NOT NULL REFERENCES tags(id) ON DELETE CASCADE,
    PRIMARY KEY (isbn, tag_id)
);

CREATE INDEX idx_book_info_tags_tag ON book_info_tags(tag_id);

-- Physical copies, each with an externally assigned unique code
CREATE TABLE books (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    isbn        TEXT NOT NULL REFERENCES book_info(isbn),
    volume      INTEGER NOT NULL DEFAULT 0,
    unique_code TEXT NOT NULL,
    date_added  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE UNIQUE INDEX idx_books_unique_code ON books(unique_code);
CREATE INDEX idx_books_isbn ON books(isbn);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
