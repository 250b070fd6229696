"""Database connection helpers and initialization."""

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

SQLITE_PREFIX = "sqlite:///"
MEMORY_PATH = ":memory:"
# Shared-cache URI so every connection sees the same in-memory database.
MEMORY_URI = "file:shop-memory?mode=memory&cache=shared"

# The in-memory database lives only while at least one connection is open.
_memory_keeper: dict[str, sqlite3.Connection] = {}


def resolve_path(database_url: str) -> str:
    """Extract the file path from a ``sqlite:///`` URL."""
    if not database_url.startswith(SQLITE_PREFIX):
        raise ValueError(f"Unsupported database URL: {database_url}")
    return database_url[len(SQLITE_PREFIX):]


def _connect(path: str) -> sqlite3.Connection:
    if path == MEMORY_PATH:
        conn = sqlite3.connect(MEMORY_URI, uri=True, check_same_thread=False)
    else:
        conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_connection(database_url: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection with row factory."""
    path = resolve_path(database_url)
    logger.trace("Opening database connection to %s", path)
    if path == MEMORY_PATH and MEMORY_URI not in _memory_keeper:
        _memory_keeper[MEMORY_URI] = _connect(path)
        logger.info("In-memory database created")
    return _connect(path)


@contextmanager
def get_db(database_url: str) -> Iterator[sqlite3.Connection]:
    """Yield a connection for one request; roll back anything left uncommitted."""
    conn = get_connection(database_url)
    try:
        yield conn
    finally:
        if conn.in_transaction:
            logger.warning("Rolling back uncommitted database transaction")
            conn.rollback()
        conn.close()
        logger.trace("Database connection closed")


def init_db(database_url: str) -> None:
    """Initialize the database by creating all tables."""
    path = resolve_path(database_url)
    if path != MEMORY_PATH:
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
            logger.info("Database directory ensured at %s", db_dir)
    logger.info("Initializing database schema")
    from shop.db import schema
    conn = get_connection(database_url)
    try:
        schema.create_tables(conn)
    finally:
        conn.close()


def close_memory_database() -> None:
    """Drop the shared in-memory database, if one was opened."""
    keeper = _memory_keeper.pop(MEMORY_URI, None)
    if keeper is not None:
        keeper.close()
        logger.info("In-memory database closed")
