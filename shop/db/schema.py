"""
SQL DDL statements for all application tables.
Tables are created in dependency order so foreign keys resolve correctly.

Every table carries a ``version`` column used for optimistic concurrency:
a replace only succeeds when the stored version still matches the one the
caller read, and bumps it on success.
"""
import sqlite3

# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

CREATE_CATEGORIES_TABLE = """
CREATE TABLE IF NOT EXISTS categories (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT    NOT NULL,
    version     INTEGER NOT NULL DEFAULT 1
);
"""

CREATE_PRODUCTS_TABLE = """
CREATE TABLE IF NOT EXISTS products (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    title       TEXT    NOT NULL,
    description TEXT,
    price       TEXT    NOT NULL,
    category_id INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
    version     INTEGER NOT NULL DEFAULT 1
);
"""

CREATE_PRODUCTS_CATEGORY_INDEX = """
CREATE INDEX IF NOT EXISTS ix_products_category_id ON products (category_id);
"""

ALL_STATEMENTS = [
    CREATE_CATEGORIES_TABLE,
    CREATE_PRODUCTS_TABLE,
    CREATE_PRODUCTS_CATEGORY_INDEX,
]


def create_tables(conn: sqlite3.Connection) -> None:
    """Create all tables (IF NOT EXISTS – safe on every restart)."""
    cursor = conn.cursor()
    for ddl in ALL_STATEMENTS:
        cursor.execute(ddl)
    conn.commit()
