"""
Generic repository over a single SQLite table.

Subclasses declare the table, its writable columns and how to hydrate a
row. Every mutating call commits immediately; store errors surface as
``PersistenceError`` and version mismatches on replace as
``ConcurrencyConflictError``.
"""
import sqlite3
from typing import Any, Callable, ClassVar, Generic, Mapping, Optional, TypeVar
import logging

from shop.core.exceptions import ConcurrencyConflictError, PersistenceError
from shop.core.logging_config import log_db_timing

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest value a SQLite INTEGER column can hold.
MAX_INTEGER = 2**63 - 1


def storable(value: Any) -> bool:
    """Return False for ints that cannot be bound as a SQLite INTEGER."""
    return not isinstance(value, int) or -MAX_INTEGER - 1 <= value <= MAX_INTEGER


class Repository(Generic[T]):
    """CRUD access to one table with version-checked replaces."""

    table: ClassVar[str]
    columns: ClassVar[tuple[str, ...]]
    order_by: ClassVar[str] = "id"

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing %s", type(self).__name__)
        self._conn = conn

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _hydrate(self, row: sqlite3.Row) -> T:
        raise NotImplementedError

    def _select(self) -> str:
        """SELECT clause used by every read; subclasses may add joins."""
        return f"SELECT * FROM {self.table}"

    def _column_ref(self, column: str) -> str:
        return column

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_db_timing
    def list_all(self) -> list[T]:
        rows = self._fetch_all(
            f"{self._select()} ORDER BY {self._column_ref(self.order_by)}", ()
        )
        return [self._hydrate(r) for r in rows]

    @log_db_timing
    def get_by_id(self, record_id: int) -> Optional[T]:
        if not storable(record_id):
            return None
        row = self._run(
            lambda: self._conn.execute(
                f"{self._select()} WHERE {self._column_ref('id')} = ?", (record_id,)
            ).fetchone()
        )
        return self._hydrate(row) if row else None

    @log_db_timing
    def list_by_field(self, field: str, value: Any) -> list[T]:
        if field != "id" and field not in self.columns:
            raise ValueError(f"Unknown column '{field}' for table {self.table}")
        if not storable(value):
            return []
        column = self._column_ref(field)
        rows = self._fetch_all(
            f"{self._select()} WHERE {column} = ? "
            f"ORDER BY {self._column_ref(self.order_by)}",
            (value,),
        )
        return [self._hydrate(r) for r in rows]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @log_db_timing
    def insert(self, values: Mapping[str, Any]) -> T:
        """Insert a new row and return it with its assigned id."""
        data = self._writable(values)
        placeholders = ", ".join("?" for _ in data)
        cursor = self._write(
            f"INSERT INTO {self.table} ({', '.join(data)}) VALUES ({placeholders})",
            tuple(data.values()),
        )
        logger.info("Inserted %s row id=%s", self.table, cursor.lastrowid)
        return self.get_by_id(cursor.lastrowid)  # type: ignore[return-value]

    @log_db_timing
    def replace(
        self, record_id: int, values: Mapping[str, Any], expected_version: int
    ) -> T:
        """Overwrite every writable column of a row.

        The write only applies when the stored version still equals
        *expected_version*; the version is bumped on success.

        Raises:
            ConcurrencyConflictError: the row changed or vanished since it was read.
            PersistenceError: any other store failure.
        """
        if not (storable(record_id) and storable(expected_version)):
            raise ConcurrencyConflictError(
                f"{self.table} id={record_id} version={expected_version} cannot exist"
            )
        data = self._writable(values)
        set_clause = ", ".join(f"{col} = ?" for col in data)
        cursor = self._write(
            f"UPDATE {self.table} SET {set_clause}, version = version + 1 "
            "WHERE id = ? AND version = ?",
            (*data.values(), record_id, expected_version),
        )
        if cursor.rowcount == 0:
            logger.warning(
                "Version conflict on %s id=%s expected_version=%s",
                self.table,
                record_id,
                expected_version,
            )
            raise ConcurrencyConflictError(
                f"{self.table} id={record_id} was modified or deleted"
            )
        logger.info("Replaced %s row id=%s", self.table, record_id)
        return self.get_by_id(record_id)  # type: ignore[return-value]

    @log_db_timing
    def delete(self, record_id: int) -> bool:
        if not storable(record_id):
            return False
        cursor = self._write(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
        logger.info("%s delete affected %s rows", self.table, cursor.rowcount)
        return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _writable(self, values: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(values) - set(self.columns)
        if unknown:
            raise ValueError(f"Unknown columns for {self.table}: {sorted(unknown)}")
        return {col: values[col] for col in self.columns if col in values}

    def _fetch_all(self, sql: str, params: tuple) -> list[sqlite3.Row]:
        return self._run(lambda: self._conn.execute(sql, params).fetchall())

    def _run(self, query: Callable[[], Any]) -> Any:
        try:
            return query()
        except (sqlite3.Error, OverflowError) as exc:
            raise PersistenceError(str(exc)) from exc

    def _write(self, sql: str, params: tuple) -> sqlite3.Cursor:
        # A failed statement leaves nothing pending: each write commits on its own.
        try:
            cursor = self._conn.execute(sql, params)
            self._conn.commit()
        except (sqlite3.Error, OverflowError) as exc:
            raise PersistenceError(str(exc)) from exc
        return cursor
