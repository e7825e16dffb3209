"""DuckDB connection management and the transaction unit of work."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import duckdb
from loguru import logger

from app.errors import ConcurrencyConflict
from app.models import ALL_DDL
from settings import DB_PATH


def db_exists(path: str = DB_PATH) -> bool:
    """Check if database file exists."""
    return path == ":memory:" or Path(path).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("DB tables initialized ({} tables)", len(ALL_DDL))


class Transaction:
    """One open DuckDB transaction. Passed explicitly through every service call."""

    def __init__(self, cursor: duckdb.DuckDBPyConnection):
        self._cur = cursor

    def execute(self, query: str, params: list | None = None) -> duckdb.DuckDBPyConnection:
        """Execute SQL query."""
        if params:
            return self._cur.execute(query, params)
        return self._cur.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()

    def fetch_dicts(self, query: str, params: list | None = None) -> list[dict]:
        """Execute and return rows keyed by column name."""
        cur = self.execute(query, params)
        columns = [d[0] for d in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]

    def fetch_dict(self, query: str, params: list | None = None) -> dict | None:
        rows = self.fetch_dicts(query, params)
        return rows[0] if rows else None

    def scalar(self, query: str, params: list | None = None) -> Any:
        row = self.fetchone(query, params)
        return row[0] if row else None

    def register(self, name: str, df) -> None:
        """Expose a DataFrame to SQL for the rest of the transaction."""
        self._cur.register(name, df)

    def unregister(self, name: str) -> None:
        self._cur.unregister(name)


class Database:
    """Owns the DuckDB connection; hands out transactions on fresh cursors."""

    def __init__(self, path: str = DB_PATH):
        self.path = path
        if not db_exists(path):
            logger.warning("DB not found: {}. Creating empty DB.", path)
        self._conn = duckdb.connect(path)
        init_tables(self._conn)
        logger.debug("DB connected: {}", path)

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """Commit on success, roll back on any exception."""
        cur = self._conn.cursor()
        cur.execute("BEGIN TRANSACTION")
        try:
            yield Transaction(cur)
            cur.execute("COMMIT")
        except duckdb.TransactionException as exc:
            self._rollback(cur)
            logger.warning("Transaction conflict: {}", exc)
            raise ConcurrencyConflict(f"Concurrent update conflict, retry the operation: {exc}") from exc
        except BaseException:
            self._rollback(cur)
            raise
        finally:
            cur.close()

    @staticmethod
    def _rollback(cur: duckdb.DuckDBPyConnection) -> None:
        try:
            cur.execute("ROLLBACK")
        except duckdb.TransactionException:
            # DuckDB already aborted the transaction (failed COMMIT)
            logger.debug("Rollback skipped: no active transaction")

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()
        logger.debug("DB connection closed")
