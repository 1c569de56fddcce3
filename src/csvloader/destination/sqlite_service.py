"""SQLite implementation of Destination."""

import logging
import sqlite3
from typing import Sequence

from csvloader.destination.service import Destination, Mutation, group_mutations

logger = logging.getLogger(__name__)


def quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class SQLiteDestination(Destination):
    """SQLite backend using stdlib sqlite3.

    Upserts are keyed on the table's declared primary key, read from
    ``PRAGMA table_info``. Tables without one receive plain inserts.
    """

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        # isolation_level=None: transactions are opened explicitly in apply().
        self._conn = sqlite3.connect(self._db_path, isolation_level=None)
        self._conn.execute("PRAGMA foreign_keys=ON")

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() or use the destination as a context manager.")
        return self._conn

    def execute(self, sql: str, params: Sequence | None = None) -> list[dict]:
        """Run a single statement outside a batch and return rows as dicts."""
        cursor = self._get_conn().execute(sql, params or ())
        if cursor.description is None:
            return []
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def primary_key(self, table: str) -> list[str]:
        rows = self._get_conn().execute(f"PRAGMA table_info({quote_ident(table)})").fetchall()
        if not rows:
            raise sqlite3.OperationalError(f"no such table: {table}")
        # row: (cid, name, type, notnull, dflt_value, pk)
        return [row[1] for row in sorted((r for r in rows if r[5]), key=lambda r: r[5])]

    def upsert_sql(self, table: str, columns: Sequence[str]) -> str:
        cols = ", ".join(quote_ident(c) for c in columns)
        placeholders = ", ".join("?" for _ in columns)
        sql = f"INSERT INTO {quote_ident(table)} ({cols}) VALUES ({placeholders})"

        conflict_columns = self.primary_key(table)
        if not conflict_columns:
            return sql
        conflict_cols = ", ".join(quote_ident(c) for c in conflict_columns)
        update_cols = [c for c in dict.fromkeys(columns) if c not in conflict_columns]
        if not update_cols:
            return f"{sql} ON CONFLICT ({conflict_cols}) DO NOTHING"
        update_clause = ", ".join(f"{quote_ident(c)} = excluded.{quote_ident(c)}" for c in update_cols)
        return f"{sql} ON CONFLICT ({conflict_cols}) DO UPDATE SET {update_clause}"

    def apply(self, mutations: Sequence[Mutation]) -> None:
        conn = self._get_conn()
        conn.execute("BEGIN")
        try:
            for table, columns, rows in group_mutations(mutations):
                conn.executemany(self.upsert_sql(table, columns), rows)
                logger.debug("Upserted %d rows into %s", len(rows), table)
            conn.execute("COMMIT")
        except Exception:
            conn.execute("ROLLBACK")
            raise
