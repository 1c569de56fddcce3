"""PostgreSQL implementation of Destination."""

import logging
from typing import Sequence

import psycopg2
import psycopg2.extras
from psycopg2 import sql

from csvloader.destination.service import Destination, Mutation, group_mutations

logger = logging.getLogger(__name__)

PRIMARY_KEY_SQL = """
SELECT a.attname
FROM pg_index i
JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
WHERE i.indrelid = %s::regclass AND i.indisprimary
ORDER BY array_position(i.indkey, a.attnum)
"""


class PostgresDestination(Destination):
    """PostgreSQL backend using psycopg2.

    apply() runs inside one transaction; upserts are keyed on the table's
    primary key as recorded in pg_index.
    """

    def __init__(self, dsn: str):
        self._dsn = dsn
        self._conn = None

    def connect(self) -> None:
        self._conn = psycopg2.connect(self._dsn)
        self._conn.autocommit = False

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _get_conn(self):
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() or use the destination as a context manager.")
        return self._conn

    def execute(self, query: str, params: Sequence | None = None) -> list[dict]:
        """Run a single statement in its own transaction and return rows as dicts."""
        conn = self._get_conn()
        with conn:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(query, params or ())
                if cur.description is None:
                    return []
                return [dict(row) for row in cur.fetchall()]

    def primary_key(self, cur, table: str) -> list[str]:
        cur.execute(PRIMARY_KEY_SQL, (sql.Identifier(table).as_string(cur),))
        return [row[0] for row in cur.fetchall()]

    def upsert_sql(self, table: str, columns: Sequence[str], conflict_columns: Sequence[str]) -> sql.Composed:
        stmt = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            sql.Identifier(table),
            sql.SQL(", ").join(map(sql.Identifier, columns)),
            sql.SQL(", ").join(sql.Placeholder() * len(columns)),
        )
        if not conflict_columns:
            return stmt
        conflict_cols = sql.SQL(", ").join(map(sql.Identifier, conflict_columns))
        update_cols = [c for c in dict.fromkeys(columns) if c not in conflict_columns]
        if not update_cols:
            return stmt + sql.SQL(" ON CONFLICT ({}) DO NOTHING").format(conflict_cols)
        update_clause = sql.SQL(", ").join(
            sql.SQL("{0} = EXCLUDED.{0}").format(sql.Identifier(c)) for c in update_cols
        )
        return stmt + sql.SQL(" ON CONFLICT ({}) DO UPDATE SET {}").format(conflict_cols, update_clause)

    def apply(self, mutations: Sequence[Mutation]) -> None:
        conn = self._get_conn()
        # The connection context manager commits on success and rolls back on error.
        with conn:
            with conn.cursor() as cur:
                for table, columns, rows in group_mutations(mutations):
                    query = self.upsert_sql(table, columns, self.primary_key(cur, table))
                    psycopg2.extras.execute_batch(cur, query, rows)
                    logger.debug("Upserted %d rows into %s", len(rows), table)
