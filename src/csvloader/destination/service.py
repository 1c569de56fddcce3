"""Abstract Destination interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import groupby
from typing import Iterator, Sequence

from csvloader.errors import WriteError
from csvloader.types import Value


@dataclass(frozen=True)
class Mutation:
    """One insert-or-update of a single row."""

    table: str
    columns: tuple[str, ...]
    values: tuple[Value, ...]


def group_mutations(
    mutations: Sequence[Mutation],
) -> Iterator[tuple[str, tuple[str, ...], list[tuple[Value, ...]]]]:
    """Group consecutive mutations sharing a table and column list."""
    for (table, columns), group in groupby(mutations, key=lambda m: (m.table, m.columns)):
        yield table, columns, [m.values for m in group]


class Destination(ABC):
    """Table store the loader writes batches into.

    Design principles:
    - One connection per run: connect() once, close() on exit
    - Atomic: apply() commits every mutation or none of them
    - Upsert keys are owned by the destination table, never by the caller
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the connection."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection and release resources."""

    @abstractmethod
    def apply(self, mutations: Sequence[Mutation]) -> None:
        """Commit all mutations in a single transaction, or raise."""

    def insert_or_update(
        self, table: str, columns: Sequence[str], values: Sequence[Value]
    ) -> Mutation:
        """Build one upsert operation for a row."""
        return Mutation(table, tuple(columns), tuple(values))

    def __enter__(self) -> "Destination":
        try:
            self.connect()
        except Exception as e:
            raise WriteError(f"cannot connect to destination: {e}").wrap("connect") from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
