"""Batch upsert writer: accumulate mutations, apply them once."""

import logging
from typing import Iterator, Sequence

from csvloader.destination import Destination, Mutation
from csvloader.errors import WriteError
from csvloader.types import Record

logger = logging.getLogger(__name__)


class WriteBatch:
    """All upsert operations derived from one input, applied in one transaction."""

    def __init__(self, destination: Destination):
        self._destination = destination
        self._mutations: list[Mutation] = []
        self._applied = False

    def add(self, table: str, columns: Sequence[str], record: Record) -> None:
        self._mutations.append(self._destination.insert_or_update(table, columns, record))

    @property
    def applied(self) -> bool:
        return self._applied

    def __len__(self) -> int:
        return len(self._mutations)

    def __iter__(self) -> Iterator[Mutation]:
        return iter(self._mutations)

    def _consume(self) -> None:
        if self._applied:
            raise WriteError("batch has already been applied")
        self._applied = True

    def mutations(self) -> list[Mutation]:
        return list(self._mutations)

    def apply(self) -> None:
        """Commit the batch; a batch is consumed by exactly one call."""
        apply(self._destination, self)


def apply(destination: Destination, batch: WriteBatch) -> None:
    """Apply every mutation of ``batch`` to ``destination`` atomically.

    Any destination failure is raised as WriteError with the original
    exception chained. Nothing is retried.
    """
    batch._consume()
    if not len(batch):
        logger.info("Nothing to write")
        return
    try:
        destination.apply(batch.mutations())
    except Exception as e:
        raise WriteError(f"destination rejected batch of {len(batch)} rows: {e}") from e
    logger.info("Applied %d rows", len(batch))
