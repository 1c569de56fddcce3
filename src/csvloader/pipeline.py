"""Load pipeline: validate -> open source -> decode all rows -> apply one batch."""

import logging
from typing import BinaryIO, Callable

from csvloader.config import LoadConfig
from csvloader.decoder import decode
from csvloader.destination import Destination, create_destination
from csvloader.errors import LoaderError
from csvloader.reader import ReaderOptions, read_rows
from csvloader.source import open_source
from csvloader.writer import WriteBatch, apply

logger = logging.getLogger(__name__)

DestinationFactory = Callable[[LoadConfig], Destination]


def destination_from_config(config: LoadConfig) -> Destination:
    return create_destination(
        db_url=config.db_url,
        project_id=config.spanner_project_id,
        instance_id=config.spanner_instance_id,
        database_id=config.spanner_database_id,
    )


def build_batch(
    stream: BinaryIO, destination: Destination, table: str, options: ReaderOptions
) -> WriteBatch:
    """Decode every row of ``stream`` into one WriteBatch for ``table``.

    The first row that fails to decode raises; no batch is returned.
    """
    try:
        decoded = decode(read_rows(stream, options))
        batch = WriteBatch(destination)
        columns = decoded.schema.names
        for record in decoded.records:
            batch.add(table, columns, record)
    except LoaderError as e:
        raise e.wrap("decode")
    logger.info("Decoded %d rows for %s", len(batch), table)
    return batch


def load(stream: BinaryIO, destination: Destination, table: str, options: ReaderOptions) -> int:
    """Decode ``stream`` fully, then upsert every row into ``table`` at once.

    Returns the number of rows written.
    """
    batch = build_batch(stream, destination, table, options)
    try:
        apply(destination, batch)
    except LoaderError as e:
        raise e.wrap("apply")
    return len(batch)


def run(config: LoadConfig, destination_factory: DestinationFactory = destination_from_config) -> int:
    """Run one load as configured.

    The config is validated before any I/O. The source stream and the
    destination connection are each held for the duration of the run and
    released on exit, including on failure.
    """
    location, options = config.validate()
    destination = destination_factory(config)

    try:
        with open_source(location) as stream:
            with destination:
                total = load(stream, destination, config.spanner_table, options)
    except LoaderError as e:
        raise e.wrap("load")

    logger.info("Loaded %d rows from %s into %s", total, location.url, config.spanner_table)
    return total
