"""Record decoding: header rows -> ColumnSchema, data rows -> typed records."""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from csvloader.coerce import coerce
from csvloader.errors import LoaderError, SchemaError
from csvloader.types import Column, ColumnSchema, Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedTable:
    schema: ColumnSchema
    records: Iterator[Record]


def read_schema(names: Sequence[str], type_tags: Sequence[str]) -> ColumnSchema:
    """Pair the column-name row with the type-tag row.

    Duplicate names are kept as-is. Unknown type tags are left for the
    coercer to report on the first data row.
    """
    if len(names) != len(type_tags):
        raise SchemaError(
            f"header declares {len(names)} columns but type row declares {len(type_tags)}"
        )
    return ColumnSchema(Column(name, tag) for name, tag in zip(names, type_tags))


def decode_row(schema: ColumnSchema, row: Sequence[str], row_num: int) -> Record:
    """Coerce one data row in lockstep with the schema.

    ``row_num`` is the 1-based position of the row in the input, used for
    error messages only.
    """
    if len(row) != len(schema):
        raise SchemaError(f"row {row_num}: expected {len(schema)} fields, got {len(row)}")

    values = []
    for column, raw in zip(schema, row):
        try:
            values.append(coerce(column.type_tag, raw))
        except LoaderError as e:
            raise e.wrap(f"row {row_num}, column {column.name!r}")
    return tuple(values)


def _decode_records(schema: ColumnSchema, rows: Iterator[Sequence[str]]) -> Iterator[Record]:
    for row_num, row in enumerate(rows, start=3):
        yield decode_row(schema, row, row_num)


def decode(rows: Iterable[Sequence[str]]) -> DecodedTable:
    """Decode a row sequence whose first two rows are names and type tags.

    The header rows are consumed eagerly; data rows are decoded lazily as
    ``records`` is iterated. The first failing row raises and no further
    rows are read.
    """
    it = iter(rows)
    # Copy each header row before requesting the next; readers may reuse buffers.
    names = next(it, None)
    if names is None:
        raise SchemaError("input is empty, expected a column-name row")
    names = list(names)
    type_tags = next(it, None)
    if type_tags is None:
        raise SchemaError("input has no type row")
    type_tags = list(type_tags)

    schema = read_schema(names, type_tags)
    logger.info("Decoded schema with %d columns: %s", len(schema), ", ".join(schema.names))
    return DecodedTable(schema, _decode_records(schema, it))
