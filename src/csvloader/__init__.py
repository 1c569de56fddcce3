"""Typed CSV loader — decode a declared-schema CSV and upsert it in one batch."""

from csvloader.coerce import coerce
from csvloader.config import LoadConfig
from csvloader.decoder import DecodedTable, decode
from csvloader.destination import Destination, Mutation, create_destination
from csvloader.errors import (
    ConfigurationError,
    LoaderError,
    ParseError,
    SchemaError,
    StreamAcquisitionError,
    UnsupportedTypeError,
    WriteError,
)
from csvloader.pipeline import load, run
from csvloader.reader import ReaderOptions, read_rows
from csvloader.types import ColumnSchema, Record, Value
from csvloader.writer import WriteBatch, apply

__all__ = [
    "ColumnSchema",
    "ConfigurationError",
    "DecodedTable",
    "Destination",
    "LoadConfig",
    "LoaderError",
    "Mutation",
    "ParseError",
    "ReaderOptions",
    "Record",
    "SchemaError",
    "StreamAcquisitionError",
    "UnsupportedTypeError",
    "Value",
    "WriteBatch",
    "WriteError",
    "apply",
    "coerce",
    "create_destination",
    "decode",
    "load",
    "read_rows",
    "run",
]
