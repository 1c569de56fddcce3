"""Tabular-text reading on top of the stdlib csv module."""

import codecs
import csv
from dataclasses import dataclass
from typing import BinaryIO, Iterator

from csvloader.errors import ConfigurationError, ParseError, StreamAcquisitionError

DELIMITERS = {
    "comma": ",",
    "tab": "\t",
}


def resolve_delimiter(name: str) -> str:
    """Map a delimiter name (``comma`` or ``tab``) to its character."""
    try:
        return DELIMITERS[name]
    except KeyError:
        raise ConfigurationError(
            "invalid delimiter type. You can only use: comma or tab"
        ) from None


@dataclass(frozen=True)
class ReaderOptions:
    delimiter: str = ","
    lazy_quotes: bool = True
    trim_leading_space: bool = True


def read_rows(stream: BinaryIO, options: ReaderOptions) -> Iterator[list[str]]:
    """Yield each row of a binary stream as a fresh list of strings.

    ``lazy_quotes=False`` turns on strict quote parsing, so text after a
    closing quote ("x"y) raises ParseError. A bare quote inside an unquoted
    field (x"y) is kept literally in both modes. Blank lines are skipped.
    I/O failures while reading raise StreamAcquisitionError. The caller
    owns the stream and closes it.
    """
    reader = csv.reader(
        codecs.iterdecode(stream, "utf-8-sig"),
        delimiter=options.delimiter,
        skipinitialspace=options.trim_leading_space,
        strict=not options.lazy_quotes,
    )
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            raise ParseError(f"line {reader.line_num}: {e}") from e
        except UnicodeDecodeError as e:
            raise ParseError(f"line {reader.line_num + 1}: input is not valid UTF-8") from e
        except OSError as e:
            raise StreamAcquisitionError(str(e)).wrap("read") from e
        if not row:
            # Blank lines carry no fields and are skipped.
            continue
        yield row
