"""Type coercion: declared type tag + raw text -> native value."""

import math
import re
from typing import Callable

from csvloader.errors import ParseError, UnsupportedTypeError
from csvloader.types import Value

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INF_LITERALS = {"inf", "infinity"}

TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_int64(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise ParseError(f"invalid int64 {raw!r}")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ParseError(f"int64 out of range {raw!r}")
    return value


def parse_float64(raw: str) -> float:
    if not raw.isascii() or raw != raw.strip() or "_" in raw:
        raise ParseError(f"invalid float64 {raw!r}")
    try:
        value = float(raw)
    except ValueError as e:
        raise ParseError(f"invalid float64 {raw!r}") from e
    if math.isinf(value) and raw.lstrip("+-").lower() not in _INF_LITERALS:
        raise ParseError(f"float64 out of range {raw!r}")
    return value


def parse_bool(raw: str) -> bool:
    if raw in TRUE_LITERALS:
        return True
    if raw in FALSE_LITERALS:
        return False
    raise ParseError(f"invalid bool {raw!r}")


def _identity(raw: str) -> str:
    return raw


# date and timestamp are validated by the destination, not here.
COERCERS: dict[str, Callable[[str], Value]] = {
    "int64": parse_int64,
    "float64": parse_float64,
    "bool": parse_bool,
    "string": _identity,
    "date": _identity,
    "timestamp": _identity,
}


def coerce(type_tag: str, raw: str) -> Value:
    """Convert ``raw`` to the native value selected by ``type_tag``.

    Raises UnsupportedTypeError for an unknown tag (whatever the text) and
    ParseError when the text is not a valid literal of the declared type.
    """
    try:
        parser = COERCERS[type_tag]
    except KeyError:
        raise UnsupportedTypeError(type_tag) from None
    return parser(raw)
