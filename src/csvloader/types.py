"""Shared types for the csvloader package."""

from typing import NamedTuple

Value = int | float | bool | str
Record = tuple[Value, ...]


class Column(NamedTuple):
    name: str
    type_tag: str


class ColumnSchema(tuple[Column, ...]):
    """Ordered (name, type tag) pairs declared by the first two input rows."""

    @property
    def names(self) -> list[str]:
        return [c.name for c in self]

    @property
    def type_tags(self) -> list[str]:
        return [c.type_tag for c in self]
