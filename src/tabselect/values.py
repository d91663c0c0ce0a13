"""Value tree for the tabselect library.

Records flowing through a pipeline are trees of three node kinds:
``Primitive`` scalars, ``Record`` field mappings and ``Table`` row lists.
Every node carries a ``Tag`` describing where it came from so that
diagnostics can point back at the input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union


@dataclass(frozen=True)
class Span:
    """A half-open character range ``[start, end)`` in some source text."""

    start: int = 0
    end: int = 0

    @classmethod
    def unknown(cls) -> Span:
        return cls(0, 0)

    def is_unknown(self) -> bool:
        return self.start == 0 and self.end == 0

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class Tag:
    """Provenance of a value: an optional anchor (file name, ``<stdin>``) and a span."""

    anchor: str | None = None
    span: Span = field(default_factory=Span.unknown)

    @classmethod
    def unknown(cls) -> Tag:
        return cls()

    def __str__(self) -> str:
        if self.anchor is None:
            return str(self.span)
        return f"{self.anchor}:{self.span}"


@dataclass
class Primitive:
    """A scalar value. ``Primitive(None)`` is the null marker ("nothing")."""

    item: str | int | float | bool | None
    tag: Tag = field(default_factory=Tag.unknown, compare=False)

    def is_nothing(self) -> bool:
        return self.item is None


@dataclass
class Record:
    """An ordered mapping from field name to value."""

    fields: dict[str, Value] = field(default_factory=dict)
    tag: Tag = field(default_factory=Tag.unknown, compare=False)

    def get_data(self, key: str) -> Value:
        """Return the field ``key``, or the null marker if it is absent."""
        value = self.fields.get(key)
        if value is None:
            return nothing(self.tag)
        return value

    def keys(self) -> list[str]:
        return list(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass
class Table:
    """An ordered sequence of values, typically records."""

    rows: list[Value] = field(default_factory=list)
    tag: Tag = field(default_factory=Tag.unknown, compare=False)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.rows)


Value = Union[Primitive, Record, Table]


def nothing(tag: Tag | None = None) -> Primitive:
    """Build the null marker."""
    return Primitive(None, tag if tag is not None else Tag.unknown())


class RecordBuilder:
    """Incrementally build a ``Record`` that shares a single tag."""

    def __init__(self, tag: Tag | None = None) -> None:
        self.tag = tag if tag is not None else Tag.unknown()
        self._fields: dict[str, Value] = {}

    def insert(self, key: str, value: Value) -> None:
        """Insert ``value`` under ``key``; a repeated key keeps its first position."""
        self._fields[key] = value

    def into_value(self) -> Record:
        return Record(dict(self._fields), self.tag)


def from_python(obj: Any, tag: Tag | None = None) -> Value:
    """Convert JSON-shaped Python data into a value tree.

    dicts become records, lists and tuples become tables and everything else
    becomes a primitive. All nodes share ``tag``.
    """
    tag = tag if tag is not None else Tag.unknown()

    if isinstance(obj, (Primitive, Record, Table)):
        return obj
    if isinstance(obj, dict):
        return Record({str(k): from_python(v, tag) for k, v in obj.items()}, tag)
    if isinstance(obj, (list, tuple)):
        return Table([from_python(v, tag) for v in obj], tag)
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return Primitive(obj, tag)
    raise TypeError(f"Cannot convert {type(obj).__name__} to a value")


def to_python(value: Value) -> Any:
    """Convert a value tree back into plain Python data."""
    if isinstance(value, Record):
        return {k: to_python(v) for k, v in value.fields.items()}
    if isinstance(value, Table):
        return [to_python(v) for v in value.rows]
    return value.item
