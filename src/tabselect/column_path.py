"""Column paths and their resolution against value trees."""

from __future__ import annotations

from dataclasses import dataclass, field

from tabselect.errors import ColumnNotFound
from tabselect.values import Record, Span, Table, Value


@dataclass(frozen=True)
class PathMember:
    """One step of a column path: a field name or a row index."""

    member: str | int
    span: Span = field(default_factory=Span.unknown, compare=False)

    @property
    def is_index(self) -> bool:
        return isinstance(self.member, int)

    def render(self) -> str:
        return str(self.member)


@dataclass(frozen=True)
class ColumnPath:
    """A non-empty sequence of path members, e.g. ``items.0.name``."""

    members: tuple[PathMember, ...]

    def __post_init__(self) -> None:
        if not self.members:
            raise ValueError("A column path needs at least one member")

    @classmethod
    def of(cls, *members: str | int) -> ColumnPath:
        """Build a path from plain names and indices: ``ColumnPath.of("items", 0)``."""
        return cls(tuple(PathMember(m) for m in members))

    @property
    def span(self) -> Span:
        return Span(self.members[0].span.start, self.members[-1].span.end)

    def render(self) -> str:
        """Canonical key of the path: members joined with dots."""
        return ".".join(m.render() for m in self.members)

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self.members)


def _step(value: Value, member: PathMember, strict: bool) -> Value:
    """Apply a single member to a value, raising ColumnNotFound when it does not fit."""
    if member.is_index:
        if isinstance(value, Table) and 0 <= member.member < len(value.rows):
            return value.rows[member.member]

    elif isinstance(value, Record):
        if member.member in value.fields:
            return value.fields[member.member]

    elif isinstance(value, Table):
        # A name applied to a table projects it over the rows that have it;
        # strict lookups fail on the first row without it
        projected = []
        for row in value.rows:
            if isinstance(row, Record) and member.member in row.fields:
                projected.append(row.fields[member.member])
            elif strict:
                raise ColumnNotFound(member.member, member.span, row.tag)
        if projected:
            return Table(projected, value.tag)

    raise ColumnNotFound(member.member, member.span, value.tag)


def get_data_by_column_path(value: Value, path: ColumnPath, strict: bool = False) -> Value:
    """Fetch the sub-value of ``value`` addressed by ``path``.

    Raises ColumnNotFound at the first member that cannot be satisfied:
    a missing field, an out-of-range index, or a step into a primitive.
    A name applied to a table keeps the rows that have it; with ``strict``
    a row without it is an error too.
    """
    current = value
    for member in path.members:
        current = _step(current, member, strict)
    return current
