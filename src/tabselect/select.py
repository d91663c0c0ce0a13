"""The select operator: down-select a stream of records to a set of columns.

Selection runs in two phases. While input is arriving every requested
column path is resolved against every record and the result is appended
to a per-column list (table-valued cells fan out into one entry per row).
Once the input is exhausted the column lists are stitched back into rows
by index. Columns grow independently, so row ``i`` of the output holds the
``i``-th value seen for each column, not necessarily values that came from
the same input record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator

from tabselect.column_path import ColumnPath, get_data_by_column_path
from tabselect.errors import ColumnNotFound, InvocationError
from tabselect.values import Record, RecordBuilder, Table, Tag, Value, nothing

logger = logging.getLogger(__name__)


class MissingColumn(Enum):
    """What to do when a requested column is absent from a record."""

    LENIENT = "lenient"  # leave the cell empty and keep going
    FAIL = "fail"  # stop the stream with ColumnNotFound


@dataclass
class SelectArgs:
    """Arguments to a select invocation."""

    rest: list[ColumnPath] = field(default_factory=list)
    on_missing_column: MissingColumn = MissingColumn.LENIENT


@dataclass
class ReturnSuccess:
    """A value produced successfully by a command."""

    item: Value

    @classmethod
    def value(cls, item: Value) -> ReturnSuccess:
        return cls(item)


def require_columns(paths: list[ColumnPath], name_tag: Tag) -> None:
    """Raise InvocationError if no column paths were given."""
    if not paths:
        raise InvocationError.labeled_error(
            "Select requires columns to select",
            "needs parameter",
            name_tag,
        )


class ColumnAccumulator:
    """Collects the values of each requested column across the input.

    ``columns`` maps each path's rendered key to the wrapper records
    (``{key: value}``) gathered for it, in arrival order. Keys appear in the
    order the paths were requested, and after ``freeze`` every requested
    key is present even when it never resolved.
    """

    def __init__(
        self,
        paths: list[ColumnPath],
        name_tag: Tag | None = None,
        on_missing_column: MissingColumn = MissingColumn.LENIENT,
    ) -> None:
        self.paths = list(paths)
        self.name_tag = name_tag if name_tag is not None else Tag.unknown()
        self.on_missing_column = on_missing_column
        self.columns: dict[str, list[Record]] = {}
        self.records_seen = 0
        self._frozen = False

    def _wrap(self, key: str, value: Value) -> Record:
        out = RecordBuilder(self.name_tag)
        out.insert(key, value)
        return out.into_value()

    def feed(self, value: Value) -> None:
        """Resolve every requested path against one input record."""
        if self._frozen:
            raise RuntimeError("Cannot feed a column accumulator after it was frozen")

        self.records_seen += 1
        for path in self.paths:
            key = path.render()
            try:
                result = get_data_by_column_path(
                    value, path, strict=self.on_missing_column is MissingColumn.FAIL
                )
            except ColumnNotFound as e:
                if self.on_missing_column is MissingColumn.FAIL:
                    raise
                logger.debug(
                    "column %r not found in record %d (failed at %r)",
                    key, self.records_seen, e.member,
                )
                self.columns.setdefault(key, [])
                continue

            group = self.columns.setdefault(key, [])
            if isinstance(result, Table):
                for row in result.rows:
                    group.append(self._wrap(key, row))
            else:
                group.append(self._wrap(key, result))

    def freeze(self) -> dict[str, list[Record]]:
        """Stop accepting input and hand over the collected columns."""
        self._frozen = True
        for path in self.paths:
            self.columns.setdefault(path.render(), [])
        return self.columns


def accumulate(
    input: Iterable[Value],
    paths: list[ColumnPath],
    name_tag: Tag | None = None,
    on_missing_column: MissingColumn = MissingColumn.LENIENT,
) -> dict[str, list[Record]]:
    """Consume ``input`` once and return the per-column wrapper lists."""
    accumulator = ColumnAccumulator(paths, name_tag, on_missing_column)
    for value in input:
        accumulator.feed(value)
    return accumulator.freeze()


def column_width(columns: dict[str, list[Record]]) -> int:
    """Number of output rows: the length of the longest column."""
    return max((len(group) for group in columns.values()), default=0)


def synthesize(columns: dict[str, list[Record]], name_tag: Tag | None = None) -> Iterator[Record]:
    """Lazily stitch column lists back into rows.

    Columns shorter than the longest one are padded with the null marker.
    """
    name_tag = name_tag if name_tag is not None else Tag.unknown()
    width = column_width(columns)
    keys = list(columns)

    for current in range(width):
        out = RecordBuilder(name_tag)
        for key in keys:
            group = columns[key]
            if current < len(group):
                out.insert(key, group[current].get_data(key))
            else:
                out.insert(key, nothing(name_tag))
        yield out.into_value()


def select(
    input: Iterable[Value],
    args: SelectArgs,
    name_tag: Tag | None = None,
) -> Iterator[ReturnSuccess]:
    """Select the columns named in ``args`` from ``input``.

    Raises InvocationError immediately when no columns are requested; the
    input is not touched in that case. Otherwise returns a lazy iterator:
    nothing is read from ``input`` until the first output row is pulled.
    """
    name_tag = name_tag if name_tag is not None else Tag.unknown()
    require_columns(args.rest, name_tag)
    return _select_stream(input, args, name_tag)


def _select_stream(input: Iterable[Value], args: SelectArgs, name_tag: Tag) -> Iterator[ReturnSuccess]:
    accumulator = ColumnAccumulator(args.rest, name_tag, args.on_missing_column)
    for value in input:
        accumulator.feed(value)
    columns = accumulator.freeze()

    logger.debug(
        "synthesizing: %d records in, %d rows out",
        accumulator.records_seen, column_width(columns),
    )
    for row in synthesize(columns, name_tag):
        yield ReturnSuccess.value(row)

    logger.debug("select done")


def select_async(
    input: AsyncIterable[Value],
    args: SelectArgs,
    name_tag: Tag | None = None,
) -> AsyncIterator[ReturnSuccess]:
    """Asynchronous counterpart of ``select`` for awaitable record streams.

    Yields control to the event loop while waiting for each input record
    and for each output row the consumer pulls.
    """
    name_tag = name_tag if name_tag is not None else Tag.unknown()
    require_columns(args.rest, name_tag)
    return _select_async_stream(input, args, name_tag)


async def _select_async_stream(
    input: AsyncIterable[Value],
    args: SelectArgs,
    name_tag: Tag,
) -> AsyncIterator[ReturnSuccess]:
    accumulator = ColumnAccumulator(args.rest, name_tag, args.on_missing_column)
    async for value in input:
        accumulator.feed(value)
    columns = accumulator.freeze()

    logger.debug(
        "synthesizing: %d records in, %d rows out",
        accumulator.records_seen, column_width(columns),
    )
    for row in synthesize(columns, name_tag):
        yield ReturnSuccess.value(row)
