"""tabselect - Down-select streams of structured records to a set of columns."""

from tabselect.column_path import ColumnPath, PathMember, get_data_by_column_path
from tabselect.command import CallInfo, Example, Select, Signature, select_columns
from tabselect.errors import ColumnNotFound, InvocationError, ShellError
from tabselect.parsing import PathParser, parse_column_paths
from tabselect.select import (
    ColumnAccumulator,
    MissingColumn,
    ReturnSuccess,
    SelectArgs,
    accumulate,
    select,
    select_async,
    synthesize,
)
from tabselect.values import (
    Primitive,
    Record,
    RecordBuilder,
    Span,
    Table,
    Tag,
    Value,
    from_python,
    nothing,
    to_python,
)

__all__ = [
    # Main API
    "select",
    "select_async",
    "select_columns",
    "Select",
    "SelectArgs",
    "MissingColumn",
    "ReturnSuccess",
    # Operator phases
    "ColumnAccumulator",
    "accumulate",
    "synthesize",
    # Column paths
    "ColumnPath",
    "PathMember",
    "PathParser",
    "get_data_by_column_path",
    "parse_column_paths",
    # Command surface
    "CallInfo",
    "Example",
    "Signature",
    # Errors
    "ShellError",
    "InvocationError",
    "ColumnNotFound",
    # Values
    "Value",
    "Primitive",
    "Record",
    "Table",
    "RecordBuilder",
    "Span",
    "Tag",
    "from_python",
    "to_python",
    "nothing",
]

__version__ = "0.1.0"
