"""Render selected rows as a text table or JSON."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from tabselect.values import Record, Table, Value, to_python


def format_value(value: Value, max_items: int = 10, max_width: int = 40) -> str:
    """Format a value for display.

    Args:
        value: The value to format
        max_items: Maximum number of record fields to show before eliding
        max_width: Maximum character width before truncating
    """
    if isinstance(value, Table):
        return f"[table {len(value)} row{'s' if len(value) != 1 else ''}]"

    if isinstance(value, Record):
        formatted = []
        for i, (k, v) in enumerate(value.fields.items()):
            if i >= max_items:
                formatted.append(f"...+{len(value) - max_items} more")
                break
            formatted.append(f"{k}: {format_value(v, max_items, max_width)}")
        result = "{" + ", ".join(formatted) + "}"
        if len(result) > max_width:
            return result[:max_width - 4] + "...}"
        return result

    item = value.item
    if item is None:
        return "NULL"
    elif isinstance(item, bool):
        return "true" if item else "false"
    elif isinstance(item, float):
        return f"{item:.6g}"
    elif isinstance(item, str):
        if len(item) > max_width:
            return repr(item[:max_width - 3] + "...")
        return repr(item)
    return str(item)


def columns_of(rows: list[Record]) -> list[str]:
    """Column names in first-seen order across ``rows``."""
    columns: dict[str, None] = {}
    for row in rows:
        for key in row.fields:
            columns.setdefault(key, None)
    return list(columns)


def print_rows(rows: list[Record], out: TextIO | None = None, max_col_width: int = 40) -> None:
    """Print rows in a formatted table."""
    out = out if out is not None else sys.stdout

    if not rows:
        print("(no results)", file=out)
        return

    columns = columns_of(rows)

    # Calculate column widths
    col_widths = {col: len(col) for col in columns}
    for row in rows:
        for col in columns:
            val = format_value(row.get_data(col))
            col_widths[col] = max(col_widths[col], len(val))

    # Cap column widths
    for col in col_widths:
        col_widths[col] = min(col_widths[col], max_col_width)

    header = " | ".join(col.ljust(col_widths[col])[:col_widths[col]] for col in columns)
    print(header, file=out)
    print("-" * len(header), file=out)

    for row in rows:
        values = []
        for col in columns:
            val = format_value(row.get_data(col))
            if len(val) > col_widths[col]:
                val = val[: col_widths[col] - 3] + "..."
            values.append(val.ljust(col_widths[col]))
        print(" | ".join(values), file=out)

    print(f"\n({len(rows)} row{'s' if len(rows) != 1 else ''})", file=out)


def rows_to_json(rows: list[Value], pretty: bool = False) -> str:
    """Serialize rows as a JSON array."""
    data = [to_python(row) for row in rows]
    if pretty:
        return json.dumps(data, indent=2)
    return json.dumps(data)
