"""Command line entry point: select columns from JSON records.

Usage:
    tabselect name size -f listing.json       # print a table
    cat data.jsonl | tabselect meta.author    # read from stdin
    tabselect items.0 --format json -f a.json # JSON output
    tabselect name missing --strict -f a.json # fail on missing columns
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tabselect.command import CallInfo, Select
from tabselect.display import print_rows, rows_to_json
from tabselect.errors import ShellError
from tabselect.json_input import read_records_from_file, read_stream
from tabselect.values import Span, Tag


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        prog="tabselect",
        description="Down-select JSON records to only the given columns",
    )
    arg_parser.add_argument(
        "columns",
        nargs="*",
        help="Column paths to select, e.g. name, meta.author, items.0, items[0].name",
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Read records from a JSON, JSON Lines or .gz file instead of stdin",
    )
    arg_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a selected column is missing from a record",
    )
    arg_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )

    args = arg_parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.file and not args.file.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    call = CallInfo(
        Tag("<command line>", Span(0, len("select"))),
        list(args.columns),
        {"strict"} if args.strict else set(),
    )

    try:
        if args.file:
            records = read_records_from_file(args.file)
        else:
            records = read_stream(sys.stdin, "<stdin>")
        # Arguments are checked here, before a single record is read
        outputs = Select().run(call, records)
        rows = [out.item for out in outputs]
    except ShellError as e:
        print(e.render(), file=sys.stderr)
        return 1
    except (SyntaxError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(rows_to_json(rows, pretty=True))
    else:
        print_rows(rows)
    return 0


if __name__ == "__main__":
    sys.exit(main())
