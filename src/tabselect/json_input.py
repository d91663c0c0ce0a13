"""Read JSON input into tagged records.

Three shapes are accepted:

    [{"name": "a"}, {"name": "b"}]     # a JSON array, one record per element
    {"name": "a"}                      # a single value
    {"name": "a"}\\n{"name": "b"}       # JSON Lines / concatenated values

Each record is tagged with the input's anchor and the character span it
was decoded from.
"""

from __future__ import annotations

import gzip
import json
import re
from pathlib import Path
from typing import Iterator, TextIO

from tabselect.values import Span, Tag, Value, from_python

_WHITESPACE = re.compile(r"\s*")
_decoder = json.JSONDecoder()


def _line_of(text: str, pos: int, first_line: int = 1) -> int:
    return text.count("\n", 0, pos) + first_line


def _invalid(e: json.JSONDecodeError, first_line: int) -> ValueError:
    return ValueError(
        f"Invalid JSON at line {e.lineno + first_line - 1}, column {e.colno}: {e.msg}"
    )


def _decode_at(
    text: str, pos: int, anchor: str | None, base: int = 0, first_line: int = 1
) -> tuple[Value, int]:
    """Decode one JSON value starting at ``pos``; return it and the end position.

    ``base`` and ``first_line`` locate ``text`` inside the whole input, for
    spans and error messages.
    """
    try:
        obj, end = _decoder.raw_decode(text, pos)
    except json.JSONDecodeError as e:
        raise _invalid(e, first_line) from e
    return from_python(obj, Tag(anchor, Span(base + pos, base + end))), end


def _read_array(
    text: str, pos: int, anchor: str | None, base: int, first_line: int
) -> Iterator[Value]:
    pos = _WHITESPACE.match(text, pos + 1).end()
    if text.startswith("]", pos):
        return
    while True:
        value, pos = _decode_at(text, pos, anchor, base, first_line)
        yield value
        pos = _WHITESPACE.match(text, pos).end()
        if text.startswith(",", pos):
            pos = _WHITESPACE.match(text, pos + 1).end()
        elif text.startswith("]", pos):
            return
        else:
            raise ValueError(f"Expected ',' or ']' at line {_line_of(text, pos, first_line)}")


def read_records(
    text: str, anchor: str | None = None, base: int = 0, first_line: int = 1
) -> Iterator[Value]:
    """Lazily decode records from JSON text.

    A lone top-level array yields its elements. When more values follow
    the first array, every top-level value is a record of its own.
    """
    pos = _WHITESPACE.match(text).end()
    if pos == len(text):
        return

    if text.startswith("[", pos):
        _, end = _decode_at(text, pos, anchor, base, first_line)
        if _WHITESPACE.match(text, end).end() == len(text):
            yield from _read_array(text, pos, anchor, base, first_line)
            return

    while pos < len(text):
        value, pos = _decode_at(text, pos, anchor, base, first_line)
        yield value
        pos = _WHITESPACE.match(text, pos).end()


def _incomplete(buffer: str, e: json.JSONDecodeError) -> bool:
    """True when decoding stopped because the buffer ran out, not on bad input."""
    return e.pos >= len(buffer.rstrip())


def read_stream(stream: TextIO, anchor: str | None = None) -> Iterator[Value]:
    """Lazily decode records from a text stream, a line at a time.

    Nothing is read from ``stream`` until the first record is requested.
    Values may span several lines; a value is decoded as soon as its last
    line has arrived. Input whose first value is an array is handed to
    :func:`read_records` as a whole, since its elements are the records.
    """
    offset = 0  # characters consumed before ``buffer``
    line_no = 1  # line number ``buffer`` starts on
    buffer = ""
    started = False

    for line in iter(stream.readline, ""):
        if not buffer and not line.strip():
            offset += len(line)
            line_no += 1
            continue
        if not started and line.lstrip().startswith("["):
            yield from read_records(line + stream.read(), anchor, offset, line_no)
            return
        started = True
        buffer += line
        pos = _WHITESPACE.match(buffer).end()
        while pos < len(buffer):
            try:
                obj, end = _decoder.raw_decode(buffer, pos)
            except json.JSONDecodeError as e:
                if _incomplete(buffer, e):
                    break
                raise _invalid(e, line_no) from e
            yield from_python(obj, Tag(anchor, Span(offset + pos, offset + end)))
            pos = _WHITESPACE.match(buffer, end).end()
        line_no += buffer.count("\n", 0, pos)
        offset += pos
        buffer = buffer[pos:]

    if buffer.strip():
        try:
            _decoder.raw_decode(buffer, _WHITESPACE.match(buffer).end())
        except json.JSONDecodeError as e:
            raise _invalid(e, line_no) from e
        raise ValueError(f"Unexpected data at line {line_no}")


def open_text(path: Path) -> TextIO:
    """Open a text file for reading, transparently decompressing ``.gz`` files."""
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8")
    return path.open(encoding="utf-8")


def read_records_from_file(path: Path) -> Iterator[Value]:
    """Lazily decode records from a JSON, JSON Lines or gzipped file."""
    with open_text(path) as f:
        yield from read_stream(f, str(path))
