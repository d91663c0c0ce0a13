"""Command surface for select: signature, usage, examples and invocation."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from tabselect.parsing import PathParser
from tabselect.select import MissingColumn, ReturnSuccess, SelectArgs, select
from tabselect.values import Span, Tag, Value, from_python, to_python


@dataclass
class RestParameter:
    """Trailing positional parameter that takes any number of arguments."""

    shape: str
    description: str


@dataclass
class Switch:
    """A boolean ``--flag``."""

    name: str
    description: str


@dataclass
class Signature:
    """Declared parameters of a command."""

    name: str
    rest_positional: RestParameter | None = None
    switches: list[Switch] = field(default_factory=list)

    @classmethod
    def build(cls, name: str) -> Signature:
        return cls(name)

    def rest(self, shape: str, description: str) -> Signature:
        self.rest_positional = RestParameter(shape, description)
        return self

    def switch(self, name: str, description: str) -> Signature:
        self.switches.append(Switch(name, description))
        return self


@dataclass
class Example:
    """A documented use of a command and the rows it should produce."""

    description: str
    example: str
    result: list[dict[str, Any]] | None = None


@dataclass
class CallInfo:
    """How a command was invoked: its name tag, raw arguments and switches."""

    name_tag: Tag = field(default_factory=Tag.unknown)
    args: list[str] = field(default_factory=list)
    switches: set[str] = field(default_factory=set)

    def has_switch(self, name: str) -> bool:
        return name in self.switches


# Input used by the examples: a listing like the one ``ls`` produces
SAMPLE_LS: list[dict[str, Any]] = [
    {"name": "Cargo.toml", "type": "File", "size": 2282, "modified": "2 days ago"},
    {"name": "README.md", "type": "File", "size": 8453, "modified": "1 week ago"},
    {"name": "src", "type": "Dir", "size": 4096, "modified": "3 hours ago"},
]


class Select:
    """The ``select`` command."""

    def name(self) -> str:
        return "select"

    def signature(self) -> Signature:
        return (
            Signature.build("select")
            .rest("column_path", "the columns to select from the table")
            .switch("strict", "fail when a selected column is missing from a row")
        )

    def usage(self) -> str:
        return "Down-select table to only these columns."

    def examples(self) -> list[Example]:
        return [
            Example(
                description="Select just the name column",
                example="ls | select name",
                result=[{"name": row["name"]} for row in SAMPLE_LS],
            ),
            Example(
                description="Select the name and size columns",
                example="ls | select name size",
                result=[{"name": row["name"], "size": row["size"]} for row in SAMPLE_LS],
            ),
        ]

    def parse_args(self, call: CallInfo) -> SelectArgs:
        """Turn raw arguments into column paths.

        Spans of the parsed members are relative to the argument text as
        it appears after the command name.
        """
        parser = PathParser()
        paths = []
        offset = call.name_tag.span.end + 1
        for text in call.args:
            paths.append(parser.parse(text, offset))
            offset += len(text) + 1

        if call.has_switch("strict"):
            return SelectArgs(paths, MissingColumn.FAIL)
        return SelectArgs(paths)

    def run(self, call: CallInfo, input: Iterable[Value]) -> Iterator[ReturnSuccess]:
        return select(input, self.parse_args(call), call.name_tag)


def call_from_command_line(line: str) -> CallInfo:
    """Build a CallInfo from ``select a b --strict`` style text."""
    words = shlex.split(line)
    if not words:
        raise ValueError("Empty command line")
    name = words[0]
    args = [w for w in words[1:] if not w.startswith("--")]
    switches = {w[2:] for w in words[1:] if w.startswith("--")}
    return CallInfo(Tag(None, Span(0, len(name))), args, switches)


def select_columns(records: Iterable[Any], *columns: str, strict: bool = False) -> list[dict[str, Any]]:
    """Select ``columns`` from plain Python records and return plain dicts.

        >>> select_columns([{"name": "a", "size": 1}], "name")
        [{'name': 'a'}]
    """
    call = CallInfo(Tag(None, Span(0, len("select"))), list(columns), {"strict"} if strict else set())
    values = (from_python(record) for record in records)
    return [to_python(out.item) for out in Select().run(call, values)]


def check_examples(command: Select) -> None:
    """Run every example of ``command`` against SAMPLE_LS and check its result."""
    for example in command.examples():
        pipeline = [stage.strip() for stage in example.example.split("|")]
        call = call_from_command_line(pipeline[-1])
        input = [from_python(row) for row in SAMPLE_LS]
        actual = [to_python(out.item) for out in command.run(call, input)]
        if example.result is not None and actual != example.result:
            raise AssertionError(
                f"Example {example.example!r} produced {actual!r}, expected {example.result!r}"
            )
