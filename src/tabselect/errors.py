"""Errors raised by tabselect commands."""

from __future__ import annotations

from dataclasses import dataclass

from tabselect.values import Span, Tag


@dataclass(frozen=True)
class Label:
    """A message attached to a span of the command line or of the input."""

    message: str
    span: Span

    def render(self) -> str:
        if self.span.is_unknown():
            return self.message
        return f"{self.message} (at {self.span})"


class ShellError(Exception):
    """Base class for errors reported back to whoever invoked a command.

    Carries a title, a primary label and an optional secondary label so
    that a front end can point at both the offending argument and the
    input that triggered the failure.
    """

    def __init__(self, title: str, primary: Label, secondary: Label | None = None) -> None:
        super().__init__(title)
        self.title = title
        self.primary = primary
        self.secondary = secondary

    @classmethod
    def labeled_error(cls, title: str, label: str, tag: Tag) -> ShellError:
        return cls(title, Label(label, tag.span))

    def render(self) -> str:
        """Render the multi-line diagnostic shown to users."""
        lines = [f"error: {self.title}", f"  - {self.primary.render()}"]
        if self.secondary is not None:
            lines.append(f"  - {self.secondary.render()}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"{self.title}: {self.primary.message}"


class InvocationError(ShellError):
    """The command was invoked with unusable arguments."""


class ColumnNotFound(ShellError):
    """A column path did not resolve against a record.

    ``member`` is the path member that could not be satisfied and
    ``source_tag`` is the tag of the value the lookup was applied to.
    """

    def __init__(self, member: str | int, member_span: Span, source_tag: Tag) -> None:
        if isinstance(member, int):
            primary = f"Couldn't select row {member}"
        else:
            primary = f'Couldn\'t select column "{member}"'
        super().__init__(
            "No data to fetch.",
            Label(primary, member_span),
            Label(
                'How about exploring it with "get"? Check the input is appropriate originating from here',
                source_tag.span,
            ),
        )
        self.member = member
        self.source_tag = source_tag
