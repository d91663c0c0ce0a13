"""Parser for column path arguments."""

from __future__ import annotations

from typing import Any, Iterable

import ply.yacc as yacc

from tabselect.column_path import ColumnPath, PathMember
from tabselect.parsing.path_lexer import PathLexer
from tabselect.values import Span


class PathParser:
    """Parser for column paths.

    Accepted forms::

        name
        meta.author
        items.0          # integer after a dot is a row index
        items[0].name    # bracketed index
        "file name".size # quoted members for awkward keys
    """

    tokens = PathLexer.tokens

    def __init__(self) -> None:
        self.lexer = PathLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_column_path_single(self, p: yacc.YaccProduction) -> None:
        """column_path : member"""
        p[0] = [p[1]]

    def p_column_path_dotted(self, p: yacc.YaccProduction) -> None:
        """column_path : column_path DOT member"""
        p[0] = p[1] + [p[3]]

    def p_column_path_index(self, p: yacc.YaccProduction) -> None:
        """column_path : column_path LBRACKET INTEGER RBRACKET"""
        p[0] = p[1] + [self._member(p, 3)]

    def p_member(self, p: yacc.YaccProduction) -> None:
        """member : IDENTIFIER
                  | STRING
                  | INTEGER"""
        p[0] = self._member(p, 1)

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    @staticmethod
    def _member(p: yacc.YaccProduction, n: int) -> PathMember:
        tok = p.slice[n]
        return PathMember(tok.value, Span(tok.lexpos, tok.end))

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="column_path", **kwargs)

    def parse(self, data: str, offset: int = 0) -> ColumnPath:
        """Parse a column path string.

        ``offset`` shifts every member span, for paths that came from a
        larger command line.
        """
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        if not data.strip():
            raise SyntaxError("Empty column path")

        members = self.parser.parse(data, lexer=self.lexer.lexer)
        if offset:
            members = [
                PathMember(m.member, Span(m.span.start + offset, m.span.end + offset))
                for m in members
            ]
        return ColumnPath(tuple(members))


def parse_column_paths(texts: Iterable[str]) -> list[ColumnPath]:
    """Parse several column path arguments with one parser.

    Spans are laid out as if the arguments were joined by single spaces.
    """
    parser = PathParser()
    paths = []
    offset = 0
    for text in texts:
        paths.append(parser.parse(text, offset))
        offset += len(text) + 1
    return paths
