"""Parsing module for column path arguments."""

from tabselect.parsing.path_lexer import PathLexer
from tabselect.parsing.path_parser import PathParser, parse_column_paths

__all__ = [
    "PathLexer",
    "PathParser",
    "parse_column_paths",
]
