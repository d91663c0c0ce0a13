"""Lexer for column path arguments such as ``items.0.name`` or ``items[0].name``."""

import re

import ply.lex as lex

_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "0": "\0"}


def _unescape(match: re.Match) -> str:
    code = match.group(1)
    if code.startswith("u") and len(code) == 5:
        return chr(int(code[1:], 16))
    return _SIMPLE_ESCAPES.get(code, code)


class PathLexer:
    """Lexer for tokenizing column paths."""

    tokens = [
        "IDENTIFIER",
        "INTEGER",
        "STRING",
        "DOT",
        "LBRACKET",
        "RBRACKET",
    ]

    t_DOT = r"\."
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"

    t_ignore = " \t"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_INTEGER(self, t: lex.LexToken) -> lex.LexToken:
        r"\d+"
        t.value = int(t.value)
        t.end = t.lexer.lexpos
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"([^"\\]|\\.)*"|\'([^\'\\]|\\.)*\''
        # Remove quotes and handle escapes; other characters pass through untouched
        t.value = _ESCAPE.sub(_unescape, t.value[1:-1])
        t.end = t.lexer.lexpos
        return t

    def t_BACKTICK_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"`[^`]+`"
        t.value = t.value[1:-1]
        t.type = "IDENTIFIER"
        t.end = t.lexer.lexpos
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"(?:[^\W\d]|-)[\w\-]*"
        t.end = t.lexer.lexpos
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
