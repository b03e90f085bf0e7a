"""Lexical analyser for the SQL subset understood by the database."""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import Enum, auto

DELIMITERS = "(),="

KEYWORDS = frozenset(
    {
        "select",
        "from",
        "where",
        "and",
        "insert",
        "into",
        "values",
        "delete",
        "update",
        "set",
        "create",
        "table",
        "int",
        "varchar",
        "view",
        "as",
        "index",
        "on",
    }
)

_LEXEME_RE = re.compile(r"[(),=]|[^ (),=]+")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class TokenType(Enum):
    """Kind of the token the lexer is positioned on."""

    UNKNOWN = auto()
    EOF = auto()
    WORD = auto()
    NUMBER = auto()
    STRING = auto()
    OTHER = auto()


class BadSyntaxError(ValueError):
    """Raised when the input does not match what the grammar expects."""


def _split_lexemes(text: str) -> Iterator[str]:
    # Lexemes are separated by spaces; the delimiter characters stand on their own.
    for match in _LEXEME_RE.finditer(text):
        yield match.group()


class Lexer:
    """Splits a statement into tokens and offers match/eat operations on them.

    Words are folded to lower case; integers may carry a sign; string
    constants are enclosed in single quotes.
    """

    def __init__(self, text: str) -> None:
        self._lexemes = _split_lexemes(text)
        self._type = TokenType.UNKNOWN
        self._str_val = ""
        self._num_val = 0
        self._advance()

    @property
    def token_type(self) -> TokenType:
        return self._type

    def match_delim(self, delim: str) -> bool:
        """True if the current token is the delimiter character ``delim``."""
        return self._type is TokenType.OTHER and self._str_val == delim

    def match_int_constant(self) -> bool:
        return self._type is TokenType.NUMBER

    def match_string_constant(self) -> bool:
        return self._type is TokenType.STRING

    def match_keyword(self, word: str) -> bool:
        return self._type is TokenType.WORD and self._str_val == word

    def match_id(self) -> bool:
        """True if the current token is a word that is not a keyword."""
        return self._type is TokenType.WORD and self._str_val not in KEYWORDS

    def eat_delim(self, delim: str) -> None:
        if not self.match_delim(delim):
            raise BadSyntaxError(f"parse: bad syntax: expected {delim!r}")
        self._advance()

    def eat_int_constant(self) -> int:
        if not self.match_int_constant():
            raise BadSyntaxError("parse: bad syntax: expected an integer")
        value = self._num_val
        self._advance()
        return value

    def eat_string_constant(self) -> str:
        if not self.match_string_constant():
            raise BadSyntaxError("parse: bad syntax: expected a string")
        value = self._str_val
        self._advance()
        return value

    def eat_keyword(self, word: str) -> None:
        if not self.match_keyword(word):
            raise BadSyntaxError(f"parse: bad syntax: expected keyword {word!r}")
        self._advance()

    def eat_id(self) -> str:
        if not self.match_id():
            raise BadSyntaxError("parse: bad syntax: expected an identifier")
        value = self._str_val
        self._advance()
        return value

    def _advance(self) -> None:
        lexeme = next(self._lexemes, None)
        if lexeme is None:
            self._type = TokenType.EOF
            return
        if _INTEGER_RE.fullmatch(lexeme):
            self._type = TokenType.NUMBER
            self._num_val = int(lexeme)
            return
        if lexeme.startswith("'") and lexeme.endswith("'"):
            self._type = TokenType.STRING
            self._str_val = lexeme[1:-1]
            return
        if lexeme in DELIMITERS:
            self._type = TokenType.OTHER
            self._str_val = lexeme
            return
        self._type = TokenType.WORD
        self._str_val = lexeme.lower()