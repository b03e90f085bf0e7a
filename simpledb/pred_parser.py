"""Recogniser for predicates of the form ``expr = expr [and ...]``."""

from __future__ import annotations

from simpledb.lexer import BadSyntaxError, Lexer


class PredParser:
    """Checks the syntax of a predicate without building anything from it."""

    def __init__(self, text: str) -> None:
        self._lexer = Lexer(text)

    def field(self) -> str:
        """Parse and return a field name."""
        try:
            return self._lexer.eat_id()
        except BadSyntaxError as exc:
            raise BadSyntaxError(f"expected field name: {exc}") from exc

    def constant(self) -> int | str:
        """Parse an integer or string constant and return its value."""
        if self._lexer.match_string_constant():
            return self._lexer.eat_string_constant()
        try:
            return self._lexer.eat_int_constant()
        except BadSyntaxError as exc:
            raise BadSyntaxError(f"expected integer constant: {exc}") from exc

    def expression(self) -> None:
        """Parse a field name or a constant."""
        if self._lexer.match_id():
            self.field()
        else:
            self.constant()

    def term(self) -> None:
        """Parse ``expression = expression``."""
        try:
            self.expression()
        except BadSyntaxError as exc:
            raise BadSyntaxError(f"invalid term: {exc}") from exc
        try:
            self._lexer.eat_delim("=")
        except BadSyntaxError as exc:
            raise BadSyntaxError(f"expected '=' delimiter: {exc}") from exc
        try:
            self.expression()
        except BadSyntaxError as exc:
            raise BadSyntaxError(f"invalid term after '=': {exc}") from exc

    def predicate(self) -> int:
        """Parse terms joined by ``and``; return the number of terms."""
        self.term()
        count = 1
        while self._lexer.match_keyword("and"):
            self._lexer.eat_keyword("and")
            count += self.predicate()
        return count