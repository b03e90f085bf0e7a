"""Typed values stored in the database."""

from __future__ import annotations

from enum import Enum


class Kind(str, Enum):
    """The type of a stored value."""

    INT = "int"
    STR = "string"


class Constant:
    """An integer or string value tagged with its kind."""

    __slots__ = ("_kind", "_value")

    def __init__(self, kind: Kind, value: int | str) -> None:
        kind = Kind(kind)
        if kind is Kind.INT and (not isinstance(value, int) or isinstance(value, bool)):
            raise TypeError("constant: value is not an integer")
        if kind is Kind.STR and not isinstance(value, str):
            raise TypeError("constant: value is not a string")
        self._kind = kind
        self._value = value

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def value(self) -> int | str:
        return self._value

    def as_int(self) -> int:
        if self._kind is not Kind.INT:
            raise TypeError("constant: value is not an integer")
        return self._value  # type: ignore[return-value]

    def as_string(self) -> str:
        if self._kind is not Kind.STR:
            raise TypeError("constant: value is not a string")
        return self._value  # type: ignore[return-value]

    def compare_to(self, other: Constant) -> int:
        """Return -1, 0 or 1; constants of different kinds compare as equal."""
        if self._kind is not other._kind or self._value == other._value:
            return 0
        return -1 if self._value < other._value else 1  # type: ignore[operator]

    def hash_code(self) -> int:
        """The integer value itself, or the length of a string."""
        if self._kind is Kind.INT:
            return self.as_int()
        return len(self.as_string())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constant):
            return NotImplemented
        return self._kind is other._kind and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._kind, self._value))

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Constant({self._kind.name}, {self._value!r})"