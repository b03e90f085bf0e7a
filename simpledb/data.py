"""Parsed forms of SQL statements and of the expressions inside them."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as _field
from enum import Enum
from typing import Union

from simpledb.constant import Constant


@dataclass(frozen=True)
class FieldExpression:
    """An expression naming a field."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ConstantExpression:
    """An expression holding a constant value."""

    value: Constant

    def __str__(self) -> str:
        return str(self.value)


Expression = Union[FieldExpression, ConstantExpression]


@dataclass(frozen=True)
class Term:
    """An equality comparison between two expressions."""

    lhs: Expression
    rhs: Expression

    def __str__(self) -> str:
        return f"{self.lhs}={self.rhs}"


@dataclass
class Predicate:
    """A conjunction of terms; an empty predicate is always true."""

    terms: list[Term] = _field(default_factory=list)

    def conjoin_with(self, other: Predicate) -> None:
        """Add the terms of ``other`` to this predicate."""
        self.terms.extend(other.terms)

    def __str__(self) -> str:
        return " and ".join(str(term) for term in self.terms)


class FieldType(Enum):
    """Type of a table field."""

    INTEGER = "int"
    VARCHAR = "varchar"


@dataclass(frozen=True)
class FieldDef:
    """A field declared in a create table statement."""

    name: str
    type: FieldType
    length: int = 0


@dataclass
class QueryData:
    """A select statement."""

    fields: list[str]
    tables: list[str]
    pred: Predicate = _field(default_factory=Predicate)

    def __str__(self) -> str:
        result = f"select {', '.join(self.fields)} from {', '.join(self.tables)}"
        pred = str(self.pred)
        return f"{result} where {pred}" if pred else result


@dataclass
class InsertData:
    """An insert statement."""

    table: str
    fields: list[str]
    values: list[Constant]

    def __str__(self) -> str:
        fields = ", ".join(self.fields)
        values = ", ".join(str(v) for v in self.values)
        return f"insert into {self.table}({fields}) values({values})"


@dataclass
class ModifyData:
    """An update statement."""

    table: str
    field: str
    expr: Expression
    pred: Predicate = _field(default_factory=Predicate)

    def __str__(self) -> str:
        result = f"update {self.table} set {self.field} = {self.expr}"
        pred = str(self.pred)
        return f"{result} where {pred}" if pred else result


@dataclass
class DeleteData:
    """A delete statement."""

    table: str
    pred: Predicate = _field(default_factory=Predicate)

    def __str__(self) -> str:
        return f"delete from {self.table} where {self.pred}"


@dataclass
class CreateTableData:
    """A create table statement."""

    table: str
    fields: list[FieldDef]

    def __str__(self) -> str:
        defs = []
        for fdef in self.fields:
            if fdef.type is FieldType.INTEGER:
                defs.append(f"{fdef.name} int")
            else:
                defs.append(f"{fdef.name} varchar({fdef.length})")
        return f"create table {self.table}({', '.join(defs)})"


@dataclass
class CreateViewData:
    """A create view statement."""

    view_name: str
    query: QueryData

    def view_def(self) -> str:
        """The text of the view's defining query."""
        return str(self.query)

    def __str__(self) -> str:
        return f"create view {self.view_name} as {self.view_def()}"


@dataclass(frozen=True)
class CreateIndexData:
    """A create index statement."""

    index: str
    table: str
    field: str

    def __str__(self) -> str:
        return f"create index {self.index} on {self.table}({self.field})"