"""Recursive-descent parser that turns SQL text into statement data."""

from __future__ import annotations

from typing import Union

from simpledb.constant import Constant, Kind
from simpledb.data import (
    ConstantExpression,
    CreateIndexData,
    CreateTableData,
    CreateViewData,
    DeleteData,
    Expression,
    FieldDef,
    FieldExpression,
    FieldType,
    InsertData,
    ModifyData,
    Predicate,
    QueryData,
    Term,
)
from simpledb.lexer import BadSyntaxError, Lexer

UpdateData = Union[
    InsertData, DeleteData, ModifyData, CreateTableData, CreateViewData, CreateIndexData
]


class Parser:
    """Parses one SQL statement.

    Each public method consumes the construct it is named after, starting at
    the lexer's current token, and raises BadSyntaxError when the input does
    not match.
    """

    def __init__(self, text: str) -> None:
        self._lexer = Lexer(text)

    # Predicates, terms and expressions

    def field(self) -> str:
        """Parse and return a field name."""
        return self._lexer.eat_id()

    def constant(self) -> Constant:
        """Parse a string or integer constant."""
        if self._lexer.match_string_constant():
            return Constant(Kind.STR, self._lexer.eat_string_constant())
        if self._lexer.match_int_constant():
            return Constant(Kind.INT, self._lexer.eat_int_constant())
        raise BadSyntaxError("parse: invalid constant")

    def expression(self) -> Expression:
        """Parse a field name or a constant."""
        if self._lexer.match_id():
            return FieldExpression(self.field())
        return ConstantExpression(self.constant())

    def term(self) -> Term:
        """Parse ``expression = expression``."""
        lhs = self.expression()
        try:
            self._lexer.eat_delim("=")
        except BadSyntaxError as exc:
            raise BadSyntaxError(f"expected '=' in term: {exc}") from exc
        rhs = self.expression()
        return Term(lhs, rhs)

    def predicate(self) -> Predicate:
        """Parse one or more terms joined by ``and``."""
        pred = Predicate([self.term()])
        while self._lexer.match_keyword("and"):
            self._lexer.eat_keyword("and")
            pred.conjoin_with(Predicate([self.term()]))
        return pred

    def _optional_where(self) -> Predicate:
        if self._lexer.match_keyword("where"):
            self._lexer.eat_keyword("where")
            return self.predicate()
        return Predicate()

    def _comma_list(self, item):
        items = [item()]
        while self._lexer.match_delim(","):
            self._lexer.eat_delim(",")
            items.append(item())
        return items

    # Queries

    def query(self) -> QueryData:
        """Parse ``select fields from tables [where predicate]``."""
        self._lexer.eat_keyword("select")
        fields = self._comma_list(self.field)
        self._lexer.eat_keyword("from")
        tables = self._comma_list(self._lexer.eat_id)
        pred = self._optional_where()
        return QueryData(fields, tables, pred)

    # Update commands

    def update_cmd(self) -> UpdateData:
        """Parse any insert, delete, update or create statement."""
        if self._lexer.match_keyword("insert"):
            return self.insert()
        if self._lexer.match_keyword("delete"):
            return self.delete()
        if self._lexer.match_keyword("update"):
            return self.modify()
        if self._lexer.match_keyword("create"):
            return self._create()
        raise BadSyntaxError("parse: invalid command")

    def _create(self) -> CreateTableData | CreateViewData | CreateIndexData:
        self._lexer.eat_keyword("create")
        if self._lexer.match_keyword("table"):
            return self.create_table()
        if self._lexer.match_keyword("view"):
            return self.create_view()
        if self._lexer.match_keyword("index"):
            return self.create_index()
        raise BadSyntaxError("parse: invalid command")

    def _skip_create(self) -> None:
        if self._lexer.match_keyword("create"):
            self._lexer.eat_keyword("create")

    def delete(self) -> DeleteData:
        """Parse ``delete from table [where predicate]``."""
        self._lexer.eat_keyword("delete")
        self._lexer.eat_keyword("from")
        table = self._lexer.eat_id()
        return DeleteData(table, self._optional_where())

    def insert(self) -> InsertData:
        """Parse ``insert into table(fields) values(constants)``."""
        self._lexer.eat_keyword("insert")
        self._lexer.eat_keyword("into")
        table = self._lexer.eat_id()
        self._lexer.eat_delim("(")
        fields = self.field_list()
        self._lexer.eat_delim(")")
        self._lexer.eat_keyword("values")
        self._lexer.eat_delim("(")
        values = self._comma_list(self.constant)
        self._lexer.eat_delim(")")
        return InsertData(table, fields, values)

    def field_list(self) -> list[str]:
        """Parse a comma-separated list of field names."""
        return self._comma_list(self.field)

    def modify(self) -> ModifyData:
        """Parse ``update table set field = expression [where predicate]``."""
        self._lexer.eat_keyword("update")
        table = self._lexer.eat_id()
        self._lexer.eat_keyword("set")
        field = self.field()
        self._lexer.eat_delim("=")
        expr = self.expression()
        return ModifyData(table, field, expr, self._optional_where())

    def create_table(self) -> CreateTableData:
        """Parse ``[create] table name(field definitions)``."""
        self._skip_create()
        self._lexer.eat_keyword("table")
        table = self._lexer.eat_id()
        self._lexer.eat_delim("(")
        fields = self._field_defs()
        self._lexer.eat_delim(")")
        return CreateTableData(table, fields)

    def _field_defs(self) -> list[FieldDef]:
        defs = self._field_def()
        while self._lexer.match_delim(","):
            self._lexer.eat_delim(",")
            defs.extend(self._field_def())
        return defs

    def _field_def(self) -> list[FieldDef]:
        name = self.field()
        if self._lexer.match_keyword("int"):
            self._lexer.eat_keyword("int")
            return [FieldDef(name, FieldType.INTEGER)]
        if self._lexer.match_keyword("varchar"):
            self._lexer.eat_keyword("varchar")
            self._lexer.eat_delim("(")
            length = self._lexer.eat_int_constant()
            self._lexer.eat_delim(")")
            return [FieldDef(name, FieldType.VARCHAR, length)]
        # A field without a recognised type declares nothing.
        return []

    def create_view(self) -> CreateViewData:
        """Parse ``[create] view name as query``."""
        self._skip_create()
        self._lexer.eat_keyword("view")
        name = self._lexer.eat_id()
        self._lexer.eat_keyword("as")
        return CreateViewData(name, self.query())

    def create_index(self) -> CreateIndexData:
        """Parse ``[create] index name on table(field)``."""
        self._skip_create()
        self._lexer.eat_keyword("index")
        index = self._lexer.eat_id()
        self._lexer.eat_keyword("on")
        table = self._lexer.eat_id()
        self._lexer.eat_delim("(")
        field = self.field()
        self._lexer.eat_delim(")")
        return CreateIndexData(index, table, field)