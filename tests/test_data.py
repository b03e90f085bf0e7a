from simpledb.constant import Constant, Kind
from simpledb.data import (
    ConstantExpression,
    CreateIndexData,
    CreateTableData,
    CreateViewData,
    DeleteData,
    FieldDef,
    FieldExpression,
    FieldType,
    InsertData,
    ModifyData,
    Predicate,
    QueryData,
    Term,
)


def _int(value):
    return Constant(Kind.INT, value)


def _foo_is_one():
    return Predicate([Term(FieldExpression("foo"), ConstantExpression(_int(1)))])


def test_query_with_predicate():
    data = QueryData(["foo", "bar"], ["tests"], _foo_is_one())
    assert str(data) == "select foo, bar from tests where foo=1"


def test_query_without_predicate_omits_where():
    data = QueryData(["foo"], ["tests"])
    assert "where" not in str(data)
    assert str(data).startswith("select foo from tests")


def test_insert():
    data = InsertData("tests", ["foo", "bar"], [_int(1), _int(2)])
    assert str(data) == "insert into tests(foo, bar) values(1, 2)"


def test_delete():
    assert str(DeleteData("tests", _foo_is_one())) == "delete from tests where foo=1"


def test_delete_without_predicate_keeps_where():
    assert str(DeleteData("tests")).endswith(" where ")


def test_update():
    data = ModifyData("tests", "a", ConstantExpression(_int(1)))
    assert str(data) == "update tests set a = 1"


def test_create_table():
    data = CreateTableData(
        "tests",
        [FieldDef("foo", FieldType.INTEGER), FieldDef("bar", FieldType.VARCHAR, 255)],
    )
    assert str(data) == "create table tests(foo int, bar varchar(255))"


def test_create_view():
    data = CreateViewData("tests", QueryData(["*"], ["tests"]))
    assert data.view_def() == str(data.query)
    assert str(data) == "create view tests as select * from tests"


def test_create_index():
    assert str(CreateIndexData("idx", "tests", "foo")) == "create index idx on tests(foo)"


def test_conjoin_with_appends_terms():
    pred = _foo_is_one()
    other = Predicate([Term(FieldExpression("bar"), FieldExpression("baz"))])
    pred.conjoin_with(other)
    assert len(pred.terms) == 2
    assert pred.terms[1] is other.terms[0]
    assert str(pred).split(" and ") == [str(t) for t in pred.terms]


def test_empty_predicate_renders_empty():
    assert str(Predicate()) == ""


def test_string_constant_expression_has_no_quotes():
    expr = ConstantExpression(Constant(Kind.STR, "joe"))
    assert str(expr) == "joe"