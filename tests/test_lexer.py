import pytest

from simpledb.lexer import BadSyntaxError, Lexer, TokenType


def test_field_equals_int():
    lex = Lexer("c = 1")
    assert lex.match_id()
    left = lex.eat_id()
    lex.eat_delim("=")
    right = lex.eat_int_constant()
    assert left == "c"
    assert right == 1


def test_int_equals_field():
    lex = Lexer("1 = c")
    left = lex.eat_int_constant()
    lex.eat_delim("=")
    right = lex.eat_id()
    assert left == 1
    assert right == "c"


def test_longer_identifier():
    lex = Lexer("foo = 1")
    assert lex.match_id()
    left = lex.eat_id()
    lex.eat_delim("=")
    right = lex.eat_int_constant()
    assert left == "foo"
    assert right == 1


def test_select_statement():
    lex = Lexer("select a from foo")
    lex.eat_keyword("select")
    assert lex.eat_id() == "a"
    lex.eat_keyword("from")
    assert lex.eat_id() == "foo"
    assert lex.token_type is TokenType.EOF


def test_keyword_is_not_identifier():
    lex = Lexer("select")
    assert not lex.match_id()
    assert lex.match_keyword("select")


def test_words_are_lower_cased():
    lex = Lexer("SELECT Name")
    lex.eat_keyword("select")
    assert lex.eat_id() == "name"


def test_string_constant_keeps_case():
    lex = Lexer("'Hello'")
    assert lex.match_string_constant()
    assert lex.eat_string_constant() == "Hello"


def test_signed_integer():
    assert Lexer("-5").eat_int_constant() == -5


def test_delimiters_split_without_spaces():
    lex = Lexer("a=b")
    assert lex.eat_id() == "a"
    lex.eat_delim("=")
    assert lex.eat_id() == "b"


def test_delimiter_is_not_identifier():
    lex = Lexer("( a )")
    assert not lex.match_id()
    lex.eat_delim("(")
    assert lex.eat_id() == "a"
    assert lex.match_delim(")")


def test_eat_id_on_number_raises():
    with pytest.raises(BadSyntaxError):
        Lexer("42").eat_id()


def test_eat_wrong_delim_raises():
    with pytest.raises(BadSyntaxError):
        Lexer("(").eat_delim(",")


def test_eat_past_end_raises():
    lex = Lexer("a")
    lex.eat_id()
    assert not lex.match_id()
    with pytest.raises(BadSyntaxError):
        lex.eat_id()