import pytest
from hypothesis import given, strategies as st

from kappa.errors import KappaSyntaxError
from kappa.printer import to_string
from kappa.reader.parser import lex, read, TokenStream
from kappa.types.nil import Nil
from kappa.types.pair import Pair
from kappa.types.symbol import Symbol


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("'a", [("quote", "'"), ("symbol", "a")]),
        ("(a b c)", [("lparen", "("), ("symbol", "a"), ("symbol", "b"), ("symbol", "c"), ("rparen", ")")]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("`y", [("quote", "`"), ("symbol", "y")]),
        (",z", [("unquote", ","), ("symbol", "z")]),
        (",@w", [("unquote", ",@"), ("symbol", "w")]),
        ("(a . b)", [("lparen", "("), ("symbol", "a"), ("symbol", "."), ("symbol", "b"), ("rparen", ")")]),
        ("-12 eq?", [("symbol", "-12"), ("symbol", "eq?")]),
        ("", []),
        ("; only a comment", []),
    ]
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


def test_lexer_rejects_string_quote():
    with pytest.raises(KappaSyntaxError):
        list(lex('"hello"'))


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", "NIL"),
        ("NIL", "NIL"),
        ("()", "NIL"),
        ("123", "123"),
        ("-45", "-45"),
        ("+7", "7"),
        ("foo", "FOO"),
        ("1+", "1+"),
        ("(a b c)", "(A B C)"),
        ("(a . b)", "(A . B)"),
        ("(a b . c)", "(A B . C)"),
        ("(a . (b c))", "(A B C)"),
        ("(a (b (c)) ())", "(A (B (C)) NIL)"),
        ("'a", "(QUOTE A)"),
        ("`(a ,b ,@c)", "(QUASIQUOTE (A (UNQUOTE B) (UNQUOTE-SPLICING C)))"),
        ("'()", "(QUOTE NIL)"),
        ("9223372036854775807", "9223372036854775807"),
        ("-9223372036854775808", "-9223372036854775808"),
    ]
)
def test_parse_single_expression(symbols, source, expected):
    [expr] = read(source, symbols)
    assert to_string(expr) == expected


def test_symbols_are_interned_by_the_reader(symbols):
    a, b = read("foo FOO", symbols)
    assert isinstance(a, Symbol)
    assert a is b is symbols.intern("foo")


def test_nil_reads_as_the_empty_list(symbols):
    assert read("nil", symbols) == [Nil]
    assert "NIL" not in symbols


def test_read_multiple_top_level_forms(symbols):
    exprs = read("(define x 1) x ; trailing\n 2", symbols)
    assert [to_string(e) for e in exprs] == ["(DEFINE X 1)", "X", "2"]


def test_stream_returns_none_at_end(symbols):
    stream = TokenStream(lex("1"), symbols)
    assert stream.parse_expr() == 1
    assert stream.parse_expr() is None


def test_dotted_tail_is_stored_in_last_cdr(symbols):
    [expr] = read("(1 2 . 3)", symbols)
    assert isinstance(expr, Pair)
    assert expr.cdr.cdr == 3


@pytest.mark.parametrize(
    "source",
    [
        "(a b",
        ")",
        "(a . b c)",
        "(. a)",
        "(a .)",
        ".",
        "'",
        "(a ,)",
        "9223372036854775808",
        "-9223372036854775809",
        '(a "b")',
    ]
)
def test_syntax_errors(symbols, source):
    with pytest.raises(KappaSyntaxError):
        read(source, symbols)


atoms = st.one_of(
    st.integers(min_value=-(1 << 63), max_value=(1 << 63) - 1).map(str),
    st.from_regex(r"[a-z][a-z0-9\-?!*]{0,6}", fullmatch=True).filter(lambda s: s != "nil"),
)
sexprs = st.recursive(atoms, lambda children: st.lists(children, max_size=4).map(lambda xs: "(" + " ".join(xs) + ")"), max_leaves=20)


@given(sexprs)
def test_printed_form_reads_back_the_same(source):
    from kappa.types.symbol import SymbolTable
    table = SymbolTable()
    [expr] = read(source, table)
    printed = to_string(expr)
    [again] = read(printed, table)
    assert to_string(again) == printed


@given(st.text(max_size=40))
def test_reader_only_raises_syntax_errors(source):
    from kappa.types.symbol import SymbolTable
    try:
        read(source, SymbolTable())
    except KappaSyntaxError:
        pass


def test_deeply_nested_lists_read_without_recursion(symbols):
    depth = 5000
    [expr] = read("(" * depth + "x" + ")" * depth, symbols)
    for _ in range(depth - 1):
        assert expr.cdr is Nil
        expr = expr.car
    assert expr.car is symbols.intern("x")


def test_deeply_nested_quotes_read_without_recursion(symbols):
    [expr] = read("'" * 5000 + "a", symbols)
    quote = symbols.intern("quote")
    for _ in range(5000):
        assert expr.car is quote
        expr = expr.cdr.car
    assert expr is symbols.intern("a")


def test_nested_dotted_tails(symbols):
    [expr] = read("((a . b) . ((c) . d))", symbols)
    assert to_string(expr) == "((A . B) (C) . D)"
