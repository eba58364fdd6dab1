import pytest
from hypothesis import given, strategies as st

from mehl.errors import MehlSyntaxError
from mehl.reader.forms import Name, TupleForm, MapForm, CodeForm, format_body
from mehl.reader.parser import lex, parse
from mehl.types.symbol import Symbol, UNIT


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("word", "a")]),
        ("(:a, 1)", [("lparen", "("), ("symbol", ":a"), ("comma", ","), ("word", "1"), ("rparen", ")")]),
        ("[. +]", [("lbracket", "["), ("word", "."), ("word", "+"), ("rbracket", "]")]),
        ("{:k v}", [("lbrace", "{"), ("symbol", ":k"), ("word", "v"), ("rbrace", "}")]),
        ('"hello"', [("string", '"hello"')]),
        ('"a \\" b"', [("string", '"a \\" b"')]),
        (": :x", [("symbol", ":"), ("symbol", ":x")]),
        ("# comment\n a b", [("word", "a"), ("word", "b")]),
        ("1 # trailing", [("word", "1")]),
        ("✨", [("word", "✨")]),
    ],
)
def test_lexer_basic(source, expected):
    tokens = [(tok.kind, tok.text) for tok in lex(source)]
    assert tokens == expected


def test_lexer_positions_are_one_based():
    tokens = list(lex("a\n  bc"))
    assert [(t.line, t.col) for t in tokens] == [(1, 1), (2, 3)]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("123", [123]),
        ("-45", [-45]),
        ('"hi"', ["hi"]),
        ('"tab\\tnew\\nquote\\"back\\\\"', ['tab\tnew\nquote"back\\']),
        (":foo", [Symbol("foo")]),
        (":", [UNIT]),
        ("foo", [Name("foo")]),
        ("pub-let", [Name("pub-let")]),
        ("1abc", [Name("1abc")]),
        (".", [Name(".")]),
        ("()", [TupleForm(())]),
        ("(1, 2 +)", [TupleForm(((1,), (2, Name("+"))))]),
        ("((1, 2), 3)", [TupleForm(((TupleForm(((1,), (2,))),), (3,)))]),
        ("{:a 1 :b x}", [MapForm(((Symbol("a"), 1), (Symbol("b"), Name("x"))))]),
        ("{}", [MapForm(())]),
        ("[. 1]", [CodeForm((Name("."), 1))]),
        ("[]", [CodeForm(())]),
        ("1 # comment\n2", [1, 2]),
        ("", []),
    ],
)
def test_parse(source, expected):
    assert parse(source) == expected


def test_names_carry_positions():
    (tup, name) = parse("(1, 2)\n  add")
    assert (tup.line, tup.col) == (1, 1)
    assert (name.line, name.col) == (2, 3)


@pytest.mark.parametrize(
    "source",
    [
        "(1, 2",
        "[1",
        "{:a 1",
        "{:a}",
        "{1 2}",
        "(1,,2)",
        "(, 1)",
        "(1,)",
        ")",
        "]",
        "}",
        '"abc',
        ",",
        "(1 ]",
    ],
)
def test_parse_errors(source):
    with pytest.raises(MehlSyntaxError):
        parse(source)


def test_syntax_error_location():
    with pytest.raises(MehlSyntaxError) as info:
        parse("1\n  )")
    assert (info.value.line, info.value.col) == (2, 3)
    assert "2:3" in str(info.value)


def test_unmatched_opener_is_reported_at_the_opener():
    with pytest.raises(MehlSyntaxError) as info:
        parse("1 2\n [3 4")
    assert (info.value.line, info.value.col) == (2, 2)
    assert info.value.message == "Unmatched '['"


# --- Property: formatting a form and reading it back gives the same form ---

names = st.from_regex(r"[a-z][a-z0-9\-?!]{0,6}", fullmatch=True)
symbols = st.from_regex(r"[a-z_?]?[a-z0-9\-]{0,6}", fullmatch=True).map(Symbol)

atoms = st.one_of(
    st.integers(min_value=-10**6, max_value=10**6),
    st.text(max_size=8),
    symbols,
    names.map(Name),
)


def _forms(children):
    bodies = st.lists(children, min_size=1, max_size=3).map(tuple)
    return st.one_of(
        st.lists(bodies, max_size=3).map(lambda items: TupleForm(tuple(items))),
        st.lists(st.tuples(symbols, children), max_size=3).map(lambda entries: MapForm(tuple(entries))),
        st.lists(children, max_size=3).map(lambda body: CodeForm(tuple(body))),
    )


forms = st.recursive(atoms, _forms, max_leaves=12)


@given(st.lists(forms, max_size=4))
def test_format_then_parse_preserves_forms(body):
    assert parse(format_body(body)) == body
