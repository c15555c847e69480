import pytest
from hypothesis import given, strategies as st

from lispy.errors import LispySyntaxError
from lispy.reader import NodeKind, lex, parse, read_source
from lispy.reader.parser import DOUBLE_RE, LONG_RE
from lispy.types import OK, Bool, Char, Double, Error, Long, QExpr, SExpr, String, Symbol
from lispy.types.value import LONG_MAX, LONG_MIN


@pytest.mark.parametrize(
    "source, expected",
    [
        ("a", [("symbol", "a", 1, 1)]),
        ("(+ 1 2.5)", [
            ("lparen", "(", 1, 1),
            ("symbol", "+", 1, 2),
            ("long", "1", 1, 4),
            ("double", "2.5", 1, 6),
            ("rparen", ")", 1, 9),
        ]),
        ("{x}", [("lbrace", "{", 1, 1), ("symbol", "x", 1, 2), ("rbrace", "}", 1, 3)]),
        ('"hello world"', [("string", '"hello world"', 1, 1)]),
        ("'c'", [("char", "'c'", 1, 1)]),
        ("'\\n'", [("char", "'\\n'", 1, 1)]),
        ("; comment\nb", [("comment", "; comment", 1, 1), ("symbol", "b", 2, 1)]),
        ("-", [("symbol", "-", 1, 1)]),
        ("-5", [("long", "-5", 1, 1)]),
        ("-0.25", [("double", "-0.25", 1, 1)]),
        ("12abc", [("symbol", "12abc", 1, 1)]),
        ("1.5.2", [("symbol", "1.5.2", 1, 1)]),
        ("^ & \\ <= !=", [
            ("symbol", "^", 1, 1),
            ("symbol", "&", 1, 3),
            ("symbol", "\\", 1, 5),
            ("symbol", "<=", 1, 7),
            ("symbol", "!=", 1, 10),
        ]),
    ],
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


@pytest.mark.parametrize(
    "source, reason",
    [
        ('"abc', "unterminated string literal"),
        ("'ab'", "malformed character literal"),
        ("[1]", "unexpected character '['"),
        ("(1 2", "unmatched '('"),
        ("{1 2", "unmatched '{'"),
        ("(1 2}", "expected ')' but found '}'"),
        ("{1 2)", "expected '}' but found ')'"),
        (")", "unexpected ')'"),
    ],
)
def test_malformed_input_raises(source, reason):
    with pytest.raises(LispySyntaxError) as excinfo:
        read_source(source)
    assert excinfo.value.reason == reason


def test_syntax_error_position():
    with pytest.raises(LispySyntaxError) as excinfo:
        read_source("(+ 1 2)\n  )", "demo.lspy")
    err = excinfo.value
    assert (err.filename, err.line, err.column) == ("demo.lspy", 2, 3)
    assert str(err) == "demo.lspy:2:3: error: unexpected ')'"


def test_parse_tree_shape():
    tree = parse("(a {b}) ; done")
    assert tree.kind is NodeKind.TOP
    sexpr, comment = tree.children
    assert sexpr.kind is NodeKind.SEXPR
    assert [c.kind for c in sexpr.children] == [NodeKind.SYMBOL, NodeKind.QEXPR]
    assert comment.kind is NodeKind.COMMENT


def test_read_atoms():
    forms = read_source("1 -2 3.5 x true false ok \"s\\t\" 'c' {1 (2)}")
    assert forms.cells == [
        Long(1),
        Long(-2),
        Double(3.5),
        Symbol("x"),
        Bool(True),
        Bool(False),
        OK,
        String("s\t"),
        Char("c"),
        QExpr([Long(1), SExpr([Long(2)])]),
    ]


def test_read_skips_comments():
    assert read_source("{1 ; one\n 2} ; trailing") == QExpr([QExpr([Long(1), Long(2)])])
    assert read_source("; nothing here") == QExpr()
    assert read_source("") == QExpr()


@pytest.mark.parametrize(
    "source, expected",
    [
        (str(LONG_MAX), Long(LONG_MAX)),
        (str(LONG_MIN), Long(LONG_MIN)),
        (str(LONG_MAX + 1), Error("invalid long")),
        (str(LONG_MIN - 1), Error("invalid long")),
        ("1" + "0" * 400 + ".0", Error("invalid double")),
        ("0." + "0" * 400 + "1", Error("invalid double")),
        ("0.000", Double(0.0)),
    ],
)
def test_numeric_literal_range(source, expected):
    assert read_source(source).cells == [expected]


# Strategies for every printable, readable variant
def _is_plain_symbol(text):
    return (
        not LONG_RE.fullmatch(text)
        and not DOUBLE_RE.fullmatch(text)
        and text not in ("ok", "true", "false")
    )


symbols = st.from_regex(r"[a-zA-Z0-9_+\-*/\\=<>!?&%|^]{1,8}", fullmatch=True).filter(_is_plain_symbol)

no_surrogates = st.characters(exclude_categories=("Cs",))

atoms = st.one_of(
    st.integers(min_value=LONG_MIN, max_value=LONG_MAX).map(Long),
    st.floats(allow_nan=False, allow_infinity=False).map(Double),
    st.booleans().map(Bool),
    st.just(OK),
    symbols.map(Symbol),
    st.text(alphabet=no_surrogates, max_size=12).map(String),
    no_surrogates.map(Char),
)

values = st.recursive(
    atoms,
    lambda children: st.one_of(
        st.lists(children, max_size=4).map(QExpr),
        st.lists(children, max_size=4).map(SExpr),
    ),
    max_leaves=12,
)


@given(values)
def test_printed_values_read_back_equal(value):
    assert read_source(str(value)).cells == [value]
