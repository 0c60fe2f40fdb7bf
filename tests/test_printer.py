import pytest

from mallet.printer import escape_string, join, pr_str
from mallet.reader.parser import parse
from mallet.types.atom import Atom
from mallet.types.builtin import Builtin
from mallet.types.environment import Environment
from mallet.types.lambda_fn import Lambda
from mallet.types.meta import WithMeta
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol
from mallet.types.vector import Vector


@pytest.mark.parametrize(
    "value, expected",
    [
        (Nil, "nil"),
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (-42, "-42"),
        (Symbol("abc"), "abc"),
        (Keyword("kw"), ":kw"),
        ("hi", '"hi"'),
        ('a"b', '"a\\"b"'),
        ("a\nb", '"a\\nb"'),
        ("a\\b", '"a\\\\b"'),
        ([], "()"),
        ([1, [2, 3]], "(1 (2 3))"),
        (Vector([1, Vector([])]), "[1 []]"),
        ({"a": 1}, '{"a" 1}'),
        ({Keyword("k"): [Symbol("x")]}, "{:k (x)}"),
        (Atom(5), "(atom 5)"),
        (WithMeta(Vector([1]), {"m": 1}), "[1]"),
    ]
)
def test_readable_printing(value, expected):
    assert pr_str(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("hi", "hi"),
        ("a\nb", "a\nb"),
        (["x", "y"], '(x y)'),
        (Atom("s"), "(atom s)"),
    ]
)
def test_raw_printing(value, expected):
    assert pr_str(value, readable=False) == expected


def test_functions_print_opaquely():
    env = Environment()
    fn = Lambda([Symbol("x")], Symbol("x"), env)
    assert pr_str(fn) == "#<function>"
    assert pr_str(fn.as_macro()) == "#<macro>"
    assert pr_str(Builtin("+", lambda env, args: 0)) == "#<builtin +>"


def test_escape_string():
    assert escape_string('say "hi"\n') == '"say \\"hi\\"\\n"'


def test_join():
    assert join([1, "a", Keyword("b")], " ", readable=True) == '1 "a" :b'
    assert join([1, "a", Keyword("b")], "", readable=False) == "1a:b"


@pytest.mark.parametrize(
    "source",
    [
        "(1 2 (3 4) [5 6])",
        '{"a" [1 2] :b nil}',
        '"line\\nbreak \\"quoted\\" back\\\\slash"',
        "(quote (a b))",
        "[]",
        "()",
    ]
)
def test_readable_output_reads_back(source):
    value = parse(source)
    assert parse(pr_str(value)) == value
    assert pr_str(parse(pr_str(value))) == pr_str(value)
