import pytest

from mallet.errors import MalletArityError
from mallet.evaluation.quasiquote import quasiquote_expand
from mallet.printer import pr_str
from mallet.reader.parser import parse
from mallet.types.symbol import Symbol
from mallet.types.vector import Vector


# ------------------------------------------------------------
# quote
# ------------------------------------------------------------

def test_quote_returns_form_unevaluated(interp):
    assert interp.eval("(quote (+ 1 2))") == [Symbol("+"), 1, 2]
    assert interp.eval("'sym") == Symbol("sym")
    assert interp.eval("'[a b]") == Vector([Symbol("a"), Symbol("b")])


def test_quote_arity(interp):
    with pytest.raises(MalletArityError):
        interp.eval("(quote a b)")


# ------------------------------------------------------------
# quasiquote evaluation
# ------------------------------------------------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("`(1 ~(+ 1 1) ~@(list 3 4))", "(1 2 3 4)"),
        ("`(a b)", "(a b)"),
        ("`a", "a"),
        ("`7", "7"),
        ('`"s"', '"s"'),
        ("`:k", ":k"),
        ("`nil", "nil"),
        ("`()", "()"),
        ("`(~@(list))", "()"),
        ("`(1 (2 ~(+ 1 2)))", "(1 (2 3))"),
        ("`[1 ~(+ 1 1)]", "[1 2]"),
        ("`[~@(list 1 2) 3]", "[1 2 3]"),
        ("`(0 ~@[1 2])", "(0 1 2)"),
        ("`~(+ 2 2)", "4"),
        ('`{"a" b}', '{"a" b}'),
        ("`(unquote 5)", "5"),
    ]
)
def test_quasiquote(interp, source, expected):
    assert interp.rep(source) == expected


def test_quasiquote_with_bindings(interp):
    interp.eval("(def! xs (list 2 3))")
    interp.eval("(def! y 9)")
    assert interp.rep("`(1 ~@xs ~y xs)") == "(1 2 3 9 xs)"


def test_nested_quote_inside_quasiquote(interp):
    interp.eval("(def! y 1)")
    assert interp.rep("`(a '~y)") == "(a (quote 1))"


def test_quasiquote_result_is_a_list(interp):
    assert interp.eval("(list? `(1 2))") is True
    assert interp.eval("(vector? `[1 2])") is True


# ------------------------------------------------------------
# quasiquoteexpand and the pure rewrite
# ------------------------------------------------------------

def test_quasiquoteexpand_shows_rewrite(interp):
    assert interp.rep("(quasiquoteexpand (1 ~x ~@ys))") == (
        "(cons 1 (cons x (concat ys ())))"
    )
    assert interp.rep("(quasiquoteexpand [a])") == "(vec (cons (quote a) ()))"
    assert interp.rep("(quasiquoteexpand sym)") == "(quote sym)"
    assert interp.rep("(quasiquoteexpand 5)") == "5"


@pytest.mark.parametrize(
    "template, expected",
    [
        ("(a)", "(cons (quote a) ())"),
        ("(~a)", "(cons a ())"),
        ("(~@a)", "(concat a ())"),
        ("((b))", "(cons (cons (quote b) ()) ())"),
        ("~a", "a"),
        ("{:k 1}", "(quote {:k 1})"),
        (":k", ":k"),
    ]
)
def test_quasiquote_expand(template, expected):
    assert pr_str(quasiquote_expand(parse(template))) == expected


def test_unquote_takes_one_argument():
    with pytest.raises(MalletArityError):
        quasiquote_expand(parse("(1 (unquote a b))"))
    with pytest.raises(MalletArityError):
        quasiquote_expand(parse("(1 (splice-unquote))"))
