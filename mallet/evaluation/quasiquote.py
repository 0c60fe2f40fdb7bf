"""Quasiquote expansion.

Rewrites a quasiquote template into ordinary code built from cons, concat,
vec and quote, so that evaluating the result rebuilds the template with
unquoted parts evaluated and splice-unquoted parts spliced in:

    `(1 ~x ~@ys)  =>  (cons 1 (cons x (concat ys ())))

The rewrite is pure; it never evaluates anything.
"""

from __future__ import annotations

from mallet import SExpression
from mallet.errors import MalletArityError
from mallet.types.meta import strip_meta
from mallet.types.symbol import Symbol
from mallet.types.vector import Vector

UNQUOTE = Symbol("unquote")
SPLICE_UNQUOTE = Symbol("splice-unquote")
QUOTE = Symbol("quote")
CONS = Symbol("cons")
CONCAT = Symbol("concat")
VEC = Symbol("vec")


def _unquoted(form: SExpression, marker: Symbol) -> tuple[bool, SExpression]:
    """Return (True, arg) if `form` is `(marker arg)`."""
    form = strip_meta(form)
    if isinstance(form, (list, Vector)) and form and form[0] == marker:
        if len(form) != 2:
            raise MalletArityError(f"{marker} expects exactly 1 argument")
        return True, form[1]
    return False, None


def _expand_elements(elements) -> SExpression:
    acc: SExpression = []
    for elem in reversed(list(elements)):
        is_unquote, arg = _unquoted(elem, UNQUOTE)
        if is_unquote:
            acc = [CONS, arg, acc]
            continue
        is_splice, arg = _unquoted(elem, SPLICE_UNQUOTE)
        if is_splice:
            acc = [CONCAT, arg, acc]
            continue
        acc = [CONS, quasiquote_expand(elem), acc]
    return acc


def quasiquote_expand(template: SExpression) -> SExpression:
    """Rewrite `template` into an expression that constructs it."""
    form = strip_meta(template)
    if isinstance(form, list):
        is_unquote, arg = _unquoted(form, UNQUOTE)
        if is_unquote:
            return arg
        return _expand_elements(form)
    if isinstance(form, Vector):
        return [VEC, _expand_elements(form)]
    if isinstance(form, (Symbol, dict)):
        return [QUOTE, template]
    # Numbers, strings, booleans, keywords and nil evaluate to themselves
    return template
