"""Special form: defmacro!.

Binds a macro: the value expression must evaluate to a function, and a
macro-flagged copy of it is stored so the original function is unaffected.
"""

from __future__ import annotations

from mallet import EvaluatorFn, SExpression, LispValue
from mallet.errors import MalletArityError, MalletInvalidVariableName, MalletTypeError
from mallet.printer import pr_str
from mallet.types.environment import Environment
from mallet.types.lambda_fn import Lambda
from mallet.types.meta import strip_meta
from mallet.types.symbol import Symbol


def defmacro_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(defmacro! name (fn* params body))"""
    if len(tail) != 2:
        raise MalletArityError("defmacro! requires a name and a function")

    macro_name, val_expr = tail
    if not isinstance(macro_name, Symbol):
        raise MalletInvalidVariableName(f"Macro name must be a Symbol, got {macro_name}")

    fn = strip_meta(evaluate_fn(val_expr, env))
    if not isinstance(fn, Lambda):
        raise MalletTypeError(f"defmacro! needs a function, got {pr_str(fn)}")

    macro = fn.as_macro()
    env.define(macro_name, macro)
    return macro
