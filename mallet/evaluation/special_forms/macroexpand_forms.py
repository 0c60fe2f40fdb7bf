"""Special form that exposes the macro expander to Lisp code.

macroexpand: expand the form while its head names a macro, and return the
             expansion as an S-expression without evaluating it.

    (defmacro! unless (fn* (c a b) `(if ~c ~b ~a)))
    (macroexpand (unless x 1 2))  ; => (if x 2 1)
"""

from __future__ import annotations

import logging

from mallet import SExpression, EvaluatorFn
from mallet.errors import MalletArityError
from mallet.printer import pr_str
from mallet.types.environment import Environment
from mallet.types.lambda_fn import Lambda
from mallet.types.meta import strip_meta
from mallet.types.symbol import Symbol

logger = logging.getLogger(__name__)


def macro_for(form: SExpression, env: Environment) -> Lambda | None:
    """Return the macro named at the head of `form`, if there is one."""
    if not isinstance(form, list) or not form or not isinstance(form[0], Symbol):
        return None
    value = strip_meta(env.get(form[0]))
    if isinstance(value, Lambda) and value.is_macro:
        return value
    return None


def macroexpand_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> SExpression:
    """(macroexpand form): fully expand the head of a form and return it.

    The argument is not evaluated.
    """
    if len(tail) != 1:
        raise MalletArityError("macroexpand expects exactly 1 argument")
    form = tail[0]
    while True:
        macro = macro_for(form, env)
        if macro is None:
            return form
        logger.debug("macroexpand step: %s", pr_str(form))
        form = evaluate_fn(macro.body, macro.extend_env(list(form[1:])))
