"""Core evaluator and trampoline for the Mallet interpreter.

Implements special-form dispatch, macro expansion and tail-call aware
application via a trampoline over TailCall objects. Tail positions (function
bodies, the branches of if, the last form of do and let*, catch* handlers,
and macro expansions) never grow the Python stack.
"""

from __future__ import annotations

from mallet import SExpression, LispValue
from mallet.errors import MalletInvalidFunctionName
from mallet.evaluation.special_forms import SPECIAL_FORMS
from mallet.printer import pr_str
from mallet.types.builtin import Builtin
from mallet.types.environment import Environment
from mallet.types.lambda_fn import Lambda
from mallet.types.meta import strip_meta
from mallet.types.symbol import Symbol
from mallet.types.tail_call import TailCall
from mallet.types.vector import Vector


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Trampoline evaluator: evaluate `expr` in `env` to a value.

    Each step either finishes with a value or hands back a TailCall naming the
    next (expression, environment) pair. A TailCall flagged with a macro call
    site means "this is a macro body": once that body has produced its
    expansion, the expansion itself is evaluated back in the call-site
    environment. Pending call sites are kept on an explicit stack so nested
    expansions unwind in order.
    """
    macro_sites: list[Environment] = []
    while True:
        result = evaluate0(expr, env)
        if isinstance(result, TailCall):
            if result.macro_site is not None:
                macro_sites.append(result.macro_site)
            expr, env = result.expr, result.env
            continue
        if macro_sites:
            expr, env = result, macro_sites.pop()
            continue
        return result


def evaluate0(expr: SExpression, env: Environment) -> LispValue | TailCall:
    """
    Core evaluator: a single evaluation step.
    Returns either a value or a TailCall.
    """
    match expr:
        case Symbol():
            return env.lookup(expr)

        case Vector():
            return Vector(evaluate(e, env) for e in expr)

        case dict():
            return {k: evaluate(v, env) for k, v in expr.items()}

        case [Symbol() as head, *tail_args] if head in SPECIAL_FORMS:
            # --- Special forms see their arguments unevaluated ---
            return SPECIAL_FORMS[head](tail_args, env, evaluate)

        case [head, *tail_args] if isinstance(expr, list):
            fn = strip_meta(evaluate(head, env))

            if isinstance(fn, Lambda):
                if fn.is_macro:
                    # Macro arguments are passed as code, not evaluated
                    return TailCall(fn.body, fn.extend_env(tail_args), macro_site=env)
                args = [evaluate(arg, env) for arg in tail_args]
                return TailCall(fn.body, fn.extend_env(args))

            if isinstance(fn, Builtin):
                args = [evaluate(arg, env) for arg in tail_args]
                return fn(env, args)

            raise MalletInvalidFunctionName(f"{pr_str(head)} is not a function: {pr_str(fn)}")

    # --- Everything else (including the empty list) evaluates to itself ---
    return expr
