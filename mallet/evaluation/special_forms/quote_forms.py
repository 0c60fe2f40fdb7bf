from mallet import SExpression, LispValue, EvaluatorFn
from mallet.errors import MalletArityError
from mallet.evaluation.quasiquote import quasiquote_expand
from mallet.types.environment import Environment
from mallet.types.tail_call import TailCall


def quote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> LispValue:
    if len(tail) != 1:
        raise MalletArityError("quote expects exactly 1 argument")
    return tail[0]


def quasiquote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> TailCall:
    if len(tail) != 1:
        raise MalletArityError("quasiquote expects exactly 1 argument")
    # The rewritten template is ordinary code; evaluate it in tail position.
    return TailCall(quasiquote_expand(tail[0]), env)


def quasiquote_expand_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn
) -> SExpression:
    """(quasiquoteexpand template) returns the rewrite without evaluating it."""
    if len(tail) != 1:
        raise MalletArityError("quasiquoteexpand expects exactly 1 argument")
    return quasiquote_expand(tail[0])
