# Exception handling
# Usage:
#   (try* (throw "boom")
#     (catch* e (str "caught: " e)))   ; => "caught: boom"
#
# Only values raised by (throw ...) are caught; evaluation errors such as an
# unbound symbol or a bad argument type keep propagating.

import logging

from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import MalletArityError, MalletException, MalletInvalidCatchBlock
from mallet.printer import pr_str
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol
from mallet.types.tail_call import TailCall

logger = logging.getLogger(__name__)

CATCH = Symbol("catch*")


def _catch_clause(clause: SExpression) -> tuple[Symbol, SExpression]:
    """Validate `(catch* name handler)` and return (name, handler)."""
    if (
        not isinstance(clause, list)
        or len(clause) != 3
        or clause[0] != CATCH
        or not isinstance(clause[1], Symbol)
    ):
        raise MalletInvalidCatchBlock(f"malformed catch* clause: {pr_str(clause)}")
    return clause[1], clause[2]


def try_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue | TailCall:
    """
    (try* body [(catch* name handler)])
    - Without a catch* clause the body's exception propagates.
    - A malformed catch* clause never swallows the exception: it is raised as
      MalletInvalidCatchBlock with the thrown exception as its cause.
    - The handler runs in a child environment binding `name` to the payload,
      in tail position.
    """
    if len(tail) not in (1, 2):
        raise MalletArityError("try* requires a body and an optional catch* clause")

    try:
        return evaluate_fn(tail[0], env)
    except MalletException as ex:
        if len(tail) == 1:
            raise
        try:
            name, handler = _catch_clause(tail[1])
        except MalletInvalidCatchBlock as err:
            raise err from ex
        logger.debug("try* caught %s", pr_str(ex.payload))
        catch_env = Environment(outer=env)
        catch_env.define(name, ex.payload)
        return TailCall(handler, catch_env)
