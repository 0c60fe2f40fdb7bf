from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.types.environment import Environment
from mallet.types.nil import Nil
from mallet.types.tail_call import TailCall


def do_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue | TailCall:
    if not tail:
        return Nil
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return TailCall(tail[-1], env)
