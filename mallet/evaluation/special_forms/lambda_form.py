from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import MalletArityError
from mallet.types.bind import parse_parameters
from mallet.types.environment import Environment
from mallet.types.lambda_fn import Lambda


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(fn* (params) body) closes over the environment it is evaluated in."""
    if len(tail) != 2:
        raise MalletArityError("fn* requires a parameter list and a body")

    params, body = tail
    formals, varargs = parse_parameters(params)
    return Lambda(formals, body, env, varargs)
