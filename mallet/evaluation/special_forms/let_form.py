from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import MalletArityError, MalletInvalidLetVariables
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol
from mallet.types.tail_call import TailCall
from mallet.types.vector import Vector


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue | TailCall:
    """
    (let* (name value ...) body)
    Each value is evaluated in the new frame, so later bindings see earlier
    ones. The body runs in tail position.
    """
    if len(tail) != 2:
        raise MalletArityError("let* requires a binding list and a body")

    bindings, body = tail
    if not isinstance(bindings, (list, Vector)) or len(bindings) % 2 != 0:
        raise MalletInvalidLetVariables("let* bindings must be an even-length list or vector")

    let_env = Environment(outer=env)
    for name, val_expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise MalletInvalidLetVariables(f"let* binding name must be a symbol, got {name}")
        let_env.define(name, evaluate_fn(val_expr, let_env))

    return TailCall(body, let_env)
