from mallet import EvaluatorFn
from mallet import SExpression, LispValue
from mallet.errors import MalletArityError, MalletInvalidVariableName
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def! name value)
    Binds in the current frame only and returns the value.
    """
    if len(tail) != 2:
        raise MalletArityError("def! requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise MalletInvalidVariableName(f"Cannot define {name} as a symbol")
    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return value
