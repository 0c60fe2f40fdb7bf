from __future__ import annotations

from typing import List, Optional

from mallet import LispValue, SExpression
from mallet.errors import MalletArityError, MalletInvalidVarargs, MalletTypeError
from mallet.types.environment import Environment
from mallet.types.meta import strip_meta
from mallet.types.symbol import Symbol
from mallet.types.vector import Vector

VARARGS_MARKER = Symbol("&")


def parse_parameters(params: SExpression) -> tuple[list[Symbol], Optional[Symbol]]:
    """Split a fn* parameter list into fixed formals and an optional rest name.

    `(a b & more)` gives `([a, b], more)`. The `&` marker may appear at most
    once and must be followed by exactly one symbol.
    """
    params = strip_meta(params)
    if not isinstance(params, (list, Vector)):
        raise MalletTypeError(f"Parameter list must be a list or vector, got {params}")
    formals = list(params)
    for p in formals:
        if not isinstance(p, Symbol):
            raise MalletTypeError(f"Parameter names must be symbols, got {p}")

    markers = formals.count(VARARGS_MARKER)
    if markers == 0:
        return formals, None
    if markers > 1 or len(formals) < 2 or formals[-2] != VARARGS_MARKER:
        raise MalletInvalidVarargs("'&' must be followed by exactly one parameter name")
    return formals[:-2], formals[-1]


def bind_arguments(
    formals: List[Symbol],
    varargs: Optional[Symbol],
    supplied_args: List[LispValue],
    closure_env: Environment,
) -> Environment:
    """
    Single source of truth for lambda-list binding in Mallet.

    Returns a new Environment whose outer is the closure_env (never the
    caller's environment), populated with the bindings for evaluating the
    callee body. Surplus arguments are collected into a list bound to
    `varargs` when the function declares one.
    """
    provided = len(supplied_args)
    arity = len(formals)
    if provided < arity or (varargs is None and provided > arity):
        expected = f"at least {arity}" if varargs is not None else f"{arity}"
        raise MalletArityError(
            f"Wrong number of arguments: expected {expected}, got {provided}"
        )

    local_env = Environment(outer=closure_env)
    for name, value in zip(formals, supplied_args):
        local_env.define(name, value)
    if varargs is not None:
        local_env.define(varargs, list(supplied_args[arity:]))
    return local_env
