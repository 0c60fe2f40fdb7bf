"""Lambda function representation for Mallet."""

from __future__ import annotations

from typing import Optional

from mallet import SExpression, LispValue
from mallet.types.bind import bind_arguments
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


class Lambda:
    """A first-class closure: formal parameters, body, and captured env.

    Macros are Lambdas with `is_macro` set; defmacro! builds a flagged copy
    rather than changing the function it was given.
    """

    __slots__ = ("formals", "varargs", "body", "env", "is_macro")

    def __init__(
        self,
        formals: list[Symbol],
        body: SExpression,
        env: Environment,
        varargs: Optional[Symbol] = None,
        is_macro: bool = False,
    ):
        self.formals: list[Symbol] = formals
        self.varargs: Optional[Symbol] = varargs
        self.body: SExpression = body
        self.env: Environment = env
        self.is_macro: bool = is_macro

    def as_macro(self) -> Lambda:
        return Lambda(self.formals, self.body, self.env, self.varargs, is_macro=True)

    def extend_env(self, args: list[LispValue]) -> Environment:
        """Bind argument values to the formals in a child of the closure env."""
        return bind_arguments(self.formals, self.varargs, args, self.env)

    def __repr__(self) -> str:
        params = " ".join(str(f) for f in self.formals)
        if self.varargs is not None:
            params = f"{params} & {self.varargs}".strip()
        kind = "macro" if self.is_macro else "fn*"
        return f"<Lambda {kind} ({params})>"
