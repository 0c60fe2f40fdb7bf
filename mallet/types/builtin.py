from __future__ import annotations

from typing import Callable

from mallet import LispValue


class Builtin:
    """A named primitive implemented in Python.

    The callable receives the calling environment and the list of already
    evaluated arguments, like every other builtin in mallet.builtins.
    """

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[..., LispValue]):
        self.name = name
        self.fn = fn

    def __call__(self, env, args: list[LispValue]) -> LispValue:
        return self.fn(env, args)

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"
