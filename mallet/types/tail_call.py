from __future__ import annotations

from typing import Optional

from mallet import SExpression
from mallet.types.environment import Environment


class TailCall:
    """The next (expression, environment) pair for the trampoline to run.

    `macro_site` is set when `expr` is a macro body: it is the environment the
    macro was called from, where the expansion must be evaluated afterwards.
    """

    __slots__ = ("expr", "env", "macro_site")

    def __init__(
        self,
        expr: SExpression,
        env: Environment,
        macro_site: Optional[Environment] = None,
    ):
        self.expr = expr
        self.env = env
        self.macro_site = macro_site
