"""Runtime environment for Mallet.

The Environment stores bindings of Symbols to evaluated Lisp values and supports
nested scopes via an `outer` link. Frames form a tree: every function call and
every let* block gets a child of the lexical environment it runs in, and the
single frame without an `outer` is the top-level environment.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from mallet import LispValue
from mallet.errors import MalletInvalidVariableName, MalletUnboundSymbol
from mallet.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    @classmethod
    def with_builtins(cls) -> Environment:
        """Return a fresh top-level environment with every builtin bound."""
        from mallet.builtins import register

        env = cls()
        register(env)
        return env

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame only; parents are never touched.

        Raises MalletInvalidVariableName if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise MalletInvalidVariableName(f"Cannot define {name} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Symbol) -> Optional[LispValue]:
        """Return the innermost value bound to `name`, or None when unbound."""
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`.

        Raises MalletUnboundSymbol if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise MalletUnboundSymbol(f"'{name}' not found")
        return env.vars[name]

    def top_level(self) -> Environment:
        """Return the outermost ancestor of this environment."""
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variable names into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(str(k) for k in self.vars))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env: Optional[Environment] = self
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
