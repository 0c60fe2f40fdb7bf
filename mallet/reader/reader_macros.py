from __future__ import annotations

from mallet import SExpression
from mallet.errors import MalletInternalError
from mallet.types.symbol import Symbol


def _subst(expr: SExpression, bindings: dict[Symbol, SExpression]) -> SExpression:
    """Shallow syntactic substitution over template lists and Symbols."""
    if isinstance(expr, Symbol):
        return bindings.get(expr, expr)
    if isinstance(expr, list):
        return [_subst(x, bindings) for x in expr]
    return expr


class ReaderMacros:
    """
    Registry of reader macros.
    Maps special tokens (like ', `, ~@) to a list of template parameters and
    a template form; dispatch reads one form per parameter and substitutes
    them into the template, so each macro desugars to an ordinary list.
    """

    def __init__(self):
        self.macros: dict[str, tuple[list[Symbol], SExpression]] = {}

    def define(self, token: str, formals: list[Symbol], template: SExpression) -> None:
        """Register a reader macro for a given special token."""
        self.macros[token] = (formals, template)

    def is_macro(self, token: str) -> bool:
        return token in self.macros

    def dispatch(self, token: str, stream: "TokenStream") -> SExpression:
        """Read the macro's arguments from the stream and expand its template."""
        if token not in self.macros:
            raise MalletInternalError(f"No reader macro defined for {token!r}")

        formals, template = self.macros[token]
        # Parse as many forms as the template declares, in source order
        args: list[SExpression] = [stream.parse_expr() for _ in formals]
        bindings = {param: arg for param, arg in zip(formals, args)}
        return _subst(template, bindings)


# -------------------------
# Single global instance
# -------------------------
reader_macros: ReaderMacros = ReaderMacros()

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("splice-unquote"),
    "@": Symbol("deref"),
}

_x = Symbol("x")
_m = Symbol("m")

# Quote forms: ' ` ~ ~@ and @, each wrapping the next form
for key, name in QUOTE_FORMS.items():
    reader_macros.define(key, [_x], [name, _x])

# Metadata: ^m x => (with-meta x m); the metadata is read first but goes last
reader_macros.define("^", [_m, _x], [Symbol("with-meta"), _x, _m])
