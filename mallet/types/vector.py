from __future__ import annotations


class Vector(tuple):
    """Literal sequential data, written `[a b c]`.

    A tuple subclass so that it is immutable and never `==` to a list with the
    same elements; use `lenient_eq` for the language-level comparison.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Vector({list(self)!r})"
