from __future__ import annotations

from mallet import LispValue


class WithMeta:
    """A collection or function paired with a metadata value."""

    __slots__ = ("value", "meta")

    def __init__(self, value: LispValue, meta: LispValue):
        self.value: LispValue = value
        self.meta: LispValue = meta

    def __repr__(self) -> str:
        return f"WithMeta({self.value!r}, meta={self.meta!r})"


def strip_meta(value: LispValue) -> LispValue:
    """Return the value underneath any metadata wrapper."""
    while isinstance(value, WithMeta):
        value = value.value
    return value
