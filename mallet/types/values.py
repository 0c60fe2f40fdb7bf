"""Shared views over Lisp values: truthiness, list-likes, map keys, equality."""

from __future__ import annotations

from typing import Optional

from mallet import LispValue
from mallet.types.meta import strip_meta
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol
from mallet.types.vector import Vector

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

MapKey = str | Keyword


def is_truthy(value: LispValue) -> bool:
    # Only nil and false are false; 0, "" and () are true.
    return not (value is Nil or value is False)


def is_int(value: LispValue) -> bool:
    # bool is an int subclass in Python but a separate kind here
    return type(value) is int


def in_int_range(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


def is_sequential(value: LispValue) -> bool:
    return isinstance(strip_meta(value), (list, Vector))


def as_sequence(value: LispValue) -> Optional[list[LispValue]]:
    """List-like view of a list or vector, or None for anything else."""
    value = strip_meta(value)
    if isinstance(value, (list, Vector)):
        return list(value)
    return None


def to_map_key(value: LispValue) -> Optional[MapKey]:
    """Return `value` if it can key a map (a string or keyword), else None."""
    value = strip_meta(value)
    if type(value) is str or isinstance(value, Keyword):
        return value
    return None


def lenient_eq(a: LispValue, b: LispValue) -> bool:
    """Structural equality where a list and a vector with equal elements match."""
    a, b = strip_meta(a), strip_meta(b)
    if isinstance(a, (list, Vector)) and isinstance(b, (list, Vector)):
        if len(a) != len(b):
            return False
        return all(lenient_eq(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(lenient_eq(v, b[k]) for k, v in a.items())
    if type(a) is not type(b):
        return False
    if isinstance(a, (str, int, Keyword, Symbol)) or a is Nil:
        return a == b
    # Functions, builtins and atoms compare by identity
    return a is b
