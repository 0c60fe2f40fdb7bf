"""Canonical textual rendering of Mallet values.

readable=True (pr-str, prn, REPL echo) quotes and escapes strings so the
output reads back to an equal value; readable=False (str, println) writes
strings verbatim.
"""

from __future__ import annotations

from io import StringIO

from mallet import LispValue
from mallet.types.atom import Atom
from mallet.types.builtin import Builtin
from mallet.types.lambda_fn import Lambda
from mallet.types.meta import WithMeta
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol
from mallet.types.vector import Vector

_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n"})


def escape_string(s: str) -> str:
    return '"' + s.translate(_ESCAPES) + '"'


def pr_str(value: LispValue, readable: bool = True) -> str:
    with StringIO() as buffer:
        _write(buffer, value, readable)
        return buffer.getvalue()


def join(values: list[LispValue], sep: str, readable: bool) -> str:
    return sep.join(pr_str(v, readable) for v in values)


def _write_seq(buffer: StringIO, items, brackets: str, readable: bool) -> None:
    buffer.write(brackets[0])
    first = True
    for item in items:
        if not first:
            buffer.write(" ")
        _write(buffer, item, readable)
        first = False
    buffer.write(brackets[1])


def _write(buffer: StringIO, value: LispValue, readable: bool) -> None:
    if value is Nil:
        buffer.write("nil")
    elif value is True:
        buffer.write("true")
    elif value is False:
        buffer.write("false")
    elif isinstance(value, str):
        buffer.write(escape_string(value) if readable else value)
    elif isinstance(value, (int, Symbol, Keyword)):
        buffer.write(str(value))
    elif isinstance(value, Vector):
        _write_seq(buffer, value, "[]", readable)
    elif isinstance(value, list):
        _write_seq(buffer, value, "()", readable)
    elif isinstance(value, dict):
        _write_seq(buffer, (x for kv in value.items() for x in kv), "{}", readable)
    elif isinstance(value, Lambda):
        buffer.write("#<macro>" if value.is_macro else "#<function>")
    elif isinstance(value, Builtin):
        buffer.write(f"#<builtin {value.name}>")
    elif isinstance(value, Atom):
        buffer.write("(atom ")
        _write(buffer, value.value, readable)
        buffer.write(")")
    elif isinstance(value, WithMeta):
        _write(buffer, value.value, readable)
    else:
        buffer.write(f"#<python {value!r}>")
