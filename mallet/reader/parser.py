"""
  Lisp Reader, Lexer and Parser

- Lazy lexing: `lex` is a generator, so tokens are produced on demand and a
  fresh call restarts from the beginning of the source.
- Emits Python values instead of a separate syntax tree:

    - nil -> Nil
    - true / false -> bool
    - integers -> int
    - strings -> str (escapes decoded)
    - :keywords -> Keyword
    - symbols -> Symbol
    - (lists) -> list
    - [vectors] -> Vector
    - {maps} -> dict
    - reader macros -> (quote x), (quasiquote x), (unquote x),
      (splice-unquote x), (deref x), (with-meta x m)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from mallet import SExpression
from mallet.errors import (
    MalletEmptyInput,
    MalletInternalError,
    MalletLexError,
    MalletMapError,
    MalletUnexpectedEof,
    MalletUnexpectedTerm,
    MalletUnknownToken,
    MalletUnmatchedDelimiter,
)
from mallet.reader.reader_macros import reader_macros
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol
from mallet.types.values import in_int_range, to_map_key
from mallet.types.vector import Vector

Token = tuple[str, str]

# Whitespace, commas and ;-comments separate tokens
SEPARATOR_RE = re.compile(r"(?:[\s,]+|;[^\n]*)+")

TOKEN_RE = re.compile(
    r"(?P<special>~@|[\[\]{}()'`~^@])"  # reader-macro and delimiter characters
    r'|(?P<string>"(?P<body>(?:\\.|[^\\"])*)(?P<close>"?))'  # double-quoted strings
    r'|(?P<atom>[^\s\[\]{}()\'"`,;~^@]+)',  # symbols, numbers, keywords
    re.DOTALL,
)

ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
ESCAPES: dict[str, str] = {"n": "\n", "\\": "\\", '"': '"'}

INT_RE = re.compile(r"[+-]?[0-9]+")

LITERALS: dict[str, SExpression] = {"nil": Nil, "true": True, "false": False}

SEQUENCES: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
CLOSERS = frozenset(SEQUENCES.values())


def _decode_string(body: str) -> Optional[str]:
    """Decode the escapes in a string body, or None on an unknown escape."""
    if any(c not in ESCAPES for c in ESCAPE_RE.findall(body)):
        return None
    return ESCAPE_RE.sub(lambda m: ESCAPES[m.group(1)], body)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value) tuples.

    Token types are "special", "string", "keyword", "atom" and "error". Bad
    string literals become an "error" token carrying a message; the lexer
    itself never raises.
    """
    pos = 0
    n = len(source)

    while pos < n:
        sep = SEPARATOR_RE.match(source, pos)
        if sep:
            pos = sep.end()
            if pos >= n:
                break

        m = TOKEN_RE.match(source, pos)
        if not m:
            yield "error", f"Unexpected char at {pos}: {source[pos]!r}"
            pos += 1
            continue
        pos = m.end()

        if m.group("special"):
            yield "special", m.group("special")
        elif m.group("string") is not None:
            if not m.group("close"):
                yield "error", "unterminated string literal"
                continue
            decoded = _decode_string(m.group("body"))
            if decoded is None:
                yield "error", f"invalid escape sequence in {m.group('string')}"
            else:
                yield "string", decoded
        else:
            atom = m.group("atom")
            yield ("keyword" if atom.startswith(":") else "atom"), atom


def _parse_atom(token: str) -> SExpression:
    if INT_RE.fullmatch(token):
        digits = token.lstrip("+-").lstrip("0")
        value = int(token) if len(digits) <= 19 else None
        if value is None or not in_int_range(value):
            raise MalletLexError(f"integer literal out of range: {token}")
        return value
    if token in LITERALS:
        return LITERALS[token]
    return Symbol(token)


def _build_map(items: list[SExpression]) -> dict:
    if len(items) % 2 != 0:
        raise MalletMapError("map literal needs an even number of forms")
    result = {}
    for k, v in zip(items[::2], items[1::2]):
        key = to_map_key(k)
        if key is None:
            raise MalletMapError(f"map keys must be strings or keywords, got {k}")
        result[key] = v
    return result


class TokenStream:
    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            raise MalletUnexpectedEof()
        self.advance()

        if tok_type == "error":
            raise MalletLexError(tok_val)
        if tok_type == "string":
            return tok_val
        if tok_type == "keyword":
            return Keyword(tok_val)
        if tok_type == "atom":
            return _parse_atom(tok_val)

        if tok_type == "special":
            # Dispatch reader macros first
            if reader_macros.is_macro(tok_val):
                return reader_macros.dispatch(tok_val, self)
            if tok_val in SEQUENCES:
                return self._parse_sequence(tok_val)
            if tok_val in CLOSERS:
                raise MalletUnmatchedDelimiter(tok_val)

        raise MalletUnknownToken(f"Unknown token: {tok_type} {tok_val}")

    def _parse_sequence(self, opener: str) -> SExpression:
        closer = SEQUENCES[opener]
        items: list[SExpression] = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise MalletUnexpectedEof(f"expected {closer!r} before end of input")
            if tok_type == "special" and tok_val in CLOSERS:
                self.advance()
                if tok_val != closer:
                    raise MalletUnmatchedDelimiter(tok_val)
                break
            items.append(self.parse_expr())

        if opener == "(":
            return items
        if opener == "[":
            return Vector(items)
        if opener == "{":
            return _build_map(items)
        raise MalletInternalError(f"no collection for {opener!r}")


def parse(source: str) -> SExpression:
    """Read exactly one complete form from `source`.

    Raises MalletEmptyInput when the source holds no tokens at all.
    """
    stream = TokenStream(lex(source))
    if stream.peek()[0] is None:
        raise MalletEmptyInput()

    expr = stream.parse_expr()

    tok_type, tok_val = stream.peek()
    if tok_type is not None:
        if tok_type == "special" and tok_val in CLOSERS:
            raise MalletUnmatchedDelimiter(tok_val)
        if tok_type == "error":
            raise MalletLexError(tok_val)
        raise MalletUnexpectedTerm(f"unexpected {tok_val!r} after a complete form")
    return expr
