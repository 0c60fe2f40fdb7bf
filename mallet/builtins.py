"""Built-in functions for the Mallet runtime environment.

This module defines core arithmetic, comparison, sequence and map processing,
atoms, printing and reading, predicates, metadata, application helpers, and
the registration utility that binds them all in a top-level environment.

Every builtin receives the calling environment and the list of already
evaluated arguments: `fn(env, args) -> value`.
"""
from __future__ import annotations

import logging
from pathlib import Path

from mallet import LispValue
from mallet.errors import (
    MalletArityError,
    MalletException,
    MalletIOError,
    MalletParseError,
    MalletReadError,
    MalletTypeError,
)
from mallet.evaluation.apply import apply_function
from mallet.evaluation.evaluator import evaluate
from mallet.printer import join, pr_str
from mallet.reader.parser import parse
from mallet.types.atom import Atom
from mallet.types.builtin import Builtin
from mallet.types.environment import Environment
from mallet.types.lambda_fn import Lambda
from mallet.types.meta import WithMeta, strip_meta
from mallet.types.nil import Nil
from mallet.types.symbol import Keyword, Symbol
from mallet.types.values import (
    as_sequence,
    in_int_range,
    is_int,
    is_sequential,
    lenient_eq,
    to_map_key,
)
from mallet.types.vector import Vector

logger = logging.getLogger(__name__)


def _arity(name: str, expr: list[LispValue], n: int) -> None:
    if len(expr) != n:
        raise MalletArityError(f"{name} requires exactly {n} argument(s), got {len(expr)}")


def _sequence(name: str, value: LispValue, allow_nil: bool = False) -> list[LispValue]:
    """List-like view of `value`, treating nil as empty when allowed."""
    if allow_nil and value is Nil:
        return []
    items = as_sequence(value)
    if items is None:
        raise MalletTypeError(f"{name} expects a list or vector, got {pr_str(value)}")
    return items


def _map(name: str, value: LispValue) -> dict:
    value = strip_meta(value)
    if not isinstance(value, dict):
        raise MalletTypeError(f"{name} expects a map, got {pr_str(value)}")
    return value


def _string(name: str, value: LispValue) -> str:
    if type(value) is not str:
        raise MalletTypeError(f"{name} expects a string, got {pr_str(value)}")
    return value


# -------------------------------
# Equality
# -------------------------------
def equals(env: Environment, expr: list[LispValue]) -> bool:
    """Lenient structural equality: (= '(1 2) [1 2]) is true."""
    _arity("=", expr, 2)
    return lenient_eq(expr[0], expr[1])


# -------------------------------
# Arithmetic and comparison
# -------------------------------
def _int_args(name: str, expr: list[LispValue]) -> tuple[int, int]:
    _arity(name, expr, 2)
    a, b = expr
    if not (is_int(a) and is_int(b)):
        raise MalletTypeError(f"{name} expects two integers, got {pr_str(a)} and {pr_str(b)}")
    return a, b


def _checked(name: str, value: int) -> int:
    if not in_int_range(value):
        raise MalletException(f"integer overflow in {name}")
    return value


def add(env: Environment, expr: list[LispValue]) -> int:
    a, b = _int_args("+", expr)
    return _checked("+", a + b)


def sub(env: Environment, expr: list[LispValue]) -> int:
    a, b = _int_args("-", expr)
    return _checked("-", a - b)


def mul(env: Environment, expr: list[LispValue]) -> int:
    a, b = _int_args("*", expr)
    return _checked("*", a * b)


def div(env: Environment, expr: list[LispValue]) -> int:
    """Integer division truncating toward zero; dividing by zero is catchable."""
    a, b = _int_args("/", expr)
    if b == 0:
        raise MalletException("division by zero")
    q = abs(a) // abs(b)
    return _checked("/", q if (a < 0) == (b < 0) else -q)


def lt(env: Environment, expr: list[LispValue]) -> bool:
    a, b = _int_args("<", expr)
    return a < b


def lte(env: Environment, expr: list[LispValue]) -> bool:
    a, b = _int_args("<=", expr)
    return a <= b


def gt(env: Environment, expr: list[LispValue]) -> bool:
    a, b = _int_args(">", expr)
    return a > b


def gte(env: Environment, expr: list[LispValue]) -> bool:
    a, b = _int_args(">=", expr)
    return a >= b


# -------------------------------
# Lists and vectors
# -------------------------------
def list_builtin(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    return list(expr)


def is_list(env: Environment, expr: list[LispValue]) -> bool:
    _arity("list?", expr, 1)
    return isinstance(strip_meta(expr[0]), list)


def vector(env: Environment, expr: list[LispValue]) -> Vector:
    return Vector(expr)


def is_vector(env: Environment, expr: list[LispValue]) -> bool:
    _arity("vector?", expr, 1)
    return isinstance(strip_meta(expr[0]), Vector)


def vec(env: Environment, expr: list[LispValue]) -> Vector:
    _arity("vec", expr, 1)
    return Vector(_sequence("vec", expr[0]))


def is_sequential_builtin(env: Environment, expr: list[LispValue]) -> bool:
    _arity("sequential?", expr, 1)
    return is_sequential(expr[0])


def is_empty(env: Environment, expr: list[LispValue]) -> bool:
    """True for an empty list or vector; false for anything else."""
    _arity("empty?", expr, 1)
    items = as_sequence(expr[0])
    return items is not None and not items


def count(env: Environment, expr: list[LispValue]) -> int:
    _arity("count", expr, 1)
    return len(_sequence("count", expr[0], allow_nil=True))


def cons(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    _arity("cons", expr, 2)
    head, tail = expr
    return [head] + _sequence("cons", tail, allow_nil=True)


def concat(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    result: list[LispValue] = []
    for seq in expr:
        result.extend(_sequence("concat", seq, allow_nil=True))
    return result


def first(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("first", expr, 1)
    items = _sequence("first", expr[0], allow_nil=True)
    return items[0] if items else Nil


def rest(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    _arity("rest", expr, 1)
    return _sequence("rest", expr[0], allow_nil=True)[1:]


def nth(env: Environment, expr: list[LispValue]) -> LispValue:
    """(nth coll index); an out-of-range index throws a catchable exception."""
    _arity("nth", expr, 2)
    items = _sequence("nth", expr[0])
    index = expr[1]
    if not is_int(index):
        raise MalletTypeError(f"nth expects an integer index, got {pr_str(index)}")
    if not 0 <= index < len(items):
        raise MalletException(f"nth: index {index} out of range")
    return items[index]


def conj(env: Environment, expr: list[LispValue]) -> LispValue:
    """Add elements where the collection grows cheaply: lists at the front, vectors at the back."""
    if not expr:
        raise MalletArityError("conj requires a collection")
    coll, items = strip_meta(expr[0]), list(expr[1:])
    if isinstance(coll, Vector):
        return Vector(list(coll) + items)
    if isinstance(coll, list):
        return list(reversed(items)) + coll
    raise MalletTypeError(f"conj expects a list or vector, got {pr_str(coll)}")


def seq(env: Environment, expr: list[LispValue]) -> LispValue:
    """Turn a list, vector or string into a list; empty collections give nil."""
    _arity("seq", expr, 1)
    value = strip_meta(expr[0])
    if value is Nil:
        return Nil
    if type(value) is str:
        return list(value) if value else Nil
    items = _sequence("seq", value)
    return items if items else Nil


# -------------------------------
# Maps
# -------------------------------
def _pairs_into(name: str, target: dict, expr: list[LispValue]) -> dict:
    if len(expr) % 2 != 0:
        raise MalletArityError(f"{name} requires an even number of key/value arguments")
    for k, v in zip(expr[::2], expr[1::2]):
        key = to_map_key(k)
        if key is None:
            raise MalletTypeError(f"{name}: map keys must be strings or keywords, got {pr_str(k)}")
        target[key] = v
    return target


def hash_map(env: Environment, expr: list[LispValue]) -> dict:
    return _pairs_into("hash-map", {}, expr)


def is_map(env: Environment, expr: list[LispValue]) -> bool:
    _arity("map?", expr, 1)
    return isinstance(strip_meta(expr[0]), dict)


def get(env: Environment, expr: list[LispValue]) -> LispValue:
    """(get map key); nil for a missing key, a non-key value, or a nil map."""
    _arity("get", expr, 2)
    if expr[0] is Nil:
        return Nil
    m = _map("get", expr[0])
    key = to_map_key(expr[1])
    if key is None:
        return Nil
    return m.get(key, Nil)


def contains(env: Environment, expr: list[LispValue]) -> bool:
    _arity("contains?", expr, 2)
    m = _map("contains?", expr[0])
    key = to_map_key(expr[1])
    return key is not None and key in m


def assoc(env: Environment, expr: list[LispValue]) -> dict:
    """Return a copy of the map with the given pairs added; the argument is unchanged."""
    if not expr:
        raise MalletArityError("assoc requires a map")
    m = _map("assoc", expr[0])
    return _pairs_into("assoc", dict(m), list(expr[1:]))


def dissoc(env: Environment, expr: list[LispValue]) -> dict:
    """Return a copy of the map without the given keys; the argument is unchanged."""
    if not expr:
        raise MalletArityError("dissoc requires a map")
    new_map = dict(_map("dissoc", expr[0]))
    for k in expr[1:]:
        key = to_map_key(k)
        if key is not None:
            new_map.pop(key, None)
    return new_map


def keys(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    _arity("keys", expr, 1)
    return list(_map("keys", expr[0]).keys())


def vals(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    _arity("vals", expr, 1)
    return list(_map("vals", expr[0]).values())


# -------------------------------
# Atoms
# -------------------------------
def _atom(name: str, value: LispValue) -> Atom:
    if not isinstance(value, Atom):
        raise MalletTypeError(f"{name} expects an atom, got {pr_str(value)}")
    return value


def atom(env: Environment, expr: list[LispValue]) -> Atom:
    _arity("atom", expr, 1)
    return Atom(expr[0])


def is_atom(env: Environment, expr: list[LispValue]) -> bool:
    _arity("atom?", expr, 1)
    return isinstance(expr[0], Atom)


def deref(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("deref", expr, 1)
    return _atom("deref", expr[0]).deref()


def reset(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("reset!", expr, 2)
    return _atom("reset!", expr[0]).reset(expr[1])


def swap(env: Environment, expr: list[LispValue]) -> LispValue:
    """(swap! atom f & args): store (f @atom args...) back into the atom."""
    if len(expr) < 2:
        raise MalletArityError("swap! requires an atom and a function")
    cell = _atom("swap!", expr[0])
    fn, extra = expr[1], list(expr[2:])
    return cell.reset(apply_function(fn, [cell.deref()] + extra, env))


# -------------------------------
# Printing and reading
# -------------------------------
def pr_str_builtin(env: Environment, expr: list[LispValue]) -> str:
    return join(expr, " ", readable=True)


def str_builtin(env: Environment, expr: list[LispValue]) -> str:
    return join(expr, "", readable=False)


def prn(env: Environment, expr: list[LispValue]) -> LispValue:
    print(join(expr, " ", readable=True))
    return Nil


def println(env: Environment, expr: list[LispValue]) -> LispValue:
    print(join(expr, " ", readable=False))
    return Nil


def read_string(env: Environment, expr: list[LispValue]) -> LispValue:
    """Parse one form from a string; reader failures surface as MalletReadError."""
    _arity("read-string", expr, 1)
    source = _string("read-string", expr[0])
    try:
        return parse(source)
    except MalletParseError as err:
        raise MalletReadError(f"read-string: {err}") from err


def slurp(env: Environment, expr: list[LispValue]) -> str:
    _arity("slurp", expr, 1)
    path = Path(_string("slurp", expr[0]))
    logger.debug("slurp %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as err:
        raise MalletIOError(f"slurp: cannot read {path}: {err}") from err


# -------------------------------
# Evaluation and control
# -------------------------------
def eval_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """(eval form) always evaluates in the top-level environment."""
    _arity("eval", expr, 1)
    return evaluate(expr[0], env.top_level())


def eval_local(env: Environment, expr: list[LispValue]) -> LispValue:
    """(eval* form) evaluates in the caller's lexical environment."""
    _arity("eval*", expr, 1)
    return evaluate(expr[0], env)


def throw(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("throw", expr, 1)
    raise MalletException(expr[0])


# -------------------------------
# Function application
# -------------------------------
def map_builtin(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    _arity("map", expr, 2)
    fn, items = expr[0], _sequence("map", expr[1], allow_nil=True)
    return [apply_function(fn, [item], env) for item in items]


def apply(env: Environment, expr: list[LispValue]) -> LispValue:
    """(apply f a b [c d]) calls (f a b c d)."""
    if len(expr) < 2:
        raise MalletArityError("apply requires a function and a list of arguments")
    fn, args = expr[0], list(expr[1:-1]) + _sequence("apply", expr[-1], allow_nil=True)
    return apply_function(fn, args, env)


# -------------------------------
# Predicates and constructors
# -------------------------------
def _predicate(name: str, test):
    def check(env: Environment, expr: list[LispValue]) -> bool:
        _arity(name, expr, 1)
        return test(strip_meta(expr[0]))
    check.__name__ = name
    return check


def _is_function(value: LispValue) -> bool:
    return isinstance(value, Builtin) or (isinstance(value, Lambda) and not value.is_macro)


def _is_macro(value: LispValue) -> bool:
    return isinstance(value, Lambda) and value.is_macro


def _read_name(name: str, text: str) -> LispValue:
    """Read `text` as a single form; anything unreadable is a bad name."""
    try:
        return parse(text)
    except MalletParseError as err:
        raise MalletTypeError(f"{name}: {text!r} is not a valid name") from err


def symbol(env: Environment, expr: list[LispValue]) -> Symbol:
    """(symbol "abc") => abc; the string must read as a symbol."""
    _arity("symbol", expr, 1)
    if isinstance(expr[0], Symbol):
        return expr[0]
    value = _read_name("symbol", _string("symbol", expr[0]))
    if not isinstance(value, Symbol):
        raise MalletTypeError(f"symbol: {pr_str(expr[0])} does not name a symbol")
    return value


def keyword(env: Environment, expr: list[LispValue]) -> Keyword:
    """(keyword "abc") and (keyword ":abc") => :abc."""
    _arity("keyword", expr, 1)
    if isinstance(expr[0], Keyword):
        return expr[0]
    value = _read_name("keyword", _string("keyword", expr[0]))
    if isinstance(value, Symbol):
        return Keyword(value.id)
    if not isinstance(value, Keyword):
        raise MalletTypeError(f"keyword: {pr_str(expr[0])} does not name a keyword")
    return value


# -------------------------------
# Metadata
# -------------------------------
def meta(env: Environment, expr: list[LispValue]) -> LispValue:
    _arity("meta", expr, 1)
    if isinstance(expr[0], WithMeta):
        return expr[0].meta
    return Nil


def with_meta(env: Environment, expr: list[LispValue]) -> WithMeta:
    """Attach metadata to a collection or function, replacing any earlier metadata."""
    _arity("with-meta", expr, 2)
    value, new_meta = strip_meta(expr[0]), expr[1]
    if not isinstance(value, (list, Vector, dict, Lambda, Builtin)):
        raise MalletTypeError(f"with-meta expects a collection or function, got {pr_str(value)}")
    return WithMeta(value, new_meta)


# -------------------------------
# Registration
# -------------------------------
BUILTINS = {
    "=": equals,
    # numbers
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
    # lists and vectors
    "list": list_builtin,
    "list?": is_list,
    "vector": vector,
    "vector?": is_vector,
    "vec": vec,
    "sequential?": is_sequential_builtin,
    "empty?": is_empty,
    "count": count,
    "cons": cons,
    "concat": concat,
    "first": first,
    "rest": rest,
    "nth": nth,
    "conj": conj,
    "seq": seq,
    # maps
    "hash-map": hash_map,
    "map?": is_map,
    "get": get,
    "contains?": contains,
    "assoc": assoc,
    "dissoc": dissoc,
    "keys": keys,
    "vals": vals,
    # atoms
    "atom": atom,
    "atom?": is_atom,
    "deref": deref,
    "reset!": reset,
    "swap!": swap,
    # strings and io
    "pr-str": pr_str_builtin,
    "str": str_builtin,
    "prn": prn,
    "println": println,
    "read-string": read_string,
    "slurp": slurp,
    # evaluation
    "eval": eval_builtin,
    "eval*": eval_local,
    "throw": throw,
    "map": map_builtin,
    "apply": apply,
    # predicates and constructors
    "nil?": _predicate("nil?", lambda v: v is Nil),
    "true?": _predicate("true?", lambda v: v is True),
    "false?": _predicate("false?", lambda v: v is False),
    "symbol?": _predicate("symbol?", lambda v: isinstance(v, Symbol)),
    "keyword?": _predicate("keyword?", lambda v: isinstance(v, Keyword)),
    "string?": _predicate("string?", lambda v: type(v) is str),
    "number?": _predicate("number?", is_int),
    "fn?": _predicate("fn?", _is_function),
    "macro?": _predicate("macro?", _is_macro),
    "symbol": symbol,
    "keyword": keyword,
    # metadata
    "meta": meta,
    "with-meta": with_meta,
}


def register(env: Environment) -> None:
    env.update({Symbol(name): Builtin(name, fn) for name, fn in BUILTINS.items()})
