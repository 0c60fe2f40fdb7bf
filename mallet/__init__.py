# Core type aliases for Mallet's data model.
# We use plain Python types (bool, int, str, list, dict) wherever a Lisp value
# has a natural Python counterpart, and small classes (Symbol, Keyword, Vector,
# Lambda, Builtin, Atom, WithMeta) for the rest.
#
# Naming guidance:
# - SExpression: Use in reader/parser/macro code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (code is data, so this is the same thing)
SExpression = LispValue

# Evaluator function type: passed to special forms to avoid import cycles
EvaluatorFn = Callable[..., LispValue]
