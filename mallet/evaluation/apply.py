"""Application engine for builtins that call back into Lisp code.

`map`, `apply` and `swap!` receive function values as arguments and must call
them with already-evaluated argument lists. Keeping that here prevents each
builtin from re-implementing the Lambda/Builtin split.
"""

from mallet import LispValue
from mallet.errors import MalletInvalidFunction
from mallet.evaluation.evaluator import evaluate
from mallet.printer import pr_str
from mallet.types.builtin import Builtin
from mallet.types.environment import Environment
from mallet.types.lambda_fn import Lambda
from mallet.types.meta import strip_meta


def apply_function(
    head: LispValue, args: list[LispValue], env: Environment
) -> LispValue:
    """Apply either a Lambda or a Builtin to evaluated arguments.

    - For Lambda, bind the arguments in a child of its closure environment and
      run the body to completion (a macro applied this way behaves as a plain
      function of its argument forms).
    - For Builtin, invoke it with the calling env and the argument list.
    - Otherwise, raise MalletInvalidFunction.
    """
    fn = strip_meta(head)
    if isinstance(fn, Lambda):
        return evaluate(fn.body, fn.extend_env(list(args)))
    elif isinstance(fn, Builtin):
        return fn(env, list(args))
    else:
        raise MalletInvalidFunction(f"Cannot apply non-function {pr_str(head)}")
