import logging

from mallet import LispValue, SExpression
from mallet import config
from mallet.errors import MalletStackOverflow
from mallet.evaluation.evaluator import evaluate
from mallet.printer import pr_str
from mallet.reader.parser import parse
from mallet.types.environment import Environment

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Host-side wrapper around a top-level environment.
    Builds the builtin environment, loads the prelude as ordinary source text,
    and evaluates one form per call against the same environment.
    """
    def __init__(self, prelude: str | None = "auto"):
        self.env = Environment.with_builtins()

        if prelude == "auto":
            path = config.get_prelude_file()
            logger.debug("loading prelude from %s", path)
            prelude = path.read_text(encoding="utf-8")
        if prelude:
            self.eval_prelude(prelude)

    def _evaluate(self, expr: SExpression) -> LispValue:
        # Only tail calls run in constant stack; deep non-tail recursion
        # surfaces as an evaluation error instead of a host RecursionError.
        try:
            return evaluate(expr, self.env)
        except RecursionError as err:
            logger.debug("evaluation exceeded the recursion limit", exc_info=True)
            raise MalletStackOverflow("stack overflow: recursion too deep") from err

    def eval_prelude(self, code: str) -> None:
        """Evaluate a string holding any number of forms, discarding the results."""
        self._evaluate(parse(f"(do {code}\nnil)"))

    def eval(self, code: str) -> LispValue:
        """Read exactly one form from `code` and evaluate it."""
        return self._evaluate(parse(code))

    def rep(self, code: str) -> str:
        """Read, evaluate and print: the readable rendering of the result."""
        value = self.eval(code)
        try:
            return pr_str(value)
        except RecursionError as err:
            raise MalletStackOverflow("stack overflow: value nested too deeply to print") from err
