"""Interactive read-eval-print loop.

    $ mallet               # start the REPL
    $ mallet script.mal a  # load script.mal with *ARGV* bound to ("a")
"""

import logging
import sys

from mallet import config
from mallet.errors import MalletEmptyInput, MalletError
from mallet.interpreter import Interpreter
from mallet.printer import escape_string
from mallet.types.symbol import Symbol

logger = logging.getLogger(__name__)

PROMPT = "user> "

# Non-tail recursion uses several host frames per level
RECURSION_LIMIT = 5_000


def run_file(interp: Interpreter, path: str) -> int:
    try:
        interp.eval(f"(load-file {escape_string(path)})")
    except MalletError as err:
        logger.debug("error while loading %s", path, exc_info=True)
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


def repl(interp: Interpreter) -> int:
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return 0
        try:
            print(interp.rep(line))
        except MalletEmptyInput:
            continue
        except MalletError as err:
            # A failing form never takes the session down
            logger.debug("error evaluating %r", line, exc_info=True)
            print(f"Error: {err}")


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=config.get_log_level())
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))
    args = sys.argv[1:] if argv is None else list(argv)

    interp = Interpreter()
    interp.env.define(Symbol("*ARGV*"), args[1:])
    if args:
        return run_file(interp, args[0])
    return repl(interp)


if __name__ == "__main__":
    sys.exit(main())
