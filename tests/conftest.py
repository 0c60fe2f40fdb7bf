import pytest

from mallet.interpreter import Interpreter
from mallet.types.environment import Environment

# Most tests drive the language through an Interpreter, which owns a fresh
# top-level environment with the builtins and the prelude (not, cond,
# load-file) already defined. Tests that exercise the core without the
# prelude use the bare `env` fixture instead.


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running evaluation (deselect with -m 'not slow')")


@pytest.fixture
def interp():
    """Return a fresh interpreter for each test."""
    return Interpreter()


@pytest.fixture
def env():
    """Return a fresh top-level environment holding only the builtins."""
    return Environment.with_builtins()
