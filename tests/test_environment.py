import pytest

from mallet.errors import MalletInvalidVariableName, MalletUnboundSymbol
from mallet.types.builtin import Builtin
from mallet.types.environment import Environment
from mallet.types.symbol import Symbol


@pytest.fixture
def chain():
    top = Environment()
    top.define(Symbol("a"), 1)
    top.define(Symbol("b"), 2)
    middle = Environment(outer=top)
    middle.define(Symbol("b"), 20)
    inner = Environment(outer=middle)
    return top, middle, inner


def test_lookup_walks_outward(chain):
    top, middle, inner = chain
    assert inner.lookup(Symbol("a")) == 1
    assert inner.lookup(Symbol("b")) == 20
    assert top.lookup(Symbol("b")) == 2


def test_find_returns_the_binding_frame(chain):
    top, middle, inner = chain
    assert inner.find(Symbol("a")) is top
    assert inner.find(Symbol("b")) is middle
    assert inner.find(Symbol("missing")) is None


def test_get_returns_none_when_unbound(chain):
    _, _, inner = chain
    assert inner.get(Symbol("missing")) is None
    assert inner.get(Symbol("a")) == 1


def test_lookup_unbound_raises(chain):
    _, _, inner = chain
    with pytest.raises(MalletUnboundSymbol) as info:
        inner.lookup(Symbol("missing"))
    assert "'missing' not found" in str(info.value)


def test_define_only_touches_current_frame(chain):
    top, middle, inner = chain
    inner.define(Symbol("a"), 100)
    assert inner.lookup(Symbol("a")) == 100
    assert top.lookup(Symbol("a")) == 1


def test_define_replaces_existing_binding():
    env = Environment()
    env.define(Symbol("x"), 1)
    env.define(Symbol("x"), 2)
    assert env.lookup(Symbol("x")) == 2


def test_define_rejects_non_symbols():
    env = Environment()
    with pytest.raises(MalletInvalidVariableName):
        env.define("x", 1)


def test_top_level(chain):
    top, middle, inner = chain
    assert inner.top_level() is top
    assert top.top_level() is top


def test_update_binds_many():
    env = Environment()
    env.update({Symbol("x"): 1, Symbol("y"): 2})
    assert env.lookup(Symbol("x")) == 1
    assert env.lookup(Symbol("y")) == 2


def test_with_builtins_binds_core_functions():
    env = Environment.with_builtins()
    assert env.outer is None
    for name in ["+", "-", "*", "/", "=", "list", "cons", "concat", "throw", "eval"]:
        assert isinstance(env.lookup(Symbol(name)), Builtin)


def test_str_and_repr(chain):
    _, middle, inner = chain
    assert str(middle) == "{b} -> ..."
    assert repr(inner) == "<Environment chain: {} -> {b} -> {a, b}>"
