import pytest

from kappa.errors import KappaTypeError, KappaUnboundSymbol
from kappa.types.environment import Environment


def test_define_and_lookup(symbols):
    env = Environment()
    x = symbols.intern("x")
    env.define(x, 1)
    assert env.lookup(x) == 1


def test_lookup_walks_outward(symbols):
    x = symbols.intern("x")
    root = Environment()
    root.define(x, 1)
    child = Environment(Environment(root))
    assert child.lookup(x) == 1
    assert child.find(x) is root


def test_define_shadows_in_inner_scope_only(symbols):
    x = symbols.intern("x")
    root = Environment()
    root.define(x, 1)
    child = Environment(root)
    child.define(x, 2)
    assert child.lookup(x) == 2
    assert root.lookup(x) == 1


def test_redefine_replaces_local_binding(symbols):
    x = symbols.intern("x")
    env = Environment()
    env.define(x, 1)
    env.define(x, 2)
    assert env.lookup(x) == 2


def test_unbound_symbol(symbols):
    env = Environment(Environment())
    with pytest.raises(KappaUnboundSymbol, match="Y"):
        env.lookup(symbols.intern("y"))
    assert env.find(symbols.intern("y")) is None


def test_define_requires_a_symbol():
    with pytest.raises(KappaTypeError):
        Environment().define("x", 1)


def test_update_and_str(symbols):
    env = Environment()
    env.update({symbols.intern("a"): 1, symbols.intern("b"): 2})
    assert str(env) == "{A: 1, B: 2}"
    child = Environment(env)
    assert str(child) == "{} -> ..."
    assert repr(child) == "<Environment chain: {} -> {A: 1, B: 2}>"
