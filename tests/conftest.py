import pytest

from kappa.interpreter import Interpreter
from kappa.printer import to_string
from kappa.types.symbol import SymbolTable


@pytest.fixture
def symbols():
    return SymbolTable()


@pytest.fixture
def interp():
    """Interpreter with the builtins only."""
    return Interpreter()


@pytest.fixture
def std_interp():
    """Interpreter with library.lisp loaded."""
    return Interpreter(prelude='auto')


@pytest.fixture
def run(interp):
    """Evaluate code and return the printed form of its last result."""
    def _run(code):
        return to_string(interp.eval(code))
    return _run


@pytest.fixture
def run_std(std_interp):
    def _run(code):
        return to_string(std_interp.eval(code))
    return _run
