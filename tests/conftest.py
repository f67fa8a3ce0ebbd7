import pytest

from lwhlisp.interpreter import Interpreter


@pytest.fixture
def itp():
    """Interpreter with the bundled library loaded."""
    return Interpreter()


@pytest.fixture
def bare():
    """Interpreter with the builtins only."""
    return Interpreter(library=None)


def last(result):
    """Value of the final form when `Interpreter.eval` ran several."""
    return result[-1] if isinstance(result, list) else result
