import io

import pytest

from mehl.interpreter import Interpreter


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def interp(output):
    # Fresh session with the bundled prelude; prints go to `output`
    return Interpreter(output=output)


@pytest.fixture
def bare(output):
    # Nothing but ✨ in scope
    return Interpreter(prelude=None, output=output)
