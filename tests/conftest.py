import pytest

from lispy.builtin.env_builtin import register
from lispy.interpreter import Interpreter
from lispy.types.environment import Environment

# Tests run against a clean configuration: nothing inherited from the
# developer's shell may redirect the prelude, history or logging.
LISPY_ENV_VARS = (
    "LISPY_PRELUDE_PATH",
    "LISPY_HISTORY_FILE",
    "LISPY_RECURSION_LIMIT",
    "LISPY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_lispy_env(monkeypatch):
    for var in LISPY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def itp():
    """Interpreter with builtins only, no prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def prelude_itp():
    """Interpreter with the packaged standard prelude loaded."""
    return Interpreter()


@pytest.fixture
def run(itp):
    """Evaluate source in a builtins-only interpreter and return the printed result."""
    def _run(source: str) -> str:
        result = itp.eval(source)
        if isinstance(result, list):
            return str(result[-1])
        return str(result)
    return _run
