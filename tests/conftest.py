import pytest

from lispy.builtin.env_builtin import register
from lispy.evaluation.evaluator import evaluate
from lispy.interpreter import Interpreter
from lispy.printer import render
from lispy.reader.parser import parse
from lispy.reader.reader import read
from lispy.types.environment import Environment


# Interpreter() and the REPL consult LISPY_* variables; keep a developer's shell settings
# from leaking into the test run.
@pytest.fixture(autouse=True)
def _no_lispy_settings_from_env(monkeypatch):
    monkeypatch.delenv("LISPY_PRELUDE_PATH", raising=False)
    monkeypatch.delenv("LISPY_PROMPT", raising=False)
    monkeypatch.delenv("LISPY_HISTORY_FILE", raising=False)


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    return Interpreter(prelude=None)


@pytest.fixture
def run(env):
    """Parse, read and evaluate `source` in `env`, returning the rendered result."""
    def _run(source: str) -> str:
        return render(evaluate(read(parse(source)), env))
    return _run
