from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from lispy.config import get_prelude_path
from lispy.evaluation.evaluator import evaluate
from lispy.printer import render
from lispy.reader.parser import parse
from lispy.reader.reader import read
from lispy.types.environment import Environment
from lispy.types.value import Value, Error
from lispy.builtin.env_builtin import register

logger = logging.getLogger(__name__)

MAX_DEPTH_MESSAGE = "maximum nesting depth exceeded"


class Interpreter:
    """
    Orchestrates parsing, reading and evaluating Lispy code.
    Maintains one Environment across calls, populated with the built-ins.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            path = get_prelude_path()
            if path is not None:
                self.load_file(path)
        elif prelude:
            self.eval_all(prelude, filename="<prelude>")

    def load_file(self, path: str | Path) -> list[Value]:
        """Evaluate each top-level expression in `path`, in order."""
        path = Path(path)
        logger.debug("loading %s", path)
        return self.eval_all(path.read_text(encoding="utf-8"), filename=str(path))

    def eval_all(self, code: str, filename: str = "<stdin>") -> list[Value]:
        """Evaluate each top-level expression of `code` separately.

        Unlike `eval`, the results are not combined, so a file of definitions
        followed by uses behaves as a sequence of REPL lines.
        """
        program = read(parse(code, filename))
        return [self._evaluate(expr) for expr in program]

    def eval(self, code: str, filename: str = "<stdin>") -> Value:
        """Parse, read and evaluate `code`.

        The program root reads as an S-expression of all top-level
        expressions, so a single expression evaluates to its own value.
        Raises LispySyntaxError if `code` does not parse.
        """
        tree = parse(code, filename)
        return self._evaluate(read(tree))

    def run(self, code: str, filename: str = "<stdin>") -> str:
        """Like `eval`, but return the rendered result."""
        return render(self.eval(code, filename))

    def _evaluate(self, value: Value) -> Value:
        """Evaluate against this interpreter's environment.

        Nesting deep enough to exhaust the Python stack evaluates to an Error
        value, like any other evaluation failure.
        """
        try:
            return evaluate(value, self.env)
        except RecursionError:
            logger.debug("evaluation exceeded the recursion limit")
            return Error(MAX_DEPTH_MESSAGE)
