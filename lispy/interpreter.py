from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from lispy.builtin.env_builtin import register
from lispy.evaluation.evaluator import evaluate
from lispy.modules.loader import load_file, load_prelude
from lispy.reader import read_source
from lispy.types.environment import Environment
from lispy.types.value import OK, Error, Value

logger = logging.getLogger(__name__)

RECURSION_ERROR = "maximum recursion depth exceeded"


class Interpreter:
    """
    Orchestrates reading and evaluating Lispy code.
    Owns the global Environment, which persists across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_form(self, form: Value) -> Value:
        """Evaluate one already-read form in the global environment."""
        try:
            return evaluate(form, self.env)
        except RecursionError:
            logger.warning("Evaluation exceeded the Python recursion limit")
            return Error(RECURSION_ERROR)

    def eval_prelude(self, code: str, filename: str = "<prelude>") -> None:
        """Evaluate a string of Lispy code as prelude, logging any Error results."""
        for form in read_source(code, filename).cells:
            result = self.eval_form(form)
            if isinstance(result, Error):
                logger.warning("%s: %s", filename, result)

    def eval_all(self, code: str, filename: str = "<stdin>") -> list[Value]:
        """Evaluate each top-level form of `code`, returning every result.

        Raises LispySyntaxError if `code` does not parse.
        """
        return [self.eval_form(form) for form in read_source(code, filename).cells]

    def eval(self, code: str) -> Value | list[Value]:
        results = self.eval_all(code)
        if not results:
            return OK
        if len(results) == 1:
            return results[0]
        return results

    def load_file(self, path: str | Path) -> Value:
        try:
            return load_file(self.env, path)
        except RecursionError:
            logger.warning("Loading %s exceeded the Python recursion limit", path)
            return Error(RECURSION_ERROR)
