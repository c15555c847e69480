from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from lispy.config import get_prelude_files
from lispy.errors import LispySyntaxError
from lispy.evaluation.evaluator import evaluate
from lispy.reader import read_source
from lispy.types.environment import Environment
from lispy.types.value import OK, Error, Value

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str, filename: str = ...) -> None: ...


def load_file(env: Environment, path: str | Path) -> Value:
    """Read and evaluate every top-level form of the file at `path` in `env`.

    Error results of individual forms are printed and evaluation carries on
    with the next form. Failing to read or parse the file yields an Error.
    """
    filename = str(path)
    logger.debug("Loading file %s", filename)
    try:
        code = Path(filename).read_text(encoding="utf-8")
        forms = read_source(code, filename)
    except (OSError, UnicodeDecodeError, LispySyntaxError) as ex:
        logger.debug("Could not load %s: %s", filename, ex)
        return Error(f"Could not load file {filename}.\n\n{ex}")

    for form in forms.cells:
        result = evaluate(form, env)
        if isinstance(result, Error):
            print(result)
    return OK


# Prelude convenience loader

def load_prelude(itp: _HasEvalPrelude) -> None:
    """Evaluate every configured prelude file, in order.

    Raises FileNotFoundError if a configured prelude file does not exist.
    """
    for path in get_prelude_files():
        if not path.is_file():
            raise FileNotFoundError(f"Cannot find prelude file '{path}'")
        logger.debug("Loading prelude %s", path)
        itp.eval_prelude(path.read_text(encoding="utf-8"), str(path))
