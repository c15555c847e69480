"""Command-line entry point and interactive read-eval-print loop."""
from __future__ import annotations

import argparse
import logging
import readline
import sys
from pathlib import Path
from typing import TextIO

from lispy import __version__
from lispy.config import get_history_file, get_log_level, get_recursion_limit
from lispy.errors import LispySyntaxError
from lispy.interpreter import Interpreter
from lispy.types.value import Error

logger = logging.getLogger(__name__)

PROMPT = "lispy> "
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Repl:
    """Interactive session over one Interpreter.

    Every form on an input line is evaluated and its result printed. A
    syntax error is reported and the session carries on; end of input or
    Ctrl-C ends it.
    """

    def __init__(self, interpreter: Interpreter, output_stream: TextIO | None = None,
                 history_file: Path | None = None):
        self.interpreter = interpreter
        self.output = output_stream or sys.stdout
        self.history_file = history_file

    def banner(self) -> None:
        print(f"Lispy Version {__version__}", file=self.output)
        print("Press Ctrl+c to Exit\n", file=self.output)

    def process_input(self, line: str) -> None:
        if not line.strip():
            return
        try:
            results = self.interpreter.eval_all(line)
        except LispySyntaxError as ex:
            print(ex, file=self.output)
            return
        for result in results:
            print(result, file=self.output)

    def start(self) -> None:
        self.banner()
        self._load_history()
        try:
            while True:
                try:
                    line = input(PROMPT)
                except (KeyboardInterrupt, EOFError):
                    print(file=self.output)
                    break
                self.process_input(line)
        finally:
            self._save_history()

    def _load_history(self) -> None:
        if self.history_file is None:
            return
        try:
            readline.read_history_file(self.history_file)
        except FileNotFoundError:
            pass
        except OSError as ex:
            logger.warning("Could not read history file %s: %s", self.history_file, ex)

    def _save_history(self) -> None:
        if self.history_file is None:
            return
        try:
            readline.write_history_file(self.history_file)
        except OSError as ex:
            logger.warning("Could not write history file %s: %s", self.history_file, ex)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lispy",
        description="Run Lispy source files, or start an interactive session.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE",
                        help="Source files to load in order. Starts the REPL when omitted.")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--no-prelude", action="store_true",
                       help="Do not load the standard prelude.")
    group.add_argument("--prelude", metavar="PATH",
                       help="Load this file as the prelude instead of the configured one.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None,
                        help="Logging level (default: $LISPY_LOG_LEVEL or WARNING).")
    return parser


def make_interpreter(args: argparse.Namespace) -> Interpreter:
    if args.no_prelude:
        return Interpreter(prelude=None)
    if args.prelude:
        itp = Interpreter(prelude=None)
        itp.eval_prelude(Path(args.prelude).read_text(encoding="utf-8"), args.prelude)
        return itp
    return Interpreter()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level or get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    limit = get_recursion_limit()
    if sys.getrecursionlimit() < limit:
        logger.debug("Raising recursion limit to %d", limit)
        sys.setrecursionlimit(limit)

    try:
        itp = make_interpreter(args)
    except OSError as ex:
        print(Error(f"Could not load file {ex.filename}.\n\n{ex}"))
        return 1

    if args.files:
        for filename in args.files:
            result = itp.load_file(filename)
            if isinstance(result, Error):
                print(result)
        return 0

    Repl(itp, history_file=get_history_file()).start()
    return 0
