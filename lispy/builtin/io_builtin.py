"""Console, reader and process builtins: print, show, error, read, load-file, exit."""

from __future__ import annotations

import logging

from lispy.builtin.checks import check_at_most, check_count, check_type
from lispy.errors import LispySyntaxError
from lispy.modules.loader import load_file
from lispy.reader import read_source
from lispy.types.environment import Environment
from lispy.types.value import OK, Error, Long, String, Value

logger = logging.getLogger(__name__)


def builtin_print(env: Environment, args: list[Value]) -> Value:
    """Print each argument followed by a space, then a newline; returns ok."""
    print("".join(f"{a} " for a in args))
    return OK


def builtin_show(env: Environment, args: list[Value]) -> Value:
    """Print a String's raw contents (no quotes, no escapes)."""
    if err := check_count("show", args, 1):
        return err
    if err := check_type("show", args, 0, String):
        return err
    print(args[0].value)
    return OK


def builtin_error(env: Environment, args: list[Value]) -> Value:
    """(error "message") raises nothing: it returns an Error value."""
    if err := check_count("error", args, 1):
        return err
    if err := check_type("error", args, 0, String):
        return err
    return Error(args[0].value)


def builtin_read(env: Environment, args: list[Value]) -> Value:
    """Parse a String into a Q-expression of its forms, without evaluating them."""
    if err := check_count("read", args, 1):
        return err
    if err := check_type("read", args, 0, String):
        return err
    try:
        return read_source(args[0].value)
    except LispySyntaxError as ex:
        return Error(str(ex))


def builtin_load_file(env: Environment, args: list[Value]) -> Value:
    """(load-file "path") evaluates every form in the file in this environment."""
    if err := check_count("load", args, 1):
        return err
    if err := check_type("load", args, 0, String):
        return err
    return load_file(env, args[0].value)


def builtin_exit(env: Environment, args: list[Value]) -> Value:
    """Leave the process, optionally with an integer exit status."""
    if err := check_at_most("exit", args, 1):
        return err
    if args and (err := check_type("exit", args, 0, Long)):
        return err
    status = args[0].value if args else 0
    logger.debug("exit requested with status %d", status)
    print("\nAdiós!")
    raise SystemExit(status)


BUILTINS = {
    "print": builtin_print,
    "show": builtin_show,
    "error": builtin_error,
    "read": builtin_read,
    "load-file": builtin_load_file,
    "exit": builtin_exit,
}
