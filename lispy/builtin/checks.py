"""Argument validation helpers shared by the builtins.

Each helper returns an Error describing the first violated expectation, or
None when the arguments are acceptable. Builtins use them as guards:

    if err := check_count("head", args, 1):
        return err
"""

from __future__ import annotations

from lispy.types.value import Error, Expr, String, Value


def check_count(fn: str, args: list[Value], num: int) -> Error | None:
    if len(args) != num:
        return Error(
            f"Invalid number of arguments passed to '{fn}'. "
            f"Got {len(args)}, expected {num}."
        )
    return None


def check_at_least(fn: str, args: list[Value], num: int) -> Error | None:
    if len(args) < num:
        return Error(
            f"Invalid number of arguments passed to '{fn}'. "
            f"Got {len(args)}, expected at least {num}."
        )
    return None


def check_at_most(fn: str, args: list[Value], num: int) -> Error | None:
    if len(args) > num:
        return Error(
            f"Invalid number of arguments passed to '{fn}'. "
            f"Got {len(args)}, expected at most {num}."
        )
    return None


def check_type(fn: str, args: list[Value], index: int, *expected: type[Value]) -> Error | None:
    """Require args[index] to be an instance of one of `expected`."""
    arg = args[index]
    if isinstance(arg, expected):
        return None
    wanted = " or ".join(t.type_name for t in expected)
    return Error(
        f"Incorrect type for argument #{index + 1} passed to '{fn}'. "
        f"Got {arg.type_name}, expected {wanted}."
    )


def check_all(fn: str, args: list[Value], *expected: type[Value]) -> Error | None:
    for i in range(len(args)):
        if err := check_type(fn, args, i, *expected):
            return err
    return None


def check_not_empty(fn: str, args: list[Value], index: int) -> Error | None:
    arg = args[index]
    if isinstance(arg, Expr) and not arg.cells:
        return Error(f"Empty Q-expression passed to '{fn}' as argument #{index + 1}.")
    if isinstance(arg, String) and not arg.value:
        return Error(f"Empty string passed to '{fn}' as argument #{index + 1}.")
    return None
