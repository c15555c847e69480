"""Built-in functions for the Lispy runtime environment.

This module defines the variable and function builtins (def, =, \\,
print-env) and `register`, which installs every builtin of the library
into an environment.
"""
from __future__ import annotations

from lispy.builtin import arith_builtin, compare_builtin, file_builtin, io_builtin, list_builtin
from lispy.builtin.checks import check_at_least, check_count, check_type
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Builtin, BuiltinFn, Lambda
from lispy.types.symbol import Symbol
from lispy.types.value import OK, Error, QExpr, Value


def _symbols_error(fn: str, syms: QExpr) -> Error | None:
    for sym in syms.cells:
        if not isinstance(sym, Symbol):
            return Error(
                f"The first argument to '{fn}' must be a list of symbols. "
                f"Got {sym.type_name}, expected {Symbol.type_name}."
            )
    return None


def builtin_var(env: Environment, args: list[Value], fn: str) -> Value:
    """Shared body of def and =: bind a Q-expression of symbols to the remaining values."""
    if err := check_at_least(fn, args, 1):
        return err
    if err := check_type(fn, args, 0, QExpr):
        return err

    syms: QExpr = args[0]
    if err := _symbols_error(fn, syms):
        return err

    values = args[1:]
    if len(syms.cells) != len(values):
        return Error(
            f"The number of symbols defined by '{fn}' must be equal to the number of "
            f"values. Got {len(syms.cells)}, expected {len(values)}."
        )

    for sym, value in zip(syms.cells, values):
        # If fn is 'def', define globally; if '=', define locally
        if fn == "def":
            env.define_global(sym, value)
        else:
            env.define(sym, value)
    return OK


def builtin_def(env: Environment, args: list[Value]) -> Value:
    """(def {a b} 1 2) binds in the root environment."""
    return builtin_var(env, args, "def")


def builtin_put(env: Environment, args: list[Value]) -> Value:
    """(= {a b} 1 2) binds in the current environment."""
    return builtin_var(env, args, "=")


def builtin_lambda(env: Environment, args: list[Value]) -> Value:
    """(\\ {formals} {body}) builds a closure with an empty private environment."""
    if err := check_count("\\", args, 2):
        return err
    if err := check_type("\\", args, 0, QExpr):
        return err
    if err := check_type("\\", args, 1, QExpr):
        return err
    if err := _symbols_error("\\", args[0]):
        return err
    return Lambda(args[0], args[1])


def builtin_print_env(env: Environment, args: list[Value]) -> Value:
    """Print the bindings of the current frame, one per line."""
    print(env, end="")
    return OK


BUILTINS = {
    "def": builtin_def,
    "=": builtin_put,
    "\\": builtin_lambda,
    "print-env": builtin_print_env,
}


def all_builtins() -> dict[str, BuiltinFn]:
    table: dict[str, BuiltinFn] = {}
    for module in (list_builtin, arith_builtin, compare_builtin, file_builtin, io_builtin):
        table.update(module.BUILTINS)
    table.update(BUILTINS)
    return table


def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    env.update({Symbol(name): Builtin(name, fn) for name, fn in all_builtins().items()})
