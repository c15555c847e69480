"""Arithmetic builtins.

Every operator folds left over its arguments, starting from the first.
Long op Long stays Long (wrapping at 64 bits); any Double operand promotes
the running result to Double. Division and exponentiation of Longs truncate
toward zero, and the remainder takes the sign of the dividend.
"""

from __future__ import annotations

import math
from typing import Callable

from lispy.builtin.checks import check_all, check_at_least
from lispy.types.environment import Environment
from lispy.types.value import Double, Error, Long, Number, Value, wrap_long

DIVISION_BY_ZERO = "division by zero"

NumericOp = Callable[[Number, Number], Value]


def _both_long(x: Number, y: Number) -> bool:
    return isinstance(x, Long) and isinstance(y, Long)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _is_zero(x: Number) -> bool:
    return x.value == 0


def add(x: Number, y: Number) -> Value:
    if _both_long(x, y):
        return Long(x.value + y.value)
    return Double(x.value + y.value)


def subtract(x: Number, y: Number) -> Value:
    if _both_long(x, y):
        return Long(x.value - y.value)
    return Double(x.value - y.value)


def multiply(x: Number, y: Number) -> Value:
    if _both_long(x, y):
        return Long(x.value * y.value)
    return Double(x.value * y.value)


def divide(x: Number, y: Number) -> Value:
    if _is_zero(y):
        return Error(DIVISION_BY_ZERO)
    if _both_long(x, y):
        return Long(_trunc_div(x.value, y.value))
    return Double(x.value / y.value)


def modulo(x: Number, y: Number) -> Value:
    if not _both_long(x, y):
        return Error("modulo arguments must be whole numbers")
    if _is_zero(y):
        return Error(DIVISION_BY_ZERO)
    return Long(x.value - y.value * _trunc_div(x.value, y.value))


def power(x: Number, y: Number) -> Value:
    if _is_zero(x) and y.value < 0:
        return Error(DIVISION_BY_ZERO)
    if _both_long(x, y):
        base, exp = x.value, y.value
        if exp >= 0:
            return Long(wrap_long(pow(base, exp, 2 ** 64)))
        # |base| >= 2 gives a magnitude below one, which truncates to zero
        if base == 1:
            return Long(1)
        if base == -1:
            return Long(-1 if exp % 2 else 1)
        return Long(0)
    try:
        return Double(math.pow(x.value, y.value))
    except OverflowError:
        odd = float(y.value).is_integer() and int(y.value) % 2 == 1
        return Double(-math.inf if x.value < 0 and odd else math.inf)
    except ValueError:
        return Double(math.nan)


def minimum(x: Number, y: Number) -> Value:
    return y if x.value > y.value else x


def maximum(x: Number, y: Number) -> Value:
    return y if x.value < y.value else x


def negate(x: Number) -> Value:
    return type(x)(-x.value)


OPS: dict[str, NumericOp] = {
    "add": add,
    "sub": subtract,
    "mul": multiply,
    "div": divide,
    "mod": modulo,
    "pow": power,
    "min": minimum,
    "max": maximum,
}


def builtin_op(env: Environment, args: list[Value], op: str) -> Value:
    """Validate numeric arguments and fold `op` over them left to right."""
    if err := check_at_least(op, args, 1):
        return err
    if err := check_all(op, args, Long, Double):
        return err

    x = args[0]

    # `-` does unary negation, e.g. (- 3) => -3
    if len(args) == 1 and op == "sub":
        return negate(x)

    fn = OPS[op]
    for y in args[1:]:
        x = fn(x, y)
        if isinstance(x, Error):
            return x
    return x


def _make(op: str):
    def builtin(env: Environment, args: list[Value]) -> Value:
        return builtin_op(env, args, op)

    builtin.__name__ = f"builtin_{op}"
    return builtin


builtin_add = _make("add")
builtin_sub = _make("sub")
builtin_mul = _make("mul")
builtin_div = _make("div")
builtin_mod = _make("mod")
builtin_pow = _make("pow")
builtin_min = _make("min")
builtin_max = _make("max")

BUILTINS = {
    "+": builtin_add,
    "-": builtin_sub,
    "*": builtin_mul,
    "/": builtin_div,
    "%": builtin_mod,
    "^": builtin_pow,
    "add": builtin_add,
    "sub": builtin_sub,
    "mul": builtin_mul,
    "div": builtin_div,
    "mod": builtin_mod,
    "pow": builtin_pow,
    "min": builtin_min,
    "max": builtin_max,
}
