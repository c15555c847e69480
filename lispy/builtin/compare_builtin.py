"""Comparison, logic and conditional builtins.

Comparisons chain pairwise across all their arguments: (< 1 2 3) is true
when 1 < 2 and 2 < 3. Equality uses the structural value equality of
lispy.types; ordering requires numbers. All arguments arrive already
evaluated, so the logical operators never need to short-circuit.
"""

from __future__ import annotations

import operator
from typing import Callable

from lispy.builtin.checks import (
    check_all,
    check_at_least,
    check_at_most,
    check_count,
    check_type,
)
from lispy.evaluation.evaluator import evaluate
from lispy.types.environment import Environment
from lispy.types.value import OK, Bool, Double, Long, QExpr, Value

ORDERINGS: dict[str, Callable[[object, object], bool]] = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def builtin_compare(env: Environment, args: list[Value], op: str) -> Value:
    if err := check_at_least(op, args, 1):
        return err

    if op in ORDERINGS:
        if err := check_all(op, args, Long, Double):
            return err
        test = ORDERINGS[op]
        return Bool(all(test(x.value, y.value) for x, y in zip(args, args[1:])))

    result = all(x == y for x, y in zip(args, args[1:]))
    return Bool(not result if op == "!=" else result)


def builtin_eq(env: Environment, args: list[Value]) -> Value:
    return builtin_compare(env, args, "==")


def builtin_not_eq(env: Environment, args: list[Value]) -> Value:
    return builtin_compare(env, args, "!=")


def builtin_gt(env: Environment, args: list[Value]) -> Value:
    return builtin_compare(env, args, ">")


def builtin_lt(env: Environment, args: list[Value]) -> Value:
    return builtin_compare(env, args, "<")


def builtin_gte(env: Environment, args: list[Value]) -> Value:
    return builtin_compare(env, args, ">=")


def builtin_lte(env: Environment, args: list[Value]) -> Value:
    return builtin_compare(env, args, "<=")


def builtin_or(env: Environment, args: list[Value]) -> Value:
    """True if any Boolean argument is true."""
    if err := check_at_least("||", args, 1):
        return err
    if err := check_all("||", args, Bool):
        return err
    return Bool(any(a.value for a in args))


def builtin_and(env: Environment, args: list[Value]) -> Value:
    """True if every Boolean argument is true."""
    if err := check_at_least("&&", args, 1):
        return err
    if err := check_all("&&", args, Bool):
        return err
    return Bool(all(a.value for a in args))


def builtin_not(env: Environment, args: list[Value]) -> Value:
    if err := check_count("!", args, 1):
        return err
    if err := check_type("!", args, 0, Bool):
        return err
    return Bool(not args[0].value)


def _branch(branch: Value, env: Environment) -> Value:
    # A non-empty Q-expression branch runs as code; anything else is the result.
    if isinstance(branch, QExpr) and branch.cells:
        return evaluate(branch.as_sexpr(), env)
    return evaluate(branch, env)


def builtin_if(env: Environment, args: list[Value]) -> Value:
    """(if cond {then} {else}) with the else branch optional."""
    if err := check_at_least("if", args, 2):
        return err
    if err := check_at_most("if", args, 3):
        return err
    if err := check_type("if", args, 0, Bool):
        return err

    if args[0].value:
        return _branch(args[1], env)
    if len(args) == 3:
        return _branch(args[2], env)
    # Return OK if no 'else' clause and the condition is false
    return OK


BUILTINS = {
    "if": builtin_if,
    "==": builtin_eq,
    "!=": builtin_not_eq,
    ">": builtin_gt,
    "<": builtin_lt,
    ">=": builtin_gte,
    "<=": builtin_lte,
    "||": builtin_or,
    "or": builtin_or,  # alias
    "&&": builtin_and,
    "and": builtin_and,  # alias
    "!": builtin_not,
    "not": builtin_not,  # alias
}
