"""List and string sequence builtins.

`head`, `first` and `tail` accept either a Q-expression or a String; the
other list operations work on Q-expressions only. None of them mutate their
arguments; each returns a fresh value.
"""

from __future__ import annotations

from lispy.builtin.checks import (
    check_at_least,
    check_count,
    check_not_empty,
    check_type,
)
from lispy.evaluation.evaluator import evaluate
from lispy.types.environment import Environment
from lispy.types.value import Char, Expr, Long, QExpr, SExpr, String, Value


def _check_sequence(fn: str, args: list[Value]) -> Value | None:
    if err := check_count(fn, args, 1):
        return err
    if err := check_type(fn, args, 0, QExpr, String):
        return err
    return check_not_empty(fn, args, 0)


def builtin_head(env: Environment, args: list[Value]) -> Value:
    """(head {a b c}) => {a}; (head "abc") => "a"."""
    if err := _check_sequence("head", args):
        return err
    xs = args[0]
    if isinstance(xs, String):
        return String(xs.value[0])
    return QExpr([xs.cells[0]])


def builtin_first(env: Environment, args: list[Value]) -> Value:
    """(first {a b c}) => a; (first "abc") => 'a'."""
    if err := _check_sequence("first", args):
        return err
    xs = args[0]
    if isinstance(xs, String):
        return Char(xs.value[0])
    return xs.cells[0]


def builtin_tail(env: Environment, args: list[Value]) -> Value:
    """(tail {a b c}) => {b c}; (tail "abc") => "bc"."""
    if err := _check_sequence("tail", args):
        return err
    xs = args[0]
    if isinstance(xs, String):
        return String(xs.value[1:])
    return QExpr(xs.cells[1:])


def builtin_init(env: Environment, args: list[Value]) -> Value:
    """(init {a b c}) => {a b}."""
    if err := check_count("init", args, 1):
        return err
    if err := check_type("init", args, 0, QExpr):
        return err
    if err := check_not_empty("init", args, 0):
        return err
    return QExpr(args[0].cells[:-1])


def builtin_list(env: Environment, args: list[Value]) -> Value:
    """Collect the arguments into a Q-expression."""
    return QExpr(args)


def builtin_eval(env: Environment, args: list[Value]) -> Value:
    """Evaluate a Q-expression as if it were an S-expression."""
    if err := check_count("eval", args, 1):
        return err
    if err := check_type("eval", args, 0, QExpr):
        return err
    return evaluate(args[0].as_sexpr(), env)


def builtin_join(env: Environment, args: list[Value]) -> Value:
    """
    Concatenate Q-expressions, or concatenate Strings.
    The first argument decides which; S-expressions count as Q-expressions.
    """
    if err := check_at_least("join", args, 1):
        return err
    args = [a.as_qexpr() if isinstance(a, SExpr) else a for a in args]
    if err := check_type("join", args, 0, String, QExpr):
        return err

    kind = type(args[0])
    for i in range(1, len(args)):
        if err := check_type("join", args, i, kind):
            return err

    if kind is String:
        return String("".join(a.value for a in args))
    return QExpr(cell for a in args for cell in a.cells)


def builtin_cons(env: Environment, args: list[Value]) -> Value:
    """(cons x {a b}) => {x a b}."""
    if err := check_count("cons", args, 2):
        return err
    if err := check_type("cons", args, 1, QExpr):
        return err
    return QExpr([args[0], *args[1].cells])


def builtin_len(env: Environment, args: list[Value]) -> Value:
    """Number of elements in a Q-expression."""
    if err := check_count("len", args, 1):
        return err
    if err := check_type("len", args, 0, QExpr):
        return err
    xs: Expr = args[0]
    return Long(len(xs.cells))


BUILTINS = {
    "head": builtin_head,
    "first": builtin_first,
    "tail": builtin_tail,
    "rest": builtin_tail,  # alias for tail
    "init": builtin_init,
    "list": builtin_list,
    "cons": builtin_cons,
    "join": builtin_join,
    "eval": builtin_eval,
    "len": builtin_len,
}
