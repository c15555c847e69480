"""Core evaluator for the Lispy interpreter.

Reduction is a plain recursive walk. Symbols are looked up, S-expressions are
reduced to a function call, and every other value (Q-expressions included)
evaluates to itself. A one-element S-expression holding a non-function
reduces to that element, so a closure body such as {xs} yields xs.
Errors are values: the first Error produced among an S-expression's
elements is the result of the whole expression.
"""

from __future__ import annotations

from lispy.types.environment import Environment
from lispy.types.lambda_fn import Function
from lispy.types.symbol import Symbol
from lispy.types.value import Error, SExpr, Value


def evaluate(expr: Value, env: Environment) -> Value:
    """Reduce `expr` to a value in `env`."""
    match expr:
        case Symbol():
            return env.lookup(expr)
        case SExpr():
            return evaluate_sexpr(expr, env)

    # --- Everything else is self-evaluating ---
    return expr


def evaluate_sexpr(expr: SExpr, env: Environment) -> Value:
    # Evaluate every element first, left to right.
    cells = [evaluate(cell, env) for cell in expr.cells]

    # Error short-circuit: the leftmost error wins.
    for cell in cells:
        if isinstance(cell, Error):
            return cell

    if not cells:
        return SExpr()

    head, *args = cells
    # (x) is just x, unless x is something to call
    if not args and not isinstance(head, Function):
        return head
    if not isinstance(head, Function):
        return Error(
            "S-expression starts with incorrect type. "
            f"Got {head.type_name}, expected {Function.type_name}."
        )

    # Local import: apply evaluates closure bodies through this module
    from lispy.evaluation.apply import apply
    return apply(head, args, env)
