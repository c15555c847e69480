from __future__ import annotations

from lispy.types.lambda_fn import Lambda
from lispy.types.symbol import VARIADIC
from lispy.types.value import Error, QExpr, Value

MALFORMED_VARIADIC = "Function format invalid. Symbol '&' not followed by a single symbol."


def bind_arguments(fn: Lambda, supplied_args: list[Value]) -> Error | None:
    """
    Single source of truth for lambda-list binding in Lispy.

    Consumes formals from `fn.formals` and binds them, one argument at a time,
    into `fn.env`. The closure is mutated in place, so callers bind into a
    copy. On return, any formals still left in `fn.formals` are unbound and
    the closure is partially applied.

    Supports:
    - Positional parameters
    - `&` followed by exactly one name, capturing the remaining arguments
      as a Q-expression

    A call that supplies arguments but stops short of `& name` leaves the
    closure partially applied. A call that supplies no arguments to a closure
    whose only remaining formals are `& name` completes it with `name`
    bound to `{}`.

    Returns an Error for too many arguments or a malformed `&`, else None.
    """
    formals = fn.formals.cells
    supplied = list(supplied_args)
    given = len(supplied)
    total = len(formals)

    while supplied:
        if not formals:
            return Error(
                "Function passed too many arguments. "
                f"Got {given}, expected {total}."
            )

        formal = formals.pop(0)

        if formal == VARIADIC:
            if len(formals) != 1:
                return Error(MALFORMED_VARIADIC)
            rest_name = formals.pop(0)
            fn.env.define(rest_name, QExpr(supplied))
            supplied = []
            break

        fn.env.define(formal, supplied.pop(0))

    if formals and formals[0] == VARIADIC:
        if len(formals) != 2:
            return Error(MALFORMED_VARIADIC)
        if given == 0:
            formals.pop(0)
            fn.env.define(formals.pop(0), QExpr())

    return None
