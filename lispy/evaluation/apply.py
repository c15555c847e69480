"""Application engine for Lispy.

This module centralizes function application semantics:
- Builtins are called directly with the caller's environment.
- Closures bind arguments into a private copy of themselves, so the value
  held by the caller is never mutated.
- Too few arguments yields a partially applied closure; too many is an
  arity Error.
- Once fully bound, the closure environment's parent becomes the *caller's*
  environment and the body is evaluated there. Free variables in the body
  therefore resolve through the call site, not the definition site.
"""

from __future__ import annotations

from lispy.evaluation.evaluator import evaluate
from lispy.types.bind import bind_arguments
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Builtin, Function, Lambda
from lispy.types.value import Error, Value


def apply_lambda(fn: Lambda, args: list[Value], caller_env: Environment) -> Value:
    """Apply a closure to already-evaluated arguments.

    Returns the body's value, a partially applied copy of `fn` when formals
    remain unbound, or an Error from argument binding.
    """
    fn = fn.copy()

    error = bind_arguments(fn, args)
    if error is not None:
        return error

    if fn.formals.cells:
        return fn

    fn.env.outer = caller_env
    return evaluate(fn.body.as_sexpr(), fn.env)


def apply(head: Function, args: list[Value], env: Environment) -> Value:
    """Apply either a Builtin or a Lambda."""
    if isinstance(head, Builtin):
        return head(env, args)
    if isinstance(head, Lambda):
        return apply_lambda(head, args, env)
    return Error(f"Cannot apply value of type {head.type_name}.")
