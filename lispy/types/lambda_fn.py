"""Function values: builtin primitives and user closures."""

from __future__ import annotations

from io import StringIO
from typing import Callable

from lispy.types.environment import Environment
from lispy.types.value import QExpr, Value

BuiltinFn = Callable[[Environment, list[Value]], Value]


class Function(Value):
    """Common base of Builtin and Lambda."""

    __slots__ = ()
    type_name = "Function"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Function):
            return False
        if isinstance(self, Builtin) or isinstance(other, Builtin):
            return (
                isinstance(self, Builtin)
                and isinstance(other, Builtin)
                and self.fn is other.fn
            )
        return self.formals == other.formals and self.body == other.body


class Builtin(Function):
    """A named primitive. Copies alias the same primitive."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, args: list[Value]) -> Value:
        return self.fn(env, args)

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"


class Lambda(Function):
    """A closure: formal parameters, an unevaluated body and a private env."""

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: QExpr, body: QExpr, env: Environment | None = None):
        self.formals: QExpr = formals
        self.body: QExpr = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Lambda:
        return Lambda(self.formals.copy(), self.body.copy(), self.env.copy())

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
