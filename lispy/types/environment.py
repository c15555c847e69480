"""Runtime environment for Lispy.

The Environment stores bindings of Symbols to values and supports nested
scopes via an `outer` link. Values are copied on the way in and on the way
out, so a binding can never be mutated through a value handed to the
evaluator. The `outer` link is non-owning: copying an environment copies its
own bindings and shares the parent.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from lispy.types.symbol import Symbol
from lispy.types.value import Error, Value


class Environment:
    """Hierarchical mapping from Symbols to Lispy values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, Value] = {}
        self.outer: Environment | None = outer

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define(self, name: Symbol, value: Value) -> None:
        """Bind `name` to a copy of `value` in this frame only."""
        self.vars[name] = value.copy()

    def define_global(self, name: Symbol, value: Value) -> None:
        """Bind `name` to a copy of `value` in the root frame."""
        self.root().define(name, value)

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> Value:
        """Return a copy of the value bound to `name`, or an unbound-symbol Error."""
        env = self.find(name)
        if env is None:
            return Error(f"unbound symbol: '{name}'")
        return env.vars[name].copy()

    def update(self, mapping: dict[Symbol, Value]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def copy(self) -> Environment:
        env = Environment(self.outer)
        env.vars = {k: v.copy() for k, v in self.vars.items()}
        return env

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def __iter__(self) -> Iterator[tuple[Symbol, Value]]:
        return iter(self.vars.items())

    def __str__(self) -> str:
        """One `name: value` line per binding of this frame, parents excluded."""
        with StringIO() as buffer:
            for name, value in self.vars.items():
                buffer.write(f"{name}: {value}\n")
            return buffer.getvalue()
