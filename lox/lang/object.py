"""object.py

Defines the internal storage objects of the Lox runtime.

Environment
    Allows values to be addressed by name, chained to an outer
    Environment
"""

from typing import (
    Any,
    MutableMapping,
    Optional,
)

from .. import builtin
from . import types as t

__all__ = [
    'Environment',
    'NameMap',
    'Value',
]

# nil (None), bool, float, str, or a runtime object
Value = Any

NameMap = MutableMapping[t.NameKey, Value]


class Environment:
    """Environments can be chained (with a reference to an outer
    Environment), and names can be rebound to a different Value.

    The chain is rooted at the global Environment, which has no outer.
    An Environment is shared by every closure created while it was
    current, and lives as long as any of them.

    Methods
    -------
    has(name)
        returns True if the name exists in this Environment,
        otherwise returns False
    define(name, value)
        binds name to value in this Environment
    get(token)
        retrieves the value bound to the token's name, searching
        outward
    assign(token, value)
        rebinds the token's name, searching outward
    ancestor(depth)
        returns the Environment depth hops outward
    getAt(depth, name)
        retrieves the value bound to name, depth hops outward
    assignAt(depth, token, value)
        rebinds the token's name, depth hops outward
    lookup(name)
        returns the first Environment containing the name
    """
    __slots__ = ("data", "outer")

    def __init__(self, outer: "Environment" = None) -> None:
        self.data: NameMap = {}
        self.outer = outer

    def __repr__(self) -> str:
        names = ', '.join(self.data)
        return f"{{{names}}}"

    def has(self, name: t.NameKey) -> bool:
        return name in self.data

    def define(self, name: t.NameKey, value: Value) -> None:
        self.data[name] = value

    def lookup(self, name: t.NameKey) -> Optional["Environment"]:
        env = self
        while env is not None:
            if env.has(name):
                return env
            env = env.outer
        return None

    def get(self, token) -> Value:
        env = self.lookup(token.word)
        if env is None:
            raise builtin.RuntimeError(
                f"Undefined variable '{token.word}'.", token
            )
        return env.data[token.word]

    def assign(self, token, value: Value) -> None:
        env = self.lookup(token.word)
        if env is None:
            raise builtin.RuntimeError(
                f"Undefined variable '{token.word}'.", token
            )
        env.data[token.word] = value

    def ancestor(self, depth: int) -> "Environment":
        env = self
        for _ in range(depth):
            env = env.outer
        return env

    def getAt(self, depth: int, name: t.NameKey) -> Value:
        # The resolver guarantees the name exists at this depth
        return self.ancestor(depth).data[name]

    def assignAt(self, depth: int, token, value: Value) -> None:
        self.ancestor(depth).data[token.word] = value
