"""
Propositional variables.
"""

from typing import TYPE_CHECKING

from .boolean import Boolean

if TYPE_CHECKING:
    from .environment import Environment


class Variable:
    """A named boolean unknown. Two variables are equal iff their names are."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise ValueError(f"Variable name must be a non-empty string, got {name!r}")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_name(self) -> str:
        return self._name

    def evaluate(self, environment: "Environment") -> Boolean:
        return environment.get(self)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Variable):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Variable({self._name!r})"


def make_variable(name: str) -> Variable:
    return Variable(name)
