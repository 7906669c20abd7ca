"""
Immutable assignments of variables to boolean values.
"""

from collections.abc import Iterator

from cnfsat.immutable import PersistentMap

from .boolean import Boolean
from .variable import Variable


class Environment:
    """
    Persistent mapping from :class:`Variable` to :class:`Boolean`.

    Clients normally bind only ``TRUE`` and ``FALSE``; ``UNDEFINED`` is what
    ``get`` answers for a variable with no binding. Binding a variable to
    ``UNDEFINED`` explicitly is allowed and reads back the same way.
    """

    __slots__ = ("_bindings",)

    def __init__(self, bindings: PersistentMap | None = None):
        self._bindings = bindings if bindings is not None else PersistentMap()

    def put(self, variable: Variable, value: Boolean) -> "Environment":
        """
        Bind a variable, overwriting any previous binding.

        Args:
            variable: Variable to bind
            value: Value to bind it to

        Returns:
            New environment; this one is unchanged
        """
        if not isinstance(value, Boolean):
            raise TypeError(f"Expected a Boolean value, got {type(value).__name__}")
        return Environment(self._bindings.put(variable, value))

    def put_true(self, variable: Variable) -> "Environment":
        return self.put(variable, Boolean.TRUE)

    def put_false(self, variable: Variable) -> "Environment":
        return self.put(variable, Boolean.FALSE)

    def get(self, variable: Variable) -> Boolean:
        return self._bindings.get(variable, Boolean.UNDEFINED)

    def variables(self) -> list[Variable]:
        return list(self._bindings.keys())

    def items(self) -> Iterator[tuple[Variable, Boolean]]:
        return self._bindings.items()

    def is_equivalent_to(self, other: "Environment | None") -> bool:
        """
        Compare two environments, ignoring variables undefined on either side.

        Args:
            other: Environment to compare with

        Returns:
            True iff no variable is TRUE in one and FALSE in the other
        """
        if other is None:
            return False
        if other is self:
            return True
        for variable in set(self.variables()) | set(other.variables()):
            mine, theirs = self.get(variable), other.get(variable)
            if Boolean.UNDEFINED in (mine, theirs):
                continue
            if mine is not theirs:
                return False
        return True

    def to_dict(self) -> dict[str, bool]:
        """Defined bindings as plain ``{name: bool}``."""
        return {
            variable.name: value is Boolean.TRUE
            for variable, value in self.items()
            if value is not Boolean.UNDEFINED
        }

    def __len__(self) -> int:
        return self._bindings.size()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Environment):
            return NotImplemented
        return self._bindings == other._bindings

    def __hash__(self) -> int:
        return hash(self._bindings)

    def __repr__(self) -> str:
        return f"Environment:{self._bindings!r}"
