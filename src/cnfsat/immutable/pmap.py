"""
Persistent association map built on :class:`PersistentList`.

No hashing is involved: lookups and insertions walk the binding list, which
is fine for the small maps used by environments and the literal registry.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .plist import PersistentList


@dataclass(frozen=True)
class Binding:
    key: Any
    value: Any


class PersistentMap:
    """
    Immutable key/value map.

    Invariant: the underlying list holds at most one binding per key, so
    ``size`` and ``keys`` never see a stale binding.
    """

    __slots__ = ("_bindings",)

    def __init__(self, bindings: PersistentList | None = None):
        self._bindings = bindings if bindings is not None else PersistentList()

    def _binding(self, key: Any) -> Binding | None:
        return self._bindings.find(lambda binding: binding.key == key)

    def put(self, key: Any, value: Any) -> "PersistentMap":
        """
        Bind ``key`` to ``value``, replacing any existing binding.

        Args:
            key: Key to bind (must not be None)
            value: Value to associate

        Returns:
            New map containing the binding
        """
        assert key is not None, "PersistentMap.put(None, ...)"
        bindings = self._bindings
        previous = self._binding(key)
        if previous is not None:
            bindings = bindings.remove(previous)
        return PersistentMap(bindings.add(Binding(key, value)))

    def get(self, key: Any, default: Any = None) -> Any:
        binding = self._binding(key)
        return default if binding is None else binding.value

    def contains_key(self, key: Any) -> bool:
        return self._binding(key) is not None

    def keys(self) -> PersistentList:
        """Return the bound keys, each exactly once."""
        return PersistentList.from_iterable(binding.key for binding in self._bindings)

    def items(self) -> Iterator[tuple[Any, Any]]:
        for binding in self._bindings:
            yield binding.key, binding.value

    def size(self) -> int:
        return self._bindings.size()

    def is_empty(self) -> bool:
        return self._bindings.is_empty()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistentMap):
            return NotImplemented
        if self.size() != other.size():
            return False
        missing = object()
        return all(other.get(key, missing) == value for key, value in self.items())

    def __hash__(self) -> int:
        return hash(frozenset(self.items()))

    def __repr__(self) -> str:
        return "{" + ", ".join(f"{key!r}: {value!r}" for key, value in self.items()) + "}"
