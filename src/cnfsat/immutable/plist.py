"""
Persistent singly-linked list.

Every operation returns a new list that shares unmodified nodes with the
original, so a ``rest()`` view is never copied no matter how many lists
reference it.
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any


class PersistentList:
    """
    Immutable list with O(1) prepend and tail access.

    Iteration yields elements newest-first, i.e. the reverse of the order in
    which they were added.
    """

    __slots__ = ("_element", "_rest", "_size")

    def __init__(self):
        self._element = None
        self._rest = None
        self._size = 0

    @classmethod
    def _cons(cls, element: Any, rest: "PersistentList") -> "PersistentList":
        node = cls.__new__(cls)
        node._element = element
        node._rest = rest
        node._size = rest._size + 1
        return node

    @classmethod
    def from_iterable(cls, items: Iterable[Any]) -> "PersistentList":
        """
        Build a list whose iteration order matches the order of ``items``.

        Args:
            items: Elements to store

        Returns:
            New persistent list
        """
        result = cls()
        for element in reversed(list(items)):
            result = result.add(element)
        return result

    def add(self, element: Any) -> "PersistentList":
        """Return a new list with ``element`` prepended."""
        assert element is not None, "PersistentList.add(None)"
        return self._cons(element, self)

    def first(self) -> Any:
        assert self._size > 0, "first() called on an empty list"
        return self._element

    def rest(self) -> "PersistentList":
        assert self._size > 0, "rest() called on an empty list"
        return self._rest

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def contains(self, element: Any) -> bool:
        """Structural membership test, O(n)."""
        return self.find(lambda candidate: candidate == element) is not None

    def find(self, predicate: Callable[[Any], bool]) -> Any:
        """
        Return the newest element satisfying ``predicate``.

        Args:
            predicate: Test applied to each element

        Returns:
            The matching element, or None when nothing matches
        """
        node = self
        while node._size:
            if predicate(node._element):
                return node._element
            node = node._rest
        return None

    def remove(self, element: Any) -> "PersistentList":
        """
        Return a list without the newest element equal to ``element``.

        The nodes after the removed one are shared with this list. When the
        element is absent the list itself is returned.
        """
        prefix = []
        node = self
        while node._size:
            if node._element == element:
                result = node._rest
                for kept in reversed(prefix):
                    result = result._cons(kept, result)
                return result
            prefix.append(node._element)
            node = node._rest
        return self

    def reversed(self) -> "PersistentList":
        result = PersistentList()
        for element in self:
            result = result.add(element)
        return result

    def __iter__(self) -> Iterator[Any]:
        node = self
        while node._size:
            yield node._element
            node = node._rest

    def __len__(self) -> int:
        return self._size

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def __bool__(self) -> bool:
        return self._size > 0

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, PersistentList):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return "[" + ", ".join(repr(element) for element in self) + "]"
