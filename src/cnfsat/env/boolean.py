"""
Three-valued boolean used when evaluating formulas.
"""

from enum import Enum


class Boolean(Enum):
    """
    Kleene logic value.

    ``UNDEFINED`` is what an unbound variable evaluates to.
    """

    TRUE = "true"
    FALSE = "false"
    UNDEFINED = "undefined"

    def and_(self, other: "Boolean") -> "Boolean":
        if self is Boolean.FALSE or other is Boolean.FALSE:
            return Boolean.FALSE
        if self is Boolean.TRUE and other is Boolean.TRUE:
            return Boolean.TRUE
        return Boolean.UNDEFINED

    def or_(self, other: "Boolean") -> "Boolean":
        if self is Boolean.TRUE or other is Boolean.TRUE:
            return Boolean.TRUE
        if self is Boolean.FALSE and other is Boolean.FALSE:
            return Boolean.FALSE
        return Boolean.UNDEFINED

    def not_(self) -> "Boolean":
        if self is Boolean.TRUE:
            return Boolean.FALSE
        if self is Boolean.FALSE:
            return Boolean.TRUE
        return Boolean.UNDEFINED

    __and__ = and_
    __or__ = or_
    __invert__ = not_

    @classmethod
    def of(cls, value: bool) -> "Boolean":
        """Convert a Python bool."""
        return cls.TRUE if value else cls.FALSE

    def __str__(self) -> str:
        return self.name
