"""
Literals and literal interning.

A literal is a variable or its negation. Each (name, polarity) pair has one
canonical instance per :class:`LiteralInterner`, created together with its
negation so that ``literal.negation()`` is a plain attribute read.
"""

import threading
from abc import ABC, abstractmethod

from cnfsat.env import Boolean, Environment, Variable
from cnfsat.immutable import PersistentMap


class Literal(ABC):
    """Base class of :class:`PositiveLiteral` and :class:`NegatedLiteral`."""

    __slots__ = ("_variable", "_negation")

    def __init__(self, variable: "str | Variable"):
        """
        Create a literal linked to a freshly built negation.

        Constructed literals are not interned; use :class:`LiteralInterner`
        (or :func:`positive_literal`/:func:`negated_literal`) for canonical
        instances.

        Args:
            variable: Variable or variable name
        """
        self._variable = _as_variable(variable)
        negation_class = self._negation_class()
        partner = negation_class.__new__(negation_class)
        partner._variable = self._variable
        partner._negation = self
        self._negation = partner

    @staticmethod
    @abstractmethod
    def _negation_class() -> type["Literal"]:
        """Class of the opposite polarity."""

    @property
    def variable(self) -> Variable:
        return self._variable

    def get_variable(self) -> Variable:
        return self._variable

    def negation(self) -> "Literal":
        return self._negation

    get_negation = negation

    @property
    @abstractmethod
    def is_positive(self) -> bool:
        """True for positive literals."""

    @abstractmethod
    def eval(self, environment: Environment) -> Boolean:
        """Value of this literal under ``environment``."""

    def check_representation(self) -> None:
        assert self._negation is not None, "Literal: negation not linked"
        assert self._negation._negation is self, "Literal: negation link not mutual"
        assert self._negation.is_positive != self.is_positive, "Literal: same polarity"

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Literal):
            return NotImplemented
        return self.is_positive == other.is_positive and self._variable == other._variable

    def __hash__(self) -> int:
        return hash((self.is_positive, self._variable))


class PositiveLiteral(Literal):
    __slots__ = ()

    @staticmethod
    def _negation_class() -> type[Literal]:
        return NegatedLiteral

    @property
    def is_positive(self) -> bool:
        return True

    def eval(self, environment: Environment) -> Boolean:
        return environment.get(self._variable)

    @staticmethod
    def make(name_or_variable: "str | Variable") -> "PositiveLiteral":
        return default_interner().positive(name_or_variable)

    def __str__(self) -> str:
        return str(self._variable)

    def __repr__(self) -> str:
        return f"PositiveLiteral({self._variable.name!r})"


class NegatedLiteral(Literal):
    __slots__ = ()

    @staticmethod
    def _negation_class() -> type[Literal]:
        return PositiveLiteral

    @property
    def is_positive(self) -> bool:
        return False

    def eval(self, environment: Environment) -> Boolean:
        return environment.get(self._variable).not_()

    @staticmethod
    def make(name_or_variable: "str | Variable") -> "NegatedLiteral":
        return default_interner().negative(name_or_variable)

    def __str__(self) -> str:
        return f"~{self._variable}"

    def __repr__(self) -> str:
        return f"NegatedLiteral({self._variable.name!r})"


class LiteralInterner:
    """
    Registry handing out canonical literals.

    Entries are only ever added. The registry is a persistent map swapped
    under a lock, so readers never see a half-built pair.
    """

    def __init__(self):
        self._registry = PersistentMap()
        self._lock = threading.Lock()

    def positive(self, name_or_variable: "str | Variable") -> PositiveLiteral:
        """
        Return the canonical positive literal for a variable.

        Args:
            name_or_variable: Variable or variable name

        Returns:
            The interned positive literal
        """
        variable = _as_variable(name_or_variable)
        literal = self._registry.get(variable.name)
        if literal is None:
            with self._lock:
                literal = self._registry.get(variable.name)
                if literal is None:
                    literal = PositiveLiteral(variable)
                    self._registry = self._registry.put(variable.name, literal)
        if __debug__:
            literal.check_representation()
        return literal

    def negative(self, name_or_variable: "str | Variable") -> NegatedLiteral:
        return self.positive(name_or_variable).negation()

    def __len__(self) -> int:
        return self._registry.size()

    def __contains__(self, name: str) -> bool:
        return self._registry.contains_key(name)


def _as_variable(name_or_variable: "str | Variable") -> Variable:
    if isinstance(name_or_variable, Variable):
        return name_or_variable
    return Variable(name_or_variable)


_default_interner = LiteralInterner()


def default_interner() -> LiteralInterner:
    """Process-wide interner behind the convenience factories."""
    return _default_interner


def positive_literal(name_or_variable: "str | Variable") -> PositiveLiteral:
    return _default_interner.positive(name_or_variable)


def negated_literal(name_or_variable: "str | Variable") -> NegatedLiteral:
    return _default_interner.negative(name_or_variable)
