"""
Clauses of a CNF formula.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from cnfsat.env import Boolean, Environment
from cnfsat.immutable import PersistentList

from .literal import Literal

if TYPE_CHECKING:
    from .formula import Formula


class Clause:
    """
    Immutable disjunction of literals with set semantics.

    The literal list is stored newest-first; iteration, ``choose_literal`` and
    ``repr`` present the literals in the order they were added. A clause may
    hold a literal together with its negation; ``reduce`` resolves such a
    clause to satisfied on either polarity. The empty clause is false.

    Rep invariant:
        no literal occurs twice in the list
    """

    __slots__ = ("_literals", "_ordered")

    def __init__(self, *literals: Literal):
        self._literals = PersistentList()
        self._ordered = None
        for literal in literals:
            if not self._literals.contains(literal):
                self._literals = self._literals.add(literal)
        self.check_representation()

    @classmethod
    def _from_list(cls, literals: PersistentList, check: bool = True) -> "Clause":
        clause = cls.__new__(cls)
        clause._literals = literals
        clause._ordered = None
        if check:
            clause.check_representation()
        return clause

    def check_representation(self) -> None:
        if __debug__:
            seen = set()
            for literal in self._literals:
                assert isinstance(literal, Literal), "Clause: non-literal element"
                assert literal not in seen, f"Clause: duplicate literal {literal}"
                seen.add(literal)

    def _in_order(self) -> tuple[Literal, ...]:
        if self._ordered is None:
            self._ordered = tuple(self._literals)[::-1]
        return self._ordered

    def add(self, literal: Literal) -> "Clause":
        """
        Add a literal to this clause.

        Args:
            literal: Literal to add

        Returns:
            This clause if the literal is already present, otherwise a new
            clause with the literal appended
        """
        if self._literals.contains(literal):
            return self
        return Clause._from_list(self._literals.add(literal))

    def choose_literal(self) -> Literal:
        """Return the first literal added. Requires a non-empty clause."""
        assert not self.is_empty(), "choose_literal() called on the empty clause"
        return self._in_order()[0]

    def merge(self, other: "Clause") -> "Clause":
        """Union of the literals of both clauses."""
        result = self
        for literal in other:
            result = result.add(literal)
        return result

    def not_(self) -> "Formula":
        """
        Negate this disjunction by De Morgan's law.

        Returns:
            Conjunction of one unit clause per negated literal
        """
        from .formula import Formula

        return Formula(*(Clause(literal.negation()) for literal in self))

    __invert__ = not_

    def reduce(self, literal: Literal) -> "Clause | None":
        """
        Substitute ``literal = true`` into this clause.

        Args:
            literal: Literal assumed true

        Returns:
            None if the clause becomes satisfied, the clause without the
            literal's negation if it held it, otherwise this clause
        """
        negation = literal.negation()
        found = False
        for candidate in self._literals:
            if candidate == literal:
                return None
            if not found and candidate == negation:
                found = True
        if found:
            # Removing from a duplicate-free list keeps it duplicate-free
            return Clause._from_list(self._literals.remove(negation), check=False)
        return self

    def evaluate(self, environment: Environment) -> Boolean:
        result = Boolean.FALSE
        for literal in self._literals:
            result = result.or_(literal.eval(environment))
            if result is Boolean.TRUE:
                break
        return result

    def contains(self, literal: Literal) -> bool:
        return self._literals.contains(literal)

    def size(self) -> int:
        return self._literals.size()

    def is_empty(self) -> bool:
        return self._literals.is_empty()

    def is_unit(self) -> bool:
        return self._literals.size() == 1

    def __iter__(self) -> Iterator[Literal]:
        return iter(self._in_order())

    def __len__(self) -> int:
        return self._literals.size()

    def __contains__(self, literal: Literal) -> bool:
        return self._literals.contains(literal)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Clause):
            return NotImplemented
        if self.size() != other.size():
            return False
        return all(other.contains(l) for l in self._literals) and all(
            self.contains(l) for l in other._literals
        )

    def __hash__(self) -> int:
        return hash(frozenset(self._literals))

    def __repr__(self) -> str:
        return "Clause[" + ", ".join(str(literal) for literal in self) + "]"
