"""
Immutable CNF formulas.
"""

from collections.abc import Iterator

from cnfsat.env import Boolean, Environment, Variable
from cnfsat.immutable import PersistentList

from .clause import Clause
from .literal import positive_literal


class Formula:
    """
    Conjunction of clauses, intended to be solved by a SAT solver.

    The clause list is stored newest-first and may contain duplicates;
    iteration yields clauses in the order they were added. Two formulas are
    equal when each one's clauses all occur in the other.

    The empty formula is vacuously true; a formula holding the empty clause
    is unsatisfiable.
    """

    __slots__ = ("_clauses",)

    def __init__(self, *clauses: "Clause | Variable"):
        """
        Args:
            *clauses: Clauses to conjoin, or a single variable, which gives
                the formula with one unit clause on that variable
        """
        if len(clauses) == 1 and isinstance(clauses[0], Variable):
            clauses = (Clause(positive_literal(clauses[0])),)
        result = PersistentList()
        for clause in clauses:
            if not isinstance(clause, Clause):
                raise TypeError(f"Formula expects Clause arguments, got {type(clause).__name__}")
            result = result.add(clause)
        self._clauses = result

    @classmethod
    def _from_list(cls, clauses: PersistentList) -> "Formula":
        formula = cls.__new__(cls)
        formula._clauses = clauses
        return formula

    def add_clause(self, clause: Clause) -> "Formula":
        """Return a new formula with ``clause`` added."""
        return Formula._from_list(self._clauses.add(clause))

    def get_clauses(self) -> PersistentList:
        """The clauses as a persistent list, in the order they were added."""
        return self._clauses.reversed()

    def contains(self, clause: Clause) -> bool:
        return self._clauses.contains(clause)

    def size(self) -> int:
        return self._clauses.size()

    def and_(self, other: "Formula") -> "Formula":
        """
        Conjunction: the clauses of this formula followed by those of ``other``.
        """
        result = self._clauses
        for clause in other:
            result = result.add(clause)
        return Formula._from_list(result)

    def or_(self, other: "Formula") -> "Formula":
        """
        Disjunction by the distributive law.

        ``(a & b) | (c & d)`` becomes ``(a|c) & (a|d) & (b|c) & (b|d)``: the
        result holds ``len(self) * len(other)`` clauses, one merge per pair.
        """
        result = PersistentList()
        for first in self:
            for second in other:
                result = result.add(first.merge(second))
        return Formula._from_list(result)

    def not_(self) -> "Formula":
        """
        Negation by De Morgan's laws.

        ``~(c1 & c2 & ... & cn)`` is ``~c1 | ~c2 | ... | ~cn``, where each
        ``~ci`` is already a conjunction of unit clauses; the disjunctions are
        distributed with :meth:`or_`. The negation of the empty (true)
        formula is the formula holding only the empty clause.
        """
        clauses = iter(self)
        first = next(clauses, None)
        if first is None:
            return Formula(Clause())
        result = first.not_()
        for clause in clauses:
            result = result.or_(clause.not_())
        return result

    __and__ = and_
    __or__ = or_
    __invert__ = not_

    def evaluate(self, environment: Environment) -> Boolean:
        result = Boolean.TRUE
        for clause in self._clauses:
            result = result.and_(clause.evaluate(environment))
            if result is Boolean.FALSE:
                break
        return result

    def variables(self) -> list[Variable]:
        """Distinct variables of the formula, in order of first occurrence."""
        seen = {}
        for clause in self:
            for literal in clause:
                seen.setdefault(literal.variable, None)
        return list(seen)

    def __iter__(self) -> Iterator[Clause]:
        return iter(tuple(self._clauses)[::-1])

    def __len__(self) -> int:
        return self._clauses.size()

    def __contains__(self, clause: Clause) -> bool:
        return self.contains(clause)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Formula):
            return NotImplemented
        return frozenset(self._clauses) == frozenset(other._clauses)

    def __hash__(self) -> int:
        return hash(frozenset(self._clauses))

    def __repr__(self) -> str:
        return "Formula[" + ", ".join(repr(clause) for clause in self) + "]"
