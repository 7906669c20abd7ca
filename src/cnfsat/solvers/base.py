"""
Common interface of the cnfsat solvers.

A solver accumulates clauses, answers ``solve`` calls with a
:class:`SolverResult` and exposes its last model and search counters.
"""

import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from cnfsat.env import Environment
from cnfsat.formula import Clause, Literal
from cnfsat.utils.exceptions import SolverTimeoutError, UnsatisfiableError


class SolverStatus(Enum):
    """Outcome of one solve call."""

    UNKNOWN = "unknown"
    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"
    TIMEOUT = "timeout"
    ERROR = "error"


class SolverResult:
    """
    What a solve call found.

    ``solution`` is the satisfying Environment for SATISFIABLE results and
    None otherwise; ``statistics`` holds the solver's counters for the call.
    """

    def __init__(
        self,
        status: SolverStatus = SolverStatus.UNKNOWN,
        solution: Environment | None = None,
        runtime: float = 0.0,
        satisfied_clauses: int = 0,
        total_clauses: int = 0,
        statistics: dict[str, Any] | None = None,
        error_message: str | None = None,
    ):
        self.status = status
        self.solution = solution
        self.runtime = runtime
        self.satisfied_clauses = satisfied_clauses
        self.total_clauses = total_clauses
        self.statistics = statistics or {}
        self.error_message = error_message

    @property
    def is_sat(self) -> bool:
        return self.status is SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        return self.status is SolverStatus.UNSATISFIABLE

    @property
    def satisfaction_ratio(self) -> float:
        """Fraction of clauses that evaluate TRUE under ``solution``."""
        if not self.total_clauses:
            # The empty formula is satisfied by any environment
            return 1.0 if self.is_sat else 0.0
        return self.satisfied_clauses / self.total_clauses

    def require_solution(self) -> Environment:
        """
        Return the satisfying environment.

        Raises:
            UnsatisfiableError: If the run proved the problem unsatisfiable
            SolverTimeoutError: If the run hit its time limit
            RuntimeError: If the run ended without an answer
        """
        if self.is_sat:
            return self.solution
        if self.is_unsat:
            raise UnsatisfiableError(statistics=self.statistics)
        if self.status is SolverStatus.TIMEOUT:
            raise SolverTimeoutError(time_spent=self.runtime, decisions=self.statistics.get("decisions"))
        raise RuntimeError(f"No solution available: {self}")

    def __str__(self) -> str:
        label = self.status.value.upper()
        if self.is_sat:
            return (
                f"SAT Result: {label} "
                f"({self.satisfied_clauses}/{self.total_clauses} clauses, {self.runtime:.4f}s)"
            )
        if self.is_unsat:
            return f"SAT Result: {label} (proved in {self.runtime:.4f}s)"
        if self.status is SolverStatus.TIMEOUT:
            return f"SAT Result: {label} ({self.runtime:.4f}s)"
        if self.status is SolverStatus.ERROR:
            return f"SAT Result: ERROR ({self.error_message})"
        return "SAT Result: UNKNOWN"


class SolverBase(ABC):
    """
    Base class of every solver the registry can create.
    """

    @abstractmethod
    def add_clause(self, clause: Clause) -> None:
        """Conjoin ``clause`` with the problem."""

    @abstractmethod
    def add_clauses(self, clauses: list[Clause]) -> None:
        """Conjoin each of ``clauses`` with the problem."""

    @abstractmethod
    def solve(
        self, assumptions: list[Literal] | None = None, timeout: float | None = None
    ) -> SolverResult:
        """
        Search for a model of the accumulated clauses.

        Args:
            assumptions: Literals taken as true for this call only
            timeout: Seconds before giving up with a TIMEOUT result

        Returns:
            SolverResult of the search
        """

    @abstractmethod
    def get_model(self) -> Environment | None:
        """Environment found by the last solve call, or None."""

    @abstractmethod
    def get_statistics(self) -> dict[str, Any]:
        """Counters of the last solve call."""

    @abstractmethod
    def interrupt(self) -> None:
        """Ask a running solve call to stop."""

    @abstractmethod
    def configure(self, config: dict[str, Any]) -> None:
        """
        Apply solver options.

        Args:
            config: Option names and values
        """

    def solve_with_timeout(
        self, timeout: float, assumptions: list[Literal] | None = None
    ) -> SolverResult:
        """
        Run :meth:`solve` and time it from the outside.

        A result still UNKNOWN once ``timeout`` seconds have passed is reported
        as TIMEOUT.
        """
        started = time.time()
        result = self.solve(assumptions=assumptions, timeout=timeout)
        elapsed = time.time() - started

        result.runtime = elapsed
        if result.status is SolverStatus.UNKNOWN and elapsed >= timeout:
            result.status = SolverStatus.TIMEOUT
        return result
