"""
DPLL solver: backtracking search with unit propagation.

:func:`solve` is the pure decision procedure over persistent clause lists.
:class:`DPLLSolver` wraps it in the common solver interface, adding
assumptions, timeouts, statistics and optional structured tracing.
"""

import logging
import time
import traceback
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any

from cnfsat.env import Boolean, Environment
from cnfsat.formula import Clause, Formula, Literal
from cnfsat.immutable import PersistentList
from cnfsat.utils.cnf import compute_satisfied_clauses
from cnfsat.utils.exceptions import SolverInterrupted
from cnfsat.utils.logging_utils import StructuredLogger, create_logger

from .base import SolverBase, SolverResult, SolverStatus
from .config import get_config
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)

EMPTY_CLAUSE = Clause()


@dataclass
class SearchStatistics:
    """Counters collected during one search."""

    decisions: int = 0
    propagations: int = 0
    backtracks: int = 0
    max_depth: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class _Frame:
    """
    Pending search state: assume ``literal`` true in ``clauses``/``environment``.

    The root frame has no literal. The false branch of a decision is pushed
    beneath its true branch, so popping it is the backtrack.
    """

    clauses: PersistentList
    environment: Environment
    literal: Literal | None
    depth: int
    forced: bool


def solve(
    formula: Formula,
    statistics: SearchStatistics | None = None,
    should_stop: Callable[[], bool] | None = None,
    trace: StructuredLogger | None = None,
) -> Environment | None:
    """
    Solve a CNF formula with DPLL.

    Args:
        formula: Formula to satisfy
        statistics: Optional counters updated in place
        should_stop: Optional hook polled once per search step
        trace: Optional structured logger receiving decision/backtrack events

    Returns:
        An environment under which every clause evaluates to TRUE, or None if
        the formula is unsatisfiable. Variables the search never had to bind
        are left out of the environment.

    Raises:
        SolverInterrupted: Only if ``should_stop`` returns True
    """
    stats = statistics if statistics is not None else SearchStatistics()
    debug = logger.isEnabledFor(logging.DEBUG)
    stack = [_Frame(formula.get_clauses(), Environment(), None, 0, False)]

    while stack:
        if should_stop is not None and should_stop():
            raise SolverInterrupted()

        frame = stack.pop()
        clauses, environment, literal = frame.clauses, frame.environment, frame.literal
        depth, forced = frame.depth, frame.forced

        if literal is not None:
            if forced:
                stats.propagations += 1
            else:
                stats.decisions += 1
            if trace is not None:
                trace.log_decision(depth, str(literal), literal.is_positive, forced, clauses.size())
            if debug:
                kind = "propagate" if forced else "decide"
                logger.debug(f"[depth {depth}] {kind} {literal} ({clauses.size()} clauses)")
            clauses = _substitute(clauses, literal)
            environment = _assign(environment, literal)
            depth += 1
            stats.max_depth = max(stats.max_depth, depth)

        if clauses.is_empty():
            return environment
        if clauses.contains(EMPTY_CLAUSE):
            stats.backtracks += 1
            if trace is not None:
                trace.log_backtrack(depth, stats.backtracks)
            continue

        shortest = _find_shortest_clause(clauses)
        chosen = shortest.choose_literal()

        if shortest.is_unit():
            stack.append(_Frame(clauses, environment, chosen, depth, True))
        else:
            stack.append(_Frame(clauses, environment, chosen.negation(), depth, False))
            stack.append(_Frame(clauses, environment, chosen, depth, False))

    return None


def _substitute(clauses: PersistentList, literal: Literal) -> PersistentList:
    """Set ``literal`` true: drop satisfied clauses and shrink the rest."""
    reduced = []
    for clause in clauses:
        result = clause.reduce(literal)
        if result is not None:
            reduced.append(result)
    return PersistentList.from_iterable(reduced)


def _assign(environment: Environment, literal: Literal) -> Environment:
    value = Boolean.TRUE if literal.is_positive else Boolean.FALSE
    return environment.put(literal.variable, value)


def _find_shortest_clause(clauses: PersistentList) -> Clause:
    """First clause with the fewest literals. Requires a non-empty list."""
    result = clauses.first()
    for clause in clauses.rest():
        if result.size() == 1:
            break
        if clause.size() < result.size():
            result = clause
    return result


@register_solver("dpll")
class DPLLSolver(SolverBase):
    """
    DPLL solver over :class:`Formula` values.
    """

    solver_name = "dpll"

    CONFIG_KEYS = ("timeout", "trace", "trace_dir")

    def __init__(self, formula: Formula | None = None, **kwargs):
        """
        Initialize the DPLL solver.

        Args:
            formula: Initial problem (defaults to the empty, true formula)
            **kwargs: Overrides for the ``solver.*`` configuration keys
        """
        config = get_config()

        self.timeout = config.get("solver.timeout")
        self.trace = config.get("solver.trace", False)
        self.trace_dir = config.get("solver.trace_dir", "./traces")
        self.configure(kwargs)

        self.formula = formula if formula is not None else Formula()
        self.solution = None
        self.interrupted = False

        self.stats = {
            "decisions": 0,
            "propagations": 0,
            "backtracks": 0,
            "max_depth": 0,
            "satisfied_clauses": 0,
            "total_clauses": 0,
            "solver_name": self.solver_name,
        }

    def add_clause(self, clause: Clause) -> None:
        self.formula = self.formula.add_clause(clause)

    def add_clauses(self, clauses: list[Clause]) -> None:
        for clause in clauses:
            self.formula = self.formula.add_clause(clause)

    def add_formula(self, formula: Formula) -> None:
        """Conjoin a whole formula with the problem."""
        self.formula = self.formula.and_(formula)

    def solve(
        self, assumptions: list[Literal] | None = None, timeout: float | None = None
    ) -> SolverResult:
        """
        Solve the accumulated formula.

        Args:
            assumptions: Literals assumed true for this call only
            timeout: Timeout in seconds (falls back to the configured one)

        Returns:
            SolverResult; ``solution`` holds the Environment when satisfiable
        """
        timeout = timeout if timeout is not None else self.timeout

        formula = self.formula
        for literal in assumptions or []:
            formula = formula.add_clause(Clause(literal))

        self.interrupted = False
        self.solution = None
        start_time = time.time()
        deadline = start_time + timeout if timeout is not None else None

        def should_stop() -> bool:
            return self.interrupted or (deadline is not None and time.time() >= deadline)

        statistics = SearchStatistics()
        trace = self._open_trace(start_time) if self.trace else None
        error_message = None

        logger.info(f"Solving formula with {len(formula)} clauses")
        try:
            environment = solve(formula, statistics, should_stop, trace)
            status = SolverStatus.SATISFIABLE if environment is not None else SolverStatus.UNSATISFIABLE
        except SolverInterrupted:
            environment = None
            if self.interrupted:
                status = SolverStatus.ERROR
                error_message = "Solving was interrupted"
            else:
                status = SolverStatus.TIMEOUT
                error_message = f"Timeout reached ({timeout}s)"
            logger.warning(error_message)
        except Exception as e:
            if trace is not None:
                trace.log_exception(type(e).__name__, str(e), traceback.format_exc())
                trace.finalize()
            raise

        runtime = time.time() - start_time
        self.solution = environment

        satisfied = compute_satisfied_clauses(formula, environment) if environment is not None else 0
        self.stats.update(statistics.as_dict())
        self.stats["satisfied_clauses"] = satisfied
        self.stats["total_clauses"] = len(formula)

        if trace is not None:
            trace.log_result(status.value, runtime, statistics.as_dict())
            trace.finalize()

        logger.info(f"DPLL finished: {status.value} in {runtime:.4f}s ({statistics.decisions} decisions)")

        return SolverResult(
            status=status,
            solution=environment,
            runtime=runtime,
            satisfied_clauses=satisfied,
            total_clauses=len(formula),
            statistics=dict(self.stats),
            error_message=error_message,
        )

    def _open_trace(self, start_time: float) -> StructuredLogger:
        run_name = f"dpll_{int(start_time * 1000)}"
        return create_logger(run_name, output_dir=self.trace_dir, visualize_ready=True)

    def get_model(self) -> Environment | None:
        return self.solution

    def get_statistics(self) -> dict[str, Any]:
        return dict(self.stats)

    def interrupt(self) -> None:
        self.interrupted = True

    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver.

        Args:
            config: Any of ``timeout``, ``trace`` and ``trace_dir``

        Raises:
            ValueError: On an unknown key
        """
        for key, value in config.items():
            if key not in self.CONFIG_KEYS:
                raise ValueError(f"Unknown DPLL solver option: {key}")
            setattr(self, key, value)
