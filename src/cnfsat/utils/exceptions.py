"""
Custom exceptions for cnfsat.

Unsatisfiability is an ordinary search outcome and is reported as a ``None``
model; :class:`UnsatisfiableError` is only raised when a caller explicitly
demands a model from a result that has none.
"""

from typing import Any


class CNFSatError(Exception):
    """Base class for all cnfsat specific exceptions."""

    def __init__(self, message: str | None = None):
        """
        Initialize the exception.

        Args:
            message: Optional error message
        """
        self.message = message
        super().__init__(message)


class UnsatisfiableError(CNFSatError):
    """
    Exception raised when a model is required but the formula is unsatisfiable.
    """

    def __init__(
        self,
        message: str = "Problem is unsatisfiable",
        statistics: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            statistics: Search statistics of the failed run
        """
        self.statistics = statistics
        super().__init__(message)


class SolverTimeoutError(CNFSatError):
    """
    Exception raised when a solver exceeds its time limit.
    """

    def __init__(
        self,
        message: str = "Solver exceeded time limit",
        time_spent: float | None = None,
        decisions: int | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            time_spent: Time spent before timeout (seconds)
            decisions: Number of branching decisions made before timeout
        """
        self.time_spent = time_spent
        self.decisions = decisions

        details = []
        if time_spent is not None:
            details.append(f"time_spent={time_spent:.2f}s")
        if decisions is not None:
            details.append(f"decisions={decisions}")
        if details:
            message = f"{message} ({', '.join(details)})"

        super().__init__(message)


class SolverInterrupted(CNFSatError):
    """Raised inside the search when its stop hook asks it to give up."""

    def __init__(self, message: str = "Search was interrupted"):
        super().__init__(message)


class InvalidClauseError(CNFSatError):
    """
    Exception raised when an invalid clause is detected.

    This occurs when a clause has invalid literals or structure.
    """

    def __init__(self, message: str = "Invalid clause detected", clause: list[int] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            clause: The invalid clause
        """
        self.clause = clause

        if clause is not None:
            message = f"{message}: {clause}"

        super().__init__(message)


class DimacsFormatError(CNFSatError, ValueError):
    """Exception raised when DIMACS input cannot be parsed."""

    def __init__(self, message: str = "Invalid DIMACS input", line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)


class InvalidPuzzleError(CNFSatError, ValueError):
    """Exception raised when a puzzle grid violates its shape or value range."""


class PuzzleFormatError(CNFSatError):
    """Exception raised when a puzzle file has an error in its format."""

    def __init__(self, message: str = "Invalid puzzle file", row: int | None = None):
        self.row = row
        if row is not None:
            message = f"{message} at row {row}"
        super().__init__(message)
