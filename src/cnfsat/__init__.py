"""
cnfsat: a DPLL satisfiability solver over persistent CNF data structures.
"""

from cnfsat.env import FALSE, TRUE, UNDEFINED, Boolean, Environment, Variable, make_variable
from cnfsat.formula import (
    Clause,
    Formula,
    Literal,
    LiteralInterner,
    NegatedLiteral,
    PositiveLiteral,
    negated_literal,
    positive_literal,
)
from cnfsat.solvers import DPLLSolver, SolverResult, SolverStatus, solve

__version__ = "0.1.0"

__all__ = [
    "Boolean",
    "TRUE",
    "FALSE",
    "UNDEFINED",
    "Environment",
    "Variable",
    "make_variable",
    "Clause",
    "Formula",
    "Literal",
    "LiteralInterner",
    "NegatedLiteral",
    "PositiveLiteral",
    "positive_literal",
    "negated_literal",
    "solve",
    "DPLLSolver",
    "SolverResult",
    "SolverStatus",
]
