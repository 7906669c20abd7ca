"""
SAT solver package with unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .config import SolverConfig, get_config, load_config
from .registry import SolverRegistry, register_solver

# Register every solver module of this package
SolverRegistry.auto_discover()

from .dpll_solver import DPLLSolver, SearchStatistics, solve  # noqa: E402

__all__ = [
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "get_config",
    "load_config",
    "SolverConfig",
    "DPLLSolver",
    "SearchStatistics",
    "solve",
]
