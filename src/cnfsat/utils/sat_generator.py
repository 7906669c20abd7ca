"""
Random k-SAT instance generator for benchmarks and property tests.
"""

import numpy as np

from cnfsat.formula import Formula, LiteralInterner

from .cnf import clause_from_ints


def generate_random_ksat_clauses(n_vars, n_clauses, k=3, seed=None):
    """Generate a random k-SAT instance as a list of DIMACS-style clauses."""
    if k > n_vars:
        raise ValueError(f"k ({k}) cannot exceed the number of variables ({n_vars})")
    rng = np.random.default_rng(seed)
    clauses = []
    for _ in range(n_clauses):
        vars_ = rng.choice(np.arange(1, n_vars + 1), size=k, replace=False)
        signs = rng.choice([-1, 1], size=k)
        clauses.append([int(lit) for lit in vars_ * signs])
    return clauses


def generate_random_ksat(n_vars, n_clauses, k=3, seed=None, interner: LiteralInterner | None = None):
    """Generate a random k-SAT formula over the variables "1" .. str(n_vars)."""
    clauses = generate_random_ksat_clauses(n_vars, n_clauses, k, seed)
    return Formula(*(clause_from_ints(clause, interner) for clause in clauses))


def batch_generate_ksat(n_vars, n_clauses, k=3, n_instances=10, seed=None):
    """Batch-generate random k-SAT formulas."""
    seeds = [seed + i if seed is not None else None for i in range(n_instances)]
    return [generate_random_ksat(n_vars, n_clauses, k, s) for s in seeds]
