"""
Utilities for cnfsat.
"""

from cnfsat.utils import exceptions, logging_utils
from cnfsat.utils.cnf import (
    check_solution,
    clause_from_ints,
    compute_satisfied_clauses,
    formula_to_dimacs,
    load_cnf_file,
    parse_dimacs,
    save_cnf_file,
)
from cnfsat.utils.sat_generator import batch_generate_ksat, generate_random_ksat

__all__ = [
    "load_cnf_file",
    "save_cnf_file",
    "parse_dimacs",
    "formula_to_dimacs",
    "check_solution",
    "clause_from_ints",
    "compute_satisfied_clauses",
    "generate_random_ksat",
    "batch_generate_ksat",
    "exceptions",
    "logging_utils",
]
