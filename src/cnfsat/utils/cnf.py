"""
CNF file handling utilities.

This module loads and saves formulas in DIMACS format and checks assignments
against them. DIMACS variable ``n`` corresponds to the :class:`Variable`
named ``"n"``.
"""

import logging
import os
from typing import Any, TextIO

from cnfsat.env import Boolean, Environment
from cnfsat.formula import Clause, Formula, LiteralInterner, default_interner

from .exceptions import DimacsFormatError, InvalidClauseError

# Set up logging
logger = logging.getLogger(__name__)


def load_cnf_file(
    file_path: str, interner: LiteralInterner | None = None
) -> tuple[Formula, dict[str, Any]]:
    """
    Load a CNF formula from a DIMACS file.

    Args:
        file_path: Path to the CNF file in DIMACS format
        interner: Interner to build literals with (defaults to the shared one)

    Returns:
        Tuple of (formula, metadata)

    Raises:
        FileNotFoundError: If the file doesn't exist
        DimacsFormatError: If the file format is invalid
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CNF file not found: {file_path}")

    with open(file_path) as f:
        return parse_dimacs(f, interner)


def clause_from_ints(values: list[int], interner: LiteralInterner | None = None) -> Clause:
    """
    Build a clause from DIMACS-style signed integers.

    Args:
        values: Non-zero literals; ``n`` is variable "n", ``-n`` its negation
        interner: Interner to build literals with (defaults to the shared one)

    Raises:
        InvalidClauseError: If a literal is 0
    """
    interner = interner or default_interner()
    clause = Clause()
    for value in values:
        if value == 0:
            raise InvalidClauseError("DIMACS literal 0 inside a clause", values)
        name = str(abs(value))
        clause = clause.add(interner.positive(name) if value > 0 else interner.negative(name))
    return clause


def parse_dimacs(
    source: str | TextIO, interner: LiteralInterner | None = None
) -> tuple[Formula, dict[str, Any]]:
    """
    Parse a CNF formula from DIMACS format.

    Args:
        source: DIMACS content as a string or file-like object
        interner: Interner to build literals with (defaults to the shared one)

    Returns:
        Tuple of (formula, metadata)
        - formula: Formula with the clauses in file order
        - metadata: Dictionary with comments, num_variables and num_clauses

    Raises:
        DimacsFormatError: If the format is invalid
    """
    interner = interner or default_interner()

    if isinstance(source, str):
        lines = source.strip().split("\n")
    else:
        lines = source.readlines()

    formula = Formula()
    metadata = {"comments": [], "num_variables": 0, "num_clauses": 0}

    found_problem_line = False
    current_clause = []
    clause_count = 0

    for line_number, line in enumerate(lines, start=1):
        line = line.strip()

        if not line:
            continue

        if line.startswith("c"):
            metadata["comments"].append(line[1:].strip())
            continue

        if line.startswith("%"):
            # SATLIB files end with "%" followed by a stray "0"
            break

        if line.startswith("p"):
            if found_problem_line:
                raise DimacsFormatError("Multiple problem lines in CNF file", line_number)

            parts = line.split()
            if len(parts) < 4 or parts[1] != "cnf":
                raise DimacsFormatError(f"Invalid problem line: {line}", line_number)

            try:
                metadata["num_variables"] = int(parts[2])
                metadata["num_clauses"] = int(parts[3])
            except ValueError:
                raise DimacsFormatError(f"Invalid numbers in problem line: {line}", line_number)

            found_problem_line = True
            continue

        if not found_problem_line:
            raise DimacsFormatError("Clause data before the problem line", line_number)

        try:
            values = [int(x) for x in line.split()]
        except ValueError:
            raise DimacsFormatError(f"Invalid clause line: {line}", line_number)

        for value in values:
            if abs(value) > metadata["num_variables"]:
                raise DimacsFormatError(
                    f"Variable {abs(value)} exceeds declared count {metadata['num_variables']}",
                    line_number,
                )
            if value == 0:
                formula = formula.add_clause(clause_from_ints(current_clause, interner))
                clause_count += 1
                current_clause = []
            else:
                current_clause.append(value)

    # A final clause may omit its terminating 0
    if current_clause:
        formula = formula.add_clause(clause_from_ints(current_clause, interner))
        clause_count += 1

    if not found_problem_line:
        raise DimacsFormatError("No problem line found in CNF file")

    if clause_count != metadata["num_clauses"]:
        raise DimacsFormatError(
            f"Expected {metadata['num_clauses']} clauses, but found {clause_count}"
        )

    logger.debug(
        f"Parsed DIMACS formula: {metadata['num_variables']} variables, {clause_count} clauses"
    )
    return formula, metadata


def variable_numbering(formula: Formula) -> dict[str, int]:
    """
    Assign DIMACS numbers to the variables of a formula.

    Variables named by a canonical positive integer (``"7"``, not ``"07"``)
    keep it; the others get the next free numbers in order of first
    occurrence.
    """
    numbering = {}
    pending = []
    for variable in formula.variables():
        name = variable.name
        if name.isascii() and name.isdigit() and str(int(name)) == name and int(name) > 0:
            numbering[name] = int(name)
        else:
            pending.append(name)

    next_number = max(numbering.values(), default=0) + 1
    for name in pending:
        numbering[name] = next_number
        next_number += 1
    return numbering


def formula_to_dimacs(
    formula: Formula,
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> str:
    """
    Convert a formula to DIMACS format.

    Args:
        formula: Formula to convert
        num_variables: Number of variables (computed if not provided)
        comments: List of comment lines to include

    Returns:
        DIMACS format string representation
    """
    if comments is None:
        comments = []

    numbering = variable_numbering(formula)
    if num_variables is None:
        num_variables = max(numbering.values(), default=0)

    lines = []

    for comment in comments:
        lines.append(f"c {comment}")

    # Record the names that had to be renumbered
    for name, number in numbering.items():
        if name != str(number):
            lines.append(f"c var {number} {name}")

    lines.append(f"p cnf {num_variables} {len(formula)}")

    for clause in formula:
        values = [
            str(numbering[l.variable.name] if l.is_positive else -numbering[l.variable.name])
            for l in clause
        ]
        lines.append(" ".join(values + ["0"]))

    return "\n".join(lines)


def save_cnf_file(
    file_path: str,
    formula: Formula,
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> None:
    """
    Save a CNF formula to a DIMACS file.

    Args:
        file_path: Path to save the CNF file
        formula: Formula to save
        num_variables: Number of variables (computed if not provided)
        comments: List of comment lines to include
    """
    dimacs_str = formula_to_dimacs(formula, num_variables, comments)

    with open(file_path, "w") as f:
        f.write(dimacs_str + "\n")


def check_solution(formula: Formula, environment: Environment) -> bool:
    """
    Check if an environment satisfies every clause of a formula.

    Args:
        formula: Formula to check
        environment: Assignment; unbound variables evaluate UNDEFINED

    Returns:
        True iff the formula evaluates to TRUE
    """
    return formula.evaluate(environment) is Boolean.TRUE


def compute_satisfied_clauses(formula: Formula, environment: Environment) -> int:
    """
    Count the clauses of a formula that evaluate to TRUE.

    Args:
        formula: Formula to check
        environment: Assignment

    Returns:
        Number of satisfied clauses
    """
    return sum(1 for clause in formula if clause.evaluate(environment) is Boolean.TRUE)


def environment_to_dimacs_model(environment: Environment, formula: Formula) -> list[int]:
    """
    Express an environment as a DIMACS model line (signed variable numbers).

    Variables left undefined are reported as false, following the convention
    that any value works for them.
    """
    numbering = variable_numbering(formula)
    model = []
    for variable in formula.variables():
        number = numbering[variable.name]
        model.append(number if environment.get(variable) is Boolean.TRUE else -number)
    return sorted(model, key=abs)
