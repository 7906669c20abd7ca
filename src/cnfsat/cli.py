"""
cnfsat command line: solve DIMACS files and Sudoku puzzles, generate instances.
"""

import argparse
import logging
import sys
import time

import yaml

from cnfsat.puzzles import Sudoku
from cnfsat.solvers import SolverRegistry, SolverStatus, load_config
from cnfsat.utils.cnf import (
    environment_to_dimacs_model,
    formula_to_dimacs,
    load_cnf_file,
    save_cnf_file,
)
from cnfsat.utils.exceptions import CNFSatError, UnsatisfiableError
from cnfsat.utils.logging_utils import configure_logging
from cnfsat.utils.sat_generator import generate_random_ksat

logger = logging.getLogger(__name__)

EXIT_SAT = 10
EXIT_UNSAT = 20
EXIT_ERROR = 1


def _solver_options(args, config):
    options = {}
    timeout = args.timeout if args.timeout is not None else config.get("solver.timeout")
    if timeout is not None:
        options["timeout"] = timeout
    if getattr(args, "trace", None):
        options["trace"] = True
        options["trace_dir"] = args.trace
    return options


def cmd_solve(args, config) -> int:
    started = time.perf_counter()
    formula, metadata = load_cnf_file(args.file)
    print(f"c {metadata['num_variables']} variables, {len(formula)} clauses")

    solver = SolverRegistry.create(config.get("solver.name"), formula=formula, **_solver_options(args, config))
    result = solver.solve()
    elapsed = time.perf_counter() - started

    if result.status == SolverStatus.SATISFIABLE:
        print("s SATISFIABLE")
        model = environment_to_dimacs_model(result.solution, formula)
        print("v " + " ".join(str(value) for value in model) + " 0")
        code = EXIT_SAT
    elif result.status == SolverStatus.UNSATISFIABLE:
        print("s UNSATISFIABLE")
        code = EXIT_UNSAT
    else:
        print(f"s UNKNOWN ({result.error_message})")
        code = EXIT_ERROR

    if args.stats:
        print(yaml.safe_dump({"statistics": result.statistics}, default_flow_style=False), end="")
    print(f"c time: {elapsed * 1000:.2f}ms")
    return code


def cmd_sudoku(args, config) -> int:
    block_size = args.block_size or config.get("sudoku.block_size", 3)
    started = time.perf_counter()

    sudoku = Sudoku.from_file(block_size, args.file)
    print("Creating SAT formula...")
    formula = sudoku.get_problem()
    print("Solving...")
    solver = SolverRegistry.create(config.get("solver.name"), formula=formula, **_solver_options(args, config))
    result = solver.solve()

    try:
        environment = result.require_solution()
    except UnsatisfiableError:
        print("Failed solving selected Sudoku", file=sys.stderr)
        return EXIT_UNSAT

    print("Interpreting solution...")
    solution = sudoku.interpret_solution(environment)
    if not solution.is_valid():
        print("The solver came up with an invalid solution:", file=sys.stderr)
    print(f"Solution is:\n{solution}")
    print(f"Time: {(time.perf_counter() - started) * 1000:.2f}ms.")
    return EXIT_SAT


def cmd_generate(args, config) -> int:
    n_vars = args.vars or config.get("problem.num_vars")
    n_clauses = args.clauses or config.get("problem.num_clauses")
    k = args.k or config.get("problem.k")
    seed = args.seed if args.seed is not None else config.get("problem.seed")

    formula = generate_random_ksat(n_vars, n_clauses, k=k, seed=seed)
    comments = [f"random {k}-SAT, seed {seed}"]
    if args.output:
        save_cnf_file(args.output, formula, num_variables=n_vars, comments=comments)
        print(f"Wrote {len(formula)} clauses to {args.output}")
    else:
        print(formula_to_dimacs(formula, num_variables=n_vars, comments=comments))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cnfsat", description="DPLL SAT solver")
    parser.add_argument("--config", type=str, help="YAML/JSON configuration file")
    parser.add_argument("--log-level", type=str, default=None)
    subparsers = parser.add_subparsers(dest="command")

    solve_parser = subparsers.add_parser("solve", help="solve a DIMACS CNF file")
    solve_parser.add_argument("file")
    solve_parser.add_argument("--timeout", type=float, default=None)
    solve_parser.add_argument("--trace", type=str, metavar="DIR", help="write a search trace to DIR")
    solve_parser.add_argument("--stats", action="store_true", help="print search statistics")

    sudoku_parser = subparsers.add_parser("sudoku", help="solve a Sudoku puzzle file")
    sudoku_parser.add_argument("file")
    sudoku_parser.add_argument("--block-size", type=int, default=None)
    sudoku_parser.add_argument("--timeout", type=float, default=None)

    generate_parser = subparsers.add_parser("generate", help="generate a random k-SAT instance")
    generate_parser.add_argument("--vars", type=int, default=None)
    generate_parser.add_argument("--clauses", type=int, default=None)
    generate_parser.add_argument("-k", type=int, default=None)
    generate_parser.add_argument("--seed", type=int, default=None)
    generate_parser.add_argument("-o", "--output", type=str, default=None)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(
        args.log_level or config.get("logging.level"),
        config.get("logging.format"),
        config.get("logging.file"),
    )

    commands = {"solve": cmd_solve, "sudoku": cmd_sudoku, "generate": cmd_generate}
    if args.command not in commands:
        parser.print_help()
        return EXIT_ERROR

    try:
        return commands[args.command](args, config)
    except (CNFSatError, FileNotFoundError) as e:
        logger.error(str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
