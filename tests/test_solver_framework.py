"""
Unit tests for the solver registry, result object and configuration.
"""

import os
import shutil
import tempfile
import unittest

import yaml

import cnfsat.solvers.config as solver_config
from cnfsat.formula import Clause, Formula, positive_literal
from cnfsat.solvers import (
    DPLLSolver,
    SolverBase,
    SolverConfig,
    SolverRegistry,
    SolverResult,
    SolverStatus,
    get_config,
    load_config,
)


class ConstantSolver(SolverBase):
    """Solver stub that always answers UNKNOWN."""

    def add_clause(self, clause):
        pass

    def add_clauses(self, clauses):
        pass

    def solve(self, assumptions=None, timeout=None):
        return SolverResult(status=SolverStatus.UNKNOWN)

    def get_model(self):
        return None

    def get_statistics(self):
        return {}

    def interrupt(self):
        pass

    def configure(self, config):
        pass


class TestSolverRegistry(unittest.TestCase):
    """Test cases for SolverRegistry."""

    def tearDown(self):
        SolverRegistry.unregister("constant")
        SolverRegistry.set_default("dpll")

    def test_dpll_is_discovered(self):
        self.assertIn("dpll", SolverRegistry.list_solvers())
        self.assertIs(SolverRegistry.get("dpll"), DPLLSolver)
        self.assertIs(SolverRegistry.get(), DPLLSolver)

    def test_create(self):
        formula = Formula(Clause(positive_literal("x")))
        solver = SolverRegistry.create("dpll", formula=formula)
        self.assertIsInstance(solver, DPLLSolver)
        self.assertTrue(solver.solve().is_sat)

    def test_register_and_set_default(self):
        SolverRegistry.register_as("constant")(ConstantSolver)
        self.assertIs(SolverRegistry.get("constant"), ConstantSolver)

        SolverRegistry.set_default("constant")
        self.assertIsInstance(SolverRegistry.create(), ConstantSolver)

    def test_unregister(self):
        SolverRegistry.register("constant", ConstantSolver)
        SolverRegistry.unregister("constant")
        self.assertNotIn("constant", SolverRegistry.list_solvers())
        with self.assertRaises(ValueError):
            SolverRegistry.get("constant")

    def test_invalid_registrations(self):
        with self.assertRaises(TypeError):
            SolverRegistry.register("bogus", dict)
        with self.assertRaises(ValueError):
            SolverRegistry.set_default("missing")
        with self.assertRaises(ValueError):
            SolverRegistry.get("missing")


class TestSolverResult(unittest.TestCase):
    def test_satisfaction_ratio(self):
        self.assertEqual(SolverResult(SolverStatus.SATISFIABLE).satisfaction_ratio, 1.0)
        self.assertEqual(SolverResult(SolverStatus.UNKNOWN).satisfaction_ratio, 0.0)
        result = SolverResult(SolverStatus.TIMEOUT, satisfied_clauses=3, total_clauses=4)
        self.assertEqual(result.satisfaction_ratio, 0.75)

    def test_str(self):
        self.assertEqual(str(SolverResult()), "SAT Result: UNKNOWN")
        error = SolverResult(SolverStatus.ERROR, error_message="boom")
        self.assertEqual(str(error), "SAT Result: ERROR (boom)")
        self.assertIn("UNSATISFIABLE", str(SolverResult(SolverStatus.UNSATISFIABLE)))

    def test_solve_with_timeout_marks_unknown_as_timeout(self):
        result = ConstantSolver().solve_with_timeout(0.0)
        self.assertEqual(result.status, SolverStatus.TIMEOUT)


class TestSolverConfig(unittest.TestCase):
    """Test cases for SolverConfig and the global configuration."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.original_config = solver_config.config

    def tearDown(self):
        solver_config.config = self.original_config
        shutil.rmtree(self.test_dir)

    def test_defaults(self):
        config = SolverConfig()
        self.assertEqual(config.get("solver.name"), "dpll")
        self.assertIsNone(config.get("solver.timeout"))
        self.assertEqual(config["sudoku.block_size"], 3)
        self.assertEqual(config.get("missing.key", "fallback"), "fallback")
        self.assertIn("problem.k", config)
        self.assertNotIn("missing.key", config)

    def test_set_and_update(self):
        config = SolverConfig()
        config.set("solver.timeout", 2.5)
        config["custom.option"] = "value"
        config.update({"problem": {"k": 4}})

        self.assertEqual(config.get("solver.timeout"), 2.5)
        self.assertEqual(config.get("custom.option"), "value")
        self.assertEqual(config.get("problem.k"), 4)
        self.assertEqual(config.get("problem.num_vars"), 20)
        self.assertEqual(config.to_dict()["problem"]["k"], 4)

    def test_save_and_load(self):
        path = os.path.join(self.test_dir, "nested", "config.yaml")
        config = SolverConfig()
        config.set("solver.timeout", 7)
        config.save(path)

        loaded = SolverConfig(path)
        self.assertEqual(loaded.get("solver.timeout"), 7)
        self.assertEqual(loaded.get("solver.name"), "dpll")

    def test_partial_file_merges_over_defaults(self):
        path = os.path.join(self.test_dir, "partial.yaml")
        with open(path, "w") as f:
            yaml.safe_dump({"sudoku": {"block_size": 2}}, f)

        config = load_config(path)
        self.assertIs(get_config(), config)
        self.assertEqual(config.get("sudoku.block_size"), 2)
        self.assertEqual(config.get("problem.num_clauses"), 85)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            SolverConfig(os.path.join(self.test_dir, "missing.yaml"))

    def test_load_config_without_path_keeps_global(self):
        self.assertIs(load_config(), self.original_config)

    def test_solver_reads_global_config(self):
        solver_config.config = SolverConfig()
        solver_config.config.set("solver.timeout", 3.0)
        self.assertEqual(DPLLSolver().timeout, 3.0)
        self.assertEqual(DPLLSolver(timeout=1.0).timeout, 1.0)


if __name__ == "__main__":
    unittest.main()
