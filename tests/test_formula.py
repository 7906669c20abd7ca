"""
Unit tests for formulas and their boolean algebra.
"""

import itertools
import unittest

from cnfsat.env import FALSE, TRUE, UNDEFINED, Boolean, Environment, Variable
from cnfsat.formula import Clause, Formula, LiteralInterner, positive_literal


def truth_table(formula, variables):
    """Value of ``formula`` under every total assignment of ``variables``."""
    rows = []
    for values in itertools.product([True, False], repeat=len(variables)):
        env = Environment()
        for variable, value in zip(variables, values):
            env = env.put(variable, Boolean.of(value))
        rows.append(formula.evaluate(env))
    return rows


class TestFormula(unittest.TestCase):
    """Test cases for Formula."""

    def setUp(self):
        interner = LiteralInterner()
        self.a, self.b, self.c, self.d, self.e, self.f, self.g, self.h = (
            interner.positive(name) for name in "abcdefgh"
        )
        self.not_a = self.a.negation()
        self.not_b = self.b.negation()
        self.not_c = self.c.negation()

    def test_constructors(self):
        clauses = [
            Clause(self.a, self.b, self.c),
            Clause(self.not_a, self.not_b, self.c),
            Clause(self.a, self.not_b, self.not_c),
        ]
        formula = Formula(*clauses)
        for clause in clauses:
            self.assertTrue(formula.contains(clause))
        self.assertEqual(list(formula), clauses)
        self.assertEqual(list(formula.get_clauses()), clauses)
        self.assertEqual(formula.size(), 3)

    def test_empty_formula(self):
        formula = Formula()
        self.assertEqual(len(formula), 0)
        self.assertIs(formula.evaluate(Environment()), TRUE)

    def test_variable_constructor(self):
        formula = Formula(Variable("x"))
        self.assertEqual(formula, Formula(Clause(positive_literal("x"))))

    def test_non_clause_rejected(self):
        with self.assertRaises(TypeError):
            Formula(Clause(self.a), "b")

    def test_add_clause(self):
        formula = Formula(Clause(self.a))
        extended = formula.add_clause(Clause(self.b))
        self.assertEqual(len(formula), 1)
        self.assertEqual(len(extended), 2)
        self.assertIn(Clause(self.b), extended)

    def test_and(self):
        first = Formula(Clause(self.a), Clause(self.not_b), Clause(self.c))
        second = Formula(Clause(self.b), Clause(self.not_c))
        expected = Formula(
            Clause(self.a), Clause(self.not_b), Clause(self.c), Clause(self.b), Clause(self.not_c)
        )
        self.assertEqual(first.and_(second), expected)
        self.assertEqual(first & second, expected)
        self.assertEqual(set(first & second), set(first) | set(second))

    def test_or(self):
        cases = [
            (
                Formula(Clause(self.a, self.b), Clause(self.c, self.d)),
                Formula(Clause(self.e, self.f), Clause(self.g, self.h)),
                Formula(
                    Clause(self.a, self.b, self.e, self.f),
                    Clause(self.a, self.b, self.g, self.h),
                    Clause(self.c, self.d, self.e, self.f),
                    Clause(self.c, self.d, self.g, self.h),
                ),
            ),
            (
                Formula(Clause(self.a), Clause(self.b, self.c, self.d)),
                Formula(Clause(self.e, self.f, self.g), Clause(self.h)),
                Formula(
                    Clause(self.a, self.e, self.f, self.g),
                    Clause(self.a, self.h),
                    Clause(self.b, self.c, self.d, self.e, self.f, self.g),
                    Clause(self.b, self.c, self.d, self.h),
                ),
            ),
            (
                Formula(Clause(self.not_a), Clause(self.not_b)),
                Formula(Clause(self.not_c)),
                Formula(Clause(self.not_a, self.not_c), Clause(self.not_b, self.not_c)),
            ),
        ]
        for first, second, expected in cases:
            self.assertEqual(first.or_(second), expected)
            self.assertEqual(first | second, expected)

    def test_or_is_cross_product_of_merges(self):
        first = Formula(Clause(self.a, self.b), Clause(self.not_c))
        second = Formula(Clause(self.d), Clause(self.e, self.a), Clause(self.not_b))
        result = first.or_(second)

        self.assertEqual(len(result), len(first) * len(second))
        merges = {x.merge(y) for x in first for y in second}
        self.assertEqual(set(result), merges)

    def test_not(self):
        cases = [
            (
                Formula(Clause(self.a, self.b), Clause(self.c)),
                Formula(Clause(self.not_a, self.not_c), Clause(self.not_b, self.not_c)),
            ),
            (
                Formula(Clause(self.a, self.b), Clause(self.a, self.c)),
                Formula(
                    Clause(self.not_a),
                    Clause(self.not_a, self.not_c),
                    Clause(self.not_b, self.not_a),
                    Clause(self.not_b, self.not_c),
                ),
            ),
            (
                Formula(Clause(self.a), Clause(self.b), Clause(self.c)),
                Formula(Clause(self.not_a, self.not_b, self.not_c)),
            ),
        ]
        for formula, expected in cases:
            self.assertEqual(formula.not_(), expected)
            self.assertEqual(~formula, expected)

    def test_not_of_constants(self):
        """The empty formula is true; negating it gives the empty clause."""
        false_formula = Formula().not_()
        self.assertEqual(false_formula, Formula(Clause()))
        self.assertIs(false_formula.evaluate(Environment()), FALSE)
        self.assertEqual(false_formula.not_(), Formula())

    def test_double_negation_is_equivalent(self):
        formulas = [
            Formula(Clause(self.a, self.b), Clause(self.not_a, self.c)),
            Formula(Clause(self.a), Clause(self.not_b, self.c), Clause(self.not_a, self.b)),
            Formula(Clause(self.a, self.not_a)),
        ]
        variables = [self.a.variable, self.b.variable, self.c.variable]
        for formula in formulas:
            self.assertEqual(
                truth_table(formula.not_().not_(), variables), truth_table(formula, variables)
            )
            negated = truth_table(formula.not_(), variables)
            self.assertEqual(negated, [value.not_() for value in truth_table(formula, variables)])

    def test_equals(self):
        pairs = [
            (
                Formula(Clause(self.a, self.not_a, self.b), Clause(self.c, self.b)),
                Formula(Clause(self.c, self.b), Clause(self.a, self.not_a, self.b)),
            ),
            (
                Formula(Clause(self.a, self.b), Clause(self.c, self.b)),
                Formula(Clause(self.b, self.a), Clause(self.c, self.b)),
            ),
            (
                Formula(Clause(self.c, self.a), Clause(self.not_b, self.not_a)),
                Formula(Clause(self.not_a, self.not_b), Clause(self.c, self.a)),
            ),
            (
                Formula(Clause(self.a, self.b), Clause(self.b, self.c), Clause(self.c, self.a)),
                Formula(Clause(self.b, self.c), Clause(self.c, self.a), Clause(self.a, self.b)),
            ),
        ]
        for first, second in pairs:
            self.assertEqual(first, second)
            self.assertEqual(hash(first), hash(second))

        self.assertNotEqual(Formula(Clause(self.a)), Formula(Clause(self.a), Clause(self.b)))

    def test_duplicate_clauses_compare_as_sets(self):
        self.assertEqual(Formula(Clause(self.a), Clause(self.a)), Formula(Clause(self.a)))

    def test_evaluate(self):
        formula = Formula(Clause(self.a, self.b), Clause(self.not_a))
        env = Environment().put_false(self.a.variable)
        self.assertIs(formula.evaluate(env), UNDEFINED)
        self.assertIs(formula.evaluate(env.put_true(self.b.variable)), TRUE)
        self.assertIs(formula.evaluate(env.put_false(self.b.variable)), FALSE)

    def test_variables_in_first_occurrence_order(self):
        formula = Formula(Clause(self.c, self.not_a), Clause(self.a, self.b))
        self.assertEqual(
            formula.variables(), [self.c.variable, self.a.variable, self.b.variable]
        )


if __name__ == "__main__":
    unittest.main()
