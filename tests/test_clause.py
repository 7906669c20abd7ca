"""
Unit tests for clauses.
"""

import unittest

from cnfsat.env import FALSE, TRUE, UNDEFINED, Environment
from cnfsat.formula import Clause, Formula, LiteralInterner


class TestClause(unittest.TestCase):
    """Test cases for Clause."""

    def setUp(self):
        interner = LiteralInterner()
        self.p = interner.positive("P")
        self.q = interner.positive("Q")
        self.r = interner.positive("R")
        self.not_p = self.p.negation()
        self.not_q = self.q.negation()
        self.not_r = self.r.negation()

    def test_empty_clause(self):
        clause = Clause()
        self.assertTrue(clause.is_empty())
        self.assertFalse(clause.is_unit())
        self.assertIs(clause.evaluate(Environment()), FALSE)
        with self.assertRaises(AssertionError):
            clause.choose_literal()

    def test_add_deduplicates(self):
        clause = Clause(self.p).add(self.q)
        self.assertIs(clause.add(self.p), clause)
        self.assertEqual(clause.size(), 2)
        self.assertEqual(Clause(self.p, self.p, self.q), clause)

    def test_add_does_not_mutate(self):
        clause = Clause(self.p)
        bigger = clause.add(self.q)
        self.assertEqual(clause.size(), 1)
        self.assertEqual(bigger.size(), 2)

    def test_iteration_follows_construction_order(self):
        clause = Clause(self.q, self.not_r).add(self.p)
        self.assertEqual(list(clause), [self.q, self.not_r, self.p])
        self.assertIs(clause.choose_literal(), self.q)
        self.assertEqual(repr(clause), "Clause[Q, ~R, P]")

    def test_equality_ignores_order(self):
        self.assertEqual(Clause(self.p, self.q), Clause(self.q, self.p))
        self.assertEqual(hash(Clause(self.p, self.q)), hash(Clause(self.q, self.p)))
        self.assertNotEqual(Clause(self.p, self.q), Clause(self.p, self.not_q))
        self.assertNotEqual(Clause(self.p), Clause(self.p, self.q))

    def test_substitute(self):
        """Reducing by Q drops satisfied clauses and shrinks the others."""
        clauses = [
            Clause(self.p, self.q, self.r),
            Clause(self.p, self.not_q, self.r),
            Clause(self.not_p, self.not_q, self.r),
            Clause(self.p, self.not_q, self.not_r),
            Clause(self.not_p, self.q, self.not_r),
        ]
        expected = [
            None,
            Clause(self.p, self.r),
            Clause(self.not_p, self.r),
            Clause(self.p, self.not_r),
            None,
        ]
        for clause, result in zip(clauses, expected):
            self.assertEqual(clause.reduce(self.q), result)

    def test_reduce_unrelated_literal(self):
        clause = Clause(self.p, self.not_r)
        reduced = clause.reduce(self.q)
        self.assertEqual(reduced.size(), clause.size())
        self.assertEqual(set(reduced), set(clause))

    def test_reduce_to_empty_clause(self):
        reduced = Clause(self.not_p).reduce(self.p)
        self.assertTrue(reduced.is_empty())

    def test_choose_literal(self):
        """Repeatedly falsifying the chosen literal empties the clause."""
        clause = Clause(self.p, self.q, self.r)
        while not clause.is_empty():
            literal = clause.choose_literal()
            self.assertTrue(clause.contains(literal))
            clause = clause.reduce(literal.negation())

    def test_tautology(self):
        """A clause holding both polarities is satisfied by either one."""
        clause = Clause(self.p, self.not_p, self.q)
        self.assertEqual(clause.size(), 3)
        self.assertIsNone(clause.reduce(self.p))
        self.assertIsNone(clause.reduce(self.not_p))
        self.assertIs(clause.evaluate(Environment().put_false(self.p.variable)), TRUE)

    def test_merge(self):
        first = Clause(self.p, self.q)
        second = Clause(self.q, self.not_r)

        self.assertEqual(first.merge(second), second.merge(first))
        self.assertEqual(first.merge(second), Clause(self.p, self.q, self.not_r))
        self.assertEqual(first.merge(first), first)
        self.assertEqual(first.merge(Clause()), first)

    def test_evaluate(self):
        clause = Clause(self.p, self.not_q)
        self.assertIs(clause.evaluate(Environment()), UNDEFINED)
        self.assertIs(clause.evaluate(Environment().put_true(self.q.variable)), UNDEFINED)
        env = Environment().put_false(self.p.variable).put_true(self.q.variable)
        self.assertIs(clause.evaluate(env), FALSE)
        self.assertIs(clause.evaluate(env.put_true(self.p.variable)), TRUE)

    def test_not(self):
        """Negating a clause gives one negated unit clause per literal."""
        negation = Clause(self.p, self.not_q).not_()
        self.assertIsInstance(negation, Formula)
        self.assertEqual(negation, Formula(Clause(self.not_p), Clause(self.q)))
        self.assertEqual(~Clause(), Formula())


if __name__ == "__main__":
    unittest.main()
