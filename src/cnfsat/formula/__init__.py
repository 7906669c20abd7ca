"""
CNF algebra: literals, clauses and formulas.
"""

from .clause import Clause
from .formula import Formula
from .literal import (
    Literal,
    LiteralInterner,
    NegatedLiteral,
    PositiveLiteral,
    default_interner,
    negated_literal,
    positive_literal,
)

__all__ = [
    "Clause",
    "Formula",
    "Literal",
    "LiteralInterner",
    "NegatedLiteral",
    "PositiveLiteral",
    "default_interner",
    "negated_literal",
    "positive_literal",
]
