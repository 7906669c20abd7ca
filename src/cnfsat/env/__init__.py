"""
Variables, ternary booleans and environments.
"""

from .boolean import Boolean
from .environment import Environment
from .variable import Variable, make_variable

TRUE = Boolean.TRUE
FALSE = Boolean.FALSE
UNDEFINED = Boolean.UNDEFINED

__all__ = [
    "Boolean",
    "Environment",
    "Variable",
    "make_variable",
    "TRUE",
    "FALSE",
    "UNDEFINED",
]
