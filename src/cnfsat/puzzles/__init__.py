"""
Puzzles encoded as SAT problems.
"""

from .sudoku import Sudoku

__all__ = ["Sudoku"]
