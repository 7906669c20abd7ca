"""
Sudoku puzzles as SAT problems.

A puzzle of block size ``b`` is a ``b*b`` by ``b*b`` grid. The encoding uses
one variable ``occupies(row,col,value)`` per cell and candidate value.
"""

import logging
import os
from collections.abc import Sequence

from cnfsat.env import Boolean, Environment, Variable
from cnfsat.formula import Clause, Formula, LiteralInterner, default_interner
from cnfsat.utils.exceptions import InvalidPuzzleError, PuzzleFormatError

# Set up logging
logger = logging.getLogger(__name__)

CELL_EMPTY = 0
CELL_REP_EMPTY = "."
BLOCK_SIZE_MAX = 3


class Sudoku:
    """
    Immutable, possibly partially filled Sudoku grid.

    ``squares[row][col]`` holds ``CELL_EMPTY`` for a blank, otherwise a digit
    in ``1 .. block_size ** 2``.
    """

    def __init__(self, block_size: int, squares: Sequence[Sequence[int]] | None = None):
        """
        Args:
            block_size: Size of one block; 3 gives the standard 9x9 puzzle
            squares: Grid rows (defaults to an empty grid)

        Raises:
            InvalidPuzzleError: If the grid shape or a cell value is invalid
        """
        if not isinstance(block_size, int) or block_size <= 0:
            raise InvalidPuzzleError(f"block_size must be a positive number, got {block_size!r}")
        self.block_size = block_size
        self.size = block_size * block_size

        if squares is None:
            squares = [[CELL_EMPTY] * self.size for _ in range(self.size)]
        self.squares = tuple(tuple(row) for row in squares)
        self._check_representation()

    def _check_representation(self) -> None:
        if len(self.squares) != self.size:
            raise InvalidPuzzleError(f"grid must have {self.size} rows, found {len(self.squares)}")
        for row, cells in enumerate(self.squares):
            if len(cells) != self.size:
                raise InvalidPuzzleError(
                    f"row {row} must have {self.size} cells, found {len(cells)}"
                )
            for col, value in enumerate(cells):
                if not (CELL_EMPTY <= value <= self.size):
                    raise InvalidPuzzleError(
                        f"cell ({row}, {col}) must be between {CELL_EMPTY} and {self.size}, found {value}"
                    )

    @classmethod
    def from_string(cls, block_size: int, text: str) -> "Sudoku":
        """
        Parse a puzzle with one line per row, digits for givens and ``.`` for blanks.

        Raises:
            PuzzleFormatError: If a row has the wrong length or an unknown symbol
        """
        if block_size > BLOCK_SIZE_MAX:
            raise InvalidPuzzleError(
                f"block_size ({block_size}) greater than max allowed ({BLOCK_SIZE_MAX})"
            )
        size = block_size * block_size
        rows = [line.strip() for line in text.splitlines() if line.strip()]
        if len(rows) != size:
            raise PuzzleFormatError(f"Puzzle contains {len(rows)} rows, {size} expected")

        squares = []
        for index, line in enumerate(rows):
            if len(line) != size:
                raise PuzzleFormatError(
                    f"Row contains {len(line)} characters, {size} expected", row=index
                )
            cells = []
            for symbol in line:
                if symbol == CELL_REP_EMPTY:
                    cells.append(CELL_EMPTY)
                elif symbol.isdigit() and 1 <= int(symbol) <= size:
                    cells.append(int(symbol))
                else:
                    raise PuzzleFormatError(f"Unrecognized symbol {symbol!r}", row=index)
            squares.append(cells)
        return cls(block_size, squares)

    @classmethod
    def from_file(cls, block_size: int, path: str) -> "Sudoku":
        """Read a puzzle file in the :meth:`from_string` format."""
        if not os.path.exists(path):
            raise FileNotFoundError(f"Puzzle file not found: {path}")
        with open(path) as f:
            return cls.from_string(block_size, f.read())

    def cell_variable(self, row: int, col: int, value: int) -> Variable:
        if not (0 <= row < self.size and 0 <= col < self.size and 1 <= value <= self.size):
            raise IndexError(f"No cell variable for ({row}, {col}, {value})")
        return Variable(f"occupies({row},{col},{value})")

    def block_cells(self, block: int) -> list[tuple[int, int]]:
        """Coordinates of the cells of a block, blocks numbered row-major."""
        top = (block // self.block_size) * self.block_size
        left = (block % self.block_size) * self.block_size
        return [
            (top + i // self.block_size, left + i % self.block_size) for i in range(self.size)
        ]

    def get_problem(self, interner: LiteralInterner | None = None) -> Formula:
        """
        Encode the puzzle.

        Returns:
            Formula that is satisfiable iff the puzzle has a solution: the givens
            as unit clauses, at most one value per cell, and every value exactly
            once per row, column and block
        """
        interner = interner or default_interner()
        clauses = []

        def occupies(row, col, value):
            return interner.positive(self.cell_variable(row, col, value))

        def exactly_once(cells):
            for value in range(1, self.size + 1):
                clauses.append(Clause(*(occupies(r, c, value) for r, c in cells)))
                for i, (r1, c1) in enumerate(cells):
                    for r2, c2 in cells[i + 1 :]:
                        clauses.append(
                            Clause(occupies(r1, c1, value).negation(), occupies(r2, c2, value).negation())
                        )

        for row in range(self.size):
            for col in range(self.size):
                if self.squares[row][col] != CELL_EMPTY:
                    clauses.append(Clause(occupies(row, col, self.squares[row][col])))

        for row in range(self.size):
            for col in range(self.size):
                for first in range(1, self.size + 1):
                    for second in range(first + 1, self.size + 1):
                        clauses.append(
                            Clause(
                                occupies(row, col, first).negation(),
                                occupies(row, col, second).negation(),
                            )
                        )

        for row in range(self.size):
            exactly_once([(row, col) for col in range(self.size)])
        for col in range(self.size):
            exactly_once([(row, col) for row in range(self.size)])
        for block in range(self.size):
            exactly_once(self.block_cells(block))

        logger.debug(f"Encoded {self.size}x{self.size} sudoku into {len(clauses)} clauses")
        return Formula(*clauses)

    def interpret_solution(self, environment: Environment) -> "Sudoku":
        """
        Read a filled grid out of a satisfying environment of :meth:`get_problem`.

        Cells whose variables are all left undefined keep their original content.
        """
        squares = [list(row) for row in self.squares]
        for row in range(self.size):
            for col in range(self.size):
                if squares[row][col] != CELL_EMPTY:
                    continue
                for value in range(1, self.size + 1):
                    if environment.get(self.cell_variable(row, col, value)) is Boolean.TRUE:
                        squares[row][col] = value
                        break
        return Sudoku(self.block_size, squares)

    def is_complete(self) -> bool:
        return all(value != CELL_EMPTY for row in self.squares for value in row)

    def is_valid(self) -> bool:
        """True if no digit repeats within a row, column or block."""
        groups = [[(row, col) for col in range(self.size)] for row in range(self.size)]
        groups += [[(row, col) for row in range(self.size)] for col in range(self.size)]
        groups += [self.block_cells(block) for block in range(self.size)]
        for cells in groups:
            values = [self.squares[r][c] for r, c in cells if self.squares[r][c] != CELL_EMPTY]
            if len(values) != len(set(values)):
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sudoku):
            return NotImplemented
        return self.block_size == other.block_size and self.squares == other.squares

    def __hash__(self) -> int:
        return hash((self.block_size, self.squares))

    def __str__(self) -> str:
        return "".join(
            "".join(CELL_REP_EMPTY if value == CELL_EMPTY else str(value) for value in row) + "\n"
            for row in self.squares
        )
