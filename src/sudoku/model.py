"""Grid state for 9x9 Sudoku: cells plus row/column/block occupancy masks."""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

Grid = List[List[int]]
Cell = Tuple[int, int]

SIZE = 9
FULL_MASK = 0x1FF  # bit d-1 set <=> digit d


class ConflictError(ValueError):
    """A unit (row, column or block) holds the same digit twice."""

    def __init__(self, row: int, col: int, digit: int):
        self.row = row
        self.col = col
        self.digit = digit
        super().__init__(f"Digit {digit} at row {row + 1}, column {col + 1} conflicts with its row, column or block")


def block_index(row: int, col: int) -> int:
    return (row // 3) * 3 + col // 3


def digit_bit(digit: int) -> int:
    return 1 << (digit - 1)


def popcount(mask: int) -> int:
    return bin(mask).count("1")


def lowest_set_digit(mask: int) -> int:
    """Smallest digit present in `mask`, or 0 for an empty mask."""
    if not mask:
        return 0
    return (mask & -mask).bit_length()


def mask_digits(mask: int) -> List[int]:
    digits = []
    while mask:
        low = mask & -mask
        digits.append(low.bit_length())
        mask ^= low
    return digits


def empty_grid() -> Grid:
    return [[0] * SIZE for _ in range(SIZE)]


def copy_grid(grid: Sequence[Sequence[int]]) -> Grid:
    return [list(row) for row in grid]


def count_clues(grid: Sequence[Sequence[int]]) -> int:
    return sum(1 for row in grid for value in row if value)


def validate_shape(grid: Sequence[Sequence[int]]) -> None:
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        raise ValueError("Grid must have 9 rows of 9 cells")
    for row in grid:
        for value in row:
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= SIZE:
                raise ValueError(f"Cell values must be integers in 0..9, got {value!r}")


@dataclass
class GridState:
    """
    A 9x9 board plus a denormalized cache of which digits each unit already holds.

    The masks must always equal the union of the digit bits present in the unit;
    `place` and `unplace` are the only mutators and keep them in sync.
    """

    cells: Grid = field(default_factory=empty_grid)
    row_mask: List[int] = field(default_factory=lambda: [0] * SIZE)
    col_mask: List[int] = field(default_factory=lambda: [0] * SIZE)
    block_mask: List[int] = field(default_factory=lambda: [0] * SIZE)
    empties: List[Cell] = field(default_factory=list)

    def reset(self) -> None:
        self.cells = empty_grid()
        self.row_mask = [0] * SIZE
        self.col_mask = [0] * SIZE
        self.block_mask = [0] * SIZE
        self.empties = []

    def load(self, grid: Sequence[Sequence[int]]) -> None:
        """Replace the board with `grid`; raises ConflictError on a duplicate digit."""
        validate_shape(grid)
        self.reset()
        for r in range(SIZE):
            for c in range(SIZE):
                digit = grid[r][c]
                if digit == 0:
                    self.empties.append((r, c))
                    continue
                bit = digit_bit(digit)
                b = block_index(r, c)
                if self.row_mask[r] & bit or self.col_mask[c] & bit or self.block_mask[b] & bit:
                    raise ConflictError(r, c, digit)
                self.cells[r][c] = digit
                self.row_mask[r] |= bit
                self.col_mask[c] |= bit
                self.block_mask[b] |= bit

    def place(self, row: int, col: int, digit: int) -> None:
        # Preconditions only; legality is up to callers, who draw digits from `candidates`.
        if not 1 <= digit <= SIZE:
            raise ValueError(f"Digit must be in 1..9, got {digit}")
        if self.cells[row][col]:
            raise ValueError(f"Cell r{row + 1}c{col + 1} is already filled")
        bit = digit_bit(digit)
        self.cells[row][col] = digit
        self.row_mask[row] |= bit
        self.col_mask[col] |= bit
        self.block_mask[block_index(row, col)] |= bit

    def unplace(self, row: int, col: int) -> None:
        bit = digit_bit(self.cells[row][col])
        self.cells[row][col] = 0
        self.row_mask[row] &= ~bit
        self.col_mask[col] &= ~bit
        self.block_mask[block_index(row, col)] &= ~bit

    @contextmanager
    def placed(self, row: int, col: int, digit: int) -> Iterator[None]:
        """Place `digit` for the duration of the block; always undone on exit."""
        self.place(row, col, digit)
        try:
            yield
        finally:
            self.unplace(row, col)

    def candidates(self, row: int, col: int) -> int:
        used = self.row_mask[row] | self.col_mask[col] | self.block_mask[block_index(row, col)]
        return FULL_MASK & ~used

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col] == 0

    def to_grid(self) -> Grid:
        return copy_grid(self.cells)
