"""Backtracking Sudoku search with MRV cell selection and bounded solution counting."""

from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .model import Cell, Grid, GridState, mask_digits, popcount
from src.utils.trace import Tracer

DigitOrder = Callable[[List[int]], List[int]]


class SearchOutcome(Enum):
    CONTINUE = "continue"
    STOP = "stop"


class Solver:
    """
    Owns a private GridState and runs depth-first search over it.

    The search stops as soon as `limit` solutions have been seen, so
    `count_up_to(2)` separates unique puzzles from ambiguous ones without
    enumerating every solution.
    """

    def __init__(self, grid: Sequence[Sequence[int]], tracer: Optional[Tracer] = None):
        self.state = GridState()
        self.state.load(grid)
        self.tracer = tracer
        self.count = 0
        self.solution: Optional[Grid] = None

    @property
    def grid(self) -> Grid:
        return self.state.to_grid()

    def solve_first(self) -> bool:
        """Find one solution; on success the board holds it, otherwise it is untouched."""
        if not self.search(1):
            return False
        for r, c in self.state.empties:
            if self.state.is_empty(r, c):
                self.state.place(r, c, self.solution[r][c])
        return True

    def count_up_to(self, k: int = 2) -> int:
        """Number of solutions, capped at `k`. The board is left as loaded."""
        if k < 1:
            raise ValueError("k must be at least 1")
        return self.search(k)

    def search(self, limit: int, order: Optional[DigitOrder] = None) -> int:
        """
        Run the search until `limit` solutions are found or the tree is exhausted.

        `order` may rearrange each cell's ascending candidate list; it defaults to
        ascending order so solving and counting are reproducible.
        """
        self.count = 0
        self.solution = None
        self._search(limit, order, 0)
        return self.count

    def _search(self, limit: int, order: Optional[DigitOrder], depth: int) -> SearchOutcome:
        cell, mask = self._select_cell()
        if cell is None:
            self.count += 1
            if self.solution is None:
                self.solution = self.state.to_grid()
            if self.tracer is not None:
                self.tracer.log_solution_found(solutions=self.count, depth=depth)
            return SearchOutcome.STOP if self.count >= limit else SearchOutcome.CONTINUE

        row, col = cell
        if not mask:
            if self.tracer is not None:
                self.tracer.log_dead_end(row, col, depth=depth)
            return SearchOutcome.CONTINUE

        digits = mask_digits(mask)
        if order is not None:
            digits = order(digits)
        if self.tracer is not None:
            self.tracer.log_select(row, col, candidates=len(digits), depth=depth)

        for digit in digits:
            with self.state.placed(row, col, digit):
                if self.tracer is not None:
                    self.tracer.log_assign(row, col, digit, depth=depth + 1)
                if self._search(limit, order, depth + 1) is SearchOutcome.STOP:
                    return SearchOutcome.STOP

        if self.tracer is not None:
            self.tracer.log_backtrack(row, col, depth=depth)
        return SearchOutcome.CONTINUE

    def _select_cell(self) -> Tuple[Optional[Cell], int]:
        """
        Minimum Remaining Values: the empty cell with the fewest candidates.

        Returns (None, 0) when the board is full and (cell, 0) for a cell with
        no candidates left. Ties go to the first cell in worklist order.
        """
        best: Optional[Cell] = None
        best_mask = 0
        best_count = 10
        for row, col in self.state.empties:
            if not self.state.is_empty(row, col):
                continue
            mask = self.state.candidates(row, col)
            if not mask:
                return (row, col), 0
            n = popcount(mask)
            if n < best_count:
                best, best_mask, best_count = (row, col), mask, n
                if n == 1:
                    break
        return best, best_mask


def solve(grid: Sequence[Sequence[int]], tracer: Optional[Tracer] = None) -> Optional[Grid]:
    """Return the first solution of `grid` in ascending-digit order, or None."""
    solver = Solver(grid, tracer=tracer)
    if not solver.solve_first():
        return None
    return solver.grid


def count_solutions(grid: Sequence[Sequence[int]], limit: int = 2) -> int:
    return Solver(grid).count_up_to(limit)
