"""Puzzle generation: randomized full grids and uniqueness-preserving clue removal."""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .model import SIZE, Cell, Grid, GridState, copy_grid, count_clues, empty_grid
from .solver_core import Solver

MIN_CLUES = 17  # fewest clues any uniquely solvable 9x9 puzzle can have
MAX_CLUES = SIZE * SIZE


@dataclass
class Puzzle:
    grid: Grid
    solution: Grid
    clues: int
    target_clues: int


def clamp_clues(target: int) -> int:
    return max(MIN_CLUES, min(MAX_CLUES, int(target)))


def generate_full_grid(rng: random.Random) -> Grid:
    """A random complete legal grid, built by MRV search with shuffled digit order."""

    def _shuffled(digits: List[int]) -> List[int]:
        rng.shuffle(digits)
        return digits

    while True:
        solver = Solver(empty_grid())
        if solver.search(1, order=_shuffled):
            return solver.solution
        # Retry with the advanced rng; an empty grid always has a completion.


def carve_puzzle(solution: Sequence[Sequence[int]], order: Sequence[Cell], target_clues: int) -> Grid:
    """
    Clear cells of `solution` in `order` while the puzzle stays uniquely solvable.

    Greedy and order dependent: stops once `target_clues` (clamped to 17..81)
    remain, or when `order` runs out, in which case more clues are left.
    """
    state = GridState()
    state.load(solution)
    if state.empties:
        raise ValueError("carve_puzzle expects a completely filled grid")

    target = clamp_clues(target_clues)
    puzzle = copy_grid(solution)
    filled = count_clues(puzzle)
    for row, col in order:
        if filled <= target:
            break
        digit = puzzle[row][col]
        if digit == 0:
            continue
        puzzle[row][col] = 0
        if Solver(puzzle).count_up_to(2) == 1:
            filled -= 1
        else:
            puzzle[row][col] = digit
    return puzzle


def generate_puzzle(rng: Optional[random.Random] = None, target_clues: int = 30) -> Puzzle:
    rng = rng or random.Random()
    solution = generate_full_grid(rng)
    positions = [(r, c) for r in range(SIZE) for c in range(SIZE)]
    rng.shuffle(positions)
    target = clamp_clues(target_clues)
    grid = carve_puzzle(solution, positions, target)
    return Puzzle(grid=grid, solution=solution, clues=count_clues(grid), target_clues=target)
