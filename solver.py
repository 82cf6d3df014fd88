"""Top-level Sudoku interface.

Expose `solve_puzzle(puzzle)` that accepts a 9x9 grid, an 81-symbol string, or a
record dictionary as produced by `src.sudoku.loader.load_puzzles`, and
`generate(difficulty)` for new uniquely solvable puzzles.
"""

import random
from dataclasses import dataclass
from typing import Any, Optional

from src.sudoku.generator import Puzzle, generate_puzzle
from src.sudoku.model import Grid, copy_grid
from src.sudoku.parser import difficulty_to_clues, parse_board
from src.sudoku.solver_core import Solver
from src.utils.trace import Tracer

NO_SOLUTION = "none"
UNIQUE = "unique"
MULTIPLE = "multiple"


@dataclass
class SolveResult:
    """Outcome of a bounded count; `steps` is the number of traced assignments."""

    status: str
    count: int
    solution: Optional[Grid]
    steps: int = 0


def to_grid(puzzle: Any) -> Grid:
    if isinstance(puzzle, dict):
        puzzle = puzzle.get("puzzle", "")
    if isinstance(puzzle, str):
        return parse_board(puzzle)
    if isinstance(puzzle, (list, tuple)):
        return copy_grid(puzzle)
    raise TypeError("solve_puzzle expects a grid, an 81-symbol string or a puzzle dictionary")


def solve_puzzle(puzzle: Any, limit: int = 2, tracer: Optional[Tracer] = None) -> SolveResult:
    """
    Count solutions up to `limit` and return the first one found.

    `limit` must be at least 2, otherwise a single solution cannot be told apart
    from the first of several. Raises ConflictError when the clues already
    contradict each other.
    """
    if limit < 2:
        raise ValueError("limit must be at least 2 to decide uniqueness")
    grid = to_grid(puzzle)
    solver = Solver(grid, tracer=tracer)
    count = solver.count_up_to(limit)
    if count == 0:
        status = NO_SOLUTION
    elif count == 1:
        status = UNIQUE
    else:
        status = MULTIPLE

    # The counting pass tries digits in ascending order, so its first solution
    # is the one solve_first would return.
    solution = solver.solution

    steps = tracer.summary()["num_assignments"] if tracer is not None else 0
    return SolveResult(status=status, count=count, solution=solution, steps=steps)


def generate(difficulty: Any = "medium", seed: Optional[int] = None) -> Puzzle:
    rng = random.Random(seed)
    return generate_puzzle(rng, difficulty_to_clues(difficulty))


__all__ = ["SolveResult", "solve_puzzle", "generate", "NO_SOLUTION", "UNIQUE", "MULTIPLE"]
