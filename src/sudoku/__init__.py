"""Sudoku grid model, MRV search, puzzle generation and text codec."""

from .model import ConflictError, GridState
from .solver_core import Solver, solve, count_solutions
from .generator import Puzzle, generate_full_grid, carve_puzzle, generate_puzzle
from .parser import parse_board, board_to_line, format_board, difficulty_to_clues

__all__ = [
    "ConflictError",
    "GridState",
    "Solver",
    "solve",
    "count_solutions",
    "Puzzle",
    "generate_full_grid",
    "carve_puzzle",
    "generate_puzzle",
    "parse_board",
    "board_to_line",
    "format_board",
    "difficulty_to_clues",
]
