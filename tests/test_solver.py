"""Integration-style tests for the top-level solve/generate interface."""

import pytest

from solver import MULTIPLE, NO_SOLUTION, UNIQUE, generate, solve_puzzle
from src.sudoku.model import ConflictError
from src.sudoku.parser import board_to_line, parse_board
from src.sudoku.solver_core import Solver
from src.utils.trace import Tracer
from sudoku_samples import CLASSIC, CLASSIC_SOLUTION, EMPTY, UNSOLVABLE


def test_solves_classic_puzzle_from_string():
    result = solve_puzzle(CLASSIC)
    assert result.status == UNIQUE
    assert result.count == 1
    assert board_to_line(result.solution) == CLASSIC_SOLUTION
    assert result.steps == 0


def test_accepts_grid_and_record_inputs():
    grid = parse_board(CLASSIC)
    assert solve_puzzle(grid).solution == parse_board(CLASSIC_SOLUTION)
    assert grid == parse_board(CLASSIC)
    assert solve_puzzle({"id": "classic", "puzzle": CLASSIC}).status == UNIQUE


def test_reports_no_solution():
    result = solve_puzzle(UNSOLVABLE)
    assert result.status == NO_SOLUTION
    assert result.count == 0
    assert result.solution is None


def test_empty_grid_is_solvable_but_not_unique():
    result = solve_puzzle(EMPTY)
    assert result.status == MULTIPLE
    assert result.count == 2
    assert Solver(result.solution).count_up_to(2) == 1


def test_conflicting_clues_raise():
    with pytest.raises(ConflictError):
        solve_puzzle("55" + "." * 79)


def test_rejects_unknown_input_type():
    with pytest.raises(TypeError):
        solve_puzzle(42)


def test_steps_come_from_tracer():
    result = solve_puzzle(CLASSIC, tracer=Tracer())
    assert result.steps > 0


def test_generate_uses_difficulty_and_seed():
    first = generate("easy", seed=9)
    second = generate("easy", seed=9)
    assert first.grid == second.grid
    assert first.target_clues == 40
    assert first.clues >= 40
    assert solve_puzzle(first.grid).status == UNIQUE


@pytest.mark.parametrize("limit", [0, 1])
def test_limit_below_two_cannot_decide_uniqueness(limit):
    with pytest.raises(ValueError):
        solve_puzzle(EMPTY, limit=limit)


def test_steps_cover_a_single_counting_pass():
    counting = Tracer()
    Solver(parse_board(CLASSIC), tracer=counting).count_up_to(2)

    result = solve_puzzle(CLASSIC, tracer=Tracer())
    assert result.steps == counting.summary()["num_assignments"]
    assert board_to_line(result.solution) == CLASSIC_SOLUTION
