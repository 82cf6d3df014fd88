import csv
import json
import sys
from pathlib import Path

import pytest

import run
from src.sudoku.loader import load_puzzles
from src.utils.io import load_json
from run import collect_puzzles, main, solve_record, write_results_csv
from sudoku_samples import CLASSIC, CLASSIC_SOLUTION, UNSOLVABLE


def test_solve_record_unique():
    row = solve_record({"id": "classic", "puzzle": CLASSIC})
    assert row["status"] == "unique"
    assert row["count"] == 1
    assert row["solution"] == CLASSIC_SOLUTION
    assert row["steps"] > 0


def test_solve_record_reports_conflict_and_invalid():
    conflict = solve_record({"id": "bad", "puzzle": "99" + "." * 79})
    assert conflict["status"] == "conflict"
    assert conflict["steps"] == -1

    invalid = solve_record({"id": "short", "puzzle": "123"})
    assert invalid["status"] == "invalid"
    assert "81" in invalid["error"]


def test_solve_record_writes_trace(tmp_path):
    solve_record({"id": "classic", "puzzle": CLASSIC}, trace_dir=tmp_path)
    assert (tmp_path / "classic.csv").exists()


def test_collect_puzzles_literal_string():
    assert collect_puzzles(CLASSIC) == [{"id": "cli", "puzzle": CLASSIC}]


def test_main_literal_puzzle(capsys):
    main(["solve", CLASSIC])
    out = capsys.readouterr().out
    assert "Unique solution found" in out
    assert "| 5 3 4 | 6 7 8 | 9 1 2 |" in out


def test_main_directory_input_to_csv(tmp_path):
    puzzle_dir = tmp_path / "puzzles"
    puzzle_dir.mkdir()
    (puzzle_dir / "a.txt").write_text(CLASSIC + "\n" + UNSOLVABLE + "\n")
    (puzzle_dir / "b.jsonl").write_text(json.dumps({"id": "conflict", "puzzle": "11" + "." * 79}) + "\n")
    (puzzle_dir / "notes.md").write_text("ignored")
    output_path = tmp_path / "results.csv"

    sys.argv = ["run.py", "solve", str(puzzle_dir), "--output", str(output_path)]
    main()

    with open(output_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["id"] for r in rows] == ["a-0", "a-1", "conflict"]
    assert [r["status"] for r in rows] == ["unique", "none", "conflict"]
    assert rows[0]["solution"] == CLASSIC_SOLUTION


def test_write_results_csv(tmp_path):
    output_path = tmp_path / "out.csv"
    write_results_csv(
        [{"id": "p", "puzzle": CLASSIC, "status": "unique", "count": 1, "solution": CLASSIC_SOLUTION, "steps": 3}],
        output_path,
    )
    content = output_path.read_text()
    assert "id,puzzle,status,count,solution,steps" in content
    assert CLASSIC_SOLUTION in content


def test_generate_prints_puzzle_and_solution(capsys):
    records = main(["generate", "--difficulty", "easy", "--seed", "3", "--show-solution"])
    out = capsys.readouterr().out
    assert "target ~40 clues" in out
    assert "Solution:" in out
    assert len(records) == 1
    assert records[0]["clues"] >= 40


def test_generate_json_output_uses_env_seed(tmp_path, monkeypatch):
    monkeypatch.setenv("SUDOKU_SEED", "21")
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"

    main(["generate", "--difficulty", "40", "--count", "2", "--output", str(first)])
    main(["generate", "--difficulty", "40", "--count", "2", "--output", str(second)])

    payload = json.loads(first.read_text())
    assert payload == json.loads(second.read_text())
    assert [p["id"] for p in payload] == ["generated-0", "generated-1"]
    assert payload[0]["puzzle"] != payload[1]["puzzle"]
    assert all(len(p["solution"]) == 81 for p in payload)


def test_parse_args_requires_command():
    with pytest.raises(SystemExit):
        run.parse_args([])


@pytest.mark.parametrize("limit", ["1", "0", "many"])
def test_parse_args_rejects_limit_below_two(limit):
    with pytest.raises(SystemExit):
        run.parse_args(["solve", CLASSIC, "--limit", limit])


def test_parse_args_accepts_larger_limit():
    assert run.parse_args(["solve", CLASSIC, "--limit", "5"]).limit == 5


def test_generated_json_solves_back_to_its_solution(tmp_path):
    output = tmp_path / "generated.json"
    main(["generate", "--difficulty", "easy", "--seed", "8", "--output", str(output)])

    payload = load_json(output)
    assert payload[0]["clues"] >= 40

    puzzles = load_puzzles(str(output))
    assert puzzles[0]["solution"] == payload[0]["solution"]
    row = solve_record(puzzles[0])
    assert row["status"] == "unique"
    assert row["solution"] == payload[0]["solution"]
