"""Smoke tests for the example and dataset scripts."""

from src.sudoku import runloaderandparser
from trace_example import solve_and_trace
from sudoku_samples import CLASSIC, CLASSIC_SOLUTION


def test_solve_and_trace_writes_csv(tmp_path, capsys):
    output = tmp_path / "trace.csv"
    result = solve_and_trace(CLASSIC, output)

    assert result.status == "unique"
    assert "".join(str(v) for row in result.solution for v in row) == CLASSIC_SOLUTION
    assert output.exists()
    assert "Search Summary" in capsys.readouterr().out


def test_loader_smoke_script_reads_env_path(tmp_path, monkeypatch, capsys):
    path = tmp_path / "puzzles.txt"
    path.write_text(CLASSIC + "\n")
    monkeypatch.setenv("SUDOKU_DATA_PATH", str(path))

    state = runloaderandparser.main()
    out = capsys.readouterr().out
    assert state is not None
    assert len(state.empties) == 51
    assert "Clues:       30" in out


def test_loader_smoke_script_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SUDOKU_DATA_PATH", str(tmp_path / "missing.csv"))
    assert runloaderandparser.main() is None
    assert "not found" in capsys.readouterr().out
