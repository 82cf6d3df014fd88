"""CLI entrypoint: solve puzzle files or generate new puzzles."""

import argparse
import csv
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from solver import generate, solve_puzzle
from src.sudoku.loader import load_puzzles
from src.sudoku.model import ConflictError
from src.sudoku.parser import board_to_line, difficulty_to_clues, format_board
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

PUZZLE_SUFFIXES = [".txt", ".json", ".jsonl", ".csv", ".parquet"]


def _solution_limit(value: str) -> int:
    limit = int(value)
    if limit < 2:
        raise argparse.ArgumentTypeError("--limit must be at least 2 to tell unique puzzles from ambiguous ones")
    return limit


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Sudoku solver and unique-puzzle generator")
    sub = parser.add_subparsers(dest="command", required=True)

    solve_p = sub.add_parser("solve", help="Solve puzzles and report whether they are unique")
    solve_p.add_argument(
        "input",
        help="Puzzle file, directory of puzzle files, or a literal 81-symbol puzzle (digits and '.')",
    )
    solve_p.add_argument("--output", type=Path, default=None, help="Optional path to write a results CSV")
    solve_p.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Optional directory receiving one search trace CSV per puzzle.",
    )
    solve_p.add_argument(
        "--limit",
        type=_solution_limit,
        default=2,
        help="Stop counting after this many solutions (2 is enough to detect ambiguity).",
    )

    gen_p = sub.add_parser("generate", help="Generate uniquely solvable puzzles")
    gen_p.add_argument(
        "--difficulty",
        default="medium",
        help="easy, medium, hard, or a target number of clues (17-81).",
    )
    gen_p.add_argument("--count", type=int, default=1, help="Number of puzzles to generate")
    gen_p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed; defaults to SUDOKU_SEED from the environment when set.",
    )
    gen_p.add_argument("--show-solution", action="store_true", help="Print the solution under each puzzle")
    gen_p.add_argument("--output", type=Path, default=None, help="Optional path to write puzzles as JSON")
    return parser.parse_args(argv)


def collect_puzzles(source: str) -> List[Dict[str, Any]]:
    path = Path(source)
    if path.is_file():
        return load_puzzles(str(path))
    if path.is_dir():
        puzzles = []
        for file_path in sorted(path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
        return puzzles
    # Not a path: treat the argument itself as a puzzle.
    return [{"id": "cli", "puzzle": source}]


def solve_record(puzzle: Dict[str, Any], limit: int = 2, trace_dir: Optional[Path] = None) -> Dict[str, Any]:
    reset_tracer()
    tracer = get_tracer()
    puzzle_id = puzzle.get("id", "unknown")
    row = {
        "id": puzzle_id,
        "puzzle": puzzle.get("puzzle", ""),
        "status": "",
        "count": 0,
        "solution": "",
        "steps": -1,
    }
    try:
        result = solve_puzzle(puzzle, limit=limit, tracer=tracer)
    except ConflictError as e:
        row["status"] = "conflict"
        row["error"] = str(e)
        return row
    except ValueError as e:
        row["status"] = "invalid"
        row["error"] = str(e)
        return row

    row.update(
        status=result.status,
        count=result.count,
        solution=board_to_line(result.solution) if result.solution else "",
        steps=result.steps,
    )
    if trace_dir is not None:
        tracer.to_csv(trace_dir / f"{puzzle_id}.csv")
    return row


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "puzzle", "status", "count", "solution", "steps"])

        for r in results:
            writer.writerow([r["id"], r["puzzle"], r["status"], r["count"], r["solution"], r["steps"]])


def print_result(row: Dict[str, Any]) -> None:
    print(f"Puzzle {row['id']}:")
    status = row["status"]
    if status in ("conflict", "invalid"):
        print(f"  {status}: {row.get('error', '')}")
        return
    if status == "none":
        print("  No solutions exist for this puzzle.")
        return
    if status == "multiple":
        print(f"  Multiple solutions found (at least {row['count']}); showing one:")
    else:
        print("  Unique solution found:")
    print(format_board([[int(ch) for ch in row["solution"][r * 9:(r + 1) * 9]] for r in range(9)]))


def run_solve(args) -> List[Dict[str, Any]]:
    puzzles = collect_puzzles(args.input)
    iterator = tqdm(puzzles, desc="Solving", unit="puzzle") if args.output else puzzles
    results = [solve_record(p, limit=args.limit, trace_dir=args.trace_dir) for p in iterator]

    if args.output:
        write_results_csv(results, args.output)
    else:
        for row in results:
            print_result(row)
    return results


def run_generate(args) -> List[Dict[str, Any]]:
    seed = args.seed
    if seed is None and os.environ.get("SUDOKU_SEED"):
        seed = int(os.environ["SUDOKU_SEED"])

    target = difficulty_to_clues(args.difficulty)
    records = []
    for i in range(args.count):
        puzzle = generate(target, seed=None if seed is None else seed + i)
        records.append({
            "id": f"generated-{i}",
            "puzzle": board_to_line(puzzle.grid),
            "solution": board_to_line(puzzle.solution),
            "clues": puzzle.clues,
        })
        if args.output is None:
            print(f"Puzzle {i + 1}/{args.count} (target ~{target} clues, got {puzzle.clues}):")
            print(format_board(puzzle.grid))
            if args.show_solution:
                print("Solution:")
                print(format_board(puzzle.solution))

    if args.output:
        save_json(args.output, records)
        print(f"Wrote {len(records)} puzzles to {args.output}")
    return records


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    if args.command == "solve":
        return run_solve(args)
    return run_generate(args)


if __name__ == "__main__":
    main()
