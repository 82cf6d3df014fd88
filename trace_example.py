"""Example: How to trace the Sudoku search.

Solves one puzzle with the global tracer attached and optionally writes every
select/assign/backtrack step to CSV.
"""

from pathlib import Path
from typing import Optional

from solver import SolveResult, solve_puzzle
from src.utils.trace import get_tracer, reset_tracer


def solve_and_trace(puzzle: str, output_trace_csv: Optional[Path] = None) -> SolveResult:
    """
    Solve a puzzle and log all steps to a trace file.

    Args:
        puzzle: 81-symbol puzzle string
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        SolveResult for the puzzle
    """
    # Reset tracer for this puzzle
    reset_tracer()
    tracer = get_tracer()

    result = solve_puzzle(puzzle, tracer=tracer)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Search Summary:")
    print(f"  Status: {result.status} ({result.count} solution(s) checked)")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Assignments: {summary['num_assignments']}")
    print(f"  Backtracks: {summary['num_backtracks']}")
    print(f"  Max depth: {summary['max_depth']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"  Actions: {summary['action_counts']}")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return result


if __name__ == "__main__":
    example_puzzle = (
        "53..7....6..195....98....6.8...6...34..8.3..17...2...6"
        ".6....28....419..5....8..79"
    )

    trace_output = Path("traces/example_trace.csv")
    result = solve_and_trace(example_puzzle, trace_output)
    print(f"Solution: {result.solution}")
