import os
import sys

# Bootstrap sys.path so absolute imports like 'src.sudoku.loader' work when running by file path
# This adds the repository root (two levels up from this file) to PYTHONPATH at runtime.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from src.sudoku.loader import load_puzzles
from src.sudoku.model import ConflictError, GridState, count_clues
from src.sudoku.parser import format_board, parse_board


def main():
    # Point this to your dataset path; supports .parquet/.csv (via pandas), .json, .jsonl or .txt
    file_path = os.environ.get("SUDOKU_DATA_PATH", "data/sudoku.csv")

    if not os.path.exists(file_path):
        print(f"Error: File '{file_path}' not found. Set SUDOKU_DATA_PATH or update file_path.")
        return None

    try:
        puzzles = load_puzzles(file_path)
    except Exception as e:
        print(f"Loader error: {e}")
        return None

    if not puzzles:
        print("No puzzles loaded. Check the file path and format.")
        return None

    # Parse and load the first puzzle as a smoke test
    try:
        grid = parse_board(puzzles[0]["puzzle"])
        state = GridState()
        state.load(grid)
    except (ConflictError, ValueError) as e:
        print(f"First puzzle rejected: {e}")
        return None

    print("Parsed puzzle OK")
    print(f"- Puzzles:     {len(puzzles)}")
    print(f"- First id:    {puzzles[0]['id']}")
    print(f"- Clues:       {count_clues(grid)}")
    print(f"- Empty cells: {len(state.empties)}")
    print(format_board(grid))
    return state


if __name__ == "__main__":
    main()
