import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .parser import normalize_text
from src.utils.io import load_json

PUZZLE_KEYS = ("puzzle", "quizzes", "quiz", "question", "input", "grid")
SOLUTION_KEYS = ("solution", "solutions", "answer")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads Sudoku puzzles from a file. Handles .parquet, .csv, .json, .jsonl and
    plain text (one puzzle per line, or 9-line blocks).
    Returns a list of records {"id", "puzzle", "solution"?} with 81-char strings.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = Path(file_path).stem

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _as_puzzle_text(value: Any) -> Optional[str]:
        # Datasets store grids as strings, flat lists, or nested 9x9 lists.
        if _is_nonempty_str(value):
            return normalize_text(value)
        if hasattr(value, "tolist"):
            value = value.tolist()
        if isinstance(value, (list, tuple)):
            flat: List[Any] = []
            for item in value:
                flat.extend(item if isinstance(item, (list, tuple)) else [item])
            return "".join(str(int(v)) if v else "." for v in flat)
        if isinstance(value, int):
            return str(value).zfill(81)
        return None

    def _first(record: Dict[str, Any], keys) -> Optional[str]:
        for key in keys:
            if key in record:
                text = _as_puzzle_text(record[key])
                if text:
                    return text
        return None

    def _normalize_record(record: Dict[str, Any], index: int) -> Optional[Dict[str, Any]]:
        puzzle_text = _first(record, PUZZLE_KEYS)
        if not puzzle_text:
            return None
        normalized: Dict[str, Any] = {
            "id": str(record.get("id") or f"{stem}-{index}"),
            "puzzle": puzzle_text,
        }
        solution_text = _first(record, SOLUTION_KEYS)
        if solution_text:
            normalized["solution"] = solution_text
        return normalized

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        out = []
        for i, record in enumerate(records):
            if isinstance(record, str):
                record = {"puzzle": record}
            if not isinstance(record, dict):
                continue
            normalized = _normalize_record(record, i)
            if normalized is not None:
                out.append(normalized)
        return out

    # Case 1: tabular files via pandas
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        return _normalize_all(df.to_dict(orient="records"))

    if file_path.endswith(".csv"):
        # Keep leading zeros in digit-only puzzle columns.
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 2: JSON file (array or object)
    if file_path.endswith(".json"):
        try:
            payload = load_json(file_path)
            if isinstance(payload, list):
                return _normalize_all(payload)
            if isinstance(payload, dict):
                return _normalize_all([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            return _normalize_all(_read_json_lines(file_path))

    # Case 3: JSONL file
    if file_path.endswith(".jsonl"):
        return _normalize_all(_read_json_lines(file_path))

    # Case 4: plain text
    return _normalize_all(_read_text_puzzles(file_path))


def _read_json_lines(file_path: str) -> List[Any]:
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                data.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return data


def _read_text_puzzles(file_path: str) -> List[str]:
    """One 81-symbol puzzle per line; shorter lines are joined until 81 symbols accumulate."""
    puzzles = []
    pending = ""
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            pending += normalize_text(stripped)
            if len(pending) >= 81:
                puzzles.append(pending)
                pending = ""
    if pending:
        # Let the caller report the malformed trailing puzzle.
        puzzles.append(pending)
    return puzzles
