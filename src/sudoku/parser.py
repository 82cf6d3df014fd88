"""Puzzle text codec: 81-symbol strings to grids and back, plus board rendering.

Accepted input is a run of 81 symbols in row-major order, each a digit 1-9 or a
blank marker (`.` or `0`). Whitespace anywhere (including newlines between
rows) is ignored.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Sequence

from .generator import MAX_CLUES, MIN_CLUES, clamp_clues
from .model import SIZE, Grid

BLANKS = ".0"
DEFAULT_CLUES = 30
DIFFICULTY_CLUES: Dict[str, int] = {
    "easy": 40,
    "medium": 34,
    "hard": 28,
}

_WHITESPACE = re.compile(r"\s+")
_LEADING_INT = re.compile(r"[+-]?\d+")
_BORDER = "+-------+-------+-------+"


def normalize_text(text: str) -> str:
    return _WHITESPACE.sub("", text)


def parse_board(text: str) -> Grid:
    symbols = normalize_text(str(text))
    if len(symbols) != SIZE * SIZE:
        raise ValueError(f"Expected 81 cells (digits or '.'), got {len(symbols)}")

    grid: Grid = []
    for r in range(SIZE):
        row = []
        for ch in symbols[r * SIZE:(r + 1) * SIZE]:
            if ch in BLANKS:
                row.append(0)
            elif "1" <= ch <= "9":
                row.append(int(ch))
            else:
                raise ValueError(f"Unexpected symbol {ch!r} in puzzle")
        grid.append(row)
    return grid


def board_to_line(grid: Sequence[Sequence[int]], blank: str = ".") -> str:
    return "".join(str(v) if v else blank for row in grid for v in row)


def format_board(grid: Sequence[Sequence[int]]) -> str:
    lines = []
    for r, row in enumerate(grid):
        if r % 3 == 0:
            lines.append(_BORDER)
        parts = []
        for c, value in enumerate(row):
            if c % 3 == 0:
                parts.append("|")
            parts.append(str(value) if value else ".")
        parts.append("|")
        lines.append(" ".join(parts))
    lines.append(_BORDER)
    return "\n".join(lines)


def difficulty_to_clues(difficulty: Any) -> int:
    """
    Map a difficulty label or clue count to a target clue count.

    "easy"/"medium"/"hard" map to 40/34/28; a leading integer
    ("20x", "25.5") is read and clamped to 17..81; anything else falls back
    to DEFAULT_CLUES.
    """
    if isinstance(difficulty, int) and not isinstance(difficulty, bool):
        return clamp_clues(difficulty)

    label = str(difficulty or "").strip().lower()
    if label in DIFFICULTY_CLUES:
        return DIFFICULTY_CLUES[label]
    match = _LEADING_INT.match(label)
    if match:
        return clamp_clues(int(match.group()))
    return DEFAULT_CLUES


__all__ = [
    "BLANKS",
    "DEFAULT_CLUES",
    "DIFFICULTY_CLUES",
    "MAX_CLUES",
    "MIN_CLUES",
    "board_to_line",
    "difficulty_to_clues",
    "format_board",
    "normalize_text",
    "parse_board",
]
