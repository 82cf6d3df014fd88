"""Tracing module: records Sudoku search steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


def cell_name(row: int, col: int) -> str:
    """1-based `r{row}c{col}` label used in trace rows."""
    return f"r{row + 1}c{col + 1}"


@dataclass
class TraceStep:
    """A single step in the search."""

    timestamp: float
    step_number: int
    action_type: str  # 'select', 'assign', 'backtrack', 'dead_end', 'solution_found'
    cell: Optional[str] = None
    value: Optional[int] = None
    candidates: Optional[int] = None  # number of legal digits for the cell
    depth: Optional[int] = None  # recursion depth / number of placements made
    solutions: Optional[int] = None  # solutions found so far
    reason: Optional[str] = None


class Tracer:
    """Records search steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_select(self, row: int, col: int, candidates: int, depth: int):
        """Log the MRV choice of the next cell to branch on."""
        self._record('select', cell=cell_name(row, col), candidates=candidates, depth=depth)

    def log_assign(self, row: int, col: int, value: int, depth: int):
        """Log a tentative placement."""
        self._record('assign', cell=cell_name(row, col), value=value, depth=depth)

    def log_backtrack(self, row: int, col: int, depth: int, reason: str = "No remaining digits"):
        """Log exhausting every digit of a cell."""
        self._record('backtrack', cell=cell_name(row, col), depth=depth, reason=reason)

    def log_dead_end(self, row: int, col: int, depth: int):
        """Log an empty cell with no legal digit left."""
        self._record('dead_end', cell=cell_name(row, col), candidates=0, depth=depth,
                     reason="Cell has no candidates")

    def log_solution_found(self, solutions: int, depth: int):
        """Log when a complete grid is reached."""
        self._record('solution_found', solutions=solutions, depth=depth)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'cell', 'value',
            'candidates', 'depth', 'solutions', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_assignments': action_counts.get('assign', 0),
            'num_backtracks': action_counts.get('backtrack', 0) + action_counts.get('dead_end', 0),
            'max_depth': max((s.depth or 0 for s in self.steps), default=0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
