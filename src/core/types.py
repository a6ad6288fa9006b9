"""Core type definitions for the simplex optimizer.

This module contains:
- Type aliases for vertices and callbacks
- Data containers for per-iteration records and run results
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np

__all__ = [
    "Vector",
    "ObjectiveFn",
    "ConstraintFn",
    "MOVES",
    "IterationRecord",
    "History",
    "NelderMeadResult",
]

# Type alias for a point in variable space (shape (N,), float64)
Vector = np.ndarray

# Objective: point -> scalar value
ObjectiveFn = Callable[[Vector], float]

# Constraint: clamps the point in place, may also return the projected point
ConstraintFn = Callable[[Vector], Vector | None]

# Names of the simplex moves, in decision order
MOVES = ("reflect", "expand", "contract_outside", "contract_inside", "shrink")


@dataclass(frozen=True, slots=True)
class IterationRecord:
    """Snapshot taken at the end of one simplex iteration.

    Attributes:
        iteration: 1-based iteration number.
        move: Which move updated the simplex (one of MOVES).
        best: Smallest value in the value table after the move.
        spread: Convergence statistic after the move.
        eval_count: Objective evaluations performed so far in the run.
    """

    iteration: int
    move: str
    best: float
    spread: float
    eval_count: int


@dataclass
class History:
    """Ordered list of iteration records for a single run.

    Example:
        >>> history = History()
        >>> history.append(IterationRecord(1, "reflect", 2.0, 0.5, 4))
        >>> history.append(IterationRecord(2, "shrink", 1.0, 0.1, 9))
        >>> history.move_counts()["shrink"]
        1
    """

    records: list[IterationRecord] = field(default_factory=list)

    def __len__(self) -> int:
        """Return the number of recorded iterations."""
        return len(self.records)

    def append(self, record: IterationRecord) -> None:
        self.records.append(record)

    def last(self) -> IterationRecord:
        """Return the most recent record.

        Raises:
            IndexError: If history is empty.
        """
        return self.records[-1]

    def best_values(self) -> np.ndarray:
        return np.asarray([r.best for r in self.records], dtype=np.float64)

    def spreads(self) -> np.ndarray:
        return np.asarray([r.spread for r in self.records], dtype=np.float64)

    def move_counts(self) -> dict[str, int]:
        """Count how often each move was taken (every move name present)."""
        counts = Counter(r.move for r in self.records)
        return {move: counts.get(move, 0) for move in MOVES}


@dataclass(frozen=True, slots=True, eq=False)
class NelderMeadResult:
    """Outcome of one optimizer run.

    A run that exhausts its iteration budget is not an error: it reports
    ``iteration_count == max_iterations`` with ``converged`` False.

    Results compare equal when every scalar field matches and the best
    vertices are element-wise identical.

    Attributes:
        iteration_count: Iterations actually performed.
        eval_count: Total objective evaluations, including the final one at the best vertex.
        min_value: Objective re-evaluated at the best vertex.
        x: Coordinates of the best vertex (read-only copy).
        converged: True if the spread fell below the tolerance.
        spread: Spread statistic at loop exit.
        history: Per-iteration records, only when history tracking is on.
    """

    iteration_count: int
    eval_count: int
    min_value: float
    x: Vector
    converged: bool = False
    spread: float = float("nan")
    history: History | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NelderMeadResult):
            return NotImplemented
        return (
            self.iteration_count == other.iteration_count
            and self.eval_count == other.eval_count
            and self.min_value == other.min_value
            and self.converged == other.converged
            and self.spread == other.spread
            and self.history == other.history
            and bool(np.array_equal(self.x, other.x))
        )
