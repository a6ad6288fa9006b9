from __future__ import annotations

import numpy as np
import pytest

from core.types import MOVES, History, IterationRecord, NelderMeadResult


def test_history_basic_aggregation() -> None:
    history = History()
    history.append(IterationRecord(1, "reflect", 3.0, 1.5, 4))
    history.append(IterationRecord(2, "expand", 1.0, 0.5, 6))
    history.append(IterationRecord(3, "expand", 0.5, 0.25, 8))

    assert len(history) == 3
    assert history.last().move == "expand"
    np.testing.assert_array_equal(history.best_values(), [3.0, 1.0, 0.5])
    np.testing.assert_array_equal(history.spreads(), [1.5, 0.5, 0.25])

    counts = history.move_counts()
    assert set(counts) == set(MOVES)
    assert counts["expand"] == 2
    assert counts["reflect"] == 1
    assert counts["shrink"] == 0


def test_history_empty() -> None:
    history = History()
    assert len(history) == 0
    assert history.best_values().size == 0
    assert sum(history.move_counts().values()) == 0
    with pytest.raises(IndexError):
        _ = history.last()


def test_result_defaults() -> None:
    result = NelderMeadResult(iteration_count=3, eval_count=9, min_value=0.5, x=np.zeros(2))
    assert not result.converged
    assert np.isnan(result.spread)
    assert result.history is None
    with pytest.raises(AttributeError):
        result.min_value = 1.0  # type: ignore[misc]
