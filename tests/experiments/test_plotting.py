from __future__ import annotations

from pathlib import Path

from core.types import History, IterationRecord
from experiments.plotting import plot_history


def _history() -> History:
    history = History()
    history.append(IterationRecord(1, "reflect", 1.0, 0.5, 4))
    history.append(IterationRecord(2, "expand", 0.1, 0.05, 6))
    history.append(IterationRecord(3, "shrink", 0.0, 0.0, 13))
    return history


def test_plot_history_creates_file(tmp_path: Path) -> None:
    out_path = tmp_path / "nested" / "history.png"
    plot_history(_history(), out_path, title="demo")
    assert out_path.exists()


def test_plot_history_linear_axis(tmp_path: Path) -> None:
    out_path = tmp_path / "linear.png"
    plot_history(_history(), out_path, logy=False)
    assert out_path.exists()


def test_plot_history_empty(tmp_path: Path) -> None:
    out_path = tmp_path / "missing.png"
    plot_history(History(), out_path)
    assert not out_path.exists()


def test_plot_history_keeps_sign_of_negative_minima(tmp_path: Path, monkeypatch) -> None:
    import matplotlib.axes

    plotted: list = []
    original_plot = matplotlib.axes.Axes.plot

    def recording_plot(self, *args, **kwargs):
        plotted.append(args[1])
        return original_plot(self, *args, **kwargs)

    monkeypatch.setattr(matplotlib.axes.Axes, "plot", recording_plot)

    history = History()
    history.append(IterationRecord(1, "reflect", -2.0, 0.5, 4))
    history.append(IterationRecord(2, "expand", -5.0, 0.05, 6))
    out_path = tmp_path / "negative.png"
    plot_history(history, out_path)

    assert out_path.exists()
    assert list(plotted[0]) == [-2.0, -5.0]
    assert list(plotted[1]) == [0.5, 0.05]
