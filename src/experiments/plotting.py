"""Plotting helpers for optimizer runs."""

from __future__ import annotations

from pathlib import Path

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from core.types import History  # noqa: E402


def plot_history(
    history: History,
    out_path: Path,
    *,
    title: str | None = None,
    logy: bool = True,
) -> None:
    """Plot best value and spread per iteration.

    Args:
        history: Records of a single run.
        out_path: Output PNG path. Nothing is written for an empty history.
        title: Optional plot title.
        logy: Use a symmetric log scale on the y axis, so negative and zero
            best values keep their sign.
    """
    if len(history) == 0:
        return
    out_path.parent.mkdir(parents=True, exist_ok=True)

    x = np.arange(1, len(history) + 1)
    best = history.best_values()
    spread = history.spreads()

    fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.plot(x, best, label="best value")
    ax.plot(x, spread, linestyle="--", alpha=0.7, label="spread")
    ax.set_xlabel("iteration")
    ax.set_ylabel("value")
    if logy:
        ax.set_yscale("symlog", linthresh=1e-12)
    if title:
        ax.set_title(title)
    ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
