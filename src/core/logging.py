"""Console logging helpers for optimizer runs.

Messages go to stdout with a bracketed tag and are flushed immediately so
long runs show progress as they happen.
"""

from __future__ import annotations

from core.types import NelderMeadResult, Vector

__all__ = ["log", "format_vertex", "format_result"]


def log(msg: str, *, tag: str = "NelderMead") -> None:
    print(f"[{tag}] {msg}", flush=True)


def format_vertex(x: Vector) -> str:
    return ", ".join(f"{float(v):.6g}" for v in x)


def format_result(result: NelderMeadResult) -> str:
    """Render a result as an indented multi-line block."""
    lines = [
        f"    {result.eval_count} Function Evaluations",
        f"    {result.iteration_count} Iterations through program",
        f"    Converged: {result.converged} (spread {result.spread:.3e})",
        f"    Best result: {result.min_value:e}",
    ]
    lines.extend(f"        Best variables: {float(v):e}" for v in result.x)
    return "\n".join(lines)
