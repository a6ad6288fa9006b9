"""Tasks module for the simplex optimizer.

This package contains objective functions with known minimizers used by the
demo driver and the tests.

Available tasks:
- QuadraticBowl: f(x) = sum((x - c)^2)
- QuadraticProblem: f(x) = 0.5 x^T A x + b^T x with SPD A
- ImplicitCurveDistance: distance between two implicit parabolas (non-smooth minimum)
"""

from __future__ import annotations

from tasks.implicit_curves import ImplicitCurveDistance
from tasks.synthetic_quadratic import (
    QuadraticBowl,
    QuadraticProblem,
    make_spd_quadratic,
)

__all__ = [
    # Quadratic tasks
    "QuadraticBowl",
    "QuadraticProblem",
    "make_spd_quadratic",
    # Implicit curves
    "ImplicitCurveDistance",
]
