"""Optimization algorithms module.

This package contains:
- Nelder-Mead simplex optimizer (derivative-free)
- Constraint sets usable as the optimizer's constraint callback (box, L2 ball)
"""

from __future__ import annotations

from optim.constraints import BoxConstraint, L2BallConstraint
from optim.nelder_mead import NelderMeadOptimizer

__all__ = [
    # Constraints
    "BoxConstraint",
    "L2BallConstraint",
    # Nelder-Mead
    "NelderMeadOptimizer",
]
