"""Distance between two implicit curves.

For constants a and b the objective is

    u(x) = (b^2 - a) - (x0^2 - x1)
    w(x) = (a^2 - b) - (x1^2 - x0)
    f(x) = sqrt(u^2 + w^2)

which is zero exactly where x0^2 - x1 = b^2 - a and x1^2 - x0 = a^2 - b hold
together, i.e. at an intersection of the two parabolas. The square root
makes f non-smooth at its minimum, which is the situation simplex methods
handle better than gradient methods. The point (b, a) is always a root.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from core.types import Vector

__all__ = ["ImplicitCurveDistance"]


@dataclass(frozen=True)
class ImplicitCurveDistance:
    """Two-variable implicit-curve distance objective.

    Attributes:
        a: First curve constant.
        b: Second curve constant.
    """

    a: float = -1.23456
    b: float = 6.54321

    dim = 2

    def __call__(self, x: Vector) -> float:
        a, b = self.a, self.b
        u = (b * b - a) - (x[0] * x[0] - x[1])
        w = (a * a - b) - (x[1] * x[1] - x[0])
        return math.sqrt(u * u + w * w)

    def root(self) -> Vector:
        """A known zero of the objective."""
        return np.array([self.b, self.a], dtype=np.float64)
