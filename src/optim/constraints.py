"""Constraint sets for the simplex optimizer.

This module provides constraint set implementations that satisfy the
ConstraintSet protocol and can be passed directly as the optimizer's
constraint callback:
- BoxConstraint: coordinate-wise clamping {x : lower <= x <= upper}
- L2BallConstraint: Euclidean ball {x : ||x||_2 <= radius}
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from core.types import Vector

__all__ = ["BoxConstraint", "L2BallConstraint"]


@dataclass(frozen=True)
class BoxConstraint:
    """Box constraint set: {x : lower <= x <= upper}.

    Bounds are either scalars, applied to every coordinate, or sequences
    with one entry per coordinate.

    Attributes:
        lower: Lower bound(s).
        upper: Upper bound(s).

    Example:
        >>> box = BoxConstraint(lower=-600.0, upper=600.0)
        >>> x = np.array([-700.0, 10.0, 800.0])
        >>> box(x)
        >>> x
        array([-600.,   10.,  600.])
    """

    lower: float | Sequence[float]
    upper: float | Sequence[float]

    def __post_init__(self) -> None:
        """Validate that every lower bound is <= its upper bound."""
        lo = np.asarray(self.lower, dtype=np.float64)
        hi = np.asarray(self.upper, dtype=np.float64)
        try:
            bad = np.any(lo > hi)
        except ValueError as e:
            raise ValueError(
                f"lower and upper have incompatible shapes {lo.shape} and {hi.shape}"
            ) from e
        if bad:
            raise ValueError(f"lower must be <= upper, got lower={self.lower}, upper={self.upper}")

    def project(self, x: Vector) -> Vector:
        """Clamp a point into the box.

        Args:
            x: Point to project.

        Returns:
            The clamped point (as a copy).
        """
        return np.clip(np.asarray(x, dtype=np.float64), self.lower, self.upper)

    def __call__(self, x: Vector) -> None:
        np.clip(x, self.lower, self.upper, out=x)


@dataclass(frozen=True)
class L2BallConstraint:
    """L2 ball constraint set: {x : ||x||_2 <= radius}.

    This constraint set represents the Euclidean ball centered at the origin
    with the given radius.

    Attributes:
        radius: The radius of the ball. Must be positive.
    """

    radius: float

    def __post_init__(self) -> None:
        """Validate that radius is positive."""
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")

    def project(self, x: Vector) -> Vector:
        """Project a point onto the L2 ball.

        If ||x|| <= radius, returns x unchanged.
        Otherwise, returns radius * x / ||x|| (point on boundary).

        Args:
            x: Point to project.

        Returns:
            The projection of x onto the ball (as a copy).
        """
        x_norm = float(np.linalg.norm(x))
        if x_norm <= self.radius:
            return np.array(x, dtype=np.float64, copy=True)
        return np.asarray(self.radius * x / x_norm, dtype=np.float64)

    def __call__(self, x: Vector) -> None:
        x_norm = float(np.linalg.norm(x))
        if x_norm > self.radius:
            x *= self.radius / x_norm
