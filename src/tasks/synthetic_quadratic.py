"""Synthetic quadratic objectives.

This module provides convex quadratic objectives with known minimizers:
    bowl:     f(x) = sum_i (x_i - c_i)^2
    general:  f(x) = 0.5 * x^T A x + b^T x    (A symmetric positive definite)

These are the primary sanity checks for the simplex optimizer because:
- Each has a unique global minimum at a closed-form point
- They are smooth, so simplex convergence is well-behaved
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from core.types import Vector

__all__ = [
    "QuadraticBowl",
    "QuadraticProblem",
    "make_spd_quadratic",
]


@dataclass(frozen=True, eq=False)
class QuadraticBowl:
    """Separable bowl f(x) = sum((x - center)^2) with minimum 0 at center.

    Example:
        >>> bowl = QuadraticBowl([1.0, -2.0])
        >>> bowl(np.array([1.0, 0.0]))
        4.0
    """

    center: Vector

    def __post_init__(self) -> None:
        center = np.asarray(self.center, dtype=np.float64)
        if center.ndim != 1 or center.size == 0:
            raise ValueError(f"center must be a non-empty 1D vector, got shape {center.shape}")
        object.__setattr__(self, "center", center)

    @property
    def dim(self) -> int:
        return int(self.center.shape[0])

    def __call__(self, x: Vector) -> float:
        d = np.asarray(x, dtype=np.float64) - self.center
        return float(d @ d)


@dataclass(frozen=True)
class QuadraticProblem:
    """A convex quadratic objective.

    Defines the function:
        f(x) = 0.5 * x^T A x + b^T x

    where A is symmetric positive definite and b is a vector.

    Attributes:
        A: Symmetric positive definite matrix of shape (d, d).
        b: Linear term vector of shape (d,).

    Example:
        >>> A = np.array([[2.0, 0.0], [0.0, 1.0]])
        >>> b = np.array([1.0, -1.0])
        >>> problem = QuadraticProblem(A, b)
        >>> problem(np.array([0.0, 0.0]))
        0.0
    """

    A: np.ndarray
    b: np.ndarray

    def __post_init__(self) -> None:
        """Validate that A is SPD and dimensions are consistent."""
        if self.A.ndim != 2:
            raise ValueError(f"A must be 2D, got ndim={self.A.ndim}")
        if self.A.shape[0] != self.A.shape[1]:
            raise ValueError(f"A must be square, got shape {self.A.shape}")
        if self.b.ndim != 1:
            raise ValueError(f"b must be 1D, got ndim={self.b.ndim}")
        if self.b.shape[0] != self.A.shape[0]:
            raise ValueError(
                f"Dimension mismatch: A is {self.A.shape[0]}x{self.A.shape[0]}, "
                f"b has length {self.b.shape[0]}"
            )

        if not np.allclose(self.A, self.A.T, rtol=1e-10, atol=1e-10):
            raise ValueError("A must be symmetric")

        try:
            np.linalg.cholesky(self.A)
        except np.linalg.LinAlgError as e:
            raise ValueError("A must be positive definite") from e

    @property
    def dim(self) -> int:
        """Dimensionality of the problem."""
        return int(self.A.shape[0])

    def __call__(self, x: Vector) -> float:
        return float(0.5 * x @ self.A @ x + self.b @ x)

    def x_star(self) -> Vector:
        """Compute the optimal solution x* = -A^{-1} b."""
        return np.linalg.solve(self.A, -self.b)

    def f_star(self) -> float:
        """Optimal value f(x*)."""
        return self(self.x_star())


def make_spd_quadratic(
    *,
    dim: int,
    rng: np.random.Generator,
    cond: float = 10.0,
) -> QuadraticProblem:
    """Generate a random SPD quadratic problem with controlled condition number.

    Creates a symmetric positive definite matrix A with eigenvalues
    uniformly spaced between 1 and `cond`, and a random vector b.

    Args:
        dim: Dimensionality of the problem.
        rng: Random number generator for reproducibility.
        cond: Condition number of A (ratio of max to min eigenvalue).
              Must be >= 1. Default is 10.0.

    Returns:
        A QuadraticProblem with the generated A and b.

    Raises:
        ValueError: If dim < 1 or cond < 1.
    """
    if dim < 1:
        raise ValueError(f"dim must be >= 1, got {dim}")
    if cond < 1.0:
        raise ValueError(f"cond must be >= 1, got {cond}")

    # Random orthogonal basis via QR
    Q, _ = np.linalg.qr(rng.standard_normal((dim, dim)))

    if dim == 1:
        eigenvalues = np.array([1.0])
    else:
        eigenvalues = np.linspace(1.0, cond, dim)

    A = Q @ np.diag(eigenvalues) @ Q.T
    A = (A + A.T) / 2.0

    b = rng.standard_normal(dim).astype(np.float64)
    return QuadraticProblem(A=A, b=b)

