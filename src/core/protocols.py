"""Protocol definitions for the simplex optimizer.

This module contains Protocol classes defining interfaces for:
- Objectives: scalar functions of a vertex
- ConstraintSets: callable feasibility maps applied to candidate vertices
- Minimizers: objects that run a minimization from a starting point
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from core.types import NelderMeadResult, Vector

__all__ = [
    "Objective",
    "ConstraintSet",
    "Minimizer",
]


@runtime_checkable
class Objective(Protocol):
    """Protocol for objective functions.

    Any callable taking an (N,) vector and returning a real number qualifies,
    including plain functions and lambdas.
    """

    def __call__(self, x: Vector) -> float:
        """Evaluate the objective at x.

        Args:
            x: Point of shape (N,). Must not be retained or mutated.

        Returns:
            Scalar objective value.
        """
        ...


@runtime_checkable
class ConstraintSet(Protocol):
    """Protocol for constraint sets used as the optimizer's constraint callback.

    Constraint sets offer two views of the same map:
    - project() returns a new feasible point and leaves x untouched
    - __call__() makes x feasible in place
    """

    def project(self, x: Vector) -> Vector:
        """Return the feasible point corresponding to x.

        Args:
            x: Point to project.

        Returns:
            A new array of the same shape as x.
        """
        ...

    def __call__(self, x: Vector) -> None:
        """Overwrite x with its projection."""
        ...


@runtime_checkable
class Minimizer(Protocol):
    """Protocol for derivative-free minimizers."""

    @property
    def dimension(self) -> int:
        """Number of free variables."""
        ...

    def run(self, start: Sequence[float], tolerance: float, scale: float) -> NelderMeadResult:
        """Minimize from start and return the run result."""
        ...
