"""Nelder-Mead simplex optimizer.

This module provides NelderMeadOptimizer, a derivative-free minimizer for
scalar functions of N variables. Each iteration replaces the worst vertex of
an (N+1)-vertex simplex using one of four moves:

    reflection:   xr = c + alpha * (c - x_worst)
    expansion:    xe = c + gamma * (xr - c)
    contraction:  xc = c + rho * (xr - c)        (outside)
                  xc = c - rho * (c - x_worst)   (inside)
    shrink:       x_i = x_best + (x_i - x_best) / 2

where c is the centroid of every vertex except the worst one. Iteration stops
when the spread of the objective values across the simplex falls below the
tolerance, or when the iteration budget runs out.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

import numpy as np

from core.logging import format_vertex, log
from core.types import (
    ConstraintFn,
    History,
    IterationRecord,
    NelderMeadResult,
    ObjectiveFn,
    Vector,
)

__all__ = ["NelderMeadOptimizer"]


class NelderMeadOptimizer:
    """Nelder-Mead minimizer over a fixed number of variables.

    The simplex (N+1 rows by N columns), its value table and the four
    scratch rows are allocated once here and reused by every run. A single
    instance may run many independent minimizations; each run rebuilds the
    simplex from its own start point and resets the evaluation counter.
    Only the configuration carries over between runs.

    Index scans go from vertex 0 to vertex N and keep the first index found
    on ties. The second-worst vertex is the one with the largest value
    strictly below the worst value; when there is none it is the best vertex.

    Attributes:
        max_iterations: Iteration budget per run.
        reflection: Reflection coefficient (conventionally > 0).
        expansion: Expansion coefficient (conventionally > 1).
        contraction: Contraction coefficient (conventionally in (0, 1)).
        verbose: Log the initial simplex and every iteration.
        track_history: Attach a History of per-iteration records to results.

    Example:
        >>> opt = NelderMeadOptimizer(1, lambda x: (x[0] - 5.0) ** 2)
        >>> result = opt.run([0.0], tolerance=1e-10, scale=1.0)
        >>> round(float(result.x[0]), 3)
        5.0
    """

    def __init__(
        self,
        dimension: int,
        objective: ObjectiveFn,
        constraint: ConstraintFn | None = None,
        *,
        verbose: bool = False,
        track_history: bool = False,
    ) -> None:
        """Initialize the optimizer.

        Args:
            dimension: Number of free variables. Must be >= 1.
            objective: Maps an (N,) vector to a real value.
            constraint: Optional feasibility map. It receives a candidate
                vertex and must either clamp it in place (returning None) or
                return the feasible point, which is copied back. None means
                no constraints.
            verbose: Log the initial simplex and every iteration.
            track_history: Record one IterationRecord per iteration.

        Raises:
            ValueError: If dimension < 1.
        """
        if dimension < 1:
            raise ValueError(f"dimension must be >= 1, got {dimension}")

        self._n = int(dimension)
        self._objective = objective
        self._constraint = constraint
        self.verbose = verbose
        self.track_history = track_history

        self.max_iterations = 1000
        self.reflection = 1.0
        self.expansion = 2.0
        self.contraction = 0.5

        n = self._n
        self._v = np.zeros((n + 1, n), dtype=np.float64)
        self._f = np.zeros(n + 1, dtype=np.float64)
        self._vm = np.zeros(n, dtype=np.float64)  # centroid
        self._vr = np.zeros(n, dtype=np.float64)  # reflection
        self._ve = np.zeros(n, dtype=np.float64)  # expansion
        self._vc = np.zeros(n, dtype=np.float64)  # contraction
        self._fd = np.zeros(n + 1, dtype=np.float64)  # value deviations

        self._eval_count = 0
        self._last_result: NelderMeadResult | None = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def dimension(self) -> int:
        """Number of free variables (fixed at construction)."""
        return self._n

    @property
    def eval_count(self) -> int:
        """Objective evaluations performed by the current or most recent run."""
        return self._eval_count

    @property
    def last_result(self) -> NelderMeadResult | None:
        """Result of the most recent run, or None before the first run."""
        return self._last_result

    def get_last_result(self) -> NelderMeadResult | None:
        return self._last_result

    def set_max_iterations(self, value: int) -> None:
        """Set the iteration budget.

        Raises:
            ValueError: If value is negative.
        """
        if value < 0:
            raise ValueError(f"max_iterations must be >= 0, got {value}")
        self.max_iterations = int(value)

    def set_reflection_coefficient(self, value: float) -> None:
        self.reflection = float(value)

    def set_expansion_coefficient(self, value: float) -> None:
        self.expansion = float(value)

    def set_contraction_coefficient(self, value: float) -> None:
        self.contraction = float(value)

    def configure(
        self,
        *,
        max_iterations: int | None = None,
        reflection: float | None = None,
        expansion: float | None = None,
        contraction: float | None = None,
    ) -> None:
        """Update several settings at once. None leaves a setting unchanged.

        Coefficients are not range-checked; values outside the conventional
        ranges give whatever convergence behavior results.
        """
        if max_iterations is not None:
            self.set_max_iterations(max_iterations)
        if reflection is not None:
            self.set_reflection_coefficient(reflection)
        if expansion is not None:
            self.set_expansion_coefficient(expansion)
        if contraction is not None:
            self.set_contraction_coefficient(contraction)

    def settings(self) -> dict[str, Any]:
        """Return the current configuration as a plain dict."""
        return {
            "max_iterations": self.max_iterations,
            "reflection": self.reflection,
            "expansion": self.expansion,
            "contraction": self.contraction,
        }

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, start: Sequence[float], tolerance: float, scale: float) -> NelderMeadResult:
        """Minimize the objective starting from start.

        Args:
            start: Starting point of length N. It becomes vertex 0 of the
                initial simplex (after constraints are applied).
            tolerance: Stop once the spread of the objective values across
                the simplex drops below this.
            scale: Characteristic edge length of the initial simplex.

        Returns:
            The run result, also kept as last_result until the next run.

        Raises:
            ValueError: If start does not have length N.
        """
        x0 = np.asarray(start, dtype=np.float64)
        if x0.shape != (self._n,):
            raise ValueError(f"start must have shape ({self._n},), got {x0.shape}")

        # Settings are read once; changing them mid-run has no effect on this run
        max_iterations = self.max_iterations
        alpha = self.reflection
        gamma = self.expansion
        rho = self.contraction

        v, f = self._v, self._f
        self._initialize(x0, scale)

        # The caller's start point is not assumed to be feasible
        for row in v:
            self._constrain(row)
        for j in range(self._n + 1):
            f[j] = self._evaluate(v[j])

        if self.verbose:
            self._log_simplex("initial simplex")

        history = History() if self.track_history else None
        spread = self._spread()
        converged = False
        iteration = 0
        while iteration < max_iterations:
            iteration += 1
            move = self._step(alpha, gamma, rho)
            spread = self._spread()

            if history is not None:
                history.append(
                    IterationRecord(
                        iteration=iteration,
                        move=move,
                        best=float(f.min()),
                        spread=spread,
                        eval_count=self._eval_count,
                    )
                )
            if self.verbose:
                log(
                    f"iter {iteration}: {move} best={float(f.min()):.6e} "
                    f"spread={spread:.3e} evals={self._eval_count}"
                )

            if spread < tolerance:
                converged = True
                break

        vs, _vh, _vg = self._indexes()
        # Re-evaluated and counted rather than read from the value table
        min_value = self._evaluate(v[vs])
        x = v[vs].copy()
        x.setflags(write=False)

        result = NelderMeadResult(
            iteration_count=iteration,
            eval_count=self._eval_count,
            min_value=min_value,
            x=x,
            converged=converged,
            spread=spread,
            history=history,
        )
        self._last_result = result
        if self.verbose:
            log(
                f"done after {iteration} iterations ({self._eval_count} evals): "
                f"min={min_value:.6e} at [{format_vertex(x)}]"
            )
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _evaluate(self, x: Vector) -> float:
        """Single entry point for objective calls; counts every call."""
        self._eval_count += 1
        return float(self._objective(x))

    def _constrain(self, x: Vector) -> None:
        if self._constraint is None:
            return
        projected = self._constraint(x)
        if projected is not None and projected is not x:
            np.copyto(x, projected)

    def _initialize(self, start: Vector, scale: float) -> None:
        """Build a regular simplex of edge scale with vertex 0 at start."""
        n = self._n
        self._eval_count = 0

        p = scale * (math.sqrt(n + 1) - 1 + n) / (n * math.sqrt(2))
        q = scale * (math.sqrt(n + 1) - 1) / (n * math.sqrt(2))

        v = self._v
        v[0] = start
        for i in range(1, n + 1):
            v[i] = start + q
            v[i, i - 1] = start[i - 1] + p

    def _indexes(self) -> tuple[int, int, int]:
        """Return (best, second worst, worst) vertex indices."""
        f = self._f
        vs = vg = 0
        for j in range(1, self._n + 1):
            if f[j] > f[vg]:
                vg = j
            if f[j] < f[vs]:
                vs = j
        vh = vs
        for j in range(self._n + 1):
            if f[vh] < f[j] < f[vg]:
                vh = j
        return vs, vh, vg

    def _centroid(self, exclude: int) -> None:
        vm = self._vm
        vm.fill(0.0)
        for m in range(self._n + 1):
            if m != exclude:
                vm += self._v[m]
        vm /= self._n

    def _accept(self, index: int, x: Vector, value: float) -> None:
        self._v[index] = x
        self._f[index] = value

    def _step(self, alpha: float, gamma: float, rho: float) -> str:
        """Run one iteration and return the name of the move taken."""
        v, f = self._v, self._f
        vm, vr, ve, vc = self._vm, self._vr, self._ve, self._vc

        vs, vh, vg = self._indexes()
        self._centroid(vg)

        np.subtract(vm, v[vg], out=vr)
        vr *= alpha
        vr += vm
        self._constrain(vr)
        fr = self._evaluate(vr)

        if f[vs] <= fr < f[vh]:
            self._accept(vg, vr, fr)
            return "reflect"

        if fr < f[vs]:
            np.subtract(vr, vm, out=ve)
            ve *= gamma
            ve += vm
            self._constrain(ve)
            fe = self._evaluate(ve)
            if fe < fr:
                self._accept(vg, ve, fe)
                return "expand"
            self._accept(vg, vr, fr)
            return "reflect"

        # fr >= f[vh]: the reflection is no better than the second worst
        if fr < f[vg]:
            move = "contract_outside"
            np.subtract(vr, vm, out=vc)
            vc *= rho
            vc += vm
        else:
            move = "contract_inside"
            np.subtract(vm, v[vg], out=vc)
            vc *= rho
            np.subtract(vm, vc, out=vc)
        self._constrain(vc)
        fc = self._evaluate(vc)

        if fc < f[vg]:
            self._accept(vg, vc, fc)
            return move

        self._shrink(vs)
        return "shrink"

    def _shrink(self, vs: int) -> None:
        """Halve every vertex's distance to the best vertex, then re-evaluate."""
        v, f = self._v, self._f
        best = v[vs]
        for row in range(self._n + 1):
            if row != vs:
                v[row] -= best
                v[row] /= 2.0
                v[row] += best
        for j in range(self._n + 1):
            f[j] = self._evaluate(v[j])

        # The new worst and second worst are constrained and evaluated once more
        _vs, vh, vg = self._indexes()
        self._constrain(v[vg])
        f[vg] = self._evaluate(v[vg])
        self._constrain(v[vh])
        f[vh] = self._evaluate(v[vh])

    def _spread(self) -> float:
        """Deviation of the values about their mean, with divisor N."""
        f = self._f
        d = self._fd
        mean = float(np.sum(f)) / (self._n + 1)
        np.subtract(f, mean, out=d)
        return math.sqrt(float(np.dot(d, d)) / self._n)

    def _log_simplex(self, title: str) -> None:
        log(title)
        for j in range(self._n + 1):
            log(f"  v[{j}] = [{format_vertex(self._v[j])}] value {self._f[j]:.6e}")
