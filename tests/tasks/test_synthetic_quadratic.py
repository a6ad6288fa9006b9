"""Tests for synthetic quadratic objectives.

This module tests:
- QuadraticBowl: values and validation
- QuadraticProblem: values, optimal solution and validation
- make_spd_quadratic: problem generation
"""

from __future__ import annotations

import numpy as np
import pytest

from tasks.synthetic_quadratic import QuadraticBowl, QuadraticProblem, make_spd_quadratic

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def simple_problem() -> QuadraticProblem:
    """A simple 2D quadratic problem with known solution."""
    # f(x) = x1^2 + 0.5*x2^2 + x1 - x2, x* = [-0.5, 1.0]
    A = np.array([[2.0, 0.0], [0.0, 1.0]])
    b = np.array([1.0, -1.0])
    return QuadraticProblem(A, b)


class TestQuadraticBowl:
    def test_value(self) -> None:
        bowl = QuadraticBowl([1.0, -2.0])
        assert bowl.dim == 2
        assert bowl(np.array([1.0, -2.0])) == 0.0
        assert bowl(np.array([1.0, 0.0])) == pytest.approx(4.0)

    def test_center_converted_to_array(self) -> None:
        bowl = QuadraticBowl([1, 2, 3])
        assert isinstance(bowl.center, np.ndarray)
        assert bowl.center.dtype == np.float64

    def test_invalid_center(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            QuadraticBowl([])
        with pytest.raises(ValueError, match="non-empty"):
            QuadraticBowl(np.zeros((2, 2)))


class TestQuadraticProblem:
    def test_value_at_origin(self, simple_problem: QuadraticProblem) -> None:
        assert simple_problem(np.zeros(2)) == 0.0

    def test_optimum(self, simple_problem: QuadraticProblem) -> None:
        np.testing.assert_allclose(simple_problem.x_star(), [-0.5, 1.0])
        assert simple_problem.f_star() == pytest.approx(-0.75)

    def test_validation(self) -> None:
        with pytest.raises(ValueError, match="square"):
            QuadraticProblem(np.ones((2, 3)), np.ones(2))
        with pytest.raises(ValueError, match="symmetric"):
            QuadraticProblem(np.array([[1.0, 2.0], [0.0, 1.0]]), np.ones(2))
        with pytest.raises(ValueError, match="positive definite"):
            QuadraticProblem(-np.eye(2), np.ones(2))
        with pytest.raises(ValueError, match="mismatch"):
            QuadraticProblem(np.eye(2), np.ones(3))


class TestMakeSpdQuadratic:
    def test_condition_number(self) -> None:
        problem = make_spd_quadratic(dim=4, rng=np.random.default_rng(0), cond=8.0)
        eig = np.linalg.eigvalsh(problem.A)
        assert eig.min() == pytest.approx(1.0)
        assert eig.max() == pytest.approx(8.0)

    def test_reproducible(self) -> None:
        a = make_spd_quadratic(dim=3, rng=np.random.default_rng(1))
        b = make_spd_quadratic(dim=3, rng=np.random.default_rng(1))
        np.testing.assert_array_equal(a.A, b.A)
        np.testing.assert_array_equal(a.b, b.b)

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            make_spd_quadratic(dim=0, rng=np.random.default_rng(0))
        with pytest.raises(ValueError):
            make_spd_quadratic(dim=2, rng=np.random.default_rng(0), cond=0.5)
