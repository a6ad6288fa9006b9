"""Tests for constraint sets used as optimizer callbacks."""

from __future__ import annotations

import numpy as np
import pytest

from optim.constraints import BoxConstraint, L2BallConstraint


class TestBoxConstraint:
    """Tests for coordinate clamping."""

    def test_invalid_bounds(self) -> None:
        with pytest.raises(ValueError, match="lower must be <= upper"):
            BoxConstraint(lower=1.0, upper=0.0)
        with pytest.raises(ValueError, match="lower must be <= upper"):
            BoxConstraint(lower=[0.0, 2.0], upper=[1.0, 1.0])
        with pytest.raises(ValueError, match="incompatible shapes"):
            BoxConstraint(lower=[0.0, 0.0], upper=[1.0, 1.0, 1.0])

    def test_call_clamps_in_place(self) -> None:
        box = BoxConstraint(lower=-600.0, upper=600.0)
        x = np.array([-700.0, 10.0, 800.0])
        assert box(x) is None
        np.testing.assert_array_equal(x, [-600.0, 10.0, 600.0])

    def test_project_returns_copy(self) -> None:
        box = BoxConstraint(lower=[0.0, -1.0], upper=[1.0, 0.0])
        x = np.array([2.0, 2.0])
        projected = box.project(x)
        np.testing.assert_array_equal(projected, [1.0, 0.0])
        np.testing.assert_array_equal(x, [2.0, 2.0])


class TestL2BallConstraint:
    """Tests for the Euclidean ball projection."""

    def test_radius_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            L2BallConstraint(radius=0.0)
        with pytest.raises(ValueError, match="positive"):
            L2BallConstraint(radius=-1.0)

    def test_project_inside_is_identity_copy(self) -> None:
        ball = L2BallConstraint(radius=2.0)
        x = np.array([1.0, 1.0])
        projected = ball.project(x)
        np.testing.assert_array_equal(projected, x)
        assert projected is not x

    def test_project_outside_lands_on_boundary(self) -> None:
        ball = L2BallConstraint(radius=1.0)
        projected = ball.project(np.array([3.0, 4.0]))
        np.testing.assert_allclose(projected, [0.6, 0.8])
        assert float(np.linalg.norm(projected)) == pytest.approx(1.0)

    def test_call_scales_in_place(self) -> None:
        ball = L2BallConstraint(radius=5.0)
        x = np.array([6.0, 8.0])
        ball(x)
        np.testing.assert_allclose(x, [3.0, 4.0])
        y = np.array([1.0, 1.0])
        ball(y)
        np.testing.assert_array_equal(y, [1.0, 1.0])
