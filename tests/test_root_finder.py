"""
Unit Tests for the Root Finders
===============================
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import logging
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kinematics_engine.config import NewtonSettings
from kinematics_engine.errors import NoConvergence
from kinematics_engine.root_finder import newton_raphson, bisection


class TestNewtonRaphson:

    def test_square_root_of_two(self):
        res = newton_raphson(lambda x: x * x - 2.0, 1.0)
        assert res.converged
        assert res.value == pytest.approx(math.sqrt(2.0), abs=0.005)
        assert abs(res.residual) < 0.01

    def test_analytic_derivative(self):
        res = newton_raphson(lambda x: x * x - 9.0, 1.0, fprime=lambda x: 2.0 * x)
        assert res.converged
        assert res.value == pytest.approx(3.0, abs=0.005)

    def test_guess_clamped_into_bounds(self):
        res = newton_raphson(lambda x: x - 2.0, -50.0)
        assert res.converged
        assert res.value == pytest.approx(2.0, abs=0.01)

    def test_nudges_past_undefined_region(self):
        """Objective undefined below 5: steps forward until it is defined."""
        def f(x):
            return None if x < 5.0 else x - 7.0
        res = newton_raphson(f, 1.0)
        assert res.converged
        assert res.value == pytest.approx(7.0, abs=0.01)

    def test_flat_objective_gives_up_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kinematics_engine.root_finder"):
            res = newton_raphson(lambda x: 1.0, 1.0)
        assert not res.converged
        assert res.iterations == NewtonSettings().max_iter
        assert "did not reach tolerance" in caplog.text

    def test_flat_objective_raises_on_request(self):
        with pytest.raises(NoConvergence) as exc:
            newton_raphson(lambda x: 1.0, 1.0, raise_on_failure=True)
        assert exc.value.result is not None
        assert not exc.value.result.converged

    def test_stops_at_ceiling(self):
        res = newton_raphson(lambda x: x - 5000.0, 1.0)
        assert not res.converged
        assert res.value == 1000.0
        assert res.iterations == 1

    def test_custom_settings(self):
        loose = NewtonSettings(tol=1.0)
        res = newton_raphson(lambda x: x - 3.5, 3.0, settings=loose)
        assert res.converged
        assert res.iterations == 1


class TestBisection:

    def test_increasing_function(self):
        res = bisection(lambda x: x - 2.5, 0.0, 10.0)
        assert res.converged
        assert res.value == pytest.approx(2.5, abs=0.01)

    def test_decreasing_function(self):
        res = bisection(lambda x: 3.0 - x, 0.0, 10.0)
        assert res.converged
        assert res.value == pytest.approx(3.0, abs=0.01)

    def test_swapped_bounds(self):
        res = bisection(lambda x: x - 4.0, 10.0, 0.0)
        assert res.value == pytest.approx(4.0, abs=0.01)

    def test_undefined_high_side_discarded(self):
        def f(x):
            return None if x > 4.0 else x - 1.0
        res = bisection(f, 0.0, 10.0, undefined_side="high")
        assert res.converged
        assert res.value == pytest.approx(1.0, abs=0.01)

    def test_undefined_low_side_discarded(self):
        def f(x):
            return None if x < 6.0 else x - 8.0
        res = bisection(f, 0.0, 10.0, undefined_side="low")
        assert res.converged
        assert res.value == pytest.approx(8.0, abs=0.01)

    def test_no_root_returns_best_effort(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kinematics_engine.root_finder"):
            res = bisection(lambda x: x + 1.0, 0.0, 10.0)
        assert not res.converged
        assert res.value == pytest.approx(10.0, abs=1e-6)
        assert "bisection" in caplog.text

    def test_no_root_raises_on_request(self):
        with pytest.raises(NoConvergence):
            bisection(lambda x: x + 1.0, 0.0, 10.0, raise_on_failure=True)

    def test_bad_undefined_side(self):
        with pytest.raises(ValueError):
            bisection(lambda x: x, 0.0, 1.0, undefined_side="middle")


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
