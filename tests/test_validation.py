"""
Unit Tests for the Numerical Cross-Checks
=========================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kinematics_engine.trajectory import LaunchConfig, LaunchMode, compute_trajectory
from kinematics_engine.validation import (
    REFERENCE_LAUNCHES, integrate_trajectory,
    validate_closed_form, validate_round_trip, run_all_validations,
)


class TestIntegration:

    def test_matches_level_launch(self):
        cfg = LaunchConfig(LaunchMode.ANGLED, 40.0, 45.0, 0.0, 9.8)
        tof, rng, max_h = integrate_trajectory(cfg)
        model = compute_trajectory(cfg)
        assert tof == pytest.approx(model.time_of_flight, abs=1e-3)
        assert rng == pytest.approx(model.range, abs=1e-3)
        assert max_h == pytest.approx(model.max_height, abs=1e-3)

    def test_no_flight(self):
        cfg = LaunchConfig(LaunchMode.HORIZONTAL, 10.0, 0.0, 0.0, 9.8)
        assert integrate_trajectory(cfg) == (0.0, 0.0, 0.0)


class TestValidationSuite:

    def test_closed_form_agrees_with_integration(self):
        results = validate_closed_form(verbose=False)
        assert len(results) == len(REFERENCE_LAUNCHES)
        for r in results:
            assert r.passed(), r.name

    def test_round_trip_recovers_speed(self):
        results = validate_round_trip(verbose=False)
        # diving and horizontal references are skipped
        assert len(results) == 4
        for r in results:
            assert r.passed(), r.name

    def test_verbose_prints_table(self, capsys):
        run_all_validations(verbose=True)
        out = capsys.readouterr().out
        assert "closed form vs solve_ivp" in out
        assert "PASS" in out


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
