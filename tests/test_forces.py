"""
Unit Tests for the Block Force Model
====================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import logging
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kinematics_engine.errors import InvalidParameter
from kinematics_engine.forces import (
    MotionState, SurfaceConfig, compute_forces,
    critical_angle, min_force_to_move, min_force_up_incline, equilibrium_force,
)


class TestFlatSurface:
    """Block on a level surface, pushed by an applied force."""

    def test_push_below_static_limit_holds(self):
        """m=5 kg, F=5 N, μs=0.3: 5 N < 14.7 N so the block stays put."""
        surface = SurfaceConfig(mass=5.0, applied_force=5.0, gravity=9.8,
                                mu_static=0.3, mu_kinetic=0.2)
        f = compute_forces(surface, 0.0)
        assert f.state is MotionState.STATIONARY
        assert f.acceleration == 0.0
        assert f.net_force == 0.0
        assert f.friction_force == pytest.approx(-5.0)
        assert f.max_static_friction == pytest.approx(14.7)

    def test_push_above_static_limit_moves(self):
        surface = SurfaceConfig(mass=5.0, applied_force=20.0, gravity=9.8,
                                mu_static=0.3, mu_kinetic=0.2)
        f = compute_forces(surface, 0.0)
        assert f.state is MotionState.MOVING
        assert f.friction_force == pytest.approx(-9.8)
        assert f.net_force == pytest.approx(10.2)
        assert f.acceleration == pytest.approx(2.04)

    def test_kinetic_friction_opposes_velocity(self):
        surface = SurfaceConfig(mass=5.0, applied_force=0.0, gravity=9.8,
                                mu_static=0.3, mu_kinetic=0.2)
        f = compute_forces(surface, -1.0)
        assert f.state is MotionState.MOVING
        assert f.friction_force == pytest.approx(9.8)
        assert f.acceleration == pytest.approx(1.96)

    def test_weight_and_normal(self):
        f = compute_forces(SurfaceConfig(mass=2.0, gravity=10.0), 0.0)
        assert f.weight == pytest.approx(20.0)
        assert f.normal == pytest.approx(20.0)
        assert f.weight_parallel == 0.0

    def test_zero_incline_is_flat(self):
        flat = compute_forces(SurfaceConfig(applied_force=20.0), 0.0)
        zero = compute_forces(SurfaceConfig(applied_force=20.0, incline_deg=0.0), 0.0)
        assert flat == zero


class TestFrictionDisabled:

    def test_any_force_moves_block(self):
        surface = SurfaceConfig(mass=5.0, applied_force=5.0, friction_enabled=False)
        f = compute_forces(surface, 0.0)
        assert f.state is MotionState.MOVING
        assert f.friction_force == 0.0
        assert f.acceleration == pytest.approx(1.0)

    def test_no_force_at_rest_is_stationary(self):
        f = compute_forces(SurfaceConfig(applied_force=0.0, friction_enabled=False), 0.0)
        assert f.state is MotionState.STATIONARY
        assert f.max_static_friction == 0.0

    def test_coasting_keeps_speed(self):
        f = compute_forces(SurfaceConfig(applied_force=0.0, friction_enabled=False), 2.0)
        assert f.state is MotionState.MOVING
        assert f.acceleration == 0.0


class TestIncline:

    def test_weight_components(self):
        f = compute_forces(SurfaceConfig(mass=5.0, gravity=9.8, incline_deg=30.0,
                                         mu_static=0.9, mu_kinetic=0.7), 0.0)
        assert f.weight_parallel == pytest.approx(24.5)
        assert f.weight_perp == pytest.approx(49.0 * math.cos(math.radians(30.0)))
        assert f.normal == f.weight_perp
        assert f.angle_deg == 30.0

    def test_steep_incline_slides(self):
        """40° with μs=0.5: tan40° ≈ 0.84 > 0.5 so the block slides down."""
        surface = SurfaceConfig(mass=5.0, gravity=9.8, incline_deg=40.0,
                                mu_static=0.5, mu_kinetic=0.4)
        f = compute_forces(surface, 0.0)
        assert f.state is MotionState.MOVING
        assert f.acceleration < 0
        assert f.friction_force > 0

    def test_shallow_incline_holds(self):
        surface = SurfaceConfig(mass=5.0, gravity=9.8, incline_deg=20.0,
                                mu_static=0.5, mu_kinetic=0.4)
        f = compute_forces(surface, 0.0)
        assert f.state is MotionState.STATIONARY
        assert f.friction_force == pytest.approx(f.weight_parallel)
        assert f.acceleration == 0.0

    def test_push_up_slope(self):
        surface = SurfaceConfig(mass=5.0, gravity=9.8, incline_deg=30.0,
                                mu_static=0.3, mu_kinetic=0.2, applied_force=50.0)
        f = compute_forces(surface, 0.0)
        assert f.state is MotionState.MOVING
        assert f.acceleration > 0
        assert f.friction_force < 0


class TestHoldsAtRest:
    """Whether a block reaching v = 0 stays there is judged against μs."""

    def test_between_kinetic_and_static_limit(self):
        # μk·N = 9.8 N < 12 N < μs·N = 14.7 N
        surface = SurfaceConfig(mass=5.0, gravity=9.8, applied_force=-12.0,
                                mu_static=0.3, mu_kinetic=0.2)
        f = compute_forces(surface, 1.0)
        assert f.state is MotionState.MOVING
        assert f.holds_at_rest

    def test_above_static_limit(self):
        surface = SurfaceConfig(mass=5.0, gravity=9.8, applied_force=-20.0,
                                mu_static=0.3, mu_kinetic=0.2)
        assert not compute_forces(surface, 1.0).holds_at_rest


class TestSurfaceConfig:

    def test_rejects_zero_mass(self):
        with pytest.raises(InvalidParameter):
            SurfaceConfig(mass=0.0)

    def test_rejects_mu_above_one(self):
        with pytest.raises(InvalidParameter):
            SurfaceConfig(mu_static=1.5)

    def test_rejects_vertical_incline(self):
        with pytest.raises(InvalidParameter):
            SurfaceConfig(incline_deg=90.0)

    def test_kinetic_above_static_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kinematics_engine.forces"):
            surface = SurfaceConfig(mu_static=0.2, mu_kinetic=0.4)
        assert surface.mu_kinetic == 0.4
        assert "mu_kinetic" in caplog.text

    def test_preset(self):
        ice = SurfaceConfig(mass=3.0).with_preset('ice')
        assert (ice.mu_static, ice.mu_kinetic) == (0.03, 0.01)
        assert ice.mass == 3.0

    def test_unknown_preset(self):
        with pytest.raises(InvalidParameter):
            SurfaceConfig().with_preset('teflon')


class TestThresholds:

    def test_critical_angle(self):
        assert critical_angle(0.3) == pytest.approx(16.70, abs=0.01)
        assert critical_angle(1.0) == pytest.approx(45.0)
        assert critical_angle(0.0) == 0.0

    def test_min_force_to_move(self):
        assert min_force_to_move(5.0, 9.8, 0.3) == pytest.approx(14.7)

    def test_min_force_up_incline(self):
        assert min_force_up_incline(5.0, 9.8, 30.0, 0.3) == pytest.approx(37.23, abs=0.01)

    def test_equilibrium_force(self):
        assert equilibrium_force(5.0, 9.8, 0.2) == pytest.approx(9.8)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
