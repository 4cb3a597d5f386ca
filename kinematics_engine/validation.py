"""
Validation Against Numerical References
=======================================
Cross-checks the closed-form model and the inverse solver against
independent numerical solutions:

  - Forward model: the equations of motion are integrated with
    ``scipy.integrate.solve_ivp`` (RK45, ground-contact event) and the
    resulting range / max height / flight time are compared with
    :func:`trajectory.compute_trajectory`.
  - Inverse model: the launch speed recovered by Newton-Raphson from a
    computed range is compared with the original speed and with a
    ``scipy.optimize.brentq`` root of the same objective.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from scipy.integrate import solve_ivp
from scipy.optimize import brentq

from .errors import Unreachable
from .inverse_solver import velocity_from_range
from .trajectory import LaunchConfig, LaunchMode, compute_trajectory

logger = logging.getLogger(__name__)


# (name, launch) pairs covering level, elevated, diving, horizontal and low-g launches
REFERENCE_LAUNCHES = [
    ('Level 45°',        LaunchConfig(LaunchMode.ANGLED, 40.0, 45.0, 0.0, 9.8)),
    ('Cliff 30°',        LaunchConfig(LaunchMode.ANGLED, 25.0, 30.0, 15.0, 9.8)),
    ('Lob 70°',          LaunchConfig(LaunchMode.ANGLED, 18.0, 70.0, 1.5, 9.8)),
    ('Diving -30°',      LaunchConfig(LaunchMode.ANGLED, 30.0, -30.0, 20.0, 9.8)),
    ('Horizontal 45 m',  LaunchConfig(LaunchMode.HORIZONTAL, 20.0, 0.0, 45.0, 9.8)),
    ('Moon 60°',         LaunchConfig(LaunchMode.ANGLED, 15.0, 60.0, 2.0, 1.62)),
]


@dataclass
class ValidationResult:
    """Closed form vs numerical integration for one launch."""
    name: str
    model_range: float
    numeric_range: float
    model_max_height: float
    numeric_max_height: float
    model_tof: float
    numeric_tof: float

    @property
    def range_error(self) -> float:
        return abs(self.model_range - self.numeric_range)

    @property
    def height_error(self) -> float:
        return abs(self.model_max_height - self.numeric_max_height)

    @property
    def tof_error(self) -> float:
        return abs(self.model_tof - self.numeric_tof)

    def passed(self, tol: float = 1e-3) -> bool:
        return max(self.range_error, self.height_error, self.tof_error) < tol


@dataclass
class RoundTripResult:
    """Speed recovered from a computed range."""
    name: str
    velocity: float
    target_range: float
    newton_velocity: float
    brentq_velocity: float

    @property
    def error(self) -> float:
        return abs(self.newton_velocity - self.velocity)

    def passed(self, tol: float = 0.1) -> bool:
        return self.error < tol and abs(self.newton_velocity - self.brentq_velocity) < tol


def integrate_trajectory(cfg: LaunchConfig, max_step: float = 0.01) -> Tuple[float, float, float]:
    """
    Integrate x'' = 0, y'' = −g from the launch point until y returns to 0.

    Returns (time_of_flight, range, max_height).
    """
    g = cfg.gravity
    vx, vy = cfg.initial_velocity_vector()
    if cfg.height <= 0 and vy <= 0:
        return 0.0, 0.0, cfg.height

    def rhs(t, s):
        return [s[2], s[3], 0.0, -g]

    def ground(t, s):
        return s[1]
    ground.terminal = True
    ground.direction = -1

    t_end = 2.0 * (abs(vy) + np.sqrt(vy * vy + 2.0 * g * cfg.height)) / g + 1.0
    sol = solve_ivp(rhs, (0.0, t_end), [0.0, cfg.height, vx, vy],
                    events=ground, max_step=max_step, rtol=1e-10, atol=1e-10)

    if sol.t_events[0].size == 0:
        raise Unreachable(f"integration ended at t={sol.t[-1]:.3f} s without ground contact")

    t_flight = float(sol.t_events[0][0])
    x_impact = float(sol.y_events[0][0][0])
    return t_flight, x_impact, float(np.max(sol.y[1]))


def validate_closed_form(references=REFERENCE_LAUNCHES,
                         verbose: bool = True) -> List[ValidationResult]:
    """Compare the closed-form model with numerical integration."""
    results = []

    if verbose:
        print(f"\n{'='*78}")
        print(f"  VALIDATION: closed form vs solve_ivp")
        print(f"{'='*78}")
        print(f"{'Launch':<18} {'R model':>9} {'R num':>9} {'H model':>9} {'H num':>9} "
              f"{'T model':>8} {'T num':>8}")
        print("-" * 78)

    for name, cfg in references:
        model = compute_trajectory(cfg)
        tof, rng, max_h = integrate_trajectory(cfg)

        vr = ValidationResult(
            name=name,
            model_range=model.range,
            numeric_range=rng,
            model_max_height=model.max_height,
            numeric_max_height=max_h,
            model_tof=model.time_of_flight,
            numeric_tof=tof,
        )
        results.append(vr)

        if not vr.passed():
            logger.warning("closed form disagrees with integration for %s "
                           "(range err %.2e, height err %.2e, time err %.2e)",
                           name, vr.range_error, vr.height_error, vr.tof_error)

        if verbose:
            print(f"{name:<18} {model.range:>9.3f} {rng:>9.3f} "
                  f"{model.max_height:>9.3f} {max_h:>9.3f} "
                  f"{model.time_of_flight:>8.3f} {tof:>8.3f}")

    if verbose:
        worst = max(max(r.range_error, r.height_error, r.tof_error) for r in results)
        print("-" * 78)
        print(f"  Worst absolute error: {worst:.2e}")
        status = "✓ PASS" if all(r.passed() for r in results) else "✗ MISMATCH"
        print(f"  Status: {status}")
        print(f"{'='*78}\n")

    return results


def validate_round_trip(references=REFERENCE_LAUNCHES,
                        verbose: bool = True) -> List[RoundTripResult]:
    """Recover the launch speed from each computed range (0° < θ < 90° only)."""
    results = []

    if verbose:
        print(f"\n{'='*66}")
        print(f"  VALIDATION: range → velocity round trip")
        print(f"{'='*66}")
        print(f"{'Launch':<18} {'v':>8} {'R':>10} {'v newton':>10} {'v brentq':>10}")
        print("-" * 66)

    for name, cfg in references:
        if cfg.mode is not LaunchMode.ANGLED or not 0.0 < cfg.angle < 90.0:
            continue
        target = compute_trajectory(cfg).range
        v_newton = velocity_from_range(target, cfg.angle, cfg.height, cfg.gravity)

        def objective(v, cfg=cfg, target=target):
            trial = LaunchConfig(cfg.mode, v, cfg.angle, cfg.height, cfg.gravity)
            return compute_trajectory(trial).range - target
        v_brentq = brentq(objective, 1e-6, 1000.0, xtol=1e-9)

        rt = RoundTripResult(name, cfg.velocity, target, v_newton, v_brentq)
        results.append(rt)

        if verbose:
            print(f"{name:<18} {cfg.velocity:>8.2f} {target:>10.3f} "
                  f"{v_newton:>10.4f} {v_brentq:>10.4f}")

    if verbose:
        print("-" * 66)
        status = "✓ PASS" if all(r.passed() for r in results) else "✗ MISMATCH"
        print(f"  Status: {status}")
        print(f"{'='*66}\n")

    return results


def run_all_validations(verbose: bool = True):
    """Run both validations."""
    return {
        'closed_form': validate_closed_form(verbose=verbose),
        'round_trip': validate_round_trip(verbose=verbose),
    }


if __name__ == "__main__":
    run_all_validations(verbose=True)
