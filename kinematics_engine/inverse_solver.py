"""
Inverse Trajectory Solver
=========================
Recovers the launch parameter that produces a desired outcome.

    given  ∈ {range, max height, flight time, launch height}
    solve  ∈ {velocity, angle, height}

Closed forms are used wherever the forward equations can be inverted
algebraically:

    v  = √(2g(H − h)) / sinθ                      velocity ← max height
    vy = gT/2 − h/T,  v = vy / sinθ               velocity ← flight time
    θ  = asin(√(2g(H − h) / v²))                  angle    ← max height
    h  = gR²/(2vx²) − vy·R/vx                     height   ← range
    h  = H − vy²/(2g)                             height   ← max height
    h  = gT²/2 − vy·T                             height   ← flight time

The remaining cases have no closed form and go through the root finders:

    velocity ← range          Newton-Raphson on range(v) − R
    angle    ← range          bisection on one monotone branch of range(θ)
    angle    ← flight time    bisection on t(θ) over [−90°, 90°]

When the launch height itself is the given quantity, the range (current or
100 m) acts as the second constraint.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .config import (
    DEFAULT_IMPLICIT_RANGE, DISPLAY_DECIMALS, DIVING_PLACEHOLDER_ANGLE,
    BisectionSettings,
)
from .errors import DomainError, InvalidQuery, NotSolvable, Undefined, Unreachable
from .root_finder import RootResult, bisection, newton_raphson
from .trajectory import (
    LaunchConfig, LaunchMode, compute_trajectory, max_range, optimal_angle,
    with_changes,
)

logger = logging.getLogger(__name__)


class Given(Enum):
    RANGE = "range"
    MAX_HEIGHT = "max_height"
    FLIGHT_TIME = "flight_time"
    LAUNCH_HEIGHT = "launch_height"


class SolveFor(Enum):
    # values double as LaunchConfig field names
    VELOCITY = "velocity"
    ANGLE = "angle"
    HEIGHT = "height"


UNITS = {
    SolveFor.VELOCITY: "m/s",
    SolveFor.ANGLE: "°",
    SolveFor.HEIGHT: "m",
}


@dataclass(frozen=True)
class InverseQuery:
    """
    One "Calculate" request. ``fixed`` supplies every launch parameter that
    is not being solved for; its ``solve_for`` field is ignored.
    """
    given: Given
    solve_for: SolveFor
    target: float
    fixed: LaunchConfig = field(default_factory=LaunchConfig)
    implicit_range: Optional[float] = None


@dataclass(frozen=True)
class InverseSolution:
    """Solved parameter plus what the host needs to display and apply it."""
    solve_for: SolveFor
    value: float                     # raw, feed this back into the physics
    converged: bool = True
    iterations: int = 0
    height: Optional[float] = None   # launch height to apply alongside (LAUNCH_HEIGHT mode)

    @property
    def display_value(self) -> float:
        return round(self.value, DISPLAY_DECIMALS)

    @property
    def unit(self) -> str:
        return UNITS[self.solve_for]

    @property
    def message(self) -> str:
        text = f"{self.solve_for.value.capitalize()} = {self.display_value} {self.unit}"
        if not self.converged:
            text += " (approximate)"
        return text

    def apply(self, cfg: LaunchConfig) -> LaunchConfig:
        """New config with every solved field replaced together."""
        changes = {self.solve_for.value: self.value}
        if self.height is not None:
            changes['height'] = self.height
        return with_changes(cfg, **changes)


# ══════════════════════════════════════════════════════════════════════════
#  Helpers
# ══════════════════════════════════════════════════════════════════════════

def _exact(value: float) -> RootResult:
    return RootResult(value, True, 0, 0.0)


def _check_target(value: float, name: str) -> None:
    if not math.isfinite(value) or value < 0:
        raise DomainError(f"{name} must be a finite, non-negative number, got {value}")


def _flight(velocity, angle, height, gravity, mode=LaunchMode.ANGLED):
    """Forward solution, or None where no flight exists."""
    try:
        sol = compute_trajectory(LaunchConfig(mode, velocity, angle, height, gravity))
    except Unreachable:
        return None
    return sol


def _launch_components(velocity, angle, gravity, mode):
    return LaunchConfig(mode, velocity, angle, 0.0, gravity).initial_velocity_vector()


# ══════════════════════════════════════════════════════════════════════════
#  Velocity
# ══════════════════════════════════════════════════════════════════════════

def _velocity_from_range(target_range, angle, height, gravity,
                         mode=LaunchMode.ANGLED) -> RootResult:
    _check_target(target_range, "range")

    if mode is LaunchMode.HORIZONTAL:
        if height <= 0:
            raise Undefined("horizontal launch from ground level has no flight time; "
                            "range does not depend on speed")
        return _exact(target_range / math.sqrt(2.0 * height / gravity))

    if target_range == 0:
        return _exact(0.0)
    if abs(angle) >= 90.0:
        raise NotSolvable("vertical launch has zero range at any speed")
    if angle <= 0 and height == 0:
        raise NotSolvable("level or diving launch from ground level never leaves the ground")
    if angle < 0:
        limit = height / math.tan(math.radians(-angle))
        if target_range >= limit:
            raise DomainError(
                f"diving at {angle}° from {height} m cannot reach {target_range} m "
                f"(range tends to {limit:.2f} m as speed grows)"
            )

    def f(v):
        sol = _flight(v, angle, height, gravity)
        if sol is None or sol.time_of_flight <= 0:
            return None
        return sol.range - target_range

    rad = math.radians(angle)
    guess = math.sqrt(abs(target_range * gravity) / (abs(math.sin(2.0 * rad)) or 0.1))
    return newton_raphson(f, guess)


def _velocity_from_max_height(target_height, angle, height, gravity,
                              mode=LaunchMode.ANGLED) -> RootResult:
    _check_target(target_height, "max height")
    if mode is LaunchMode.HORIZONTAL:
        raise NotSolvable("max height of a horizontal launch is the launch height")
    if angle <= 0:
        raise NotSolvable("max height of a level or diving launch is the launch height, "
                          "whatever the speed")
    if target_height < height:
        raise DomainError(f"max height {target_height} m is below the launch height {height} m")

    vy = math.sqrt(2.0 * gravity * (target_height - height))
    return _exact(vy / math.sin(math.radians(angle)))


def _velocity_from_flight_time(target_time, angle, height, gravity,
                               mode=LaunchMode.ANGLED) -> RootResult:
    _check_target(target_time, "flight time")
    if mode is LaunchMode.HORIZONTAL:
        raise NotSolvable("flight time of a horizontal launch depends only on the height")
    if target_time == 0:
        raise DomainError("flight time must be positive")

    # T = (vy + √(vy² + 2gh)) / g  ⇒  vy = gT/2 − h/T
    vy = 0.5 * gravity * target_time - height / target_time
    sin_a = math.sin(math.radians(angle))
    drop_time = math.sqrt(2.0 * height / gravity)

    if abs(sin_a) < 1e-12:
        if abs(target_time - drop_time) < 1e-9:
            raise NotSolvable("level launch: flight time is fixed by height, any speed works")
        raise DomainError(f"a level launch from {height} m always lands after {drop_time:.3f} s")

    v = vy / sin_a
    if v < 0:
        raise DomainError(
            f"no launch speed at {angle}° gives a {target_time} s flight "
            f"(a plain drop from {height} m takes {drop_time:.3f} s)"
        )
    return _exact(v)


# ══════════════════════════════════════════════════════════════════════════
#  Angle
# ══════════════════════════════════════════════════════════════════════════

def _angle_from_range(target_range, velocity, height, gravity,
                      branch="low") -> RootResult:
    _check_target(target_range, "range")
    if branch not in ("low", "high"):
        raise ValueError(f"branch must be 'low' or 'high', got {branch!r}")
    if target_range == 0:
        raise DomainError("range must be positive to determine an angle")
    if velocity <= 0:
        raise DomainError("launch speed must be positive to reach any range")

    peak_angle = optimal_angle(velocity, height, gravity)
    reach = max_range(velocity, height, gravity)
    if target_range > reach + BisectionSettings().tol:
        raise DomainError(
            f"range {target_range} m is out of reach at {velocity} m/s "
            f"(maximum {reach:.2f} m at {peak_angle:.1f}°)"
        )

    def f(deg):
        sol = _flight(velocity, deg, height, gravity)
        return None if sol is None else sol.range - target_range

    # range(θ) rises on [−90, θ*] and falls on [θ*, 90]
    if branch == "low":
        return bisection(f, -90.0, peak_angle, undefined_side="low")
    return bisection(f, peak_angle, 90.0, undefined_side="high")


def _angle_from_max_height(target_height, velocity, height, gravity) -> RootResult:
    _check_target(target_height, "max height")
    if velocity <= 0:
        raise DomainError("launch speed must be positive")
    if target_height <= height:
        raise NotSolvable(
            "max height at or below the launch height implies a level or diving "
            "launch; every such angle has max height equal to the launch height",
            placeholder=DIVING_PLACEHOLDER_ANGLE,
        )

    sin_sq = 2.0 * gravity * (target_height - height) / (velocity * velocity)
    if sin_sq > 1.0:
        raise DomainError(
            f"max height {target_height} m needs more than {velocity} m/s "
            f"even straight up"
        )
    return _exact(math.degrees(math.asin(math.sqrt(sin_sq))))


def _angle_from_flight_time(target_time, velocity, height, gravity) -> RootResult:
    _check_target(target_time, "flight time")
    if velocity <= 0:
        raise DomainError("launch speed must be positive")

    def f(deg):
        sol = _flight(velocity, deg, height, gravity)
        return None if sol is None else sol.time_of_flight - target_time

    shortest = compute_trajectory(LaunchConfig(LaunchMode.ANGLED, velocity, -90.0, height, gravity))
    longest = compute_trajectory(LaunchConfig(LaunchMode.ANGLED, velocity, 90.0, height, gravity))
    tol = BisectionSettings().tol
    if not shortest.time_of_flight - tol <= target_time <= longest.time_of_flight + tol:
        raise DomainError(
            f"flight time {target_time} s is outside "
            f"[{shortest.time_of_flight:.3f}, {longest.time_of_flight:.3f}] s at {velocity} m/s"
        )

    # t(θ) increases with θ
    return bisection(f, -90.0, 90.0, undefined_side="high")


# ══════════════════════════════════════════════════════════════════════════
#  Height
# ══════════════════════════════════════════════════════════════════════════

def _clamped_height(h: float, source: str) -> RootResult:
    if h < 0:
        logger.debug("height from %s came out negative (%.4g), clamping to 0", source, h)
        h = 0.0
    return _exact(h)


def _height_from_range(target_range, velocity, angle, gravity,
                       mode=LaunchMode.ANGLED) -> RootResult:
    _check_target(target_range, "range")
    vx, vy = _launch_components(velocity, angle, gravity, mode)
    if vx <= 1e-12:
        raise DomainError("no horizontal speed: range does not depend on height")
    h = gravity * target_range ** 2 / (2.0 * vx * vx) - vy * target_range / vx
    return _clamped_height(h, "range")


def _height_from_max_height(target_height, velocity, angle, gravity,
                            mode=LaunchMode.ANGLED) -> RootResult:
    _check_target(target_height, "max height")
    _, vy = _launch_components(velocity, angle, gravity, mode)
    if vy <= 0:
        return _clamped_height(target_height, "max height")
    return _clamped_height(target_height - vy * vy / (2.0 * gravity), "max height")


def _height_from_flight_time(target_time, velocity, angle, gravity,
                             mode=LaunchMode.ANGLED) -> RootResult:
    _check_target(target_time, "flight time")
    _, vy = _launch_components(velocity, angle, gravity, mode)
    return _clamped_height(0.5 * gravity * target_time ** 2 - vy * target_time, "flight time")


# ══════════════════════════════════════════════════════════════════════════
#  Public entry points (raw floats)
# ══════════════════════════════════════════════════════════════════════════

def velocity_from_range(target_range: float, angle: float, height: float, gravity: float,
                        mode: LaunchMode = LaunchMode.ANGLED) -> float:
    """Launch speed giving ``target_range``; Newton-Raphson for angled launches."""
    return _velocity_from_range(target_range, angle, height, gravity, mode).value


def velocity_from_max_height(target_height: float, angle: float, height: float, gravity: float,
                             mode: LaunchMode = LaunchMode.ANGLED) -> float:
    return _velocity_from_max_height(target_height, angle, height, gravity, mode).value


def velocity_from_flight_time(target_time: float, angle: float, height: float, gravity: float,
                              mode: LaunchMode = LaunchMode.ANGLED) -> float:
    return _velocity_from_flight_time(target_time, angle, height, gravity, mode).value


def angle_from_range(target_range: float, velocity: float, height: float, gravity: float,
                     branch: str = "low") -> float:
    """
    Launch angle giving ``target_range``.

    Most ranges below the maximum are reached by two angles. ``branch="low"``
    returns the flatter one (possibly a diving angle when launching from a
    height), ``branch="high"`` the lofted one.
    """
    return _angle_from_range(target_range, velocity, height, gravity, branch).value


def angle_from_max_height(target_height: float, velocity: float, height: float,
                          gravity: float) -> float:
    return _angle_from_max_height(target_height, velocity, height, gravity).value


def angle_from_flight_time(target_time: float, velocity: float, height: float,
                           gravity: float) -> float:
    return _angle_from_flight_time(target_time, velocity, height, gravity).value


def height_from_range(target_range: float, velocity: float, angle: float, gravity: float,
                      mode: LaunchMode = LaunchMode.ANGLED) -> float:
    return _height_from_range(target_range, velocity, angle, gravity, mode).value


def height_from_max_height(target_height: float, velocity: float, angle: float, gravity: float,
                           mode: LaunchMode = LaunchMode.ANGLED) -> float:
    return _height_from_max_height(target_height, velocity, angle, gravity, mode).value


def height_from_flight_time(target_time: float, velocity: float, angle: float, gravity: float,
                            mode: LaunchMode = LaunchMode.ANGLED) -> float:
    return _height_from_flight_time(target_time, velocity, angle, gravity, mode).value


def velocity_from_launch_height(launch_height: float, angle: float, gravity: float,
                                target_range: float = DEFAULT_IMPLICIT_RANGE,
                                mode: LaunchMode = LaunchMode.ANGLED) -> float:
    """Launch speed reaching ``target_range`` from the given launch height."""
    _check_target(launch_height, "launch height")
    return _velocity_from_range(target_range, angle, launch_height, gravity, mode).value


def angle_from_launch_height(launch_height: float, velocity: float, gravity: float,
                             target_range: float = DEFAULT_IMPLICIT_RANGE) -> float:
    """Launch angle reaching ``target_range`` from the given launch height."""
    _check_target(launch_height, "launch height")
    return _angle_from_range(target_range, velocity, launch_height, gravity).value


# ══════════════════════════════════════════════════════════════════════════
#  Dispatcher
# ══════════════════════════════════════════════════════════════════════════

def _implicit_range(query: InverseQuery) -> float:
    if query.implicit_range is not None:
        return query.implicit_range
    current = compute_trajectory(query.fixed).range
    return current if current > 0 else DEFAULT_IMPLICIT_RANGE


def _dispatch(query: InverseQuery) -> RootResult:
    cfg = query.fixed
    target = query.target
    v, a, h, g, mode = cfg.velocity, cfg.launch_angle, cfg.height, cfg.gravity, cfg.mode

    if query.solve_for is SolveFor.VELOCITY:
        if query.given is Given.RANGE:
            return _velocity_from_range(target, a, h, g, mode)
        if query.given is Given.MAX_HEIGHT:
            return _velocity_from_max_height(target, a, h, g, mode)
        return _velocity_from_flight_time(target, a, h, g, mode)

    if query.solve_for is SolveFor.ANGLE:
        if query.given is Given.RANGE:
            return _angle_from_range(target, v, h, g)
        if query.given is Given.MAX_HEIGHT:
            return _angle_from_max_height(target, v, h, g)
        return _angle_from_flight_time(target, v, h, g)

    if query.given is Given.RANGE:
        return _height_from_range(target, v, a, g, mode)
    if query.given is Given.MAX_HEIGHT:
        return _height_from_max_height(target, v, a, g, mode)
    return _height_from_flight_time(target, v, a, g, mode)


def solve(query: InverseQuery) -> InverseSolution:
    """
    Answer one inverse query.

    Raises DomainError, NotSolvable or InvalidQuery before anything is
    applied; a non-converged root search is returned with
    ``converged=False``.
    """
    cfg = query.fixed
    _check_target(query.target, query.given.value.replace('_', ' '))

    if query.solve_for is SolveFor.ANGLE and cfg.mode is LaunchMode.HORIZONTAL:
        raise InvalidQuery("a horizontal launch has no angle to solve for")

    if query.given is Given.LAUNCH_HEIGHT:
        if query.solve_for is SolveFor.HEIGHT:
            raise InvalidQuery("cannot solve for the launch height when it is the given quantity")
        target_range = _implicit_range(query)
        if query.solve_for is SolveFor.VELOCITY:
            result = _velocity_from_range(target_range, cfg.launch_angle, query.target,
                                          cfg.gravity, cfg.mode)
        else:
            result = _angle_from_range(target_range, cfg.velocity, query.target, cfg.gravity)
        height = query.target
    else:
        result = _dispatch(query)
        height = None

    logger.debug("solved %s from %s=%g: %.6g (converged=%s, %d iterations)",
                 query.solve_for.value, query.given.value, query.target,
                 result.value, result.converged, result.iterations)

    return InverseSolution(
        solve_for=query.solve_for,
        value=result.value,
        converged=result.converged,
        iterations=result.iterations,
        height=height,
    )
