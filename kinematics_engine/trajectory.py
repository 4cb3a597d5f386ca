"""
Closed-Form Trajectory Model
============================
Drag-free projectile kinematics for two launch modes:

  - **Angled**     launch speed v at angle θ (degrees, −90..90) from height h
  - **Horizontal** launch speed v straight out from height h

Equations of motion (up positive, launch point at x = 0):
    x(t)  = vx·t
    y(t)  = h + vy₀·t − ½·g·t²
    vy(t) = vy₀ − g·t

Time of flight is the non-negative root of y(t) = 0:
    t_f = (vy₀ + √(vy₀² + 2gh)) / g

A negative angle gives a *diving* launch: the projectile is already
descending at t = 0 and the maximum height is the launch height itself.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

import numpy as np

from .config import TRAIL_POINTS
from .errors import InvalidParameter, Unreachable


class LaunchMode(Enum):
    ANGLED = "angled"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class LaunchConfig:
    """
    Launch parameters for one evaluation. Recreated whenever the host
    changes a control; never mutated.
    """
    mode: LaunchMode = LaunchMode.ANGLED
    velocity: float = 40.0            # m/s
    angle: float = 45.0               # degrees above horizontal (ANGLED only)
    height: float = 0.0               # m above ground
    gravity: float = 9.8              # m/s²

    def __post_init__(self):
        if self.velocity < 0:
            raise InvalidParameter(f"velocity must be >= 0, got {self.velocity}")
        if self.height < 0:
            raise InvalidParameter(f"height must be >= 0, got {self.height}")
        if self.gravity <= 0:
            raise InvalidParameter(f"gravity must be > 0, got {self.gravity}")
        if not -90.0 <= self.angle <= 90.0:
            raise InvalidParameter(f"angle must be within [-90, 90], got {self.angle}")

    @property
    def launch_angle(self) -> float:
        """Effective angle in degrees (0 for horizontal launches)."""
        return self.angle if self.mode is LaunchMode.ANGLED else 0.0

    def initial_velocity_vector(self) -> Tuple[float, float]:
        """Convert launch speed + angle to (vx, vy)."""
        if self.mode is LaunchMode.HORIZONTAL:
            return self.velocity, 0.0
        rad = math.radians(self.angle)
        return self.velocity * math.cos(rad), self.velocity * math.sin(rad)


@dataclass(frozen=True)
class TrajectorySolution:
    """Whole-flight quantities derived from a LaunchConfig."""
    vx: float
    vy: float                  # initial vertical speed
    time_of_flight: float
    max_height: float
    range: float
    gravity: float

    @property
    def time_to_peak(self) -> float:
        """Time at which y is maximal (0 for diving or horizontal launches)."""
        return max(self.vy / self.gravity, 0.0)

    @property
    def impact_vx(self) -> float:
        return self.vx

    @property
    def impact_vy(self) -> float:
        return self.vy - self.gravity * self.time_of_flight

    @property
    def impact_speed(self) -> float:
        """Speed at impact (m/s)."""
        return math.hypot(self.vx, self.impact_vy)

    @property
    def impact_angle_deg(self) -> float:
        """Angle of descent at impact (degrees below horizontal)."""
        return math.degrees(math.atan2(-self.impact_vy, self.vx))

    def summary(self) -> str:
        """Human-readable summary string."""
        lines = [
            f"╔══════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY                          ║",
            f"╠══════════════════════════════════════════════╣",
            f"║  vx           : {self.vx:>10.2f} m/s{'':<15s} ║",
            f"║  vy (launch)  : {self.vy:>10.2f} m/s{'':<15s} ║",
            f"╠══════════════════════════════════════════════╣",
            f"║  Range        : {self.range:>10.2f} m{'':<17s} ║",
            f"║  Max height   : {self.max_height:>10.2f} m{'':<17s} ║",
            f"║  Flight time  : {self.time_of_flight:>10.2f} s{'':<17s} ║",
            f"║  Impact vel   : {self.impact_speed:>10.2f} m/s{'':<15s} ║",
            f"║  Impact angle : {self.impact_angle_deg:>10.1f} °{'':<17s} ║",
            f"╚══════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


@dataclass(frozen=True)
class TrajectoryState:
    """Snapshot of the projectile at one instant."""
    time: float
    x: float
    y: float          # clamped to >= 0 for display
    vx: float
    vy: float
    speed: float
    landed: bool      # from the unclamped height


def with_changes(cfg: LaunchConfig, **changes) -> LaunchConfig:
    """Copy of ``cfg`` with some fields replaced (validated again)."""
    return replace(cfg, **changes)


def compute_trajectory(cfg: LaunchConfig) -> TrajectorySolution:
    """
    Forward kinematics for a launch.

    Raises
    ------
    Unreachable
        If the discriminant vy² + 2gh is negative (cannot happen for h >= 0,
        checked anyway).
    """
    g = cfg.gravity
    h = cfg.height

    if cfg.mode is LaunchMode.HORIZONTAL:
        t_flight = math.sqrt(2.0 * h / g) if h > 0 else 0.0
        return TrajectorySolution(
            vx=cfg.velocity,
            vy=0.0,
            time_of_flight=t_flight,
            max_height=h,
            range=cfg.velocity * t_flight,
            gravity=g,
        )

    vx, vy = cfg.initial_velocity_vector()
    disc = vy * vy + 2.0 * g * h
    if disc < 0:
        raise Unreachable(
            f"no flight time: discriminant {disc:.4g} < 0 "
            f"(vy={vy:.4g}, h={h:.4g}, g={g:.4g})"
        )

    t_flight = (vy + math.sqrt(disc)) / g
    max_height = h + vy * vy / (2.0 * g) if vy > 0 else h

    return TrajectorySolution(
        vx=vx,
        vy=vy,
        time_of_flight=t_flight,
        max_height=max_height,
        range=vx * t_flight,
        gravity=g,
    )


def position_at(cfg: LaunchConfig, t: float) -> TrajectoryState:
    """Position and velocity at time ``t`` after launch."""
    vx, vy0 = cfg.initial_velocity_vector()
    g = cfg.gravity

    x = vx * t
    y = cfg.height + vy0 * t - 0.5 * g * t * t
    vy = vy0 - g * t

    return TrajectoryState(
        time=t,
        x=x,
        y=max(y, 0.0),
        vx=vx,
        vy=vy,
        speed=math.hypot(vx, vy),
        landed=(y <= 0.0 and t > 0.0),
    )


def generate_trail(cfg: LaunchConfig,
                   num_points: int = TRAIL_POINTS) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Sample the whole flight at ``num_points + 1`` evenly spaced instants.

    Returns (t, x, y) arrays; all empty when the flight time is zero.
    """
    t_flight = compute_trajectory(cfg).time_of_flight
    if t_flight <= 0:
        empty = np.array([])
        return empty, empty.copy(), empty.copy()

    vx, vy0 = cfg.initial_velocity_vector()
    t = np.linspace(0.0, t_flight, num_points + 1)
    x = vx * t
    y = np.clip(cfg.height + vy0 * t - 0.5 * cfg.gravity * t ** 2, 0.0, None)
    return t, x, y


def optimal_angle(velocity: float, height: float, gravity: float) -> float:
    """
    Launch angle (degrees) maximising range from height h.

    θ* = atan(v / √(v² + 2gh)); 45° on level ground.
    """
    if velocity <= 0:
        return 45.0
    return math.degrees(math.atan(velocity / math.sqrt(velocity ** 2 + 2.0 * gravity * height)))


def max_range(velocity: float, height: float, gravity: float) -> float:
    """Largest range reachable with launch speed v from height h."""
    cfg = LaunchConfig(
        mode=LaunchMode.ANGLED,
        velocity=velocity,
        angle=optimal_angle(velocity, height, gravity),
        height=height,
        gravity=gravity,
    )
    return compute_trajectory(cfg).range
