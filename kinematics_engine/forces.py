"""
Block Forces & Friction State Machine
=====================================
Newton's Second Law for a block on a flat surface or an inclined plane.

Force decomposition (incline angle θ, θ = 0 for a flat surface):
  - Weight              W  = m·g
  - Along the incline   W∥ = m·g·sinθ   (acts down-slope)
  - Into the surface    W⊥ = m·g·cosθ
  - Normal force        N  = W⊥        (rigid, non-penetrating surface)

Sign convention: positive = rightward / up-slope.

The block is in one of two states:

  STATIONARY   |v| ≈ 0 and the driving force (applied − W∥) is within the
               static limit μs·N. Static friction cancels it exactly.
  MOVING       otherwise. Kinetic friction μk·N opposes the velocity (or,
               when starting from rest, the driving force).

Moving → Stationary is re-checked against μs, not μk: a block that has
slowed to zero stays put unless the driving force beats static friction.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .config import FORCE_EPSILON, SURFACE_PRESETS, VELOCITY_EPSILON
from .errors import InvalidParameter

logger = logging.getLogger(__name__)


class MotionState(Enum):
    STATIONARY = "stationary"
    MOVING = "moving"


@dataclass(frozen=True)
class SurfaceConfig:
    """
    Block and surface parameters. ``incline_deg`` of None or 0 means a
    flat surface.
    """
    mass: float = 5.0                   # kg
    applied_force: float = 0.0          # N, along the surface
    gravity: float = 9.8                # m/s²
    friction_enabled: bool = True
    mu_static: float = 0.3
    mu_kinetic: float = 0.2
    incline_deg: Optional[float] = None

    def __post_init__(self):
        if self.mass <= 0:
            raise InvalidParameter(f"mass must be > 0, got {self.mass}")
        if self.gravity <= 0:
            raise InvalidParameter(f"gravity must be > 0, got {self.gravity}")
        for name in ('mu_static', 'mu_kinetic'):
            mu = getattr(self, name)
            if not 0.0 <= mu <= 1.0:
                raise InvalidParameter(f"{name} must be within [0, 1], got {mu}")
        if self.incline_deg is not None and not 0.0 <= self.incline_deg < 90.0:
            raise InvalidParameter(f"incline must be within [0, 90), got {self.incline_deg}")
        if self.friction_enabled and self.mu_kinetic > self.mu_static:
            logger.warning("mu_kinetic (%.3f) exceeds mu_static (%.3f); "
                           "physically unusual but allowed", self.mu_kinetic, self.mu_static)

    @property
    def is_flat(self) -> bool:
        return not self.incline_deg

    @property
    def angle_deg(self) -> float:
        return self.incline_deg or 0.0

    def with_preset(self, name: str) -> 'SurfaceConfig':
        """Copy with the (mu_static, mu_kinetic) pair of a named surface."""
        if name not in SURFACE_PRESETS:
            raise InvalidParameter(
                f"Unknown surface '{name}'. Available: {list(SURFACE_PRESETS.keys())}"
            )
        mu_s, mu_k = SURFACE_PRESETS[name]
        return replace(self, mu_static=mu_s, mu_kinetic=mu_k)


@dataclass(frozen=True)
class ForceSolution:
    """Full force decomposition for one instant (all forces in N)."""
    normal: float
    weight: float
    weight_parallel: float       # magnitude, acts down-slope
    weight_perp: float
    friction_force: float        # signed
    net_force: float             # signed, along the surface
    acceleration: float          # m/s², signed
    state: MotionState
    driving_force: float         # applied − W∥, everything but friction
    max_static_friction: float   # μs·N, 0 with friction disabled
    angle_deg: float = 0.0

    @property
    def is_stationary(self) -> bool:
        return self.state is MotionState.STATIONARY

    @property
    def holds_at_rest(self) -> bool:
        """Whether static friction would keep the block still at v = 0."""
        return abs(self.driving_force) <= self.max_static_friction + FORCE_EPSILON


def compute_forces(surface: SurfaceConfig, velocity: float) -> ForceSolution:
    """
    Classify the block and decompose every force acting on it.

    Parameters
    ----------
    surface : SurfaceConfig
    velocity : float
        Current velocity along the surface (m/s, up-slope positive).
    """
    m = surface.mass
    theta = math.radians(surface.angle_deg)

    weight = m * surface.gravity
    weight_parallel = weight * math.sin(theta)
    weight_perp = weight * math.cos(theta)
    normal = weight_perp

    if surface.friction_enabled:
        mu_s, mu_k = surface.mu_static, surface.mu_kinetic
    else:
        mu_s = mu_k = 0.0
    max_static = mu_s * normal

    driving = surface.applied_force - weight_parallel

    at_rest = abs(velocity) < VELOCITY_EPSILON
    if at_rest and abs(driving) <= max_static + FORCE_EPSILON:
        state = MotionState.STATIONARY
        friction = -driving
    else:
        state = MotionState.MOVING
        # oppose the motion, or the tendency to move when starting from rest
        direction = velocity if not at_rest else driving
        friction = -math.copysign(1.0, direction) * mu_k * normal if direction else 0.0

    if state is MotionState.STATIONARY:
        net = 0.0
        acceleration = 0.0
    else:
        net = driving + friction
        acceleration = net / m

    return ForceSolution(
        normal=normal,
        weight=weight,
        weight_parallel=weight_parallel,
        weight_perp=weight_perp,
        friction_force=friction,
        net_force=net,
        acceleration=acceleration,
        state=state,
        driving_force=driving,
        max_static_friction=max_static,
        angle_deg=surface.angle_deg,
    )


# ── Thresholds shown next to the controls ─────────────────────────────────

def critical_angle(mu_static: float) -> float:
    """
    Incline angle (degrees) at which an unpowered block starts to slide.

    m·g·sinθ = μs·m·g·cosθ  ⇒  θc = atan(μs)
    """
    if mu_static <= 0:
        return 0.0
    return math.degrees(math.atan(mu_static))


def min_force_to_move(mass: float, gravity: float, mu_static: float) -> float:
    """Smallest applied force that starts a block moving on a flat surface."""
    return mu_static * mass * gravity


def min_force_up_incline(mass: float, gravity: float, angle_deg: float,
                         mu_static: float) -> float:
    """F_min = m·g·sinθ + μs·m·g·cosθ, to push a block up the slope."""
    theta = math.radians(angle_deg)
    weight = mass * gravity
    return weight * math.sin(theta) + mu_static * weight * math.cos(theta)


def equilibrium_force(mass: float, gravity: float, mu_kinetic: float) -> float:
    """Applied force giving zero acceleration on a flat surface while sliding."""
    return mu_kinetic * mass * gravity
