"""
Block Kinematics Integrator
===========================
Advances a block along a bounded track one frame at a time with
semi-implicit Euler:

    v_{n+1} = v_n + a_n · dt
    x_{n+1} = x_n + v_{n+1} · dt

Two edge cases are resolved inside the step:

1. **Coming to rest**: when kinetic friction drives the velocity through
   zero, or into the rest band |v| <= VELOCITY_EPSILON, and static friction
   can hold the block, the velocity is snapped to zero. It neither reverses
   nor creeps on at a sub-threshold speed.
2. **Track limits**: the position is clamped to the track and the velocity
   zeroed on contact.

:class:`BlockSimulation` glues the force model and the step together behind
the ``tick(dt)`` call a host animation loop makes once per frame.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_TRACK, MAX_FRAME_DT, VELOCITY_EPSILON
from .errors import InvalidParameter
from .forces import ForceSolution, SurfaceConfig, compute_forces

logger = logging.getLogger(__name__)


@dataclass
class RigidBodyState:
    """Mutable position/velocity cell owned by one simulation."""
    position: float = 0.0    # m along the track
    velocity: float = 0.0    # m/s


@dataclass(frozen=True)
class TrackBounds:
    minimum: float = DEFAULT_TRACK[0]
    maximum: float = DEFAULT_TRACK[1]

    def __post_init__(self):
        if self.minimum > self.maximum:
            raise InvalidParameter(
                f"track minimum {self.minimum} is above its maximum {self.maximum}"
            )


@dataclass(frozen=True)
class StepResult:
    """State after one step plus what happened during it."""
    position: float
    velocity: float
    stopped: bool          # friction brought the block to rest this step
    hit_boundary: bool     # position was clamped to the track


def reset(initial_position: float = 0.0) -> RigidBodyState:
    """Fresh state at rest."""
    return RigidBodyState(position=initial_position, velocity=0.0)


def step(state: RigidBodyState, acceleration: float, dt: float,
         bounds: TrackBounds = TrackBounds(),
         holds_at_rest: bool = True) -> StepResult:
    """
    Advance ``state`` in place by one time step.

    Parameters
    ----------
    state : RigidBodyState
        Updated in place.
    acceleration : float
        From the force model at the pre-step velocity.
    dt : float
        Frame delta (s), already clamped by the host.
    bounds : TrackBounds
    holds_at_rest : bool
        Whether static friction would hold the block at v = 0
        (:attr:`ForceSolution.holds_at_rest`). A zero crossing or a decay
        into the rest band only stops the block when this is true.
    """
    v0 = state.velocity
    v = v0 + acceleration * dt
    stopped = False

    # Crossed zero, or decayed into the rest band without crossing
    reached_rest = v0 != 0.0 and (
        v * v0 < 0.0
        or (abs(v) <= VELOCITY_EPSILON and abs(v) <= abs(v0))
    )
    if reached_rest and holds_at_rest:
        v = 0.0
        stopped = True

    x = state.position + v * dt

    hit_boundary = False
    if x < bounds.minimum:
        x, v, hit_boundary = bounds.minimum, 0.0, True
    elif x > bounds.maximum:
        x, v, hit_boundary = bounds.maximum, 0.0, True

    state.position = x
    state.velocity = v
    return StepResult(position=x, velocity=v, stopped=stopped, hit_boundary=hit_boundary)


def clamp_frame_delta(raw_dt: float, speed: float = 1.0,
                      max_dt: float = MAX_FRAME_DT) -> float:
    """
    Frame delta for one tick: wall-clock delta capped at ``max_dt`` (tab
    switches, debugger pauses) then scaled by the playback speed.
    """
    return min(max(raw_dt, 0.0), max_dt) * speed


class BlockSimulation:
    """
    One block on one surface. Owns its RigidBodyState; independent
    simulations need independent instances.
    """

    def __init__(self, surface: SurfaceConfig,
                 bounds: TrackBounds = TrackBounds(),
                 initial_position: Optional[float] = None):
        self.surface = surface
        self.bounds = bounds
        self._initial_position = bounds.minimum if initial_position is None else initial_position
        self.state = reset(self._initial_position)
        self.elapsed = 0.0
        self.hit_boundary = False
        self.forces: ForceSolution = compute_forces(surface, 0.0)

    def reset(self, initial_position: Optional[float] = None) -> RigidBodyState:
        """Back to rest; position, velocity and forces are replaced together."""
        if initial_position is not None:
            self._initial_position = initial_position
        state = reset(self._initial_position)
        forces = compute_forces(self.surface, 0.0)
        self.state, self.forces = state, forces
        self.elapsed = 0.0
        self.hit_boundary = False
        return self.state

    def update_surface(self, surface: SurfaceConfig) -> ForceSolution:
        """Swap parameters mid-run; forces are recomputed at the current velocity."""
        self.surface = surface
        self.forces = compute_forces(surface, self.state.velocity)
        return self.forces

    def tick(self, dt: float) -> StepResult:
        """
        Advance by one frame.

        1. Forces at the current velocity
        2. Semi-implicit Euler step
        3. If the block stopped (friction or track limit), forces again at
           v = 0 so the next frame starts from the right Stationary/Moving state
        """
        forces = compute_forces(self.surface, self.state.velocity)
        result = step(self.state, forces.acceleration, dt, self.bounds,
                      holds_at_rest=forces.holds_at_rest)

        if result.stopped:
            logger.debug("block came to rest at x=%.4f m after %.3f s",
                         result.position, self.elapsed + dt)
            forces = compute_forces(self.surface, 0.0)
        elif result.hit_boundary:
            if not self.hit_boundary:
                logger.debug("block reached the track limit at x=%.4f m", result.position)
            forces = compute_forces(self.surface, 0.0)

        self.forces = forces
        self.hit_boundary = result.hit_boundary
        self.elapsed += dt
        return result
