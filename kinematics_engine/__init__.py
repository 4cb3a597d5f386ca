"""
Kinematics Engine
=================
Real-time Newtonian kinematics for interactive physics simulators:

  - Closed-form projectile trajectories (angled and horizontal launches,
    launch height, arbitrary gravity, diving launches)
  - Inverse solving: recover velocity, angle or launch height from a target
    range, max height or flight time
  - Bounded Newton-Raphson and bisection root finders
  - Block-on-surface force model with a static/kinetic friction state
    machine, flat or inclined
  - Semi-implicit Euler integration on a bounded track, driven by the host
    through ``tick(dt)``

All quantities are SI; angles are degrees at the interface.
"""

from .config import (
    GRAVITY_PRESETS, SURFACE_PRESETS, NewtonSettings, BisectionSettings,
)
from .errors import (
    KinematicsError, DomainError, Undefined, NotSolvable, InvalidQuery,
    InvalidParameter, Unreachable, NoConvergence,
)
from .trajectory import (
    LaunchMode, LaunchConfig, TrajectorySolution, TrajectoryState,
    compute_trajectory, position_at, generate_trail, optimal_angle, max_range,
    with_changes,
)
from .root_finder import RootResult, newton_raphson, bisection
from .inverse_solver import (
    Given, SolveFor, InverseQuery, InverseSolution, solve,
    velocity_from_range, velocity_from_max_height, velocity_from_flight_time,
    angle_from_range, angle_from_max_height, angle_from_flight_time,
    height_from_range, height_from_max_height, height_from_flight_time,
    velocity_from_launch_height, angle_from_launch_height,
)
from .forces import (
    MotionState, SurfaceConfig, ForceSolution, compute_forces,
    critical_angle, min_force_to_move, min_force_up_incline, equilibrium_force,
)
from .integrator import (
    RigidBodyState, TrackBounds, StepResult, BlockSimulation,
    step, reset, clamp_frame_delta,
)
from .validation import (
    validate_closed_form, validate_round_trip, run_all_validations,
    REFERENCE_LAUNCHES,
)
from .logging_config import setup_logging

__version__ = "1.0.0"
__all__ = [
    'GRAVITY_PRESETS', 'SURFACE_PRESETS', 'NewtonSettings', 'BisectionSettings',
    'KinematicsError', 'DomainError', 'Undefined', 'NotSolvable', 'InvalidQuery',
    'InvalidParameter', 'Unreachable', 'NoConvergence',
    'LaunchMode', 'LaunchConfig', 'TrajectorySolution', 'TrajectoryState',
    'compute_trajectory', 'position_at', 'generate_trail', 'optimal_angle', 'max_range',
    'with_changes',
    'RootResult', 'newton_raphson', 'bisection',
    'Given', 'SolveFor', 'InverseQuery', 'InverseSolution', 'solve',
    'velocity_from_range', 'velocity_from_max_height', 'velocity_from_flight_time',
    'angle_from_range', 'angle_from_max_height', 'angle_from_flight_time',
    'height_from_range', 'height_from_max_height', 'height_from_flight_time',
    'velocity_from_launch_height', 'angle_from_launch_height',
    'MotionState', 'SurfaceConfig', 'ForceSolution', 'compute_forces',
    'critical_angle', 'min_force_to_move', 'min_force_up_incline', 'equilibrium_force',
    'RigidBodyState', 'TrackBounds', 'StepResult', 'BlockSimulation',
    'step', 'reset', 'clamp_frame_delta',
    'validate_closed_form', 'validate_round_trip', 'run_all_validations',
    'REFERENCE_LAUNCHES',
    'setup_logging',
]
