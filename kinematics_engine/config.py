"""
Engine Constants & Solver Settings
==================================
Central registry for the numeric constants shared across the engine:
gravity and surface presets offered to the host UI, the epsilons used by the
friction state machine, and the iteration budgets of the root finders.

All values are SI (m, s, kg, N). Angles at the interface are degrees.
"""

from dataclasses import dataclass


# ── Presets ────────────────────────────────────────────────────────────────
GRAVITY_PRESETS = {
    'Earth (9.8)': 9.8,
    'Earth (10.0)': 10.0,
    'Moon (1.62)': 1.62,
    'Mars (3.71)': 3.71,
    'Jupiter (24.79)': 24.79,
}

# (mu_static, mu_kinetic) pairs
SURFACE_PRESETS = {
    'ice':    (0.03, 0.01),
    'wood':   (0.40, 0.20),
    'rubber': (0.90, 0.70),
}


# ── Friction state machine ────────────────────────────────────────────────
VELOCITY_EPSILON     = 0.001       # m/s  below this a block counts as at rest
FORCE_EPSILON        = 0.0001      # N    slack on the static friction limit


# ── Host loop ─────────────────────────────────────────────────────────────
MAX_FRAME_DT         = 0.05        # s    cap on one frame delta
DEFAULT_TRACK        = (0.0, 20.0) # m    block track limits
TRAIL_POINTS         = 200         # samples per trajectory trail


# ── Inverse solver ────────────────────────────────────────────────────────
DEFAULT_IMPLICIT_RANGE = 100.0     # m    range used when launch height is given
DISPLAY_DECIMALS       = 1
DIVING_PLACEHOLDER_ANGLE = -45.0   # deg  reported alongside NotSolvable only


@dataclass(frozen=True)
class NewtonSettings:
    """Iteration budget for :func:`root_finder.newton_raphson`."""
    max_iter: int = 20
    tol: float = 0.01               # absolute tolerance on f(x)
    derivative_step: float = 0.1    # forward-difference step
    clamp_min: float = 0.1
    clamp_max: float = 1000.0
    nudge: float = 1.0              # step taken away from infeasible trials
    min_derivative: float = 0.01


@dataclass(frozen=True)
class BisectionSettings:
    """Iteration budget for :func:`root_finder.bisection`."""
    max_iter: int = 60
    tol: float = 0.01
