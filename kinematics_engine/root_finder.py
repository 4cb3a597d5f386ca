"""
Numerical Root Finding
======================
Two bounded, best-effort scalar root finders shared by every inverse query:

1. **Newton-Raphson**: fast near a smooth root. The derivative is either
   supplied or estimated with a forward difference:
       f'(x) ≈ (f(x + δ) − f(x)) / δ
2. **Bisection**: slow but robust on a sign-bracketing interval.

Objectives return ``None`` for trial points where the physics is undefined
(negative discriminant). Newton steps away from such points by a fixed nudge;
bisection discards the undefined half. Neither has any physics knowledge.

Both always return a :class:`RootResult`. Running out of iterations is logged,
not raised, unless the caller asks for ``raise_on_failure``.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .config import BisectionSettings, NewtonSettings
from .errors import NoConvergence

logger = logging.getLogger(__name__)

Objective = Callable[[float], Optional[float]]


@dataclass(frozen=True)
class RootResult:
    """Outcome of one root search."""
    value: float
    converged: bool
    iterations: int
    residual: Optional[float]   # f(value), None if never defined


def _give_up(method: str, result: RootResult, raise_on_failure: bool) -> RootResult:
    message = (
        f"{method} did not reach tolerance after {result.iterations} iterations "
        f"(best x={result.value:.6g}, residual={result.residual})"
    )
    if raise_on_failure:
        raise NoConvergence(message, result=result)
    logger.warning(message)
    return result


def newton_raphson(f: Objective, x0: float,
                   fprime: Optional[Objective] = None,
                   settings: NewtonSettings = NewtonSettings(),
                   raise_on_failure: bool = False) -> RootResult:
    """
    Bounded Newton-Raphson iteration for f(x) = 0.

    Parameters
    ----------
    f : callable
        Objective. Returns None where it is undefined.
    x0 : float
        Initial guess, clamped into [clamp_min, clamp_max].
    fprime : callable, optional
        Analytic derivative. Forward difference with ``derivative_step``
        when omitted.
    settings : NewtonSettings
    raise_on_failure : bool
        Raise NoConvergence instead of returning the best effort.
    """
    s = settings
    x = min(max(x0, s.clamp_min), s.clamp_max)

    best_x, best_fx = x, None
    iterations = 0

    for iterations in range(1, s.max_iter + 1):
        fx = f(x)
        if fx is None:
            # Infeasible trial point: walk past it instead of diverging
            logger.debug("newton: f undefined at x=%.6g, nudging by %g", x, s.nudge)
            x += s.nudge
            if x > s.clamp_max:
                break
            continue

        if best_fx is None or abs(fx) < abs(best_fx):
            best_x, best_fx = x, fx
        if abs(fx) < s.tol:
            return RootResult(x, True, iterations, fx)

        if fprime is not None:
            slope = fprime(x)
        else:
            fx_step = f(x + s.derivative_step)
            slope = None if fx_step is None else (fx_step - fx) / s.derivative_step

        if slope is None or abs(slope) <= s.min_derivative:
            x += s.nudge
        else:
            x -= fx / slope

        if x < s.clamp_min:
            x = s.clamp_min
        if x > s.clamp_max:
            # Diverging; only the ceiling itself is left to try
            x = s.clamp_max
            break

    # The final update has not been evaluated yet
    fx = f(x)
    if fx is not None and (best_fx is None or abs(fx) < abs(best_fx)):
        best_x, best_fx = x, fx
    result = RootResult(best_x, best_fx is not None and abs(best_fx) < s.tol,
                        iterations, best_fx)
    if result.converged:
        return result
    return _give_up("newton_raphson", result, raise_on_failure)


def bisection(f: Objective, lo: float, hi: float,
              settings: BisectionSettings = BisectionSettings(),
              undefined_side: str = "high",
              raise_on_failure: bool = False) -> RootResult:
    """
    Bisection for f(x) = 0 on [lo, hi].

    f is assumed monotonic (or nearly so) on the interval. When f(mid) is
    undefined the interval shrinks from ``undefined_side`` ("low" or "high")
    and the best guess is left untouched. The last defined midpoint is
    returned even when ``tol`` is not met.
    """
    if undefined_side not in ("low", "high"):
        raise ValueError(f"undefined_side must be 'low' or 'high', got {undefined_side!r}")
    if lo > hi:
        lo, hi = hi, lo

    f_lo = f(lo)
    f_hi = f(hi)
    best_x, best_fx = (lo + hi) / 2.0, None
    iterations = 0

    for iterations in range(1, settings.max_iter + 1):
        mid = (lo + hi) / 2.0
        f_mid = f(mid)

        if f_mid is None:
            if undefined_side == "high":
                hi, f_hi = mid, None
            else:
                lo, f_lo = mid, None
            continue

        best_x, best_fx = mid, f_mid
        if abs(f_mid) < settings.tol:
            return RootResult(mid, True, iterations, f_mid)

        if f_lo is not None:
            root_below = (f_lo < 0) != (f_mid < 0)
        elif f_hi is not None:
            root_below = (f_hi < 0) == (f_mid < 0)
        else:
            root_below = False

        if root_below:
            hi, f_hi = mid, f_mid
        else:
            lo, f_lo = mid, f_mid

    result = RootResult(best_x, False, iterations, best_fx)
    return _give_up("bisection", result, raise_on_failure)
