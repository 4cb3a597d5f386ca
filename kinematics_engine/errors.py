"""
Error Taxonomy
==============
Every failure of the engine is scoped to a single computation call.

  - DomainError       mathematically infeasible target (negative discriminant)
  - Undefined         a formula has no value for the given inputs (h = 0 ...)
  - NotSolvable       underdetermined inverse query (e.g. diving launches)
  - InvalidQuery      self-referential or inapplicable given/solve-for pair
  - InvalidParameter  config value outside its physical range
  - Unreachable       no physical flight time exists
  - NoConvergence     root finder ran out of iterations (non-fatal by default)
"""


class KinematicsError(Exception):
    """Base class for all engine errors."""


class DomainError(KinematicsError, ValueError):
    """Target value is outside the range the model can produce."""


class Undefined(DomainError):
    """Closed-form expression is undefined for the given inputs."""


class NotSolvable(KinematicsError):
    """
    The inverse map is not invertible without extra constraints.

    ``placeholder`` carries the value a naive solver would have guessed.
    It is informational only and must never be applied to a launch config.
    """

    def __init__(self, message: str, placeholder=None):
        super().__init__(message)
        self.placeholder = placeholder


class InvalidQuery(KinematicsError, ValueError):
    """The given/solve-for combination makes no sense."""


class InvalidParameter(KinematicsError, ValueError):
    """A configuration value is outside its allowed range."""


class Unreachable(KinematicsError):
    """The projectile never returns to the ground."""


class NoConvergence(KinematicsError):
    """Root finder exhausted its iterations. ``result`` holds the best effort."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result
