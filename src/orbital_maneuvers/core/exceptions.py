"""
===============================================================================
ORBITAL MANEUVERS - Error Types
===============================================================================
Every failure in the conversion and maneuver modules is raised as one of
the exceptions below.  They all derive from ``ValueError``: the inputs are
at fault, never a transient condition, so nothing is retried internally.

    OrbitalManeuversError
        InvalidInputError     -- non-positive mu / p / a, zero or malformed
                                 vectors, inconsistent element records
        DegenerateOrbitError  -- parabolic energy, rectilinear motion,
                                 singular anomaly, normalising a zero vector
        NumericDomainError    -- arccos argument outside [-1, 1] beyond the
                                 clamp tolerance
===============================================================================
"""


class OrbitalManeuversError(ValueError):
    """Base class for all errors raised by this package."""


class InvalidInputError(OrbitalManeuversError):
    """An argument is outside the domain the algorithm accepts."""


class DegenerateOrbitError(OrbitalManeuversError):
    """The orbit geometry makes the requested quantity undefined."""


class NumericDomainError(OrbitalManeuversError):
    """Two vectors are not meaningfully comparable (|cos| > 1 after tolerance)."""
