"""
===============================================================================
ORBITAL MANEUVERS - Element Conversion Engine
===============================================================================
Keplerian <-> Cartesian conversions for a single instantaneous two-body
state, plus the closed-form orbit utilities the maneuver planner builds on.

    1. **State -> elements** -- ``state_to_elements`` classifies the orbit
       geometry (circular / elliptic x equatorial / inclined) and derives
       only the angles that are meaningful for that class.

    2. **Elements -> state** -- ``elements_to_state`` rebuilds position and
       velocity in the perifocal frame and rotates them with the 3-1-3
       Euler matrix, substituting the class-specific angles.

    3. **Orbit geometry** -- vis-viva, period, specific energy, angular
       momentum, flight-path angle, perifocal basis vectors.

No time evolution happens here: every function evaluates one instant.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.,
        Algorithms 9 and 10.
    [2] Bate, Mueller & White, "Fundamentals of Astrodynamics", Dover.
    [3] Curtis, "Orbital Mechanics for Engineering Students", 4th ed.

===============================================================================
"""

import logging
from typing import Optional, Tuple

import numpy as np

from orbital_maneuvers.core.config import DEFAULT_TOLERANCES, Tolerances
from orbital_maneuvers.core.constants import TWO_PI
from orbital_maneuvers.core.exceptions import DegenerateOrbitError, InvalidInputError
from orbital_maneuvers.core.frames import perifocal_axes, perifocal_to_inertial
from orbital_maneuvers.core.vector import (
    VectorLike,
    as_vector3,
    clamped_arccos,
    cross,
    dot,
    norm,
)
from orbital_maneuvers.dynamics.elements import GeometryClass, OrbitalElements

logger = logging.getLogger(__name__)

_K_HAT = np.array([0.0, 0.0, 1.0])


# =============================================================================
# CARTESIAN -> KEPLERIAN
# =============================================================================

def state_to_elements(
    r_vec: VectorLike,
    v_vec: VectorLike,
    mu: float,
    tolerances: Optional[Tolerances] = None,
) -> OrbitalElements:
    """
    Convert a Cartesian state to classical orbital elements.

    The algorithm computes:
        h = r x v                                   (angular momentum)
        n = z_hat x h                               (ascending node vector)
        e_vec = ((v^2 - mu/r) r - (r.v) v) / mu     (eccentricity vector)
        xi = v^2/2 - mu/r,  a = -mu / (2 xi)        (energy, semi-major axis)
        p = h^2 / mu,  i = arccos(h_z / |h|)

    Classification:
        e < circular_eccentricity  -> circular, else elliptic
        |n| == 0                   -> equatorial, else inclined

    Each angle is an arccos of a normalised dot product followed by the
    quadrant check theta -> 2*pi - theta:

        lam_true  x_hat -> r      r_y < 0   (r_y > 0 when retrograde)
        W         x_hat -> n      n_y < 0
        u         n -> r          r_z < 0
        w_true    x_hat -> e      e_y < 0   (e_y > 0 when retrograde)
        w         n -> e          e_z < 0
        nu        e -> r          r . v < 0

    For retrograde equatorial orbits (h_z < 0) the in-plane angles run
    clockwise when seen from +z, hence the flipped test.

    Parameters
    ----------
    r_vec : array_like
        3-element position vector.
    v_vec : array_like
        3-element velocity vector.
    mu : float
        Gravitational parameter, > 0.
    tolerances : Tolerances, optional
        Threshold policy; defaults to ``DEFAULT_TOLERANCES``.

    Returns
    -------
    OrbitalElements
        Elements with only the class-relevant angles populated.

    Raises
    ------
    InvalidInputError
        If mu <= 0 or r is the zero vector.
    DegenerateOrbitError
        For rectilinear (h = 0) or parabolic (xi = 0) motion.
    """
    tol = tolerances or DEFAULT_TOLERANCES
    r = as_vector3(r_vec, 'position')
    v = as_vector3(v_vec, 'velocity')

    if not mu > 0.0:
        raise InvalidInputError(f"Gravitational parameter must be positive (got {mu})")
    r_mag = norm(r)
    if r_mag == 0.0:
        raise InvalidInputError("Position vector must be non-zero.")
    v_sq = dot(v, v)

    # Angular momentum and node vector
    h = cross(r, v)
    h_mag = norm(h)
    if h_mag == 0.0:
        raise DegenerateOrbitError("Rectilinear motion: angular momentum is zero.")
    n = cross(_K_HAT, h)
    n_mag = norm(n)

    # Eccentricity vector
    r_dot_v = dot(r, v)
    e_vec = ((v_sq - mu / r_mag) * r - r_dot_v * v) / mu
    e = norm(e_vec)

    # Specific mechanical energy -> semi-major axis
    energy = 0.5 * v_sq - mu / r_mag
    if abs(energy) <= tol.parabolic_energy * mu / r_mag:
        raise DegenerateOrbitError(
            "Parabolic orbit: specific energy is zero, semi-major axis undefined."
        )
    a = -mu / (2.0 * energy)

    p = h_mag * h_mag / mu
    inc = clamped_arccos(h[2] / h_mag, tol.arccos_domain)

    circular = e < tol.circular_eccentricity
    equatorial = n_mag <= tol.equatorial_node * h_mag
    retrograde = h[2] < 0.0

    def _acos(x):
        return clamped_arccos(x, tol.arccos_domain)

    if circular and equatorial:
        lam_true = _acos(r[0] / r_mag)
        if (r[1] > 0.0) if retrograde else (r[1] < 0.0):
            lam_true = TWO_PI - lam_true
        elements = OrbitalElements(
            GeometryClass.CIRCULAR_EQUATORIAL, p=p, a=a, e=e, i=inc, mu=mu,
            lam_true=lam_true,
        )
    elif circular:
        raan = _acos(n[0] / n_mag)
        if n[1] < 0.0:
            raan = TWO_PI - raan
        u = _acos(dot(n, r) / (n_mag * r_mag))
        if r[2] < 0.0:
            u = TWO_PI - u
        elements = OrbitalElements(
            GeometryClass.CIRCULAR_INCLINED, p=p, a=a, e=e, i=inc, mu=mu,
            W=raan, u=u,
        )
    else:
        nu = _acos(dot(e_vec, r) / (e * r_mag))
        if r_dot_v < 0.0:
            nu = TWO_PI - nu
        if equatorial:
            w_true = _acos(e_vec[0] / e)
            if (e_vec[1] > 0.0) if retrograde else (e_vec[1] < 0.0):
                w_true = TWO_PI - w_true
            elements = OrbitalElements(
                GeometryClass.ELLIPTIC_EQUATORIAL, p=p, a=a, e=e, i=inc, mu=mu,
                w_true=w_true, nu=nu,
            )
        else:
            raan = _acos(n[0] / n_mag)
            if n[1] < 0.0:
                raan = TWO_PI - raan
            omega = _acos(dot(n, e_vec) / (n_mag * e))
            if e_vec[2] < 0.0:
                omega = TWO_PI - omega
            elements = OrbitalElements(
                GeometryClass.ELLIPTIC_INCLINED, p=p, a=a, e=e, i=inc, mu=mu,
                W=raan, w=omega, nu=nu,
            )

    logger.debug(
        "state_to_elements: %s, p=%.6g, a=%.6g, e=%.6g, i=%.4f deg",
        elements.geometry.name, p, a, e, np.degrees(inc),
    )
    return elements


# =============================================================================
# KEPLERIAN -> CARTESIAN
# =============================================================================

def elements_to_state(
    elements: OrbitalElements,
    tolerances: Optional[Tolerances] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert classical orbital elements to Cartesian position and velocity.

    The procedure is:
        1. Pick (W_eff, w_eff, nu_eff) for the geometry class
           (see ``OrbitalElements.orientation``).
        2. Position and velocity in the perifocal (PQW) frame:

            r_pqw = p / (1 + e cos(nu)) * [cos(nu), sin(nu), 0]
            v_pqw = sqrt(mu/p) * [-sin(nu), e + cos(nu), 0]

        3. Rotate PQW -> inertial with the 3-1-3 matrix built from
           (W_eff, i, w_eff).

    Parameters
    ----------
    elements : OrbitalElements
        Element record of any geometry class.
    tolerances : Tolerances, optional
        Threshold policy; defaults to ``DEFAULT_TOLERANCES``.

    Returns
    -------
    r_vec : np.ndarray
        3-element position vector.
    v_vec : np.ndarray
        3-element velocity vector.

    Raises
    ------
    InvalidInputError
        If p <= 0 or mu <= 0.
    DegenerateOrbitError
        If 1 + e cos(nu) is numerically zero (infinite radius).
    """
    tol = tolerances or DEFAULT_TOLERANCES
    p, e, mu = elements.p, elements.e, elements.mu
    if not p > 0.0:
        raise InvalidInputError(f"Semi-latus rectum must be positive (got {p})")
    if not mu > 0.0:
        raise InvalidInputError(f"Gravitational parameter must be positive (got {mu})")

    raan, omega, nu = elements.orientation()

    cos_nu = np.cos(nu)
    sin_nu = np.sin(nu)
    denom = 1.0 + e * cos_nu
    if abs(denom) < tol.singular_anomaly:
        raise DegenerateOrbitError(
            f"State undefined at true anomaly {nu:.6f} rad for e = {e:.6f} "
            "(1 + e cos(nu) = 0)."
        )

    r_mag = p / denom
    r_pqw = r_mag * np.array([cos_nu, sin_nu, 0.0], dtype=np.float64)
    v_pqw = np.sqrt(mu / p) * np.array([-sin_nu, e + cos_nu, 0.0],
                                        dtype=np.float64)

    R = perifocal_to_inertial(raan, elements.i, omega)
    return R @ r_pqw, R @ v_pqw


# =============================================================================
# ORBIT UTILITY FUNCTIONS
# =============================================================================

def perifocal_basis(elements: OrbitalElements) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    In-plane reference directions of an orbit.

    Returns the P, Q, W unit vectors of the frame in which the class's
    in-plane angle is measured: P is where that angle is zero (periapsis,
    the ascending node for circular inclined orbits, x_hat for circular
    equatorial ones), Q is 90 degrees ahead along the motion, and W is the
    orbit normal.
    """
    raan, omega, _ = elements.orientation()
    return perifocal_axes(raan, elements.i, omega)


def vis_viva(r: float, a: float, mu: float) -> float:
    """
    Orbital speed from the vis-viva equation:

        v = sqrt( mu * (2/r - 1/a) )
    """
    return float(np.sqrt(mu * (2.0 / r - 1.0 / a)))


def orbital_period(a: float, mu: float) -> float:
    """
    Kepler's third law, T = 2*pi * sqrt(a^3 / mu).

    Raises
    ------
    InvalidInputError
        If a <= 0 (open orbit has no finite period).
    """
    if a <= 0:
        raise InvalidInputError(
            f"Orbital period is undefined for a <= 0 (got a = {a:.4e}). "
            "Open (hyperbolic/parabolic) orbits have infinite period."
        )
    return float(TWO_PI * np.sqrt(a ** 3 / mu))


def specific_energy(r: float, v: float, mu: float) -> float:
    """Specific mechanical energy, E = v^2/2 - mu/r."""
    return 0.5 * v * v - mu / r


def specific_angular_momentum(r_vec: VectorLike, v_vec: VectorLike) -> np.ndarray:
    """Specific angular momentum vector, h = r x v."""
    return cross(r_vec, v_vec)


def flight_path_angle(e: float, nu: float) -> float:
    """
    Angle between the velocity and the local horizontal:

        gamma = atan2(e sin(nu), 1 + e cos(nu))

    Positive while climbing from periapsis to apoapsis.
    """
    return float(np.arctan2(e * np.sin(nu), 1.0 + e * np.cos(nu)))


def radial_tangential(r_vec: VectorLike, v_vec: VectorLike) -> Tuple[float, float]:
    """
    Split a velocity into radial and tangential components:

        v_r = (v . r) / |r|
        v_t = sqrt(|v|^2 - v_r^2)
    """
    r_mag = norm(r_vec)
    if r_mag == 0.0:
        raise InvalidInputError("Position vector must be non-zero.")
    v_r = dot(v_vec, r_vec) / r_mag
    v_t = float(np.sqrt(max(dot(v_vec, v_vec) - v_r * v_r, 0.0)))
    return v_r, v_t
