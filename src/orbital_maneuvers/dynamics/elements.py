"""
===============================================================================
ORBITAL MANEUVERS - Classical Orbital Elements
===============================================================================
The COE record and its geometry classification.

Which angles describe the orientation of an orbit depends on its shape and
plane.  The argument of periapsis is meaningless on a circle and the node
is meaningless on the equator, so each geometry class carries its own set
of angles:

    +----------------------+-----------------+----------------------------+
    | GeometryClass        | angle fields    | (W_eff, w_eff, nu_eff)     |
    +======================+=================+============================+
    | CIRCULAR_EQUATORIAL  | lam_true        | (0, 0, lam_true)           |
    | CIRCULAR_INCLINED    | W, u            | (W, 0, u)                  |
    | ELLIPTIC_EQUATORIAL  | w_true, nu      | (0, w_true, nu)            |
    | ELLIPTIC_INCLINED    | W, w, nu        | (W, w, nu)                 |
    +----------------------+-----------------+----------------------------+

Fields that do not belong to the class are ``None``.  The record is frozen;
``at_anomaly`` returns a modified copy when a different in-plane position
is needed.
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from orbital_maneuvers.core.exceptions import InvalidInputError


class GeometryClass(Enum):
    """Orbit shape/plane classification that selects the valid angles."""
    CIRCULAR_EQUATORIAL = auto()
    CIRCULAR_INCLINED = auto()
    ELLIPTIC_EQUATORIAL = auto()
    ELLIPTIC_INCLINED = auto()

    @property
    def is_circular(self) -> bool:
        return self in (GeometryClass.CIRCULAR_EQUATORIAL,
                        GeometryClass.CIRCULAR_INCLINED)

    @property
    def is_equatorial(self) -> bool:
        return self in (GeometryClass.CIRCULAR_EQUATORIAL,
                        GeometryClass.ELLIPTIC_EQUATORIAL)


_ANGLE_FIELDS = ('W', 'w', 'nu', 'u', 'lam_true', 'w_true')

# Angle fields that must be present for each class; all others must be None.
_REQUIRED_ANGLES: Dict[GeometryClass, Tuple[str, ...]] = {
    GeometryClass.CIRCULAR_EQUATORIAL: ('lam_true',),
    GeometryClass.CIRCULAR_INCLINED: ('W', 'u'),
    GeometryClass.ELLIPTIC_EQUATORIAL: ('w_true', 'nu'),
    GeometryClass.ELLIPTIC_INCLINED: ('W', 'w', 'nu'),
}

# The angle that locates the body within the orbit plane.
_IN_PLANE_ANGLE: Dict[GeometryClass, str] = {
    GeometryClass.CIRCULAR_EQUATORIAL: 'lam_true',
    GeometryClass.CIRCULAR_INCLINED: 'u',
    GeometryClass.ELLIPTIC_EQUATORIAL: 'nu',
    GeometryClass.ELLIPTIC_INCLINED: 'nu',
}


def semi_major_axis(p: float, e: float) -> float:
    """a = p / (1 - e^2); infinite for a parabola."""
    if e == 1.0:
        return math.inf
    return p / (1.0 - e * e)


@dataclass(frozen=True)
class OrbitalElements:
    """
    Classical orbital elements of a two-body orbit at one instant.

    Attributes
    ----------
    geometry : GeometryClass
        Which of the four geometry classes the orbit belongs to.
    p : float
        Semi-latus rectum.
    a : float
        Semi-major axis (negative for hyperbolae).
    e : float
        Eccentricity, >= 0.
    i : float
        Inclination (rad), in [0, pi].
    mu : float
        Gravitational parameter of the central body.
    W : float or None
        Right ascension of the ascending node (rad).
    w : float or None
        Argument of periapsis (rad).
    nu : float or None
        True anomaly (rad).
    u : float or None
        Argument of latitude (rad), circular inclined orbits.
    lam_true : float or None
        True longitude (rad), circular equatorial orbits.
    w_true : float or None
        True longitude of periapsis (rad), elliptic equatorial orbits.
    """
    geometry: GeometryClass
    p: float
    a: float
    e: float
    i: float
    mu: float
    W: Optional[float] = None
    w: Optional[float] = None
    nu: Optional[float] = None
    u: Optional[float] = None
    lam_true: Optional[float] = None
    w_true: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.geometry, GeometryClass):
            raise InvalidInputError(
                f"geometry must be a GeometryClass, got {self.geometry!r}"
            )
        if self.e < 0.0:
            raise InvalidInputError(f"Eccentricity must be >= 0 (got {self.e})")
        required = _REQUIRED_ANGLES[self.geometry]
        for name in _ANGLE_FIELDS:
            value = getattr(self, name)
            if name in required and value is None:
                raise InvalidInputError(
                    f"{self.geometry.name} orbit requires angle '{name}'"
                )
            if name not in required and value is not None:
                raise InvalidInputError(
                    f"Angle '{name}' is undefined for a {self.geometry.name} orbit"
                )

    # -------------------------------------------------------------------------
    # Constructors, one per geometry class
    # -------------------------------------------------------------------------

    @classmethod
    def circular_equatorial(cls, p: float, mu: float, lam_true: float,
                            i: float = 0.0, e: float = 0.0) -> OrbitalElements:
        """Circular orbit in the reference plane (i = 0, or pi if retrograde)."""
        return cls(GeometryClass.CIRCULAR_EQUATORIAL, p=p, a=semi_major_axis(p, e),
                   e=e, i=i, mu=mu, lam_true=lam_true)

    @classmethod
    def circular_inclined(cls, p: float, i: float, W: float, u: float,
                          mu: float, e: float = 0.0) -> OrbitalElements:
        return cls(GeometryClass.CIRCULAR_INCLINED, p=p, a=semi_major_axis(p, e),
                   e=e, i=i, mu=mu, W=W, u=u)

    @classmethod
    def elliptic_equatorial(cls, p: float, e: float, w_true: float, nu: float,
                            mu: float, i: float = 0.0) -> OrbitalElements:
        return cls(GeometryClass.ELLIPTIC_EQUATORIAL, p=p, a=semi_major_axis(p, e),
                   e=e, i=i, mu=mu, w_true=w_true, nu=nu)

    @classmethod
    def elliptic_inclined(cls, p: float, e: float, i: float, W: float,
                          w: float, nu: float, mu: float) -> OrbitalElements:
        return cls(GeometryClass.ELLIPTIC_INCLINED, p=p, a=semi_major_axis(p, e),
                   e=e, i=i, mu=mu, W=W, w=w, nu=nu)

    # -------------------------------------------------------------------------
    # Geometry-dependent views
    # -------------------------------------------------------------------------

    @property
    def is_circular(self) -> bool:
        return self.geometry.is_circular

    @property
    def is_equatorial(self) -> bool:
        return self.geometry.is_equatorial

    @property
    def in_plane_angle(self) -> float:
        """Angle locating the body in the orbit plane (lam_true, u or nu)."""
        return getattr(self, _IN_PLANE_ANGLE[self.geometry])

    def orientation(self) -> Tuple[float, float, float]:
        """
        (W_eff, w_eff, nu_eff) to substitute into the general perifocal
        rotation, per the table in the module docstring.
        """
        g = self.geometry
        if g is GeometryClass.CIRCULAR_EQUATORIAL:
            return 0.0, 0.0, self.lam_true
        if g is GeometryClass.CIRCULAR_INCLINED:
            return self.W, 0.0, self.u
        if g is GeometryClass.ELLIPTIC_EQUATORIAL:
            return 0.0, self.w_true, self.nu
        return self.W, self.w, self.nu

    def at_anomaly(self, angle: float) -> OrbitalElements:
        """Copy of this record with the in-plane angle set to *angle*."""
        return replace(self, **{_IN_PLANE_ANGLE[self.geometry]: float(angle)})
