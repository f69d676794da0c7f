"""
===============================================================================
ORBITAL MANEUVERS - General Plane Change
===============================================================================
Single-impulse rotation of an orbit's plane onto the plane of a target
orbit, keeping the speed and the position of the burn point.

Geometry
--------
Two non-parallel orbital planes intersect along the line

    a_line = (h1 x h2) / |h1 x h2|

where h1, h2 are the unit orbit normals.  The initial orbit crosses that
line twice (true anomalies nu and nu + pi).  At either crossing, rotating
the velocity about the line by

    alpha = arccos(h1 . h2)

carries h1 onto h2 while leaving the position untouched, so the new
state lies in the target plane.  Only the velocity component normal to
the rotation axis turns, giving

    dv = |v' - v| = sqrt(2 v_perp^2 (1 - cos(alpha))) = 2 v_perp sin(alpha/2)

which is the chord sqrt(2 |v|^2 (1 - cos(alpha))) at a horizontal
crossing.

Two rotation branches
---------------------
GENERIC       |h1 x h2| >= plane_parallel: rotate about a_line.
ANTIPARALLEL  |h1 x h2| <  plane_parallel: the planes coincide (normals
              parallel or antiparallel) and there is no unique line of
              nodes.  Any in-plane axis works; the current radius
              direction of the initial orbit is used, rotated by alpha
              (~pi for reversed motion, ~0 for an identical plane).

Both crossings use the same rotation operator, so the two candidates are
symmetric; the caller can compare them through ``PlaneChange.cheapest``.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

import numpy as np

from orbital_maneuvers.core.config import DEFAULT_TOLERANCES, Tolerances
from orbital_maneuvers.core.constants import PI, TWO_PI
from orbital_maneuvers.core.vector import (
    clamped_arccos,
    cross,
    dot,
    norm,
    rotate_about_axis,
    unit,
)
from orbital_maneuvers.dynamics.elements import OrbitalElements
from orbital_maneuvers.dynamics.orbital_mechanics import (
    elements_to_state,
    perifocal_basis,
)

logger = logging.getLogger(__name__)


class RotationBranch(Enum):
    """Which rotation axis the plane change used."""
    GENERIC = auto()
    ANTIPARALLEL = auto()


@dataclass(frozen=True, eq=False)
class NodeBurn:
    """
    Plane-change impulse evaluated at one crossing of the node line.

    Attributes
    ----------
    true_anomaly : float
        In-plane angle of the initial orbit at the crossing (nu, u or
        lam_true depending on its geometry class), in [0, 2*pi).
    delta_v : float
        Impulse magnitude |velocity - velocity_before|.
    position : np.ndarray
        Position at the burn, shared by the initial and resulting orbits.
    velocity_before : np.ndarray
        Velocity on the initial orbit at the burn.
    velocity : np.ndarray
        Velocity after the burn, in the target plane.
    """
    true_anomaly: float
    delta_v: float
    position: np.ndarray
    velocity_before: np.ndarray
    velocity: np.ndarray

    @property
    def impulse(self) -> np.ndarray:
        return self.velocity - self.velocity_before


@dataclass(frozen=True, eq=False)
class PlaneChange:
    """
    Result of a general plane change: both nodal candidates.

    ``delta_v``, ``position`` and ``velocity`` report the first node, and
    the object unpacks as ``dv, r, v = plane_change``.  ``cheapest`` picks
    the lower-cost node.
    """
    rotation_angle: float
    branch: RotationBranch
    node_line: np.ndarray
    first: NodeBurn
    second: NodeBurn

    @property
    def delta_v(self) -> float:
        """
        Impulse magnitude |v' - v| at the first node.

        Only the velocity component normal to the node line turns, so this
        is 2 v_perp sin(alpha/2).  It is below ``chord_delta_v`` unless the
        crossing is horizontal (an apsis, or a circular orbit).
        """
        return self.first.delta_v

    @property
    def chord_delta_v(self) -> float:
        """
        sqrt(2 |v|^2 (1 - cos(alpha))) at the first node: the cost of turning
        the whole velocity vector through the plane angle.
        """
        speed = norm(self.first.velocity_before)
        return float(np.sqrt(2.0 * speed ** 2 * (1.0 - np.cos(self.rotation_angle))))

    @property
    def position(self) -> np.ndarray:
        return self.first.position

    @property
    def velocity(self) -> np.ndarray:
        return self.first.velocity

    @property
    def cheapest(self) -> NodeBurn:
        if self.second.delta_v < self.first.delta_v:
            return self.second
        return self.first

    def __iter__(self) -> Iterator:
        yield self.delta_v
        yield self.position
        yield self.velocity


def node_anomaly(elements: OrbitalElements, direction: np.ndarray,
                 tolerances: Optional[Tolerances] = None) -> float:
    """
    In-plane angle at which an orbit's radius points along *direction*.

    *direction* must lie in the orbit plane.  The angle is measured from
    the class's reference direction P (periapsis for elliptic orbits) by
    arccos, and moved to (pi, 2*pi) when *direction* is behind P, i.e. has
    a negative component along Q, the direction of the periapsis velocity.
    """
    tol = tolerances or DEFAULT_TOLERANCES
    p_hat, q_hat, _ = perifocal_basis(elements)
    d_hat = unit(direction)
    angle = clamped_arccos(dot(d_hat, p_hat), tol.arccos_domain)
    if dot(d_hat, q_hat) < 0.0:
        angle = TWO_PI - angle
    return angle % TWO_PI


def burn_at_node(elements: OrbitalElements, anomaly: float, axis: np.ndarray,
                 angle: float, tolerances: Optional[Tolerances] = None) -> NodeBurn:
    """Rotate the velocity at *anomaly* about *axis* by *angle*."""
    shifted = elements.at_anomaly(anomaly)
    r, v = elements_to_state(shifted, tolerances)
    v_new = rotate_about_axis(v, axis, angle)
    return NodeBurn(
        true_anomaly=anomaly,
        delta_v=norm(v_new - v),
        position=r,
        velocity_before=v,
        velocity=v_new,
    )


def compute_plane_change(initial: OrbitalElements, final: OrbitalElements,
                         tolerances: Optional[Tolerances] = None) -> PlaneChange:
    """
    Rotate *initial* into the plane of *final* at each crossing of their
    common line of nodes.

    Parameters
    ----------
    initial : OrbitalElements
        Orbit before the burn; only its in-plane angle is varied, on a copy.
    final : OrbitalElements
        Orbit whose plane is targeted.
    tolerances : Tolerances, optional
        ``plane_parallel`` selects between the two rotation branches.

    Returns
    -------
    PlaneChange
        Both nodal candidates; first node at the crossing along +a_line.
    """
    tol = tolerances or DEFAULT_TOLERANCES
    r1, v1 = elements_to_state(initial, tol)
    r2, v2 = elements_to_state(final, tol)
    h1 = unit(cross(r1, v1))
    h2 = unit(cross(r2, v2))

    alpha = clamped_arccos(dot(h1, h2), tol.arccos_domain)
    line = cross(h1, h2)
    line_mag = norm(line)

    if line_mag >= tol.plane_parallel:
        branch = RotationBranch.GENERIC
        axis = line / line_mag
        nu_first = node_anomaly(initial, axis, tol)
    else:
        branch = RotationBranch.ANTIPARALLEL
        axis = unit(r1)
        nu_first = initial.in_plane_angle % TWO_PI
    nu_second = (nu_first + PI) % TWO_PI

    first = burn_at_node(initial, nu_first, axis, alpha, tol)
    second = burn_at_node(initial, nu_second, axis, alpha, tol)

    logger.debug(
        "Plane change (%s): alpha=%.4f deg, node nu=%.4f/%.4f deg, "
        "dv=%.6g / %.6g",
        branch.name, np.degrees(alpha), np.degrees(nu_first),
        np.degrees(nu_second), first.delta_v, second.delta_v,
    )
    return PlaneChange(
        rotation_angle=alpha,
        branch=branch,
        node_line=axis,
        first=first,
        second=second,
    )
