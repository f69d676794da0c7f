"""
===============================================================================
ORBITAL MANEUVERS - Maneuver Planner
===============================================================================
Delta-V evaluation for impulsive transfers between two orbits described by
classical orbital elements.

Coplanar transfers:
    - Hohmann transfer (two impulses, apsidal)
    - Bi-elliptic transfer between circular orbits (three impulses)
    - Bi-elliptic transfer between general elliptic orbits
    - Two-impulse transfer between general elliptic orbits

Plane-change transfers:
    - Inclination-only change at the cheaper node
    - General plane change onto an arbitrary target plane
    - Combined Hohmann transfer and plane change

Conventions:
    - mu is taken from the initial orbit; both orbits are assumed to share
      it (not cross-checked).
    - Units are whatever the elements use (km, km/s in the examples).
    - All angles in radians.
===============================================================================
"""

import logging
from typing import Optional

import numpy as np

from orbital_maneuvers.core.config import DEFAULT_TOLERANCES, Tolerances
from orbital_maneuvers.core.constants import PI, TWO_PI
from orbital_maneuvers.core.exceptions import InvalidInputError
from orbital_maneuvers.core.vector import norm
from orbital_maneuvers.dynamics.elements import OrbitalElements
from orbital_maneuvers.dynamics.orbital_mechanics import (
    elements_to_state,
    flight_path_angle,
    radial_tangential,
    vis_viva,
)
from orbital_maneuvers.guidance.plane_change import PlaneChange, compute_plane_change

logger = logging.getLogger(__name__)


class ManeuverPlanner:
    """
    Computes delta-V for impulsive maneuvers between two orbits.

    Each method implements one transfer strategy and returns the total
    delta-V.  The planner holds nothing but its tolerance policy: all
    orbit data is passed as arguments and results are returned directly.

    Typical usage:
        planner = ManeuverPlanner()
        leo = OrbitalElements.circular_equatorial(6569.48, EARTH_MU, 0.0)
        geo = OrbitalElements.circular_equatorial(42159.49, EARTH_MU, 0.0)
        dv = planner.hohmann_delta_v(leo, geo)
    """

    def __init__(self, tolerances: Optional[Tolerances] = None) -> None:
        self.tolerances = tolerances or DEFAULT_TOLERANCES

    # -------------------------------------------------------------------------
    # Validation helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_elliptic(elements: OrbitalElements, label: str) -> None:
        if not elements.a > 0.0:
            raise InvalidInputError(
                f"{label} orbit must be elliptic with a > 0 (got a = {elements.a})"
            )
        if not elements.mu > 0.0:
            raise InvalidInputError(
                f"{label} orbit has non-positive mu ({elements.mu})"
            )

    # -------------------------------------------------------------------------
    # Hohmann Transfer
    # -------------------------------------------------------------------------

    def hohmann_delta_v(
        self,
        initial: OrbitalElements,
        final: OrbitalElements,
    ) -> float:
        """
        Delta-V of a two-impulse Hohmann transfer.

        The transfer ellipse touches the initial orbit at its periapsis and
        the final orbit at its apoapsis (or vice versa).

        Equations:
            a_t = (a_1 + a_2) / 2

            v_1  = sqrt(mu * (2/a_1 - 1/a_1))     (initial orbit)
            v_t1 = sqrt(mu * (2/a_1 - 1/a_t))     (transfer, departure)
            v_t2 = sqrt(mu * (2/a_2 - 1/a_t))     (transfer, arrival)
            v_2  = sqrt(mu * (2/a_2 - 1/a_2))     (final orbit)

            dv = |v_t1 - v_1| + |v_2 - v_t2|

        Args:
            initial: Elements of the initial orbit (uses a, mu).
            final: Elements of the final orbit (uses a).

        Returns:
            Total delta-V.
        """
        self._require_elliptic(initial, "Initial")
        self._require_elliptic(final, "Final")
        mu = initial.mu
        r1, r2 = initial.a, final.a
        a_transfer = (r1 + r2) / 2.0

        v_1 = vis_viva(r1, r1, mu)
        v_2 = vis_viva(r2, r2, mu)
        v_transfer_1 = vis_viva(r1, a_transfer, mu)
        v_transfer_2 = vis_viva(r2, a_transfer, mu)

        dv1 = abs(v_transfer_1 - v_1)
        dv2 = abs(v_2 - v_transfer_2)

        logger.debug(
            "Hohmann transfer: r1=%.3f, r2=%.3f, dv1=%.6f, dv2=%.6f",
            r1, r2, dv1, dv2,
        )
        return dv1 + dv2

    # -------------------------------------------------------------------------
    # Bi-Elliptic Transfer (circular orbits)
    # -------------------------------------------------------------------------

    def bi_elliptic_circular_delta_v(
        self,
        initial: OrbitalElements,
        final: OrbitalElements,
        r_b: float,
    ) -> float:
        """
        Delta-V of a three-impulse bi-elliptic transfer between circular
        orbits through the intermediate apoapsis r_b.

        Equations:
            a_1 = (a_i + r_b) / 2,  a_2 = (a_f + r_b) / 2

            dv1 = |sqrt(mu (2/a_i - 1/a_1)) - sqrt(mu/a_i)|
            dv2 = |sqrt(mu (2/r_b - 1/a_2)) - sqrt(mu (2/r_b - 1/a_1))|
            dv3 = |sqrt(mu/a_f) - sqrt(mu (2/a_f - 1/a_2))|

        Args:
            initial: Elements of the initial circular orbit (uses a, mu).
            final: Elements of the final circular orbit (uses a).
            r_b: Intermediate apoapsis radius. Must be >= max(a_i, a_f).

        Returns:
            Total delta-V of the three burns.

        Raises:
            InvalidInputError: If r_b < max(a_i, a_f).
        """
        self._require_elliptic(initial, "Initial")
        self._require_elliptic(final, "Final")
        mu = initial.mu
        r1, r2 = initial.a, final.a
        if r_b < max(r1, r2):
            raise InvalidInputError(
                f"r_b ({r_b:.3f}) must be >= max(r1, r2) = {max(r1, r2):.3f}"
            )

        # First transfer ellipse: r1 -> r_b
        a1 = (r1 + r_b) / 2.0
        dv1 = abs(vis_viva(r1, a1, mu) - vis_viva(r1, r1, mu))

        # At r_b: transition from first ellipse to second
        a2 = (r2 + r_b) / 2.0
        dv2 = abs(vis_viva(r_b, a2, mu) - vis_viva(r_b, a1, mu))

        # Circularize at r2
        dv3 = abs(vis_viva(r2, r2, mu) - vis_viva(r2, a2, mu))

        logger.debug(
            "Bi-elliptic transfer (circular): r1=%.3f, r2=%.3f, r_b=%.3f -> "
            "dv1=%.6f, dv2=%.6f, dv3=%.6f",
            r1, r2, r_b, dv1, dv2, dv3,
        )
        return dv1 + dv2 + dv3

    # -------------------------------------------------------------------------
    # General elliptic transfers
    # -------------------------------------------------------------------------

    @staticmethod
    def _transfer_angular_momentum(r_a: float, r_b: float, mu: float) -> float:
        """h = sqrt(mu p) of the ellipse with apsides r_a and r_b."""
        p_transfer = 2.0 * r_a * r_b / (r_a + r_b)
        return float(np.sqrt(mu * p_transfer))

    @staticmethod
    def _burn(v_r: float, v_t: float, v_t_required: float) -> float:
        """
        Impulse matching (v_r, v_t) to a transfer orbit that is at an apsis
        there, i.e. has zero radial speed and tangential speed v_t_required.
        """
        return float(np.hypot(v_r, v_t - v_t_required))

    def bi_elliptic_elliptic_delta_v(
        self,
        initial: OrbitalElements,
        final: OrbitalElements,
        r_a: float,
    ) -> float:
        """
        Delta-V of a bi-elliptic transfer between general coplanar elliptic
        orbits, departing and arriving at the current true anomalies.

        The departure and arrival points are in general not apsides, so the
        orbits are handled as full states.  Each velocity is split into

            v_r = (v . r) / |r|,   v_t = sqrt(|v|^2 - v_r^2)

        Transfer ellipse 1 has apsides |r_1| and r_a, transfer ellipse 2 has
        apsides |r_2| and r_a; their tangential speeds follow from the
        semi-latus rectum, v_t = sqrt(mu p_t) / r.  Each burn is the vector
        difference of the (radial, tangential) components:

            dv1 = sqrt(v_r1^2 + (v_t1 - h_t1/|r_1|)^2)
            dv2 = |h_t2 - h_t1| / r_a
            dv3 = sqrt(v_r2^2 + (v_t2 - h_t2/|r_2|)^2)

        Cancelling the radial speed is part of each end burn, so the total
        is never below the plain difference of speeds |v| - h_t/r.

        For circular orbits this is exactly the circular bi-elliptic
        transfer.

        Args:
            initial: Elements of the initial orbit at the departure point.
            final: Elements of the final orbit at the arrival point.
            r_a: Common apoapsis radius of the two transfer ellipses.

        Returns:
            Total delta-V of the three burns.

        Raises:
            InvalidInputError: If r_a is below either burn radius.
        """
        self._require_elliptic(initial, "Initial")
        self._require_elliptic(final, "Final")
        mu = initial.mu
        r1_vec, v1_vec = elements_to_state(initial, self.tolerances)
        r2_vec, v2_vec = elements_to_state(final, self.tolerances)
        r1, r2 = norm(r1_vec), norm(r2_vec)
        if r_a < max(r1, r2):
            raise InvalidInputError(
                f"r_a ({r_a:.3f}) must be >= max(|r1|, |r2|) = {max(r1, r2):.3f}"
            )

        v_r1, v_t1 = radial_tangential(r1_vec, v1_vec)
        v_r2, v_t2 = radial_tangential(r2_vec, v2_vec)

        h_t1 = self._transfer_angular_momentum(r1, r_a, mu)
        h_t2 = self._transfer_angular_momentum(r2, r_a, mu)

        dv1 = self._burn(v_r1, v_t1, h_t1 / r1)
        dv2 = abs(h_t2 - h_t1) / r_a
        dv3 = self._burn(v_r2, v_t2, h_t2 / r2)

        logger.debug(
            "Bi-elliptic transfer (elliptic): |r1|=%.3f, |r2|=%.3f, r_a=%.3f -> "
            "dv1=%.6f, dv2=%.6f, dv3=%.6f",
            r1, r2, r_a, dv1, dv2, dv3,
        )
        return dv1 + dv2 + dv3

    def two_impulse_elliptic_delta_v(
        self,
        initial: OrbitalElements,
        final: OrbitalElements,
    ) -> float:
        """
        Delta-V of a two-impulse transfer between general coplanar elliptic
        orbits, departing and arriving at the current true anomalies.

        A single transfer ellipse with apsides |r_1| and |r_2| is used:

            h_t = sqrt(mu * 2 |r_1| |r_2| / (|r_1| + |r_2|))
            dv1 = sqrt(v_r1^2 + (v_t1 - h_t/|r_1|)^2)
            dv2 = sqrt(v_r2^2 + (v_t2 - h_t/|r_2|)^2)

        For circular orbits this is exactly the Hohmann transfer.

        Args:
            initial: Elements of the initial orbit at the departure point.
            final: Elements of the final orbit at the arrival point.

        Returns:
            Total delta-V of the two burns.
        """
        self._require_elliptic(initial, "Initial")
        self._require_elliptic(final, "Final")
        mu = initial.mu
        r1_vec, v1_vec = elements_to_state(initial, self.tolerances)
        r2_vec, v2_vec = elements_to_state(final, self.tolerances)
        r1, r2 = norm(r1_vec), norm(r2_vec)

        v_r1, v_t1 = radial_tangential(r1_vec, v1_vec)
        v_r2, v_t2 = radial_tangential(r2_vec, v2_vec)
        h_t = self._transfer_angular_momentum(r1, r2, mu)

        dv1 = self._burn(v_r1, v_t1, h_t / r1)
        dv2 = self._burn(v_r2, v_t2, h_t / r2)

        logger.debug(
            "Two-impulse transfer (elliptic): |r1|=%.3f, |r2|=%.3f -> "
            "dv1=%.6f, dv2=%.6f",
            r1, r2, dv1, dv2,
        )
        return dv1 + dv2

    # -------------------------------------------------------------------------
    # Plane Change
    # -------------------------------------------------------------------------

    def plane_change_delta_v(
        self,
        velocity: float,
        delta_inclination: float,
    ) -> float:
        """
        Delta-V for a simple plane change that rotates a velocity of the
        given magnitude by delta_inclination.

        Equation:
            dv = 2 * v * sin(|delta_i| / 2)

        Args:
            velocity: Velocity component being rotated.
            delta_inclination: Plane rotation angle (radians).

        Returns:
            Delta-V magnitude.
        """
        return float(2.0 * velocity * np.sin(abs(delta_inclination) / 2.0))

    def inclination_only_delta_v(
        self,
        initial: OrbitalElements,
        final: OrbitalElements,
    ) -> float:
        """
        Delta-V of an inclination-only change, performed at the cheaper of
        the two nodes of the initial orbit.

        The nodes sit at true anomaly 2*pi - w and pi - w (w_eff of the
        initial orbit: w, w_true, or 0 for circular orbits).  At each node:

            r     = p / (1 + e cos(nu))
            v     = sqrt(mu (2/r - 1/a))
            gamma = atan2(e sin(nu), 1 + e cos(nu))
            dv    = 2 v cos(gamma) sin(|i_f - i_i| / 2)

        Only the horizontal velocity component turns, hence cos(gamma).

        Args:
            initial: Elements of the initial orbit.
            final: Elements of the final orbit (uses i).

        Returns:
            The smaller of the two nodal delta-V values.
        """
        self._require_elliptic(initial, "Initial")
        mu, p, e, a = initial.mu, initial.p, initial.e, initial.a
        _, w_eff, _ = initial.orientation()
        delta_i = final.i - initial.i

        candidates = []
        for nu in ((TWO_PI - w_eff) % TWO_PI, (PI - w_eff) % TWO_PI):
            r = p / (1.0 + e * np.cos(nu))
            v = vis_viva(r, a, mu)
            gamma = flight_path_angle(e, nu)
            candidates.append(self.plane_change_delta_v(v * np.cos(gamma), delta_i))

        dv = min(candidates)
        logger.debug(
            "Inclination-only change: di=%.4f deg, node dv=%.6f / %.6f -> %.6f",
            np.degrees(delta_i), candidates[0], candidates[1], dv,
        )
        return dv

    def general_plane_change(
        self,
        initial: OrbitalElements,
        final: OrbitalElements,
    ) -> PlaneChange:
        """
        Single-impulse rotation of the initial orbit into the plane of the
        final orbit at a crossing of their line of nodes.

        See ``orbital_maneuvers.guidance.plane_change`` for the geometry.
        The initial record is not modified; the burn point is evaluated on a
        copy via ``OrbitalElements.at_anomaly``.

        Args:
            initial: Elements of the orbit before the burn.
            final: Elements of the orbit whose plane is targeted.

        Returns:
            PlaneChange with both nodal candidates.  ``dv, r, v = result``
            gives the first node; ``result.cheapest`` the cheaper one.
        """
        return compute_plane_change(initial, final, self.tolerances)

    # -------------------------------------------------------------------------
    # Combined Plane Change and Transfer
    # -------------------------------------------------------------------------

    def combined_transfer_delta_v(
        self,
        initial: OrbitalElements,
        final: OrbitalElements,
    ) -> float:
        """
        Delta-V of a Hohmann transfer with the whole plane change folded
        into the arrival burn, where the speed is lowest.

        Equations:
            a_t = (a_1 + a_2) / 2

            dv1 = |v_t1 - v_1|    (tangential burn at a_1, no plane change)

            dv2 = sqrt(v_2^2 + v_t2^2 - 2 v_2 v_t2 cos(delta_i))

        The second burn uses the law of cosines for the velocity triangle.

        Args:
            initial: Elements of the initial orbit (uses a, i, mu).
            final: Elements of the final orbit (uses a, i).

        Returns:
            Total delta-V of the departure and arrival burns.
        """
        self._require_elliptic(initial, "Initial")
        self._require_elliptic(final, "Final")
        mu = initial.mu
        r1, r2 = initial.a, final.a
        delta_i = abs(final.i - initial.i)
        a_transfer = (r1 + r2) / 2.0

        v_1 = vis_viva(r1, r1, mu)
        v_2 = vis_viva(r2, r2, mu)
        v_transfer_1 = vis_viva(r1, a_transfer, mu)
        v_transfer_2 = vis_viva(r2, a_transfer, mu)

        dv1 = abs(v_transfer_1 - v_1)
        dv2 = float(np.sqrt(
            v_2 ** 2 + v_transfer_2 ** 2
            - 2.0 * v_2 * v_transfer_2 * np.cos(delta_i)
        ))

        logger.debug(
            "Combined transfer + plane change: di=%.4f deg, dv1=%.6f, dv2=%.6f",
            np.degrees(delta_i), dv1, dv2,
        )
        return dv1 + dv2

    def __repr__(self) -> str:
        return f"ManeuverPlanner(tolerances={self.tolerances!r})"
