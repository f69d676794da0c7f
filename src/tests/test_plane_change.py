"""
===============================================================================
ORBITAL MANEUVERS - General Plane Change Test Suite
===============================================================================
The resulting state of a general plane change must lie in the target
orbit's plane: re-classifying it recovers the target inclination and node.
Also covers the geometry of the two nodal candidates, the antiparallel and
coplanar branches, and agreement with the inclination-only change.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from orbital_maneuvers.core.constants import DEG2RAD, EARTH_MU
from orbital_maneuvers.dynamics.elements import OrbitalElements
from orbital_maneuvers.dynamics.orbital_mechanics import (
    elements_to_state,
    radial_tangential,
    state_to_elements,
)
from orbital_maneuvers.guidance.maneuver_planner import ManeuverPlanner
from orbital_maneuvers.guidance.plane_change import (
    NodeBurn,
    PlaneChange,
    RotationBranch,
    compute_plane_change,
    node_anomaly,
)


P_REF = 17858.7836
E_REF = 0.3


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def planner():
    """Return a ManeuverPlanner instance."""
    return ManeuverPlanner()


def inclined(i_deg, W_deg, w_deg, nu=0.0):
    return OrbitalElements.elliptic_inclined(
        p=P_REF, e=E_REF, i=i_deg * DEG2RAD, W=W_deg * DEG2RAD,
        w=w_deg * DEG2RAD, nu=nu, mu=EARTH_MU)


def equatorial(w_true_deg, nu=0.0, i=0.0):
    return OrbitalElements.elliptic_equatorial(
        p=P_REF, e=E_REF, w_true=w_true_deg * DEG2RAD, nu=nu, mu=EARTH_MU, i=i)


def unit_normal(elements):
    r, v = elements_to_state(elements)
    h = np.cross(r, v)
    return h / np.linalg.norm(h)


# (initial, final, tolerance on the recovered node or None if the target
# is equatorial)
REFERENCE_PAIRS = [
    pytest.param(inclined(70.0, 90.0, 30.0), inclined(45.0, 90.0, 30.0), 1e-2,
                 id="decrease-same-node"),
    pytest.param(inclined(70.0, 90.0, 30.0), equatorial(20.0), None,
                 id="to-equatorial"),
    pytest.param(equatorial(45.0), inclined(45.0, 90.0, 30.0), 1e-2,
                 id="from-equatorial"),
    pytest.param(inclined(25.0, 45.0, 65.0), inclined(45.0, 90.0, 30.0), 1e-2,
                 id="increase"),
    pytest.param(inclined(175.0, 45.0, 65.0), inclined(45.0, 90.0, 30.0), 1e-2,
                 id="decrease-beyond-90deg"),
    pytest.param(inclined(10.0, 45.0, 65.0), inclined(175.0, 85.0, 30.0), 2e-1,
                 id="increase-beyond-90deg"),
]


# =============================================================================
# Test: Target plane is reached
# =============================================================================

class TestPlaneChangeConsistency:
    """Re-classifying the resulting state recovers the target plane."""

    @pytest.mark.parametrize("initial, final, W_tol", REFERENCE_PAIRS)
    def test_recovers_target_plane(self, planner, initial, final, W_tol):
        dv, r, v = planner.general_plane_change(initial, final)
        check = state_to_elements(r, v, initial.mu)

        assert dv >= 0.0
        assert_allclose(check.i, final.i, atol=0.05)
        if W_tol is not None:
            assert_allclose(check.W, final.W, atol=W_tol)

    @pytest.mark.parametrize("initial, final, W_tol", REFERENCE_PAIRS)
    def test_both_nodes_reach_target_plane(self, initial, final, W_tol):
        result = compute_plane_change(initial, final)
        h2 = unit_normal(final)
        for node in (result.first, result.second):
            h_new = np.cross(node.position, node.velocity)
            assert_allclose(h_new / np.linalg.norm(h_new), h2, atol=1e-9)

    @pytest.mark.parametrize("initial, final, W_tol", REFERENCE_PAIRS)
    def test_burn_preserves_position_and_speed(self, initial, final, W_tol):
        result = compute_plane_change(initial, final)
        h2 = unit_normal(final)
        for node in (result.first, result.second):
            r_mag = np.linalg.norm(node.position)
            assert abs(np.dot(node.position, h2)) < 1e-9 * r_mag
            assert_allclose(np.linalg.norm(node.velocity),
                            np.linalg.norm(node.velocity_before), rtol=1e-12)
            v_r_before, _ = radial_tangential(node.position, node.velocity_before)
            v_r_after, _ = radial_tangential(node.position, node.velocity)
            assert_allclose(v_r_after, v_r_before, atol=1e-10)

    @pytest.mark.parametrize("initial, final, W_tol", REFERENCE_PAIRS)
    def test_delta_v_is_horizontal_chord(self, initial, final, W_tol):
        """Only the horizontal velocity turns: dv = 2 v_t sin(alpha/2)."""
        result = compute_plane_change(initial, final)
        for node in (result.first, result.second):
            _, v_t = radial_tangential(node.position, node.velocity_before)
            expected = 2.0 * v_t * np.sin(result.rotation_angle / 2.0)
            assert_allclose(node.delta_v, expected, rtol=1e-9)
            assert_allclose(np.linalg.norm(node.impulse), node.delta_v, rtol=1e-12)


# =============================================================================
# Test: Node geometry
# =============================================================================

class TestNodeGeometry:
    """The two burn points sit on the line of nodes, half an orbit apart."""

    def test_node_line(self):
        initial, final = inclined(25.0, 45.0, 65.0), inclined(45.0, 90.0, 30.0)
        result = compute_plane_change(initial, final)
        h1, h2 = unit_normal(initial), unit_normal(final)

        assert result.branch is RotationBranch.GENERIC
        assert_allclose(np.linalg.norm(result.node_line), 1.0, rtol=1e-12)
        assert abs(np.dot(result.node_line, h1)) < 1e-12
        assert abs(np.dot(result.node_line, h2)) < 1e-12
        assert_allclose(result.rotation_angle, np.arccos(np.dot(h1, h2)), rtol=1e-9)

    def test_nodes_are_opposite(self):
        initial, final = inclined(25.0, 45.0, 65.0), inclined(45.0, 90.0, 30.0)
        result = compute_plane_change(initial, final)

        r1 = result.first.position / np.linalg.norm(result.first.position)
        r2 = result.second.position / np.linalg.norm(result.second.position)
        assert_allclose(r1, result.node_line, atol=1e-10)
        assert_allclose(r2, -result.node_line, atol=1e-10)
        gap = (result.second.true_anomaly - result.first.true_anomaly) % (2 * np.pi)
        assert_allclose(gap, np.pi, atol=1e-12)

    @pytest.mark.parametrize("angle_deg", [10.0, 45.0, 135.0, 200.0, 300.0])
    def test_node_anomaly_recovers_position(self, angle_deg):
        orbit = inclined(40.0, 10.0, 70.0, nu=angle_deg * DEG2RAD)
        r, _ = elements_to_state(orbit)
        nu = node_anomaly(orbit, r)
        diff = (nu - angle_deg * DEG2RAD + np.pi) % (2 * np.pi) - np.pi
        assert abs(diff) < 1e-9

    def test_circular_initial_orbit(self, planner):
        initial = OrbitalElements.circular_inclined(
            p=7000.0, i=28.5 * DEG2RAD, W=0.0, u=1.0, mu=EARTH_MU)
        final = inclined(51.6, 120.0, 0.0)
        dv, r, v = planner.general_plane_change(initial, final)
        check = state_to_elements(r, v, initial.mu)
        assert_allclose(check.i, final.i, atol=1e-9)
        assert_allclose(check.W, final.W, atol=1e-9)
        assert_allclose(np.linalg.norm(v), np.sqrt(EARTH_MU / 7000.0), rtol=1e-12)


# =============================================================================
# Test: Degenerate planes
# =============================================================================

class TestParallelPlanes:
    """No unique line of nodes: the burn rotates about the radius."""

    def test_reverse_direction(self):
        initial = equatorial(30.0, nu=1.0)
        final = equatorial(30.0, nu=1.0, i=np.pi)
        result = compute_plane_change(initial, final)

        assert result.branch is RotationBranch.ANTIPARALLEL
        assert_allclose(result.rotation_angle, np.pi, atol=1e-12)

        r, v = elements_to_state(initial)
        v_r, v_t = radial_tangential(r, v)
        assert_allclose(result.position, r, rtol=1e-12)
        assert_allclose(result.delta_v, 2.0 * v_t, rtol=1e-9)

        check = state_to_elements(result.position, result.velocity, initial.mu)
        assert_allclose(check.i, np.pi, atol=1e-6)
        v_r_after, _ = radial_tangential(result.position, result.velocity)
        assert_allclose(v_r_after, v_r, rtol=1e-9)

    def test_coplanar_costs_nothing(self):
        orbit = inclined(30.0, 45.0, 30.0)
        result = compute_plane_change(orbit, orbit)
        assert result.branch is RotationBranch.ANTIPARALLEL
        assert result.first.delta_v < 1e-6
        assert result.second.delta_v < 1e-6


# =============================================================================
# Test: Result object
# =============================================================================

class TestPlaneChangeResult:
    """Both candidates exposed, first node by default, no mutation."""

    def test_both_candidates(self, planner):
        result = planner.general_plane_change(inclined(25.0, 45.0, 65.0),
                                              inclined(45.0, 90.0, 30.0))
        assert isinstance(result, PlaneChange)
        assert isinstance(result.first, NodeBurn)
        assert isinstance(result.second, NodeBurn)
        assert result.delta_v == result.first.delta_v
        assert result.cheapest.delta_v == min(result.first.delta_v,
                                              result.second.delta_v)

    def test_unpacking_gives_first_node(self, planner):
        result = planner.general_plane_change(inclined(70.0, 90.0, 30.0),
                                              inclined(45.0, 90.0, 30.0))
        dv, r, v = result
        assert dv == result.first.delta_v
        np.testing.assert_array_equal(r, result.first.position)
        np.testing.assert_array_equal(v, result.first.velocity)

    def test_initial_record_unchanged(self, planner):
        initial = inclined(70.0, 90.0, 30.0, nu=0.7)
        snapshot = inclined(70.0, 90.0, 30.0, nu=0.7)
        planner.general_plane_change(initial, inclined(45.0, 90.0, 30.0))
        assert initial == snapshot

    def test_cheapest_node_matches_inclination_only(self, planner):
        """Same node and periapsis: the general change reduces to inclination-only."""
        initial = inclined(30.0, 45.0, 30.0)
        final = inclined(45.0, 45.0, 30.0)
        result = planner.general_plane_change(initial, final)
        assert_allclose(result.rotation_angle, 15.0 * DEG2RAD, rtol=1e-9)
        assert_allclose(result.cheapest.delta_v,
                        planner.inclination_only_delta_v(initial, final),
                        rtol=1e-9)

    def test_chord_delta_v_bounds_impulse(self, planner):
        """Off an apsis the impulse is below the whole-vector chord."""
        initial = inclined(30.0, 45.0, 30.0, nu=0.7)
        result = planner.general_plane_change(initial, inclined(45.0, 90.0, 30.0))
        speed = np.linalg.norm(result.first.velocity_before)
        expected = 2.0 * speed * np.sin(result.rotation_angle / 2.0)
        assert_allclose(result.chord_delta_v, expected, rtol=1e-9)
        assert result.delta_v < result.chord_delta_v

    def test_chord_delta_v_on_circular_orbit(self, planner):
        initial = OrbitalElements.circular_inclined(
            p=7000.0, i=28.5 * DEG2RAD, W=0.0, u=1.0, mu=EARTH_MU)
        result = planner.general_plane_change(initial, inclined(51.6, 120.0, 0.0))
        assert_allclose(result.chord_delta_v, result.delta_v, rtol=1e-9)
