"""
===============================================================================
ORBITAL MANEUVERS - Configuration and Constants Test Suite
===============================================================================
Tests for the tolerance policy, its YAML loader, and the body constant
lookups.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from orbital_maneuvers.core.config import (
    DEFAULT_TOLERANCES,
    Tolerances,
    load_tolerances,
    tolerances_from_dict,
)
from orbital_maneuvers.core.constants import (
    EARTH_MU,
    EARTH_RADIUS,
    MOON_MU,
    get_body_mu,
    get_body_radius,
)
from orbital_maneuvers.core.exceptions import InvalidInputError

REPO_CONFIG = os.path.join(os.path.dirname(__file__), '..', '..', 'config',
                           'tolerances.yaml')


# =============================================================================
# Test: Tolerance policy
# =============================================================================

class TestTolerances:

    def test_defaults(self):
        tol = Tolerances()
        assert tol.circular_eccentricity == 1e-4
        assert tol.equatorial_node == 1e-12
        assert tol.plane_parallel == 1e-10
        assert tol == DEFAULT_TOLERANCES

    def test_non_positive_rejected(self):
        with pytest.raises(InvalidInputError, match="circular_eccentricity"):
            Tolerances(circular_eccentricity=0.0)
        with pytest.raises(InvalidInputError):
            Tolerances(arccos_domain=-1e-9)

    def test_updated_returns_copy(self):
        tol = DEFAULT_TOLERANCES.updated(plane_parallel=1e-6)
        assert tol.plane_parallel == 1e-6
        assert DEFAULT_TOLERANCES.plane_parallel == 1e-10

    def test_updated_unknown_key(self):
        with pytest.raises(InvalidInputError, match="Unknown"):
            DEFAULT_TOLERANCES.updated(plane_paralel=1e-6)

    def test_from_dict(self):
        assert tolerances_from_dict({}) == DEFAULT_TOLERANCES
        assert tolerances_from_dict(None) == DEFAULT_TOLERANCES
        tol = tolerances_from_dict({'tolerances': {'circular_eccentricity': 1e-6}})
        assert tol.circular_eccentricity == 1e-6
        with pytest.raises(InvalidInputError):
            tolerances_from_dict({'tolerances': [1e-6]})
        with pytest.raises(InvalidInputError):
            tolerances_from_dict(['tolerances'])


# =============================================================================
# Test: YAML loading
# =============================================================================

class TestLoadTolerances:

    def test_shipped_config_matches_defaults(self):
        assert load_tolerances(REPO_CONFIG) == DEFAULT_TOLERANCES

    def test_partial_override(self, tmp_path):
        path = tmp_path / "tol.yaml"
        path.write_text("tolerances:\n  circular_eccentricity: 1.0e-6\n")
        tol = load_tolerances(path)
        assert tol.circular_eccentricity == 1e-6
        assert tol.plane_parallel == DEFAULT_TOLERANCES.plane_parallel

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_tolerances(path) == DEFAULT_TOLERANCES

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tolerances:\n  not_a_tolerance: 1.0\n")
        with pytest.raises(InvalidInputError):
            load_tolerances(path)

    def test_non_positive_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tolerances:\n  plane_parallel: 0.0\n")
        with pytest.raises(InvalidInputError):
            load_tolerances(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tolerances(tmp_path / "missing.yaml")


# =============================================================================
# Test: Body constants
# =============================================================================

class TestBodyConstants:

    def test_lookup_is_case_insensitive(self):
        assert get_body_mu('Earth') == EARTH_MU
        assert get_body_mu('moon') == MOON_MU
        assert get_body_radius('EARTH') == EARTH_RADIUS

    def test_unknown_body(self):
        with pytest.raises(ValueError, match="Unknown body"):
            get_body_mu('vulcan')
        with pytest.raises(ValueError, match="Unknown body"):
            get_body_radius('vulcan')
