"""
===============================================================================
ORBITAL MANEUVERS - Physical and Astronomical Constants
===============================================================================
Central repository for the constants used by the element conversion and
maneuver modules.

Distances are in kilometres and gravitational parameters in km^3/s^2, the
units of the classical reference problems (Vallado).  The core algorithms
themselves are unit-agnostic: any consistent unit system works as long as
mu, positions and velocities agree.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# =============================================================================
# EARTH PARAMETERS
# =============================================================================
EARTH_MU = 398600.4415                 # Gravitational parameter (km^3/s^2)
EARTH_RADIUS = 6371.0                  # Mean radius (km)
EARTH_EQUATORIAL_RADIUS = 6378.137     # WGS84 equatorial radius (km)

# =============================================================================
# MOON PARAMETERS
# =============================================================================
MOON_MU = 4902.800066                  # km^3/s^2
MOON_RADIUS = 1737.4                   # Mean radius (km)


def get_body_mu(body_name: str) -> float:
    """
    Look up gravitational parameter by body name.

    Args:
        body_name: One of 'earth', 'moon'

    Returns:
        Gravitational parameter mu in km^3/s^2

    Raises:
        ValueError: If body_name is not recognized
    """
    lookup = {
        'earth': EARTH_MU,
        'moon': MOON_MU,
    }
    if body_name.lower() not in lookup:
        raise ValueError(f"Unknown body: {body_name}. Valid: {list(lookup.keys())}")
    return lookup[body_name.lower()]


def get_body_radius(body_name: str) -> float:
    """
    Look up mean radius by body name.

    Args:
        body_name: One of 'earth', 'moon'

    Returns:
        Mean radius in kilometres
    """
    lookup = {
        'earth': EARTH_RADIUS,
        'moon': MOON_RADIUS,
    }
    if body_name.lower() not in lookup:
        raise ValueError(f"Unknown body: {body_name}. Valid: {list(lookup.keys())}")
    return lookup[body_name.lower()]
