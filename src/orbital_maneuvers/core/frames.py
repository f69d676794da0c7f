"""
===============================================================================
ORBITAL MANEUVERS - Reference Frame Rotations
===============================================================================
Elementary rotation matrices and the perifocal (PQW) to inertial mapping
used by the element conversions.

References
----------
    [1] Vallado, "Fundamentals of Astrodynamics and Applications", 4th ed.
    [2] Curtis, "Orbital Mechanics for Engineering Students", 4th ed.

===============================================================================
"""

from typing import Tuple

import numpy as np


# =============================================================================
# ELEMENTARY ROTATION MATRICES
# =============================================================================

def Rx(angle: float) -> np.ndarray:
    """
    Elementary rotation matrix about the X-axis (frame rotation):

        Rx(a) = | 1    0       0     |
                | 0   cos(a)  sin(a)  |
                | 0  -sin(a)  cos(a)  |
    """
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0,   c,   s],
        [0.0,  -s,   c],
    ], dtype=np.float64)


def Rz(angle: float) -> np.ndarray:
    """
    Elementary rotation matrix about the Z-axis (frame rotation):

        Rz(a) = |  cos(a)  sin(a)  0 |
                | -sin(a)  cos(a)  0 |
                |   0       0      1 |
    """
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [  c,   s, 0.0],
        [ -s,   c, 0.0],
        [0.0, 0.0, 1.0],
    ], dtype=np.float64)


# =============================================================================
# PERIFOCAL -> INERTIAL
# =============================================================================

def perifocal_to_inertial(RAAN: float, inc: float, omega: float) -> np.ndarray:
    """
    Rotation matrix from the perifocal (PQW) frame to the inertial frame,
    built from the classical 3-1-3 Euler sequence:

        R = Rz(-RAAN) * Rx(-inc) * Rz(-omega)

    Written out (c = cos, s = sin, O = RAAN, w = omega, i = inc):

        | cO cw - sO sw ci   -cO sw - sO cw ci    sO si |
        | sO cw + cO sw ci   -sO sw + cO cw ci   -cO si |
        |      sw si               cw si            ci  |

    Parameters
    ----------
    RAAN : float
        Right ascension of the ascending node (rad).
    inc : float
        Inclination (rad).
    omega : float
        Argument of periapsis (rad).

    Returns
    -------
    np.ndarray
        3x3 rotation matrix; its columns are P, Q, W expressed in the
        inertial frame.
    """
    return Rz(-RAAN) @ Rx(-inc) @ Rz(-omega)


def perifocal_axes(RAAN: float, inc: float,
                   omega: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return the P (periapsis), Q and W (orbit normal) unit vectors."""
    R = perifocal_to_inertial(RAAN, inc, omega)
    return R[:, 0].copy(), R[:, 1].copy(), R[:, 2].copy()
