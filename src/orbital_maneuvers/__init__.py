"""
===============================================================================
ORBITAL MANEUVERS
===============================================================================
Two-body orbit toolkit: Cartesian <-> classical orbital element conversion
with geometry classification, and delta-V evaluation of impulsive coplanar,
plane-change and combined maneuvers.

Sub-packages:
    core      -- constants, error types, tolerances, vector algebra, frames
    dynamics  -- element record and RV <-> COE conversion engine
    guidance  -- maneuver planner and general plane change
===============================================================================
"""

from orbital_maneuvers.core.config import DEFAULT_TOLERANCES, Tolerances, load_tolerances
from orbital_maneuvers.core.exceptions import (
    DegenerateOrbitError,
    InvalidInputError,
    NumericDomainError,
    OrbitalManeuversError,
)
from orbital_maneuvers.dynamics.elements import GeometryClass, OrbitalElements
from orbital_maneuvers.dynamics.orbital_mechanics import elements_to_state, state_to_elements
from orbital_maneuvers.guidance.maneuver_planner import ManeuverPlanner
from orbital_maneuvers.guidance.plane_change import NodeBurn, PlaneChange, RotationBranch

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_TOLERANCES",
    "Tolerances",
    "load_tolerances",
    "OrbitalManeuversError",
    "InvalidInputError",
    "DegenerateOrbitError",
    "NumericDomainError",
    "GeometryClass",
    "OrbitalElements",
    "state_to_elements",
    "elements_to_state",
    "ManeuverPlanner",
    "PlaneChange",
    "NodeBurn",
    "RotationBranch",
]
