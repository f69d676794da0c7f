"""
===============================================================================
ORBITAL MANEUVERS - Guidance Package
===============================================================================
Impulsive maneuver planning between two orbits.

Modules:
    maneuver_planner  : Delta-V of Hohmann, bi-elliptic, two-impulse,
                        inclination-only and combined transfers
    plane_change      : General plane change at the line of nodes
===============================================================================
"""
