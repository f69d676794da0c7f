"""
===============================================================================
ORBITAL MANEUVERS - Core Module
===============================================================================
Foundation shared by the conversion engine and the maneuver planner.

Submodules:
    constants   -- Math constants, body gravitational parameters and radii
    exceptions  -- Error hierarchy (all ValueError subclasses)
    config      -- Tolerance policy and YAML loader
    vector      -- 3-vector algebra, Rodrigues rotation, clamped arccos
    frames      -- Elementary rotations, perifocal -> inertial matrix
===============================================================================
"""
