"""
===============================================================================
ORBITAL MANEUVERS - Dynamics Module
===============================================================================
Orbit state representations and the conversions between them.

Submodules:
    elements          -- GeometryClass and the OrbitalElements record
    orbital_mechanics -- RV <-> COE conversion, vis-viva, period, energy
===============================================================================
"""
