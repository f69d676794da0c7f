"""
===============================================================================
ORBITAL MANEUVERS - Tolerance Configuration
===============================================================================
Numerical thresholds used by the element classifier and the maneuver
algorithms, gathered into one immutable policy object so that every
epsilon in the package has a name and can be tuned from a YAML file.

YAML layout::

    tolerances:
      circular_eccentricity: 1.0e-4
      plane_parallel: 1.0e-10

Keys that are not given keep their default value.
===============================================================================
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from orbital_maneuvers.core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tolerances:
    """
    Named epsilons for classification and degenerate-geometry detection.

    Attributes
    ----------
    circular_eccentricity : float
        Eccentricity below which an orbit is classified as circular.
    equatorial_node : float
        Node-vector magnitude, relative to |h|, at or below which an orbit
        is classified as equatorial.  This is the ``|n| == 0`` test made
        robust to the last few bits of a rotation matrix.
    parabolic_energy : float
        Specific energy, relative to mu/|r|, treated as exactly parabolic.
    singular_anomaly : float
        Lower bound on |1 + e*cos(nu)| before the conic radius is considered
        infinite.
    arccos_domain : float
        How far an arccos argument may stray outside [-1, 1] and still be
        clamped rather than rejected.
    plane_parallel : float
        |h1 x h2| (unit normals) below which two orbital planes are treated
        as parallel or antiparallel, i.e. the line of nodes is undefined.
    """
    circular_eccentricity: float = 1e-4
    equatorial_node: float = 1e-12
    parabolic_energy: float = 1e-12
    singular_anomaly: float = 1e-12
    arccos_domain: float = 1e-9
    plane_parallel: float = 1e-10

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not value > 0.0:
                raise InvalidInputError(
                    f"Tolerance '{f.name}' must be positive (got {value!r})"
                )

    def updated(self, **overrides: float) -> 'Tolerances':
        """Return a copy with the given tolerances replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidInputError(
                f"Unknown tolerance key(s): {unknown}. Valid: {sorted(known)}"
            )
        return replace(self, **{k: float(v) for k, v in overrides.items()})


# Module-level default policy
DEFAULT_TOLERANCES = Tolerances()


def tolerances_from_dict(config: Dict[str, Any]) -> Tolerances:
    """
    Build a tolerance policy from a parsed configuration mapping.

    Args:
        config: Mapping with an optional ``tolerances`` section.

    Returns:
        Tolerances with the configured values applied over the defaults.
    """
    config = config or {}
    if not isinstance(config, dict):
        raise InvalidInputError(
            f"Configuration must be a mapping, got {type(config).__name__}"
        )
    section = config.get('tolerances') or {}
    if not isinstance(section, dict):
        raise InvalidInputError(
            f"'tolerances' section must be a mapping, got {type(section).__name__}"
        )
    return DEFAULT_TOLERANCES.updated(**section)


def load_tolerances(config_path: Union[str, Path]) -> Tolerances:
    """
    Load the tolerance policy from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Tolerances instance.
    """
    logger.info("Loading tolerances from: %s", config_path)
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    tolerances = tolerances_from_dict(config)
    logger.info("Tolerances: %s", tolerances)
    return tolerances
