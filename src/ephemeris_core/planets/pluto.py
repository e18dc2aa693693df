"""Pluto mean orbital elements (ecliptic and equinox J2000).

VSOP87 does not cover Pluto; its position comes from these elements through the
Kepler solvers. Accurate to roughly a degree between 1800 and 2050.
"""

from __future__ import annotations

import math

from ephemeris_core.constants import (
    J2000,
    PLUTO_ASCENDING_NODE_DEG,
    PLUTO_ECCENTRICITY,
    PLUTO_INCLINATION_DEG,
    PLUTO_MEAN_LONGITUDE_DEG,
    PLUTO_PERIHELION_LONGITUDE_DEG,
    PLUTO_SEMIMAJOR_AXIS_AU,
)
from ephemeris_core.kepler import OrbitalElements

PLUTO_ELEMENTS = OrbitalElements.from_semimajor_axis(
    semimajor_axis=PLUTO_SEMIMAJOR_AXIS_AU,
    eccentricity=PLUTO_ECCENTRICITY,
    inclination=math.radians(PLUTO_INCLINATION_DEG),
    ascending_node=math.radians(PLUTO_ASCENDING_NODE_DEG),
    argument_of_perihelion=math.radians(
        PLUTO_PERIHELION_LONGITUDE_DEG - PLUTO_ASCENDING_NODE_DEG
    ),
    mean_anomaly=math.radians(PLUTO_MEAN_LONGITUDE_DEG - PLUTO_PERIHELION_LONGITUDE_DEG),
    epoch=J2000,
)
