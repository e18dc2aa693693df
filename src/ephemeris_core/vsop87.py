"""VSOP87-D heliocentric positions of the major planets.

Heliocentric ecliptic longitude, latitude and radius vector referred to the
dynamical ecliptic and equinox of date, evaluated from the complete VSOP87-D
files when EPHEMERIS_VSOP87_PATH points at them, or else from the abridged
series bundled in :mod:`ephemeris_core.planets`. Each coordinate is

    X = sum_k tau**k * sum_i A_i * cos(B_i + C_i * tau)

with tau in Julian millennia of dynamical time from J2000.
"""

from __future__ import annotations

import logging
import math
from enum import IntEnum
from typing import NamedTuple

from ephemeris_core.angle_utils import limit_to_pm_pi, limit_to_two_pi
from ephemeris_core.constants import ARCSEC_TO_RAD
from ephemeris_core.errors import InvalidInputError
from ephemeris_core.planets import get_planet_series
from ephemeris_core.planets.base import SERIES_UNIT, Series
from ephemeris_core.time_utils import julian_century, julian_millennium

logger = logging.getLogger(__name__)


class Planet(IntEnum):
    """Planets covered by VSOP87 (numbered outward from the Sun)."""

    MERCURY = 1
    VENUS = 2
    EARTH = 3
    MARS = 4
    JUPITER = 5
    SATURN = 6
    URANUS = 7
    NEPTUNE = 8


class HeliocentricPosition(NamedTuple):
    """Heliocentric ecliptic coordinates (radians, radians, AU)."""

    longitude: float
    latitude: float
    radius_vector: float


def _as_planet(planet: Planet | int) -> Planet:
    try:
        return Planet(planet)
    except ValueError:
        logger.error('Unsupported planet selector %r', planet)
        raise InvalidInputError(f'Unsupported planet selector {planet!r}') from None


def evaluate_series(series: Series, tau: float) -> float:
    """Evaluate one coordinate's series at tau Julian millennia from J2000.

    The inner sum for each power of tau is accumulated with math.fsum, so the
    small terms are not lost against the large leading amplitude; the powers are
    then combined by Horner's rule.

    Parameters:
        series: Groups of (A, B, C) terms for tau**0, tau**1, ...
        tau: Julian millennia (TT) from J2000.

    Returns:
        Coordinate value in radians or AU (amplitude unit 1e-8 applied).
    """
    total = 0.0
    for group in reversed(series):
        total = total * tau + math.fsum(a * math.cos(b + c * tau) for a, b, c in group)
    return total * SERIES_UNIT


def heliocentric_position(planet: Planet | int, jde: float) -> HeliocentricPosition:
    """Return a planet's heliocentric position for the dynamical ecliptic of date.

    Parameters:
        planet: Planet enum member or planet number 1-8.
        jde: Julian Ephemeris Day (TT).

    Returns:
        HeliocentricPosition with longitude in [0, 2pi), latitude in radians and
        radius vector in AU.

    Raises:
        InvalidInputError: planet is not one of Mercury through Neptune.
    """
    body = _as_planet(planet)
    series = get_planet_series(int(body))
    tau = julian_millennium(jde)
    longitude = limit_to_two_pi(evaluate_series(series.longitude, tau))
    latitude = limit_to_pm_pi(evaluate_series(series.latitude, tau))
    radius = evaluate_series(series.radius, tau)
    logger.debug(
        '%s at JDE %.6f: L=%.9f B=%.9f R=%.9f', body.name, jde, longitude, latitude, radius
    )
    return HeliocentricPosition(longitude, latitude, radius)


def vsop_to_fk5(longitude: float, latitude: float, jde: float) -> tuple[float, float]:
    """Correct VSOP87 ecliptic coordinates to the FK5 system.

    Meeus equation 32.3. The correction is below 0.1 arcsecond.

    Parameters:
        longitude: Ecliptic longitude (radians) on the VSOP dynamical ecliptic.
        latitude: Ecliptic latitude (radians).
        jde: Julian Ephemeris Day (TT).

    Returns:
        (longitude, latitude) in radians, longitude in [0, 2pi).
    """
    t = julian_century(jde)
    lprime = longitude - math.radians(1.397 * t + 0.00031 * t * t)
    cos_lp = math.cos(lprime)
    sin_lp = math.sin(lprime)
    dlon = -0.09033 + 0.03916 * (cos_lp + sin_lp) * math.tan(latitude)
    dlat = 0.03916 * (cos_lp - sin_lp)
    return (
        limit_to_two_pi(longitude + dlon * ARCSEC_TO_RAD),
        latitude + dlat * ARCSEC_TO_RAD,
    )
