"""Geocentric position of the Moon (Meeus chapter 47).

Abridged ELP-2000/82 theory: about 10" in longitude and 4" in latitude. Positions
are referred to the mean equinox of date; the distance is between the centres
of the Earth and the Moon.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

from ephemeris_core.angle_utils import limit_to_pm_pi, limit_to_two_pi
from ephemeris_core.constants import AU_KM, MOON_MEAN_DISTANCE_KM
from ephemeris_core.coords import EclipticPoint
from ephemeris_core.planets.moon import MOON_LATITUDE_TERMS, MOON_LONGITUDE_DISTANCE_TERMS
from ephemeris_core.time_utils import julian_century, polynomial

logger = logging.getLogger(__name__)


class LunarArguments(NamedTuple):
    """Fundamental arguments of the lunar theory, radians."""

    mean_longitude: float  # L'
    mean_elongation: float  # D
    sun_mean_anomaly: float  # M
    moon_mean_anomaly: float  # M'
    argument_of_latitude: float  # F


def _degrees(t: float, coefficients: tuple[float, ...]) -> float:
    return math.radians(polynomial(t, coefficients) % 360.0)


def lunar_arguments(jde: float) -> LunarArguments:
    """Mean longitude L', elongation D, anomalies M and M' and argument F (Meeus 47.1-47.5)."""
    t = julian_century(jde)
    return LunarArguments(
        _degrees(t, (218.3164477, 481267.88123421, -0.0015786, 1.0 / 538841.0, -1.0 / 65194000.0)),
        _degrees(t, (297.8501921, 445267.1114034, -0.0018819, 1.0 / 545868.0, -1.0 / 113065000.0)),
        _degrees(t, (357.5291092, 35999.0502909, -0.0001536, 1.0 / 24490000.0)),
        _degrees(t, (134.9633964, 477198.8675055, 0.0087414, 1.0 / 69699.0, -1.0 / 14712000.0)),
        _degrees(t, (93.2720950, 483202.0175233, -0.0036539, -1.0 / 3526000.0, 1.0 / 863310000.0)),
    )


def moon_geocentric_position(jde: float) -> EclipticPoint:
    """Geocentric ecliptic position of the Moon for the mean equinox of date.

    Parameters:
        jde: Julian Ephemeris Day (TT).

    Returns:
        EclipticPoint with longitude in [0, 2pi), latitude, and the Earth-Moon
        distance in AU.
    """
    t = julian_century(jde)
    lp, d, m, mp, f = lunar_arguments(jde)
    # Terms in M carry the decreasing eccentricity of the Earth's orbit.
    e = polynomial(t, (1.0, -0.002516, -0.0000074))
    a1 = math.radians(119.75 + 131.849 * t)
    a2 = math.radians(53.09 + 479264.290 * t)
    a3 = math.radians(313.45 + 481266.484 * t)

    sum_l = []
    sum_r = []
    for cd, cm, cmp, cf, coeff_l, coeff_r in MOON_LONGITUDE_DISTANCE_TERMS:
        arg = cd * d + cm * m + cmp * mp + cf * f
        factor = e ** abs(cm)
        sum_l.append(coeff_l * factor * math.sin(arg))
        sum_r.append(coeff_r * factor * math.cos(arg))
    sum_b = [
        coeff_b * e ** abs(cm) * math.sin(cd * d + cm * m + cmp * mp + cf * f)
        for cd, cm, cmp, cf, coeff_b in MOON_LATITUDE_TERMS
    ]
    # Venus, Jupiter and the flattening of the Earth.
    sum_l += [3958.0 * math.sin(a1), 1962.0 * math.sin(lp - f), 318.0 * math.sin(a2)]
    sum_b += [
        -2235.0 * math.sin(lp),
        382.0 * math.sin(a3),
        175.0 * math.sin(a1 - f),
        175.0 * math.sin(a1 + f),
        127.0 * math.sin(lp - mp),
        -115.0 * math.sin(lp + mp),
    ]

    longitude = limit_to_two_pi(lp + math.radians(math.fsum(sum_l) * 1.0e-6))
    latitude = limit_to_pm_pi(math.radians(math.fsum(sum_b) * 1.0e-6))
    distance_km = MOON_MEAN_DISTANCE_KM + math.fsum(sum_r) * 1.0e-3
    logger.debug(
        'Moon at JDE %.6f: lambda=%.9f beta=%.9f delta=%.3f km', jde, longitude, latitude,
        distance_km,
    )
    return EclipticPoint(longitude, latitude, distance_km / AU_KM)
