"""Annual aberration (Meeus chapter 23) and the Sun's aberration (chapter 25).

The e-terms (elliptic aberration) are included. Where a correction would divide
by cos(latitude) at a pole, the longitude-like component is reported as 0.
"""

from __future__ import annotations

import logging
import math

from ephemeris_core.angle_utils import limit_to_two_pi
from ephemeris_core.constants import (
    ABERRATION_CONSTANT_ARCSEC,
    ARCSEC_TO_RAD,
    SUN_ABERRATION_ARCSEC,
)
from ephemeris_core.coords import EclipticPoint, EquatorialPoint
from ephemeris_core.time_utils import julian_century, polynomial
from ephemeris_core.vsop87 import Planet, heliocentric_position

logger = logging.getLogger(__name__)

KAPPA = ABERRATION_CONSTANT_ARCSEC * ARCSEC_TO_RAD

# cos(latitude) below this is treated as a pole.
_POLE_COS = 1e-12


def earth_orbit_eccentricity(jde: float) -> float:
    """Eccentricity of the Earth's orbit (Meeus 25.4)."""
    return polynomial(julian_century(jde), (0.016708634, -0.000042037, -0.0000001267))


def earth_perihelion_longitude(jde: float) -> float:
    """Longitude of the perihelion of the Earth's orbit, radians."""
    return math.radians(polynomial(julian_century(jde), (102.93735, 1.71946, 0.00046)))


def _sun_longitude(jde: float) -> float:
    earth = heliocentric_position(Planet.EARTH, jde)
    return limit_to_two_pi(earth.longitude + math.pi)


def annual_aberration_ecliptic(
    point: EclipticPoint, jde: float, sun_longitude: float | None = None
) -> tuple[float, float]:
    """Aberration in ecliptic longitude and latitude (Meeus 23.2).

    Parameters:
        point: Geometric ecliptic place of date.
        jde: Julian Ephemeris Day (TT).
        sun_longitude: Sun's true geometric longitude (radians); None computes it
            from the VSOP87 Earth series.

    Returns:
        (delta_longitude, delta_latitude) in radians, to be added to the place.
    """
    if not isinstance(point, EclipticPoint):
        raise TypeError(
            f'annual_aberration_ecliptic expects EclipticPoint, got {type(point).__name__}'
        )
    if sun_longitude is None:
        sun_longitude = _sun_longitude(jde)
    e = earth_orbit_eccentricity(jde)
    peri = earth_perihelion_longitude(jde)
    lon, lat = point.longitude, point.latitude
    cos_lat = math.cos(lat)
    if abs(cos_lat) < _POLE_COS:
        logger.debug('Ecliptic pole at latitude %r; longitude aberration set to 0', lat)
        dlon = 0.0
    else:
        dlon = (
            -KAPPA * math.cos(sun_longitude - lon) + e * KAPPA * math.cos(peri - lon)
        ) / cos_lat
    dlat = -KAPPA * math.sin(lat) * (
        math.sin(sun_longitude - lon) - e * math.sin(peri - lon)
    )
    return (dlon, dlat)


def annual_aberration_equatorial(
    point: EquatorialPoint,
    jde: float,
    obliquity: float,
    sun_longitude: float | None = None,
) -> tuple[float, float]:
    """Aberration in right ascension and declination (Meeus 23.3).

    Parameters:
        point: Equatorial place of date.
        jde: Julian Ephemeris Day (TT).
        obliquity: Obliquity of the ecliptic (radians).
        sun_longitude: Sun's true geometric longitude (radians); None computes it.

    Returns:
        (delta_right_ascension, delta_declination) in radians.
    """
    if not isinstance(point, EquatorialPoint):
        raise TypeError(
            f'annual_aberration_equatorial expects EquatorialPoint, got {type(point).__name__}'
        )
    if sun_longitude is None:
        sun_longitude = _sun_longitude(jde)
    e = earth_orbit_eccentricity(jde)
    peri = earth_perihelion_longitude(jde)
    ra, dec = point.right_ascension, point.declination
    cos_ra, sin_ra = math.cos(ra), math.sin(ra)
    cos_dec, sin_dec = math.cos(dec), math.sin(dec)
    cos_eps = math.cos(obliquity)
    tan_eps = math.tan(obliquity)
    cos_sun, sin_sun = math.cos(sun_longitude), math.sin(sun_longitude)
    cos_peri, sin_peri = math.cos(peri), math.sin(peri)

    if abs(cos_dec) < _POLE_COS:
        logger.debug('Celestial pole; right ascension aberration set to 0')
        dra = 0.0
    else:
        dra = (
            -KAPPA * (cos_ra * cos_sun * cos_eps + sin_ra * sin_sun)
            + e * KAPPA * (cos_ra * cos_peri * cos_eps + sin_ra * sin_peri)
        ) / cos_dec
    tilt = tan_eps * cos_dec - sin_ra * sin_dec
    ddec = -KAPPA * (cos_sun * cos_eps * tilt + cos_ra * sin_dec * sin_sun) + e * KAPPA * (
        cos_peri * cos_eps * tilt + cos_ra * sin_dec * sin_peri
    )
    return (dra, ddec)


def sun_aberration(radius_vector: float) -> float:
    """Aberration correction to the Sun's longitude, radians (-20.4898" / R)."""
    return -SUN_ABERRATION_ARCSEC * ARCSEC_TO_RAD / radius_vector
