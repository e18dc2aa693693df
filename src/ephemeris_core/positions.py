"""Geocentric and apparent positions of the Sun, planets and orbit-defined bodies.

The pipeline follows Meeus chapters 25, 33 and 47: heliocentric VSOP87 (or Kepler)
positions are reduced to geocentric, corrected for light time, shifted to FK5,
and nutation and aberration are applied before rotating to the equator with the
true obliquity of date.
"""

from __future__ import annotations

import logging
import math

from ephemeris_core import config
from ephemeris_core.aberration import annual_aberration_ecliptic, sun_aberration
from ephemeris_core.angle_utils import limit_to_two_pi
from ephemeris_core.constants import LIGHT_TIME_DAYS_PER_AU
from ephemeris_core.coords import (
    EclipticPoint,
    EquatorialPoint,
    angular_separation,
    ecliptic_to_equatorial,
    heliocentric_to_geocentric,
)
from ephemeris_core.errors import DomainDegeneracyError, InvalidInputError
from ephemeris_core.kepler import OrbitalElements, heliocentric_ecliptic_position
from ephemeris_core.lunar import moon_geocentric_position
from ephemeris_core.nutation import (
    ObliquityFormula,
    mean_obliquity,
    nutation_in_longitude_and_obliquity,
)
from ephemeris_core.planets import PLUTO_ELEMENTS
from ephemeris_core.precession import precess_ecliptic
from ephemeris_core.vsop87 import Planet, heliocentric_position, vsop_to_fk5

logger = logging.getLogger(__name__)


def light_time(distance: float) -> float:
    """Light travel time in days over a distance in AU."""
    if distance < 0.0:
        raise InvalidInputError(f'Distance must not be negative: {distance!r}')
    return distance * LIGHT_TIME_DAYS_PER_AU


def _vsop_point(planet: Planet | int, jde: float) -> EclipticPoint:
    pos = heliocentric_position(planet, jde)
    return EclipticPoint(pos.longitude, pos.latitude, pos.radius_vector)


def _light_time_iterations(iterations: int | None) -> int:
    if iterations is None:
        return config.get_light_time_iterations()
    if iterations < 0:
        raise InvalidInputError(f'Light-time iterations must not be negative: {iterations!r}')
    return iterations


def planet_geocentric_position(
    planet: Planet | int,
    jde: float,
    light_time_correction: bool = True,
    iterations: int | None = None,
) -> EclipticPoint:
    """Geometric geocentric ecliptic position of a planet.

    The planet is taken at jde - tau and the Earth at jde, tau being the light
    time recomputed from the previous geocentric distance.

    Parameters:
        planet: Planet enum member or number 1-8, not the Earth.
        jde: Julian Ephemeris Day (TT).
        light_time_correction: False returns the instantaneous geometric position.
        iterations: Light-time passes (None uses configuration).

    Returns:
        EclipticPoint on the VSOP87 ecliptic of date with the distance from the
        Earth in AU.

    Raises:
        InvalidInputError: planet is the Earth or not a VSOP87 planet.
    """
    if planet == Planet.EARTH:
        raise InvalidInputError('The geocentric position of the Earth is undefined')
    earth = _vsop_point(Planet.EARTH, jde)
    geo = heliocentric_to_geocentric(_vsop_point(planet, jde), earth)
    if light_time_correction:
        for _ in range(_light_time_iterations(iterations)):
            tau = light_time(geo.distance)
            geo = heliocentric_to_geocentric(_vsop_point(planet, jde - tau), earth)
    return geo


def _fk5_point(point: EclipticPoint, jde: float) -> EclipticPoint:
    lon, lat = vsop_to_fk5(point.longitude, point.latitude, jde)
    return EclipticPoint(lon, lat, point.distance)


def _apparent_from_geometric(
    geo: EclipticPoint, jde: float, formula: ObliquityFormula | str | None
) -> EquatorialPoint:
    """Nutation and aberration on an FK5 geometric place, then to the true equator."""
    lon, lat = geo.longitude, geo.latitude
    delta_psi, delta_eps = nutation_in_longitude_and_obliquity(jde)
    dlon, dlat = annual_aberration_ecliptic(EclipticPoint(lon, lat), jde)
    apparent = EclipticPoint(limit_to_two_pi(lon + delta_psi + dlon), lat + dlat, geo.distance)
    return ecliptic_to_equatorial(apparent, mean_obliquity(jde, formula) + delta_eps)


def apparent_planet_position(
    planet: Planet | int, jde: float, formula: ObliquityFormula | str | None = None
) -> EquatorialPoint:
    """Apparent right ascension and declination of a planet (Meeus chapter 33).

    Parameters:
        planet: Planet enum member or number 1-8, not the Earth.
        jde: Julian Ephemeris Day (TT).
        formula: Mean obliquity formula (None uses configuration).

    Returns:
        EquatorialPoint for the true equator and equinox of date, with the
        light-time corrected distance from the Earth.
    """
    geo = planet_geocentric_position(planet, jde)
    logger.debug(
        'Planet %s at JDE %.6f: geometric lambda=%.9f beta=%.9f delta=%.9f',
        planet, jde, geo.longitude, geo.latitude, geo.distance,
    )
    return _apparent_from_geometric(_fk5_point(geo, jde), jde, formula)


def sun_geometric_position(jde: float) -> EclipticPoint:
    """Geometric geocentric position of the Sun, FK5 system (Meeus 25.b).

    Returns:
        EclipticPoint of the mean equinox of date with the Earth-Sun distance.
    """
    earth = heliocentric_position(Planet.EARTH, jde)
    lon, lat = vsop_to_fk5(earth.longitude + math.pi, -earth.latitude, jde)
    return EclipticPoint(lon, lat, earth.radius_vector)


def apparent_sun_position(
    jde: float, formula: ObliquityFormula | str | None = None
) -> EquatorialPoint:
    """Apparent right ascension and declination of the Sun.

    Nutation in longitude and the aberration -20.4898"/R are added to the
    geometric longitude, which is then referred to the true obliquity of date.
    """
    sun = sun_geometric_position(jde)
    delta_psi, delta_eps = nutation_in_longitude_and_obliquity(jde)
    apparent = EclipticPoint(
        limit_to_two_pi(sun.longitude + delta_psi + sun_aberration(sun.distance)),
        sun.latitude,
        sun.distance,
    )
    return ecliptic_to_equatorial(apparent, mean_obliquity(jde, formula) + delta_eps)


def _orbit_geocentric(elements: OrbitalElements, jde: float, earth: EclipticPoint) -> EclipticPoint:
    body = heliocentric_ecliptic_position(elements, jde)
    return heliocentric_to_geocentric(body, earth)


def orbit_geocentric_position(
    elements: OrbitalElements,
    jde: float,
    light_time_correction: bool = True,
    iterations: int | None = None,
) -> EclipticPoint:
    """Geometric geocentric position of a body given by orbital elements.

    The Earth, shifted from the VSOP87 frame to FK5, is precessed into the
    ecliptic of ``elements.epoch`` for the subtraction and the result is
    precessed back to the ecliptic of date.

    Parameters:
        elements: Heliocentric elements (ecliptic and equinox of elements.epoch).
        jde: Julian Ephemeris Day (TT).
        light_time_correction: False returns the instantaneous geometric position.
        iterations: Light-time passes (None uses configuration).

    Returns:
        EclipticPoint of the ecliptic of date with the distance from the Earth.
    """
    earth = _fk5_point(_vsop_point(Planet.EARTH, jde), jde)
    earth = precess_ecliptic(earth, jde, elements.epoch)
    geo = _orbit_geocentric(elements, jde, earth)
    if light_time_correction:
        for _ in range(_light_time_iterations(iterations)):
            geo = _orbit_geocentric(elements, jde - light_time(geo.distance), earth)
    return precess_ecliptic(geo, elements.epoch, jde)


def apparent_orbit_position(
    elements: OrbitalElements, jde: float, formula: ObliquityFormula | str | None = None
) -> EquatorialPoint:
    """Apparent right ascension and declination of an orbit-defined body.

    The elements already refer to FK5, so only nutation and aberration are added.
    """
    return _apparent_from_geometric(orbit_geocentric_position(elements, jde), jde, formula)


def apparent_moon_position(
    jde: float, formula: ObliquityFormula | str | None = None
) -> EquatorialPoint:
    """Apparent right ascension and declination of the Moon (Meeus 47.a).

    Only nutation in longitude is added; the Moon has no annual aberration
    relative to the Earth. The distance is the geocentric Earth-Moon distance.
    """
    moon = moon_geocentric_position(jde)
    delta_psi, delta_eps = nutation_in_longitude_and_obliquity(jde)
    apparent = EclipticPoint(
        limit_to_two_pi(moon.longitude + delta_psi), moon.latitude, moon.distance
    )
    return ecliptic_to_equatorial(apparent, mean_obliquity(jde, formula) + delta_eps)


def pluto_heliocentric_position(jde: float) -> EclipticPoint:
    """Heliocentric position of Pluto on the ecliptic of date, from its J2000 elements."""
    pos = heliocentric_ecliptic_position(PLUTO_ELEMENTS, jde)
    return precess_ecliptic(pos, PLUTO_ELEMENTS.epoch, jde)


def elongation(body: EclipticPoint | EquatorialPoint, sun: EclipticPoint | EquatorialPoint) -> float:
    """Geocentric angular distance of a body from the Sun, radians in [0, pi]."""
    return angular_separation(body, sun)


def phase_angle(sun_distance: float, earth_distance: float, body_earth_distance: float) -> float:
    """Sun-body-Earth angle from the three sides of the triangle (Meeus 41.3).

    Parameters:
        sun_distance: Body's distance from the Sun, r (AU).
        earth_distance: Earth's distance from the Sun, R (AU).
        body_earth_distance: Body's distance from the Earth, Delta (AU).

    Returns:
        Phase angle in radians, [0, pi].

    Raises:
        DomainDegeneracyError: The body coincides with the Sun or the Earth.
    """
    if sun_distance <= 0.0 or body_earth_distance <= 0.0:
        raise DomainDegeneracyError('Phase angle is undefined at zero distance')
    cos_i = (
        sun_distance * sun_distance
        + body_earth_distance * body_earth_distance
        - earth_distance * earth_distance
    ) / (2.0 * sun_distance * body_earth_distance)
    return math.acos(max(-1.0, min(1.0, cos_i)))
