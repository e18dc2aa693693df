"""Frame-tagged celestial coordinates and the rotations between frames.

Every transform converts the input angles to a unit vector, applies a 3x3
rotation and reads the angles back with atan2. Poles therefore never divide by
zero; where the longitude-like angle is undefined (a pole, the zenith) it is
reported as 0.

Angles are radians throughout. Sidereal time and observer longitude follow the
convention H = sidereal_time + longitude - right_ascension with longitude
positive east; azimuth is measured from north through east.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from ephemeris_core import angle_utils
from ephemeris_core.angle_utils import limit_to_two_pi
from ephemeris_core.constants import (
    AU_KM,
    EARTH_EQUATORIAL_RADIUS_KM,
    EARTH_POLAR_AXIS_RATIO,
    GALACTIC_NCP_LONGITUDE_DEG,
    GALACTIC_POLE_DEC_DEG,
    GALACTIC_POLE_RA_DEG,
    J2000_OBLIQUITY_DEG,
)
from ephemeris_core.errors import DomainDegeneracyError, InvalidInputError

logger = logging.getLogger(__name__)

# Directions whose horizontal length is below this fraction of |z| lie on the pole.
_POLE_EPSILON = 1e-15


@dataclass(frozen=True)
class EclipticPoint:
    """Ecliptic longitude and latitude (radians), optional distance (AU)."""

    longitude: float
    latitude: float
    distance: float | None = None


@dataclass(frozen=True)
class EquatorialPoint:
    """Right ascension and declination (radians), optional distance (AU)."""

    right_ascension: float
    declination: float
    distance: float | None = None


@dataclass(frozen=True)
class HorizontalPoint:
    """Azimuth (from north through east) and altitude, radians."""

    azimuth: float
    altitude: float


@dataclass(frozen=True)
class GalacticPoint:
    """Galactic longitude and latitude, radians."""

    longitude: float
    latitude: float


@dataclass(frozen=True)
class GeographicLocation:
    """Observer on the Earth.

    Geodetic latitude and longitude in radians, longitude positive east; height
    above sea level in metres.
    """

    latitude: float
    longitude: float
    height: float = 0.0


def _require(point: object, cls: type, func_name: str) -> None:
    if not isinstance(point, cls):
        raise TypeError(
            f'{func_name} expects {cls.__name__}, got {type(point).__name__}'
        )


def _unit_vector(lon: float, lat: float) -> np.ndarray:
    cos_lat = math.cos(lat)
    return np.array(
        [cos_lat * math.cos(lon), cos_lat * math.sin(lon), math.sin(lat)], dtype=np.float64
    )


def _angles(vec: np.ndarray) -> tuple[float, float]:
    """Return (longitude in [0, 2pi), latitude) of a non-zero vector."""
    x, y, z = float(vec[0]), float(vec[1]), float(vec[2])
    rho = math.hypot(x, y)
    lat = math.atan2(z, rho)
    if rho <= _POLE_EPSILON * abs(z):
        return (0.0, lat)
    return (limit_to_two_pi(math.atan2(y, x)), lat)


def rotation_matrix(axis: int, angle: float) -> np.ndarray:
    """Active (right-handed) rotation by angle about coordinate axis 0, 1 or 2."""
    c, s = math.cos(angle), math.sin(angle)
    i, j = (axis + 1) % 3, (axis + 2) % 3
    mat = np.eye(3, dtype=np.float64)
    mat[i, i] = c
    mat[i, j] = -s
    mat[j, i] = s
    mat[j, j] = c
    return mat


def _rotation_x(angle: float) -> np.ndarray:
    return rotation_matrix(0, angle)


def _equatorial_to_galactic_matrix() -> np.ndarray:
    """Rotation from J2000 equatorial to galactic coordinates.

    Rows of the pole matrix are the directions toward the north celestial pole
    (in the galactic plane), along the galactic node, and the galactic pole.
    """
    ra_p = math.radians(GALACTIC_POLE_RA_DEG)
    dec_p = math.radians(GALACTIC_POLE_DEC_DEG)
    l_ncp = math.radians(GALACTIC_NCP_LONGITUDE_DEG)
    pole_frame = np.array(
        [
            [-math.sin(dec_p) * math.cos(ra_p), -math.sin(dec_p) * math.sin(ra_p), math.cos(dec_p)],
            [-math.sin(ra_p), math.cos(ra_p), 0.0],
            [math.cos(dec_p) * math.cos(ra_p), math.cos(dec_p) * math.sin(ra_p), math.sin(dec_p)],
        ],
        dtype=np.float64,
    )
    # l = l_ncp - atan2(row 2, row 1): a reflection about the NCP direction.
    ncp = np.array(
        [
            [math.cos(l_ncp), math.sin(l_ncp), 0.0],
            [math.sin(l_ncp), -math.cos(l_ncp), 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )
    return ncp @ pole_frame


_EQUATORIAL_TO_GALACTIC = _equatorial_to_galactic_matrix()
_EQUATORIAL_TO_GALACTIC.flags.writeable = False
_ECLIPTIC_TO_GALACTIC = _EQUATORIAL_TO_GALACTIC @ _rotation_x(math.radians(J2000_OBLIQUITY_DEG))
_ECLIPTIC_TO_GALACTIC.flags.writeable = False


def ecliptic_to_equatorial(point: EclipticPoint, obliquity: float) -> EquatorialPoint:
    """Rotate an ecliptic point to equatorial coordinates (Meeus 13.3, 13.4).

    Parameters:
        point: Ecliptic longitude/latitude; distance passes through.
        obliquity: Obliquity of the ecliptic (radians); mean or true as appropriate.

    Returns:
        EquatorialPoint with right ascension in [0, 2pi).
    """
    _require(point, EclipticPoint, 'ecliptic_to_equatorial')
    vec = _rotation_x(obliquity) @ _unit_vector(point.longitude, point.latitude)
    ra, dec = _angles(vec)
    return EquatorialPoint(ra, dec, point.distance)


def equatorial_to_ecliptic(point: EquatorialPoint, obliquity: float) -> EclipticPoint:
    """Rotate an equatorial point to ecliptic coordinates (Meeus 13.1, 13.2)."""
    _require(point, EquatorialPoint, 'equatorial_to_ecliptic')
    vec = _rotation_x(-obliquity) @ _unit_vector(point.right_ascension, point.declination)
    lon, lat = _angles(vec)
    return EclipticPoint(lon, lat, point.distance)


def _horizon_matrix(latitude: float) -> np.ndarray:
    """Hour angle/declination frame to (south, west, zenith) for an observer latitude."""
    sin_phi, cos_phi = math.sin(latitude), math.cos(latitude)
    return np.array(
        [[sin_phi, 0.0, -cos_phi], [0.0, 1.0, 0.0], [cos_phi, 0.0, sin_phi]], dtype=np.float64
    )


def hour_angle(
    right_ascension: float, observer: GeographicLocation, sidereal_time: float
) -> float:
    """Local hour angle H = sidereal_time + longitude - right_ascension, in [0, 2pi).

    Parameters:
        right_ascension: Right ascension (radians).
        observer: Observer location (longitude positive east).
        sidereal_time: Greenwich sidereal time (radians), mean or apparent.
    """
    return limit_to_two_pi(sidereal_time + observer.longitude - right_ascension)


def equatorial_to_horizontal(
    point: EquatorialPoint, observer: GeographicLocation, sidereal_time: float
) -> HorizontalPoint:
    """Convert an equatorial point to azimuth and altitude for an observer.

    No refraction is applied. At the zenith and nadir the azimuth is 0.

    Parameters:
        point: Right ascension and declination of date.
        observer: Observer latitude and east longitude.
        sidereal_time: Greenwich sidereal time (radians).

    Returns:
        HorizontalPoint with azimuth in [0, 2pi) measured from north through east.
    """
    _require(point, EquatorialPoint, 'equatorial_to_horizontal')
    _require(observer, GeographicLocation, 'equatorial_to_horizontal')
    h = hour_angle(point.right_ascension, observer, sidereal_time)
    south, west, up = _horizon_matrix(observer.latitude) @ _unit_vector(h, point.declination)
    azimuth, altitude = _angles(np.array([-south, -west, up], dtype=np.float64))
    return HorizontalPoint(azimuth, altitude)


def horizontal_to_equatorial(
    point: HorizontalPoint, observer: GeographicLocation, sidereal_time: float
) -> EquatorialPoint:
    """Convert azimuth and altitude back to right ascension and declination."""
    _require(point, HorizontalPoint, 'horizontal_to_equatorial')
    _require(observer, GeographicLocation, 'horizontal_to_equatorial')
    north, east, up = _unit_vector(point.azimuth, point.altitude)
    hadec = _horizon_matrix(observer.latitude).T @ np.array([-north, -east, up], dtype=np.float64)
    h, dec = _angles(hadec)
    ra = limit_to_two_pi(sidereal_time + observer.longitude - h)
    return EquatorialPoint(ra, dec)


def equatorial_to_galactic(point: EquatorialPoint) -> GalacticPoint:
    """Convert a J2000 equatorial point to galactic coordinates."""
    _require(point, EquatorialPoint, 'equatorial_to_galactic')
    lon, lat = _angles(
        _EQUATORIAL_TO_GALACTIC @ _unit_vector(point.right_ascension, point.declination)
    )
    return GalacticPoint(lon, lat)


def galactic_to_equatorial(point: GalacticPoint) -> EquatorialPoint:
    """Convert galactic coordinates to a J2000 equatorial point."""
    _require(point, GalacticPoint, 'galactic_to_equatorial')
    ra, dec = _angles(_EQUATORIAL_TO_GALACTIC.T @ _unit_vector(point.longitude, point.latitude))
    return EquatorialPoint(ra, dec)


def ecliptic_to_galactic(point: EclipticPoint) -> GalacticPoint:
    """Convert a J2000 ecliptic point to galactic coordinates (fixed rotation)."""
    _require(point, EclipticPoint, 'ecliptic_to_galactic')
    lon, lat = _angles(_ECLIPTIC_TO_GALACTIC @ _unit_vector(point.longitude, point.latitude))
    return GalacticPoint(lon, lat)


def galactic_to_ecliptic(point: GalacticPoint) -> EclipticPoint:
    """Convert galactic coordinates to a J2000 ecliptic point."""
    _require(point, GalacticPoint, 'galactic_to_ecliptic')
    lon, lat = _angles(_ECLIPTIC_TO_GALACTIC.T @ _unit_vector(point.longitude, point.latitude))
    return EclipticPoint(lon, lat)


def spherical_to_rectangular(longitude: float, latitude: float, distance: float = 1.0) -> np.ndarray:
    """Return the rectangular vector (x, y, z) for spherical coordinates."""
    return distance * _unit_vector(longitude, latitude)


def rectangular_to_spherical(vector: np.ndarray) -> tuple[float, float, float]:
    """Return (longitude in [0, 2pi), latitude, distance) for a rectangular vector.

    Raises:
        DomainDegeneracyError: The vector has zero length.
    """
    vec = np.asarray(vector, dtype=np.float64)
    distance = float(np.linalg.norm(vec))
    if distance == 0.0:
        raise DomainDegeneracyError('Direction of a zero-length vector is undefined')
    lon, lat = _angles(vec)
    return (lon, lat, distance)


def heliocentric_to_geocentric(body: EclipticPoint, earth: EclipticPoint) -> EclipticPoint:
    """Subtract Earth's heliocentric position from a body's (Meeus 33.1).

    Parameters:
        body: Heliocentric ecliptic position of the body, with distance.
        earth: Heliocentric ecliptic position of the Earth, with distance, same frame.

    Returns:
        Geocentric EclipticPoint with the geocentric distance.

    Raises:
        InvalidInputError: Either point has no distance.
        DomainDegeneracyError: The body coincides with the Earth.
    """
    _require(body, EclipticPoint, 'heliocentric_to_geocentric')
    _require(earth, EclipticPoint, 'heliocentric_to_geocentric')
    if body.distance is None or earth.distance is None:
        raise InvalidInputError('heliocentric_to_geocentric requires distances on both points')
    vec = spherical_to_rectangular(body.longitude, body.latitude, body.distance) - (
        spherical_to_rectangular(earth.longitude, earth.latitude, earth.distance)
    )
    try:
        lon, lat, distance = rectangular_to_spherical(vec)
    except DomainDegeneracyError:
        logger.error('Body at the position of the Earth; geocentric direction undefined')
        raise
    return EclipticPoint(lon, lat, distance)


def _lon_lat(point: object) -> tuple[float, float]:
    if isinstance(point, EquatorialPoint):
        return (point.right_ascension, point.declination)
    if isinstance(point, HorizontalPoint):
        return (point.azimuth, point.altitude)
    if isinstance(point, (EclipticPoint, GalacticPoint)):
        return (point.longitude, point.latitude)
    raise TypeError(f'Not a celestial point: {type(point).__name__}')


def angular_separation(
    a: EclipticPoint | EquatorialPoint | HorizontalPoint | GalacticPoint,
    b: EclipticPoint | EquatorialPoint | HorizontalPoint | GalacticPoint,
) -> float:
    """Angular distance between two points of the same frame, radians in [0, pi].

    Raises:
        TypeError: The points are in different frames.
    """
    if type(a) is not type(b):
        raise TypeError(
            f'angular_separation needs points of one frame, got '
            f'{type(a).__name__} and {type(b).__name__}'
        )
    lon1, lat1 = _lon_lat(a)
    lon2, lat2 = _lon_lat(b)
    return angle_utils.angular_separation(lon1, lat1, lon2, lat2)


def observer_geocentric_terms(observer: GeographicLocation) -> tuple[float, float]:
    """Return (rho sin phi', rho cos phi') for an observer (Meeus chapter 11).

    rho is the geocentric distance in Earth equatorial radii and phi' the
    geocentric latitude, both for the IAU 1976 ellipsoid.
    """
    _require(observer, GeographicLocation, 'observer_geocentric_terms')
    u = math.atan(EARTH_POLAR_AXIS_RATIO * math.tan(observer.latitude))
    height = observer.height / (EARTH_EQUATORIAL_RADIUS_KM * 1000.0)
    return (
        EARTH_POLAR_AXIS_RATIO * math.sin(u) + height * math.sin(observer.latitude),
        math.cos(u) + height * math.cos(observer.latitude),
    )


def equatorial_horizontal_parallax(distance: float) -> float:
    """Equatorial horizontal parallax (radians) of a body at a distance in AU.

    Raises:
        InvalidInputError: distance is not positive.
        DomainDegeneracyError: The body is inside the Earth's equatorial radius.
    """
    if not distance > 0.0:
        raise InvalidInputError(f'Distance must be positive, got {distance!r}')
    ratio = EARTH_EQUATORIAL_RADIUS_KM / (distance * AU_KM)
    if ratio >= 1.0:
        raise DomainDegeneracyError(f'Distance {distance!r} AU is inside the Earth')
    return math.asin(ratio)


def topocentric_equatorial(
    point: EquatorialPoint, observer: GeographicLocation, sidereal_time: float
) -> EquatorialPoint:
    """Correct a geocentric place for the observer's position on the Earth.

    The observer's geocentric vector, at local sidereal time sidereal_time +
    longitude, is subtracted from the body's; this is the rigorous form of
    Meeus 40.2 and 40.3.

    Parameters:
        point: Geocentric right ascension and declination with distance (AU).
        observer: Observer latitude, east longitude and height.
        sidereal_time: Greenwich sidereal time (radians).

    Returns:
        Topocentric EquatorialPoint with the distance from the observer (AU).

    Raises:
        InvalidInputError: point has no distance.
    """
    _require(point, EquatorialPoint, 'topocentric_equatorial')
    if point.distance is None:
        raise InvalidInputError('topocentric_equatorial requires a geocentric distance')
    rho_sin, rho_cos = observer_geocentric_terms(observer)
    local_sidereal = sidereal_time + observer.longitude
    radius_au = EARTH_EQUATORIAL_RADIUS_KM / AU_KM
    site = radius_au * np.array(
        [rho_cos * math.cos(local_sidereal), rho_cos * math.sin(local_sidereal), rho_sin],
        dtype=np.float64,
    )
    body = spherical_to_rectangular(point.right_ascension, point.declination, point.distance)
    ra, dec, distance = rectangular_to_spherical(body - site)
    return EquatorialPoint(ra, dec, distance)
