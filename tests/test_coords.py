"""Tests for frame-tagged points and the rotations between frames."""

from __future__ import annotations

import dataclasses
import math

import numpy as np
import pytest

from ephemeris_core import coords
from ephemeris_core.coords import (
    EclipticPoint,
    EquatorialPoint,
    GalacticPoint,
    GeographicLocation,
    HorizontalPoint,
)
from ephemeris_core.errors import DomainDegeneracyError, InvalidInputError

POLLUX = EquatorialPoint(math.radians(116.328942), math.radians(28.026183))
OBLIQUITY_J2000 = math.radians(23.4392911)


def test_equatorial_to_ecliptic_meeus() -> None:
    """Pollux: lambda = 113.215630, beta = 6.684170 degrees."""
    ecl = coords.equatorial_to_ecliptic(POLLUX, OBLIQUITY_J2000)
    assert math.degrees(ecl.longitude) == pytest.approx(113.215630, abs=1e-6)
    assert math.degrees(ecl.latitude) == pytest.approx(6.684170, abs=1e-6)


def test_ecliptic_equatorial_round_trip() -> None:
    """The two rotations are inverse; distance passes through."""
    point = EclipticPoint(math.radians(300.0), math.radians(-12.0), 1.7)
    eq = coords.ecliptic_to_equatorial(point, OBLIQUITY_J2000)
    back = coords.equatorial_to_ecliptic(eq, OBLIQUITY_J2000)
    assert back.longitude == pytest.approx(point.longitude, abs=1e-12)
    assert back.latitude == pytest.approx(point.latitude, abs=1e-12)
    assert back.distance == 1.7


def test_ecliptic_pole_maps_into_equatorial() -> None:
    """The ecliptic pole is at RA 270 degrees, Dec 90 - epsilon."""
    eq = coords.ecliptic_to_equatorial(EclipticPoint(0.0, 0.5 * math.pi), OBLIQUITY_J2000)
    assert math.degrees(eq.right_ascension) == pytest.approx(270.0)
    assert eq.declination == pytest.approx(0.5 * math.pi - OBLIQUITY_J2000)


def test_celestial_pole_reports_zero_right_ascension() -> None:
    """At a pole the longitude-like angle is 0."""
    eq = coords.ecliptic_to_equatorial(
        EclipticPoint(math.radians(90.0), 0.5 * math.pi - OBLIQUITY_J2000), OBLIQUITY_J2000
    )
    assert eq.declination == pytest.approx(0.5 * math.pi)
    assert eq.right_ascension == 0.0


def test_equatorial_to_horizontal_meeus() -> None:
    """H = 64.352133, delta = -6.719892, phi = 38d55'17": A = 248.0337 from north, h = 15.1249."""
    observer = GeographicLocation(math.radians(38.0 + 55.0 / 60.0 + 17.0 / 3600.0), 0.0)
    point = EquatorialPoint(0.0, math.radians(-6.719892))
    horiz = coords.equatorial_to_horizontal(point, observer, math.radians(64.352133))
    assert math.degrees(horiz.azimuth) == pytest.approx(248.0337, abs=1e-4)
    assert math.degrees(horiz.altitude) == pytest.approx(15.1249, abs=1e-4)


def test_hour_angle_uses_east_longitude() -> None:
    """H = sidereal time + east longitude - right ascension."""
    observer = GeographicLocation(0.5, math.radians(-77.0))
    h = coords.hour_angle(math.radians(10.0), observer, math.radians(100.0))
    assert math.degrees(h) == pytest.approx(13.0)


def test_horizontal_round_trip() -> None:
    """horizontal_to_equatorial undoes equatorial_to_horizontal."""
    observer = GeographicLocation(math.radians(-33.9), math.radians(18.4))
    point = EquatorialPoint(math.radians(201.3), math.radians(-11.2))
    sidereal = math.radians(150.0)
    horiz = coords.equatorial_to_horizontal(point, observer, sidereal)
    back = coords.horizontal_to_equatorial(horiz, observer, sidereal)
    assert back.right_ascension == pytest.approx(point.right_ascension, abs=1e-12)
    assert back.declination == pytest.approx(point.declination, abs=1e-12)


def test_zenith() -> None:
    """An object on the meridian at dec = latitude is at the zenith with azimuth 0."""
    observer = GeographicLocation(math.radians(45.0), 0.0)
    horiz = coords.equatorial_to_horizontal(
        EquatorialPoint(1.0, math.radians(45.0)), observer, 1.0
    )
    assert horiz.altitude == pytest.approx(0.5 * math.pi)
    assert horiz.azimuth == 0.0


def test_meridian_south_azimuth() -> None:
    """On the meridian south of the zenith the azimuth is 180 degrees."""
    observer = GeographicLocation(math.radians(45.0), 0.0)
    horiz = coords.equatorial_to_horizontal(EquatorialPoint(1.0, 0.0), observer, 1.0)
    assert math.degrees(horiz.azimuth) == pytest.approx(180.0)
    assert math.degrees(horiz.altitude) == pytest.approx(45.0)


def test_galactic_center() -> None:
    """l = 0, b = 0 is at RA 266.405, Dec -28.936."""
    eq = coords.galactic_to_equatorial(GalacticPoint(0.0, 0.0))
    assert math.degrees(eq.right_ascension) == pytest.approx(266.405, abs=0.01)
    assert math.degrees(eq.declination) == pytest.approx(-28.936, abs=0.01)


def test_galactic_pole_and_ncp() -> None:
    """The galactic pole and the celestial pole land where the constants put them."""
    pole = coords.galactic_to_equatorial(GalacticPoint(0.0, 0.5 * math.pi))
    assert math.degrees(pole.right_ascension) == pytest.approx(192.85948, abs=1e-6)
    assert math.degrees(pole.declination) == pytest.approx(27.12825, abs=1e-6)
    ncp = coords.equatorial_to_galactic(EquatorialPoint(0.0, 0.5 * math.pi))
    assert math.degrees(ncp.longitude) == pytest.approx(122.93192, abs=1e-6)
    assert math.degrees(ncp.latitude) == pytest.approx(27.12825, abs=1e-6)


def test_ecliptic_galactic_matches_equatorial_path() -> None:
    """The fixed ecliptic-galactic rotation equals going through J2000 equatorial."""
    point = EclipticPoint(math.radians(75.0), math.radians(20.0))
    direct = coords.ecliptic_to_galactic(point)
    via = coords.equatorial_to_galactic(coords.ecliptic_to_equatorial(point, OBLIQUITY_J2000))
    assert direct.longitude == pytest.approx(via.longitude, abs=1e-9)
    assert direct.latitude == pytest.approx(via.latitude, abs=1e-9)
    back = coords.galactic_to_ecliptic(direct)
    assert back.longitude == pytest.approx(point.longitude, abs=1e-12)
    assert back.latitude == pytest.approx(point.latitude, abs=1e-12)


def test_rotation_matrix() -> None:
    """A quarter turn about z carries x onto y."""
    vec = coords.rotation_matrix(2, 0.5 * math.pi) @ np.array([1.0, 0.0, 0.0])
    assert np.allclose(vec, [0.0, 1.0, 0.0])


def test_spherical_rectangular_round_trip() -> None:
    """Longitude comes back in [0, 2pi)."""
    vec = coords.spherical_to_rectangular(-0.5, 0.3, 2.0)
    lon, lat, dist = coords.rectangular_to_spherical(vec)
    assert lon == pytest.approx(2.0 * math.pi - 0.5)
    assert lat == pytest.approx(0.3)
    assert dist == pytest.approx(2.0)


def test_zero_vector_is_degenerate() -> None:
    """A zero-length vector has no direction."""
    with pytest.raises(DomainDegeneracyError):
        coords.rectangular_to_spherical(np.zeros(3))


def test_heliocentric_to_geocentric() -> None:
    """Subtracting the Earth's position gives the geocentric direction and distance."""
    body = EclipticPoint(0.0, 0.0, 5.0)
    earth = EclipticPoint(0.5 * math.pi, 0.0, 1.0)
    geo = coords.heliocentric_to_geocentric(body, earth)
    assert math.degrees(geo.longitude) == pytest.approx(360.0 - math.degrees(math.atan2(1.0, 5.0)))
    assert geo.latitude == pytest.approx(0.0, abs=1e-15)
    assert geo.distance == pytest.approx(math.sqrt(26.0))


def test_heliocentric_to_geocentric_errors() -> None:
    """Missing distances are invalid; a body at the Earth is degenerate."""
    with pytest.raises(InvalidInputError):
        coords.heliocentric_to_geocentric(EclipticPoint(0.0, 0.0), EclipticPoint(0.0, 0.0, 1.0))
    with pytest.raises(DomainDegeneracyError):
        coords.heliocentric_to_geocentric(
            EclipticPoint(1.0, 0.1, 1.0), EclipticPoint(1.0, 0.1, 1.0)
        )


def test_angular_separation_same_frame_only() -> None:
    """Points in different frames cannot be compared."""
    a = EquatorialPoint(0.0, 0.0)
    b = EquatorialPoint(0.5 * math.pi, 0.0)
    assert coords.angular_separation(a, b) == pytest.approx(0.5 * math.pi)
    with pytest.raises(TypeError):
        coords.angular_separation(a, EclipticPoint(0.0, 0.0))  # type: ignore[arg-type]


def test_transforms_check_frame() -> None:
    """Passing a point of the wrong frame raises TypeError."""
    with pytest.raises(TypeError):
        coords.ecliptic_to_equatorial(POLLUX, OBLIQUITY_J2000)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        coords.galactic_to_equatorial(HorizontalPoint(0.0, 0.0))  # type: ignore[arg-type]


def test_points_are_frozen() -> None:
    """Points are immutable values."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        POLLUX.declination = 0.0  # type: ignore[misc]


PALOMAR = GeographicLocation(
    math.radians(33.0 + 21.0 / 60.0 + 22.0 / 3600.0), math.radians(-116.8625), 1706.0
)


def test_observer_geocentric_terms_meeus() -> None:
    """Palomar: rho sin phi' = 0.546861, rho cos phi' = 0.836339."""
    rho_sin, rho_cos = coords.observer_geocentric_terms(PALOMAR)
    assert rho_sin == pytest.approx(0.546861, abs=1e-6)
    assert rho_cos == pytest.approx(0.836339, abs=1e-6)


def test_observer_geocentric_terms_at_pole_and_equator() -> None:
    rho_sin, rho_cos = coords.observer_geocentric_terms(GeographicLocation(0.0, 0.0))
    assert (rho_sin, rho_cos) == pytest.approx((0.0, 1.0), abs=1e-15)
    rho_sin, rho_cos = coords.observer_geocentric_terms(GeographicLocation(math.pi / 2.0, 0.0))
    assert rho_sin == pytest.approx(0.99664719)
    assert rho_cos == pytest.approx(0.0, abs=1e-15)


def test_equatorial_horizontal_parallax() -> None:
    """8.794" at 1 AU and 23.592" for Mars at 0.37276 AU."""
    arcsec = math.radians(1.0 / 3600.0)
    assert coords.equatorial_horizontal_parallax(1.0) / arcsec == pytest.approx(8.794, abs=1e-3)
    assert coords.equatorial_horizontal_parallax(0.37276) / arcsec == pytest.approx(
        23.592, abs=1e-3
    )


@pytest.mark.parametrize(
    ('distance', 'error'),
    [
        (0.0, InvalidInputError),
        (-1.0, InvalidInputError),
        (1.0e-5, DomainDegeneracyError),
    ],
)
def test_equatorial_horizontal_parallax_errors(distance: float, error: type) -> None:
    with pytest.raises(error):
        coords.equatorial_horizontal_parallax(distance)


def test_topocentric_equatorial_meeus() -> None:
    """Mars from Palomar, 2003 August 28 3h17m UT: RA 22h38m08.54s, Dec -15d46'30.0"."""
    mars = EquatorialPoint(math.radians(339.530208), math.radians(-15.771083), 0.37276)
    sidereal_time = math.radians(25.1875)
    topo = coords.topocentric_equatorial(mars, PALOMAR, sidereal_time)
    assert math.degrees(topo.right_ascension) == pytest.approx(339.535583, abs=1e-4)
    assert math.degrees(topo.declination) == pytest.approx(-15.775, abs=1e-4)
    assert topo.distance < mars.distance


def test_topocentric_equatorial_needs_distance() -> None:
    with pytest.raises(InvalidInputError):
        coords.topocentric_equatorial(POLLUX, PALOMAR, 0.0)
    with pytest.raises(TypeError):
        coords.topocentric_equatorial(EclipticPoint(0.0, 0.0, 1.0), PALOMAR, 0.0)
