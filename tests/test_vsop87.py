"""Tests for VSOP87 series evaluation and heliocentric planet positions."""

from __future__ import annotations

import math

import pytest

from ephemeris_core import vsop87
from ephemeris_core.errors import InvalidInputError
from ephemeris_core.vsop87 import Planet


def test_evaluate_series_powers_of_tau() -> None:
    """Groups are multiplied by successive powers of tau; amplitudes are 1e-8 units."""
    series = (
        ((1.0e8, 0.0, 0.0),),
        ((2.0e8, 0.0, 0.0),),
        ((3.0e8, math.pi, 0.0),),
    )
    assert vsop87.evaluate_series(series, 0.5) == pytest.approx(1.0 + 2.0 * 0.5 - 3.0 * 0.25)


def test_evaluate_series_periodic_term() -> None:
    """A single term is A cos(B + C tau)."""
    series = (((1.0e8, 0.25, 2.0),),)
    assert vsop87.evaluate_series(series, 0.1) == pytest.approx(math.cos(0.45))


def test_earth_position() -> None:
    """Earth on 1992 October 13.0 TD."""
    pos = vsop87.heliocentric_position(Planet.EARTH, 2448908.5)
    assert math.degrees(pos.longitude) == pytest.approx(19.907372, abs=1e-4)
    assert pos.latitude == pytest.approx(-0.00000312, abs=2e-7)
    assert pos.radius_vector == pytest.approx(0.99760775, abs=1e-5)


def test_earth_at_j2000() -> None:
    """Earth at J2000 from the leading VSOP87-D terms."""
    pos = vsop87.heliocentric_position(3, 2451545.0)
    assert pos.longitude == pytest.approx(1.7519238681, abs=2e-5)
    assert pos.latitude == pytest.approx(-3.9656e-6, abs=2e-6)
    assert pos.radius_vector == pytest.approx(0.9833276819, abs=2e-5)


def test_venus_position() -> None:
    """Venus on 1992 December 20.0 TD."""
    pos = vsop87.heliocentric_position(Planet.VENUS, 2448976.5)
    assert math.degrees(pos.longitude) == pytest.approx(26.11428, abs=1e-3)
    assert math.degrees(pos.latitude) == pytest.approx(-2.62070, abs=1e-3)
    assert pos.radius_vector == pytest.approx(0.724603, abs=1e-4)


@pytest.mark.parametrize(
    ('planet', 'r_min', 'r_max', 'max_lat_deg'),
    [
        (Planet.MERCURY, 0.30, 0.47, 7.1),
        (Planet.VENUS, 0.71, 0.73, 3.5),
        (Planet.MARS, 1.38, 1.67, 2.0),
        (Planet.JUPITER, 4.9, 5.5, 1.4),
        (Planet.SATURN, 8.9, 10.2, 2.6),
        (Planet.URANUS, 18.2, 20.2, 0.9),
        (Planet.NEPTUNE, 29.6, 30.5, 1.8),
    ],
)
def test_planet_ranges(planet: Planet, r_min: float, r_max: float, max_lat_deg: float) -> None:
    """Radius vectors and latitudes stay within each orbit's bounds between 1900 and 2100."""
    for jde in (2415020.0, 2433282.5, 2451545.0, 2469807.5, 2488070.0):
        pos = vsop87.heliocentric_position(planet, jde)
        assert r_min < pos.radius_vector < r_max
        assert abs(math.degrees(pos.latitude)) < max_lat_deg
        assert 0.0 <= pos.longitude < 2.0 * math.pi


def test_mars_mean_motion() -> None:
    """Mars returns to nearly the same longitude after one sidereal period."""
    start = vsop87.heliocentric_position(Planet.MARS, 2451545.0)
    later = vsop87.heliocentric_position(Planet.MARS, 2451545.0 + 686.98)
    diff = math.remainder(later.longitude - start.longitude, 2.0 * math.pi)
    assert abs(math.degrees(diff)) < 0.5


@pytest.mark.parametrize('planet', [0, 9, -1])
def test_unknown_planet(planet: int) -> None:
    """Only Mercury through Neptune have series."""
    with pytest.raises(InvalidInputError):
        vsop87.heliocentric_position(planet, 2451545.0)


def test_vsop_to_fk5_sun_longitude() -> None:
    """FK5 correction near the ecliptic is about -0.09033 arcseconds in longitude."""
    lon = math.radians(199.907372)
    lat = math.radians(0.000179)
    fk5_lon, fk5_lat = vsop87.vsop_to_fk5(lon, lat, 2448908.5)
    assert math.degrees(fk5_lon - lon) * 3600.0 == pytest.approx(-0.09033, abs=1e-3)
    assert abs(math.degrees(fk5_lat - lat) * 3600.0) < 0.06
