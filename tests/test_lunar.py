"""Tests for the geocentric position of the Moon."""

from __future__ import annotations

import math

import pytest

from ephemeris_core import lunar
from ephemeris_core.constants import AU_KM
from ephemeris_core.coords import EclipticPoint, equatorial_horizontal_parallax
from ephemeris_core.planets.moon import MOON_LATITUDE_TERMS, MOON_LONGITUDE_DISTANCE_TERMS

# 1992 April 12, 0h TD
JDE_MOON = 2448724.5


def test_lunar_arguments_meeus() -> None:
    """L' = 134.290182, D = 113.842304, M = 97.643514, M' = 5.150833, F = 219.889721."""
    args = lunar.lunar_arguments(JDE_MOON)
    expected = (134.290182, 113.842304, 97.643514, 5.150833, 219.889721)
    for value, degrees in zip(args, expected):
        assert math.degrees(value) == pytest.approx(degrees, abs=1e-6)


def test_moon_geocentric_position_meeus() -> None:
    """lambda = 133.162655, beta = -3.229126, Delta = 368409.7 km."""
    moon = lunar.moon_geocentric_position(JDE_MOON)
    assert isinstance(moon, EclipticPoint)
    assert math.degrees(moon.longitude) == pytest.approx(133.162655, abs=1e-5)
    assert math.degrees(moon.latitude) == pytest.approx(-3.229126, abs=1e-5)
    assert moon.distance * AU_KM == pytest.approx(368409.7, abs=0.5)


def test_moon_parallax_meeus() -> None:
    """The horizontal parallax at that distance is 0.991990 degrees."""
    moon = lunar.moon_geocentric_position(JDE_MOON)
    parallax = equatorial_horizontal_parallax(moon.distance)
    assert math.degrees(parallax) == pytest.approx(0.991990, abs=1e-5)


def test_moon_distance_stays_between_perigee_and_apogee() -> None:
    for day in range(0, 60, 3):
        moon = lunar.moon_geocentric_position(JDE_MOON + day)
        assert 356000.0 < moon.distance * AU_KM < 407000.0
        assert abs(math.degrees(moon.latitude)) < 5.4


def test_term_tables() -> None:
    """Both tables list 60 periodic terms led by the largest ones."""
    assert len(MOON_LONGITUDE_DISTANCE_TERMS) == 60
    assert len(MOON_LATITUDE_TERMS) == 60
    assert MOON_LONGITUDE_DISTANCE_TERMS[0] == (0, 0, 1, 0, 6288774, -20905355)
    assert MOON_LATITUDE_TERMS[0] == (0, 0, 0, 1, 5128122)
