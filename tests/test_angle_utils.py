"""Tests for angle conversion, reduction, parsing and formatting."""

from __future__ import annotations

import math

import pytest

from ephemeris_core import angle_utils
from ephemeris_core.errors import InvalidInputError


def test_deg_from_dms_sign_on_first_nonzero_field() -> None:
    """A negative minutes field with zero degrees gives a negative angle."""
    assert angle_utils.deg_from_dms(0, -30, 0.0) == pytest.approx(-0.5)
    assert angle_utils.deg_from_dms(-23, 26, 21.448) == pytest.approx(-23.439291111)


def test_dms_round_trip() -> None:
    """dms_from_deg puts the sign on the leading component."""
    deg, minutes, seconds = angle_utils.dms_from_deg(-0.25)
    assert (deg, minutes) == (0, -15)
    assert seconds == pytest.approx(0.0, abs=1e-9)
    assert angle_utils.deg_from_dms(*angle_utils.dms_from_deg(123.456789)) == pytest.approx(
        123.456789
    )


def test_hms_conversion() -> None:
    """7h45m18.946s of right ascension is 116.328942 degrees."""
    assert angle_utils.deg_from_hms(7, 45, 18.946) == pytest.approx(116.328942, abs=1e-6)
    hours, minutes, seconds = angle_utils.hms_from_deg(-15.0)
    assert (hours, minutes) == (23, 0)
    assert seconds == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [(-1.0, 359.0), (720.0, 0.0), (-1e-18, 0.0), (359.5, 359.5)],
)
def test_limit_to_360(value: float, expected: float) -> None:
    """Results always lie in [0, 360)."""
    result = angle_utils.limit_to_360(value)
    assert result == pytest.approx(expected)
    assert 0.0 <= result < 360.0


def test_limit_to_pm_pi() -> None:
    """pi maps to -pi; 3pi/2 maps to -pi/2."""
    assert angle_utils.limit_to_pm_pi(math.pi) == pytest.approx(-math.pi)
    assert angle_utils.limit_to_pm_pi(1.5 * math.pi) == pytest.approx(-0.5 * math.pi)
    assert angle_utils.limit_to_two_pi(-0.5 * math.pi) == pytest.approx(1.5 * math.pi)


def test_angular_separation() -> None:
    """Arcturus and Spica are 32.7930 degrees apart."""
    sep = angle_utils.angular_separation(
        math.radians(213.9154), math.radians(19.1825),
        math.radians(201.2983), math.radians(-11.1614),
    )
    assert math.degrees(sep) == pytest.approx(32.7930, abs=1e-4)


def test_angular_separation_antipodal() -> None:
    """Opposite points are pi apart."""
    assert angle_utils.angular_separation(0.0, 0.0, math.pi, 0.0) == pytest.approx(math.pi)


@pytest.mark.parametrize(
    ('string', 'expected'),
    [('12 30 45', 12.5125), ('-5:30', -5.5), ('-0 30', -0.5), ('  7 ', 7.0)],
)
def test_parse_angle(string: str, expected: float) -> None:
    """One to three fields, leading minus applies to the whole angle."""
    assert angle_utils.parse_angle(string) == pytest.approx(expected)


@pytest.mark.parametrize('string', ['', '1 2 3 4', '1 -2', 'abc'])
def test_parse_angle_rejects(string: str) -> None:
    """Malformed strings give None."""
    assert angle_utils.parse_angle(string) is None


def test_dms_string() -> None:
    """Degrees keep their sign, even with zero whole degrees."""
    assert angle_utils.dms_string(-0.5) == '-0d30m00.000s'
    assert angle_utils.dms_string(angle_utils.deg_from_dms(-23, 26, 21.448)) == '-23d26m21.448s'
    assert angle_utils.dms_string(1.0, 'dms', 0) == '1d00m00s'


def test_dms_string_hours() -> None:
    """Right ascension is written in hours in [0h, 24h)."""
    assert angle_utils.dms_string(187.6875, 'hms') == '12h30m45.000s'
    assert angle_utils.dms_string(116.328942, 'hms', 2) == '07h45m18.95s'
    assert angle_utils.dms_string(-15.0, 'hms') == '23h00m00.000s'


def test_dms_string_rounding_carries() -> None:
    """Seconds that round up to 60 carry into the next minute, hour or day."""
    assert angle_utils.dms_string(12.516666666666667) == '12d31m00.000s'
    assert angle_utils.dms_string(29.99999999) == '30d00m00.000s'
    assert angle_utils.dms_string(359.99999999, 'hms') == '00h00m00.000s'


def test_dms_string_rejects_unknown_style() -> None:
    """Only 'dms' and 'hms' are accepted."""
    with pytest.raises(InvalidInputError):
        angle_utils.dms_string(1.0, 'deg')
    with pytest.raises(InvalidInputError):
        angle_utils.dms_string(1.0, 'dms', -1)
