"""Tests for annual aberration and the Sun's aberration."""

from __future__ import annotations

import math

import pytest

from ephemeris_core import aberration
from ephemeris_core.coords import (
    EclipticPoint,
    EquatorialPoint,
    ecliptic_to_equatorial,
    equatorial_to_ecliptic,
)

ARCSEC = math.radians(1.0 / 3600.0)

# theta Persei, 2028 November 13.19 TD
JDE_2028 = 2462088.69
THETA_PERSEI = EquatorialPoint(math.radians(41.5472), math.radians(49.3485))
SUN_2028 = math.radians(231.328)
OBLIQUITY_2028 = math.radians(23.436)


def test_earth_orbit_elements() -> None:
    """e = 0.01669649 and pi = 103.434 degrees in 2028."""
    assert aberration.earth_orbit_eccentricity(JDE_2028) == pytest.approx(0.01669649, abs=1e-8)
    assert math.degrees(aberration.earth_perihelion_longitude(JDE_2028)) == pytest.approx(
        103.434, abs=1e-3
    )


def test_equatorial_aberration_meeus() -> None:
    """+30.045" in right ascension and +6.697" in declination."""
    dra, ddec = aberration.annual_aberration_equatorial(
        THETA_PERSEI, JDE_2028, OBLIQUITY_2028, SUN_2028
    )
    assert dra / ARCSEC == pytest.approx(30.045, abs=0.01)
    assert ddec / ARCSEC == pytest.approx(6.697, abs=0.01)


def test_ecliptic_and_equatorial_forms_agree() -> None:
    """Both forms move the star to the same place."""
    ecl = equatorial_to_ecliptic(THETA_PERSEI, OBLIQUITY_2028)
    dlon, dlat = aberration.annual_aberration_ecliptic(ecl, JDE_2028, SUN_2028)
    moved = ecliptic_to_equatorial(
        EclipticPoint(ecl.longitude + dlon, ecl.latitude + dlat), OBLIQUITY_2028
    )
    dra, ddec = aberration.annual_aberration_equatorial(
        THETA_PERSEI, JDE_2028, OBLIQUITY_2028, SUN_2028
    )
    assert (moved.right_ascension - THETA_PERSEI.right_ascension) / ARCSEC == pytest.approx(
        dra / ARCSEC, abs=0.01
    )
    assert (moved.declination - THETA_PERSEI.declination) / ARCSEC == pytest.approx(
        ddec / ARCSEC, abs=0.01
    )


def test_aberration_bounded_by_constant() -> None:
    """On the ecliptic the displacement never exceeds kappa (1 + e)."""
    for lon_deg in range(0, 360, 30):
        point = EclipticPoint(math.radians(lon_deg), 0.0)
        dlon, dlat = aberration.annual_aberration_ecliptic(point, 2451545.0)
        assert abs(dlon) / ARCSEC < 20.49552 * 1.02
        assert dlat == pytest.approx(0.0, abs=1e-15)


def test_ecliptic_pole_has_no_longitude_correction() -> None:
    """At the ecliptic pole the longitude correction is reported as 0."""
    dlon, dlat = aberration.annual_aberration_ecliptic(
        EclipticPoint(0.0, 0.5 * math.pi), JDE_2028, SUN_2028
    )
    assert dlon == 0.0
    assert abs(dlat) / ARCSEC < 21.0


def test_celestial_pole_has_no_ra_correction() -> None:
    """At the celestial pole the RA correction is reported as 0."""
    dra, ddec = aberration.annual_aberration_equatorial(
        EquatorialPoint(0.0, 0.5 * math.pi), JDE_2028, OBLIQUITY_2028, SUN_2028
    )
    assert dra == 0.0
    assert math.isfinite(ddec)


def test_sun_aberration() -> None:
    """-20.4898" divided by the radius vector."""
    assert aberration.sun_aberration(1.0) / ARCSEC == pytest.approx(-20.4898)
    assert aberration.sun_aberration(0.99760775) / ARCSEC == pytest.approx(-20.539, abs=1e-3)


def test_type_checks() -> None:
    """Each form accepts only its own frame."""
    with pytest.raises(TypeError):
        aberration.annual_aberration_ecliptic(THETA_PERSEI, JDE_2028)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        aberration.annual_aberration_equatorial(
            EclipticPoint(0.0, 0.0), JDE_2028, OBLIQUITY_2028  # type: ignore[arg-type]
        )
