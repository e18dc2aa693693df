"""Tests for nutation and the obliquity of the ecliptic."""

from __future__ import annotations

import logging
import math

import pytest

from ephemeris_core import nutation
from ephemeris_core.coords import EquatorialPoint
from ephemeris_core.errors import InvalidInputError
from ephemeris_core.nutation import ObliquityFormula

ARCSEC = math.radians(1.0 / 3600.0)

# 1987 April 10, 0h TD
JDE_1987 = 2446895.5


def test_series_has_63_terms() -> None:
    """The IAU 1980 abridged series is bundled in full."""
    assert len(nutation.NUTATION_TERMS) == 63
    assert nutation.NUTATION_TERMS[0].psi_sin == -171996


def test_fundamental_arguments() -> None:
    """D, M, M', F and Omega for 1987 April 10."""
    t = (JDE_1987 - 2451545.0) / 36525.0
    args = [math.degrees(a) % 360.0 for a in nutation.fundamental_arguments(t)]
    expected = [136.9623, 94.9792, 229.2784, 143.4079, 11.2531]
    assert args == pytest.approx(expected, abs=2e-4)


def test_nutation_meeus() -> None:
    """Delta-psi = -3.788", Delta-epsilon = +9.443"."""
    delta_psi, delta_eps = nutation.nutation_in_longitude_and_obliquity(JDE_1987)
    assert delta_psi / ARCSEC == pytest.approx(-3.788, abs=2e-3)
    assert delta_eps / ARCSEC == pytest.approx(9.443, abs=2e-3)


def test_mean_and_true_obliquity_meeus() -> None:
    """epsilon0 = 23d26'27.407", epsilon = 23d26'36.850"."""
    eps0 = nutation.mean_obliquity(JDE_1987, ObliquityFormula.IAU)
    eps = nutation.true_obliquity(JDE_1987, 'iau')
    assert math.degrees(eps0) == pytest.approx(23.0 + 26.0 / 60.0 + 27.407 / 3600.0, abs=1e-6)
    assert math.degrees(eps) == pytest.approx(23.0 + 26.0 / 60.0 + 36.850 / 3600.0, abs=1e-6)


def test_obliquity_formulas_agree_near_j2000() -> None:
    """IAU and Laskar polynomials share the J2000 value and agree within 0.1" for a century."""
    assert nutation.mean_obliquity(2451545.0, 'IAU') == pytest.approx(
        nutation.mean_obliquity(2451545.0, 'LASKAR'), abs=1e-15
    )
    for jde in (2415020.0, 2488070.0):
        diff = nutation.mean_obliquity(jde, 'IAU') - nutation.mean_obliquity(jde, 'LASKAR')
        assert abs(diff) / ARCSEC < 0.1


def test_obliquity_formula_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """None picks the configured formula."""
    jde = 2451545.0 + 3.0e6
    monkeypatch.setenv('EPHEMERIS_OBLIQUITY_FORMULA', 'LASKAR')
    assert nutation.mean_obliquity(jde) == nutation.mean_obliquity(jde, ObliquityFormula.LASKAR)
    monkeypatch.setenv('EPHEMERIS_OBLIQUITY_FORMULA', 'IAU')
    assert nutation.mean_obliquity(jde) == nutation.mean_obliquity(jde, ObliquityFormula.IAU)


def test_unknown_obliquity_formula() -> None:
    """Names other than IAU and LASKAR are rejected."""
    with pytest.raises(InvalidInputError):
        nutation.mean_obliquity(2451545.0, 'WGS84')


def test_laskar_outside_validity_warns(caplog: pytest.LogCaptureFixture) -> None:
    """More than 10000 years from J2000 the Laskar formula logs a warning."""
    with caplog.at_level(logging.WARNING, logger='ephemeris_core.nutation'):
        value = nutation.mean_obliquity(2451545.0 + 4.0e6, ObliquityFormula.LASKAR)
    assert math.isfinite(value)
    assert 'Laskar' in caplog.text


def test_nutation_in_equatorial_coords_meeus() -> None:
    """theta Persei, 2028 November 13.19 TD: +15.843" in RA and +6.218" in Dec."""
    point = EquatorialPoint(math.radians(41.5472), math.radians(49.3485))
    result = nutation.nutation_in_equatorial_coords(
        point, 14.861 * ARCSEC, 2.705 * ARCSEC, math.radians(23.436)
    )
    assert (result.right_ascension - point.right_ascension) / ARCSEC == pytest.approx(
        15.843, abs=0.01
    )
    assert (result.declination - point.declination) / ARCSEC == pytest.approx(6.218, abs=0.01)


def test_nutation_in_equatorial_coords_keeps_distance() -> None:
    """Distance passes through unchanged."""
    point = EquatorialPoint(1.0, 0.5, 2.5)
    result = nutation.nutation_in_equatorial_coords(point, 1e-5, 1e-5, 0.409)
    assert result.distance == 2.5


def test_nutation_in_equatorial_coords_at_pole() -> None:
    """The celestial pole stays finite and moves only by the nutation amplitude."""
    point = EquatorialPoint(0.0, 0.5 * math.pi)
    result = nutation.nutation_in_equatorial_coords(point, 10.0 * ARCSEC, 5.0 * ARCSEC, 0.409)
    assert math.isfinite(result.right_ascension)
    assert 0.5 * math.pi - result.declination < 20.0 * ARCSEC


def test_nutation_in_equatorial_coords_type_check() -> None:
    """Only equatorial points are accepted."""
    with pytest.raises(TypeError):
        nutation.nutation_in_equatorial_coords((1.0, 0.5), 0.0, 0.0, 0.4)  # type: ignore[arg-type]
