"""Nutation (IAU 1980) and the obliquity of the ecliptic.

The 63-term nutation series and the fundamental arguments follow Meeus,
*Astronomical Algorithms*, chapter 22; coefficients are in units of 0.0001".
"""

from __future__ import annotations

import enum
import logging
import math
from typing import NamedTuple

from ephemeris_core import config
from ephemeris_core.constants import ARCSEC_TO_RAD
from ephemeris_core.coords import (
    EclipticPoint,
    EquatorialPoint,
    ecliptic_to_equatorial,
    equatorial_to_ecliptic,
)
from ephemeris_core.errors import InvalidInputError
from ephemeris_core.time_utils import julian_century, polynomial

logger = logging.getLogger(__name__)


class NutationTerm(NamedTuple):
    """One row of the nutation series: argument multipliers and coefficients."""

    d: int
    m: int
    mprime: int
    f: int
    omega: int
    psi_sin: float
    psi_sin_t: float
    eps_cos: float
    eps_cos_t: float


# Multipliers of D, M, M', F, Omega; then sine (psi) and cosine (epsilon)
# coefficients and their rates per Julian century, units 0.0001".
_NUTATION_ROWS = (
    (0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9),
    (-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1),
    (0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5),
    (0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5),
    (0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1),
    (0, 0, 1, 0, 0, 712, 0.1, -7, 0),
    (-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6),
    (0, 0, 0, 2, 1, -386, -0.4, 200, 0),
    (0, 0, 1, 2, 2, -301, 0, 129, -0.1),
    (-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3),
    (-2, 0, 1, 0, 0, -158, 0, 0, 0),
    (-2, 0, 0, 2, 1, 129, 0.1, -70, 0),
    (0, 0, -1, 2, 2, 123, 0, -53, 0),
    (2, 0, 0, 0, 0, 63, 0, 0, 0),
    (0, 0, 1, 0, 1, 63, 0.1, -33, 0),
    (2, 0, -1, 2, 2, -59, 0, 26, 0),
    (0, 0, -1, 0, 1, -58, -0.1, 32, 0),
    (0, 0, 1, 2, 1, -51, 0, 27, 0),
    (-2, 0, 2, 0, 0, 48, 0, 0, 0),
    (0, 0, -2, 2, 1, 46, 0, -24, 0),
    (2, 0, 0, 2, 2, -38, 0, 16, 0),
    (0, 0, 2, 2, 2, -31, 0, 13, 0),
    (0, 0, 2, 0, 0, 29, 0, 0, 0),
    (-2, 0, 1, 2, 2, 29, 0, -12, 0),
    (0, 0, 0, 2, 0, 26, 0, 0, 0),
    (-2, 0, 0, 2, 0, -22, 0, 0, 0),
    (0, 0, -1, 2, 1, 21, 0, -10, 0),
    (0, 2, 0, 0, 0, 17, -0.1, 0, 0),
    (2, 0, -1, 0, 1, 16, 0, -8, 0),
    (-2, 2, 0, 2, 2, -16, 0.1, 7, 0),
    (0, 1, 0, 0, 1, -15, 0, 9, 0),
    (-2, 0, 1, 0, 1, -13, 0, 7, 0),
    (0, -1, 0, 0, 1, -12, 0, 6, 0),
    (0, 0, 2, -2, 0, 11, 0, 0, 0),
    (2, 0, -1, 2, 1, -10, 0, 5, 0),
    (2, 0, 1, 2, 2, -8, 0, 3, 0),
    (0, 1, 0, 2, 2, 7, 0, -3, 0),
    (-2, 1, 1, 0, 0, -7, 0, 0, 0),
    (0, -1, 0, 2, 2, -7, 0, 3, 0),
    (2, 0, 0, 2, 1, -7, 0, 3, 0),
    (2, 0, 1, 0, 0, 6, 0, 0, 0),
    (-2, 0, 2, 2, 2, 6, 0, -3, 0),
    (-2, 0, 1, 2, 1, 6, 0, -3, 0),
    (2, 0, -2, 0, 1, -6, 0, 3, 0),
    (2, 0, 0, 0, 1, -6, 0, 3, 0),
    (0, -1, 1, 0, 0, 5, 0, 0, 0),
    (-2, -1, 0, 2, 1, -5, 0, 3, 0),
    (-2, 0, 0, 0, 1, -5, 0, 3, 0),
    (0, 0, 2, 2, 1, -5, 0, 3, 0),
    (-2, 0, 2, 0, 1, 4, 0, 0, 0),
    (-2, 1, 0, 2, 1, 4, 0, 0, 0),
    (0, 0, 1, -2, 0, 4, 0, 0, 0),
    (-1, 0, 1, 0, 0, -4, 0, 0, 0),
    (-2, 1, 0, 0, 0, -4, 0, 0, 0),
    (1, 0, 0, 0, 0, -4, 0, 0, 0),
    (0, 0, 1, 2, 0, 3, 0, 0, 0),
    (0, 0, -2, 2, 2, -3, 0, 0, 0),
    (-1, -1, 1, 0, 0, -3, 0, 0, 0),
    (0, 1, 1, 0, 0, -3, 0, 0, 0),
    (0, -1, 1, 2, 2, -3, 0, 0, 0),
    (2, -1, -1, 2, 2, -3, 0, 0, 0),
    (0, 0, 3, 2, 2, -3, 0, 0, 0),
    (2, -1, 0, 2, 2, -3, 0, 0, 0),
)

NUTATION_TERMS: tuple[NutationTerm, ...] = tuple(NutationTerm(*row) for row in _NUTATION_ROWS)

_COEFF_UNIT = 1.0e-4 * ARCSEC_TO_RAD


class ObliquityFormula(enum.Enum):
    """Mean obliquity polynomial: IAU 1976 (Lieske) or Laskar (1986)."""

    IAU = 'IAU'
    LASKAR = 'LASKAR'


def fundamental_arguments(t: float) -> tuple[float, float, float, float, float]:
    """Return D, M, M', F, Omega (radians) for T Julian centuries from J2000.

    D is the mean elongation of the Moon from the Sun, M and M' the mean anomalies
    of the Sun and Moon, F the Moon's argument of latitude and Omega the longitude
    of the Moon's ascending node.
    """
    d = polynomial(t, (297.85036, 445267.111480, -0.0019142, 1.0 / 189474.0))
    m = polynomial(t, (357.52772, 35999.050340, -0.0001603, -1.0 / 300000.0))
    mprime = polynomial(t, (134.96298, 477198.867398, 0.0086972, 1.0 / 56250.0))
    f = polynomial(t, (93.27191, 483202.017538, -0.0036825, 1.0 / 327270.0))
    omega = polynomial(t, (125.04452, -1934.136261, 0.0020708, 1.0 / 450000.0))
    return (
        math.radians(d),
        math.radians(m),
        math.radians(mprime),
        math.radians(f),
        math.radians(omega),
    )


def nutation_in_longitude_and_obliquity(jde: float) -> tuple[float, float]:
    """Nutation in longitude and in obliquity (Meeus chapter 22).

    Parameters:
        jde: Julian Ephemeris Day (TT).

    Returns:
        (delta_psi, delta_epsilon) in radians.
    """
    t = julian_century(jde)
    d, m, mprime, f, omega = fundamental_arguments(t)
    psi_terms = []
    eps_terms = []
    for term in NUTATION_TERMS:
        arg = term.d * d + term.m * m + term.mprime * mprime + term.f * f + term.omega * omega
        psi_terms.append((term.psi_sin + term.psi_sin_t * t) * math.sin(arg))
        eps_terms.append((term.eps_cos + term.eps_cos_t * t) * math.cos(arg))
    return (math.fsum(psi_terms) * _COEFF_UNIT, math.fsum(eps_terms) * _COEFF_UNIT)


def _resolve_formula(formula: ObliquityFormula | str | None) -> ObliquityFormula:
    if formula is None:
        return ObliquityFormula(config.get_obliquity_formula_name())
    if isinstance(formula, ObliquityFormula):
        return formula
    try:
        return ObliquityFormula(str(formula).upper())
    except ValueError:
        raise InvalidInputError(f'Unknown obliquity formula {formula!r}') from None


def mean_obliquity(jde: float, formula: ObliquityFormula | str | None = None) -> float:
    """Mean obliquity of the ecliptic (radians).

    IAU is Meeus 22.2, good to about 1" over 2000 years around J2000. LASKAR is
    Meeus 22.3, good to 0.01" over 1000 years and a few arcseconds over 10000
    years; outside that span it is logged and evaluated anyway.

    Parameters:
        jde: Julian Ephemeris Day (TT).
        formula: ObliquityFormula or its name; None uses configuration (IAU).

    Returns:
        Mean obliquity in radians.
    """
    formula = _resolve_formula(formula)
    t = julian_century(jde)
    if formula is ObliquityFormula.IAU:
        arcsec = polynomial(t, (84381.448, -46.8150, -0.00059, 0.001813))
    else:
        u = t / 100.0
        if abs(u) > 1.0:
            logger.warning(
                'Laskar obliquity used %.0f years from J2000 (valid within 10000)', 100.0 * t
            )
        arcsec = polynomial(
            u,
            (84381.448, -4680.93, -1.55, 1999.25, -51.38, -249.67, -39.05, 7.12, 27.87, 5.79, 2.45),
        )
    return arcsec * ARCSEC_TO_RAD


def true_obliquity(jde: float, formula: ObliquityFormula | str | None = None) -> float:
    """Mean obliquity plus nutation in obliquity (radians)."""
    return mean_obliquity(jde, formula) + nutation_in_longitude_and_obliquity(jde)[1]


def nutation_in_equatorial_coords(
    point: EquatorialPoint, delta_psi: float, delta_epsilon: float, obliquity: float
) -> EquatorialPoint:
    """Apply nutation to a mean equatorial place.

    The point is taken to the mean ecliptic of date, shifted by delta_psi in
    longitude and returned to the equator through the true obliquity. To first
    order this is Meeus 23.1; the rotation form stays finite at the poles.

    Parameters:
        point: Mean place of date (distance passes through).
        delta_psi: Nutation in longitude (radians).
        delta_epsilon: Nutation in obliquity (radians).
        obliquity: Mean obliquity of date (radians).

    Returns:
        True EquatorialPoint of date.
    """
    if not isinstance(point, EquatorialPoint):
        raise TypeError(
            f'nutation_in_equatorial_coords expects EquatorialPoint, got {type(point).__name__}'
        )
    ecl = equatorial_to_ecliptic(point, obliquity)
    shifted = EclipticPoint(ecl.longitude + delta_psi, ecl.latitude, ecl.distance)
    return ecliptic_to_equatorial(shifted, obliquity + delta_epsilon)
