"""Precession between arbitrary epochs (Meeus chapter 21, IAU 1976 angles) and
stellar proper motion.

The two precession forms compose three rotations and read the result back from the rotated
unit vector, so stars at or near the poles are handled without special cases.
Epochs are Julian Ephemeris Days; distances pass through unchanged.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from ephemeris_core.angle_utils import limit_to_two_pi
from ephemeris_core.constants import (
    ARCSEC_TO_RAD,
    DAYS_PER_JULIAN_CENTURY,
    DAYS_PER_JULIAN_YEAR,
    J2000,
)
from ephemeris_core.coords import (
    EclipticPoint,
    EquatorialPoint,
    rectangular_to_spherical,
    rotation_matrix,
    spherical_to_rectangular,
)

logger = logging.getLogger(__name__)


def _centuries(from_epoch: float, to_epoch: float) -> tuple[float, float]:
    """T from J2000 to the starting epoch, t from starting to final epoch (centuries)."""
    return (
        (from_epoch - J2000) / DAYS_PER_JULIAN_CENTURY,
        (to_epoch - from_epoch) / DAYS_PER_JULIAN_CENTURY,
    )


def equatorial_precession_angles(from_epoch: float, to_epoch: float) -> tuple[float, float, float]:
    """Return (zeta, z, theta) in radians (Meeus 21.3)."""
    big_t, t = _centuries(from_epoch, to_epoch)
    common = 2306.2181 + 1.39656 * big_t - 0.000139 * big_t * big_t
    zeta = (common + ((0.30188 - 0.000344 * big_t) + 0.017998 * t) * t) * t
    z = (common + ((1.09468 + 0.000066 * big_t) + 0.018203 * t) * t) * t
    theta = (
        (2004.3109 - 0.85330 * big_t - 0.000217 * big_t * big_t)
        - ((0.42665 + 0.000217 * big_t) + 0.041833 * t) * t
    ) * t
    return (zeta * ARCSEC_TO_RAD, z * ARCSEC_TO_RAD, theta * ARCSEC_TO_RAD)


def ecliptic_precession_angles(from_epoch: float, to_epoch: float) -> tuple[float, float, float]:
    """Return (eta, Pi, p) in radians (Meeus 21.5)."""
    big_t, t = _centuries(from_epoch, to_epoch)
    eta = (
        (47.0029 - 0.06603 * big_t + 0.000598 * big_t * big_t)
        + ((-0.03302 + 0.000598 * big_t) + 0.000060 * t) * t
    ) * t
    big_pi = math.radians(174.876384) + ARCSEC_TO_RAD * (
        3289.4789 * big_t
        + 0.60622 * big_t * big_t
        - (869.8089 + 0.50491 * big_t) * t
        + 0.03536 * t * t
    )
    p = (
        (5029.0966 + 2.22226 * big_t - 0.000042 * big_t * big_t)
        + ((1.11113 - 0.000042 * big_t) - 0.000006 * t) * t
    ) * t
    return (eta * ARCSEC_TO_RAD, big_pi, p * ARCSEC_TO_RAD)


def equatorial_precession_matrix(from_epoch: float, to_epoch: float) -> np.ndarray:
    """Rotation taking mean equatorial vectors of from_epoch to to_epoch."""
    zeta, z, theta = equatorial_precession_angles(from_epoch, to_epoch)
    return rotation_matrix(2, z) @ rotation_matrix(1, -theta) @ rotation_matrix(2, zeta)


def ecliptic_precession_matrix(from_epoch: float, to_epoch: float) -> np.ndarray:
    """Rotation taking mean ecliptic vectors of from_epoch to to_epoch."""
    eta, big_pi, p = ecliptic_precession_angles(from_epoch, to_epoch)
    return rotation_matrix(2, big_pi + p) @ rotation_matrix(0, -eta) @ rotation_matrix(2, -big_pi)


def precess_equatorial(
    point: EquatorialPoint, from_epoch: float, to_epoch: float
) -> EquatorialPoint:
    """Precess a mean equatorial place between epochs (Meeus 21.4, rigorous method).

    Parameters:
        point: Right ascension and declination for the mean equinox of from_epoch.
        from_epoch: Starting epoch (JDE).
        to_epoch: Final epoch (JDE).

    Returns:
        EquatorialPoint for the mean equinox of to_epoch.
    """
    if not isinstance(point, EquatorialPoint):
        raise TypeError(f'precess_equatorial expects EquatorialPoint, got {type(point).__name__}')
    vec = equatorial_precession_matrix(from_epoch, to_epoch) @ spherical_to_rectangular(
        point.right_ascension, point.declination
    )
    ra, dec, _ = rectangular_to_spherical(vec)
    logger.debug('Precessed equatorial place from JDE %.4f to %.4f', from_epoch, to_epoch)
    return EquatorialPoint(ra, dec, point.distance)


def precess_ecliptic(point: EclipticPoint, from_epoch: float, to_epoch: float) -> EclipticPoint:
    """Precess ecliptic coordinates between epochs (Meeus 21.7).

    Parameters:
        point: Longitude and latitude for the ecliptic and equinox of from_epoch.
        from_epoch: Starting epoch (JDE).
        to_epoch: Final epoch (JDE).

    Returns:
        EclipticPoint for the ecliptic and equinox of to_epoch.
    """
    if not isinstance(point, EclipticPoint):
        raise TypeError(f'precess_ecliptic expects EclipticPoint, got {type(point).__name__}')
    vec = ecliptic_precession_matrix(from_epoch, to_epoch) @ spherical_to_rectangular(
        point.longitude, point.latitude
    )
    lon, lat, _ = rectangular_to_spherical(vec)
    return EclipticPoint(lon, lat, point.distance)


def apply_proper_motion(
    point: EquatorialPoint,
    ra_rate: float,
    dec_rate: float,
    from_epoch: float,
    to_epoch: float,
) -> EquatorialPoint:
    """Move a star along its annual proper motion (Meeus 21.b, linear form).

    Parameters:
        point: Mean place at from_epoch.
        ra_rate: Proper motion in right ascension, radians of RA per Julian year
            (not multiplied by cos(declination)).
        dec_rate: Proper motion in declination, radians per Julian year.
        from_epoch: Epoch of the place (JDE).
        to_epoch: Epoch to move the star to (JDE).

    Returns:
        EquatorialPoint at to_epoch, still referred to the equinox of the input.
        A declination carried past a pole is folded back over it.
    """
    if not isinstance(point, EquatorialPoint):
        raise TypeError(f'apply_proper_motion expects EquatorialPoint, got {type(point).__name__}')
    years = (to_epoch - from_epoch) / DAYS_PER_JULIAN_YEAR
    ra = point.right_ascension + ra_rate * years
    dec = point.declination + dec_rate * years
    if abs(dec) > 0.5 * math.pi:
        dec = math.copysign(math.pi, dec) - dec
        ra += math.pi
    return EquatorialPoint(limit_to_two_pi(ra), dec, point.distance)
