"""Angle conversion, range reduction, parsing and formatting."""

from __future__ import annotations

import math
import re

from ephemeris_core.constants import (
    ARCMIN_PER_DEGREE,
    ARCSEC_PER_DEGREE,
    DEGREES_PER_CIRCLE,
    DEGREES_PER_HOUR_RA,
    TWOPI,
)
from ephemeris_core.errors import InvalidInputError


def deg_from_dms(degrees: int, minutes: int, seconds: float) -> float:
    """Convert degrees, arcminutes and arcseconds to decimal degrees.

    The sign is taken from the first non-zero component, so (0, -30, 0) is -0.5°.

    Parameters:
        degrees, minutes, seconds: Sexagesimal components.

    Returns:
        Angle in degrees.
    """
    negative = degrees < 0 or (degrees == 0 and (minutes < 0 or (minutes == 0 and seconds < 0)))
    value = abs(degrees) + abs(minutes) / ARCMIN_PER_DEGREE + abs(seconds) / ARCSEC_PER_DEGREE
    return -value if negative else value


def dms_from_deg(value: float) -> tuple[int, int, float]:
    """Split decimal degrees into (degrees, arcminutes, arcseconds).

    Only the first non-zero component carries the sign.
    """
    sign = -1 if value < 0 else 1
    total = abs(value)
    deg = int(total)
    minutes = int((total - deg) * ARCMIN_PER_DEGREE)
    seconds = (total - deg - minutes / ARCMIN_PER_DEGREE) * ARCSEC_PER_DEGREE
    if deg != 0:
        return (sign * deg, minutes, seconds)
    if minutes != 0:
        return (0, sign * minutes, seconds)
    return (0, 0, sign * seconds)


def deg_from_hms(hours: int, minutes: int, seconds: float) -> float:
    """Convert hours, minutes, seconds of right ascension to degrees."""
    return DEGREES_PER_HOUR_RA * (hours + minutes / 60.0 + seconds / 3600.0)


def hms_from_deg(value: float) -> tuple[int, int, float]:
    """Convert degrees of right ascension (any range) to (hours, minutes, seconds)."""
    hours_total = limit_to_360(value) / DEGREES_PER_HOUR_RA
    hours = int(hours_total)
    minutes = int((hours_total - hours) * 60.0)
    seconds = (hours_total - hours - minutes / 60.0) * 3600.0
    return (hours, minutes, seconds)


def limit_to_360(value: float) -> float:
    """Reduce an angle in degrees to [0, 360)."""
    reduced = math.fmod(value, DEGREES_PER_CIRCLE)
    if reduced < 0.0:
        reduced += DEGREES_PER_CIRCLE
    # fmod of a tiny negative value can round back up to exactly 360.
    if reduced >= DEGREES_PER_CIRCLE:
        reduced = 0.0
    return reduced


def limit_to_two_pi(value: float) -> float:
    """Reduce an angle in radians to [0, 2pi)."""
    reduced = math.fmod(value, TWOPI)
    if reduced < 0.0:
        reduced += TWOPI
    if reduced >= TWOPI:
        reduced = 0.0
    return reduced


def limit_to_pm_pi(value: float) -> float:
    """Reduce an angle in radians to [-pi, pi)."""
    reduced = limit_to_two_pi(value)
    if reduced >= math.pi:
        reduced -= TWOPI
    return reduced


def angular_separation(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Angle between two directions given as (longitude, latitude) pairs, radians.

    Uses the Vincenty form of the great-circle formula, which stays accurate for
    both very small and nearly antipodal separations.
    """
    dlon = lon2 - lon1
    sin_lat1, cos_lat1 = math.sin(lat1), math.cos(lat1)
    sin_lat2, cos_lat2 = math.sin(lat2), math.cos(lat2)
    num1 = cos_lat2 * math.sin(dlon)
    num2 = cos_lat1 * sin_lat2 - sin_lat1 * cos_lat2 * math.cos(dlon)
    den = sin_lat1 * sin_lat2 + cos_lat1 * cos_lat2 * math.cos(dlon)
    return math.atan2(math.hypot(num1, num2), den)


def parse_angle(string: str) -> float | None:
    """Parse an angle as hours/degrees, minutes, and seconds.

    Accepts three numbers (deg/h, m, s), two (deg/h, m), or one (deg/h).
    Minutes and seconds must be non-negative. Leading minus makes result negative.
    Returned value is in the same units as the first number (hours or degrees).

    Parameters:
        string: Whitespace- or colon-separated numbers (e.g. "12 30 45", "-5:30").

    Returns:
        Angle in hours or degrees, or None on parse failure.
    """
    s = string.strip()
    if len(s) == 0:
        return None
    parts = [p for p in re.split(r'[\s:]+', s) if p]
    if len(parts) == 0 or len(parts) > 3:
        return None
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 for v in values[1:]):
        return None
    angle = abs(values[0])
    for scale, v in zip((60.0, 3600.0), values[1:]):
        angle += v / scale
    # Leading minus applies even when the first field is -0.
    if s.startswith('-'):
        angle = -angle
    return angle


def dms_string(value: float, style: str = 'dms', ndecimal: int = 3) -> str:
    """Format an angle in degrees as sexagesimal text.

    Parameters:
        value: Angle in degrees.
        style: 'dms' for signed degrees ('-23d26m21.448s'); 'hms' for right
            ascension in hours, reduced to [0h, 24h) ('07h45m18.946s').
        ndecimal: Decimal places on the seconds.

    Returns:
        Formatted string. Rounding carries into minutes and degrees/hours, so
        seconds never read 60.

    Raises:
        InvalidInputError: style is not 'dms' or 'hms', or ndecimal is negative.
    """
    if style not in ('dms', 'hms'):
        raise InvalidInputError(f"style must be 'dms' or 'hms', got {style!r}")
    if ndecimal < 0:
        raise InvalidInputError(f'ndecimal must not be negative, got {ndecimal!r}')
    scale = 10**ndecimal
    if style == 'hms':
        ticks = round(limit_to_360(value) / DEGREES_PER_HOUR_RA * 3600.0 * scale)
        sign = ''
    else:
        ticks = round(abs(value) * ARCSEC_PER_DEGREE * scale)
        sign = '-' if value < 0 and ticks > 0 else ''
    seconds, fraction = divmod(ticks, scale)
    minutes, seconds = divmod(seconds, 60)
    units, minutes = divmod(minutes, 60)
    if style == 'hms':
        units %= 24
        head = f'{units:02d}h'
    else:
        head = f'{sign}{units:d}d'
    tail = f'.{fraction:0{ndecimal}d}' if ndecimal > 0 else ''
    return f'{head}{minutes:02d}m{seconds:02d}{tail}s'
