"""Time base: calendar dates, Julian Days, Delta-T and sidereal time.

Calendar conversions follow Meeus, *Astronomical Algorithms*, chapter 7;
sidereal time follows chapter 12. Delta-T uses the Espenak & Meeus (2006)
polynomial fits. Date/time strings are parsed with rms-julian.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from dataclasses import dataclass

import julian

from ephemeris_core.angle_utils import limit_to_360
from ephemeris_core.constants import (
    DAYS_PER_JULIAN_CENTURY,
    DAYS_PER_JULIAN_MILLENNIUM,
    J2000,
    JD_MIN,
    MIN_YEAR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from ephemeris_core.errors import InvalidInputError

logger = logging.getLogger(__name__)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Julian Day at 2000-01-01 00:00 UTC (rms-julian day 0, second 0).
_JD_OF_JULIAN_DAY_ZERO = 2451544.5


class CalendarSystem(enum.Enum):
    """Calendar a date is expressed in."""

    JULIAN = 'julian'
    GREGORIAN = 'gregorian'


def is_leap_year(year: int, calendar: CalendarSystem = CalendarSystem.GREGORIAN) -> bool:
    """Return True if year is a leap year in the given calendar (astronomical numbering)."""
    if calendar is CalendarSystem.JULIAN:
        return year % 4 == 0
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int, calendar: CalendarSystem = CalendarSystem.GREGORIAN) -> int:
    """Number of days in a month.

    Raises:
        InvalidInputError: month outside 1-12.
    """
    if not 1 <= month <= 12:
        raise InvalidInputError(f'month must be 1-12, got {month}')
    if month == 2 and is_leap_year(year, calendar):
        return 29
    return _DAYS_IN_MONTH[month - 1]


@dataclass(frozen=True)
class CalendarDate:
    """A calendar date whose day-of-month fraction encodes the time of day.

    Attributes:
        year: Astronomical year (1 BCE is 0, 2 BCE is -1); at least -4713.
        month: 1-12.
        day: Day of month, 1 <= day < days_in_month + 1 (e.g. 4.81 is 4th, 19:26:24).
        calendar: Julian or Gregorian.
    """

    year: int
    month: int
    day: float
    calendar: CalendarSystem = CalendarSystem.GREGORIAN

    def __post_init__(self) -> None:
        if not isinstance(self.calendar, CalendarSystem):
            raise InvalidInputError(f'Unsupported calendar system: {self.calendar!r}')
        if self.year < MIN_YEAR:
            raise InvalidInputError(f'year must be >= {MIN_YEAR}, got {self.year}')
        ndays = days_in_month(self.year, self.month, self.calendar)
        if not 1.0 <= self.day < ndays + 1.0:
            raise InvalidInputError(
                f'day must be in [1, {ndays + 1}) for {self.year}-{self.month:02d}, got {self.day}'
            )


def decimal_day(day: int, hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    """Combine day of month and time of day into a fractional day of month."""
    return day + (hour * SECONDS_PER_HOUR + minute * SECONDS_PER_MINUTE + second) / SECONDS_PER_DAY


def julian_day(date: CalendarDate) -> float:
    """Julian Day of a calendar date (Meeus 7.1).

    January and February count as months 13 and 14 of the preceding year. The
    century correction B applies to Gregorian dates only.

    Parameters:
        date: Validated calendar date.

    Returns:
        Julian Day.

    Raises:
        InvalidInputError: the date falls before JD 0 (-4712 January 1.5 Julian).
    """
    year = date.year
    month = date.month
    if month <= 2:
        year -= 1
        month += 12
    if date.calendar is CalendarSystem.GREGORIAN:
        a = year // 100
        b = 2 - a + a // 4
    else:
        b = 0
    jd = (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + date.day
        + b
        - 1524.5
    )
    if jd < JD_MIN:
        raise InvalidInputError(f'{date} is before Julian Day {JD_MIN}')
    return jd


def calendar_date(jd: float, calendar: CalendarSystem = CalendarSystem.GREGORIAN) -> CalendarDate:
    """Calendar date of a Julian Day (inverse of julian_day for the same calendar).

    Raises:
        InvalidInputError: jd is negative or calendar is not a CalendarSystem.
    """
    if not isinstance(calendar, CalendarSystem):
        raise InvalidInputError(f'Unsupported calendar system: {calendar!r}')
    if jd < JD_MIN:
        raise InvalidInputError(f'Julian Day must be >= {JD_MIN}, got {jd}')
    shifted = jd + 0.5
    z = math.floor(shifted)
    f = shifted - z
    if calendar is CalendarSystem.GREGORIAN:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - alpha // 4
    else:
        a = z
    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)
    day = b - d - math.floor(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return CalendarDate(int(year), int(month), day, calendar)


def day_of_year(date: CalendarDate) -> int:
    """Ordinal day of the year (1 January is 1)."""
    k = 1 if is_leap_year(date.year, date.calendar) else 2
    return int(275 * date.month // 9 - k * ((date.month + 9) // 12) + int(date.day) - 30)


def day_of_week(jd: float) -> int:
    """Day of the week for the civil day containing jd (0 = Sunday, 6 = Saturday)."""
    return int(math.floor(jd + 1.5)) % 7


def julian_ephemeris_day(jd: float, delta_t: float) -> float:
    """Julian Ephemeris Day from a Julian Day (UT) and Delta-T in seconds."""
    return jd + delta_t / SECONDS_PER_DAY


def julian_century(jd: float) -> float:
    """Julian centuries elapsed since J2000."""
    return (jd - J2000) / DAYS_PER_JULIAN_CENTURY


def julian_millennium(jd: float) -> float:
    """Julian millennia elapsed since J2000."""
    return (jd - J2000) / DAYS_PER_JULIAN_MILLENNIUM


def polynomial(t: float, coeffs: tuple[float, ...]) -> float:
    """Evaluate c0 + c1*t + c2*t^2 + ... by Horner's rule."""
    result = 0.0
    for c in reversed(coeffs):
        result = result * t + c
    return result


def approx_delta_t(year: int, month: int) -> float:
    """Approximate Delta-T = TT - UT in seconds (Espenak & Meeus 2006 fits).

    The decimal year y = year + (month - 0.5) / 12 selects one polynomial:

    =============  ===============================================
    y < -500       -20 + 32 u^2, u = (y - 1820) / 100
    -500 .. 500    6th degree in u = y / 100
    500 .. 1600    6th degree in u = (y - 1000) / 100
    1600 .. 1700   cubic in t = y - 1600
    1700 .. 1800   quartic in t = y - 1700
    1800 .. 1860   7th degree in t = y - 1800
    1860 .. 1900   5th degree in t = y - 1860
    1900 .. 1920   quartic in t = y - 1900
    1920 .. 1941   cubic in t = y - 1920
    1941 .. 1961   cubic in t = y - 1950
    1961 .. 1986   cubic in t = y - 1975
    1986 .. 2005   5th degree in t = y - 2000
    2005 .. 2050   quadratic in t = y - 2000
    2050 .. 2150   -20 + 32 u^2 - 0.5628 (2150 - y)
    y >= 2150      -20 + 32 u^2, u = (y - 1820) / 100
    =============  ===============================================

    Never fails; dates far from the present give the long-term parabola.
    """
    y = year + (month - 0.5) / 12.0
    if y < -500.0:
        u = (y - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u
    if y < 500.0:
        return polynomial(
            y / 100.0,
            (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521),
        )
    if y < 1600.0:
        return polynomial(
            (y - 1000.0) / 100.0,
            (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073),
        )
    if y < 1700.0:
        return polynomial(y - 1600.0, (120.0, -0.9808, -0.01532, 1.0 / 7129.0))
    if y < 1800.0:
        return polynomial(y - 1700.0, (8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0))
    if y < 1860.0:
        return polynomial(
            y - 1800.0,
            (
                13.72,
                -0.332447,
                0.0068612,
                0.0041116,
                -0.00037436,
                0.0000121272,
                -0.0000001699,
                0.000000000875,
            ),
        )
    if y < 1900.0:
        return polynomial(
            y - 1860.0, (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0)
        )
    if y < 1920.0:
        return polynomial(y - 1900.0, (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197))
    if y < 1941.0:
        return polynomial(y - 1920.0, (21.20, 0.84493, -0.076100, 0.0020936))
    if y < 1961.0:
        return polynomial(y - 1950.0, (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0))
    if y < 1986.0:
        return polynomial(y - 1975.0, (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0))
    if y < 2005.0:
        return polynomial(
            y - 2000.0, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599)
        )
    if y < 2050.0:
        return polynomial(y - 2000.0, (62.92, 0.32217, 0.005589))
    u = (y - 1820.0) / 100.0
    if y < 2150.0:
        return -20.0 + 32.0 * u * u - 0.5628 * (2150.0 - y)
    return -20.0 + 32.0 * u * u


def mean_sidereal_time(jd: float) -> float:
    """Mean sidereal time at Greenwich (Meeus 12.4), radians in [0, 2pi).

    Parameters:
        jd: Julian Day (UT), any instant of the day.
    """
    t = julian_century(jd)
    theta = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + t * t * (0.000387933 - t / 38710000.0)
    )
    return math.radians(limit_to_360(theta))


def apparent_sidereal_time(jd: float, nutation_in_longitude: float, obliquity: float) -> float:
    """Apparent sidereal time at Greenwich, radians in [0, 2pi).

    Parameters:
        jd: Julian Day (UT).
        nutation_in_longitude: Delta-psi in radians.
        obliquity: Obliquity of the ecliptic of date in radians (true obliquity;
            the mean obliquity changes the result by less than 1e-9 rad).
    """
    theta = mean_sidereal_time(jd) + nutation_in_longitude * math.cos(obliquity)
    return math.radians(limit_to_360(math.degrees(theta)))


def parse_datetime(string: str) -> float | None:
    """Parse a UTC date/time string into a Julian Day (UT).

    Parameters:
        string: Date/time string in any format accepted by rms-julian, plus an
            ISO-8601 trailing 'Z' and the 'YYYY HH:MM:SS' form (Jan 1 of YYYY).

    Returns:
        Julian Day, or None on parse failure.
    """
    candidate_strings = [string]
    stripped = string.strip()
    if stripped.endswith(('Z', 'z')):
        # rms-julian does not parse the ISO UTC suffix "Z".
        candidate_strings.append(stripped[:-1])
    year_hms_match = re.fullmatch(r'(\d{4})\s+(\d{1,2}:\d{2}:\d{2})', stripped)
    if year_hms_match is not None:
        year, hms = year_hms_match.groups()
        candidate_strings.append(f'{year}-01-01 {hms}')
    for candidate in candidate_strings:
        try:
            result = julian.day_sec_from_string(candidate)
        except (ValueError, TypeError, LookupError, OSError):
            continue
        day, sec = int(result[0]), float(result[1])
        return _JD_OF_JULIAN_DAY_ZERO + day + sec / SECONDS_PER_DAY
    logger.info('Unparseable date/time string %r', string)
    return None
