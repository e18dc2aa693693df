"""Solar System positions and coordinate transforms.

This package provides the numerical core of a positional-astronomy library:
- Time base: Julian Day, Delta-T, dynamical time and sidereal time
- VSOP87-D heliocentric positions of Mercury through Neptune
- Kepler-equation solvers for elliptic, parabolic, near-parabolic and
  hyperbolic orbits (comets, asteroids, Pluto)
- Frame transforms between ecliptic, equatorial, horizontal and galactic
  coordinates, with precession, nutation, aberration, proper motion and
  topocentric parallax
- The geocentric position of the Moon

Angles are radians unless a name says otherwise; times are Julian Days.
"""

from ephemeris_core.aberration import (
    annual_aberration_ecliptic,
    annual_aberration_equatorial,
    sun_aberration,
)
from ephemeris_core.coords import (
    EclipticPoint,
    EquatorialPoint,
    GalacticPoint,
    GeographicLocation,
    HorizontalPoint,
    angular_separation,
    ecliptic_to_equatorial,
    ecliptic_to_galactic,
    equatorial_to_ecliptic,
    equatorial_to_galactic,
    equatorial_horizontal_parallax,
    equatorial_to_horizontal,
    galactic_to_ecliptic,
    galactic_to_equatorial,
    heliocentric_to_geocentric,
    horizontal_to_equatorial,
    observer_geocentric_terms,
    topocentric_equatorial,
)
from ephemeris_core.errors import (
    ConvergenceError,
    DomainDegeneracyError,
    EphemerisError,
    InvalidInputError,
)
from ephemeris_core.kepler import (
    KeplerSolution,
    OrbitalElements,
    OrbitKind,
    heliocentric_ecliptic_position,
    solve_orbit,
)
from ephemeris_core.lunar import LunarArguments, lunar_arguments, moon_geocentric_position
from ephemeris_core.nutation import (
    ObliquityFormula,
    mean_obliquity,
    nutation_in_equatorial_coords,
    nutation_in_longitude_and_obliquity,
    true_obliquity,
)
from ephemeris_core.positions import (
    apparent_moon_position,
    apparent_planet_position,
    apparent_sun_position,
    planet_geocentric_position,
)
from ephemeris_core.precession import apply_proper_motion, precess_ecliptic, precess_equatorial
from ephemeris_core.time_utils import (
    CalendarDate,
    CalendarSystem,
    apparent_sidereal_time,
    approx_delta_t,
    calendar_date,
    julian_day,
    julian_ephemeris_day,
    mean_sidereal_time,
)
from ephemeris_core.vsop87 import HeliocentricPosition, Planet, heliocentric_position

__all__: list[str] = [
    'CalendarDate',
    'CalendarSystem',
    'ConvergenceError',
    'DomainDegeneracyError',
    'EclipticPoint',
    'EphemerisError',
    'EquatorialPoint',
    'GalacticPoint',
    'GeographicLocation',
    'HeliocentricPosition',
    'HorizontalPoint',
    'InvalidInputError',
    'KeplerSolution',
    'LunarArguments',
    'ObliquityFormula',
    'OrbitKind',
    'OrbitalElements',
    'Planet',
    'angular_separation',
    'annual_aberration_ecliptic',
    'annual_aberration_equatorial',
    'apparent_moon_position',
    'apparent_planet_position',
    'apparent_sidereal_time',
    'apparent_sun_position',
    'apply_proper_motion',
    'approx_delta_t',
    'calendar_date',
    'ecliptic_to_equatorial',
    'ecliptic_to_galactic',
    'equatorial_to_ecliptic',
    'equatorial_horizontal_parallax',
    'equatorial_to_galactic',
    'equatorial_to_horizontal',
    'galactic_to_ecliptic',
    'galactic_to_equatorial',
    'heliocentric_ecliptic_position',
    'heliocentric_position',
    'heliocentric_to_geocentric',
    'horizontal_to_equatorial',
    'julian_day',
    'julian_ephemeris_day',
    'lunar_arguments',
    'mean_obliquity',
    'mean_sidereal_time',
    'moon_geocentric_position',
    'nutation_in_equatorial_coords',
    'nutation_in_longitude_and_obliquity',
    'observer_geocentric_terms',
    'planet_geocentric_position',
    'precess_ecliptic',
    'precess_equatorial',
    'solve_orbit',
    'sun_aberration',
    'topocentric_equatorial',
    'true_obliquity',
]
