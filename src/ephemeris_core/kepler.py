"""Kepler-equation solvers for orbit-defined bodies (comets, minor planets, Pluto).

The orbit kind is derived from the eccentricity: exactly 1 is parabolic, within
the near-parabolic band around 1 it is near-parabolic, below that elliptic and
above it hyperbolic. Each kind has its own solver; :func:`solve_orbit` picks one
through a dispatch table. All solvers return the true anomaly and radius vector.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from ephemeris_core import config
from ephemeris_core.angle_utils import limit_to_pm_pi
from ephemeris_core.constants import (
    GAUSSIAN_GRAVITATIONAL_CONSTANT,
    J2000,
    NEAR_PARABOLIC_DIVERGENCE_LIMIT,
)
from ephemeris_core.coords import EclipticPoint, rectangular_to_spherical
from ephemeris_core.errors import ConvergenceError, InvalidInputError

logger = logging.getLogger(__name__)

K = GAUSSIAN_GRAVITATIONAL_CONSTANT

# Rounding allowance on |e - 1|; e = 1 +- band is inside the band.
_BAND_SLACK = 1.0e-12


class OrbitKind(enum.Enum):
    """Conic section selected by eccentricity."""

    ELLIPTIC = 'elliptic'
    PARABOLIC = 'parabolic'
    NEAR_PARABOLIC = 'near_parabolic'
    HYPERBOLIC = 'hyperbolic'


class KeplerSolution(NamedTuple):
    """Position in the orbit plane: true anomaly (radians) and radius vector (AU)."""

    true_anomaly: float
    radius_vector: float


def orbit_kind(eccentricity: float, band: float | None = None) -> OrbitKind:
    """Classify an orbit by eccentricity.

    Parameters:
        eccentricity: Orbital eccentricity (>= 0).
        band: Half-width of the near-parabolic band; None uses configuration
            (default 0.02).

    Returns:
        PARABOLIC for e == 1, NEAR_PARABOLIC for |e - 1| <= band (edges
        included), otherwise ELLIPTIC (e < 1) or HYPERBOLIC (e > 1).

    Raises:
        InvalidInputError: eccentricity is negative or not a number.
    """
    if not eccentricity >= 0.0:
        raise InvalidInputError(f'Eccentricity must be non-negative, got {eccentricity!r}')
    if band is None:
        band = config.get_near_parabolic_band()
    if eccentricity == 1.0:
        return OrbitKind.PARABOLIC
    if abs(eccentricity - 1.0) <= band + _BAND_SLACK:
        return OrbitKind.NEAR_PARABOLIC
    if eccentricity < 1.0:
        return OrbitKind.ELLIPTIC
    return OrbitKind.HYPERBOLIC


@dataclass(frozen=True)
class OrbitalElements:
    """Osculating elements of a heliocentric orbit.

    Angles in radians referred to the ecliptic and equinox of ``epoch``;
    ``perihelion_time`` and ``epoch`` are Julian Ephemeris Days.
    """

    perihelion_distance: float
    eccentricity: float
    inclination: float
    ascending_node: float
    argument_of_perihelion: float
    perihelion_time: float
    epoch: float = J2000

    def __post_init__(self) -> None:
        if not self.perihelion_distance > 0.0:
            raise InvalidInputError(
                f'Perihelion distance must be positive, got {self.perihelion_distance!r}'
            )
        if not self.eccentricity >= 0.0:
            raise InvalidInputError(
                f'Eccentricity must be non-negative, got {self.eccentricity!r}'
            )

    @classmethod
    def from_semimajor_axis(
        cls,
        semimajor_axis: float,
        eccentricity: float,
        inclination: float,
        ascending_node: float,
        argument_of_perihelion: float,
        mean_anomaly: float,
        epoch: float = J2000,
    ) -> OrbitalElements:
        """Build elements of an elliptic orbit from a and the mean anomaly at epoch.

        The time of perihelion is the passage nearest to epoch.

        Raises:
            InvalidInputError: semimajor_axis is not positive or eccentricity is
                not in [0, 1).
        """
        if not semimajor_axis > 0.0:
            raise InvalidInputError(f'Semi-major axis must be positive, got {semimajor_axis!r}')
        if not 0.0 <= eccentricity < 1.0:
            raise InvalidInputError(
                f'Semi-major axis form needs 0 <= e < 1, got {eccentricity!r}'
            )
        mean_motion = K / semimajor_axis**1.5
        return cls(
            perihelion_distance=semimajor_axis * (1.0 - eccentricity),
            eccentricity=eccentricity,
            inclination=inclination,
            ascending_node=ascending_node,
            argument_of_perihelion=argument_of_perihelion,
            perihelion_time=epoch - limit_to_pm_pi(mean_anomaly) / mean_motion,
            epoch=epoch,
        )

    @property
    def kind(self) -> OrbitKind:
        """Orbit kind for the configured near-parabolic band."""
        return orbit_kind(self.eccentricity)

    @property
    def semimajor_axis(self) -> float:
        """Semi-major axis in AU (negative for hyperbolic, infinite for parabolic)."""
        if self.eccentricity == 1.0:
            return math.inf
        return self.perihelion_distance / (1.0 - self.eccentricity)


def _settings(tolerance: float | None, max_iterations: int | None) -> tuple[float, int]:
    if tolerance is None:
        tolerance = config.get_kepler_tolerance()
    if max_iterations is None:
        max_iterations = config.get_kepler_max_iterations()
    return tolerance, max_iterations


def eccentric_anomaly(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> float:
    """Solve Kepler's equation M = E - e sin E by Newton-Raphson.

    The mean anomaly is reduced to [0, pi] by symmetry and the iterate is held in
    [0, pi]. On that interval E - e sin E - M is increasing and convex, so after
    the first step every iterate lies at or above the root and the sequence falls
    monotonically onto it, for any 0 <= e < 1.

    Parameters:
        mean_anomaly: Mean anomaly (radians, any range).
        eccentricity: Eccentricity in [0, 1).
        tolerance: Stop when a Newton step is smaller than this (radians).
        max_iterations: Iteration cap.

    Returns:
        Eccentric anomaly in [-pi, pi], same sign as the reduced mean anomaly.

    Raises:
        InvalidInputError: eccentricity outside [0, 1).
        ConvergenceError: The step did not drop below tolerance within the cap.
    """
    if not 0.0 <= eccentricity < 1.0:
        raise InvalidInputError(f'Elliptic Kepler equation needs 0 <= e < 1, got {eccentricity!r}')
    tolerance, max_iterations = _settings(tolerance, max_iterations)
    m = limit_to_pm_pi(mean_anomaly)
    sign = -1.0 if m < 0.0 else 1.0
    m = abs(m)
    e_anom = m
    step = math.inf
    for iteration in range(1, max_iterations + 1):
        f = e_anom - eccentricity * math.sin(e_anom) - m
        fp = 1.0 - eccentricity * math.cos(e_anom)
        new = min(max(e_anom - f / fp, 0.0), math.pi)
        step = new - e_anom
        e_anom = new
        if abs(step) < tolerance:
            logger.debug('Kepler (e=%.6f) converged in %d iterations', eccentricity, iteration)
            return sign * e_anom
    logger.error(
        'Kepler equation did not converge: M=%r e=%r after %d iterations',
        mean_anomaly,
        eccentricity,
        max_iterations,
    )
    raise ConvergenceError(
        'Elliptic Kepler equation did not converge', sign * e_anom, abs(step), max_iterations
    )


def solve_elliptic(
    elements: OrbitalElements,
    jde: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> KeplerSolution:
    """True anomaly and radius vector on an elliptic orbit (Meeus chapter 30).

    Raises:
        InvalidInputError: The orbit is not elliptic (e >= 1).
        ConvergenceError: Kepler's equation did not converge.
    """
    e = elements.eccentricity
    if e >= 1.0:
        raise InvalidInputError(f'solve_elliptic needs e < 1, got {e!r}')
    a = elements.perihelion_distance / (1.0 - e)
    mean_motion = K / a**1.5
    mean_anomaly = mean_motion * (jde - elements.perihelion_time)
    e_anom = eccentric_anomaly(mean_anomaly, e, tolerance, max_iterations)
    half = 0.5 * e_anom
    true_anomaly = 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(half), math.sqrt(1.0 - e) * math.cos(half)
    )
    return KeplerSolution(true_anomaly, a * (1.0 - e * math.cos(e_anom)))


def solve_parabolic(
    elements: OrbitalElements,
    jde: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> KeplerSolution:
    """True anomaly and radius vector on a parabolic orbit (Barker's equation).

    Closed form: with W = 3k t / (q sqrt(2q)), s = tan(v/2) solves s^3 + 3s = W,
    so s = 2 sinh(asinh(W/2) / 3). The tolerance arguments are accepted for a
    uniform solver signature and are not used.
    """
    del tolerance, max_iterations
    q = elements.perihelion_distance
    w = 3.0 * K * (jde - elements.perihelion_time) / (q * math.sqrt(2.0 * q))
    s = 2.0 * math.sinh(math.asinh(0.5 * w) / 3.0)
    return KeplerSolution(2.0 * math.atan(s), q * (1.0 + s * s))


def _landgraf(
    q: float, e: float, t: float, tolerance: float, max_iterations: int
) -> float:
    """Return s = tan(v/2) from Landgraf's series; ConvergenceError when it fails."""
    q1 = K * math.sqrt((1.0 + e) / q) / (2.0 * q)
    g = (1.0 - e) / (1.0 + e)
    q2 = q1 * t
    s = 2.0 / (3.0 * abs(q2))
    s = 2.0 / math.tan(2.0 * math.atan(math.tan(0.5 * math.atan(s)) ** (1.0 / 3.0)))
    if t < 0.0:
        s = -s
    if e == 1.0:
        return s

    for outer in range(1, max_iterations + 1):
        s0 = s
        z = 1.0
        y = s * s
        g1 = -y * s
        q3 = q2 + 2.0 * g * s * y / 3.0
        for _ in range(max_iterations):
            z += 1.0
            g1 = -g1 * g * y
            z1 = (z - (z + 1.0) * g) / (2.0 * z + 1.0)
            f = z1 * g1
            q3 += f
            if abs(f) > NEAR_PARABOLIC_DIVERGENCE_LIMIT:
                raise ConvergenceError('Near-parabolic series diverged', s, abs(f), outer)
            if abs(f) <= tolerance:
                break
        else:
            raise ConvergenceError(
                'Near-parabolic series did not converge', s, abs(f), max_iterations
            )
        for _ in range(max_iterations):
            s1 = s
            s = (2.0 * s * s * s / 3.0 + q3) / (s * s + 1.0)
            if abs(s - s1) <= tolerance:
                break
        else:
            raise ConvergenceError(
                'Near-parabolic Newton iteration did not converge', s, abs(s - s1),
                max_iterations,
            )
        if abs(s - s0) <= tolerance:
            logger.debug('Near-parabolic (e=%.8f) converged in %d passes', e, outer)
            return s
    raise ConvergenceError(
        'Near-parabolic solution did not converge', s, abs(s - s0), max_iterations
    )


def solve_near_parabolic(
    elements: OrbitalElements,
    jde: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> KeplerSolution:
    """True anomaly and radius vector for e close to 1 (Landgraf, Meeus chapter 35).

    Starts from the exact parabolic solution and corrects it with a series in
    g = (1 - e) / (1 + e). Reduces exactly to Barker's equation at e = 1.

    The series only converges while |g| tan^2(v/2) stays well below 1, that is
    near perihelion. Elliptic times are first reduced to within half a period of
    perihelion; when the series then diverges or reaches the iteration cap, the
    solution comes from the Newton solver of the matching conic
    (:func:`solve_elliptic` for e < 1, :func:`solve_hyperbolic` for e > 1),
    which converges for every time on those orbits.

    Raises:
        ConvergenceError: The fallback solver reached its iteration cap.
    """
    tolerance, max_iterations = _settings(tolerance, max_iterations)
    q = elements.perihelion_distance
    e = elements.eccentricity
    t = jde - elements.perihelion_time
    if e < 1.0:
        period = 2.0 * math.pi * (q / (1.0 - e)) ** 1.5 / K
        t = math.remainder(t, period)
    if t == 0.0:
        return KeplerSolution(0.0, q)

    try:
        s = _landgraf(q, e, t, tolerance, max_iterations)
    except ConvergenceError as err:
        fallback = solve_elliptic if e < 1.0 else solve_hyperbolic
        logger.debug(
            'Landgraf series failed for e=%r, t=%r (%s); using %s',
            e, t, err, fallback.__name__,
        )
        return fallback(elements, jde, tolerance, max_iterations)

    true_anomaly = 2.0 * math.atan(s)
    radius = q * (1.0 + e) / (1.0 + e * math.cos(true_anomaly))
    return KeplerSolution(true_anomaly, radius)


def solve_hyperbolic(
    elements: OrbitalElements,
    jde: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> KeplerSolution:
    """True anomaly and radius vector on a hyperbolic orbit.

    Newton-Raphson on M = e sinh H - H, started from asinh(M / e) which lies below
    the root; the function is convex for H > 0 so convergence is monotone after
    the first step.

    Raises:
        InvalidInputError: The orbit is not hyperbolic (e <= 1).
        ConvergenceError: The iteration cap was reached.
    """
    e = elements.eccentricity
    if e <= 1.0:
        raise InvalidInputError(f'solve_hyperbolic needs e > 1, got {e!r}')
    tolerance, max_iterations = _settings(tolerance, max_iterations)
    a = elements.perihelion_distance / (e - 1.0)
    mean_anomaly = K / a**1.5 * (jde - elements.perihelion_time)
    sign = -1.0 if mean_anomaly < 0.0 else 1.0
    m = abs(mean_anomaly)
    h = math.asinh(m / e)
    step = math.inf
    for iteration in range(1, max_iterations + 1):
        f = e * math.sinh(h) - h - m
        fp = e * math.cosh(h) - 1.0
        step = -f / fp
        h = max(h + step, 0.0)
        if abs(step) < tolerance * max(1.0, h):
            logger.debug('Hyperbolic Kepler (e=%.6f) converged in %d iterations', e, iteration)
            break
    else:
        logger.error('Hyperbolic Kepler equation did not converge: M=%r e=%r', mean_anomaly, e)
        raise ConvergenceError(
            'Hyperbolic Kepler equation did not converge', sign * h, abs(step), max_iterations
        )
    h *= sign
    true_anomaly = 2.0 * math.atan(math.sqrt((e + 1.0) / (e - 1.0)) * math.tanh(0.5 * h))
    return KeplerSolution(true_anomaly, a * (e * math.cosh(h) - 1.0))


_SOLVERS: dict[OrbitKind, Callable[..., KeplerSolution]] = {
    OrbitKind.ELLIPTIC: solve_elliptic,
    OrbitKind.PARABOLIC: solve_parabolic,
    OrbitKind.NEAR_PARABOLIC: solve_near_parabolic,
    OrbitKind.HYPERBOLIC: solve_hyperbolic,
}


def solve_orbit(
    elements: OrbitalElements,
    jde: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
    band: float | None = None,
) -> KeplerSolution:
    """Solve for true anomaly and radius vector with the solver for the orbit kind.

    Parameters:
        elements: Orbital elements.
        jde: Julian Ephemeris Day (TT).
        tolerance, max_iterations: Solver overrides (None uses configuration).
        band: Near-parabolic band override (None uses configuration).

    Returns:
        KeplerSolution.
    """
    kind = orbit_kind(elements.eccentricity, band)
    return _SOLVERS[kind](elements, jde, tolerance, max_iterations)


def heliocentric_ecliptic_position(
    elements: OrbitalElements,
    jde: float,
    tolerance: float | None = None,
    max_iterations: int | None = None,
    band: float | None = None,
) -> EclipticPoint:
    """Heliocentric ecliptic position of an orbit-defined body.

    Referred to the ecliptic and equinox of ``elements.epoch``.

    Returns:
        EclipticPoint with longitude, latitude (radians) and distance (AU).
    """
    solution = solve_orbit(elements, jde, tolerance, max_iterations, band)
    u = solution.true_anomaly + elements.argument_of_perihelion
    r = solution.radius_vector
    cos_node, sin_node = math.cos(elements.ascending_node), math.sin(elements.ascending_node)
    cos_inc, sin_inc = math.cos(elements.inclination), math.sin(elements.inclination)
    cos_u, sin_u = math.cos(u), math.sin(u)
    vec = np.array(
        [
            r * (cos_node * cos_u - sin_node * sin_u * cos_inc),
            r * (sin_node * cos_u + cos_node * sin_u * cos_inc),
            r * sin_u * sin_inc,
        ],
        dtype=np.float64,
    )
    lon, lat, dist = rectangular_to_spherical(vec)
    return EclipticPoint(lon, lat, dist)
