"""Configuration: solver and pipeline defaults and data paths from environment variables.

Each getter reads the environment at call time; invalid values are logged and
replaced by the built-in default from constants.
"""

from __future__ import annotations

import logging
import os

from ephemeris_core.constants import (
    DEFAULT_KEPLER_MAX_ITER,
    DEFAULT_KEPLER_TOLERANCE,
    DEFAULT_LIGHT_TIME_ITERATIONS,
    DEFAULT_NEAR_PARABOLIC_BAND,
)

logger = logging.getLogger(__name__)

DEFAULT_OBLIQUITY_FORMULA = 'IAU'


def _get_env(name: str) -> str:
    return os.environ.get(name, '').strip()


def _positive_float(name: str, default: float) -> float:
    raw = _get_env(name)
    if len(raw) == 0:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        logger.warning('Invalid %s %r (must be a number): %s; using %g', name, raw, e, default)
        return default
    if not value > 0.0:
        logger.warning('%s must be positive, got %r; using %g', name, raw, default)
        return default
    return value


def _positive_int(name: str, default: int) -> int:
    raw = _get_env(name)
    if len(raw) == 0:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        logger.warning('Invalid %s %r (must be an integer): %s; using %d', name, raw, e, default)
        return default
    if value < 1:
        logger.warning('%s must be at least 1, got %d; using %d', name, value, default)
        return default
    return value


def get_kepler_tolerance() -> float:
    """Return Kepler solver convergence tolerance in radians.

    Returns:
        EPHEMERIS_KEPLER_TOLERANCE env var, or 1e-12.
    """
    return _positive_float('EPHEMERIS_KEPLER_TOLERANCE', DEFAULT_KEPLER_TOLERANCE)


def get_kepler_max_iterations() -> int:
    """Return Kepler solver iteration cap.

    Returns:
        EPHEMERIS_KEPLER_MAX_ITER env var, or 100.
    """
    return _positive_int('EPHEMERIS_KEPLER_MAX_ITER', DEFAULT_KEPLER_MAX_ITER)


def get_near_parabolic_band() -> float:
    """Return half-width of the eccentricity band around 1 treated as near-parabolic.

    Returns:
        EPHEMERIS_NEAR_PARABOLIC_BAND env var, or 0.02 (i.e. 0.98 <= e <= 1.02).
    """
    return _positive_float('EPHEMERIS_NEAR_PARABOLIC_BAND', DEFAULT_NEAR_PARABOLIC_BAND)


def get_obliquity_formula_name() -> str:
    """Return default mean-obliquity formula name ('IAU' or 'LASKAR').

    Returns:
        Upper-cased EPHEMERIS_OBLIQUITY_FORMULA env var, or 'IAU'.
    """
    raw = _get_env('EPHEMERIS_OBLIQUITY_FORMULA').upper()
    if len(raw) == 0:
        return DEFAULT_OBLIQUITY_FORMULA
    if raw not in ('IAU', 'LASKAR'):
        logger.warning(
            'Invalid EPHEMERIS_OBLIQUITY_FORMULA %r (expected IAU or LASKAR); using %s',
            raw,
            DEFAULT_OBLIQUITY_FORMULA,
        )
        return DEFAULT_OBLIQUITY_FORMULA
    return raw


def get_light_time_iterations() -> int:
    """Return number of light-time iterations used for geocentric positions.

    Returns:
        EPHEMERIS_LIGHT_TIME_ITERATIONS env var, or 2.
    """
    return _positive_int('EPHEMERIS_LIGHT_TIME_ITERATIONS', DEFAULT_LIGHT_TIME_ITERATIONS)


def get_vsop87_path() -> str | None:
    """Return the directory holding the complete VSOP87D.* files, if configured.

    Returns:
        EPHEMERIS_VSOP87_PATH env var, or None to use the bundled abridged series.
    """
    path = _get_env('EPHEMERIS_VSOP87_PATH')
    return path if path else None
