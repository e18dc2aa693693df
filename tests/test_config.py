"""Tests for environment-driven solver configuration."""

from __future__ import annotations

import logging

import pytest

from ephemeris_core import config


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset variables give the built-in defaults."""
    for name in (
        'EPHEMERIS_KEPLER_TOLERANCE',
        'EPHEMERIS_KEPLER_MAX_ITER',
        'EPHEMERIS_NEAR_PARABOLIC_BAND',
        'EPHEMERIS_OBLIQUITY_FORMULA',
        'EPHEMERIS_LIGHT_TIME_ITERATIONS',
    ):
        monkeypatch.delenv(name, raising=False)
    assert config.get_kepler_tolerance() == 1e-12
    assert config.get_kepler_max_iterations() == 100
    assert config.get_near_parabolic_band() == 0.02
    assert config.get_obliquity_formula_name() == 'IAU'
    assert config.get_light_time_iterations() == 2


def test_overrides_are_read_at_call_time(monkeypatch: pytest.MonkeyPatch) -> None:
    """Changing the environment changes the next lookup."""
    monkeypatch.setenv('EPHEMERIS_KEPLER_TOLERANCE', '1e-9')
    monkeypatch.setenv('EPHEMERIS_KEPLER_MAX_ITER', '25')
    monkeypatch.setenv('EPHEMERIS_OBLIQUITY_FORMULA', ' laskar ')
    assert config.get_kepler_tolerance() == 1e-9
    assert config.get_kepler_max_iterations() == 25
    assert config.get_obliquity_formula_name() == 'LASKAR'


@pytest.mark.parametrize(
    ('name', 'raw', 'getter', 'default'),
    [
        ('EPHEMERIS_KEPLER_TOLERANCE', 'tiny', config.get_kepler_tolerance, 1e-12),
        ('EPHEMERIS_KEPLER_TOLERANCE', '-1', config.get_kepler_tolerance, 1e-12),
        ('EPHEMERIS_KEPLER_MAX_ITER', '2.5', config.get_kepler_max_iterations, 100),
        ('EPHEMERIS_LIGHT_TIME_ITERATIONS', '0', config.get_light_time_iterations, 2),
        ('EPHEMERIS_OBLIQUITY_FORMULA', 'WMO', config.get_obliquity_formula_name, 'IAU'),
    ],
)
def test_invalid_values_fall_back_with_warning(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
    name: str,
    raw: str,
    getter: object,
    default: object,
) -> None:
    """Bad values are logged and replaced by the default."""
    monkeypatch.setenv(name, raw)
    with caplog.at_level(logging.WARNING, logger='ephemeris_core.config'):
        assert getter() == default  # type: ignore[operator]
    assert name in caplog.text


def test_vsop87_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """An unset or blank EPHEMERIS_VSOP87_PATH means the bundled series."""
    monkeypatch.delenv('EPHEMERIS_VSOP87_PATH', raising=False)
    assert config.get_vsop87_path() is None
    monkeypatch.setenv('EPHEMERIS_VSOP87_PATH', '   ')
    assert config.get_vsop87_path() is None
    monkeypatch.setenv('EPHEMERIS_VSOP87_PATH', ' /data/vsop87 ')
    assert config.get_vsop87_path() == '/data/vsop87'
