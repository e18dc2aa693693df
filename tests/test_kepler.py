"""Tests for orbit classification and the Kepler-equation solvers."""

from __future__ import annotations

import math

import pytest

from ephemeris_core import kepler
from ephemeris_core.errors import ConvergenceError, InvalidInputError
from ephemeris_core.kepler import OrbitalElements, OrbitKind


def _elements(q: float, e: float, perihelion_time: float = 2451545.0) -> OrbitalElements:
    return OrbitalElements(
        perihelion_distance=q,
        eccentricity=e,
        inclination=0.0,
        ascending_node=0.0,
        argument_of_perihelion=0.0,
        perihelion_time=perihelion_time,
    )


@pytest.mark.parametrize(
    ('e', 'kind'),
    [
        (0.0, OrbitKind.ELLIPTIC),
        (0.5, OrbitKind.ELLIPTIC),
        (0.985, OrbitKind.NEAR_PARABOLIC),
        (1.0, OrbitKind.PARABOLIC),
        (1.019, OrbitKind.NEAR_PARABOLIC),
        (0.98, OrbitKind.NEAR_PARABOLIC),
        (1.02, OrbitKind.NEAR_PARABOLIC),
        (0.9799, OrbitKind.ELLIPTIC),
        (1.0201, OrbitKind.HYPERBOLIC),
        (1.5, OrbitKind.HYPERBOLIC),
    ],
)
def test_orbit_kind(e: float, kind: OrbitKind) -> None:
    """The default band is |e - 1| <= 0.02, edges included."""
    assert kepler.orbit_kind(e, band=0.02) is kind


def test_orbit_kind_band_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """A narrower configured band turns e = 0.99 elliptic."""
    monkeypatch.setenv('EPHEMERIS_NEAR_PARABOLIC_BAND', '0.001')
    assert kepler.orbit_kind(0.99) is OrbitKind.ELLIPTIC


@pytest.mark.parametrize('e', [-0.1, math.nan])
def test_orbit_kind_rejects_bad_eccentricity(e: float) -> None:
    """Negative or NaN eccentricities are invalid."""
    with pytest.raises(InvalidInputError):
        kepler.orbit_kind(e)


def test_elements_validation() -> None:
    """Perihelion distance must be positive."""
    with pytest.raises(InvalidInputError):
        _elements(0.0, 0.5)
    with pytest.raises(InvalidInputError):
        OrbitalElements.from_semimajor_axis(1.0, 1.2, 0.0, 0.0, 0.0, 0.0)


def test_semimajor_axis() -> None:
    """a = q / (1 - e), infinite for a parabola."""
    assert _elements(0.5, 0.5).semimajor_axis == pytest.approx(1.0)
    assert _elements(0.5, 1.0).semimajor_axis == math.inf
    assert _elements(1.0, 2.0).semimajor_axis == pytest.approx(-1.0)


def test_from_semimajor_axis_perihelion_time() -> None:
    """The perihelion passage nearest to the epoch is used."""
    elements = OrbitalElements.from_semimajor_axis(
        1.0, 0.1, 0.0, 0.0, 0.0, math.radians(90.0), epoch=2451545.0
    )
    quarter_period = 0.5 * math.pi / kepler.K
    assert elements.perihelion_time == pytest.approx(2451545.0 - quarter_period)
    assert elements.perihelion_distance == pytest.approx(0.9)


def test_eccentric_anomaly_meeus() -> None:
    """e = 0.1, M = 5 degrees gives E = 5.554589 degrees."""
    e_anom = kepler.eccentric_anomaly(math.radians(5.0), 0.1)
    assert math.degrees(e_anom) == pytest.approx(5.554589, abs=1e-6)


@pytest.mark.parametrize('e', [0.0, 0.3, 0.9, 0.99, 0.999999])
@pytest.mark.parametrize('m_deg', [-170.0, -1.0, 0.0, 1e-4, 30.0, 179.9, 360.0 + 45.0])
def test_eccentric_anomaly_residual(e: float, m_deg: float) -> None:
    """E - e sin E reproduces the reduced mean anomaly."""
    m = math.radians(m_deg)
    e_anom = kepler.eccentric_anomaly(m, e)
    assert e_anom - e * math.sin(e_anom) == pytest.approx(
        math.remainder(m, 2.0 * math.pi), abs=1e-10
    )


def test_eccentric_anomaly_iteration_cap() -> None:
    """A cap of one iteration cannot meet the tolerance at high eccentricity."""
    with pytest.raises(ConvergenceError) as excinfo:
        kepler.eccentric_anomaly(0.2, 0.99, tolerance=1e-15, max_iterations=1)
    assert excinfo.value.iterations == 1


def test_eccentric_anomaly_rejects_open_orbit() -> None:
    """e >= 1 has no elliptic solution."""
    with pytest.raises(InvalidInputError):
        kepler.eccentric_anomaly(0.5, 1.0)


def test_parabolic_meeus() -> None:
    """Barker's equation: q = 0.921326, t = 138.4783 days."""
    sol = kepler.solve_parabolic(_elements(0.921326, 1.0, 0.0), 138.4783)
    assert math.degrees(sol.true_anomaly) == pytest.approx(102.74426, abs=1e-5)
    assert sol.radius_vector == pytest.approx(2.364192, abs=1e-6)


def test_parabolic_symmetry() -> None:
    """Before perihelion the true anomaly is negative with the same radius."""
    after = kepler.solve_parabolic(_elements(1.0, 1.0, 0.0), 50.0)
    before = kepler.solve_parabolic(_elements(1.0, 1.0, 0.0), -50.0)
    assert before.true_anomaly == pytest.approx(-after.true_anomaly)
    assert before.radius_vector == pytest.approx(after.radius_vector)


def test_near_parabolic_meeus() -> None:
    """Landgraf's method: q = 0.1, e = 0.987, t = 254.9 days."""
    sol = kepler.solve_near_parabolic(_elements(0.1, 0.987, 0.0), 254.9)
    assert math.degrees(sol.true_anomaly) == pytest.approx(164.50029, abs=1e-4)
    assert sol.radius_vector == pytest.approx(4.063777, abs=1e-5)


def test_near_parabolic_at_perihelion() -> None:
    """At t = 0 the body sits at perihelion."""
    sol = kepler.solve_near_parabolic(_elements(0.7, 0.995, 100.0), 100.0)
    assert sol == (0.0, 0.7)


def test_near_parabolic_equals_parabolic_at_e_one() -> None:
    """With e = 1 the near-parabolic solver reduces to Barker's equation."""
    elements = _elements(0.5, 1.0, 0.0)
    near = kepler.solve_near_parabolic(elements, 42.0)
    exact = kepler.solve_parabolic(elements, 42.0)
    assert near.true_anomaly == pytest.approx(exact.true_anomaly, abs=1e-12)
    assert near.radius_vector == pytest.approx(exact.radius_vector, abs=1e-12)


@pytest.mark.parametrize('e', [0.99, 0.999, 1.001, 1.01])
def test_near_parabolic_matches_conic_solvers(e: float) -> None:
    """Solutions agree across the band edges with the elliptic and hyperbolic solvers."""
    elements = _elements(0.5, e, 0.0)
    near = kepler.solve_near_parabolic(elements, 30.0)
    solver = kepler.solve_elliptic if e < 1.0 else kepler.solve_hyperbolic
    conic = solver(elements, 30.0)
    assert near.true_anomaly == pytest.approx(conic.true_anomaly, abs=1e-8)
    assert near.radius_vector == pytest.approx(conic.radius_vector, rel=1e-8)


@pytest.mark.parametrize('e', [0.985, 0.99, 0.995, 1.005])
@pytest.mark.parametrize('t', [-3.0e5, -3000.0, 30.0, 3000.0, 3.0e4, 1.0e5, 3.0e5])
def test_near_parabolic_far_from_perihelion(e: float, t: float) -> None:
    """Orbits in the band are solved at any time, matching the conic Newton solver."""
    elements = _elements(1.0, e, 0.0)
    near = kepler.solve_orbit(elements, t, band=0.02)
    solver = kepler.solve_elliptic if e < 1.0 else kepler.solve_hyperbolic
    conic = solver(elements, t)
    assert math.remainder(near.true_anomaly - conic.true_anomaly, 2.0 * math.pi) == pytest.approx(
        0.0, abs=1e-7
    )
    assert near.radius_vector == pytest.approx(conic.radius_vector, rel=1e-7)


def test_near_parabolic_is_periodic_on_ellipse() -> None:
    """A whole number of periods later the body is back at the same place."""
    elements = _elements(1.0, 0.99, 0.0)
    period = 2.0 * math.pi * elements.semimajor_axis**1.5 / kepler.K
    first = kepler.solve_near_parabolic(elements, 40.0)
    later = kepler.solve_near_parabolic(elements, 40.0 + 3.0 * period)
    assert later.true_anomaly == pytest.approx(first.true_anomaly, abs=1e-7)
    assert later.radius_vector == pytest.approx(first.radius_vector, rel=1e-7)


@pytest.mark.parametrize('edge', [0.98, 1.02])
@pytest.mark.parametrize('t', [30.0, 3000.0, 3.0e4])
def test_band_edge_continuity(edge: float, t: float) -> None:
    """Just inside and just outside the band edge the solutions coincide."""
    step = 1.0e-9 if edge > 1.0 else -1.0e-9
    inside = kepler.solve_orbit(_elements(1.0, edge, 0.0), t, band=0.02)
    outside = kepler.solve_orbit(_elements(1.0, edge + step, 0.0), t, band=0.02)
    assert kepler.orbit_kind(edge + step, band=0.02) is not OrbitKind.NEAR_PARABOLIC
    assert inside.true_anomaly == pytest.approx(outside.true_anomaly, abs=1e-7)
    assert inside.radius_vector == pytest.approx(outside.radius_vector, rel=1e-7)


@pytest.mark.parametrize('t', [-500.0, 30.0, 2000.0, 2.0e4])
def test_continuity_towards_parabola(t: float) -> None:
    """As e approaches 1 from either side the solution tends to Barker's."""
    exact = kepler.solve_parabolic(_elements(1.0, 1.0, 0.0), t)
    for e in (1.0 - 1.0e-8, 1.0 + 1.0e-8):
        near = kepler.solve_orbit(_elements(1.0, e, 0.0), t, band=0.02)
        assert near.true_anomaly == pytest.approx(exact.true_anomaly, abs=1e-6)
        assert near.radius_vector == pytest.approx(exact.radius_vector, rel=1e-6)


def test_elliptic_radius_consistent_with_conic() -> None:
    """r = a(1 - e^2) / (1 + e cos v) on the solved orbit."""
    elements = _elements(0.3, 0.7, 2450000.0)
    sol = kepler.solve_elliptic(elements, 2450123.4)
    a = 0.3 / 0.3
    expected = a * (1.0 - 0.49) / (1.0 + 0.7 * math.cos(sol.true_anomaly))
    assert sol.radius_vector == pytest.approx(expected)


@pytest.mark.parametrize('t', [-2000.0, -10.0, 5.0, 400.0, 1.0e5])
def test_hyperbolic_radius_consistent_with_conic(t: float) -> None:
    """r = q (1 + e) / (1 + e cos v) on a hyperbolic orbit."""
    elements = _elements(1.2, 1.8, 0.0)
    sol = kepler.solve_hyperbolic(elements, t)
    expected = 1.2 * 2.8 / (1.0 + 1.8 * math.cos(sol.true_anomaly))
    assert sol.radius_vector == pytest.approx(expected, rel=1e-9)
    assert math.copysign(1.0, sol.true_anomaly) == math.copysign(1.0, t)


def test_hyperbolic_rejects_closed_orbit() -> None:
    """e <= 1 is refused by the hyperbolic solver."""
    with pytest.raises(InvalidInputError):
        kepler.solve_hyperbolic(_elements(1.0, 0.5), 10.0)


@pytest.mark.parametrize(
    ('e', 'solver_name'),
    [
        (0.2, 'solve_elliptic'),
        (1.0, 'solve_parabolic'),
        (0.99, 'solve_near_parabolic'),
        (2.0, 'solve_hyperbolic'),
    ],
)
def test_solve_orbit_dispatch(e: float, solver_name: str) -> None:
    """solve_orbit picks the solver for the orbit kind."""
    elements = _elements(1.0, e, 0.0)
    expected = getattr(kepler, solver_name)(elements, 20.0)
    assert kepler.solve_orbit(elements, 20.0, band=0.02) == pytest.approx(expected)


def test_heliocentric_position_in_plane() -> None:
    """Zero inclination keeps the body on the ecliptic at longitude node + w + v."""
    elements = OrbitalElements(
        perihelion_distance=1.0,
        eccentricity=0.0,
        inclination=0.0,
        ascending_node=math.radians(30.0),
        argument_of_perihelion=math.radians(40.0),
        perihelion_time=0.0,
    )
    quarter = 0.5 * math.pi / kepler.K
    point = kepler.heliocentric_ecliptic_position(elements, quarter)
    assert math.degrees(point.longitude) == pytest.approx(160.0)
    assert point.latitude == pytest.approx(0.0, abs=1e-12)
    assert point.distance == pytest.approx(1.0)


def test_heliocentric_position_inclined() -> None:
    """At the argument of latitude 90 degrees the latitude equals the inclination."""
    elements = OrbitalElements(
        perihelion_distance=2.0,
        eccentricity=0.0,
        inclination=math.radians(25.0),
        ascending_node=math.radians(10.0),
        argument_of_perihelion=math.radians(90.0),
        perihelion_time=0.0,
    )
    point = kepler.heliocentric_ecliptic_position(elements, 0.0)
    assert math.degrees(point.latitude) == pytest.approx(25.0)
    assert math.degrees(point.longitude) == pytest.approx(100.0)
    assert point.distance == pytest.approx(2.0)
