"""Tests for observer geometry and visual magnitudes."""

from __future__ import annotations

import math

import numpy as np
import pytest

from solar_system import photometry
from solar_system.bodies import Ring
from solar_system.constants import J2000
from solar_system.system import SolarSystem


def test_phase_angle_and_elongation() -> None:
    body = np.array([1.0, 0.0, 0.0])
    observer = np.array([0.0, 1.0, 0.0])
    assert photometry.phase_angle(body, observer) == pytest.approx(math.pi / 4.0)
    assert photometry.elongation(body, observer) == pytest.approx(math.pi / 4.0)
    assert photometry.distance(body, observer) == pytest.approx(math.sqrt(2.0))


def test_phase_of_opposition_and_conjunction() -> None:
    observer = np.array([1.0, 0.0, 0.0])
    assert photometry.phase(np.array([2.0, 0.0, 0.0]), observer) == pytest.approx(1.0)
    assert photometry.phase(np.array([0.5, 0.0, 0.0]), observer) == pytest.approx(0.0, abs=1e-12)


def test_angular_separation() -> None:
    observer = np.zeros(3)
    sep = photometry.angular_separation(np.array([1.0, 0.0, 0.0]), np.array([0.0, 0.0, 2.0]), observer)
    assert sep == pytest.approx(math.pi / 2.0)


def test_hg_and_gk_at_unit_distances() -> None:
    assert photometry.hg_magnitude(3.34, 0.12, 1.0, 1.0, 0.0) == pytest.approx(3.34)
    assert photometry.gk_magnitude(11.5, 6.0, 1.0, 1.0) == pytest.approx(11.5)
    assert photometry.gk_magnitude(11.5, 6.0, 10.0, 1.0) == pytest.approx(11.5 + 15.0)
    assert photometry.hg_magnitude(3.34, 0.12, 2.0, 2.0, 0.5) > photometry.hg_magnitude(
        3.34, 0.12, 2.0, 2.0, 0.0
    )


def test_sun_magnitude_at_one_au(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    assert system.get_planet_vmagnitude('Sun') == pytest.approx(-26.73, abs=0.01)


def test_observer_body_has_no_magnitude(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    assert math.isnan(system.get_planet_vmagnitude('Earth'))


def test_minor_body_magnitudes_use_their_systems(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    observer = system.observer_position
    ceres_pos = system.get_position('Ceres').heliocentric
    r = float(np.linalg.norm(ceres_pos))
    delta = photometry.distance(ceres_pos, observer)
    alpha = photometry.phase_angle(ceres_pos, observer)
    assert system.get_planet_vmagnitude('Ceres') == pytest.approx(
        photometry.hg_magnitude(3.34, 0.12, r, delta, alpha)
    )
    encke_pos = system.get_position('2P/Encke').heliocentric
    assert system.get_planet_vmagnitude('2P/Encke') == pytest.approx(
        photometry.gk_magnitude(
            11.5, 6.0, float(np.linalg.norm(encke_pos)), photometry.distance(encke_pos, observer)
        )
    )


def test_moon_magnitude_is_plausible(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    mag = system.get_planet_vmagnitude('Moon')
    assert -14.0 < mag < 0.0


def test_absolute_magnitude_overrides_albedo(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    moon = system.catalogue['Moon']
    moon.absolute_magnitude = 0.21
    mag = system.get_planet_vmagnitude('Moon')
    observer = system.observer_position
    pos = system.get_position('Moon').heliocentric
    r = float(np.linalg.norm(pos))
    delta = photometry.distance(pos, observer)
    alpha = photometry.phase_angle(pos, observer)
    lambert = (1.0 - alpha / math.pi) * math.cos(alpha) + math.sin(alpha) / math.pi
    assert mag == pytest.approx(0.21 + 5.0 * math.log10(r * delta) - 2.5 * math.log10(lambert))


def test_angular_size_uses_rings_and_scale(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    moon = system.catalogue['Moon']
    size = system.get_angular_size_for_planet('Moon')
    dist = system.get_distance_to_planet('Moon')
    assert size == pytest.approx(math.degrees(math.atan2(moon.radius, dist)))
    assert 0.2 < size < 0.3
    moon.rings = Ring(moon.radius, 2.0 * moon.radius)
    ringed = photometry.angular_size(
        moon, system.get_position('Moon').heliocentric, system.observer_position, 3.0
    )
    assert ringed == pytest.approx(math.degrees(math.atan2(6.0 * moon.radius, dist)))


def test_geometry_queries_for_unknown_body(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    with pytest.raises(ValueError):
        system.get_phase_for_planet('Vulcan')
