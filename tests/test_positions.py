"""Tests for the position engine and light-time correction."""

from __future__ import annotations

import numpy as np
import pytest

from solar_system.constants import AU_KM, J2000
from solar_system.positions import PositionEngine, light_time_days
from solar_system.system import SolarSystem


def test_light_time_of_one_au() -> None:
    assert light_time_days(1.0) * 86400.0 == pytest.approx(499.004784, abs=1e-5)


def test_instantaneous_positions_equal_orbit_composition(system: SolarSystem) -> None:
    system.config.flag_light_travel_time = False
    positions = system.compute_positions(J2000)
    catalogue = system.catalogue
    earth = catalogue['Earth'].orbit.position_at(J2000)
    moon = catalogue['Moon'].orbit.position_at(J2000)
    np.testing.assert_allclose(positions['Earth'].heliocentric, earth, atol=1e-15)
    np.testing.assert_allclose(positions['Moon'].heliocentric, earth + moon, atol=1e-15)
    np.testing.assert_array_equal(system.light_time_sun_position, np.zeros(3))
    assert all(sample.light_time == 0.0 for sample in positions.values())


def test_earth_is_one_au_from_sun(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    assert system.observer == 'Earth'
    assert system.get_distance_to_planet('Sun') == pytest.approx(1.0, rel=1e-3)
    assert system.get_distance_to_planet('Earth') == 0.0


def test_light_time_delays_follow_observer_distance(system: SolarSystem) -> None:
    positions = system.compute_positions(J2000)
    expected_moon_delay = light_time_days(384400.0 / AU_KM)
    assert positions['Moon'].light_time == pytest.approx(expected_moon_delay, rel=1e-3)
    assert positions['Earth'].light_time == 0.0
    assert positions['Sun'].light_time == pytest.approx(light_time_days(1.0), rel=1e-3)
    assert all(sample.jde == J2000 for sample in positions.values())


def test_light_time_sun_offset_is_earth_motion(system: SolarSystem) -> None:
    """About 30 km/s over 499 s: roughly 1e-4 AU, along the Earth's velocity."""
    system.compute_positions(J2000)
    offset = system.light_time_sun_position
    assert 5e-5 < float(np.linalg.norm(offset)) < 2e-4
    earth = system.catalogue['Earth'].orbit
    velocity = earth.position_at(J2000 + 0.01) - earth.position_at(J2000 - 0.01)
    assert float(np.dot(offset, velocity)) > 0.0


def test_light_time_moves_moon_by_its_delay(system: SolarSystem) -> None:
    positions = system.compute_positions(J2000)
    catalogue = system.catalogue
    delay = positions['Moon'].light_time
    earth = catalogue['Earth'].orbit.position_at(J2000 - positions['Earth'].light_time)
    moon = catalogue['Moon'].orbit.position_at(J2000 - delay)
    np.testing.assert_allclose(positions['Moon'].heliocentric, earth + moon, atol=1e-15)


def test_unknown_observer_is_rejected(system: SolarSystem) -> None:
    with pytest.raises(ValueError):
        PositionEngine().compute(system.catalogue, J2000, 'Vulcan')


def test_sun_observer(system: SolarSystem) -> None:
    positions = system.compute_positions(J2000, observer='Sun')
    assert positions['Sun'].distance == 0.0
    assert positions['Earth'].distance == pytest.approx(1.0, rel=1e-3)
