"""Tests for disk occultation and the solar eclipse factor."""

from __future__ import annotations

import math
from pathlib import Path

import pytest
from conftest import FIXED_GEOMETRY, MOON_DISTANCE_AU, make_registry, write_catalogue

from solar_system import eclipse
from solar_system.constants import AU_KM, J2000
from solar_system.system import SolarSystem


def test_point_occluder_never_dims() -> None:
    for d in (0.0, 0.5, 1.0, 3.0):
        assert eclipse.disk_illumination(1.0, 0.0, d) == 1.0


def test_equal_disks_centered_is_total() -> None:
    assert eclipse.disk_illumination(1.0, 1.0, 0.0) == 0.0


def test_larger_occluder_is_total() -> None:
    assert eclipse.disk_illumination(1.0, 2.0, 0.5) == 0.0


def test_annular_eclipse() -> None:
    assert eclipse.disk_illumination(1.0, 0.5, 0.0) == pytest.approx(0.75)
    assert eclipse.disk_illumination(1.0, 0.5, 0.3) == pytest.approx(0.75)


def test_partial_overlap_of_equal_disks() -> None:
    expected = 1.0 - (2.0 * math.pi / 3.0 - math.sqrt(3.0) / 2.0) / math.pi
    assert eclipse.disk_illumination(1.0, 1.0, 1.0) == pytest.approx(expected)


def test_illumination_grows_with_separation() -> None:
    values = [eclipse.disk_illumination(1.0, 0.8, d) for d in (0.0, 0.3, 0.6, 1.0, 1.5, 1.8, 2.0)]
    assert values == sorted(values)
    assert 0.0 <= values[0] and values[-1] == 1.0


def _fixed_system(tmp_path: Path, moon_offset: tuple[float, float, float]) -> SolarSystem:
    major = write_catalogue(tmp_path, 'fixed.ini', FIXED_GEOMETRY)
    ss = SolarSystem(registry=make_registry(moon_offset), delta_t=lambda jde: 64.0)
    ss.load_planets(major, [])
    ss.compute_positions(J2000)
    return ss


def test_moon_in_front_of_sun(tmp_path: Path) -> None:
    ss = _fixed_system(tmp_path, (-MOON_DISTANCE_AU, 0.0, 0.0))
    sun_radius = 696000.0 / AU_KM / 1.0
    moon_radius = 1737.4 / AU_KM / MOON_DISTANCE_AU
    expected = 1.0 - (moon_radius / sun_radius) ** 2
    assert ss.get_eclipse_factor() == pytest.approx(expected, rel=1e-6)
    assert not ss.near_lunar_eclipse()


def test_moon_away_from_sun(tmp_path: Path) -> None:
    ss = _fixed_system(tmp_path, (0.0, MOON_DISTANCE_AU, 0.0))
    assert ss.get_eclipse_factor() == 1.0


def test_moon_in_earth_shadow(tmp_path: Path) -> None:
    ss = _fixed_system(tmp_path, (MOON_DISTANCE_AU, 0.0, 0.0))
    assert ss.near_lunar_eclipse()
    assert eclipse.parent_shadow_factor(ss.catalogue, 'Moon') == 0.0
    eclipsed = ss.get_planet_vmagnitude('Moon')
    assert math.isfinite(eclipsed)
    assert eclipse.parent_shadow_factor(ss.catalogue, 'Earth') == 1.0


def test_sun_observer_sees_full_sun(tmp_path: Path) -> None:
    ss = _fixed_system(tmp_path, (-MOON_DISTANCE_AU, 0.0, 0.0))
    ss.compute_positions(J2000, observer='Sun')
    assert ss.get_eclipse_factor() == 1.0


def test_eclipse_factor_requires_a_step(system: SolarSystem) -> None:
    with pytest.raises(ValueError):
        system.get_eclipse_factor()
