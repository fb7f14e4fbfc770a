"""Tests for per-body rotation state and model matrices."""

from __future__ import annotations

import math

import numpy as np
import pytest

from solar_system.bodies import greenwich_mean_sidereal_time
from solar_system.config import SolarSystemConfig
from solar_system.constants import J2000
from solar_system.positions import light_time_days
from solar_system.system import SolarSystem
from solar_system.transforms import TransformEngine


@pytest.mark.parametrize('light_time', [True, False])
def test_model_translation_matches_heliocentric_position(system: SolarSystem, light_time: bool) -> None:
    system.config.flag_light_travel_time = light_time
    system.compute_positions(J2000 + 123.4)
    for name, sample in system.positions.items():
        np.testing.assert_allclose(system.get_transform(name).translation, sample.heliocentric, atol=1e-14)


def test_model_rotation_is_orthonormal(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    rot = system.get_transform('Moon').model[:3, :3]
    np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-12)
    np.testing.assert_array_equal(system.get_transform('Moon').model[3], [0.0, 0.0, 0.0, 1.0])


def test_transform_times_use_delta_t_and_light_delay(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    earth = system.get_transform('Earth')
    assert earth.jde == J2000
    assert earth.jd == pytest.approx(J2000 - 64.0 / 86400.0)
    sun = system.get_transform('Sun')
    delay = light_time_days(1.0)
    assert sun.jde == pytest.approx(J2000 - delay, abs=delay * 1e-3)
    assert sun.jde - sun.jd == pytest.approx(64.0 / 86400.0)


def test_earth_rotation_is_mean_sidereal_time(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    earth = system.get_transform('Earth')
    assert earth.axis_rotation == pytest.approx(greenwich_mean_sidereal_time(earth.jd))


def test_satellite_tilt_from_rotation_elements(system: SolarSystem) -> None:
    system.compute_positions(J2000)
    earth = system.catalogue['Earth']
    np.testing.assert_allclose(earth.rot_local_to_parent[2, 2], math.cos(earth.rotation.obliquity))


def test_sphere_scale_from_configuration(system: SolarSystem) -> None:
    system.config.flag_moon_scale = True
    system.config.moon_scale = 4.0
    system.config.flag_minor_body_scale = True
    system.config.minor_body_scale = 10.0
    system.compute_positions(J2000)
    assert system.get_transform('Moon').sphere_scale == 4.0
    assert system.get_transform('Ceres').sphere_scale == 10.0
    assert system.get_transform('Earth').sphere_scale == 1.0


def test_rotation_offset_and_period(system: SolarSystem) -> None:
    moon = system.catalogue['Moon']
    moon.rotation.period = 2.0
    moon.rotation.offset = 15.0
    assert moon.sidereal_time(J2000, J2000 + 1.0) == pytest.approx(195.0)
    assert moon.sidereal_time(J2000, J2000 + 2.0) == pytest.approx(15.0)


def test_engine_uses_injected_delta_t(system: SolarSystem) -> None:
    config = SolarSystemConfig(flag_light_travel_time=False)
    system.config.flag_light_travel_time = False
    system.compute_positions(J2000)
    engine = TransformEngine(config, delta_t=lambda jde: 86400.0)
    transforms = engine.compute(system.catalogue, J2000, system.observer_position)
    assert transforms['Earth'].jd == pytest.approx(J2000 - 1.0)
