"""Shared fixtures: small catalogues and a SolarSystem that needs no SPICE kernels."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from solar_system.orbits import SeriesRegistry
from solar_system.system import SolarSystem

# Earth on a 1 AU orbit, placed where r == a at J2000 (E = 90 deg).
# The Moon is listed before the Earth to exercise the dependency order.
SUN_EARTH_MOON = """\
[moon]
name = Moon
parent = Earth
type = moon
radius = 1737.4
albedo = 0.12
coord_func = ell_orbit
orbit_SemiMajorAxis = 384400
orbit_Eccentricity = 0.0
orbit_Period = 27.321661
orbit_MeanAnomaly = 0.0

[sun]
name = Sun
parent = none
type = star
radius = 696000
coord_func = sun_special

[earth]
name = Earth
parent = Sun
type = planet
radius = 6378.1366
albedo = 0.367
coord_func = ell_orbit
orbit_SemiMajorAxis = 149597870.691
orbit_Eccentricity = 0.0167
orbit_MeanAnomaly = 89.043
rot_obliquity = 23.4392803055556
rot_periode = 23.9344694
"""

MINOR_BODIES = """\
[ceres]
name = Ceres
type = asteroid
minor_planet_number = 1
radius = 473
absolute_magnitude = 3.34
slope_parameter = 0.12
coord_func = comet_orbit
orbit_Epoch = 2451545.0
orbit_MeanAnomaly = 6.07
orbit_SemiMajorAxis = 2.7668
orbit_Eccentricity = 0.0789
orbit_Inclination = 10.587
orbit_AscendingNode = 80.393
orbit_ArgOfPericenter = 73.924

[encke]
name = 2P/Encke
type = comet
absolute_magnitude = 11.5
slope_parameter = 6.0
coord_func = comet_orbit
orbit_TimeAtPericenter = 2451797.0
orbit_PericenterDistance = 0.3359
orbit_Eccentricity = 0.8483
orbit_Inclination = 11.78
orbit_AscendingNode = 334.57
orbit_ArgOfPericenter = 186.54
"""

# Fixed geometry for eclipse tests: Earth at (1, 0, 0) AU, Moon on the
# Sun-Earth line at lunar distance.
MOON_DISTANCE_AU = 0.00257

FIXED_GEOMETRY = """\
[sun]
name = Sun
parent = none
type = star
radius = 696000
coord_func = sun_special

[earth]
name = Earth
parent = Sun
type = planet
radius = 6378.1366
coord_func = earth_fixed

[moon]
name = Moon
parent = Earth
type = moon
radius = 1737.4
albedo = 0.12
coord_func = moon_fixed
"""


def _zeros(jde: float) -> np.ndarray:
    return np.zeros(3)


def make_registry(moon_offset: tuple[float, float, float] = (-MOON_DISTANCE_AU, 0.0, 0.0)) -> SeriesRegistry:
    """Registry with the Sun at the origin and fixed Earth/Moon series."""
    registry = SeriesRegistry()
    registry.register('sun_special', _zeros)
    registry.register('earth_fixed', lambda jde: np.array([1.0, 0.0, 0.0]))
    registry.register('moon_fixed', lambda jde: np.array(moon_offset))
    return registry


def write_catalogue(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding='utf-8')
    return path


@pytest.fixture
def registry() -> SeriesRegistry:
    return make_registry()


@pytest.fixture
def major_path(tmp_path: Path) -> Path:
    return write_catalogue(tmp_path, 'ssystem_major.ini', SUN_EARTH_MOON)


@pytest.fixture
def minor_path(tmp_path: Path) -> Path:
    return write_catalogue(tmp_path, 'ssystem_minor.ini', MINOR_BODIES)


@pytest.fixture
def system(major_path: Path, minor_path: Path, registry: SeriesRegistry) -> SolarSystem:
    """Loaded Sun/Earth/Moon system plus two minor bodies, with a fixed delta-T."""
    ss = SolarSystem(registry=registry, delta_t=lambda jde: 64.0)
    ss.load_planets(major_path, [minor_path])
    return ss
