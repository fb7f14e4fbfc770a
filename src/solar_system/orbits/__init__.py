"""Orbit model: elliptical and comet element orbits plus analytic series.

Every variant exposes ``position_at(jde) -> numpy.ndarray`` (AU, relative to
the parent body, VSOP87 ecliptic axes).
"""

from __future__ import annotations

from solar_system.orbits.comet import CometOrbit
from solar_system.orbits.elliptical import EllipticalOrbit
from solar_system.orbits.series import SeriesRegistry, SpecialSeries, default_registry

Orbit = EllipticalOrbit | CometOrbit | SpecialSeries

__all__ = [
    'CometOrbit',
    'EllipticalOrbit',
    'Orbit',
    'SeriesRegistry',
    'SpecialSeries',
    'default_registry',
]
