"""Keplerian orbit given by mean anomaly at an epoch (``ell_orbit``)."""

from __future__ import annotations

import math

import numpy as np

from solar_system.constants import J2000
from solar_system.orbits.frames import orbit_plane_rotation, parent_frame_rotation
from solar_system.orbits.kepler import plane_position


class EllipticalOrbit:
    """Conic orbit relative to the parent body, evaluated by Kepler's equation.

    Distances in AU, angles in radians, period in days. Eccentricity may
    approach 1; exactly 1 is the parabolic branch, where the semi-major axis is
    undefined and ``period`` holds 2*pi over the parabolic rate.
    """

    def __init__(
        self,
        pericenter_distance: float,
        eccentricity: float,
        inclination: float,
        ascending_node: float,
        arg_of_pericenter: float,
        mean_anomaly: float,
        period: float,
        epoch: float = J2000,
        parent_rot_obliquity: float = 0.0,
        parent_rot_ascending_node: float = 0.0,
        parent_rot_j2000_longitude: float = 0.0,
    ) -> None:
        if not (math.isfinite(pericenter_distance) and pericenter_distance > 0.0):
            raise ValueError(f'pericenter distance must be positive, got {pericenter_distance!r}')
        if not (math.isfinite(eccentricity) and eccentricity >= 0.0):
            raise ValueError(f'eccentricity must be finite and non-negative, got {eccentricity!r}')
        if period <= 0.0:
            raise ValueError(f'period must be positive, got {period!r}')
        self.pericenter_distance = pericenter_distance
        self.eccentricity = eccentricity
        self.inclination = inclination
        self.ascending_node = ascending_node
        self.arg_of_pericenter = arg_of_pericenter
        self.mean_anomaly = mean_anomaly
        self.period = period
        self.epoch = epoch
        self.parent_rot_obliquity = parent_rot_obliquity
        self.parent_rot_ascending_node = parent_rot_ascending_node
        self.parent_rot_j2000_longitude = parent_rot_j2000_longitude
        self._rotation = parent_frame_rotation(
            parent_rot_obliquity, parent_rot_ascending_node, parent_rot_j2000_longitude
        ) @ orbit_plane_rotation(ascending_node, inclination, arg_of_pericenter)

    @property
    def mean_motion(self) -> float:
        """Mean motion in radians per day."""
        return 2.0 * math.pi / self.period

    @property
    def semi_major_axis(self) -> float:
        """Semi-major axis in AU (0.0 for a parabola, negative for a hyperbola)."""
        if self.eccentricity == 1.0:
            return 0.0
        return self.pericenter_distance / (1.0 - self.eccentricity)

    def position_at(self, jde: float) -> np.ndarray:
        """Position relative to the parent body at JDE (AU, VSOP87 axes).

        Parameters:
            jde: Julian Ephemeris Day.

        Returns:
            Length-3 array.
        """
        n = self.mean_motion
        tau = (jde - self.epoch) + self.mean_anomaly / n
        x, y = plane_position(self.pericenter_distance, self.eccentricity, n, tau)
        return self._rotation @ np.array([x, y, 0.0], dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f'EllipticalOrbit(q={self.pericenter_distance!r}, e={self.eccentricity!r}, '
            f'period={self.period!r}, epoch={self.epoch!r})'
        )
