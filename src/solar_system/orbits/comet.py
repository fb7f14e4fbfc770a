"""Comet orbit given by time of pericenter passage (``comet_orbit``)."""

from __future__ import annotations

import math

import numpy as np

from solar_system.constants import DEFAULT_ORBIT_GOOD_DAYS
from solar_system.orbits.frames import orbit_plane_rotation, parent_frame_rotation
from solar_system.orbits.kepler import plane_position


class CometOrbit:
    """Conic orbit for comets and other near-parabolic bodies.

    The elements are only meaningful within ``orbit_good_days`` of the
    pericenter passage; ``is_valid_at`` reports this and callers decide what
    to do with positions outside the window.
    """

    def __init__(
        self,
        pericenter_distance: float,
        eccentricity: float,
        inclination: float,
        ascending_node: float,
        arg_of_pericenter: float,
        time_at_pericenter: float,
        mean_motion: float,
        orbit_good_days: float = DEFAULT_ORBIT_GOOD_DAYS,
        parent_rot_obliquity: float = 0.0,
        parent_rot_ascending_node: float = 0.0,
        parent_rot_j2000_longitude: float = 0.0,
    ) -> None:
        if not (math.isfinite(pericenter_distance) and pericenter_distance > 0.0):
            raise ValueError(f'pericenter distance must be positive, got {pericenter_distance!r}')
        if not (math.isfinite(eccentricity) and eccentricity >= 0.0):
            raise ValueError(f'eccentricity must be finite and non-negative, got {eccentricity!r}')
        if mean_motion <= 0.0:
            raise ValueError(f'mean motion must be positive, got {mean_motion!r}')
        self.pericenter_distance = pericenter_distance
        self.eccentricity = eccentricity
        self.inclination = inclination
        self.ascending_node = ascending_node
        self.arg_of_pericenter = arg_of_pericenter
        self.time_at_pericenter = time_at_pericenter
        self.mean_motion = mean_motion
        self.orbit_good_days = orbit_good_days
        self._rotation = parent_frame_rotation(
            parent_rot_obliquity, parent_rot_ascending_node, parent_rot_j2000_longitude
        ) @ orbit_plane_rotation(ascending_node, inclination, arg_of_pericenter)

    @property
    def semi_major_axis(self) -> float | None:
        """Semi-major axis in AU for closed orbits, else None."""
        if self.eccentricity >= 1.0:
            return None
        return self.pericenter_distance / (1.0 - self.eccentricity)

    def is_valid_at(self, jde: float) -> bool:
        """True if jde is within the validity window around pericenter.

        A non-positive ``orbit_good_days`` means the elements never expire.
        """
        if self.orbit_good_days <= 0.0:
            return True
        return abs(jde - self.time_at_pericenter) <= self.orbit_good_days

    def position_at(self, jde: float) -> np.ndarray:
        """Position relative to the parent body at JDE (AU, VSOP87 axes)."""
        x, y = plane_position(
            self.pericenter_distance,
            self.eccentricity,
            self.mean_motion,
            jde - self.time_at_pericenter,
        )
        return self._rotation @ np.array([x, y, 0.0], dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f'CometOrbit(q={self.pericenter_distance!r}, e={self.eccentricity!r}, '
            f'T={self.time_at_pericenter!r}, good={self.orbit_good_days!r})'
        )
