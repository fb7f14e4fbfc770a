"""Solar System body model: physical data, rotation elements, rings, category records.

A Body references its parent and satellites by english name only; the
Catalogue owns every Body and resolves those handles.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import cspyce
import numpy as np

from solar_system.constants import (
    DEFAULT_ALBEDO,
    DEFAULT_COLOR,
    DEFAULT_DUST_BRIGHTNESS_FACTOR,
    DEFAULT_DUST_LENGTH_FACTOR,
    DEFAULT_DUST_WIDTH_FACTOR,
    DEFAULT_OUTGAS_FALLOFF,
    DEFAULT_OUTGAS_INTENSITY,
    DEFAULT_ROUGHNESS,
    J2000,
    MINOR_BODY_TYPES,
    NO_MAGNITUDE,
    TYPE_COMET,
)
from solar_system.orbits.frames import MAT_J2000_TO_VSOP87, xrotation, zrotation

if TYPE_CHECKING:
    from solar_system.orbits import Orbit


class BodyCategory(enum.Enum):
    """Which extension record a body carries."""

    ORDINARY = 'ordinary'
    MINOR = 'minor'
    COMET = 'comet'


def category_for_type(body_type: str, name: str) -> BodyCategory:
    """Select the body category from the catalogue ``type`` field.

    Minor-body types map to MINOR except for Pluto, which keeps its planetary
    treatment; ``comet`` maps to COMET; everything else is ORDINARY.
    """
    if body_type in MINOR_BODY_TYPES and 'Pluto' not in name:
        return BodyCategory.MINOR
    if body_type == TYPE_COMET:
        return BodyCategory.COMET
    return BodyCategory.ORDINARY


@dataclass
class RotationElements:
    """Rotation of a body's equator relative to its parent's frame.

    Attributes:
        period: Sidereal rotation period in days.
        offset: Rotation angle at epoch in degrees.
        epoch: JDE of the reference epoch.
        obliquity: Obliquity of the equator in radians.
        ascending_node: Ascending node of the equator in radians.
        precession_rate: Rate of the node in radians per day.
        orbit_visualization_period: Orbit drawing period in days (0 = from orbit).
    """

    period: float = 1.0
    offset: float = 0.0
    epoch: float = J2000
    obliquity: float = 0.0
    ascending_node: float = 0.0
    precession_rate: float = 0.0
    orbit_visualization_period: float = 0.0


@dataclass(frozen=True)
class Ring:
    """Planetary ring annulus; radii in AU."""

    inner_radius: float
    outer_radius: float
    texture: str = ''

    @property
    def size(self) -> float:
        return self.outer_radius


@dataclass
class MinorPlanetInfo:
    """Minor-planet fields; magnitudes use the H-G system."""

    minor_planet_number: int = 0
    provisional_designation: str = ''
    absolute_magnitude: float | None = None
    slope_parameter: float | None = None
    semi_major_axis: float = 0.0


@dataclass
class CometInfo:
    """Comet fields; magnitudes use the g-k system."""

    absolute_magnitude: float | None = None
    slope_parameter: float | None = None
    semi_major_axis: float | None = None
    outgas_intensity: float = DEFAULT_OUTGAS_INTENSITY
    outgas_falloff: float = DEFAULT_OUTGAS_FALLOFF
    dust_width_factor: float = DEFAULT_DUST_WIDTH_FACTOR
    dust_length_factor: float = DEFAULT_DUST_LENGTH_FACTOR
    dust_brightness_factor: float = DEFAULT_DUST_BRIGHTNESS_FACTOR


@dataclass
class Body:
    """One Solar System object and its per-step computed state."""

    name: str
    body_type: str
    orbit: Orbit
    radius: float = 0.0
    category: BodyCategory = BodyCategory.ORDINARY
    name_i18n: str = ''
    oblateness: float = 0.0
    albedo: float = DEFAULT_ALBEDO
    roughness: float = DEFAULT_ROUGHNESS
    absolute_magnitude: float = NO_MAGNITUDE
    color: tuple[float, float, float] = DEFAULT_COLOR
    rotation: RotationElements = field(default_factory=RotationElements)
    rings: Ring | None = None
    hidden: bool = False
    close_orbit: bool = True
    atmosphere: bool = False
    halo: bool = True
    parent: str | None = None
    children: list[str] = field(default_factory=list)
    source: str = ''
    minor: MinorPlanetInfo | None = None
    comet: CometInfo | None = None
    # Per-step state, written by the position and transform engines.
    ecliptic_pos: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    position_jde: float | None = None
    rot_local_to_parent: np.ndarray = field(default_factory=lambda: np.eye(3, dtype=np.float64))
    axis_rotation: float = 0.0

    def __post_init__(self) -> None:
        if not self.name_i18n:
            self.name_i18n = self.name

    @property
    def is_major(self) -> bool:
        """True for ordinary (non-removable) bodies."""
        return self.category is BodyCategory.ORDINARY

    @property
    def is_minor_body(self) -> bool:
        """True for minor planets and comets."""
        return self.category is not BodyCategory.ORDINARY

    def compute_position(self, jde: float) -> np.ndarray:
        """Evaluate the orbit at JDE into ``ecliptic_pos`` (parent-relative, AU)."""
        self.ecliptic_pos = np.asarray(self.orbit.position_at(jde), dtype=np.float64)
        self.position_jde = jde
        return self.ecliptic_pos

    def sidereal_time(self, jd: float, jde: float) -> float:
        """Rotation angle of the prime meridian in degrees.

        Earth uses Greenwich mean sidereal time from the UT Julian day; other
        bodies use their rotation period and offset at JDE.
        """
        if self.name == 'Earth':
            return greenwich_mean_sidereal_time(jd)
        re = self.rotation
        if re.period == 0.0:
            return re.offset
        rotations = (jde - re.epoch) / re.period
        remainder = rotations - math.floor(rotations)
        return remainder * 360.0 + re.offset

    def compute_trans_matrix(self, jd: float, jde: float) -> None:
        """Update ``axis_rotation`` and, for satellites of any body, ``rot_local_to_parent``."""
        self.axis_rotation = self.sidereal_time(jd, jde)
        if self.parent is not None:
            re = self.rotation
            self.rot_local_to_parent = zrotation(
                re.ascending_node - re.precession_rate * (jde - re.epoch)
            ) @ xrotation(re.obliquity)


def greenwich_mean_sidereal_time(jd: float) -> float:
    """Greenwich mean sidereal time in degrees [0, 360) for a UT Julian day (IAU 1982)."""
    t = (jd - J2000) / 36525.0
    gmst = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return gmst % 360.0


def pole_to_rotation(pole_ra: float, pole_de: float) -> tuple[float, float]:
    """Convert an IAU north pole (J2000 RA/Dec, radians) to (obliquity, ascending node).

    The pole is rotated into VSOP87 axes; obliquity is the pole's colatitude
    and the equator's node lies 90 degrees ahead of the pole's longitude.

    Parameters:
        pole_ra: Right ascension of the north pole (radians).
        pole_de: Declination of the north pole (radians).

    Returns:
        (obliquity, ascending_node) in radians.
    """
    j2000_pole = np.asarray(cspyce.radrec(1.0, pole_ra, pole_de), dtype=np.float64)
    vsop87_pole = MAT_J2000_TO_VSOP87 @ j2000_pole
    _rng, ra, de = cspyce.recrad(vsop87_pole)
    return (math.pi / 2.0 - de, ra + math.pi / 2.0)
