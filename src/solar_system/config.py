"""Configuration: catalogue/SPICE paths from environment and display settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Paths; env var overrides with sensible defaults.
DEFAULT_DATA_PATH = Path(__file__).resolve().parent / 'data'
DEFAULT_SPICE_PATH = '/var/www/SPICE/'

MAJOR_CATALOGUE = 'ssystem_major.ini'
MINOR_CATALOGUE = 'ssystem_minor.ini'


def get_data_path() -> str:
    """Return catalogue data directory (SSYSTEM_DATA_PATH env var or bundled data).

    Returns:
        Path string.
    """
    return os.environ.get('SSYSTEM_DATA_PATH', str(DEFAULT_DATA_PATH))


def get_user_data_path() -> str | None:
    """Return user catalogue directory (SSYSTEM_USER_DATA_PATH env var), if set.

    Returns:
        Path string or None.
    """
    path = os.environ.get('SSYSTEM_USER_DATA_PATH', '').strip()
    return path or None


def get_spice_path() -> str:
    """Return SPICE kernel root directory (SPICE_PATH env var or default).

    Returns:
        Path string.
    """
    return os.environ.get('SPICE_PATH', DEFAULT_SPICE_PATH)


def get_leapsecs_path() -> str:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Prefers JULIAN_LEAPSECS, then a .tls file under SPICE_PATH.

    Returns:
        Path string to LSK file (may not exist; callers fall back).
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    base = Path(get_spice_path())
    for name in ('naif0012.tls', 'naif0011.tls', 'naif0010.tls', 'leapseconds.tls'):
        p = base / name
        if p.exists():
            return str(p)
    return str(base / 'leapseconds.tls')


def find_catalogue_files(name: str) -> list[str]:
    """Return every existing copy of a catalogue file, user directory first.

    Parameters:
        name: File name (e.g. 'ssystem_minor.ini').

    Returns:
        List of path strings; empty if no copy exists.
    """
    candidates: list[Path] = []
    user_path = get_user_data_path()
    if user_path is not None:
        candidates.append(Path(user_path) / name)
    candidates.append(Path(get_data_path()) / name)
    return [str(p) for p in candidates if p.is_file()]


def find_catalogue_file(name: str) -> str | None:
    """Return the first existing copy of a catalogue file, or None."""
    found = find_catalogue_files(name)
    return found[0] if found else None


@dataclass
class SolarSystemConfig:
    """Display and computation settings pushed in by the surrounding application.

    The Position Engine only sees ``flag_light_travel_time``; scale factors and
    colors are consumed by the Transform Engine and render-facing callers.
    """

    flag_light_travel_time: bool = True
    flag_planets: bool = True
    flag_labels: bool = True
    flag_orbits: bool = False
    flag_moon_scale: bool = False
    moon_scale: float = 1.0
    flag_minor_body_scale: bool = False
    minor_body_scale: float = 1.0
    labels_color: tuple[float, float, float] = (0.4, 0.4, 0.8)
    orbits_color: tuple[float, float, float] = (0.7, 0.2, 0.2)
    orbit_colors: dict[str, tuple[float, float, float]] = field(default_factory=dict)

    def sphere_scale(self, *, is_moon: bool, is_minor: bool) -> float:
        """Return the drawing scale factor for a body.

        Parameters:
            is_moon: True for the primary planet's natural satellite.
            is_minor: True for minor bodies and comets.

        Returns:
            Scale factor (1.0 when the matching flag is off).
        """
        if is_moon and self.flag_moon_scale:
            return self.moon_scale
        if is_minor and self.flag_minor_body_scale:
            return self.minor_body_scale
        return 1.0

    def orbit_color(self, body_type: str) -> tuple[float, float, float]:
        """Return the orbit color for a body type, falling back to ``orbits_color``."""
        return self.orbit_colors.get(body_type, self.orbits_color)
