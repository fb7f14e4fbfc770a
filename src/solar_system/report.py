"""Plain-text tables of body positions for the command line."""

from __future__ import annotations

import math
from typing import TextIO

from solar_system.system import SolarSystem
from solar_system.time_utils import format_jde

# (heading, width) per column of the positions table
POSITION_COLUMNS: tuple[tuple[str, int], ...] = (
    ('Body', 24),
    ('Type', 22),
    ('X (AU)', 14),
    ('Y (AU)', 14),
    ('Z (AU)', 14),
    ('Dist (AU)', 14),
    ('Mag', 7),
    ('Phase', 7),
    ('Elong', 7),
)


class Record:
    """Line buffer: fields joined by one blank, each padded to its column width."""

    def __init__(self, max_length: int = 4096) -> None:
        self._parts: list[str] = []
        self._max_length = max_length

    def init(self) -> None:
        """Clear the line."""
        self._parts = []

    def append(self, string: str, width: int = 0, left: bool = False) -> None:
        """Append a field, right-aligned to ``width`` (left-aligned if ``left``)."""
        field = string.ljust(width) if left else string.rjust(width)
        length = len(self.get_line())
        remaining = self._max_length - length - (1 if self._parts else 0)
        if remaining <= 0:
            return
        self._parts.append(field[:remaining])

    def write(self, stream: TextIO) -> None:
        """Write the current line (if not blank) and start a new one."""
        line = self.get_line()
        if line:
            stream.write(line + '\n')
        self.init()

    def get_line(self) -> str:
        return ' '.join(self._parts).rstrip()


def _format_float(value: float, fmt: str) -> str:
    if math.isnan(value):
        return '-'
    return format(value, fmt)


def write_header(stream: TextIO, system: SolarSystem) -> None:
    """Write the step time, observer and light-time mode as comment lines."""
    jde = system.jde
    if jde is not None:
        stream.write(f'# JDE {jde:.6f} ({format_jde(jde)} UTC)\n')
    stream.write(f'# Observer: {system.observer}\n')
    mode = 'on' if system.config.flag_light_travel_time else 'off'
    stream.write(f'# Light-time correction: {mode}\n')


def write_positions(stream: TextIO, system: SolarSystem, names: list[str]) -> None:
    """Write one row per body: heliocentric position, distance, magnitude, angles.

    Parameters:
        stream: Output stream.
        system: SolarSystem with positions computed for the current step.
        names: Body names in output order.
    """
    rec = Record()
    for i, (heading, width) in enumerate(POSITION_COLUMNS):
        rec.append(heading, width, left=i < 2)
    rec.write(stream)
    for name in names:
        sample = system.get_position(name)
        x, y, z = (float(v) for v in sample.heliocentric)
        rec.append(name, POSITION_COLUMNS[0][1], left=True)
        rec.append(system.get_planet_type(name), POSITION_COLUMNS[1][1], left=True)
        rec.append(f'{x:.9f}', POSITION_COLUMNS[2][1])
        rec.append(f'{y:.9f}', POSITION_COLUMNS[3][1])
        rec.append(f'{z:.9f}', POSITION_COLUMNS[4][1])
        rec.append(f'{sample.distance:.9f}', POSITION_COLUMNS[5][1])
        if name == system.observer:
            mag = phase = elong = math.nan
        else:
            mag = system.get_planet_vmagnitude(name)
            phase = math.degrees(system.get_phase_angle_for_planet(name))
            elong = math.degrees(system.get_elongation_for_planet(name))
        rec.append(_format_float(mag, '.2f'), POSITION_COLUMNS[6][1])
        rec.append(_format_float(phase, '.2f'), POSITION_COLUMNS[7][1])
        rec.append(_format_float(elong, '.2f'), POSITION_COLUMNS[8][1])
        rec.write(stream)
