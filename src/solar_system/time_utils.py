"""Time conversion wrappers around rms-julian: UTC text, TDB seconds, JDE, delta-T."""

from __future__ import annotations

import logging
import re

import julian

from solar_system.config import get_leapsecs_path
from solar_system.constants import J2000, SECONDS_PER_DAY

logger = logging.getLogger(__name__)

# Seconds from midnight to noon; J2000 day numbers start at midnight, TDB at noon.
_NOON_SECONDS = 43200.0

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load leap seconds file if not already loaded.

    rms-julian requires a NAIF LSK (e.g. naif0012.tls). If the configured file
    is missing or unreadable, falls back to rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    try:
        julian.load_lsk(path)
        _leapsecs_loaded = True
    except (OSError, KeyError, ValueError) as e:
        logger.info(
            'Leap seconds from %s not used (%s); using rms-julian bundled LSK.',
            path,
            e,
        )
        try:
            julian.load_lsk()
        except Exception as fallback_err:
            logger.error(
                'Fallback to rms-julian bundled LSK failed: %s',
                fallback_err,
                exc_info=True,
            )
            raise
        _leapsecs_loaded = True


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse date/time string to UTC (day, sec).

    Parameters:
        string: Date/time string (format accepted by rms-julian). A trailing
            ``Z`` and the compact ``YYYY HH:MM:SS`` form are also accepted.

    Returns:
        (day, sec) where day is days since 2000-01-01, sec is seconds within
        that day; None on parse failure.
    """
    _ensure_leapsecs()
    candidate_strings = [string]
    stripped = string.strip()
    if stripped.endswith(('Z', 'z')):
        candidate_strings.append(stripped[:-1])
    year_hms_match = re.fullmatch(r'(\d{4})\s+(\d{1,2}:\d{2}:\d{2})', stripped)
    if year_hms_match is not None:
        year, hms = year_hms_match.groups()
        candidate_strings.append(f'{year}-01-01 {hms}')
    for candidate in candidate_strings:
        try:
            result = julian.day_sec_from_string(candidate)
            day, sec = result[0], result[1]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def tdb_from_jde(jde: float) -> float:
    """Convert Julian Ephemeris Day to TDB seconds past J2000 (SPICE ET)."""
    return (jde - J2000) * SECONDS_PER_DAY


def jde_from_tdb(tdb: float) -> float:
    """Convert TDB seconds past J2000 to Julian Ephemeris Day."""
    return J2000 + tdb / SECONDS_PER_DAY


def jde_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to JDE.

    Parameters:
        day: Days since 2000-01-01.
        sec: Seconds within that day.

    Returns:
        Julian Ephemeris Day.
    """
    _ensure_leapsecs()
    tai = float(julian.tai_from_day_sec(day, sec))
    return jde_from_tdb(float(julian.tdb_from_tai(tai)))


def jde_from_string(string: str) -> float | None:
    """Parse UTC date/time text and return JDE, or None on parse failure."""
    parsed = parse_datetime(string)
    if parsed is None:
        return None
    return jde_from_day_sec(*parsed)


def delta_t_seconds(jde: float) -> float:
    """Return delta-T (TT - UT) in seconds at the given JDE.

    UT is approximated by UTC from the loaded leap-second table, so the result
    is 32.184 s plus the accumulated leap seconds (to within the sub-second
    TDB-TT and UT1-UTC terms).

    Parameters:
        jde: Julian Ephemeris Day.

    Returns:
        Delta-T in seconds.
    """
    _ensure_leapsecs()
    tdb = tdb_from_jde(jde)
    tai = float(julian.tai_from_tdb(tdb))
    day, sec = julian.day_sec_from_tai(tai)
    utc = int(day) * SECONDS_PER_DAY + float(sec) - _NOON_SECONDS
    return tdb - utc


def jd_ut_from_jde(jde: float) -> float:
    """Return the Universal-Time Julian Day matching a JDE."""
    return jde - delta_t_seconds(jde) / SECONDS_PER_DAY


def format_jde(jde: float, fmt: str | None = None) -> str:
    """Format JDE as UTC string.

    Parameters:
        jde: Julian Ephemeris Day.
        fmt: Optional format string for rms-julian; None = default.

    Returns:
        Formatted UTC string.
    """
    _ensure_leapsecs()
    tai = float(julian.tai_from_tdb(tdb_from_jde(jde)))
    if fmt is not None:
        return julian.format_tai(tai, fmt)
    return julian.format_tai(tai)
