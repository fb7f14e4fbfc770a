"""Body catalogue loader: INI records to Body and Orbit objects in a Catalogue.

A catalogue file holds one section per body. Keys used here:

- ``name``, ``parent`` (default ``Sun``; ``none`` for a root), ``type``,
  ``coord_func`` (``ell_orbit``, ``comet_orbit`` or a registered series).
- ``orbit_*`` elements: ``ell_orbit`` distances in km, ``comet_orbit``
  distances in AU, angles in degrees, mean motion in radians/day for
  ``ell_orbit`` and degrees/day for ``comet_orbit``, periods and epochs in
  days / JDE.
- Physical fields: ``radius`` (km), ``oblateness``, ``albedo``,
  ``roughness``, ``color``, ``hidden``, ``absolute_magnitude``,
  ``slope_parameter``, ``rot_*``, ``rings``/``ring_*``.
"""

from __future__ import annotations

import configparser
import logging
import math
from collections.abc import Mapping
from pathlib import Path

from solar_system.bodies import (
    Body,
    BodyCategory,
    CometInfo,
    MinorPlanetInfo,
    Ring,
    RotationElements,
    category_for_type,
    pole_to_rotation,
)
from solar_system.catalogue import Catalogue
from solar_system.constants import (
    AU_KM,
    COMET_ORBIT,
    DAYS_PER_JULIAN_CENTURY,
    DEFAULT_ALBEDO,
    DEFAULT_COLOR,
    DEFAULT_DUST_BRIGHTNESS_FACTOR,
    DEFAULT_DUST_LENGTH_FACTOR,
    DEFAULT_DUST_WIDTH_FACTOR,
    DEFAULT_ORBIT_GOOD_DAYS,
    DEFAULT_OUTGAS_FALLOFF,
    DEFAULT_OUTGAS_INTENSITY,
    DEFAULT_ROTATION_PERIOD_HOURS,
    DEFAULT_ROUGHNESS,
    ELL_ORBIT,
    GK_DEFAULT_SLOPE,
    GK_SLOPE_RANGE,
    HG_DEFAULT_SLOPE,
    HG_SLOPE_RANGE,
    HOURS_PER_DAY,
    J2000,
    MISSING,
    NO_MAGNITUDE,
    ROLE_SECTIONS,
)
from solar_system.errors import (
    CatalogueError,
    LoadError,
    RecordError,
    UnknownOrbitFunctionError,
    UnresolvedParentError,
)
from solar_system.orbits import CometOrbit, EllipticalOrbit, Orbit, SeriesRegistry, default_registry
from solar_system.orbits.frames import parent_j2000_longitude
from solar_system.orbits.kepler import mean_motion_from_pericenter
from solar_system.resolver import Record, catalogue_order, record_name, record_parent

logger = logging.getLogger(__name__)


def read_records(path: str | Path) -> list[Record]:
    """Read a catalogue INI file into (section, fields) records in file order.

    Keys keep their case and values are not interpolated.

    Raises:
        LoadError: If the file is missing or cannot be parsed.
    """
    path = Path(path)
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        with path.open(encoding='utf-8') as f:
            parser.read_file(f)
    except OSError as e:
        raise LoadError(f'cannot read catalogue {path}: {e}', path=str(path)) from e
    except configparser.Error as e:
        raise LoadError(f'cannot parse catalogue {path}: {e}', path=str(path)) from e
    return [(section, dict(parser[section])) for section in parser.sections()]


# Field readers. Missing keys give the default; unparseable values are record errors.


def _get_float(record: Mapping[str, str], key: str, default: float, section: str = '') -> float:
    raw = record.get(key, '').strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RecordError(f'{key}={raw!r} is not a number', section=section) from None


def _get_int(record: Mapping[str, str], key: str, default: int, section: str = '') -> int:
    raw = record.get(key, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RecordError(f'{key}={raw!r} is not an integer', section=section) from None


def _get_bool(record: Mapping[str, str], key: str, default: bool, section: str = '') -> bool:
    raw = record.get(key, '').strip().lower()
    if not raw:
        return default
    try:
        return configparser.ConfigParser.BOOLEAN_STATES[raw]
    except KeyError:
        raise RecordError(f'{key}={raw!r} is not a boolean', section=section) from None


def _get_color(record: Mapping[str, str], key: str, section: str = '') -> tuple[float, float, float]:
    raw = record.get(key, '').strip()
    if not raw:
        return DEFAULT_COLOR
    parts = [p.strip() for p in raw.split(',')]
    if len(parts) != 3:
        raise RecordError(f'{key}={raw!r} is not an r,g,b triple', section=section)
    try:
        r, g, b = (float(p) for p in parts)
    except ValueError:
        raise RecordError(f'{key}={raw!r} is not an r,g,b triple', section=section) from None
    return (r, g, b)


def _parent_rotation(parent: Body | None) -> tuple[float, float, float]:
    """Parent equator orientation for satellite orbits; zeros for Sun-relative orbits."""
    if parent is None or parent.parent is None:
        return (0.0, 0.0, 0.0)
    obliquity = parent.rotation.obliquity
    node = parent.rotation.ascending_node
    return (obliquity, node, parent_j2000_longitude(obliquity, node))


def _require_positive(value: float, key: str, section: str, name: str) -> None:
    if not (math.isfinite(value) and value > 0.0):
        raise RecordError(f'{key} must be positive, got {value!r}', section=section, name=name)


def _build_elliptical(section: str, record: Mapping[str, str], parent: Body | None) -> EllipticalOrbit:
    name = record_name(record)
    epoch = _get_float(record, 'orbit_Epoch', J2000, section)
    e = _get_float(record, 'orbit_Eccentricity', 0.0, section)
    q = _get_float(record, 'orbit_PericenterDistance', MISSING, section)
    if q <= 0.0:
        a = _get_float(record, 'orbit_SemiMajorAxis', MISSING, section)
        if a <= MISSING:
            raise RecordError(
                'you must provide orbit_PericenterDistance or orbit_SemiMajorAxis',
                section=section,
                name=name,
            )
        if e == 1.0:
            raise RecordError(
                'a parabolic orbit needs orbit_PericenterDistance', section=section, name=name
            )
        a /= AU_KM
        q = a * (1.0 - e)
    else:
        q /= AU_KM
    # ell_orbit mean motion is in radians per day
    mean_motion = _get_float(record, 'orbit_MeanMotion', MISSING, section)
    if mean_motion <= MISSING:
        period = _get_float(record, 'orbit_Period', MISSING, section)
        if period <= MISSING:
            period = 2.0 * math.pi / mean_motion_from_pericenter(q, e)
        else:
            _require_positive(period, 'orbit_Period', section, name)
    else:
        _require_positive(mean_motion, 'orbit_MeanMotion', section, name)
        period = 2.0 * math.pi / mean_motion
    inclination = math.radians(_get_float(record, 'orbit_Inclination', 0.0, section))
    node = math.radians(_get_float(record, 'orbit_AscendingNode', 0.0, section))
    argp = _get_float(record, 'orbit_ArgOfPericenter', MISSING, section)
    if argp <= MISSING:
        long_of_pericenter = math.radians(_get_float(record, 'orbit_LongOfPericenter', 0.0, section))
        argp = long_of_pericenter - node
    else:
        argp = math.radians(argp)
        long_of_pericenter = argp + node
    mean_anomaly = _get_float(record, 'orbit_MeanAnomaly', MISSING, section)
    if mean_anomaly <= MISSING:
        mean_longitude = math.radians(_get_float(record, 'orbit_MeanLongitude', 0.0, section))
        mean_anomaly = mean_longitude - long_of_pericenter
    else:
        mean_anomaly = math.radians(mean_anomaly)
    obliquity, parent_node, j2000_longitude = _parent_rotation(parent)
    return EllipticalOrbit(
        q,
        e,
        inclination,
        node,
        argp,
        mean_anomaly,
        period,
        epoch,
        obliquity,
        parent_node,
        j2000_longitude,
    )


def _build_comet(section: str, record: Mapping[str, str], parent: Body | None) -> CometOrbit:
    name = record_name(record)
    e = _get_float(record, 'orbit_Eccentricity', 0.0, section)
    q = _get_float(record, 'orbit_PericenterDistance', MISSING, section)
    if q <= 0.0:
        a = _get_float(record, 'orbit_SemiMajorAxis', MISSING, section)
        if a <= MISSING:
            raise RecordError(
                'you must provide orbit_PericenterDistance or orbit_SemiMajorAxis',
                section=section,
                name=name,
            )
        if e == 1.0:
            raise RecordError(
                'a parabolic orbit needs orbit_PericenterDistance', section=section, name=name
            )
        q = a * (1.0 - e)
    mean_motion = _get_float(record, 'orbit_MeanMotion', MISSING, section)
    if mean_motion <= MISSING:
        period = _get_float(record, 'orbit_Period', MISSING, section)
        if period > MISSING:
            _require_positive(period, 'orbit_Period', section, name)
            mean_motion = 2.0 * math.pi / period
        elif parent is not None and parent.parent is not None:
            raise RecordError(
                'when the parent body is not the sun, you must provide '
                'either orbit_MeanMotion or orbit_Period',
                section=section,
                name=name,
            )
        else:
            mean_motion = mean_motion_from_pericenter(q, e)
    else:
        _require_positive(mean_motion, 'orbit_MeanMotion', section, name)
        mean_motion = math.radians(mean_motion)
    time_at_pericenter = _get_float(record, 'orbit_TimeAtPericenter', MISSING, section)
    if time_at_pericenter <= MISSING:
        epoch = _get_float(record, 'orbit_Epoch', MISSING, section)
        mean_anomaly = _get_float(record, 'orbit_MeanAnomaly', MISSING, section)
        if epoch <= MISSING or mean_anomaly <= MISSING:
            raise RecordError(
                'when you do not provide orbit_TimeAtPericenter, you must provide both '
                'orbit_Epoch and orbit_MeanAnomaly',
                section=section,
                name=name,
            )
        time_at_pericenter = epoch - math.radians(mean_anomaly) / mean_motion
    orbit_good = _get_float(record, 'orbit_good', DEFAULT_ORBIT_GOOD_DAYS, section)
    obliquity, parent_node, j2000_longitude = _parent_rotation(parent)
    return CometOrbit(
        q,
        e,
        math.radians(_get_float(record, 'orbit_Inclination', 0.0, section)),
        math.radians(_get_float(record, 'orbit_AscendingNode', 0.0, section)),
        math.radians(_get_float(record, 'orbit_ArgOfPericenter', 0.0, section)),
        time_at_pericenter,
        mean_motion,
        orbit_good,
        obliquity,
        parent_node,
        j2000_longitude,
    )


def build_orbit(
    section: str,
    record: Mapping[str, str],
    parent: Body | None,
    registry: SeriesRegistry,
) -> Orbit:
    """Construct the orbit selected by the record's ``coord_func``.

    Parameters:
        section: Section name (for diagnostics).
        record: Field mapping.
        parent: Already-constructed parent body, or None for a root.
        registry: Analytic series registry.

    Returns:
        EllipticalOrbit, CometOrbit or SpecialSeries.

    Raises:
        RecordError: Inconsistent or invalid orbital elements.
        UnknownOrbitFunctionError: ``coord_func`` is not known.
    """
    func_name = record.get('coord_func', '').strip()
    name = record_name(record)
    try:
        if func_name == ELL_ORBIT:
            return _build_elliptical(section, record, parent)
        if func_name == COMET_ORBIT:
            return _build_comet(section, record, parent)
    except ValueError as e:
        raise RecordError(str(e), section=section, name=name) from e
    return registry.resolve(func_name, section=section, name=name)


def _read_rotation(section: str, record: Mapping[str, str]) -> RotationElements:
    obliquity = math.radians(_get_float(record, 'rot_obliquity', 0.0, section))
    node = math.radians(_get_float(record, 'rot_equator_ascending_node', 0.0, section))
    # IAU north pole (J2000), if given, overrides obliquity and node.
    pole_ra = math.radians(_get_float(record, 'rot_pole_ra', 0.0, section))
    pole_de = math.radians(_get_float(record, 'rot_pole_de', 0.0, section))
    if pole_ra or pole_de:
        obliquity, node = pole_to_rotation(pole_ra, pole_de)
    period_hours = _get_float(
        record,
        'rot_periode',
        _get_float(record, 'orbit_Period', DEFAULT_ROTATION_PERIOD_HOURS, section),
        section,
    )
    precession = _get_float(record, 'rot_precession_rate', 0.0, section)
    return RotationElements(
        period=period_hours / HOURS_PER_DAY,
        offset=_get_float(record, 'rot_rotation_offset', 0.0, section),
        epoch=_get_float(record, 'rot_epoch', J2000, section),
        obliquity=obliquity,
        ascending_node=node,
        precession_rate=precession * math.pi / (180.0 * DAYS_PER_JULIAN_CENTURY),
        orbit_visualization_period=_get_float(record, 'orbit_visualization_period', 0.0, section),
    )


def _read_slope(
    record: Mapping[str, str],
    section: str,
    default: float,
    valid: tuple[float, float],
) -> tuple[float | None, float | None]:
    magnitude = _get_float(record, 'absolute_magnitude', NO_MAGNITUDE, section)
    if magnitude <= NO_MAGNITUDE:
        return (None, None)
    slope = _get_float(record, 'slope_parameter', default, section)
    if not valid[0] <= slope <= valid[1]:
        slope = default
    return (magnitude, slope)


def build_body(
    section: str,
    record: Mapping[str, str],
    orbit: Orbit,
    parent: str | None = None,
    source: str = '',
) -> Body:
    """Construct a Body (with its category record) from one catalogue record.

    Raises:
        RecordError: Missing name or unparseable field.
    """
    name = record_name(record)
    if not name:
        raise RecordError('record has no name', section=section)
    body_type = record.get('type', '').strip()
    category = category_for_type(body_type, name)
    close_orbit = _get_bool(record, 'closeOrbit', True, section)
    if _get_float(record, 'orbit_Eccentricity', 0.0, section) >= 1.0:
        close_orbit = False
    body = Body(
        name=name,
        body_type=body_type,
        orbit=orbit,
        radius=_get_float(record, 'radius', 0.0, section) / AU_KM,
        category=category,
        oblateness=_get_float(record, 'oblateness', 0.0, section),
        albedo=_get_float(record, 'albedo', DEFAULT_ALBEDO, section),
        roughness=_get_float(record, 'roughness', DEFAULT_ROUGHNESS, section),
        color=_get_color(record, 'color', section),
        rotation=_read_rotation(section, record),
        hidden=_get_bool(record, 'hidden', False, section),
        close_orbit=close_orbit,
        parent=parent,
        source=source,
    )
    if category is BodyCategory.MINOR:
        magnitude, slope = _read_slope(record, section, HG_DEFAULT_SLOPE, HG_SLOPE_RANGE)
        body.minor = MinorPlanetInfo(
            minor_planet_number=_get_int(record, 'minor_planet_number', 0, section),
            provisional_designation=record.get('provisional_designation', '').strip(),
            absolute_magnitude=magnitude,
            slope_parameter=slope,
            semi_major_axis=_get_float(record, 'orbit_SemiMajorAxis', 0.0, section),
        )
    elif category is BodyCategory.COMET:
        magnitude, slope = _read_slope(record, section, GK_DEFAULT_SLOPE, GK_SLOPE_RANGE)
        e = _get_float(record, 'orbit_Eccentricity', 0.0, section)
        q = _get_float(record, 'orbit_PericenterDistance', MISSING, section)
        body.comet = CometInfo(
            absolute_magnitude=magnitude,
            slope_parameter=slope,
            semi_major_axis=q / (1.0 - e) if e < 1.0 and q > 0.0 else None,
            outgas_intensity=_get_float(record, 'outgas_intensity', DEFAULT_OUTGAS_INTENSITY, section),
            outgas_falloff=_get_float(record, 'outgas_falloff', DEFAULT_OUTGAS_FALLOFF, section),
            dust_width_factor=_get_float(record, 'dust_widthfactor', DEFAULT_DUST_WIDTH_FACTOR, section),
            dust_length_factor=_get_float(
                record, 'dust_lengthfactor', DEFAULT_DUST_LENGTH_FACTOR, section
            ),
            dust_brightness_factor=_get_float(
                record, 'dust_brightnessfactor', DEFAULT_DUST_BRIGHTNESS_FACTOR, section
            ),
        )
    else:
        body.absolute_magnitude = _get_float(record, 'absolute_magnitude', NO_MAGNITUDE, section)
        body.atmosphere = _get_bool(record, 'atmosphere', False, section)
        body.halo = _get_bool(record, 'halo', True, section)
    if _get_bool(record, 'rings', False, section):
        body.rings = Ring(
            _get_float(record, 'ring_inner_size', 0.0, section) / AU_KM,
            _get_float(record, 'ring_outer_size', 0.0, section) / AU_KM,
            record.get('tex_ring', '').strip(),
        )
    return body


def _rollback(catalogue: Catalogue, source: str, roles: dict[str, str]) -> None:
    """Remove the bodies one source introduced and restore the role aliases."""
    catalogue.remove_source(source)
    catalogue.roles.clear()
    catalogue.roles.update({role: name for role, name in roles.items() if name in catalogue})


def load_catalogue_file(
    catalogue: Catalogue,
    path: str | Path,
    source: str | None = None,
    registry: SeriesRegistry | None = None,
) -> int:
    """Load one catalogue file on top of the bodies already in ``catalogue``.

    Records are processed in CatalogueOrder. Bad records and records with an
    unknown parent are logged and skipped. Everything this file added is
    rolled back when an orbit function is unknown or nothing could be loaded.

    Parameters:
        catalogue: Target catalogue (may already hold bodies from other files).
        path: INI file path.
        source: Tag stored on each new body; defaults to the path string.
        registry: Analytic series registry; default_registry() if None.

    Returns:
        Number of bodies loaded.

    Raises:
        LoadError: File missing, unparseable, or no body loaded from it.
        UnknownOrbitFunctionError: A record names an unknown ``coord_func``.
    """
    logger.debug('Loading from: %s', path)
    records = read_records(path)
    source = source if source is not None else str(path)
    if registry is None:
        registry = default_registry()
    by_section = dict(records)
    roles = dict(catalogue.roles)
    loaded = 0
    for section in catalogue_order(records):
        record = by_section[section]
        name = record_name(record)
        try:
            if name in catalogue:
                raise RecordError(f'duplicate body name {name!r}', section=section, name=name)
            parent_name = record_parent(record)
            parent = None
            if parent_name is not None:
                parent = catalogue.get(parent_name)
                if parent is None:
                    raise UnresolvedParentError(section, name, parent_name)
            orbit = build_orbit(section, record, parent, registry)
            body = build_body(section, record, orbit, parent=parent_name, source=source)
        except RecordError as e:
            logger.warning('Skipping section %s: %s', section, e)
            continue
        except UnknownOrbitFunctionError as e:
            logger.error('%s; rolling back %s', e, source)
            _rollback(catalogue, source, roles)
            raise
        try:
            catalogue.add(body)
        except CatalogueError as e:
            logger.warning('Skipping section %s: %s', section, e)
            continue
        if section in ROLE_SECTIONS:
            catalogue.set_role(section, name)
        loaded += 1
    if loaded == 0:
        _rollback(catalogue, source, roles)
        raise LoadError(f'No Solar System objects loaded from {path}', path=str(path))
    logger.info('Loaded %d Solar System bodies from %s', loaded, path)
    return loaded
