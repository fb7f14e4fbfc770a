"""Eclipse and illumination: circular-disk occlusion of the Sun by other bodies."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

import numpy as np

from solar_system.catalogue import Catalogue
from solar_system.constants import (
    AU_KM,
    EARTH_SHADOW_PENUMBRA_KM,
    LUNAR_ECLIPSE_MARGIN_KM,
    SUN_RADIUS_KM,
)
from solar_system.transforms import BodyTransform

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, value))


def disk_illumination(source_radius: float, occluder_radius: float, separation: float) -> float:
    """Unobscured fraction of a source disk partly covered by an occluder disk.

    All three arguments are angles seen from the observer, in the same unit.

    Parameters:
        source_radius: Apparent radius R of the light source.
        occluder_radius: Apparent radius r of the occluder.
        separation: Angular distance d between the two centers.

    Returns:
        Illumination in [0, 1].
    """
    big_r = source_radius
    r = occluder_radius
    d = separation
    if d >= big_r + r:
        return 1.0
    if d <= r - big_r:
        return 0.0
    if d <= big_r - r:
        return 1.0 - r * r / (big_r * big_r)
    # Partial overlap: lens area from the two circular segments.
    x = (big_r * big_r + d * d - r * r) / (2.0 * d)
    alpha = math.acos(_clamp(x / big_r))
    beta = math.acos(_clamp((d - x) / r))
    area_source = big_r * big_r * (alpha - 0.5 * math.sin(2.0 * alpha))
    area_occluder = r * r * (beta - 0.5 * math.sin(2.0 * beta))
    area_disk = big_r * big_r * math.pi
    return 1.0 - (area_source + area_occluder) / area_disk


def eclipse_factor(
    catalogue: Catalogue,
    transforms: Mapping[str, BodyTransform],
    observer_pos: np.ndarray,
    light_source_pos: np.ndarray,
    observer: str | None = None,
) -> float:
    """Fraction of the Sun's disk visible from the observer, worst occluder wins.

    Parameters:
        catalogue: Catalogue with the current step computed.
        transforms: Transform engine output; occluder centers are the model
            matrix translations (heliocentric positions as fallback).
        observer_pos: Observer heliocentric position (AU).
        light_source_pos: Apparent (light-time corrected) Sun position (AU).
        observer: Name of the observer's own body, never an occluder.

    Returns:
        Illumination factor in [0, 1].
    """
    sun = catalogue.sun
    if sun is None:
        return 1.0
    to_source = np.asarray(light_source_pos, dtype=np.float64) - observer_pos
    source_dist = float(np.linalg.norm(to_source))
    if source_dist == 0.0:
        return 1.0
    source_dir = to_source / source_dist
    source_radius = sun.radius / source_dist

    final_illumination = 1.0
    for body in catalogue:
        if body.name == sun.name or body.name == observer:
            continue
        transform = transforms.get(body.name)
        center = (
            transform.translation if transform is not None
            else catalogue.heliocentric_position(body.name)
        )
        to_body = center - observer_pos
        body_dist = float(np.linalg.norm(to_body))
        if body_dist == 0.0:
            continue
        separation = float(np.linalg.norm(source_dir - to_body / body_dist))
        illumination = disk_illumination(source_radius, body.radius / body_dist, separation)
        if illumination < final_illumination:
            logger.debug('%s occults the Sun: illumination %.6f', body.name, illumination)
            final_illumination = illumination
    return final_illumination


def parent_shadow_factor(catalogue: Catalogue, name: str) -> float:
    """Fraction of the Sun seen from a satellite's center past its parent planet.

    Bodies orbiting the Sun directly are never shadowed (1.0).
    """
    parent = catalogue.parent_of(name)
    sun = catalogue.sun
    if parent is None or parent.parent is None or sun is None:
        return 1.0
    body_pos = catalogue.heliocentric_position(name)
    to_sun = catalogue.heliocentric_position(sun.name) - body_pos
    to_parent = catalogue.heliocentric_position(parent.name) - body_pos
    sun_dist = float(np.linalg.norm(to_sun))
    parent_dist = float(np.linalg.norm(to_parent))
    if sun_dist == 0.0 or parent_dist == 0.0:
        return 1.0
    separation = float(np.linalg.norm(to_sun / sun_dist - to_parent / parent_dist))
    return disk_illumination(sun.radius / sun_dist, parent.radius / parent_dist, separation)


def near_lunar_eclipse(catalogue: Catalogue) -> bool:
    """Quick test whether the Moon is near the Earth's penumbral shadow.

    Returns False when the catalogue has no Earth or Moon role.
    """
    earth = catalogue.earth
    moon = catalogue.moon
    if earth is None or moon is None:
        return False
    e = earth.ecliptic_pos
    e_len = float(np.linalg.norm(e))
    if e_len == 0.0:
        return False
    m = moon.ecliptic_pos
    mh = catalogue.heliocentric_position(moon.name)
    # Shadow center at Earth distance plus Moon distance along the Sun-Earth line.
    shadow = e / e_len * (e_len + float(np.linalg.norm(m)))
    r_penumbra = (
        float(np.linalg.norm(shadow)) * EARTH_SHADOW_PENUMBRA_KM / AU_KM / e_len
        - SUN_RADIUS_KM / AU_KM
    )
    return float(np.linalg.norm(shadow - mh)) <= r_penumbra + LUNAR_ECLIPSE_MARGIN_KM / AU_KM
