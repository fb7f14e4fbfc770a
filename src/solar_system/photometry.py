"""Observer-relative geometry and visual magnitudes of catalogue bodies.

Positions are heliocentric ecliptic vectors in AU; the Sun is at the origin.
"""

from __future__ import annotations

import math

import cspyce
import numpy as np

from solar_system.bodies import Body, BodyCategory
from solar_system.catalogue import Catalogue
from solar_system.constants import (
    GK_DEFAULT_SLOPE,
    HG_DEFAULT_SLOPE,
    NO_MAGNITUDE,
    SUN_MAGNITUDE_1AU,
)

# Lower bound on the shadow factor so a total eclipse stays a finite magnitude.
MIN_SHADOW_FACTOR = 1e-9


def distance(body_pos: np.ndarray, observer_pos: np.ndarray) -> float:
    """Observer-body distance (AU)."""
    return float(np.linalg.norm(np.asarray(body_pos) - np.asarray(observer_pos)))


def phase_angle(body_pos: np.ndarray, observer_pos: np.ndarray) -> float:
    """Sun-body-observer angle (radians)."""
    body_pos = np.asarray(body_pos, dtype=np.float64)
    return float(cspyce.vsep(-body_pos, np.asarray(observer_pos, dtype=np.float64) - body_pos))


def elongation(body_pos: np.ndarray, observer_pos: np.ndarray) -> float:
    """Sun-observer-body angle (radians)."""
    observer_pos = np.asarray(observer_pos, dtype=np.float64)
    return float(cspyce.vsep(-observer_pos, np.asarray(body_pos, dtype=np.float64) - observer_pos))


def phase(body_pos: np.ndarray, observer_pos: np.ndarray) -> float:
    """Illuminated fraction of the disk, 0 (new) to 1 (full)."""
    return 0.5 * abs(1.0 + math.cos(phase_angle(body_pos, observer_pos)))


def angular_separation(a_pos: np.ndarray, b_pos: np.ndarray, observer_pos: np.ndarray) -> float:
    """Angle between two bodies as seen by the observer (radians)."""
    observer_pos = np.asarray(observer_pos, dtype=np.float64)
    return float(
        cspyce.vsep(
            np.asarray(a_pos, dtype=np.float64) - observer_pos,
            np.asarray(b_pos, dtype=np.float64) - observer_pos,
        )
    )


def angular_size(
    body: Body,
    body_pos: np.ndarray,
    observer_pos: np.ndarray,
    sphere_scale: float = 1.0,
) -> float:
    """Apparent angular radius in degrees (ring radius for ringed bodies)."""
    size = body.rings.size if body.rings is not None else body.radius
    return math.degrees(math.atan2(size * sphere_scale, distance(body_pos, observer_pos)))


def _lambert_phase(cos_chi: float) -> float:
    chi = math.acos(max(-1.0, min(1.0, cos_chi)))
    return (1.0 - chi / math.pi) * cos_chi + math.sqrt(max(0.0, 1.0 - cos_chi * cos_chi)) / math.pi


def hg_magnitude(h: float, g: float, r: float, delta: float, alpha: float) -> float:
    """H-G system apparent magnitude (minor planets)."""
    tan_half = math.tan(alpha / 2.0)
    phi1 = math.exp(-3.33 * tan_half**0.63)
    phi2 = math.exp(-1.87 * tan_half**1.22)
    return h + 5.0 * math.log10(r * delta) - 2.5 * math.log10((1.0 - g) * phi1 + g * phi2)


def gk_magnitude(h: float, k: float, r: float, delta: float) -> float:
    """g-k system apparent magnitude (comets)."""
    return h + 5.0 * math.log10(delta) + 2.5 * k * math.log10(r)


def visual_magnitude(
    catalogue: Catalogue,
    body: Body,
    observer_pos: np.ndarray,
    shadow_factor: float = 1.0,
) -> float:
    """Apparent visual magnitude of a body seen from ``observer_pos``.

    The Sun uses its magnitude at 1 AU; minor planets the H-G system; comets
    the g-k system; bodies with an absolute magnitude use it with a Lambert
    phase law; all others reflect sunlight by albedo and radius.
    ``shadow_factor`` dims ordinary bodies in eclipse.

    Returns:
        Magnitude, or NaN when the observer or the Sun coincides with the body.
    """
    body_pos = catalogue.heliocentric_position(body.name)
    observer_pos = np.asarray(observer_pos, dtype=np.float64)
    delta = distance(body_pos, observer_pos)
    if delta == 0.0:
        return math.nan
    if body.parent is None:
        return SUN_MAGNITUDE_1AU + 5.0 * math.log10(delta)
    r = float(np.linalg.norm(body_pos))
    if r == 0.0:
        return math.nan
    alpha = phase_angle(body_pos, observer_pos)

    if body.category is BodyCategory.MINOR and body.minor is not None:
        if body.minor.absolute_magnitude is not None:
            slope = body.minor.slope_parameter
            g = slope if slope is not None else HG_DEFAULT_SLOPE
            return hg_magnitude(body.minor.absolute_magnitude, g, r, delta, alpha)
    elif body.category is BodyCategory.COMET and body.comet is not None:
        if body.comet.absolute_magnitude is not None:
            slope = body.comet.slope_parameter
            k = slope if slope is not None else GK_DEFAULT_SLOPE
            return gk_magnitude(body.comet.absolute_magnitude, k, r, delta)

    shadow = max(shadow_factor, MIN_SHADOW_FACTOR) if body.is_major else 1.0
    p = max(_lambert_phase(math.cos(alpha)), MIN_SHADOW_FACTOR)
    if body.is_major and body.absolute_magnitude > NO_MAGNITUDE:
        return (
            body.absolute_magnitude
            + 5.0 * math.log10(r * delta)
            - 2.5 * math.log10(p)
            - 2.5 * math.log10(shadow)
        )
    flux = 2.0 * body.albedo * body.radius * body.radius * p / (3.0 * delta * delta * r * r) * shadow
    if flux <= 0.0:
        return math.nan
    return SUN_MAGNITUDE_1AU - 2.5 * math.log10(flux)
