"""Reference-frame rotations: J2000 equator <-> VSOP87 ecliptic, parent orbit frames."""

from __future__ import annotations

import math

import numpy as np


def xrotation(angle: float) -> np.ndarray:
    """Return 3x3 rotation matrix about the x axis by angle (radians)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]], dtype=np.float64)


def zrotation(angle: float) -> np.ndarray:
    """Return 3x3 rotation matrix about the z axis by angle (radians)."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def translation4(vec: np.ndarray) -> np.ndarray:
    """Return 4x4 homogeneous translation matrix."""
    mat = np.eye(4, dtype=np.float64)
    mat[:3, 3] = vec[:3]
    return mat


def rotation4(rot: np.ndarray) -> np.ndarray:
    """Embed a 3x3 rotation in a 4x4 homogeneous matrix."""
    mat = np.eye(4, dtype=np.float64)
    mat[:3, :3] = rot
    return mat


# Obliquity of the ecliptic at J2000 and the VSOP87 equinox offset.
J2000_OBLIQUITY = math.radians(23.4392803055555555556)
VSOP87_EQUINOX_OFFSET = math.radians(0.0000275)

MAT_J2000_TO_VSOP87 = xrotation(-J2000_OBLIQUITY) @ zrotation(VSOP87_EQUINOX_OFFSET)
MAT_VSOP87_TO_J2000 = MAT_J2000_TO_VSOP87.T


def orbit_plane_rotation(ascending_node: float, inclination: float, arg_of_pericenter: float) -> np.ndarray:
    """Rotation from the orbital plane (x to pericenter) into the reference plane."""
    return zrotation(ascending_node) @ xrotation(inclination) @ zrotation(arg_of_pericenter)


def parent_frame_rotation(
    parent_rot_obliquity: float,
    parent_rot_ascending_node: float,
    parent_rot_j2000_longitude: float,
) -> np.ndarray:
    """Rotation from a parent's equatorial frame into VSOP87.

    Identity when all three angles are zero (Sun-relative orbits, which use the
    ecliptic directly).
    """
    return (
        zrotation(parent_rot_ascending_node)
        @ xrotation(parent_rot_obliquity)
        @ zrotation(parent_rot_j2000_longitude)
    )


def parent_j2000_longitude(parent_rot_obliquity: float, parent_rot_ascending_node: float) -> float:
    """Longitude of the J2000 equator's node on the parent's equator (radians).

    Satellite elements are measured from this node rather than from the
    parent's ascending node on the ecliptic.
    """
    c_obl = math.cos(parent_rot_obliquity)
    s_obl = math.sin(parent_rot_obliquity)
    c_nod = math.cos(parent_rot_ascending_node)
    s_nod = math.sin(parent_rot_ascending_node)
    orbit_axis0 = np.array([c_nod, s_nod, 0.0])
    orbit_axis1 = np.array([-s_nod * c_obl, c_nod * c_obl, s_obl])
    orbit_pole = np.array([s_nod * s_obl, -c_nod * s_obl, c_obl])
    j2000_pole = MAT_J2000_TO_VSOP87 @ np.array([0.0, 0.0, 1.0])
    node_origin = np.cross(j2000_pole, orbit_pole)
    norm = float(np.linalg.norm(node_origin))
    if norm < 1e-15:
        return 0.0
    node_origin /= norm
    return math.atan2(float(node_origin @ orbit_axis1), float(node_origin @ orbit_axis0))
