"""Tests for the elliptical and comet orbit variants and frame rotations."""

from __future__ import annotations

import math

import numpy as np
import pytest

from solar_system.constants import J2000
from solar_system.orbits import CometOrbit, EllipticalOrbit
from solar_system.orbits.frames import (
    MAT_J2000_TO_VSOP87,
    MAT_VSOP87_TO_J2000,
    parent_frame_rotation,
)


def test_circular_orbit_quarter_period() -> None:
    orbit = EllipticalOrbit(1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 100.0, J2000)
    np.testing.assert_allclose(orbit.position_at(J2000), [1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(orbit.position_at(J2000 + 25.0), [0.0, 1.0, 0.0], atol=1e-12)
    assert orbit.mean_motion == pytest.approx(2.0 * math.pi / 100.0)


def test_mean_anomaly_shifts_epoch_position() -> None:
    orbit = EllipticalOrbit(1.0, 0.0, 0.0, 0.0, 0.0, math.pi / 2.0, 100.0, J2000)
    np.testing.assert_allclose(orbit.position_at(J2000), [0.0, 1.0, 0.0], atol=1e-12)


def test_inclined_orbit_leaves_reference_plane() -> None:
    orbit = EllipticalOrbit(1.0, 0.0, math.pi / 2.0, 0.0, math.pi / 2.0, 0.0, 100.0, J2000)
    np.testing.assert_allclose(orbit.position_at(J2000), [0.0, 0.0, 1.0], atol=1e-12)


def test_parabolic_elliptical_orbit_has_no_semi_major_axis() -> None:
    orbit = EllipticalOrbit(0.5, 1.0, 0.0, 0.0, 0.0, 0.0, 1000.0, J2000)
    assert orbit.semi_major_axis == 0.0
    np.testing.assert_allclose(orbit.position_at(J2000), [0.5, 0.0, 0.0], atol=1e-12)


@pytest.mark.parametrize(('q', 'period'), [(0.0, 10.0), (-1.0, 10.0), (1.0, 0.0)])
def test_elliptical_orbit_rejects_bad_elements(q: float, period: float) -> None:
    with pytest.raises(ValueError):
        EllipticalOrbit(q, 0.1, 0.0, 0.0, 0.0, 0.0, period)


def test_comet_orbit_at_pericenter_follows_node() -> None:
    orbit = CometOrbit(0.3, 0.9, 0.0, math.pi / 2.0, 0.0, 2450000.0, 0.01)
    np.testing.assert_allclose(orbit.position_at(2450000.0), [0.0, 0.3, 0.0], atol=1e-12)
    assert orbit.semi_major_axis == pytest.approx(3.0)


def test_comet_validity_window() -> None:
    orbit = CometOrbit(1.0, 0.5, 0.0, 0.0, 0.0, 2450000.0, 0.01, orbit_good_days=100.0)
    assert orbit.is_valid_at(2450000.0)
    assert orbit.is_valid_at(2450100.0)
    assert not orbit.is_valid_at(2450100.5)
    assert not orbit.is_valid_at(2449899.0)
    # Positions are still produced outside the window.
    assert np.all(np.isfinite(orbit.position_at(2460000.0)))


def test_comet_validity_never_expires_without_window() -> None:
    orbit = CometOrbit(1.0, 1.2, 0.0, 0.0, 0.0, 2450000.0, 0.01, orbit_good_days=0.0)
    assert orbit.is_valid_at(2500000.0)
    assert orbit.semi_major_axis is None


def test_comet_orbit_rejects_bad_mean_motion() -> None:
    with pytest.raises(ValueError):
        CometOrbit(1.0, 0.5, 0.0, 0.0, 0.0, 2450000.0, 0.0)


@pytest.mark.parametrize('e', [-0.2, math.nan, math.inf])
def test_orbits_reject_bad_eccentricity(e: float) -> None:
    with pytest.raises(ValueError):
        EllipticalOrbit(1.0, e, 0.0, 0.0, 0.0, 0.0, 100.0)
    with pytest.raises(ValueError):
        CometOrbit(1.0, e, 0.0, 0.0, 0.0, 2450000.0, 0.01)


def test_frame_matrices_are_inverse_rotations() -> None:
    np.testing.assert_allclose(MAT_J2000_TO_VSOP87 @ MAT_VSOP87_TO_J2000, np.eye(3), atol=1e-15)
    assert np.linalg.det(MAT_J2000_TO_VSOP87) == pytest.approx(1.0)


def test_j2000_equator_maps_onto_ecliptic() -> None:
    """The June solstice direction lies on the ecliptic at longitude 90 degrees."""
    eps = math.radians(23.4392803055556)
    solstice = np.array([0.0, math.cos(eps), math.sin(eps)])
    np.testing.assert_allclose(MAT_J2000_TO_VSOP87 @ solstice, [0.0, 1.0, 0.0], atol=1e-9)
    np.testing.assert_allclose(
        MAT_J2000_TO_VSOP87 @ np.array([0.0, 0.0, 1.0]),
        [0.0, math.sin(eps), math.cos(eps)],
        atol=1e-9,
    )


def test_parent_frame_rotation_identity_for_sun_relative_orbits() -> None:
    np.testing.assert_allclose(parent_frame_rotation(0.0, 0.0, 0.0), np.eye(3), atol=1e-15)


def test_satellite_orbit_uses_parent_equator() -> None:
    """A circular equatorial satellite orbit tilts with the parent's obliquity."""
    obliquity = math.radians(30.0)
    orbit = EllipticalOrbit(
        1.0, 0.0, 0.0, 0.0, 0.0, math.pi / 2.0, 10.0, J2000,
        parent_rot_obliquity=obliquity,
    )
    pos = orbit.position_at(J2000)
    np.testing.assert_allclose(pos, [0.0, math.cos(obliquity), math.sin(obliquity)], atol=1e-12)
