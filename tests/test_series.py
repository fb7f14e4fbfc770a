"""Tests for the analytic-series registry and its SPICE-backed functions."""

from __future__ import annotations

import numpy as np
import pytest

from solar_system.constants import AU_KM, EARTH_ID, SERIES_NAIF_IDS, SUN_ID
from solar_system.errors import UnknownOrbitFunctionError
from solar_system.orbits import SeriesRegistry, SpecialSeries, default_registry
from solar_system.spice.series import SpiceSeriesFunction


def test_registry_resolves_registered_function() -> None:
    registry = SeriesRegistry()
    registry.register('fixed', lambda jde: (1.0, 2.0, 3.0))
    series = registry.resolve('fixed')
    assert isinstance(series, SpecialSeries)
    assert series.identifier == 'fixed'
    np.testing.assert_array_equal(series.position_at(2451545.0), [1.0, 2.0, 3.0])
    assert 'fixed' in registry
    assert len(registry) == 1


def test_registry_unknown_identifier_names_the_record() -> None:
    registry = SeriesRegistry()
    with pytest.raises(UnknownOrbitFunctionError) as excinfo:
        registry.resolve('vulcan_special', section='vulcan', name='Vulcan')
    assert excinfo.value.identifier == 'vulcan_special'
    assert excinfo.value.section == 'vulcan'
    assert 'Vulcan' in str(excinfo.value)


def test_registry_register_replaces() -> None:
    registry = SeriesRegistry()
    registry.register('x', lambda jde: (1.0, 0.0, 0.0))
    registry.register('x', lambda jde: (2.0, 0.0, 0.0))
    assert registry.resolve('x').position_at(0.0)[0] == 2.0
    assert registry.identifiers() == ['x']


def test_default_registry_covers_catalogue_identifiers() -> None:
    registry = default_registry()
    assert 'sun_special' in registry
    assert 'lunar_special' in registry
    assert 'calisto_special' in registry
    assert len(registry) == len(SERIES_NAIF_IDS) + 1
    np.testing.assert_array_equal(registry.resolve('sun_special').position_at(2451545.0), np.zeros(3))


def test_spice_series_converts_km_to_au(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[int, float, str, int]] = []

    def _spkgeo(target: int, et: float, frame: str, center: int):  # type: ignore[no-untyped-def]
        calls.append((target, et, frame, center))
        return ([AU_KM, -2.0 * AU_KM, 0.5 * AU_KM, 0.0, 0.0, 0.0], 0.0)

    monkeypatch.setattr('solar_system.spice.series.load_spice_kernels', lambda: (True, None))
    monkeypatch.setattr('cspyce.spkgeo', _spkgeo)

    pos = SpiceSeriesFunction(EARTH_ID, SUN_ID)(2451546.0)

    np.testing.assert_allclose(pos, [1.0, -2.0, 0.5])
    assert calls == [(EARTH_ID, 86400.0, 'ECLIPJ2000', SUN_ID)]


def test_spice_series_without_kernels_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        'solar_system.spice.series.load_spice_kernels',
        lambda: (False, 'SPICE_PATH directory does not exist'),
    )
    with pytest.raises(RuntimeError, match='SPICE_PATH'):
        SpiceSeriesFunction(EARTH_ID, SUN_ID)(2451545.0)
