"""SPICE-backed position functions for the analytic-series registry."""

from __future__ import annotations

import numpy as np
import cspyce

from solar_system.constants import AU_KM, SERIES_FRAME
from solar_system.spice.load import load_spice_kernels
from solar_system.time_utils import tdb_from_jde


class SpiceSeriesFunction:
    """Position of a NAIF body relative to a center body, in AU (ECLIPJ2000).

    Kernels are furnished on first use; a missing kernel tree raises
    RuntimeError at that point.
    """

    def __init__(self, target_id: int, center_id: int) -> None:
        self.target_id = target_id
        self.center_id = center_id

    def __call__(self, jde: float) -> np.ndarray:
        ok, reason = load_spice_kernels()
        if not ok:
            raise RuntimeError(f'Failed to load SPICE kernels: {reason}')
        state, _lt = cspyce.spkgeo(self.target_id, tdb_from_jde(jde), SERIES_FRAME, self.center_id)
        return np.asarray(state, dtype=np.float64)[:3] / AU_KM

    def __repr__(self) -> str:
        return f'SpiceSeriesFunction({self.target_id}, {self.center_id})'
