"""Registry of body-specific analytic position series keyed by identifier.

Catalogue records select a series with ``coord_func = <identifier>``. The
registry is data: identifiers map to callables ``f(jde) -> (x, y, z)`` in AU,
relative to the body's parent. Planet and satellite series are served by SPICE
kernels; tests and embedding applications may register their own functions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np

from solar_system.constants import SERIES_NAIF_IDS, SUN_SERIES
from solar_system.errors import UnknownOrbitFunctionError

logger = logging.getLogger(__name__)

PositionFunction = Callable[[float], 'np.ndarray | tuple[float, float, float]']


@dataclass(frozen=True)
class SpecialSeries:
    """Orbit variant backed by a registered position function."""

    identifier: str
    function: PositionFunction

    def position_at(self, jde: float) -> np.ndarray:
        """Position relative to the parent body at JDE (AU, VSOP87 axes)."""
        return np.asarray(self.function(jde), dtype=np.float64)


class SeriesRegistry:
    """Mapping from series identifier to position function."""

    def __init__(self) -> None:
        self._functions: dict[str, PositionFunction] = {}

    def register(self, identifier: str, function: PositionFunction) -> None:
        """Add or replace the function for an identifier."""
        if identifier in self._functions:
            logger.debug('Replacing series function for %s', identifier)
        self._functions[identifier] = function

    def resolve(self, identifier: str, section: str = '', name: str = '') -> SpecialSeries:
        """Return the orbit object for an identifier.

        Parameters:
            identifier: ``coord_func`` value from the catalogue.
            section: Catalogue section, for the error message.
            name: Body name, for the error message.

        Returns:
            SpecialSeries bound to the registered function.

        Raises:
            UnknownOrbitFunctionError: If the identifier is not registered.
        """
        try:
            function = self._functions[identifier]
        except KeyError:
            raise UnknownOrbitFunctionError(identifier, section=section, name=name) from None
        return SpecialSeries(identifier, function)

    def identifiers(self) -> list[str]:
        return sorted(self._functions)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._functions

    def __iter__(self) -> Iterator[str]:
        return iter(self.identifiers())

    def __len__(self) -> int:
        return len(self._functions)


def _sun_at_origin(jde: float) -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


def default_registry() -> SeriesRegistry:
    """Registry with the Sun series and the SPICE-backed planet/satellite series."""
    # Deferred so that importing the orbit model does not require cspyce.
    from solar_system.spice.series import SpiceSeriesFunction

    registry = SeriesRegistry()
    registry.register(SUN_SERIES, _sun_at_origin)
    for identifier, (target, center) in SERIES_NAIF_IDS.items():
        registry.register(identifier, SpiceSeriesFunction(target, center))
    return registry
