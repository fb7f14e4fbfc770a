"""Position engine: heliocentric positions of every body with light-time correction."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import cspyce
import numpy as np

from solar_system.catalogue import Catalogue
from solar_system.constants import AU_KM, SECONDS_PER_DAY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionSample:
    """One body's position at one step.

    Attributes:
        name: Body english name.
        jde: Requested step time (JDE).
        heliocentric: Heliocentric ecliptic position (AU, VSOP87 axes).
        distance: Distance to the observer (AU).
        light_time: Delay applied to the body's orbit time (days).
    """

    name: str
    jde: float
    heliocentric: np.ndarray
    distance: float
    light_time: float


def light_time_days(distance_au: float) -> float:
    """Light travel time in days over a distance in AU."""
    return distance_au * AU_KM / (cspyce.clight() * SECONDS_PER_DAY)


class PositionEngine:
    """Computes all body positions for one step, parents before satellites.

    With light-time correction on, each body is evaluated at the step time
    minus the light delay from its uncorrected position to the observer. The
    apparent offset of the central light source (``light_time_sun_position``)
    is a single correction from the observer's own motion over its light time
    to the Sun; it is not iterated.
    """

    def __init__(self, light_travel_time: bool = True) -> None:
        self.light_travel_time = light_travel_time
        self.light_time_sun_position = np.zeros(3, dtype=np.float64)
        self.last_jde: float | None = None

    def compute(self, catalogue: Catalogue, jde: float, observer: str) -> dict[str, PositionSample]:
        """Compute every body's position at JDE as seen by ``observer``.

        Parameters:
            catalogue: Loaded catalogue; bodies are processed in CatalogueOrder.
            jde: Step time (Julian Ephemeris Day).
            observer: English name of the observer body.

        Returns:
            Mapping from body name to PositionSample.

        Raises:
            ValueError: If the observer is not in the catalogue.
        """
        observer_body = catalogue.get(observer)
        if observer_body is None:
            raise ValueError(f'observer {observer!r} is not in the catalogue')
        delays: dict[str, float] = {}
        if self.light_travel_time:
            for body in catalogue:
                body.compute_position(jde)
            uncorrected = {body.name: catalogue.heliocentric_position(body.name) for body in catalogue}
            obs_pos = uncorrected[observer]
            obs_dist = float(np.linalg.norm(obs_pos))

            observer_body.compute_position(jde - light_time_days(obs_dist))
            obs_pos_before = catalogue.heliocentric_position(observer)
            self.light_time_sun_position = obs_pos - obs_pos_before
            observer_body.compute_position(jde)

            for body in catalogue:
                delay = light_time_days(float(np.linalg.norm(uncorrected[body.name] - obs_pos)))
                body.compute_position(jde - delay)
                delays[body.name] = delay
        else:
            for body in catalogue:
                body.compute_position(jde)
                delays[body.name] = 0.0
            self.light_time_sun_position = np.zeros(3, dtype=np.float64)
        self.last_jde = jde

        observer_pos = catalogue.heliocentric_position(observer)
        samples: dict[str, PositionSample] = {}
        for body in catalogue:
            helio = catalogue.heliocentric_position(body.name)
            samples[body.name] = PositionSample(
                name=body.name,
                jde=jde,
                heliocentric=helio,
                distance=float(np.linalg.norm(helio - observer_pos)),
                light_time=delays[body.name],
            )
        logger.debug('Computed %d positions at JDE %.6f (light time %s)', len(samples), jde,
                     'on' if self.light_travel_time else 'off')
        return samples
