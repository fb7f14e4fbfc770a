"""Transform engine: per-body orientation and 4x4 model matrices at light-delayed times."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from solar_system.catalogue import Catalogue
from solar_system.config import SolarSystemConfig
from solar_system.constants import SECONDS_PER_DAY
from solar_system.orbits.frames import rotation4, translation4, zrotation
from solar_system.positions import light_time_days
from solar_system.time_utils import delta_t_seconds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyTransform:
    """Orientation of one body at one step.

    Attributes:
        name: Body english name.
        jd: UT Julian day the rotation was evaluated at.
        jde: JDE the rotation was evaluated at.
        model: 4x4 matrix from the body's equatorial frame to heliocentric VSOP87.
        axis_rotation: Prime meridian angle (degrees).
        sphere_scale: Drawing scale factor from the configuration.
    """

    name: str
    jd: float
    jde: float
    model: np.ndarray
    axis_rotation: float
    sphere_scale: float

    @property
    def translation(self) -> np.ndarray:
        return self.model[:3, 3]


class TransformEngine:
    """Evaluates rotation elements for every body after the position pass."""

    def __init__(
        self,
        config: SolarSystemConfig,
        delta_t: Callable[[float], float] | None = None,
    ) -> None:
        self.config = config
        self.delta_t = delta_t if delta_t is not None else delta_t_seconds

    def compute(
        self,
        catalogue: Catalogue,
        jde: float,
        observer_pos: np.ndarray,
    ) -> dict[str, BodyTransform]:
        """Compute transforms for every body in CatalogueOrder.

        Parameters:
            catalogue: Catalogue with positions already computed for this step.
            jde: Step time (JDE).
            observer_pos: Observer heliocentric position (AU).

        Returns:
            Mapping from body name to BodyTransform.
        """
        jd = jde - self.delta_t(jde) / SECONDS_PER_DAY
        moon = catalogue.moon
        transforms: dict[str, BodyTransform] = {}
        for body in catalogue:
            if self.config.flag_light_travel_time:
                helio = catalogue.heliocentric_position(body.name)
                delay = light_time_days(float(np.linalg.norm(helio - observer_pos)))
            else:
                delay = 0.0
            body_jd = jd - delay
            body_jde = jde - delay
            body.compute_trans_matrix(body_jd, body_jde)
            transforms[body.name] = BodyTransform(
                name=body.name,
                jd=body_jd,
                jde=body_jde,
                model=self.model_matrix(catalogue, body.name),
                axis_rotation=body.axis_rotation,
                sphere_scale=self.config.sphere_scale(
                    is_moon=moon is not None and body.name == moon.name,
                    is_minor=body.is_minor_body,
                ),
            )
        return transforms

    @staticmethod
    def model_matrix(catalogue: Catalogue, name: str) -> np.ndarray:
        """4x4 model matrix of a body from its current position and rotation state.

        The translation column is the sum of parent-relative positions along
        the parent chain, so it equals the body's heliocentric position.
        """
        body = catalogue[name]
        result = translation4(body.ecliptic_pos) @ rotation4(body.rot_local_to_parent)
        parent = catalogue.parent_of(name)
        while parent is not None:
            result = translation4(parent.ecliptic_pos) @ result @ rotation4(parent.rot_local_to_parent)
            parent = catalogue.parent_of(parent.name)
        return result @ rotation4(zrotation(math.radians(body.axis_rotation + 90.0)))
