"""SolarSystem: catalogue lifecycle, per-step computation and observer queries."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np

from solar_system import eclipse, photometry
from solar_system.bodies import Body
from solar_system.catalogue import Catalogue
from solar_system.config import (
    MAJOR_CATALOGUE,
    MINOR_CATALOGUE,
    SolarSystemConfig,
    find_catalogue_file,
    find_catalogue_files,
)
from solar_system.constants import DEFAULT_PARENT, OBSERVER_PSEUDO_BODIES
from solar_system.errors import LoadError, UnknownOrbitFunctionError
from solar_system.loader import load_catalogue_file
from solar_system.orbits import SeriesRegistry, default_registry
from solar_system.positions import PositionEngine, PositionSample
from solar_system.transforms import BodyTransform, TransformEngine

logger = logging.getLogger(__name__)

MAJOR_SOURCE = 'major'
MINOR_SOURCE = 'minor'


class SolarSystem:
    """Owns the body catalogue and runs Position then Transform for each step.

    Callers hold bodies by english name only: a reload replaces every Body
    object.
    """

    def __init__(
        self,
        config: SolarSystemConfig | None = None,
        registry: SeriesRegistry | None = None,
        delta_t: Callable[[float], float] | None = None,
    ) -> None:
        self.config = config if config is not None else SolarSystemConfig()
        self.registry = registry if registry is not None else default_registry()
        self.catalogue = Catalogue()
        self.position_engine = PositionEngine(self.config.flag_light_travel_time)
        self.transform_engine = TransformEngine(self.config, delta_t)
        self.positions: dict[str, PositionSample] = {}
        self.transforms: dict[str, BodyTransform] = {}
        self.observer: str | None = None
        self.jde: float | None = None
        self._major_path: str | None = None
        self._minor_paths: list[str] | None = None

    # Loading

    def load_planets(
        self,
        major_path: str | Path | None = None,
        minor_paths: Sequence[str | Path] | None = None,
    ) -> int:
        """Load the major-body catalogue, then the first minor-body file that loads.

        Parameters:
            major_path: Primary catalogue; default ssystem_major.ini from the data path.
            minor_paths: Candidate secondary catalogues tried in order; default
                every ssystem_minor.ini found (user directory first). An empty
                sequence loads no minor bodies.

        Returns:
            Number of bodies in the catalogue.

        Raises:
            LoadError: The primary catalogue is missing or unusable; the
                catalogue is left empty.
            UnknownOrbitFunctionError: The primary catalogue names an unknown
                orbit function; the catalogue is left empty.
        """
        if major_path is None:
            found = find_catalogue_file(MAJOR_CATALOGUE)
            if found is None:
                self.catalogue.clear()
                raise LoadError(f'unable to find {MAJOR_CATALOGUE}')
            major_path = found
        self._major_path = str(major_path)
        self._minor_paths = None if minor_paths is None else [str(p) for p in minor_paths]
        self.positions = {}
        self.transforms = {}
        self.observer = None
        self.jde = None
        catalogue = self._build_catalogue(self._major_path, self._minor_paths)
        self.catalogue = catalogue
        return len(catalogue)

    def _build_catalogue(self, major_path: str, minor_paths: list[str] | None) -> Catalogue:
        catalogue = Catalogue()
        logger.debug('Loading Solar System data (1: planets and moons) from %s', major_path)
        try:
            load_catalogue_file(catalogue, major_path, MAJOR_SOURCE, self.registry)
        except (LoadError, UnknownOrbitFunctionError):
            catalogue.clear()
            self.catalogue.clear()
            raise
        if minor_paths is None:
            minor_paths = find_catalogue_files(MINOR_CATALOGUE)
            if not minor_paths:
                logger.warning('Unable to find %s; no minor bodies loaded', MINOR_CATALOGUE)
        for path in minor_paths:
            logger.debug('Loading Solar System data (2: minor bodies) from %s', path)
            try:
                load_catalogue_file(catalogue, path, MINOR_SOURCE, self.registry)
            except (LoadError, UnknownOrbitFunctionError) as e:
                logger.warning('Removing minor bodies from %s: %s', path, e)
                catalogue.remove_source(MINOR_SOURCE)
                continue
            break
        return catalogue

    def reload_planets(self) -> int:
        """Tear down the catalogue and load it again from the same sources.

        Configuration survives; positions are recomputed at the last step time
        and observer when there was one.

        Returns:
            Number of bodies in the new catalogue.
        """
        if self._major_path is None:
            raise LoadError('reload requested before any catalogue was loaded')
        jde, observer = self.jde, self.observer
        self.positions = {}
        self.transforms = {}
        self.catalogue.clear()
        self.catalogue = self._build_catalogue(self._major_path, self._minor_paths)
        if jde is not None:
            if observer is not None and observer not in self.catalogue:
                observer = None
            self.compute_positions(jde, observer)
        return len(self.catalogue)

    # Per-step computation

    def _default_observer(self) -> str:
        for body in (self.catalogue.earth, self.catalogue.sun):
            if body is not None:
                return body.name
        if DEFAULT_PARENT in self.catalogue:
            return DEFAULT_PARENT
        raise ValueError('catalogue has no observer body (no earth or sun)')

    def compute_positions(self, jde: float, observer: str | None = None) -> dict[str, PositionSample]:
        """Compute positions then transforms of every body at JDE.

        Parameters:
            jde: Step time (Julian Ephemeris Day).
            observer: Observer body name; default the primary planet, else the Sun.

        Returns:
            Mapping from body name to PositionSample.

        Raises:
            ValueError: Empty catalogue or unknown observer.
        """
        if len(self.catalogue) == 0:
            raise ValueError('no Solar System bodies loaded')
        if observer is None:
            observer = self._default_observer()
        self.position_engine.light_travel_time = self.config.flag_light_travel_time
        self.positions = self.position_engine.compute(self.catalogue, jde, observer)
        self.transforms = self.transform_engine.compute(
            self.catalogue, jde, self.positions[observer].heliocentric
        )
        self.observer = observer
        self.jde = jde
        return self.positions

    @property
    def light_time_sun_position(self) -> np.ndarray:
        """Apparent offset of the Sun from the one-shot light-time correction (AU)."""
        return self.position_engine.light_time_sun_position

    @property
    def observer_position(self) -> np.ndarray:
        """Heliocentric position of the current observer (AU)."""
        return self.positions[self._require_step()].heliocentric

    def _require_step(self) -> str:
        if self.observer is None or not self.positions:
            raise ValueError('positions have not been computed')
        return self.observer

    def get_eclipse_factor(self) -> float:
        """Fraction of the Sun's disk visible from the current observer."""
        self._require_step()
        sun = self.catalogue.sun
        sun_pos = (
            self.catalogue.heliocentric_position(sun.name) if sun is not None else np.zeros(3)
        )
        return eclipse.eclipse_factor(
            self.catalogue,
            self.transforms,
            self.observer_position,
            sun_pos + self.light_time_sun_position,
            observer=self.observer,
        )

    def near_lunar_eclipse(self) -> bool:
        return eclipse.near_lunar_eclipse(self.catalogue)

    # Lookup and listing

    @property
    def sun(self) -> Body | None:
        return self.catalogue.sun

    @property
    def earth(self) -> Body | None:
        return self.catalogue.earth

    @property
    def moon(self) -> Body | None:
        return self.catalogue.moon

    def search_by_english_name(self, name: str) -> Body | None:
        return self.catalogue.get(name)

    def search_by_name_i18n(self, name_i18n: str) -> Body | None:
        for body in self.catalogue:
            if body.name_i18n == name_i18n:
                return body
        return None

    def _require(self, name: str) -> Body:
        body = self.catalogue.get(name)
        if body is None:
            raise ValueError(f'unknown solar system body {name!r}')
        return body

    def get_all_planet_english_names(self) -> list[str]:
        return [body.name for body in self.catalogue]

    def get_all_planet_localized_names(self) -> list[str]:
        return [body.name_i18n for body in self.catalogue]

    def list_all_objects(self, in_english: bool = True) -> list[str]:
        if in_english:
            return self.get_all_planet_english_names()
        return self.get_all_planet_localized_names()

    def list_all_objects_by_type(self, body_type: str, in_english: bool = True) -> list[str]:
        return [
            body.name if in_english else body.name_i18n
            for body in self.catalogue
            if body.body_type == body_type
        ]

    def get_objects_list(self, body_type: str = 'all') -> list[str]:
        """English names of one type, or of everything but the Sun and observer pseudo-bodies."""
        if body_type.lower() == 'all':
            excluded = {DEFAULT_PARENT, *OBSERVER_PSEUDO_BODIES}
            sun = self.catalogue.sun
            if sun is not None:
                excluded.add(sun.name)
            return [name for name in self.list_all_objects(True) if name not in excluded]
        return self.list_all_objects_by_type(body_type, True)

    def update_i18n(self, translate: Callable[[str], str]) -> None:
        """Set every localized name from the english name through ``translate``."""
        for body in self.catalogue:
            body.name_i18n = translate(body.name)

    def remove_body(self, name: str) -> bool:
        """Remove one body and any satellites it has.

        Major bodies are removed with a warning. Root bodies (the Sun) are
        kept since every other body hangs from them.

        Returns:
            True if removed; False if unknown or a root body.
        """
        body = self.catalogue.get(name)
        if body is None:
            logger.warning('Cannot remove planet %s: Not found.', name)
            return False
        if body.parent is None:
            logger.warning('Cannot remove root object %s', name)
            return False
        if body.is_major:
            logger.warning('Removing major object %s; this will be accepted', name)
        for removed in self.catalogue.remove(name):
            self.positions.pop(removed, None)
            self.transforms.pop(removed, None)
        return True

    # Observer-relative queries (current step)

    def get_position(self, name: str) -> PositionSample:
        self._require(name)
        self._require_step()
        return self.positions[name]

    def get_transform(self, name: str) -> BodyTransform:
        self._require(name)
        self._require_step()
        return self.transforms[name]

    def get_planet_type(self, name: str) -> str:
        return self._require(name).body_type

    def get_distance_to_planet(self, name: str) -> float:
        """Distance from the observer (AU)."""
        return self.get_position(name).distance

    def get_elongation_for_planet(self, name: str) -> float:
        """Elongation from the Sun as seen by the observer (radians)."""
        return photometry.elongation(self.get_position(name).heliocentric, self.observer_position)

    def get_phase_angle_for_planet(self, name: str) -> float:
        """Sun-body-observer angle (radians)."""
        return photometry.phase_angle(self.get_position(name).heliocentric, self.observer_position)

    def get_angular_separation(self, name_a: str, name_b: str) -> float:
        """Angle between two bodies as seen by the observer (radians)."""
        return photometry.angular_separation(
            self.get_position(name_a).heliocentric,
            self.get_position(name_b).heliocentric,
            self.observer_position,
        )

    def get_phase_for_planet(self, name: str) -> float:
        """Illuminated fraction of the disk."""
        return photometry.phase(self.get_position(name).heliocentric, self.observer_position)

    def get_angular_size_for_planet(self, name: str) -> float:
        """Apparent angular radius (degrees), with the configured sphere scale."""
        body = self._require(name)
        return photometry.angular_size(
            body,
            self.get_position(name).heliocentric,
            self.observer_position,
            self.get_transform(name).sphere_scale,
        )

    def get_planet_vmagnitude(self, name: str) -> float:
        """Apparent visual magnitude; NaN for the observer's own body."""
        body = self._require(name)
        self._require_step()
        if name == self.observer:
            return math.nan
        return photometry.visual_magnitude(
            self.catalogue,
            body,
            self.observer_position,
            eclipse.parent_shadow_factor(self.catalogue, name),
        )
