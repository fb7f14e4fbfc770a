"""Catalogue arena: owns every Body, keyed by english name, in dependency order."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import numpy as np

from solar_system.bodies import Body
from solar_system.constants import ROLE_EARTH, ROLE_MOON, ROLE_SECTIONS, ROLE_SUN
from solar_system.errors import CatalogueError

logger = logging.getLogger(__name__)


class Catalogue:
    """Arena of bodies with parent/satellite links stored as names.

    Iteration yields bodies in CatalogueOrder: each body after its parent,
    because a body can only be added once its parent is present.
    """

    def __init__(self) -> None:
        self._bodies: dict[str, Body] = {}
        self._order: list[str] = []
        self.roles: dict[str, str] = {}

    def add(self, body: Body) -> None:
        """Insert a body and link it into its parent's satellite list.

        Raises:
            CatalogueError: If the name is taken or the parent is not present.
        """
        if body.name in self._bodies:
            raise CatalogueError(f'duplicate solar system body {body.name!r}')
        if body.parent is not None:
            parent = self._bodies.get(body.parent)
            if parent is None:
                raise CatalogueError(
                    f'parent {body.parent!r} of {body.name!r} is not in the catalogue'
                )
            parent.children.append(body.name)
        self._bodies[body.name] = body
        self._order.append(body.name)

    def get(self, name: str) -> Body | None:
        return self._bodies.get(name)

    def __getitem__(self, name: str) -> Body:
        return self._bodies[name]

    def __contains__(self, name: object) -> bool:
        return name in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return (self._bodies[name] for name in self._order)

    @property
    def order(self) -> list[str]:
        """CatalogueOrder: body names, every parent before its satellites."""
        return list(self._order)

    def names(self) -> list[str]:
        return list(self._order)

    def set_role(self, role: str, name: str) -> None:
        """Record the body playing a global role (``sun``, ``earth``, ``moon``)."""
        if role not in ROLE_SECTIONS:
            raise ValueError(f'unknown role {role!r}')
        self.roles[role] = name

    def role(self, role: str) -> Body | None:
        name = self.roles.get(role)
        return self._bodies.get(name) if name is not None else None

    @property
    def sun(self) -> Body | None:
        return self.role(ROLE_SUN)

    @property
    def earth(self) -> Body | None:
        return self.role(ROLE_EARTH)

    @property
    def moon(self) -> Body | None:
        return self.role(ROLE_MOON)

    def remove(self, name: str) -> list[str]:
        """Remove a body and, recursively, its satellites.

        Returns:
            Names removed, satellites first.

        Raises:
            KeyError: If the body is not in the catalogue.
        """
        body = self._bodies[name]
        removed: list[str] = []
        for child in list(body.children):
            removed.extend(self.remove(child))
        if body.parent is not None:
            parent = self._bodies.get(body.parent)
            if parent is not None and name in parent.children:
                parent.children.remove(name)
        body.parent = None
        body.children.clear()
        del self._bodies[name]
        self._order.remove(name)
        for role, role_name in list(self.roles.items()):
            if role_name == name:
                del self.roles[role]
        removed.append(name)
        return removed

    def remove_source(self, source: str) -> list[str]:
        """Roll back every body introduced by one catalogue source.

        Returns:
            Names removed.
        """
        removed: list[str] = []
        for name in list(reversed(self._order)):
            body = self._bodies.get(name)
            if body is not None and body.source == source:
                removed.extend(self.remove(name))
        if removed:
            logger.debug('Rolled back %d bodies from %s', len(removed), source)
        return removed

    def clear(self) -> None:
        """Tear down: unlink every parent/satellite handle, then drop the bodies."""
        for body in self._bodies.values():
            body.children.clear()
            body.parent = None
        self._bodies.clear()
        self._order.clear()
        self.roles.clear()

    def parent_of(self, name: str) -> Body | None:
        parent = self._bodies[name].parent
        return self._bodies.get(parent) if parent is not None else None

    def depth(self, name: str) -> int:
        """Number of parent links between a body and its root."""
        level = 0
        body = self._bodies[name]
        while body.parent is not None:
            level += 1
            body = self._bodies[body.parent]
        return level

    def heliocentric_position(self, name: str) -> np.ndarray:
        """Sum of current parent-relative positions along the parent chain (AU)."""
        body = self._bodies[name]
        pos = np.array(body.ecliptic_pos, dtype=np.float64)
        while body.parent is not None:
            body = self._bodies[body.parent]
            pos = pos + body.ecliptic_pos
        return pos
