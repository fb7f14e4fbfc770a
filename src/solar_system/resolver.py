"""Dependency resolver: orders catalogue sections so parents precede satellites."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from solar_system.catalogue import Catalogue
from solar_system.constants import DEFAULT_PARENT, NO_PARENT

logger = logging.getLogger(__name__)

Record = tuple[str, Mapping[str, str]]


def record_name(record: Mapping[str, str]) -> str:
    """English name of a record with internal whitespace collapsed."""
    return ' '.join(record.get('name', '').split())


def record_parent(record: Mapping[str, str]) -> str | None:
    """Declared parent name, ``Sun`` by default; None for ``none`` or empty."""
    parent = record.get('parent', DEFAULT_PARENT).strip()
    if not parent or parent == NO_PARENT:
        return None
    return parent


def parent_map(records: Sequence[Record]) -> dict[str, str]:
    """Map english name to declared parent name for every record that has one."""
    parents: dict[str, str] = {}
    for _section, record in records:
        name = record_name(record)
        parent = record_parent(record)
        if name and parent is not None:
            parents[name] = parent
    return parents


def dependency_depth(name: str, parents: Mapping[str, str]) -> int | None:
    """Count parent links from a body up to a body with no declared parent.

    Parents missing from the map end the walk; the loader reports them.

    Returns:
        Depth (0 for roots), or None if the chain loops.
    """
    level = 0
    seen = {name}
    current = name
    while current in parents:
        current = parents[current]
        if current in seen:
            return None
        seen.add(current)
        level += 1
    return level


def catalogue_order(records: Sequence[Record]) -> list[str]:
    """Section names sorted by ascending dependency depth, ties in file order.

    Records whose parent chain loops are left out with a warning.
    """
    parents = parent_map(records)
    leveled: list[tuple[int, str]] = []
    for section, record in records:
        name = record_name(record)
        depth = dependency_depth(name, parents)
        if depth is None:
            logger.warning('Skipping %s (%s): parent chain is cyclic', section, name)
            continue
        leveled.append((depth, section))
    leveled.sort(key=lambda item: item[0])
    order = [section for _depth, section in leveled]
    logger.debug('Catalogue order: %s', order)
    return order


def check_order(catalogue: Catalogue) -> bool:
    """True if every body in the catalogue comes after its parent."""
    position = {name: i for i, name in enumerate(catalogue.order)}
    for body in catalogue:
        if body.parent is not None and position.get(body.parent, len(position)) >= position[body.name]:
            return False
    return True
