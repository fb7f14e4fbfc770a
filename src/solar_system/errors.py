"""Catalogue error taxonomy.

``LoadError`` concerns a whole catalogue file, ``RecordError`` (and its
``UnresolvedParentError`` subclass) a single record that the loader skips.
``UnknownOrbitFunctionError`` aborts the file being loaded.
"""

from __future__ import annotations


class CatalogueError(Exception):
    """Base class for Solar System catalogue errors."""


class LoadError(CatalogueError):
    """Catalogue file missing, unparseable, or empty after loading."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RecordError(CatalogueError):
    """One malformed or inconsistent catalogue record."""

    def __init__(self, message: str, section: str = '', name: str = '') -> None:
        super().__init__(message)
        self.section = section
        self.name = name


class UnresolvedParentError(RecordError):
    """A record names a parent body that is not in the catalogue."""

    def __init__(self, section: str, name: str, parent: str) -> None:
        super().__init__(
            f"can't find parent solar system body {parent!r} for {name!r}",
            section=section,
            name=name,
        )
        self.parent = parent


class UnknownOrbitFunctionError(CatalogueError):
    """A record's ``coord_func`` is not a known orbit function."""

    def __init__(self, identifier: str, section: str = '', name: str = '') -> None:
        super().__init__(
            f'in section {section!r}: unknown orbit function {identifier!r} for {name!r}'
        )
        self.identifier = identifier
        self.section = section
        self.name = name
