"""Errors raised by the content catalog and its graph collaborators."""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures."""


class InconsistentReferenceError(CatalogError, LookupError):
    """A path or reference names a key the node lookup does not hold."""

    def __init__(self, key: str, path=None):
        self.key = key
        self.path = list(path) if path else []
        detail = f"node {key!r} is not in the node lookup"
        if self.path:
            detail += f" (path: {' -> '.join(self.path)})"
        super().__init__(detail)


class CatalogStateError(CatalogError, RuntimeError):
    """Catalog used before init()."""


class InvalidPredicateError(CatalogError, ValueError):
    """An include/exclude predicate could not be parsed."""


class GraphUnavailableError(RuntimeError):
    """The graph store could not be reached."""
