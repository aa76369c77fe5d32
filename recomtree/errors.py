"""Exception types raised by the genealogy core."""

from __future__ import annotations


class GenealogyError(Exception):
    """Base class for genealogy errors."""


class PreconditionError(GenealogyError, ValueError):
    """An operation was called on nodes that do not satisfy its contract."""


class StructuralError(GenealogyError, RuntimeError):
    """The genealogy is internally inconsistent."""


class StaleHandleError(GenealogyError, KeyError):
    """A handle refers to a node that has been reclaimed."""
