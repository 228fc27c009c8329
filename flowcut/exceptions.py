"""Exception types raised by flowcut."""

from __future__ import annotations

from typing import Hashable


class FlowcutError(Exception):
    """Base class for all flowcut errors."""


class InvalidReferenceError(FlowcutError, ValueError):
    """A source, sink, or edge endpoint names a node that does not exist.

    Attributes:
        reference: The unknown node id.
        role: Where the reference came from, e.g. ``"source"`` or
            ``"edge 'e1' target"``.
    """

    def __init__(self, reference: Hashable, role: str) -> None:
        self.reference = reference
        self.role = role
        super().__init__(f"Unknown node reference {reference!r} ({role}).")


class GraphEditError(FlowcutError, ValueError):
    """An edit to a ``GraphState`` would break its invariants."""
