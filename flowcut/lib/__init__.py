"""Library utilities for flowcut.

This package contains integration modules for external libraries.
"""

from flowcut.lib.nx import from_networkx, to_networkx

__all__ = [
    "from_networkx",
    "to_networkx",
]
