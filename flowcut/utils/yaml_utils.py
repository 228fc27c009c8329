"""Utilities for handling YAML parsing quirks in graph files."""

from typing import Any


def normalize_yaml_id(value: Any) -> str:
    """Coerce a YAML scalar used as a node or edge id to a string.

    YAML 1.1 turns bare words such as ``yes``, ``no``, ``on`` and ``off`` into
    booleans and digits into integers. Ids are always strings in flowcut, so
    booleans become ``"True"``/``"False"`` and other scalars go through
    ``str()``.

    Examples:
        >>> normalize_yaml_id(True)
        'True'
        >>> normalize_yaml_id(7)
        '7'
        >>> normalize_yaml_id("S")
        'S'
    """
    if isinstance(value, str):
        return value
    return str(value)
