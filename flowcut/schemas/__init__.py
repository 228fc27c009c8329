"""Packaged JSON schemas for flowcut graph files."""
