"""Archetype-based Entity Component System."""

__version__ = "0.1.0"