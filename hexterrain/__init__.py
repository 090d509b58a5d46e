"""Hexagonal terrain map: coordinates, cells, terraced meshes, roads and editing."""

__version__ = "0.1.0"