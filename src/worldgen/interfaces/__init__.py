"""Protocol-based interfaces for the map loader's external collaborators."""

from worldgen.interfaces.raster import IRasterLoader

__all__ = [
    "IRasterLoader",
]
