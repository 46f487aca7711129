"""Raster Loader Protocol Interface.

Bitmap decoding lives outside the map loader; the assembler only needs a
callable that turns a path into a grid of RGB triples.
"""

from pathlib import Path
from typing import Protocol

from worldgen.domain.raster import RgbGrid


class IRasterLoader(Protocol):
    """Protocol for turning a bitmap file into an :class:`RgbGrid`."""

    def __call__(self, path: Path) -> RgbGrid:
        """Decode the bitmap at ``path``.

        Args:
            path: Location of the bitmap (provinces, terrain, rivers, heightmap, trees)

        Returns:
            The decoded grid, width x height RGB triples

        Raises:
            MapIOError: The file is missing or cannot be decoded
        """
        ...
