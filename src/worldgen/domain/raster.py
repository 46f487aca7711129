"""Decoded bitmap layers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from worldgen.domain.wrappers import Color


@dataclass(frozen=True, eq=False)
class RgbGrid:
    """A width x height grid of RGB triples backed by a read-only array.

    ``pixels`` has shape ``(height, width, 3)`` and dtype ``uint8``.
    """

    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"expected an (height, width, 3) array, got {self.pixels.shape}")
        pixels = np.array(self.pixels, dtype=np.uint8, copy=True)
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} grid")
        r, g, b = (int(part) for part in self.pixels[y, x])
        return Color.from_rgb(r, g, b)

    def unique_colors(self) -> frozenset[Color]:
        flat = np.unique(self.pixels.reshape(-1, 3), axis=0)
        return frozenset(Color.from_rgb(int(r), int(g), int(b)) for r, g, b in flat)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RgbGrid):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"RgbGrid({self.width}x{self.height})"
