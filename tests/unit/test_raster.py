"""Tests for bitmap decoding."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from worldgen.domain.raster import RgbGrid
from worldgen.domain.wrappers import Color
from worldgen.errors import MapFileNotFoundError, MapIOError
from worldgen.loaders.raster import PillowRasterLoader


def _checkerboard() -> np.ndarray:
    pixels = np.zeros((2, 3, 3), dtype=np.uint8)
    pixels[0, 0] = (10, 20, 30)
    pixels[1, 2] = (255, 0, 128)
    return pixels


class TestRgbGrid:
    """The decoded pixel grid."""

    def test_dimensions_and_pixels(self) -> None:
        """Arrays are indexed row first; pixels are read x first."""
        grid = RgbGrid(_checkerboard())
        assert (grid.width, grid.height) == (3, 2)
        assert grid.pixel(0, 0) == Color.from_rgb(10, 20, 30)
        assert grid.pixel(2, 1) == Color.from_rgb(255, 0, 128)
        assert grid.unique_colors() == {
            Color.from_rgb(0, 0, 0),
            Color.from_rgb(10, 20, 30),
            Color.from_rgb(255, 0, 128),
        }

    def test_is_read_only_copy(self) -> None:
        """Later changes to the source array do not leak in."""
        source = _checkerboard()
        grid = RgbGrid(source)
        source[0, 0] = (1, 1, 1)
        assert grid.pixel(0, 0) == Color.from_rgb(10, 20, 30)
        with pytest.raises(ValueError):
            grid.pixels[0, 0] = (2, 2, 2)

    @pytest.mark.parametrize("x,y", [(3, 0), (0, 2), (-1, 0)])
    def test_out_of_range(self, x: int, y: int) -> None:
        with pytest.raises(IndexError):
            RgbGrid(_checkerboard()).pixel(x, y)

    def test_rejects_other_shapes(self) -> None:
        with pytest.raises(ValueError):
            RgbGrid(np.zeros((2, 2), dtype=np.uint8))


class TestPillowRasterLoader:
    """Decoding files with Pillow."""

    def test_rgb_bitmap(self, tmp_path) -> None:
        """A 24-bit bitmap decodes losslessly."""
        path = tmp_path / "provinces.bmp"
        Image.fromarray(_checkerboard()).save(path)
        grid = PillowRasterLoader()(path)
        assert grid == RgbGrid(_checkerboard())

    def test_palette_bitmap_is_expanded(self, tmp_path) -> None:
        """Indexed bitmaps such as `trees.bmp` come back as RGB."""
        image = Image.new("P", (2, 1))
        image.putpalette([0, 0, 0, 200, 100, 50] + [0] * (256 * 3 - 6))
        image.putpixel((1, 0), 1)
        path = tmp_path / "trees.bmp"
        image.save(path)
        grid = PillowRasterLoader()(path)
        assert grid.pixel(1, 0) == Color.from_rgb(200, 100, 50)
        assert grid.pixel(0, 0) == Color.from_rgb(0, 0, 0)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(MapFileNotFoundError):
            PillowRasterLoader()(tmp_path / "absent.bmp")

    def test_garbage_bytes(self, tmp_path) -> None:
        """Undecodable content is an I/O error, not a crash."""
        path = tmp_path / "rivers.bmp"
        path.write_bytes(b"not a bitmap at all")
        with pytest.raises(MapIOError) as excinfo:
            PillowRasterLoader()(path)
        assert not isinstance(excinfo.value, MapFileNotFoundError)
