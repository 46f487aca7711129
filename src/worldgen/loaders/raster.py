"""Pillow backed bitmap decoding."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from worldgen.domain.raster import RgbGrid
from worldgen.errors import MapFileNotFoundError, MapIOError

logger = logging.getLogger(__name__)

# Game maps are far larger than Pillow's decompression bomb guard allows.
Image.MAX_IMAGE_PIXELS = None


class PillowRasterLoader:
    """Decode any bitmap Pillow understands; palette and greyscale images are expanded to RGB."""

    def __call__(self, path: Path) -> RgbGrid:
        if not path.is_file():
            raise MapFileNotFoundError(path)
        try:
            with Image.open(path) as image:
                logger.debug("Decoding %s (%s, %dx%d)", path, image.mode, *image.size)
                pixels = np.array(image.convert("RGB"), dtype=np.uint8)
        except (UnidentifiedImageError, OSError) as exc:
            raise MapIOError(path, f"Unable to decode bitmap {path}: {exc}") from exc
        return RgbGrid(pixels)
