"""Pillow bridge — convert between PIL images and PixelGrid.

Images are converted to RGB on the way in, so palette, greyscale and
alpha images all land as plain 8-bit triples with color_depth 255.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from ppm_tool.core.grid import PixelGrid


def from_image(image: Image.Image) -> PixelGrid:
    arr = np.asarray(image.convert('RGB'), dtype=np.uint8)
    grid = PixelGrid(image.width, image.height)
    grid.set_pixels(arr.reshape(-1, 3))
    return grid


def to_image(grid: PixelGrid) -> Image.Image:
    """Build an RGB image from the grid. Channel values are passed through unscaled."""
    return Image.fromarray(grid.to_array())
