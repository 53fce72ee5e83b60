"""P6 encoder — the inverse of the decoder's byte layout.

Writes b'P6\\n', b'<width> <height>\\n', b'<color_depth>\\n' and then the raw
RGB triples in row-major order. Never emits comments.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ppm_tool.core.errors import PpmIoError
from ppm_tool.core.grid import PixelGrid


def encode_header(width: int, height: int, color_depth: int) -> bytes:
    return b'P6\n' + f'{width} {height}\n{color_depth}\n'.encode('ascii')


def encode(grid: PixelGrid) -> bytes:
    """Serialise a grid to P6 bytes.

    The body always carries width*height triples. If the grid's metadata was
    changed out of step with its buffer, missing pixels are written black and
    surplus ones are dropped.
    """
    expected = grid.width * grid.height
    pixels = grid.raw_pixels()
    if len(pixels) != expected:
        body = np.zeros((expected, 3), dtype=np.uint8)
        n = min(expected, len(pixels))
        body[:n] = pixels[:n]
        pixels = body
    return encode_header(grid.width, grid.height, grid.color_depth) + pixels.tobytes()


def encode_file(grid: PixelGrid, path: str | Path) -> None:
    try:
        Path(path).write_bytes(encode(grid))
    except OSError as e:
        raise PpmIoError(e, str(path)) from e
