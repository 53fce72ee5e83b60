"""PixelGrid — fixed-shape RGB pixel buffer with bounds-checked access.

Pixels live in a contiguous numpy uint8 array of shape (width*height, 3),
row-major: the pixel at column x, row y sits at flat index y*width + x.
The buffer is allocated once per construction, decode or set_pixels call
and never grows.

width, height and color_depth are plain metadata. Their setters do not
touch the buffer, so changing them can leave the declared shape out of step
with the stored pixels; pixel_at and set_pixel check both.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

import numpy as np

from ppm_tool.core.errors import InvalidFormat, OutOfBounds
from ppm_tool.core.types import Color

DEFAULT_COLOR_DEPTH = 255


def _as_rgb(color: Color | tuple[int, int, int]) -> tuple[int, int, int]:
    if isinstance(color, Color):
        return color.to_tuple()
    return Color.from_tuple(color).to_tuple()


class PixelGrid:
    """A width×height grid of Colors, all black on construction."""

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f'Grid dimensions must be non-negative, got {width}x{height}')
        self._width = width
        self._height = height
        self._color_depth = DEFAULT_COLOR_DEPTH
        self._pixels = np.zeros((width * height, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int) -> None:
        self._width = value

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value: int) -> None:
        self._height = value

    @property
    def color_depth(self) -> int:
        """Maximum channel value declared in the header. Never enforced."""
        return self._color_depth

    @color_depth.setter
    def color_depth(self, value: int) -> None:
        self._color_depth = value

    def _index(self, x: int, y: int) -> int | None:
        """Flat buffer index for (x, y), or None when outside grid or buffer."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            return None
        i = y * self._width + x
        if i >= len(self._pixels):
            return None
        return i

    def pixel_at(self, x: int, y: int) -> Color | None:
        """Return the Color at (x, y), or None for out-of-range coordinates."""
        i = self._index(x, y)
        if i is None:
            return None
        r, g, b = self._pixels[i]
        return Color(int(r), int(g), int(b))

    def set_pixel(self, x: int, y: int, color: Color | tuple[int, int, int]) -> None:
        """Overwrite one pixel. Raises OutOfBounds and leaves the grid unchanged."""
        i = self._index(x, y)
        if i is None:
            raise OutOfBounds(f'({x},{y}) for image size ({self._width}, {self._height})')
        self._pixels[i] = _as_rgb(color)

    @property
    def pixels(self) -> tuple[Color, ...]:
        """All pixels in row-major order."""
        return tuple(Color(int(r), int(g), int(b)) for r, g, b in self._pixels)

    def set_pixels(self, pixels: Iterable[Color | tuple[int, int, int]] | np.ndarray) -> None:
        """Replace the whole buffer.

        The new buffer must hold exactly width*height pixels; anything else
        raises InvalidFormat and leaves the grid unchanged. Arrays must be
        shaped (n, 3) with every value in 0..255.
        """
        if isinstance(pixels, np.ndarray):
            if pixels.ndim != 2 or pixels.shape[1] != 3:
                raise InvalidFormat(f'pixel array must be shaped (n, 3), got {pixels.shape}')
            if pixels.dtype != np.uint8 and pixels.size and np.any((pixels < 0) | (pixels > 255)):
                raise InvalidFormat('pixel array holds channel values outside 0..255')
            arr = pixels.astype(np.uint8)
        else:
            rows = [_as_rgb(c) for c in pixels]
            arr = np.array(rows, dtype=np.uint8).reshape(len(rows), 3)
        expected = self._width * self._height
        if len(arr) != expected:
            raise InvalidFormat(
                f'pixel buffer holds {len(arr)} pixels, image size ({self._width}, {self._height}) needs {expected}'
            )
        self._pixels = arr

    def iter_pixels(self) -> Iterator[tuple[int, int, Color]]:
        """Yield (x, y, Color) in row-major order. Each call starts over."""
        width = self._width
        if width == 0:
            return
        for i, (r, g, b) in enumerate(self._pixels):
            yield i % width, i // width, Color(int(r), int(g), int(b))

    def to_array(self) -> np.ndarray:
        """Copy of the buffer shaped (height, width, 3).

        Raises ValueError when width/height were changed out of step with the buffer.
        """
        return self._pixels.reshape(self._height, self._width, 3).copy()

    def raw_pixels(self) -> np.ndarray:
        """Read-only view of the flat (n, 3) buffer."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def _fill_from(self, triples: np.ndarray) -> None:
        """Overwrite the leading len(triples) pixels. Used by the decoder."""
        self._pixels[: len(triples)] = triples

    @classmethod
    def from_bytes(cls, data: bytes) -> PixelGrid:
        from ppm_tool.core.decoder import decode

        return decode(data)

    @classmethod
    def from_file(cls, path: str | Path) -> PixelGrid:
        from ppm_tool.core.decoder import decode_file

        return decode_file(path)

    def to_bytes(self) -> bytes:
        from ppm_tool.core.encoder import encode

        return encode(self)

    def save(self, path: str | Path) -> None:
        from ppm_tool.core.encoder import encode_file

        encode_file(self, path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._color_depth == other._color_depth
            and np.array_equal(self._pixels, other._pixels)
        )

    def __repr__(self) -> str:
        return f'PixelGrid(width={self._width}, height={self._height}, color_depth={self._color_depth})'
