"""Render a P6 image in the terminal with half-block glyphs.

Each output line covers two pixel rows. For column x, the background is
set to the 24-bit colour of pixel (x, y+1) and the foreground to pixel
(x, y), then the glyph (default ▀, upper half block) is printed. Odd
heights leave the last line without a background. Every line ends with
the ANSI reset sequence.

The glyph can be changed with PPM_TOOL_GLYPH (environment or .env).

Example:
    uv run ppm-tool cat image.ppm
"""

import os
import sys

from ppm_tool.core import env
from ppm_tool.core.decoder import decode_file
from ppm_tool.core.grid import PixelGrid
from ppm_tool.core.types import Color, Command

command = Command(
    name='cat',
    help='Render an image in the terminal using half blocks and 24-bit colour.',
)

RESET = '\x1b[0m'


def fg(color: Color) -> str:
    return f'\x1b[38;2;{color.red};{color.green};{color.blue}m'


def bg(color: Color) -> str:
    return f'\x1b[48;2;{color.red};{color.green};{color.blue}m'


def render(grid: PixelGrid, glyph: str = env.DEFAULT_GLYPH) -> str:
    """Render the grid as ANSI text, one line per two pixel rows."""
    lines = []
    for y in range(0, grid.height, 2):
        parts = []
        for x in range(grid.width):
            below = grid.pixel_at(x, y + 1)
            if below is not None:
                parts.append(bg(below))
            above = grid.pixel_at(x, y)
            if above is not None:
                parts.append(fg(above) + glyph)
        parts.append(RESET)
        lines.append(''.join(parts))
    return '\n'.join(lines)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('image', help='Path to a P6 .ppm file')


@command.run
def run(args) -> int:
    if not os.path.isfile(args.image):
        print(f"File doesn't exist! '{args.image}'", file=sys.stderr)
        return 1
    grid = decode_file(args.image)
    out = render(grid, env.glyph())
    if out:
        print(out)
    return 0
