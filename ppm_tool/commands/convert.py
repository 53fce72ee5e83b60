"""Convert between P6 and any format Pillow handles.

The direction is picked from the file extensions:
  *.ppm destination  — read src with Pillow (PNG, JPEG, ...), convert to
                       RGB, write a P6 file with colour depth 255.
  *.ppm source       — decode with the P6 codec, write dst with Pillow.

Converting .ppm to .ppm round-trips through the codec without Pillow.

Example:
    uv run ppm-tool convert screenshot.png screenshot.ppm
    uv run ppm-tool convert frame.ppm frame.png
"""

import os
import sys

from PIL import Image

from ppm_tool.core.decoder import decode_file
from ppm_tool.core.encoder import encode_file
from ppm_tool.core.errors import PpmIoError
from ppm_tool.core.imaging import from_image, to_image
from ppm_tool.core.types import Command

command = Command(
    name='convert',
    help='Convert between P6 .ppm and other image formats (via Pillow).',
)

PPM_SUFFIXES = {'.ppm', '.pnm'}


def _is_ppm(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in PPM_SUFFIXES


def convert(src: str, dst: str) -> None:
    if _is_ppm(src):
        grid = decode_file(src)
        if _is_ppm(dst):
            encode_file(grid, dst)
        else:
            to_image(grid).save(dst)
    elif _is_ppm(dst):
        with Image.open(src) as image:
            grid = from_image(image)
        encode_file(grid, dst)
    else:
        raise ValueError(f'One of {src!r} or {dst!r} must be a .ppm file')


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('src', help='Source image')
    parser.add_argument('dst', help='Destination image')


@command.run
def run(args) -> int:
    if not os.path.isfile(args.src):
        print(f"File doesn't exist! '{args.src}'", file=sys.stderr)
        return 1
    try:
        convert(args.src, args.dst)
    except PpmIoError as e:
        print(f'Error: {e.message}', file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    print(f'ppm-tool: wrote {args.dst}', file=sys.stderr)
    return 0
