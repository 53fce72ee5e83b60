"""Print the P6 header and a colour census.

Reports width, height, colour depth, pixel count, file and header size,
and how much of the pixel body is present. A short body is not an error:
the missing pixels decode as black and the report flags the file as
truncated.

The census lists the most frequent colours (PPM_TOOL_CENSUS_TOP, default 5).

Example:
    uv run ppm-tool info image.ppm
    uv run ppm-tool info image.ppm --json
"""

import os
import sys
from pathlib import Path

from ppm_tool.core import env
from ppm_tool.core.decoder import decode_body, read_header
from ppm_tool.core.errors import PpmIoError
from ppm_tool.core.report import colour_census, format_json, format_text
from ppm_tool.core.types import Command, InfoReport

command = Command(
    name='info',
    help='Print header fields, body size and a colour census.',
)


def build_report(path: str, data: bytes, top: int) -> InfoReport:
    header = read_header(data)
    grid = decode_body(data, header)
    return InfoReport(
        image_path=path,
        width=grid.width,
        height=grid.height,
        color_depth=grid.color_depth,
        file_size=len(data),
        header_size=header.body_offset,
        census=colour_census(grid, top=top),
    )


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('image', help='Path to a P6 .ppm file')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


@command.run
def run(args) -> int:
    if not os.path.isfile(args.image):
        print(f"File doesn't exist! '{args.image}'", file=sys.stderr)
        return 1
    try:
        data = Path(args.image).read_bytes()
    except OSError as e:
        raise PpmIoError(e, args.image) from e

    report = build_report(args.image, data, env.census_top())
    print(format_json(report) if args.json else format_text(report))
    return 0
