"""P6 decoder — header tokenizer plus bulk pixel-body reader.

Header lines are split on LF (0x0A). Lines starting with '#' are comments
and are skipped in every state, including before the signature. The scan
walks three states:

  SIGNATURE    line must be exactly b'P6'
  DIMENSIONS   '<width> <height>', split at the first space
  COLOR_DEPTH  '<maxval>' — terminal, scanning stops here

Running out of line feeds before the depth line is reached raises
UnexpectedEof. A depth line that is never terminated leaves the header
unresolved and raises InvalidFormat.

Everything after the header is read as consecutive RGB triples. Short
bodies fill only the leading pixels (the rest stay black) and trailing
bytes are ignored; the body never raises. Dimensions too large to
allocate raise InvalidFormat.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import NamedTuple

import numpy as np

from ppm_tool.core.errors import InvalidFormat, InvalidSignature, PpmIoError, UnexpectedEof
from ppm_tool.core.grid import PixelGrid

SIGNATURE = b'P6'
LF = 0x0A
SPACE = 0x20
COMMENT = b'#'


class HeaderState(enum.Enum):
    SIGNATURE = 'signature'
    DIMENSIONS = 'dimensions'
    COLOR_DEPTH = 'color_depth'


class Header(NamedTuple):
    width: int
    height: int
    color_depth: int
    body_offset: int


def _parse_uint(token: bytes, field: str) -> int:
    """Parse an unsigned ASCII base-10 integer. No sign, no whitespace."""
    if not token or not token.isdigit():
        raise InvalidFormat(f'{field} {token!r} is not a non-negative integer')
    return int(token)


def read_header(data: bytes) -> Header:
    """Scan the header. The returned body_offset is where pixel data starts."""
    state = HeaderState.SIGNATURE
    width = height = 0
    cursor = 0
    while True:
        end = data.find(LF, cursor)
        if end < 0:
            if state is HeaderState.COLOR_DEPTH:
                raise InvalidFormat('header ended before the colour depth line')
            raise UnexpectedEof(f'no line feed after byte {cursor} while reading {state.value}')
        line = data[cursor:end]
        cursor = end + 1
        if line.startswith(COMMENT):
            continue

        match state:
            case HeaderState.SIGNATURE:
                if line != SIGNATURE:
                    raise InvalidSignature(f'expected {SIGNATURE!r}, got {line[:16]!r}')
                state = HeaderState.DIMENSIONS
            case HeaderState.DIMENSIONS:
                sep = line.find(SPACE)
                if sep < 0:
                    raise UnexpectedEof(f'no space between width and height in {line[:32]!r}')
                width = _parse_uint(line[:sep], 'width')
                height = _parse_uint(line[sep + 1 :], 'height')
                state = HeaderState.COLOR_DEPTH
            case HeaderState.COLOR_DEPTH:
                color_depth = _parse_uint(line, 'colour depth')
                return Header(width, height, color_depth, cursor)


def decode_body(data: bytes, header: Header) -> PixelGrid:
    """Build the grid for an already scanned header and fill it from the body.

    Dimensions too large to allocate raise InvalidFormat.
    """
    try:
        grid = PixelGrid(header.width, header.height)
    except (MemoryError, OverflowError, ValueError) as e:
        raise InvalidFormat(f'image size ({header.width}, {header.height}) cannot be allocated') from e
    grid.color_depth = header.color_depth

    body = memoryview(data)[header.body_offset :]
    count = min(len(body) // 3, header.width * header.height)
    if count:
        triples = np.frombuffer(body[: count * 3], dtype=np.uint8).reshape(count, 3)
        grid._fill_from(triples)
    return grid


def decode(data: bytes) -> PixelGrid:
    """Decode P6 bytes into a PixelGrid."""
    data = bytes(data)
    return decode_body(data, read_header(data))


def decode_file(path: str | Path) -> PixelGrid:
    """Read the whole file into memory, then decode it."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise PpmIoError(e, str(path)) from e
    return decode(data)
