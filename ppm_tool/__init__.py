"""ppm-tool — binary PPM (P6) codec and terminal viewer."""

from ppm_tool.core.decoder import decode, decode_file
from ppm_tool.core.encoder import encode, encode_file
from ppm_tool.core.errors import (
    ErrorKind,
    InvalidFormat,
    InvalidSignature,
    OutOfBounds,
    PpmError,
    PpmIoError,
    UnexpectedEof,
)
from ppm_tool.core.grid import PixelGrid
from ppm_tool.core.types import Color

__all__ = [
    'Color',
    'ErrorKind',
    'InvalidFormat',
    'InvalidSignature',
    'OutOfBounds',
    'PixelGrid',
    'PpmError',
    'PpmIoError',
    'UnexpectedEof',
    'decode',
    'decode_file',
    'encode',
    'encode_file',
]
