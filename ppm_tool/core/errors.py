"""Error taxonomy for the P6 codec.

Every decode or mutation failure is raised as a subclass of PpmError.
Callers branch on the exception class (or on `kind`) instead of parsing
messages. Each variant has a fixed base message; an optional detail string
is appended after a colon.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    INVALID_SIGNATURE = 'invalid-signature'
    INVALID_FORMAT = 'invalid-format'
    UNEXPECTED_EOF = 'unexpected-eof'
    OUT_OF_BOUNDS = 'out-of-bounds'
    IO_ERROR = 'io-error'


class PpmError(Exception):
    """Base class for all codec failures."""

    kind: ErrorKind
    base_message: str = 'PPM error'

    def __init__(self, detail: str | None = None):
        self.detail = detail
        self.message = f'{self.base_message}: {detail}' if detail else self.base_message
        super().__init__(self.message)


class InvalidSignature(PpmError):
    """First header line is not the two-byte "P6" magic."""

    kind = ErrorKind.INVALID_SIGNATURE
    base_message = 'Invalid signature!'


class InvalidFormat(PpmError):
    """A header field failed to parse, or the header never resolved."""

    kind = ErrorKind.INVALID_FORMAT
    base_message = 'Invalid file format!'


class UnexpectedEof(PpmError):
    """The byte stream ended before a required header field or delimiter."""

    kind = ErrorKind.UNEXPECTED_EOF
    base_message = 'Unexpected end of file!'


class OutOfBounds(PpmError):
    """A pixel write targeted coordinates outside the grid."""

    kind = ErrorKind.OUT_OF_BOUNDS
    base_message = 'Pixel position out of bounds!'


class PpmIoError(PpmError):
    """Reading or writing the underlying file failed.

    The original OSError is kept as `reason` and chained as __cause__.
    """

    kind = ErrorKind.IO_ERROR
    base_message = 'I/O error!'

    def __init__(self, reason: OSError, path: str | None = None):
        self.reason = reason
        self.path = path
        detail = f'{path}: {reason.strerror or reason}' if path else str(reason)
        super().__init__(detail)
