"""Shared types for ppm-tool: Color, Command, InfoReport."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Color:
    """An 8-bit RGB value. Replaced wholesale, never mutated."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f'Channel value {channel} outside 0..255')

    @classmethod
    def from_tuple(cls, rgb: tuple[int, int, int]) -> Color:
        r, g, b = rgb
        return cls(int(r), int(g), int(b))

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def __str__(self) -> str:
        return f'({self.red}, {self.green}, {self.blue})'


BLACK = Color(0, 0, 0)


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='cat', help='Render an image in the terminal')

        @command.run
        def run(args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self._configure_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register a function adding options to the subparser."""
        self._configure_fn = fn
        return fn

    def configure(self, parser: Any) -> None:
        if self._configure_fn is not None:
            self._configure_fn(parser)

    def execute(self, args: Any) -> int:
        """Execute the command's run function. Returns the exit code."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        return self._run_fn(args) or 0


@dataclass
class InfoReport:
    """Header summary and colour census collected by the `info` command."""

    image_path: str = ''
    width: int = 0
    height: int = 0
    color_depth: int = 0
    file_size: int = 0
    header_size: int = 0
    census: list[dict[str, Any]] = field(default_factory=list)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def expected_body(self) -> int:
        return self.pixel_count * 3

    @property
    def body_size(self) -> int:
        return max(self.file_size - self.header_size, 0)

    @property
    def decoded_pixels(self) -> int:
        return min(self.body_size // 3, self.pixel_count)

    @property
    def truncated(self) -> bool:
        return self.decoded_pixels < self.pixel_count
