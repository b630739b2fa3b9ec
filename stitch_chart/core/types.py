"""Shared types for stitch-chart: PaletteEntry, RowBlock, RowInstruction, Pattern, Command, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

Colour = tuple[int, int, int]
Grid = list[list[str]]
Side = Literal['RS', 'WS']


@dataclass(frozen=True, eq=False)
class PaletteEntry:
    """One named, coloured slot referenced by grid cells via its id.

    Equality and hashing use the id only: two entries may share a hex value.
    """

    id: str
    name: str
    hex: str  # '#rrggbb', compared case-insensitively
    symbol: str | None = None  # single character for B&W charts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PaletteEntry):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def rgb(self) -> Colour:
        from stitch_chart.core.palette import hex_to_rgb

        return hex_to_rgb(self.hex)


@dataclass(frozen=True)
class RowBlock:
    """A run of `count` consecutive stitches in one colour."""

    colour_id: str
    count: int


@dataclass
class RowInstruction:
    """Encoded row: physical row number, side and run-length blocks in working order."""

    row_number: int  # 1 = bottom row
    side: Side
    blocks: list[RowBlock] = field(default_factory=list)

    @property
    def stitches(self) -> int:
        return sum(b.count for b in self.blocks)


@dataclass
class Pattern:
    """A grid and the palette its cells refer to. They always travel together."""

    grid: Grid
    palette: list[PaletteEntry]

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def lookup(self) -> dict[str, PaletteEntry]:
        """Map palette id to entry."""
        return {p.id: p for p in self.palette}

    def validate(self) -> None:
        """Raise MalformedGridError unless the grid is rectangular and every cell id is in the palette."""
        from stitch_chart.core.errors import MalformedGridError
        from stitch_chart.core.grid import validate_grid

        validate_grid(self.grid)
        known = {p.id for p in self.palette}
        for y, row in enumerate(self.grid):
            for x, cell in enumerate(row):
                if cell not in known:
                    raise MalformedGridError(f'Cell ({x}, {y}) references unknown palette id {cell!r}')


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='written', help='Written row instructions')

        @command.run
        def run(pattern, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, pattern: Pattern, report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(pattern, report, args)


@dataclass
class Report:
    """Accumulates results from commands for text/JSON output."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    rows: int = 0
    cols: int = 0
    sections: dict[str, dict[str, Any]] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)

    def add(self, section: str, data: dict[str, Any]) -> None:
        """Add (or replace) a command's results."""
        self.sections[section] = data

    def record_file(self, path: str) -> None:
        self.files.append(path)
