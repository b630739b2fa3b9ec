"""Render row instructions as human-readable text lines.

Blocks are emitted in the order the encoder stored them (already in
working direction). An id missing from the palette is rendered as
UNKNOWN_NAME instead of failing the line.
"""

from collections.abc import Iterable, Mapping, Sequence

from stitch_chart.core.types import PaletteEntry, RowInstruction

UNKNOWN_NAME = 'Unknown'

PaletteLookup = Mapping[str, PaletteEntry] | Sequence[PaletteEntry]

_ARROWS = {'RS': '<-', 'WS': '->'}


def _as_lookup(palette: PaletteLookup) -> Mapping[str, PaletteEntry]:
    if isinstance(palette, Mapping):
        return palette
    return {p.id: p for p in palette}


def bottom_up(instructions: Iterable[RowInstruction]) -> list[RowInstruction]:
    """Working order: row 1 (bottom) first."""
    return sorted(instructions, key=lambda r: r.row_number)


def format_row(instruction: RowInstruction, palette: PaletteLookup) -> str:
    """'Row 2 (WS): Red x2, Navy x1'"""
    lookup = _as_lookup(palette)
    parts = []
    for block in instruction.blocks:
        entry = lookup.get(block.colour_id)
        name = entry.name if entry is not None else UNKNOWN_NAME
        parts.append(f'{name} x{block.count}')
    return f'Row {instruction.row_number} ({instruction.side}): {", ".join(parts)}'


def format_written(
    instructions: Iterable[RowInstruction],
    palette: PaletteLookup,
    bottom_up_order: bool = True,
) -> list[str]:
    """Format every row. By default rows are sorted into working order first."""
    lookup = _as_lookup(palette)
    rows = bottom_up(instructions) if bottom_up_order else list(instructions)
    return [format_row(r, lookup) for r in rows]


def format_blocks_row(instruction: RowInstruction, palette: PaletteLookup) -> str:
    """Compact block line using chart symbols: 'Row 1 (RS) <-: X 3, O 2'."""
    lookup = _as_lookup(palette)
    parts = []
    for block in instruction.blocks:
        entry = lookup.get(block.colour_id)
        if entry is None:
            label = '?'
        else:
            label = entry.symbol or entry.name
        parts.append(f'{label} {block.count}')
    arrow = _ARROWS[instruction.side]
    return f'Row {instruction.row_number} ({instruction.side}) {arrow}: {", ".join(parts)}'
