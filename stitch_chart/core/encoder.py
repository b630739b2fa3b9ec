"""Grid rows to direction-aware, run-length-encoded row instructions.

Storage row 0 is the top of the chart; the physical row number counts
from the bottom (row 1 = last storage row). Odd rows are worked on the
right side (RS) and read right to left; even rows are wrong side (WS)
and read left to right.

encode_rows() returns rows in storage order (top first). Sorting into
working order is up to the caller, see formatter.bottom_up().
"""

from collections.abc import Sequence

from stitch_chart.core.grid import validate_grid
from stitch_chart.core.types import Grid, RowBlock, RowInstruction, Side


def row_number(index: int, total_rows: int) -> int:
    """Physical row number of storage row `index`."""
    return total_rows - index


def row_side(number: int) -> Side:
    return 'RS' if number % 2 != 0 else 'WS'


def run_length(cells: Sequence[str]) -> list[RowBlock]:
    """Merge consecutive equal ids into blocks."""
    blocks: list[RowBlock] = []
    current = None
    count = 0
    for cell in cells:
        if count and cell == current:
            count += 1
            continue
        if count:
            blocks.append(RowBlock(current, count))
        current = cell
        count = 1
    if count:
        blocks.append(RowBlock(current, count))
    return blocks


def encode_row(row: Sequence[str], number: int) -> RowInstruction:
    """Encode one row given its physical row number."""
    side = row_side(number)
    cells = list(reversed(row)) if side == 'RS' else list(row)
    return RowInstruction(row_number=number, side=side, blocks=run_length(cells))


def encode_rows(grid: Grid) -> list[RowInstruction]:
    """Encode every grid row, in storage order. Raises MalformedGridError for bad grids."""
    validate_grid(grid)
    total = len(grid)
    return [encode_row(row, row_number(i, total)) for i, row in enumerate(grid)]
