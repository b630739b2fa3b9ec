"""Grid operations: validation, creation, padding, gauge sizing and flood fill.

All functions return new grids and leave their input untouched.
"""

from collections.abc import Sequence

from stitch_chart.core.errors import EmptyPaletteError, MalformedGridError
from stitch_chart.core.palette import same_hex
from stitch_chart.core.types import Grid, PaletteEntry

DIRECTIONS = ('top', 'bottom', 'left', 'right', 'all')


def validate_grid(grid: Sequence[Sequence[str]]) -> None:
    """Raise MalformedGridError unless the grid has >= 1 row and equal, non-zero row lengths."""
    if len(grid) == 0:
        raise MalformedGridError('Grid has no rows')
    cols = len(grid[0])
    if cols == 0:
        raise MalformedGridError('Grid row 0 has no columns')
    for i, row in enumerate(grid):
        if len(row) != cols:
            raise MalformedGridError(f'Grid is not rectangular: row {i} has {len(row)} columns, expected {cols}')


def create_grid(rows: int, cols: int, fill_id: str) -> Grid:
    if rows < 1 or cols < 1:
        raise MalformedGridError(f'Grid must be at least 1x1, got {rows}x{cols}')
    return [[fill_id] * cols for _ in range(rows)]


def background_id(palette: Sequence[PaletteEntry]) -> str:
    """Id of the first white entry, else of the first entry."""
    if not palette:
        raise EmptyPaletteError('Palette is empty')
    for entry in palette:
        if same_hex(entry.hex, '#ffffff'):
            return entry.id
    return palette[0].id


def pad_grid(grid: Grid, direction: str, amount: int, fill_id: str) -> Grid:
    """Add `amount` rows/columns of `fill_id` to one edge, or to every edge with 'all'."""
    if direction not in DIRECTIONS:
        raise ValueError(f'Unknown direction: {direction}. Expected one of {", ".join(DIRECTIONS)}')
    if amount < 0:
        raise ValueError(f'amount must be >= 0, got {amount}')
    validate_grid(grid)

    new = [list(row) for row in grid]
    cols = len(new[0])
    if direction in ('bottom', 'all'):
        new = new + [[fill_id] * cols for _ in range(amount)]
    if direction in ('top', 'all'):
        new = [[fill_id] * cols for _ in range(amount)] + new
    if direction in ('right', 'all'):
        new = [row + [fill_id] * amount for row in new]
    if direction in ('left', 'all'):
        new = [[fill_id] * amount + row for row in new]
    return new


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def gauge_dimensions(
    width_in: float,
    height_in: float,
    stitches_per_inch: float,
    rows_per_inch: float,
) -> tuple[int, int]:
    """(rows, cols) needed for a piece of the given size at the given gauge."""
    rows = _round_half_up(height_in * rows_per_inch)
    cols = _round_half_up(width_in * stitches_per_inch)
    if rows < 1 or cols < 1:
        raise MalformedGridError(f'Gauge gives an empty grid ({rows} rows x {cols} cols)')
    return rows, cols


def fit_grid(grid: Grid, rows: int, cols: int, fill_id: str) -> Grid:
    """Resize to rows x cols, keeping the overlapping top-left region."""
    validate_grid(grid)
    new = create_grid(rows, cols, fill_id)
    for r in range(min(len(grid), rows)):
        for c in range(min(len(grid[0]), cols)):
            new[r][c] = grid[r][c]
    return new


def flood_fill(grid: Grid, x: int, y: int, replacement: str) -> Grid:
    """4-connected fill of the region containing (x, y) with `replacement`."""
    validate_grid(grid)
    rows = len(grid)
    cols = len(grid[0])
    if not (0 <= x < cols and 0 <= y < rows):
        raise IndexError(f'({x}, {y}) is outside a {cols}x{rows} grid')

    new = [list(row) for row in grid]
    target = new[y][x]
    if target == replacement:
        return new

    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if new[cy][cx] != target:
            continue
        new[cy][cx] = replacement
        for nx, ny in ((cx - 1, cy), (cx + 1, cy), (cx, cy - 1), (cx, cy + 1)):
            if 0 <= nx < cols and 0 <= ny < rows:
                stack.append((nx, ny))
    return new


def colour_counts(grid: Grid) -> dict[str, int]:
    """Stitch count per colour id, in first-seen order."""
    counts: dict[str, int] = {}
    for row in grid:
        for cell in row:
            counts[cell] = counts.get(cell, 0) + 1
    return counts
