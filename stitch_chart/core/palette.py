"""Yarn colour table, symbol alphabet and RGB helpers.

YARNS is an ordered, immutable table of real-world yarn shades (DMC/Scheepjes
style). It is used to give auto-generated palette colours human-readable
names. Order matters: nearest-colour lookups keep the earliest entry on
exact ties.
"""

import math
import re
from collections.abc import Sequence

from stitch_chart.core.errors import ConfigError
from stitch_chart.core.types import Colour

YARNS: tuple[tuple[str, str], ...] = (
    ('Pure White', '#FFFFFF'),
    ('Cream', '#FFFDD0'),
    ('Ecru', '#C2B280'),
    ('Black', '#000000'),
    ('Charcoal', '#36454F'),
    ('Silver Grey', '#C0C0C0'),
    ('Red', '#FF0000'),
    ('Crimson', '#DC143C'),
    ('Burgundy', '#800020'),
    ('Pink', '#FFC0CB'),
    ('Hot Pink', '#FF69B4'),
    ('Orange', '#FFA500'),
    ('Burnt Orange', '#CC5500'),
    ('Yellow', '#FFFF00'),
    ('Mustard', '#FFDB58'),
    ('Gold', '#FFD700'),
    ('Green', '#008000'),
    ('Forest Green', '#228B22'),
    ('Olive', '#808000'),
    ('Lime', '#32CD32'),
    ('Teal', '#008080'),
    ('Cyan', '#00FFFF'),
    ('Tapestry Blue', '#8FDAFA'),
    ('Royal Blue', '#4169E1'),
    ('Navy', '#000080'),
    ('Purple', '#800080'),
    ('Lavender', '#E6E6FA'),
    ('Violet', '#EE82EE'),
    ('Brown', '#A52A2A'),
    ('Chocolate', '#D2691E'),
    ('Beige', '#F5F5DC'),
)

# Chart symbols, assigned to palette entries in order and cycled when the palette is longer
SYMBOLS: tuple[str, ...] = ('X', 'O', '/', '\\', '+', '-', '#', '*', '=', '$', '%', '&', '@', '?', '!')

_HEX_RE = re.compile(r'^[0-9a-fA-F]{3}$|^[0-9a-fA-F]{6}$')


def hex_to_rgb(hex_str: str) -> Colour:
    """Parse '#rrggbb', 'rrggbb' or '#rgb' (any case). Invalid input returns black."""
    h = hex_str.strip().lstrip('#')
    if not _HEX_RE.match(h):
        return (0, 0, 0)
    if len(h) == 3:
        h = ''.join(c * 2 for c in h)
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def rgb_to_hex(rgb: Sequence[int]) -> str:
    r, g, b = (int(c) for c in rgb[:3])
    return f'#{r:02x}{g:02x}{b:02x}'


def same_hex(a: str, b: str) -> bool:
    """Compare two hex strings by colour value, ignoring case and short form."""
    return hex_to_rgb(a) == hex_to_rgb(b)


def rgb_distance(a: Sequence[int], b: Sequence[int]) -> float:
    """Euclidean RGB distance. Casts to int first so numpy uint8 never wraps."""
    dr = int(a[0]) - int(b[0])
    dg = int(a[1]) - int(b[1])
    db = int(a[2]) - int(b[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def nearest_index(colour: Sequence[int], colours: Sequence[Sequence[int]]) -> tuple[int, float]:
    """Index and distance of the nearest colour. Earliest entry wins exact ties.

    Returns (-1, inf) for an empty sequence.
    """
    best = -1
    best_dist = math.inf
    for i, candidate in enumerate(colours):
        dist = rgb_distance(colour, candidate)
        if dist < best_dist:
            best = i
            best_dist = dist
    return best, best_dist


def nearest_colour(
    colour: Sequence[int],
    table: Sequence[tuple[str, str]] = YARNS,
    threshold: float | None = None,
) -> tuple[str | None, float]:
    """Find the nearest named colour in `table`.

    Returns (name, distance). With a threshold, name is None when the best
    match is further away than the threshold; a match exactly at the
    threshold still counts.
    """
    idx, dist = _nearest_yarn(colour, table)
    if threshold is not None and dist > threshold:
        return None, dist
    return table[idx][0], dist


def _nearest_yarn(colour: Sequence[int], table: Sequence[tuple[str, str]]) -> tuple[int, float]:
    if not table:
        raise ConfigError('Named colour table is empty')
    return nearest_index(colour, [hex_to_rgb(h) for _name, h in table])


def yarn_name(colour: Sequence[int], table: Sequence[tuple[str, str]] = YARNS) -> str:
    """Human-readable yarn name for an RGB colour."""
    idx, _dist = _nearest_yarn(colour, table)
    return table[idx][0]


def contrast_colour(hex_str: str) -> str:
    """Black or white, whichever reads better on top of `hex_str` (YIQ brightness)."""
    r, g, b = hex_to_rgb(hex_str)
    yiq = (r * 299 + g * 587 + b * 114) / 1000
    return '#000000' if yiq >= 128 else '#ffffff'
