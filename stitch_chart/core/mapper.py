"""Assign every pixel to its nearest palette colour.

Alpha is ignored here: transparent pixels are only excluded from sampling,
never from mapping. Distances are exact integer squared RGB distances so
that equal distances compare equal, and np.argmin returns the first
minimum, which keeps the earliest palette entry on ties.
"""

from collections.abc import Sequence

import numpy as np

from stitch_chart.core.errors import EmptyPaletteError
from stitch_chart.core.types import Grid, PaletteEntry

# Pixel x palette pairs evaluated per chunk
CHUNK_CELLS = 1 << 20


def map_pixels(pixels, palette: Sequence[Sequence[int]]) -> np.ndarray:
    """Return a (height, width) int array of indices into `palette`."""
    if len(palette) == 0:
        raise EmptyPaletteError('Cannot map pixels against an empty palette')

    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f'Expected an (height, width, 3|4) pixel buffer, got shape {arr.shape}')

    colours = np.asarray([tuple(c)[:3] for c in palette], dtype=np.int64)
    height, width = arr.shape[:2]
    out = np.zeros((height, width), dtype=np.intp)

    # Bound the (rows, w, k, 3) distance buffer for full-size photos
    step = max(1, CHUNK_CELLS // max(1, width * len(colours)))
    for top in range(0, height, step):
        rgb = arr[top : top + step, :, :3].astype(np.int64)
        # (rows, w, 1, 3) - (k, 3) -> (rows, w, k)
        diffs = rgb[:, :, np.newaxis, :] - colours[np.newaxis, np.newaxis, :, :]
        dist_sq = np.sum(diffs * diffs, axis=-1)
        out[top : top + step] = np.argmin(dist_sq, axis=-1)
    return out


def map_to_ids(pixels, entries: Sequence[PaletteEntry]) -> Grid:
    """Map pixels straight to palette entry ids."""
    indices = map_pixels(pixels, [e.rgb for e in entries])
    ids = [e.id for e in entries]
    return [[ids[int(i)] for i in row] for row in indices]
