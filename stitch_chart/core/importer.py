"""Photo to Pattern: resize, sample, quantize, name and map.

The image is shrunk to the target grid width (height follows the aspect
ratio) so that each pixel becomes one stitch, then run through the
quantize -> name -> map pipeline.
"""

from collections.abc import Sequence

import numpy as np
from PIL import Image

from stitch_chart.core.errors import EmptyPaletteError
from stitch_chart.core.mapper import map_to_ids
from stitch_chart.core.palette import SYMBOLS, YARNS, rgb_to_hex, yarn_name
from stitch_chart.core.quantize import ALPHA_THRESHOLD, SAMPLE_STEP, quantize, sample_pixels
from stitch_chart.core.types import Colour, PaletteEntry, Pattern


def grid_height(width: int, aspect_ratio: float) -> int:
    """round(width / aspect), half up, at least 1."""
    if width < 1:
        raise ValueError(f'width must be >= 1, got {width}')
    if aspect_ratio <= 0:
        raise ValueError(f'aspect ratio must be > 0, got {aspect_ratio}')
    return max(1, int(width / aspect_ratio + 0.5))


def build_palette(
    colours: Sequence[Colour],
    table: Sequence[tuple[str, str]] = YARNS,
    symbols: Sequence[str] = SYMBOLS,
) -> list[PaletteEntry]:
    """Turn quantized colours into palette entries with ids '1'..'n', yarn names and cycling symbols."""
    entries = []
    for i, colour in enumerate(colours):
        entries.append(
            PaletteEntry(
                id=str(i + 1),
                name=yarn_name(colour, table),
                hex=rgb_to_hex(colour),
                symbol=symbols[i % len(symbols)] if symbols else None,
            )
        )
    return entries


def pixelate(image: Image.Image, width: int) -> np.ndarray:
    """Shrink to `width` stitches wide and return the (h, w, 4) RGBA buffer."""
    height = grid_height(width, image.width / image.height)
    small = image.convert('RGBA').resize((width, height), Image.Resampling.BOX)
    return np.array(small)


def import_pixels(
    pixels,
    colour_count: int,
    table: Sequence[tuple[str, str]] = YARNS,
    sample_step: int = SAMPLE_STEP,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> Pattern:
    """Run the pipeline on a ready RGBA buffer (one pixel per stitch)."""
    samples = sample_pixels(pixels, step=sample_step, alpha_threshold=alpha_threshold)
    colours = quantize(samples, colour_count)
    if not colours:
        raise EmptyPaletteError('Image has no opaque pixels to build a palette from')
    palette = build_palette(colours, table)
    grid = map_to_ids(pixels, palette)
    return Pattern(grid=grid, palette=palette)


def import_image(
    image: Image.Image,
    width: int,
    colour_count: int,
    table: Sequence[tuple[str, str]] = YARNS,
    sample_step: int = SAMPLE_STEP,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> Pattern:
    """Convert a photo into a Pattern `width` stitches wide with at most `colour_count` colours."""
    return import_pixels(
        pixelate(image, width),
        colour_count,
        table=table,
        sample_step=sample_step,
        alpha_threshold=alpha_threshold,
    )
