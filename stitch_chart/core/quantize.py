"""Median-cut colour quantization.

sample_pixels() picks every Nth pixel of an RGBA buffer and drops
transparent ones. quantize() reduces those samples to at most N
representative colours:

  1. Start with one bucket holding every sample.
  2. Pick the bucket (>= 2 samples) whose widest channel span is largest.
     Earliest bucket wins ties; channel priority is R > G > B.
  3. Sort it on that channel, cut at len // 2, and append both halves to
     the end of the bucket list in place of the original.
  4. Repeat until there are N buckets or nothing can be split.
  5. Each bucket's colour is its per-channel mean, rounded half up.

Buckets live only inside quantize(); the result is a plain list of RGB tuples.
"""

import numpy as np

from stitch_chart.core.types import Colour

ALPHA_THRESHOLD = 128
SAMPLE_STEP = 5


def sample_pixels(pixels, step: int = SAMPLE_STEP, alpha_threshold: int = ALPHA_THRESHOLD) -> np.ndarray:
    """Return an (n, 3) int array of sampled opaque pixels.

    Pixels are read in row-major order; every `step`-th pixel is kept if its
    alpha is strictly greater than `alpha_threshold`. 3-channel buffers are
    treated as fully opaque.
    """
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f'Expected an (height, width, 3|4) pixel buffer, got shape {arr.shape}')
    flat = arr.reshape(-1, arr.shape[2])[:: max(step, 1)].astype(np.int64)
    if flat.shape[1] == 4:
        flat = flat[flat[:, 3] > alpha_threshold]
    return flat[:, :3]


def _widest_channel(bucket: np.ndarray) -> tuple[int, int]:
    """(span, channel) of the widest channel. argmax keeps R over G over B on ties."""
    spans = bucket.max(axis=0) - bucket.min(axis=0)
    channel = int(np.argmax(spans))
    return int(spans[channel]), channel


def _mean_colour(bucket: np.ndarray) -> Colour:
    # Integer round-half-up: floor((2 * sum + n) / (2 * n))
    n = len(bucket)
    totals = bucket.sum(axis=0)
    r, g, b = ((2 * int(t) + n) // (2 * n) for t in totals)
    return (r, g, b)


def quantize(samples, target_count: int) -> list[Colour]:
    """Reduce `samples` (sequence of RGB triples) to at most `target_count` colours.

    Empty samples give an empty list. Fewer colours are returned when no
    bucket can be split any further.
    """
    if target_count < 1:
        raise ValueError(f'target_count must be >= 1, got {target_count}')

    arr = np.asarray(samples, dtype=np.int64)
    if arr.size == 0:
        return []
    arr = arr.reshape(-1, arr.shape[-1])[:, :3]

    buckets: list[np.ndarray] = [arr]
    while len(buckets) < target_count:
        best = -1
        best_span = -1
        best_channel = 0
        for i, bucket in enumerate(buckets):
            if len(bucket) < 2:
                continue
            span, channel = _widest_channel(bucket)
            if span > best_span:
                best = i
                best_span = span
                best_channel = channel

        if best == -1:
            break

        bucket = buckets.pop(best)
        ordered = bucket[np.argsort(bucket[:, best_channel], kind='stable')]
        mid = len(ordered) // 2
        buckets.append(ordered[:mid])
        buckets.append(ordered[mid:])

    return [_mean_colour(b) for b in buckets]
