"""Tests for stitch_chart.core.quantize — sampling and median cut."""

import numpy as np
import pytest
from stitch_chart.core.quantize import quantize, sample_pixels


def _close(a, b, tol=2):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


class TestSamplePixels:
    def test_every_fifth_pixel(self):
        arr = np.zeros((2, 5, 4), dtype=np.uint8)
        arr[..., 3] = 255
        arr[0, 0, :3] = (10, 0, 0)
        arr[1, 0, :3] = (20, 0, 0)
        samples = sample_pixels(arr)
        assert samples.tolist() == [[10, 0, 0], [20, 0, 0]]

    def test_transparent_pixels_dropped(self):
        arr = np.full((1, 3, 4), 200, dtype=np.uint8)
        arr[0, 0, 3] = 0
        arr[0, 1, 3] = 128  # at the threshold: dropped
        arr[0, 2, 3] = 129
        samples = sample_pixels(arr, step=1)
        assert len(samples) == 1

    def test_rgb_buffer_is_opaque(self):
        arr = np.zeros((3, 3, 3), dtype=np.uint8)
        assert len(sample_pixels(arr, step=1)) == 9

    def test_nested_lists_accepted(self):
        pixels = [[[1, 2, 3, 255], [4, 5, 6, 255]]]
        assert sample_pixels(pixels, step=1).tolist() == [[1, 2, 3], [4, 5, 6]]

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            sample_pixels(np.zeros((4, 4)))


class TestQuantize:
    def test_empty_samples(self):
        assert quantize([], 4) == []
        assert quantize(np.zeros((0, 3)), 4) == []

    def test_target_count_must_be_positive(self):
        with pytest.raises(ValueError):
            quantize([(0, 0, 0)], 0)

    def test_single_bucket_is_mean(self):
        assert quantize([(0, 0, 0), (10, 20, 30)], 1) == [(5, 10, 15)]

    def test_mean_rounds_half_up(self):
        # 0.5 -> 1, 1.5 -> 2, 2.5 -> 3
        assert quantize([(0, 1, 2), (1, 2, 3)], 1) == [(1, 2, 3)]

    def test_red_pair_grouped_apart_from_green(self):
        colours = quantize([(255, 0, 0), (254, 1, 0), (0, 255, 0)], 2)
        assert len(colours) == 2
        assert any(_close(c, (255, 0, 0)) for c in colours)
        assert any(_close(c, (0, 255, 0), tol=0) for c in colours)

    def test_fewer_colours_when_not_splittable(self):
        assert quantize([(1, 2, 3)], 8) == [(1, 2, 3)]

    def test_duplicate_samples_still_split(self):
        # Zero span buckets are still split while they hold >= 2 samples
        colours = quantize([(9, 9, 9)] * 4, 3)
        assert len(colours) == 3
        assert set(colours) == {(9, 9, 9)}

    def test_channel_priority_r_over_g(self):
        # R and G spans tie at 100; sorting on R pairs (0,0,0) with (10,100,0)
        samples = [(0, 0, 0), (10, 100, 0), (100, 10, 0), (100, 100, 0)]
        assert quantize(samples, 2) == [(5, 50, 0), (100, 55, 0)]

    def test_widest_bucket_split_first(self):
        samples = [(0, 0, 0), (0, 0, 10), (200, 0, 0), (255, 0, 0)]
        colours = quantize(samples, 3)
        assert len(colours) == 3
        # First split on R: {(0,0,0),(0,0,10)} | {(200,..),(255,..)}; the red pair spans 55 > 10
        assert (200, 0, 0) in colours
        assert (255, 0, 0) in colours
        assert (0, 0, 5) in colours

    def test_deterministic(self):
        rng = np.random.default_rng(42)
        samples = rng.integers(0, 256, size=(500, 3))
        assert quantize(samples, 8) == quantize(samples.copy(), 8)

    def test_at_most_target_count(self):
        rng = np.random.default_rng(7)
        samples = rng.integers(0, 256, size=(300, 3))
        for n in (1, 2, 5, 16):
            assert len(quantize(samples, n)) == n

    def test_idempotent_on_representatives(self):
        rng = np.random.default_rng(3)
        samples = rng.integers(0, 256, size=(400, 3))
        first = quantize(samples, 6)
        again = quantize(first, len(first))
        assert sorted(again) == sorted(first)

    def test_idempotent_with_larger_target(self):
        first = quantize([(0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 0, 255)], 4)
        assert sorted(quantize(first, 10)) == sorted(first)
