"""Tests for stitch_chart.core.mapper — nearest palette colour per pixel."""

import numpy as np
import pytest
from stitch_chart.core import mapper
from stitch_chart.core.errors import EmptyPaletteError
from stitch_chart.core.mapper import map_pixels, map_to_ids
from stitch_chart.core.types import PaletteEntry


class TestMapPixels:
    def test_same_shape_as_input(self):
        pixels = np.zeros((3, 5, 4), dtype=np.uint8)
        out = map_pixels(pixels, [(0, 0, 0), (255, 255, 255)])
        assert out.shape == (3, 5)

    def test_nearest_colour(self):
        pixels = np.array([[[250, 250, 250, 255], [10, 0, 0, 255], [0, 0, 240, 255]]], dtype=np.uint8)
        out = map_pixels(pixels, [(0, 0, 0), (255, 255, 255), (0, 0, 255)])
        assert out.tolist() == [[1, 0, 2]]

    def test_alpha_ignored(self):
        pixels = np.array([[[255, 255, 255, 0], [0, 0, 0, 0]]], dtype=np.uint8)
        out = map_pixels(pixels, [(0, 0, 0), (255, 255, 255)])
        assert out.tolist() == [[1, 0]]

    def test_single_colour_image(self):
        pixels = np.full((6, 4, 4), (120, 30, 200, 255), dtype=np.uint8)
        palette = [(0, 0, 0), (255, 255, 255), (100, 40, 180), (200, 0, 0)]
        out = map_pixels(pixels, palette)
        assert set(out.flatten().tolist()) == {2}

    def test_tie_goes_to_earliest_entry(self):
        pixels = np.full((2, 2, 3), 10, dtype=np.uint8)
        # (0,0,0) and (20,20,20) are equally far from (10,10,10)
        for _ in range(3):
            assert set(map_pixels(pixels, [(20, 20, 20), (0, 0, 0)]).flatten().tolist()) == {0}
            assert set(map_pixels(pixels, [(0, 0, 0), (20, 20, 20)]).flatten().tolist()) == {0}

    def test_duplicate_palette_colours(self):
        pixels = np.full((1, 2, 3), 50, dtype=np.uint8)
        assert map_pixels(pixels, [(0, 0, 0), (50, 50, 50), (50, 50, 50)]).tolist() == [[1, 1]]

    def test_empty_palette(self):
        with pytest.raises(EmptyPaletteError):
            map_pixels(np.zeros((2, 2, 4), dtype=np.uint8), [])

    def test_uint8_does_not_wrap(self):
        pixels = np.array([[[0, 0, 0, 255]]], dtype=np.uint8)
        assert map_pixels(pixels, [(200, 200, 200), (10, 10, 10)]).tolist() == [[1]]

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            map_pixels(np.zeros((2, 2)), [(0, 0, 0)])

    def test_chunked_rows_land_in_place(self, monkeypatch: pytest.MonkeyPatch):
        # 2 colours x width 3 -> one row per chunk
        monkeypatch.setattr(mapper, 'CHUNK_CELLS', 6)
        pixels = np.zeros((5, 3, 3), dtype=np.uint8)
        pixels[1, 2] = (255, 255, 255)
        pixels[4, 0] = (200, 200, 200)
        out = map_pixels(pixels, [(0, 0, 0), (255, 255, 255)])
        expected = [[0, 0, 0], [0, 0, 1], [0, 0, 0], [0, 0, 0], [1, 0, 0]]
        assert out.tolist() == expected


class TestMapToIds:
    def test_resolves_ids(self):
        entries = [
            PaletteEntry(id='bg', name='Pure White', hex='#FFFFFF'),
            PaletteEntry(id='ink', name='Navy', hex='#000080'),
        ]
        pixels = np.array([[[250, 250, 250, 255], [0, 0, 120, 255]]], dtype=np.uint8)
        assert map_to_ids(pixels, entries) == [['bg', 'ink']]
