"""Tests for the per-pixel classification and overlay rendering."""

import numpy as np
import pytest

from visual_diff.exceptions import DimensionMismatchError
from visual_diff.models import RGBColor, DEFAULT_COLOR_B
from visual_diff.services.pixel_diff_service import PixelDiffService
from tests.utils.images import mono, solid_mono


@pytest.fixture
def service():
    return PixelDiffService()


def random_mono(rng, width, height, color=None):
    values = rng.integers(0, 256, size=width * height)
    return mono(values, width, height) if color is None else mono(values, width, height, color)


class TestIdenticalImages:
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_no_differences_and_gray_passthrough(self, service, seed):
        rng = np.random.default_rng(seed)
        image = random_mono(rng, 17, 9)
        overlay, count = service.diff(image, image)
        assert count == 0
        assert overlay.shape == (9, 17, 3)
        gray = image.as_2d()
        for channel in range(3):
            assert np.array_equal(overlay[..., channel], gray)


class TestDifferingImages:
    def test_fully_opposite(self, service):
        a = solid_mono(10, 10, 255)
        b = solid_mono(10, 10, 0, DEFAULT_COLOR_B)
        overlay, count = service.diff(a, b)
        assert count == 100
        # Red at full intensity plus green at zero intensity
        assert (overlay == (255, 0, 0)).all()

    def test_overlay_adds_both_tints(self, service):
        a = mono([128], 1, 1, RGBColor(255, 0, 0))
        b = mono([255], 1, 1, RGBColor(0, 0, 255))
        overlay, count = service.diff(a, b)
        assert count == 1
        assert overlay[0, 0].tolist() == [128, 0, 255]

    def test_overlay_saturates_instead_of_wrapping(self, service):
        color = RGBColor(200, 200, 200)
        a = mono([255], 1, 1, color)
        b = mono([254], 1, 1, color)
        overlay, _ = service.diff(a, b)
        assert overlay[0, 0].tolist() == [255, 255, 255]

    def test_every_unequal_pair_counts(self, service):
        # One intensity step is still a difference
        a = solid_mono(4, 4, 200)
        b = solid_mono(4, 4, 201)
        _, count = service.diff(a, b)
        assert count == 16

    def test_count_matches_unequal_samples(self, service):
        rng = np.random.default_rng(42)
        a = random_mono(rng, 20, 20)
        b = random_mono(rng, 20, 20, DEFAULT_COLOR_B)
        _, count = service.diff(a, b)
        assert count == int(np.count_nonzero(a.grayscale_buffer != b.grayscale_buffer))


class TestOnlyShowDifferences:
    def test_zeroes_exactly_the_matching_pixels(self, service):
        rng = np.random.default_rng(7)
        a = random_mono(rng, 12, 8)
        values = a.grayscale_buffer.copy()
        values[::3] = 255 - values[::3]
        b = mono(values, 12, 8, DEFAULT_COLOR_B)

        full, count_full = service.diff(a, b, only_show_differences=False)
        only, count_only = service.diff(a, b, only_show_differences=True)

        assert count_full == count_only
        differs = (a.grayscale_buffer != b.grayscale_buffer).reshape(8, 12)
        assert np.array_equal(only[differs], full[differs])
        assert (only[~differs] == 0).all()


class TestDimensionMismatch:
    @pytest.mark.parametrize("size_b", [(50, 50), (100, 99), (99, 100), (1, 10000)])
    def test_any_size_difference_fails(self, service, size_b):
        a = solid_mono(100, 100, 255)
        b = solid_mono(*size_b, 255)
        with pytest.raises(DimensionMismatchError) as exc_info:
            service.diff(a, b)
        message = str(exc_info.value)
        assert "100x100" in message
        assert f"{size_b[0]}x{size_b[1]}" in message
