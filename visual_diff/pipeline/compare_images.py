"""
Comparison Pipeline
Grayscale extraction -> pixel diff -> aggregation -> PNG encoding.
Callers comparing many screenshots against one reference can convert the
reference once and call compare_monochrome_images directly.
"""

import logging
from pathlib import Path
from typing import Union

from ..models.monochrome_image import MonochromeImage
from ..models.rgb_color import RGBColor, DEFAULT_COLOR_A, DEFAULT_COLOR_B
from ..models.visual_diff_options import VisualDiffOptions
from ..models.visual_diff_result import Dimensions, VisualDiffResult
from ..repositories.image_repository import ImageBytes
from ..services.grayscale_service import GrayscaleService
from ..services.pixel_diff_service import PixelDiffService
from ..services.statistics_service import StatisticsService
from ..services.diff_image_service import DiffImageService

logger = logging.getLogger(__name__)

grayscale_service = GrayscaleService()
pixel_diff_service = PixelDiffService()
statistics_service = StatisticsService()
diff_image_service = DiffImageService()


def convert_to_monochrome_a(image_bytes: ImageBytes, color: RGBColor = DEFAULT_COLOR_A) -> MonochromeImage:
    """
    Converts the reference (A) image to tagged grayscale data.
    The result can be cached and reused across comparisons.
    """
    return grayscale_service.convert_to_monochrome_a(image_bytes, color)


def convert_to_monochrome_b(image_bytes: ImageBytes, color: RGBColor = DEFAULT_COLOR_B) -> MonochromeImage:
    """
    Converts the screenshot (B) image to tagged grayscale data.
    """
    return grayscale_service.convert_to_monochrome_b(image_bytes, color)


def compare_monochrome_images(
    monochrome_a: MonochromeImage,
    monochrome_b: MonochromeImage,
    threshold: float = 0,
    only_show_differences: bool = False,
    color_threshold: int = 30,
) -> VisualDiffResult:
    """
    Compares two monochrome images and renders the diff.

    Args:
        monochrome_a: Reference image (from convert_to_monochrome_a).
        monochrome_b: Screenshot image (from convert_to_monochrome_b).
        threshold: Max difference percentage (0-100) still reported as a match.
        only_show_differences: Black out matching pixels instead of keeping them gray.
        color_threshold: Accepted for API compatibility; does not affect the result.

    Returns:
        VisualDiffResult with verdict, statistics and the PNG diff image.
    """
    overlay, different_pixel_count = pixel_diff_service.diff(
        monochrome_a, monochrome_b, only_show_differences
    )
    width, height = monochrome_a.width, monochrome_a.height

    stats = statistics_service.aggregate(different_pixel_count, width, height, threshold)
    logger.debug(f"color_threshold={color_threshold} (not applied)")

    diff_image_buffer = diff_image_service.encode(overlay, width, height)

    logger.info(
        f"Compared {width}x{height}: match={stats.is_match} "
        f"difference={stats.difference_percentage:.2f}% pixels={different_pixel_count}"
    )
    return VisualDiffResult(
        is_match=stats.is_match,
        difference_percentage=stats.difference_percentage,
        different_pixel_count=different_pixel_count,
        diff_image_buffer=diff_image_buffer,
        dimensions=Dimensions(width=width, height=height),
        colored_area_percentage=stats.colored_area_percentage,
    )


def compare_images(
    reference_image: ImageBytes,
    screenshot_image: ImageBytes,
    options: VisualDiffOptions | None = None,
) -> VisualDiffResult:
    """
    Compares two encoded images (convenience wrapper over the split API).
    """
    options = options or VisualDiffOptions()

    monochrome_a = convert_to_monochrome_a(reference_image, options.color1)
    monochrome_b = convert_to_monochrome_b(screenshot_image, options.color2)

    return compare_monochrome_images(
        monochrome_a,
        monochrome_b,
        threshold=options.threshold,
        only_show_differences=options.only_show_differences,
        color_threshold=options.color_threshold,
    )


def save_diff_image(result: VisualDiffResult, output_path: Union[str, Path]) -> Path:
    """
    Saves the diff image to a file, creating or overwriting it.
    Returns the resolved output path.
    """
    return diff_image_service.save(result, output_path)
