from ..models.visual_diff_result import DiffStatistics
from ..exceptions import InvalidDimensionsError


class StatisticsService:
    """Rolls a different-pixel count up into whole-image numbers."""

    @staticmethod
    def aggregate(different_pixel_count: int, width: int, height: int, threshold: float = 0) -> DiffStatistics:
        """
        Args:
            different_pixel_count (int): Pixels that differ.
            width (int), height (int): Image size.
            threshold (float): Max difference percentage still counted as a match (inclusive).

        Returns:
            DiffStatistics: percentage, verdict and colored area.
        """
        total_pixels = width * height
        if total_pixels <= 0:
            raise InvalidDimensionsError(f"Cannot compare zero-area images: {width}x{height}")
        if not 0 <= different_pixel_count <= total_pixels:
            raise ValueError(
                f"different_pixel_count must be in [0, {total_pixels}], got {different_pixel_count}"
            )

        difference_percentage = 100 * different_pixel_count / total_pixels
        return DiffStatistics(
            difference_percentage=difference_percentage,
            is_match=difference_percentage <= threshold,
            colored_area_percentage=difference_percentage,
        )
