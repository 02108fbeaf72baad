from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    def __str__(self):
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class DiffStatistics:
    """
    Whole-image numbers rolled up from the per-pixel comparison.
    """
    difference_percentage: float  # 0-100
    is_match: bool
    colored_area_percentage: float  # Same value as difference_percentage


@dataclass(frozen=True)
class VisualDiffResult:
    """
    Data object returned by one comparison.
    Produced once, never mutated; the caller owns the PNG bytes.
    """
    is_match: bool
    difference_percentage: float  # 0-100
    different_pixel_count: int
    diff_image_buffer: bytes  # PNG-encoded overlay
    dimensions: Dimensions
    # Share of the diff image rendered in color. Equal to difference_percentage
    # by definition; kept as its own field for report consumers.
    colored_area_percentage: float

    def to_dict(self) -> dict:
        """JSON-ready summary. The PNG bytes are left out."""
        return {
            "is_match": self.is_match,
            "difference_percentage": self.difference_percentage,
            "different_pixel_count": self.different_pixel_count,
            "total_pixels": self.dimensions.total_pixels,
            "dimensions": {"width": self.dimensions.width, "height": self.dimensions.height},
            "colored_area_percentage": self.colored_area_percentage,
        }
