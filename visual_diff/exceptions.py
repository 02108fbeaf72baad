"""
Typed failures raised by the comparison engine.
Every error the library surfaces derives from VisualDiffError.
"""


class VisualDiffError(Exception):
    """Base class for all comparison failures."""


class DecodeError(VisualDiffError):
    """Input bytes are empty or not a recognised image."""


class DimensionMismatchError(VisualDiffError):
    """The two images being compared do not share width and height."""

    def __init__(self, width_a: int, height_a: int, width_b: int, height_b: int):
        self.reference_size = (width_a, height_a)
        self.screenshot_size = (width_b, height_b)
        super().__init__(
            f"Image dimensions must match. "
            f"Reference: {width_a}x{height_a}, Screenshot: {width_b}x{height_b}"
        )


class InvalidDimensionsError(VisualDiffError):
    """Zero-area image, or a buffer whose length disagrees with its size."""


class EncodeError(VisualDiffError):
    """The overlay raster could not be serialised to PNG."""


class DiffImageWriteError(VisualDiffError, OSError):
    """Writing the diff image to disk failed."""


class InvalidColorError(VisualDiffError, ValueError):
    """RGB channel outside 0-255, or an unparsable "r,g,b" string."""


class InvalidOptionError(VisualDiffError, ValueError):
    """Comparison option outside its allowed range."""
