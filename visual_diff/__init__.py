"""
Pairwise image comparison: grayscale extraction, per-pixel diff,
intensity-tinted overlay and a match verdict against a percentage threshold.
"""

from .exceptions import (
    VisualDiffError,
    DecodeError,
    DimensionMismatchError,
    InvalidDimensionsError,
    EncodeError,
    DiffImageWriteError,
    InvalidColorError,
    InvalidOptionError,
)
from .models import (
    RGBColor,
    DEFAULT_COLOR_A,
    DEFAULT_COLOR_B,
    MonochromeImage,
    Dimensions,
    VisualDiffOptions,
    VisualDiffResult,
)
from .pipeline.compare_images import (
    compare_images,
    compare_monochrome_images,
    convert_to_monochrome_a,
    convert_to_monochrome_b,
    save_diff_image,
)

__version__ = "0.1.0"
