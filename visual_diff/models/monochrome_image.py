from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from .rgb_color import RGBColor
from ..exceptions import InvalidDimensionsError


@dataclass(frozen=True)
class MonochromeImage:
    """
    Simple data object: 8-bit grayscale samples tagged with the color
    they are rendered in when they differ from their counterpart.
    No OpenCV logic outside the image repository.
    """
    grayscale_buffer: np.ndarray  # Shape (width*height,), dtype uint8, row-major.
    color: RGBColor
    width: int
    height: int

    def __post_init__(self):
        if self.grayscale_buffer.ndim != 1 or self.grayscale_buffer.dtype != np.uint8:
            raise InvalidDimensionsError(
                f"Grayscale buffer must be a flat uint8 array, "
                f"got shape {self.grayscale_buffer.shape} dtype {self.grayscale_buffer.dtype}"
            )
        if self.grayscale_buffer.size != self.width * self.height:
            raise InvalidDimensionsError(
                f"Grayscale buffer holds {self.grayscale_buffer.size} samples, "
                f"expected {self.width}x{self.height}={self.width * self.height}"
            )
        # Own a read-only copy so the caller's array cannot change the samples
        samples = self.grayscale_buffer.copy()
        samples.flags.writeable = False
        object.__setattr__(self, "grayscale_buffer", samples)

    @property
    def size(self):
        return self.width, self.height

    def as_2d(self) -> np.ndarray:
        """Read-only (height, width) view of the samples."""
        return self.grayscale_buffer.reshape(self.height, self.width)
