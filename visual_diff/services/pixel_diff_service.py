import logging
from typing import Tuple
import numpy as np

from ..models.monochrome_image import MonochromeImage
from ..models.rgb_color import RGBColor
from ..exceptions import DimensionMismatchError

logger = logging.getLogger(__name__)


class PixelDiffService:
    """
    Pixel-by-pixel comparison of two equally sized MonochromeImage objects.

    • Pixels with unequal intensity are counted and painted with the additive
      overlay of both images' tinted intensities, saturating at 255.
    • Equal pixels keep their gray value, or go black when only differences
      are requested.
    """

    @staticmethod
    def _tint(gray: np.ndarray, color: RGBColor) -> np.ndarray:
        """
        Multiply intensities in [0,1] into `color`, rounding half up.
        Returns int32 (N, 3).
        """
        intensity = gray.astype(np.float64) / 255
        tinted = np.floor(intensity[:, None] * np.array(color.as_tuple(), dtype=np.float64) + 0.5)
        return tinted.astype(np.int32)

    @staticmethod
    def check_dimensions(monochrome_a: MonochromeImage, monochrome_b: MonochromeImage) -> None:
        if monochrome_a.width != monochrome_b.width or monochrome_a.height != monochrome_b.height:
            raise DimensionMismatchError(
                monochrome_a.width, monochrome_a.height, monochrome_b.width, monochrome_b.height
            )

    def diff(
        self,
        monochrome_a: MonochromeImage,
        monochrome_b: MonochromeImage,
        only_show_differences: bool = False,
    ) -> Tuple[np.ndarray, int]:
        """
        Args:
            monochrome_a (MonochromeImage): Reference image.
            monochrome_b (MonochromeImage): Screenshot image.
            only_show_differences (bool): Black out matching pixels.

        Returns:
            Tuple[np.ndarray, int]:
                - Overlay raster, shape (H, W, 3), dtype uint8, RGB order.
                - Number of pixels whose intensities differ.
        """
        self.check_dimensions(monochrome_a, monochrome_b)
        width, height = monochrome_a.width, monochrome_a.height

        gray1 = monochrome_a.grayscale_buffer
        gray2 = monochrome_b.grayscale_buffer

        # Exact inequality, no per-pixel tolerance
        differs = gray1 != gray2
        different_pixel_count = int(np.count_nonzero(differs))

        overlay = np.zeros((gray1.size, 3), dtype=np.uint8)
        if not only_show_differences:
            overlay[:] = gray1[:, None]

        if different_pixel_count:
            tinted1 = self._tint(gray1[differs], monochrome_a.color)
            tinted2 = self._tint(gray2[differs], monochrome_b.color)
            overlay[differs] = np.minimum(255, tinted1 + tinted2).astype(np.uint8)

        logger.debug(f"{different_pixel_count}/{gray1.size} pixels differ ({width}x{height})")
        return overlay.reshape(height, width, 3), different_pixel_count
