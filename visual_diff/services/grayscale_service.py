import logging
from ..models.monochrome_image import MonochromeImage
from ..models.rgb_color import RGBColor, DEFAULT_COLOR_A, DEFAULT_COLOR_B
from ..repositories.image_repository import ImageRepository, ImageBytes

logger = logging.getLogger(__name__)


class GrayscaleService:
    """
    Business logic layer for turning encoded images into MonochromeImage objects.
    Delegates decoding to ImageRepository.
    """

    def __init__(self):
        self.image_repository = ImageRepository()

    def convert_to_monochrome(self, image_bytes: ImageBytes, color: RGBColor) -> MonochromeImage:
        """
        Decode `image_bytes`, reduce to luminance and tag with `color`.

        Args:
            image_bytes (bytes): Encoded image (PNG, JPEG, ...).
            color (RGBColor): Color the image is rendered in where it differs.

        Returns:
            MonochromeImage: Immutable grayscale samples plus metadata.
        """
        samples, width, height = self.image_repository.decode_grayscale(image_bytes)
        return MonochromeImage(grayscale_buffer=samples, color=color, width=width, height=height)

    def convert_to_monochrome_a(self, image_bytes: ImageBytes, color: RGBColor = DEFAULT_COLOR_A) -> MonochromeImage:
        """Reference side. Tagged red unless told otherwise."""
        return self.convert_to_monochrome(image_bytes, color)

    def convert_to_monochrome_b(self, image_bytes: ImageBytes, color: RGBColor = DEFAULT_COLOR_B) -> MonochromeImage:
        """Screenshot side. Tagged green unless told otherwise."""
        return self.convert_to_monochrome(image_bytes, color)
