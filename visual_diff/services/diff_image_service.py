from pathlib import Path
from typing import Union
import numpy as np

from ..models.visual_diff_result import VisualDiffResult
from ..repositories.image_repository import ImageRepository


class DiffImageService:
    """
    Encodes overlay rasters and writes finished diff images.
    Delegates PNG encoding and file I/O to ImageRepository.
    """

    def __init__(self):
        self.image_repository = ImageRepository()

    def encode(self, overlay: np.ndarray, width: int, height: int) -> bytes:
        return self.image_repository.encode_png(overlay, width, height)

    def save(self, result: VisualDiffResult, output_path: Union[str, Path]) -> Path:
        """
        Business-level method to save the diff image to a specific path.
        Existing files are overwritten.
        """
        return self.image_repository.write_bytes(result.diff_image_buffer, output_path)
