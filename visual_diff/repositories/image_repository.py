from io import BytesIO
from pathlib import Path
from typing import Union, Iterable, List, Iterator, Tuple
import logging
import os
import numpy as np
import cv2
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..exceptions import DecodeError, EncodeError, DiffImageWriteError, InvalidDimensionsError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

ImageBytes = Union[bytes, bytearray, memoryview]


class ImageRepository:
    """
    Handles codec work and file I/O for the comparison engine.
    OpenCV decodes, Pillow encodes; nothing else touches either library.
    """
    def __init__(self):
        self.VALID_EXTS = {
            ext.strip().lower()
            for ext in os.getenv("VALID_IMAGE_EXTENSIONS", ".png,.jpg,.jpeg,.bmp,.webp,.tif,.tiff").split(",")
            if ext.strip()
        }

    @staticmethod
    def decode_grayscale(data: ImageBytes) -> Tuple[np.ndarray, int, int]:
        """
        Decode an encoded image and reduce it to 8-bit luminance.

        Args:
            data: PNG/JPEG/... bytes.

        Returns:
            Tuple of (flat uint8 samples, width, height).
        """
        if not len(data):
            raise DecodeError("Image buffer is empty")

        raw = np.frombuffer(data, dtype=np.uint8)
        # IMREAD_COLOR drops alpha and reduces 16-bit sources to 8-bit.
        # Pixels are compared in stored order, so EXIF orientation is not applied.
        try:
            arr_bgr = cv2.imdecode(raw, cv2.IMREAD_COLOR | cv2.IMREAD_IGNORE_ORIENTATION)
        except cv2.error as err:
            raise DecodeError(f"Unsupported or corrupt image data ({len(data)} bytes)") from err
        if arr_bgr is None:
            raise DecodeError(f"Unsupported or corrupt image data ({len(data)} bytes)")

        height, width = arr_bgr.shape[:2]
        if width == 0 or height == 0:
            raise InvalidDimensionsError(f"Decoded image has zero area: {width}x{height}")

        gray = cv2.cvtColor(arr_bgr, cv2.COLOR_BGR2GRAY)
        samples = np.ascontiguousarray(gray).reshape(-1)
        samples.flags.writeable = False
        logger.debug(f"Decoded {len(data)} bytes into {width}x{height} grayscale")
        return samples, width, height

    @staticmethod
    def encode_png(pixels: np.ndarray, width: int, height: int) -> bytes:
        """
        Serialise an RGB raster (height, width, 3) to PNG bytes.
        """
        if pixels.shape != (height, width, 3):
            raise EncodeError(
                f"Overlay raster has shape {pixels.shape}, expected {(height, width, 3)}"
            )
        buffer = BytesIO()
        try:
            PILImage.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(buffer, format="PNG")
        except (OSError, ValueError, TypeError) as err:
            raise EncodeError(f"Failed to encode {width}x{height} diff image: {err}") from err
        return buffer.getvalue()

    @staticmethod
    def read_bytes(path: Union[str, Path]) -> bytes:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image not found or unreadable: {path}")
        with open(path, "rb") as fh:
            return fh.read()

    @staticmethod
    def write_bytes(data: bytes, path: Union[str, Path]) -> Path:
        """
        Create or overwrite `path` with `data`. Parent folders are created.
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as fh:
                fh.write(data)
        except OSError as err:
            raise DiffImageWriteError(f"Failed to write diff image to {path}: {err}") from err
        return path.resolve()

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image paths one at a time, in sorted order.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if not p.is_file():
                continue
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            yield p

    def list_dir(
        self, folder: Union[str, Path], *, recursive=False, exts=None
    ) -> List[Path]:
        return list(self.iter_dir(folder, recursive=recursive, exts=exts))
