"""
Codec Service - Image Decoding and Encoding.

Implements CodecInterface with Pillow for decoding (any format Pillow
reads, EXIF orientation applied) and OpenCV for encoding.
Pure in-memory operations - no filesystem or network access.
"""

from io import BytesIO

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from config import get_config
from optimizer.errors import DecodeFailure, EncodingError
from optimizer.interfaces.codec import (
    SUPPORTED_OUTPUT_TYPES,
    CodecInterface,
    SourceImage,
)

_ALPHA_MODES = ("RGBA", "LA", "PA", "RGBa", "La")


def quality_to_percent(quality: float) -> int:
    """Maps a quality factor in (0, 1] to the 1-100 encoder scale."""
    return max(1, min(100, int(round(quality * 100))))


def flatten_alpha(bitmap: np.ndarray, background: int = 255) -> np.ndarray:
    """
    Composites a BGRA bitmap onto a solid background.

    Args:
        bitmap: BGRA image.
        background: Gray level of the background (default white).

    Returns:
        BGR image.
    """
    alpha = bitmap[:, :, 3:4].astype(np.float32) / 255.0
    color = bitmap[:, :, :3].astype(np.float32)
    blended = color * alpha + float(background) * (1.0 - alpha)
    return np.clip(np.rint(blended), 0, 255).astype(np.uint8)


class CodecService(CodecInterface):
    """
    Decodes uploads and encodes optimized output.

    Features:
    - EXIF orientation applied on decode, like a browser does
    - Transparency preserved for PNG and WebP, flattened onto white for JPEG
    - PNG is lossless; the quality factor only affects JPEG and WebP
    - Images above max_pixels are refused as undecodable
    """

    PNG_COMPRESSION_LEVEL = 6

    def __init__(self, max_pixels: int | None = None):
        """
        Initialize the codec.

        Args:
            max_pixels: Largest width x height accepted on decode. Uses
                IMAGE_MAX_PIXELS from config if not provided.
        """
        self._max_pixels = max_pixels or get_config()["IMAGE_MAX_PIXELS"]
        # Pillow refuses images above twice its own limit before we can check
        if Image.MAX_IMAGE_PIXELS is not None and Image.MAX_IMAGE_PIXELS < self._max_pixels:
            Image.MAX_IMAGE_PIXELS = self._max_pixels

    @property
    def max_pixels(self) -> int:
        return self._max_pixels

    def decode(self, source: SourceImage) -> np.ndarray:
        try:
            with Image.open(BytesIO(source.data)) as img:
                if img.width * img.height > self._max_pixels:
                    raise DecodeFailure(
                        f"{source.name!r} is {img.width}x{img.height}, above the "
                        f"{self._max_pixels} pixel limit"
                    )
                oriented = ImageOps.exif_transpose(img)
                has_alpha = oriented.mode in _ALPHA_MODES or (
                    oriented.mode == "P" and "transparency" in oriented.info
                )
                converted = oriented.convert("RGBA" if has_alpha else "RGB")
                pixels = np.asarray(converted)
        except (
            UnidentifiedImageError,
            OSError,
            SyntaxError,
            ValueError,
            Image.DecompressionBombError,
        ) as e:
            raise DecodeFailure(f"Could not decode {source.name!r}: {e}") from e

        if pixels.size == 0:
            raise DecodeFailure(f"Decoded image {source.name!r} is empty")

        if has_alpha:
            return cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)
        return cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR)

    def encode(self, bitmap: np.ndarray, mime_type: str, quality: float) -> bytes:
        if mime_type not in SUPPORTED_OUTPUT_TYPES:
            raise EncodingError(f"Unsupported output type: {mime_type}")
        if bitmap is None or bitmap.size == 0:
            raise EncodingError("Cannot encode an empty bitmap")

        if mime_type == "image/jpeg":
            if bitmap.ndim == 3 and bitmap.shape[2] == 4:
                bitmap = flatten_alpha(bitmap)
            ext = ".jpg"
            params = [int(cv2.IMWRITE_JPEG_QUALITY), quality_to_percent(quality)]
        elif mime_type == "image/webp":
            ext = ".webp"
            params = [int(cv2.IMWRITE_WEBP_QUALITY), quality_to_percent(quality)]
        else:
            ext = ".png"
            params = [int(cv2.IMWRITE_PNG_COMPRESSION), self.PNG_COMPRESSION_LEVEL]

        try:
            ok, buffer = cv2.imencode(ext, bitmap, params)
        except cv2.error as e:
            raise EncodingError(f"Encoder failed for {mime_type}: {e}") from e

        if not ok or buffer is None or buffer.size == 0:
            raise EncodingError(f"Encoder produced no output for {mime_type}")
        return buffer.tobytes()
