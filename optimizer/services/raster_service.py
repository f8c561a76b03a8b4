"""
Raster Service - Resampling a Decoded Image onto a Target Bitmap.

Pure image math - no filesystem, network, or encoder operations.
"""

import cv2
import numpy as np

from optimizer.errors import RasterizationError
from optimizer.interfaces.raster import RasterInterface


class RasterService(RasterInterface):
    """
    Draws decoded images at their planned output size.

    Area interpolation is used when shrinking (no moire on large wedding
    photos), bicubic when enlarging.
    """

    def rasterize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        if image is None or image.size == 0:
            raise RasterizationError("Source image is empty or failed to decode")
        if width <= 0 or height <= 0:
            raise RasterizationError(f"Invalid target size {width}x{height}")

        src_h, src_w = image.shape[:2]
        if (src_w, src_h) == (width, height):
            return image.copy()

        if width < src_w or height < src_h:
            interpolation = cv2.INTER_AREA
        else:
            interpolation = cv2.INTER_CUBIC

        try:
            bitmap = cv2.resize(image, (width, height), interpolation=interpolation)
        except (cv2.error, MemoryError) as e:
            raise RasterizationError(
                f"Could not draw {src_w}x{src_h} image at {width}x{height}: {e}"
            ) from e

        if bitmap is None or bitmap.shape[:2] != (height, width):
            raise RasterizationError(f"Resize did not produce a {width}x{height} bitmap")
        return bitmap
