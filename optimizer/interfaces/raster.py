"""
Raster Interface - Drawing a Decoded Image at a Target Size.
"""

from abc import ABC, abstractmethod

import numpy as np


class RasterInterface(ABC):
    """
    Interface for rasterizing a decoded image onto a new bitmap.

    Implementations should:
    - Produce a bitmap of exactly width x height
    - Scale the full source (no cropping, no letterboxing)
    - Use high-quality resampling
    """

    @abstractmethod
    def rasterize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        """
        Draws the full image onto a width x height bitmap.

        Args:
            image: Decoded BGR or BGRA image.
            width: Target width in pixels.
            height: Target height in pixels.

        Returns:
            The new bitmap, same channel layout as the input.

        Raises:
            RasterizationError: if the source is empty or the bitmap
                cannot be allocated or drawn.
        """
        pass
