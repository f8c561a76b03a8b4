"""
Compression Service - Iterative Byte-Budget Encoding.

Implements CompressionInterface with a geometric quality search: every
round multiplies the quality factor by QUALITY_STEP until the encoding
fits the budget or the quality floor is reached.
"""

import numpy as np

from logging_config import get_logger
from optimizer.interfaces.codec import CodecInterface
from optimizer.interfaces.compression import (
    CompressionAttempt,
    CompressionInterface,
    EncodedBlob,
)
from optimizer.services.codec_service import CodecService

logger = get_logger(__name__)


class CompressionService(CompressionInterface):
    """
    Encodes bitmaps within a byte budget.

    Constraints:
    - At most MAX_ATTEMPTS encodes inside the search loop
    - One extra encode at MIN_QUALITY when the loop gives up
    - Never raises because the budget cannot be met
    """

    MAX_ATTEMPTS = 10
    QUALITY_STEP = 0.8
    MIN_QUALITY = 0.1

    def __init__(self, codec: CodecInterface | None = None):
        self._codec = codec or CodecService()

    def compress_to_target(
        self,
        bitmap: np.ndarray,
        target_bytes: int,
        mime_type: str,
        initial_quality: float = 0.9,
    ) -> EncodedBlob:
        if not 0 < initial_quality <= 1:
            raise ValueError(f"initial_quality must be in (0, 1], got {initial_quality}")

        attempts: list[CompressionAttempt] = []
        quality = initial_quality

        for _ in range(self.MAX_ATTEMPTS):
            data = self._encode(bitmap, mime_type, quality, attempts)
            if len(data) <= target_bytes or quality <= self.MIN_QUALITY:
                return EncodedBlob(
                    data=data, mime_type=mime_type, quality=quality, attempts=attempts
                )
            quality *= self.QUALITY_STEP

        logger.debug(
            f"Budget of {target_bytes} bytes not reached after "
            f"{self.MAX_ATTEMPTS} attempts, encoding at {self.MIN_QUALITY}"
        )
        data = self._encode(bitmap, mime_type, self.MIN_QUALITY, attempts)
        return EncodedBlob(
            data=data, mime_type=mime_type, quality=self.MIN_QUALITY, attempts=attempts
        )

    def _encode(
        self,
        bitmap: np.ndarray,
        mime_type: str,
        quality: float,
        attempts: list[CompressionAttempt],
    ) -> bytes:
        data = self._codec.encode(bitmap, mime_type, quality)
        attempts.append(CompressionAttempt(quality=quality, size_bytes=len(data)))
        logger.debug(f"Encoded {mime_type} at quality {quality:.3f}: {len(data)} bytes")
        return data
