"""
Compression Interface - Byte-Budget Encoding.

Defines the contract for encoding a bitmap so that the result fits a byte
budget, together with the records describing each encode attempt.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class CompressionAttempt:
    """
    A single encode performed during the quality search.

    Attributes:
        quality: Quality factor used for this encode.
        size_bytes: Size of the encoded output.
    """

    quality: float
    size_bytes: int


@dataclass
class EncodedBlob:
    """
    Result of a byte-budget compression.

    Attributes:
        data: Encoded image bytes of the final attempt.
        mime_type: Media type of data.
        quality: Quality factor of the returned encoding.
        attempts: Every encode in order, including the returned one.
    """

    data: bytes
    mime_type: str
    quality: float
    attempts: list[CompressionAttempt] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.data)


class CompressionInterface(ABC):
    """
    Interface for encoding a bitmap within a byte budget.

    Implementations must never fail only because the budget could not be
    met; the smallest reasonable encoding is returned instead.
    """

    @abstractmethod
    def compress_to_target(
        self,
        bitmap: np.ndarray,
        target_bytes: int,
        mime_type: str,
        initial_quality: float = 0.9,
    ) -> EncodedBlob:
        """
        Encodes the bitmap at decreasing quality until it fits.

        Args:
            bitmap: BGR or BGRA image.
            target_bytes: Maximum acceptable encoded size.
            mime_type: Output media type.
            initial_quality: First quality factor to try, in (0, 1].

        Returns:
            EncodedBlob with the chosen encoding and all attempts.

        Raises:
            EncodingError: if the encoder itself fails.
        """
        pass
