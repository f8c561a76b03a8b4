"""
Codec Interface - Image Decoding and Encoding.

Defines the contract for turning encoded file bytes into a bitmap and a
bitmap back into encoded bytes at a given quality factor.
"""

import mimetypes
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import numpy as np

SUPPORTED_OUTPUT_TYPES = ("image/jpeg", "image/png", "image/webp")


@dataclass(frozen=True)
class SourceImage:
    """
    Immutable handle to an encoded image file.

    Attributes:
        data: Raw encoded bytes as selected by the user.
        mime_type: Declared media type (e.g., "image/jpeg").
        name: Original filename (e.g., "IMG_0001.jpg").
    """

    data: bytes
    mime_type: str
    name: str

    @property
    def size(self) -> int:
        """Byte length of the encoded data."""
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> "SourceImage":
        """
        Reads a file from disk.

        The MIME type is guessed from the extension and defaults to
        "application/octet-stream" when unknown.
        """
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            data=path.read_bytes(),
            mime_type=mime_type or "application/octet-stream",
            name=path.name,
        )


class CodecInterface(ABC):
    """
    Interface for image decoding and encoding.

    Implementations should handle:
    - Any common input format (JPEG, PNG, GIF, WebP)
    - Transparency (alpha channel kept as a 4th channel)
    - Encoding to every type listed in SUPPORTED_OUTPUT_TYPES
    """

    @abstractmethod
    def decode(self, source: SourceImage) -> np.ndarray:
        """
        Decodes a source file into a bitmap.

        Args:
            source: Encoded image file.

        Returns:
            np.ndarray: BGR or BGRA image.

        Raises:
            DecodeFailure: if the bytes are not a readable image.
        """
        pass

    @abstractmethod
    def encode(self, bitmap: np.ndarray, mime_type: str, quality: float) -> bytes:
        """
        Encodes a bitmap.

        Args:
            bitmap: BGR or BGRA image.
            mime_type: One of SUPPORTED_OUTPUT_TYPES.
            quality: Quality factor in (0, 1]. Lossless formats ignore it.

        Returns:
            Encoded bytes.

        Raises:
            EncodingError: if the encoder produced no output.
        """
        pass
