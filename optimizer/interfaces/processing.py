"""
Processing Interface - Adaptive Image Optimization.

Defines the options and the result contract of the orchestrator that
decides whether a file needs optimizing and produces the upload-ready file.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from config import (
    DEFAULT_FORMAT,
    DEFAULT_MAX_DIMENSION,
    DEFAULT_MAX_SIZE_BYTES,
    DEFAULT_QUALITY,
    get_config,
)
from optimizer.errors import ProcessingError
from optimizer.interfaces.codec import SourceImage
from optimizer.interfaces.compression import CompressionAttempt

OUTPUT_FORMATS = ("jpeg", "png", "webp")


@dataclass(frozen=True)
class Dimensions:
    """Pixel size of an image."""

    width: int
    height: int


@dataclass(frozen=True)
class ProcessingOptions:
    """
    Options for a single process() call.

    Attributes:
        max_size_bytes: Byte budget; files at or below it pass through.
        max_width: Maximum output width in pixels.
        max_height: Maximum output height in pixels.
        quality: Initial quality factor in (0, 1].
        format: Output format, one of OUTPUT_FORMATS.
    """

    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES
    max_width: int = DEFAULT_MAX_DIMENSION
    max_height: int = DEFAULT_MAX_DIMENSION
    quality: float = DEFAULT_QUALITY
    format: str = DEFAULT_FORMAT

    def __post_init__(self):
        if self.max_size_bytes <= 0:
            raise ValueError(f"max_size_bytes must be positive, got {self.max_size_bytes}")
        if self.max_width <= 0 or self.max_height <= 0:
            raise ValueError(
                f"max_width and max_height must be positive, got "
                f"{self.max_width}x{self.max_height}"
            )
        if not 0 < self.quality <= 1:
            raise ValueError(f"quality must be in (0, 1], got {self.quality}")
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"format must be one of {OUTPUT_FORMATS}, got {self.format!r}")

    @property
    def mime_type(self) -> str:
        return f"image/{self.format}"

    @classmethod
    def from_config(cls, **overrides) -> "ProcessingOptions":
        """Builds options from the IMAGE_* configuration values."""
        config = get_config()
        values = {
            "max_size_bytes": config["IMAGE_MAX_SIZE_BYTES"],
            "max_width": config["IMAGE_MAX_WIDTH"],
            "max_height": config["IMAGE_MAX_HEIGHT"],
            "quality": config["IMAGE_QUALITY"],
            "format": config["IMAGE_FORMAT"],
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class ProcessingResult:
    """
    Output of a process() call.

    Attributes:
        file: The file to upload; the untouched input on pass-through or
            fallback.
        original_size: Byte size of the input.
        processed_size: Byte size of file.
        compression_ratio: processed_size / original_size.
        dimensions: Output size in pixels, None when not re-encoded.
        attempts: Encode attempts of the quality search.
        error: The failure that caused a fallback to the original file.
    """

    file: SourceImage
    original_size: int
    processed_size: int
    compression_ratio: float
    dimensions: Dimensions | None = None
    attempts: list[CompressionAttempt] = field(default_factory=list)
    error: ProcessingError | None = None

    @property
    def was_optimized(self) -> bool:
        """True when file is a newly encoded image."""
        return self.dimensions is not None

    @classmethod
    def unchanged(
        cls, source: SourceImage, error: ProcessingError | None = None
    ) -> "ProcessingResult":
        """Result that hands the original file back."""
        return cls(
            file=source,
            original_size=source.size,
            processed_size=source.size,
            compression_ratio=1.0,
            error=error,
        )


class ProcessorInterface(ABC):
    """
    Interface for the adaptive image processor.

    process() must always return a usable file: any processing failure
    degrades to returning the input unchanged.
    """

    @abstractmethod
    def process(
        self, source: SourceImage, options: ProcessingOptions | None = None
    ) -> ProcessingResult:
        """
        Optimizes a single file.

        Args:
            source: Encoded image file.
            options: Processing options; configured defaults when None.

        Returns:
            ProcessingResult. Never raises for bad image data.
        """
        pass
