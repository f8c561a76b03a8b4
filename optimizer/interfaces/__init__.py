"""
Image Optimization Interfaces.

This package defines the abstract interfaces and data classes of the
optimization pipeline: decode, rasterize, compress, orchestrate.

ARCHITECTURE:
- ImageProcessor only coordinates these interfaces
- Concrete implementations live in services/
- No direct dependencies between implementations
"""

from optimizer.interfaces.codec import CodecInterface, SourceImage
from optimizer.interfaces.compression import (
    CompressionAttempt,
    CompressionInterface,
    EncodedBlob,
)
from optimizer.interfaces.processing import (
    Dimensions,
    ProcessingOptions,
    ProcessingResult,
    ProcessorInterface,
)
from optimizer.interfaces.raster import RasterInterface

__all__ = [
    # Interfaces
    "CodecInterface",
    "RasterInterface",
    "CompressionInterface",
    "ProcessorInterface",
    # Data Classes
    "SourceImage",
    "Dimensions",
    "CompressionAttempt",
    "EncodedBlob",
    "ProcessingOptions",
    "ProcessingResult",
]
