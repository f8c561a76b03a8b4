"""
Image Optimization Services.

This package contains concrete implementations of the optimizer interfaces.
Each service encapsulates a specific responsibility and can be tested independently.

ARCHITECTURE:
- Services implement interfaces from optimizer/interfaces/
- Services may use utils/ for low-level operations
- ImageProcessor orchestrates these services
"""

from optimizer.services.codec_service import CodecService
from optimizer.services.compression_service import CompressionService
from optimizer.services.raster_service import RasterService

__all__ = [
    "CodecService",
    "CompressionService",
    "RasterService",
]
