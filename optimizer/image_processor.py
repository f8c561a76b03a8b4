# ------------------------------------------------------------------------------
# Image Processor Module for Upload Optimization
# optimizer/image_processor.py
# ------------------------------------------------------------------------------
"""
This module defines the ImageProcessor class, which decides whether an
uploaded photo needs optimizing and, if so, orchestrates decoding,
dimension planning, rasterization and byte-budget compression.

Processing is fail-open: whatever goes wrong, the caller receives a file it
can upload, at worst the untouched original.
"""

import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple

from config import get_config
from logging_config import get_logger
from optimizer.errors import ProcessingError
from optimizer.interfaces.codec import CodecInterface, SourceImage
from optimizer.interfaces.compression import CompressionInterface
from optimizer.interfaces.processing import (
    Dimensions,
    ProcessingOptions,
    ProcessingResult,
    ProcessorInterface,
)
from optimizer.interfaces.raster import RasterInterface
from optimizer.services.codec_service import CodecService
from optimizer.services.compression_service import CompressionService
from optimizer.services.raster_service import RasterService
from utils.image_ops import (
    build_optimized_filename,
    compute_target_dimensions,
    format_file_size,
)

logger = get_logger(__name__)


class _Outcome(NamedTuple):
    """Either an optimized result or the error that prevented it."""

    result: ProcessingResult | None
    error: ProcessingError | None


class ImageProcessor(ProcessorInterface):
    """
    Orchestrates the optimization pipeline for uploaded photos.

    Features:
    - Pass-through for files already within the byte budget
    - Aspect-preserving downscale to the configured maximum size
    - Geometric quality search until the byte budget is met
    - Unique "<name>_optimized_<timestamp>.<ext>" output names
    - Fan-out over a thread pool for batches

    The processor holds no per-call state; one instance can be shared by
    any number of threads.
    """

    def __init__(
        self,
        codec: CodecInterface | None = None,
        raster: RasterInterface | None = None,
        compression: CompressionInterface | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the processor.

        Args:
            codec: Decoder/encoder. Defaults to CodecService.
            raster: Resampler. Defaults to RasterService.
            compression: Budget encoder. Defaults to a CompressionService
                sharing the codec.
            clock: Returns the current time in seconds, used for filenames.
        """
        self._codec = codec or CodecService()
        self._raster = raster or RasterService()
        self._compression = compression or CompressionService(self._codec)
        self._clock = clock
        self._name_lock = threading.Lock()
        self._last_timestamp_ms = 0

    def process(
        self, source: SourceImage, options: ProcessingOptions | None = None
    ) -> ProcessingResult:
        options = options or ProcessingOptions.from_config()

        if source.size <= options.max_size_bytes:
            logger.debug(
                f"{source.name} is {format_file_size(source.size)}, "
                f"within budget of {format_file_size(options.max_size_bytes)}"
            )
            return ProcessingResult.unchanged(source)

        outcome = self._optimize(source, options)
        if outcome.error is not None:
            logger.warning(
                f"Image processing failed for {source.name}, uploading original: "
                f"{outcome.error}"
            )
            return ProcessingResult.unchanged(source, error=outcome.error)

        result = outcome.result
        logger.info(
            f"Optimized {source.name} -> {result.file.name}: "
            f"{format_file_size(result.original_size)} -> "
            f"{format_file_size(result.processed_size)} "
            f"({result.dimensions.width}x{result.dimensions.height}, "
            f"{len(result.attempts)} attempts)"
        )
        return result

    def process_many(
        self,
        sources: Iterable[SourceImage],
        options: ProcessingOptions | None = None,
        max_workers: int | None = None,
    ) -> list[ProcessingResult]:
        """
        Processes several files concurrently.

        Args:
            sources: Files to optimize.
            options: Shared processing options.
            max_workers: Thread pool size. Uses PROCESSING_WORKERS if None.

        Returns:
            One result per source, in input order.
        """
        sources = list(sources)
        if not sources:
            return []

        options = options or ProcessingOptions.from_config()
        workers = max_workers or get_config()["PROCESSING_WORKERS"]
        workers = max(1, min(workers, len(sources)))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda source: self.process(source, options), sources))

    def _optimize(self, source: SourceImage, options: ProcessingOptions) -> _Outcome:
        try:
            image = self._codec.decode(source)
            natural_h, natural_w = image.shape[:2]
            width, height = compute_target_dimensions(
                natural_w, natural_h, options.max_width, options.max_height
            )
            bitmap = self._raster.rasterize(image, width, height)
            del image

            blob = self._compression.compress_to_target(
                bitmap,
                options.max_size_bytes,
                options.mime_type,
                options.quality,
            )
        except ProcessingError as e:
            return _Outcome(result=None, error=e)
        except Exception as e:
            logger.error(f"Unexpected error while processing {source.name}: {e}", exc_info=True)
            wrapped = ProcessingError(f"Unexpected error: {e}")
            wrapped.__cause__ = e
            return _Outcome(result=None, error=wrapped)

        output = SourceImage(
            data=blob.data,
            mime_type=blob.mime_type,
            name=self._generate_filename(source.name, options.format),
        )
        return _Outcome(
            result=ProcessingResult(
                file=output,
                original_size=source.size,
                processed_size=output.size,
                compression_ratio=output.size / source.size,
                dimensions=Dimensions(width=width, height=height),
                attempts=blob.attempts,
            ),
            error=None,
        )

    def _generate_filename(self, original_name: str, image_format: str) -> str:
        # Timestamps are strictly increasing per processor so names never collide.
        with self._name_lock:
            timestamp_ms = int(self._clock() * 1000)
            if timestamp_ms <= self._last_timestamp_ms:
                timestamp_ms = self._last_timestamp_ms + 1
            self._last_timestamp_ms = timestamp_ms
        return build_optimized_filename(original_name, image_format, timestamp_ms)


_default_processor: ImageProcessor | None = None
_default_lock = threading.Lock()


def get_image_processor() -> ImageProcessor:
    """Returns a shared processor built with the default services."""
    global _default_processor
    with _default_lock:
        if _default_processor is None:
            _default_processor = ImageProcessor()
        return _default_processor


def process_image(
    source: SourceImage, options: ProcessingOptions | None = None
) -> ProcessingResult:
    """Optimizes a single file with the shared processor."""
    return get_image_processor().process(source, options)
