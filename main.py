# ------------------------------------------------------------------------------
# Batch optimizer for gallery uploads
# main.py
# ------------------------------------------------------------------------------
"""
Optimizes photos before they are uploaded to the image CDN.

Usage:
    python main.py IMG_0001.jpg IMG_0002.png                  # defaults from .env
    python main.py *.jpg --output-dir ready --format webp
    python main.py big.png --max-size-mb 5 --max-width 3000 --workers 8

Every input is written to the output directory: optimized files under their
new "<name>_optimized_<timestamp>.<ext>" name, files already within budget
under their original name. A name that repeats within one batch gets a
numeric suffix ("photo_1.jpg") so no input overwrites another.
"""

import argparse
import sys
from pathlib import Path

from config import get_config
from logging_config import get_logger
from optimizer.image_processor import ImageProcessor
from optimizer.interfaces.codec import SourceImage
from optimizer.interfaces.processing import OUTPUT_FORMATS, ProcessingOptions
from utils.image_ops import format_file_size

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resize and recompress photos to fit the upload size limit"
    )
    parser.add_argument("files", nargs="+", help="Image files to optimize")
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Output directory (default: OUTPUT_DIR from config)"
    )
    parser.add_argument(
        "--max-size-mb",
        type=float,
        default=None,
        help="Byte budget in megabytes (default: IMAGE_MAX_SIZE_BYTES)"
    )
    parser.add_argument("--max-width", type=int, default=None, help="Maximum output width")
    parser.add_argument("--max-height", type=int, default=None, help="Maximum output height")
    parser.add_argument(
        "--quality", "-q",
        type=float,
        default=None,
        help="Initial quality factor in (0, 1]"
    )
    parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format for optimized files"
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Number of files processed in parallel (default: PROCESSING_WORKERS)"
    )
    return parser


def unique_output_name(name: str, used_names: set[str]) -> str:
    """
    Returns name, or "<stem>_<n><suffix>" when name was already written in
    this batch. The chosen name is added to used_names.
    """
    candidate = name
    stem, suffix = Path(name).stem, Path(name).suffix
    counter = 1
    while candidate in used_names:
        candidate = f"{stem}_{counter}{suffix}"
        counter += 1
    used_names.add(candidate)
    return candidate


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    max_size_bytes = None
    if args.max_size_mb is not None:
        max_size_bytes = int(args.max_size_mb * 1024 * 1024)

    try:
        options = ProcessingOptions.from_config(
            max_size_bytes=max_size_bytes,
            max_width=args.max_width,
            max_height=args.max_height,
            quality=args.quality,
            format=args.format,
        )
    except ValueError as e:
        parser.error(str(e))

    sources = []
    for file_arg in args.files:
        try:
            sources.append(SourceImage.from_path(file_arg))
        except OSError as e:
            logger.error(f"Cannot read {file_arg}: {e}")
            return 1

    output_dir = Path(args.output_dir or get_config()["OUTPUT_DIR"])
    output_dir.mkdir(parents=True, exist_ok=True)

    processor = ImageProcessor()
    results = processor.process_many(sources, options, max_workers=args.workers)

    total_before = 0
    total_after = 0
    used_names: set[str] = set()
    for source, result in zip(sources, results):
        target = output_dir / unique_output_name(result.file.name, used_names)
        target.write_bytes(result.file.data)
        total_before += result.original_size
        total_after += result.processed_size

        if result.error is not None:
            status = "kept original (processing failed)"
        elif result.was_optimized:
            status = f"optimized, ratio {result.compression_ratio:.2f}"
        else:
            status = "already within budget"
        logger.info(
            f"{source.name}: {format_file_size(result.original_size)} -> "
            f"{format_file_size(result.processed_size)}, {status} -> {target}"
        )

    logger.info(
        f"Processed {len(results)} file(s): {format_file_size(total_before)} -> "
        f"{format_file_size(total_after)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
