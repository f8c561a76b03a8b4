import re

FORMAT_EXTENSIONS = {
    "jpeg": "jpg",
    "png": "png",
    "webp": "webp",
}

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def compute_target_dimensions(
    natural_width: int, natural_height: int, max_width: int, max_height: int
) -> tuple[int, int]:
    """
    Computes the output size for an image so that it fits inside
    max_width x max_height while keeping its aspect ratio.

    A single scale factor is applied to both sides, so width and height
    satisfy their limits at the same time. Images that already fit are
    never enlarged.

    Args:
        natural_width: Decoded image width in pixels.
        natural_height: Decoded image height in pixels.
        max_width: Maximum allowed output width.
        max_height: Maximum allowed output height.

    Returns:
        (width, height) rounded to whole pixels, each at least 1.

    Raises:
        ValueError: if any argument is not positive.
    """
    for label, value in (
        ("natural_width", natural_width),
        ("natural_height", natural_height),
        ("max_width", max_width),
        ("max_height", max_height),
    ):
        if value <= 0:
            raise ValueError(f"{label} must be positive, got {value}")

    scale = min(max_width / natural_width, max_height / natural_height, 1.0)
    width = max(1, round(natural_width * scale))
    height = max(1, round(natural_height * scale))
    return width, height


def format_extension(image_format: str) -> str:
    """Returns the filename extension for an output format (jpeg -> jpg)."""
    return FORMAT_EXTENSIONS.get(image_format, image_format)


def build_optimized_filename(original_name: str, image_format: str, timestamp_ms: int) -> str:
    """
    Derives the name of an optimized file.

    "IMG_0001.CR2.jpeg" with format "webp" becomes
    "IMG_0001.CR2_optimized_<timestamp_ms>.webp". Only the last extension
    is stripped.
    """
    stem = _EXTENSION_RE.sub("", original_name)
    return f"{stem}_optimized_{timestamp_ms}.{format_extension(image_format)}"


def format_file_size(num_bytes: int) -> str:
    """
    Returns a human readable size string, e.g. "1.5 MB".

    Uses base 1024 and at most two decimals; trailing zeros are dropped.
    """
    if num_bytes <= 0:
        return "0 Bytes"
    index = 0
    value = float(num_bytes)
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[index]}"
