# config.py
import os
from dotenv import load_dotenv

# Load environment variables from .env file.
load_dotenv()

DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_MAX_DIMENSION = 4000
DEFAULT_QUALITY = 0.9
DEFAULT_FORMAT = "jpeg"
DEFAULT_WORKERS = 4
# Larger images are treated as undecodable and uploaded unchanged
DEFAULT_MAX_PIXELS = 200_000_000

_config = None


def _env_int(name, default):
    try:
        return int(float(os.getenv(name, default)))
    except (TypeError, ValueError, OverflowError):
        return default


def _env_float(name, default):
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_positive_int(name, default):
    value = _env_int(name, default)
    return value if value > 0 else default


def _env_quality(name, default):
    value = _env_float(name, default)
    # Quality factors live in (0, 1]; "90" style percentages are rejected
    return value if 0 < value <= 1 else default


def load_config():
    """
    Loads configuration from environment variables and returns a dictionary.
    """
    image_format = os.getenv("IMAGE_FORMAT", DEFAULT_FORMAT).strip().lower()
    if image_format == "jpg":
        image_format = "jpeg"
    if image_format not in ("jpeg", "png", "webp"):
        # Fallback to default if the value is not a supported encoder
        image_format = DEFAULT_FORMAT

    config = {
        # General Settings
        "DEBUG_MODE": os.getenv("DEBUG_MODE", "False").lower() == "true",
        "OUTPUT_DIR": os.getenv("OUTPUT_DIR", "output"),

        # Image Optimization Settings
        "IMAGE_MAX_SIZE_BYTES": _env_positive_int("IMAGE_MAX_SIZE_BYTES", DEFAULT_MAX_SIZE_BYTES),
        "IMAGE_MAX_WIDTH": _env_positive_int("IMAGE_MAX_WIDTH", DEFAULT_MAX_DIMENSION),
        "IMAGE_MAX_HEIGHT": _env_positive_int("IMAGE_MAX_HEIGHT", DEFAULT_MAX_DIMENSION),
        "IMAGE_QUALITY": _env_quality("IMAGE_QUALITY", DEFAULT_QUALITY),
        "IMAGE_FORMAT": image_format,
        "IMAGE_MAX_PIXELS": _env_positive_int("IMAGE_MAX_PIXELS", DEFAULT_MAX_PIXELS),

        # Batch Processing
        "PROCESSING_WORKERS": max(1, _env_int("PROCESSING_WORKERS", DEFAULT_WORKERS)),
    }
    return config


def get_config():
    """
    Returns the process-wide configuration, loading it on first use.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


if __name__ == "__main__":
    # For testing purposes, print the configuration
    config = load_config()
    from pprint import pprint

    pprint(config)
