"""
Processing errors.

Every failure inside the optimization pipeline is a ProcessingError.
ImageProcessor catches them at its public boundary and falls back to the
original file, so callers of process() never see these exceptions.
"""


class ProcessingError(Exception):
    """Base class for all image processing failures."""


class DecodeFailure(ProcessingError):
    """Source bytes could not be interpreted as an image."""


class RasterizationError(ProcessingError):
    """The target bitmap could not be allocated or drawn."""


class EncodingError(ProcessingError):
    """The encoder refused to produce output for a bitmap."""
