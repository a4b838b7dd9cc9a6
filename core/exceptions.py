"""
Exception hierarchy for the imaging engine and codec boundary.

Every error raised on purpose by the engine derives from ImagingError so
callers (and the API layer) can catch the whole family at once. Each class
also derives from the matching builtin so plain ``except ValueError`` keeps
working.
"""

from typing import Any, Optional, Tuple


class ImagingError(Exception):
    """Base class for all imaging errors."""


class InvalidImageError(ImagingError, ValueError):
    """Buffer cannot be interpreted as an RGBA image."""

    def __init__(self, message: str, shape: Optional[Tuple[int, ...]] = None):
        self.shape = shape
        super().__init__(message)


class InvalidQualityError(ImagingError, ValueError):
    """Encoder quality outside the accepted 0-100 range."""

    def __init__(self, quality: Any):
        self.quality = quality
        super().__init__(f"quality must be between 0 and 100, got {quality}")


class CropOutOfBoundsError(ImagingError, IndexError):
    """Crop rectangle is empty or does not lie inside the image."""

    def __init__(self, rect: dict, image_size: Tuple[int, int]):
        self.rect = rect
        self.image_size = image_size
        super().__init__(
            f"Crop rectangle {rect} exceeds image bounds "
            f"{image_size[0]}x{image_size[1]}"
        )
