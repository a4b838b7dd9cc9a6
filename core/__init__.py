"""
Core modules for the raster transform engine
"""

from .enums import BlendMode, CropPosition, RotateFlipType
from .exceptions import CropOutOfBoundsError, ImagingError, InvalidImageError, InvalidQualityError

__all__ = [
    "BlendMode",
    "CropPosition",
    "RotateFlipType",
    "ImagingError",
    "InvalidImageError",
    "InvalidQualityError",
    "CropOutOfBoundsError",
]
