"""
Image buffer utilities.

This package provides the boundary between the engine and the outside world:
- converters: Buffer normalization and format conversions (NumPy, PIL, base64, streams)
- codecs: Codec lookup by extension / MIME type and quality-checked saving
"""

from core.image.codecs import ImageCodecs
from core.image.converters import ImageConverters

__all__ = ["ImageConverters", "ImageCodecs"]
