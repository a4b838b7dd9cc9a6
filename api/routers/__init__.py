"""
API Routers for the raster transform service
"""

from . import color, image, system, transform

__all__ = ["transform", "color", "image", "system"]
