"""
Service layer between the API routers and the imaging engine
"""

from .image_service import ImageService

__all__ = ["ImageService"]
