"""
Shared FastAPI dependencies for the raster transform service.
"""

import logging
from typing import Any, Dict

from fastapi import HTTPException, Request

from services.image_service import ImageService

logger = logging.getLogger(__name__)


def get_image_service(request: Request) -> ImageService:
    """
    Get the ImageService instance from app state.

    Args:
        request: FastAPI request object

    Returns:
        ImageService created during application startup

    Raises:
        HTTPException: If the service was not initialized
    """
    try:
        return request.app.state.image_service
    except AttributeError as e:
        logger.error(f"Image service not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Image service not initialized"
        )


def get_config(request: Request) -> Dict[str, Any]:
    """
    Get application configuration.

    Args:
        request: FastAPI request object

    Returns:
        Configuration dictionary
    """
    try:
        return request.app.state.config
    except AttributeError:
        logger.warning("Config not found in app state, using defaults")
        return {}
