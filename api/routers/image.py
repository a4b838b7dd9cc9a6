"""
Image API Router - Encoding through the codec registry
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_image_service
from api.exceptions import safe_endpoint
from schemas import EncodeRequest, EncodeResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/encode")
@safe_endpoint
async def encode(request: EncodeRequest, image_service=Depends(get_image_service)) -> EncodeResponse:
    """
    Re-encode an image.

    The codec is resolved from an extension ("jpg", ".png") or a MIME type
    ("image/webp"); unknown targets fall back to PNG. Quality outside 0-100
    is rejected with 400.

    Args:
        request: Encode request with source image, target and quality
        image_service: Image service dependency

    Returns:
        EncodeResponse with base64 data, the Pillow format name and size
    """
    return image_service.encode(request)
