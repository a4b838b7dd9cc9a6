"""
Color API Router - Tone adjustments, masks and blend-mode overlays
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_image_service
from api.exceptions import safe_endpoint
from schemas import AdjustRequest, ImageResponse, MaskRequest, OverlayRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/adjust")
@safe_endpoint
async def adjust(request: AdjustRequest, image_service=Depends(get_image_service)) -> ImageResponse:
    """
    Apply tone operators.

    Operators run in the order greyscale, invert, gamma, brightness,
    contrast; omitted ones are skipped. Brightness and contrast are clamped
    to their ranges.
    """
    return image_service.adjust(request)


@router.post("/mask")
@safe_endpoint
async def mask(request: MaskRequest, image_service=Depends(get_image_service)) -> ImageResponse:
    """Scale the image alpha by a mask's alpha (or red channel when greyscale)"""
    return image_service.mask(request)


@router.post("/overlay")
@safe_endpoint
async def overlay(request: OverlayRequest, image_service=Depends(get_image_service)) -> ImageResponse:
    """Blend an overlay anchored at the top-left corner"""
    return image_service.overlay(request)
