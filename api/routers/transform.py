"""
Transform API Router - Geometric transforms and trimming
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_image_service
from api.exceptions import safe_endpoint
from schemas import (
    CropRequest,
    FitRequest,
    ImageResponse,
    PadRequest,
    RotateFlipRequest,
    ScaleRequest,
    SmartFitRequest,
    TrimInfo,
    TrimRequest,
    TrimResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/scale")
@safe_endpoint
async def scale(request: ScaleRequest, image_service=Depends(get_image_service)) -> ImageResponse:
    """
    Scale an image into a box keeping its aspect ratio.

    The result never exceeds the source size unless scale_up is set. With
    pad set, the result is centered on a canvas of exactly width x height.
    """
    return image_service.scale(request)


@router.post("/fit")
@safe_endpoint
async def fit(request: FitRequest, image_service=Depends(get_image_service)) -> ImageResponse:
    """Scale an image to cover a box, then crop it to exactly that box"""
    return image_service.fit(request)


@router.post("/smart-fit")
@safe_endpoint
async def smart_fit(
    request: SmartFitRequest, image_service=Depends(get_image_service)
) -> ImageResponse:
    """
    Fit an image, trimming a uniform background border first when one exists.

    Trimmed content is scaled into the box minus padding and centered on a
    canvas filled with the detected background color.
    """
    return image_service.smart_fit(request)


@router.post("/pad")
@safe_endpoint
async def pad(request: PadRequest, image_service=Depends(get_image_service)) -> ImageResponse:
    """Add a solid border on every side"""
    return image_service.pad(request)


@router.post("/crop")
@safe_endpoint
async def crop(request: CropRequest, image_service=Depends(get_image_service)) -> ImageResponse:
    """Extract a rectangle; 400 if it is empty or leaves the image"""
    return image_service.crop(request)


@router.post("/rotate-flip")
@safe_endpoint
async def rotate_flip(
    request: RotateFlipRequest, image_service=Depends(get_image_service)
) -> ImageResponse:
    """Rotate clockwise by quarter turns and optionally mirror horizontally"""
    return image_service.rotate_flip(request)


@router.post("/trim-detect")
@safe_endpoint
async def trim_detect(request: TrimRequest, image_service=Depends(get_image_service)) -> TrimInfo:
    """Report the background border of an image without changing it"""
    return image_service.detect_trim(request)


@router.post("/trim")
@safe_endpoint
async def trim(request: TrimRequest, image_service=Depends(get_image_service)) -> TrimResponse:
    """
    Remove the background border of an image.

    repad adds back a border of the detected color, only when all four
    sides were trimmed.
    """
    return image_service.trim(request)
