"""
Image operation API models.

This module contains request and response models for:
- Geometric transforms (scale, fit, smart fit, pad, crop, rotate/flip)
- Trimming
- Color pipeline (tone adjustments, masks, overlays)
- Encoding
"""

from typing import Optional

from pydantic import BaseModel, Field

from core.constants import BlendConstants, TrimConstants
from core.enums import BlendMode, CropPosition, RotateFlipType

from .base import BaseImageRequest, ImageResponse
from .common import ROI, ColorModel


def _white() -> ColorModel:
    return ColorModel(r=255, g=255, b=255)


# Geometry requests
class ScaleRequest(BaseImageRequest):
    """Scale keeping the aspect ratio"""

    width: int = Field(..., description="Target width")
    height: int = Field(..., description="Target height")
    scale_up: bool = Field(False, description="Allow the result to exceed the source size")
    high_quality: Optional[bool] = Field(
        None, description="Use the Mitchell resampler (service default when omitted)"
    )
    pad: bool = Field(False, description="Pad the result to exactly width x height")
    background_color: ColorModel = Field(default_factory=_white)


class FitRequest(BaseImageRequest):
    """Scale to cover a box and crop the excess"""

    width: int
    height: int
    scale_up: bool = False
    high_quality: Optional[bool] = None
    background_color: ColorModel = Field(default_factory=_white)
    position: CropPosition = CropPosition.CENTRE


class SmartFitRequest(BaseImageRequest):
    """Trim-aware fit"""

    width: int
    height: int
    high_quality: Optional[bool] = None
    padding: int = Field(TrimConstants.DEFAULT_PADDING, ge=0)
    threshold: Optional[int] = Field(
        None, ge=TrimConstants.MIN_THRESHOLD, le=TrimConstants.MAX_THRESHOLD
    )
    position: CropPosition = CropPosition.CENTRE


class PadRequest(BaseImageRequest):
    """Add a solid border"""

    padding: int = Field(..., ge=0)
    background_color: ColorModel = Field(default_factory=_white)


class CropRequest(BaseImageRequest):
    """Extract a sub-rectangle"""

    roi: ROI = Field(..., description="Rectangle to extract")


class RotateFlipRequest(BaseImageRequest):
    """Rotate and/or mirror"""

    rotate_flip_type: RotateFlipType


# Trim requests
class TrimRequest(BaseImageRequest):
    """Detect (and optionally remove) a background border"""

    threshold: Optional[int] = Field(
        None, ge=TrimConstants.MIN_THRESHOLD, le=TrimConstants.MAX_THRESHOLD
    )
    background_color: Optional[ColorModel] = Field(
        None, description="Color to trim; sampled from the top-left pixel when omitted"
    )
    repad: int = Field(TrimConstants.DEFAULT_REPAD, ge=0)


class TrimInfo(BaseModel):
    """Trim magnitudes in pixels"""

    top: int
    left: int
    right: int
    bottom: int
    discovered_color: ColorModel
    has_all_sides_trimmed: bool


class TrimResponse(ImageResponse):
    """Trimmed image plus the detected trims"""

    trim: TrimInfo


# Color pipeline requests
class GammaParams(BaseModel):
    red: float = Field(1.0, gt=0)
    green: float = Field(1.0, gt=0)
    blue: float = Field(1.0, gt=0)


class AdjustRequest(BaseImageRequest):
    """
    Tone adjustments, applied in this order:
    greyscale, invert, gamma, brightness, contrast
    """

    greyscale: bool = False
    invert: bool = False
    gamma: Optional[GammaParams] = None
    brightness: Optional[int] = Field(None, description="-255 to 255 (clamped)")
    contrast: Optional[float] = Field(None, description="-100 to 100 (clamped)")


class MaskRequest(BaseImageRequest):
    """Apply an alpha or greyscale mask"""

    mask_base64: str = Field(..., min_length=1)
    greyscale: bool = Field(False, description="Use the mask's red channel instead of its alpha")
    invert: bool = False


class OverlayRequest(BaseImageRequest):
    """Blend an overlay onto the image"""

    overlay_base64: str = Field(..., min_length=1)
    blend_mode: BlendMode = BlendMode.ALPHA
    amount: int = Field(BlendConstants.MAX_AMOUNT, ge=BlendConstants.MIN_AMOUNT, le=BlendConstants.MAX_AMOUNT)


# Encoding
class EncodeRequest(BaseImageRequest):
    """Re-encode an image through the codec registry"""

    extension: str = Field(..., description="Target extension (jpg, .png) or MIME type")
    quality: Optional[int] = Field(None, description="0-100 (service default when omitted)")


class EncodeResponse(BaseModel):
    data_base64: str
    format: str
    size_bytes: int
