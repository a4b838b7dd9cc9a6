"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain for better maintainability.

These schemas are shared across all application layers:
- API (routers, dependencies)
- Services (business logic)
- Imaging (Size and ROI are accepted directly by the engine)
"""

# Re-export enums from centralized location for convenience
from core.enums import BlendMode, CropPosition, RotateFlipType

# Base schemas
from .base import BaseImageRequest, ImageResponse

# Common models (core data structures)
from .common import ROI, ColorModel, Size

# Image operation models
from .image import (
    AdjustRequest,
    CropRequest,
    EncodeRequest,
    EncodeResponse,
    FitRequest,
    GammaParams,
    MaskRequest,
    OverlayRequest,
    PadRequest,
    RotateFlipRequest,
    ScaleRequest,
    SmartFitRequest,
    TrimInfo,
    TrimRequest,
    TrimResponse,
)

# Explicitly declare public API for re-export
__all__ = [
    # Common models
    "ROI",
    "Size",
    "ColorModel",
    # Base schemas
    "BaseImageRequest",
    "ImageResponse",
    # Geometry requests
    "ScaleRequest",
    "FitRequest",
    "SmartFitRequest",
    "PadRequest",
    "CropRequest",
    "RotateFlipRequest",
    # Trim models
    "TrimRequest",
    "TrimInfo",
    "TrimResponse",
    # Color pipeline requests
    "GammaParams",
    "AdjustRequest",
    "MaskRequest",
    "OverlayRequest",
    # Encoding
    "EncodeRequest",
    "EncodeResponse",
    # Enums (re-exported from core.enums)
    "BlendMode",
    "CropPosition",
    "RotateFlipType",
]
