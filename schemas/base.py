"""
Base schemas shared by all image operation requests.
"""

from pydantic import BaseModel, Field


class BaseImageRequest(BaseModel):
    """Every operation request carries its source image inline"""

    image_base64: str = Field(..., min_length=1, description="Base64 encoded source image (or data URL)")


class ImageResponse(BaseModel):
    """Result of an operation producing an image"""

    image_base64: str = Field(..., description="Base64 encoded PNG result")
    width: int = Field(..., description="Result width in pixels")
    height: int = Field(..., description="Result height in pixels")
    processing_time_ms: int = Field(..., description="Processing time in milliseconds")
