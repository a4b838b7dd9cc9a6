"""
Common data structures shared by the engine, services and API.
"""

from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field

from core.constants import ImageConstants


class Size(BaseModel):
    """
    Width/height pair.

    Values are not constrained at construction: engine operations clamp
    degenerate requests (zero or negative) to 1 instead of failing.
    """

    width: int
    height: int

    @classmethod
    def of(cls, value: Union["Size", Tuple[int, int], Dict[str, int]]) -> "Size":
        """Coerce a Size, (width, height) tuple or dict into a Size."""
        if isinstance(value, Size):
            return value
        if isinstance(value, dict):
            return cls(width=int(value["width"]), height=int(value["height"]))
        width, height = value
        return cls(width=int(width), height=int(height))

    def clamped(self) -> "Size":
        """Copy with both dimensions floored at the minimum dimension (1)."""
        return Size(
            width=max(ImageConstants.MIN_DIMENSION, self.width),
            height=max(ImageConstants.MIN_DIMENSION, self.height),
        )

    def to_tuple(self) -> Tuple[int, int]:
        """(width, height) tuple, the order OpenCV expects for dsize."""
        return (self.width, self.height)


class ROI(BaseModel):
    """
    Rectangular region of an image.

    Bounds are checked by the operation consuming the ROI (see
    imaging.geometry.get_cropped), not at construction.
    """

    x: int = Field(..., description="X coordinate")
    y: int = Field(..., description="Y coordinate")
    width: int = Field(..., description="Width")
    height: int = Field(..., description="Height")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for service layer compatibility."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ROI":
        """Create ROI from dictionary."""
        return cls(
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
        )

    @classmethod
    def of(cls, value: Union["ROI", Tuple[int, int, int, int], Dict[str, Any]]) -> "ROI":
        """Coerce a ROI, (x, y, width, height) tuple or dict into a ROI."""
        if isinstance(value, ROI):
            return value
        if isinstance(value, dict):
            return cls.from_dict(value)
        x, y, width, height = value
        return cls(x=int(x), y=int(y), width=int(width), height=int(height))

    @property
    def x2(self) -> int:
        """Get right edge coordinate (exclusive)."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate (exclusive)."""
        return self.y + self.height

    def is_valid(
        self, image_width: Optional[int] = None, image_height: Optional[int] = None
    ) -> bool:
        """
        Check that the ROI is non-empty and, if bounds are given, inside them.

        Args:
            image_width: Optional image width for bounds checking
            image_height: Optional image height for bounds checking

        Returns:
            True if ROI is valid
        """
        if self.width <= 0 or self.height <= 0:
            return False

        if self.x < 0 or self.y < 0:
            return False

        if image_width is not None and self.x2 > image_width:
            return False

        if image_height is not None and self.y2 > image_height:
            return False

        return True


class ColorModel(BaseModel):
    """RGBA color as carried over the API"""

    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    a: int = Field(255, ge=0, le=255)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)
