"""
Centralized enumerations for the raster transform engine.

All enums use the (str, Enum) pattern so they serialize cleanly through
pydantic and FastAPI.
"""

from enum import Enum


class BlendMode(str, Enum):
    """Per-channel compositing formula used when overlaying images."""

    ALPHA = "alpha"
    ADDITIVE = "additive"
    MULTIPLY = "multiply"
    ROOT_MULTIPLY = "root_multiply"
    DARKEN = "darken"
    DIVIDE = "divide"
    REVERSE_DIVIDE = "reverse_divide"
    DIFFERENCE = "difference"
    DISTANCE = "distance"
    SATURATE = "saturate"


class CropPosition(str, Enum):
    """Anchor used when placing a scaled image on a fitted canvas."""

    CENTRE = "centre"
    TOP_LEFT = "top_left"
    TOP_CENTRE = "top_centre"


class RotateFlipType(str, Enum):
    """
    Clockwise rotation followed by an optional horizontal mirror.

    The eight canonical members cover every distinct orientation. The
    FLIP_Y and FLIP_XY names are aliases of the canonical member that
    produces the same result.
    """

    ROTATE_NONE_FLIP_NONE = "rotate_none_flip_none"
    ROTATE_90_FLIP_NONE = "rotate_90_flip_none"
    ROTATE_180_FLIP_NONE = "rotate_180_flip_none"
    ROTATE_270_FLIP_NONE = "rotate_270_flip_none"
    ROTATE_NONE_FLIP_X = "rotate_none_flip_x"
    ROTATE_90_FLIP_X = "rotate_90_flip_x"
    ROTATE_180_FLIP_X = "rotate_180_flip_x"
    ROTATE_270_FLIP_X = "rotate_270_flip_x"

    # Vertical mirror aliases
    ROTATE_NONE_FLIP_Y = "rotate_180_flip_x"
    ROTATE_90_FLIP_Y = "rotate_270_flip_x"
    ROTATE_180_FLIP_Y = "rotate_none_flip_x"
    ROTATE_270_FLIP_Y = "rotate_90_flip_x"
    ROTATE_NONE_FLIP_XY = "rotate_180_flip_none"
    ROTATE_90_FLIP_XY = "rotate_270_flip_none"
    ROTATE_180_FLIP_XY = "rotate_none_flip_none"
    ROTATE_270_FLIP_XY = "rotate_90_flip_none"

    @property
    def quarter_turns(self) -> int:
        """Number of clockwise 90 degree turns."""
        return {"none": 0, "90": 1, "180": 2, "270": 3}[self.value.split("_")[1]]

    @property
    def flip_x(self) -> bool:
        """Whether the result is mirrored horizontally."""
        return self.value.endswith("flip_x")
