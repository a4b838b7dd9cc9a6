"""
Color blend algebra.

Pure functions combining an underlying and an overlay color under a named
blend mode plus a 0-100 intensity amount, and the background difference
metric used by trimming. Everything here works on integer channel values
carried in a wide signed range and only clamps to [0, 255] at the end.

The vectorized forms (blend_pixels, color_difference_map) are what whole-image
operations use; the scalar forms wrap them so both always agree.
"""

from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, Union

import numpy as np

from core.constants import BlendConstants
from core.enums import BlendMode


@dataclass(frozen=True)
class Color:
    """
    RGBA color whose channels may temporarily exceed [0, 255].

    Custom pixel functions build Colors freely (e.g. ``Color(c.r * 2, 0, 0)``);
    the engine calls clamped() before writing them back into a buffer.
    """

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_pixel(cls, pixel: Sequence[int]) -> "Color":
        """Build from an (r, g, b, a) buffer entry."""
        return cls(int(pixel[0]), int(pixel[1]), int(pixel[2]), int(pixel[3]))

    def clamped(self) -> "Color":
        """Copy with every channel clamped to [0, 255]."""
        return Color(*(min(255, max(0, int(v))) for v in self.to_tuple()))

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_pixel(self) -> np.ndarray:
        """Clamped uint8 RGBA entry ready to write into a buffer."""
        return np.array(self.clamped().to_tuple(), dtype=np.uint8)


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
TRANSPARENT = Color(0, 0, 0, 0)

ColorLike = Union[Color, Sequence[int]]

# Injectable per-pixel functions
BlendColorFunction = Callable[[Color, Color], Color]
PixelFunction = Callable[[Color], Color]


def as_color(value: ColorLike) -> Color:
    """Accept a Color or an (r, g, b) / (r, g, b, a) sequence."""
    if isinstance(value, Color):
        return value
    channels = [int(v) for v in value]
    if len(channels) in (3, 4):
        return Color(*channels)
    raise ValueError(f"Color needs 3 or 4 channels, got {len(channels)}")


def color_difference(a: ColorLike, b: ColorLike) -> int:
    """
    Mean absolute RGB difference between two colors.

    Fully transparent colors never count as different.
    """
    first, second = as_color(a), as_color(b)
    if first.a == 0 or second.a == 0:
        return 0
    total = abs(first.r - second.r) + abs(first.g - second.g) + abs(first.b - second.b)
    return total // 3


def color_difference_map(image: np.ndarray, color: ColorLike) -> np.ndarray:
    """
    color_difference() of every pixel against one reference color.

    Args:
        image: (H, W, 4) uint8 RGBA array
        color: Reference color

    Returns:
        (H, W) int32 array of differences
    """
    reference = as_color(color)
    if reference.a == 0:
        return np.zeros(image.shape[:2], dtype=np.int32)

    rgb = image[:, :, :3].astype(np.int32)
    ref = np.array([reference.r, reference.g, reference.b], dtype=np.int32)
    diff = np.abs(rgb - ref).sum(axis=2) // 3
    diff[image[:, :, 3] == 0] = 0
    return diff


def _raw_blend(under: np.ndarray, over: np.ndarray, mode: BlendMode) -> np.ndarray:
    """Mode-specific result before intensity is applied (int64, unclamped)."""
    u, o = under, over

    if mode == BlendMode.ALPHA:
        return o.copy()
    if mode == BlendMode.MULTIPLY:
        return u * o // 255
    if mode == BlendMode.ADDITIVE:
        return u + o
    if mode == BlendMode.DARKEN:
        return u - o
    if mode == BlendMode.ROOT_MULTIPLY:
        return (np.sqrt(u) * np.sqrt(o)).astype(np.int64)
    if mode == BlendMode.DIVIDE:
        # XOR, not division: evaluates as u ^ (2 * o) ^ 4
        return u ^ 2 * o ^ 2 * 2
    if mode == BlendMode.REVERSE_DIVIDE:
        return np.trunc(u.astype(np.float32) / np.float32(255) * o.astype(np.float32)).astype(np.int64)
    if mode == BlendMode.DIFFERENCE:
        return o - u
    if mode == BlendMode.DISTANCE:
        return o * 2 - u * 2
    if mode == BlendMode.SATURATE:
        product = (o * (u - o)).astype(np.float32)
        return np.trunc(product / np.float32(BlendConstants.SATURATE_DIVISOR)).astype(np.int64)

    raise ValueError(f"Unsupported blend mode: {mode}")


def blend_pixels(
    under: np.ndarray, over: np.ndarray, mode: Union[BlendMode, str], amount: int
) -> np.ndarray:
    """
    Blend overlay pixels onto underlying pixels.

    ``final = under + trunc((raw - under) * amount / 100 * over.a / 255)``,
    computed in single precision, clamped to
    [0, 255]. The result keeps the underlying alpha.

    Args:
        under: (..., 4) uint8 RGBA underlying pixels
        over: (..., 4) uint8 RGBA overlay pixels, same shape
        mode: Blend mode
        amount: Intensity, 0 (no effect) to 100 (full effect)

    Returns:
        (..., 4) uint8 blended pixels
    """
    mode = BlendMode(mode)
    u = under[..., :3].astype(np.int64)
    o = over[..., :3].astype(np.int64)
    over_alpha = over[..., 3:4].astype(np.float32)

    raw = _raw_blend(u, o, mode)

    scaled = ((raw - u) * int(amount)).astype(np.float32)
    scaled = scaled / np.float32(100) * over_alpha / np.float32(255)
    final = u + np.trunc(scaled).astype(np.int64)

    result = np.empty(under.shape, dtype=np.uint8)
    result[..., :3] = np.clip(final, 0, 255)
    result[..., 3] = under[..., 3]
    return result


def get_color_blend(
    under: ColorLike, over: ColorLike, mode: Union[BlendMode, str], amount: int
) -> Color:
    """
    Blend two colors.

    Args:
        under: Underlying color
        over: Overlay color (its alpha scales the effect)
        mode: Blend mode
        amount: Intensity 0-100

    Returns:
        Blended color with the underlying alpha

    Example:
        >>> get_color_blend((200, 100, 50), (100, 100, 100), BlendMode.MULTIPLY, 100)
        Color(r=78, g=39, b=19, a=255)
    """
    under_pixel = np.array([as_color(under).clamped().to_tuple()], dtype=np.uint8)
    over_pixel = np.array([as_color(over).clamped().to_tuple()], dtype=np.uint8)
    return Color.from_pixel(blend_pixels(under_pixel, over_pixel, mode, amount)[0])
