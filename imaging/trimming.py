"""
Background trimming and smart fit.

Trim detection finds how far a uniform border (matching a reference color
within a threshold) reaches in from each edge. The four edges are scanned in
a fixed order - top, left, right, bottom - and each scan is bounded by the
trims already found, so the order changes results on irregular backgrounds.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import numpy as np

from core.constants import TrimConstants
from core.enums import CropPosition
from core.image.converters import ImageConverters
from imaging.color import TRANSPARENT, Color, ColorLike, as_color, color_difference_map
from imaging.geometry import (
    SizeLike,
    draw_image,
    get_fitted_image,
    get_scaled_aspect_image,
    new_canvas,
)
from schemas.common import Size

logger = logging.getLogger(__name__)


@dataclass
class TrimResult:
    """Trim magnitudes in pixels plus the background color they refer to"""

    top: int = 0
    left: int = 0
    right: int = 0
    bottom: int = 0
    discovered_color: Color = field(default=TRANSPARENT)

    def has_any_trimming(self) -> bool:
        return self.top != 0 or self.left != 0 or self.right != 0 or self.bottom != 0

    def has_all_sides_trimmed(self) -> bool:
        return self.top != 0 and self.left != 0 and self.right != 0 and self.bottom != 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """(top, left, right, bottom)"""
        return (self.top, self.left, self.right, self.bottom)


def _first(indices: np.ndarray) -> Optional[int]:
    return int(indices[0]) if indices.size else None


def get_trimmed_image_result(
    image: np.ndarray,
    threshold: int = TrimConstants.DEFAULT_THRESHOLD,
    background_color: Optional[ColorLike] = None,
) -> TrimResult:
    """
    Detect the background border of an image.

    A pixel belongs to the content when its color_difference() from the
    background exceeds the threshold.

    Args:
        image: Source image
        threshold: Allowed color difference, 0-255
        background_color: Color to trim; sampled from pixel (0, 0) when omitted

    Returns:
        TrimResult whose discovered_color is the background used
    """
    image = ImageConverters.ensure_rgba(image)
    height, width = image.shape[:2]

    if background_color is None:
        background = Color.from_pixel(image[0, 0])
    else:
        background = as_color(background_color)

    content = color_difference_map(image, background) > threshold
    result = TrimResult(discovered_color=background)

    # 1. Top: first row with content, ignoring column 0
    top = _first(np.flatnonzero(content[:, TrimConstants.TOP_SCAN_START_COLUMN :].any(axis=1)))
    if top is not None:
        result.top = top

    # 2. Left: first column with content at or below the top trim
    left = _first(np.flatnonzero(content[result.top :, :].any(axis=0)))
    if left is not None:
        result.left = left

    # 3. Right: last column with content, strictly right of the left trim
    columns = np.flatnonzero(content[result.top :, result.left + 1 :].any(axis=0))
    if columns.size:
        result.right = width - 1 - (result.left + 1 + int(columns[-1]))

    # 4. Bottom: last row with content, strictly below the top trim,
    # looking only from the left trim rightwards
    rows = np.flatnonzero(content[result.top + 1 :, result.left :].any(axis=1))
    if rows.size:
        result.bottom = height - 1 - (result.top + 1 + int(rows[-1]))

    logger.debug(
        f"Trim result top={result.top} left={result.left} right={result.right} "
        f"bottom={result.bottom} background={background.to_tuple()}"
    )
    return result


def get_repaired_source(image: np.ndarray) -> np.ndarray:
    """
    Normalize a source image before trimming.

    A self-resample at the source size through the high-quality path, which
    yields a fresh contiguous RGBA buffer with identical pixels.
    """
    image = ImageConverters.ensure_rgba(image)
    height, width = image.shape[:2]
    return get_scaled_aspect_image(image, (width, height), scale_up=False, high_quality=True)


def get_trimmed_image(
    image: np.ndarray,
    repad: int = TrimConstants.DEFAULT_REPAD,
    result: Optional[TrimResult] = None,
    threshold: int = TrimConstants.DEFAULT_THRESHOLD,
) -> np.ndarray:
    """
    Trim the background border away from an image.

    Args:
        image: Source image
        repad: Border (in background color) to add back after trimming;
            ignored unless all four sides were trimmed
        result: Precomputed trim result; detected with threshold when omitted
        threshold: Color difference threshold used when result is omitted

    Returns:
        Trimmed image
    """
    source = get_repaired_source(image)
    if result is None:
        result = get_trimmed_image_result(source, threshold)

    if not result.has_all_sides_trimmed():
        repad = 0

    height, width = source.shape[:2]
    trimmed = new_canvas(
        (
            width - result.left - result.right + repad * 2,
            height - result.top - result.bottom + repad * 2,
        ),
        result.discovered_color,
    )
    draw_image(trimmed, source, repad - result.left, repad - result.top)
    return trimmed


def get_smart_fit(
    image: np.ndarray,
    size: SizeLike,
    high_quality: bool = False,
    padding: int = TrimConstants.DEFAULT_PADDING,
    threshold: int = TrimConstants.DEFAULT_THRESHOLD,
    position: Union[CropPosition, str] = CropPosition.CENTRE,
) -> np.ndarray:
    """
    Fit an image into a size, treating a detected background specially.

    Images with a border on all four sides are trimmed, scaled (never up)
    into the size minus padding and centered on a canvas of the detected
    background color. Anything else falls back to get_fitted_image().

    Args:
        image: Source image
        size: Exact size of the result
        high_quality: Use the Mitchell resampler when scaling trimmed content
        padding: Space kept between trimmed content and the result edges
        threshold: Color difference threshold for trim detection
        position: Anchor used by the fitted-image fallback

    Returns:
        Image of exactly size
    """
    source = get_repaired_source(image)
    target = Size.of(size).clamped()

    result = get_trimmed_image_result(source, threshold)

    if not result.has_all_sides_trimmed():
        logger.debug("No background border on all sides, using fitted image")
        return get_fitted_image(source, target, scale_up=False, high_quality=True, position=position)

    padded_size = Size(width=target.width - padding * 2, height=target.height - padding * 2)
    if padded_size.width <= 0 or padded_size.height <= 0:
        padded_size = target

    trimmed = get_trimmed_image(source, 0, result)
    scaled = get_scaled_aspect_image(trimmed, padded_size, scale_up=False, high_quality=high_quality)

    fitted = new_canvas(target, result.discovered_color)
    scaled_height, scaled_width = scaled.shape[:2]
    draw_image(
        fitted,
        scaled,
        target.width // 2 - scaled_width // 2,
        target.height // 2 - scaled_height // 2,
    )
    return fitted
