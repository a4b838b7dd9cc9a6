"""
Geometric transform engine.

Aspect-ratio scaling, fit-and-crop placement, padding and cropping. Every
operation returns a newly allocated RGBA array and never modifies or aliases
its input.
"""

import logging
from typing import Any, Dict, Tuple, Union

import numpy as np

from core.constants import ImageConstants
from core.enums import CropPosition
from core.exceptions import CropOutOfBoundsError
from core.image.converters import ImageConverters
from imaging.color import WHITE, ColorLike, as_color
from imaging.resampling import scale_image
from schemas.common import ROI, Size

logger = logging.getLogger(__name__)

SizeLike = Union[Size, Tuple[int, int]]


def new_canvas(size: SizeLike, background_color: ColorLike = WHITE) -> np.ndarray:
    """
    Allocate an RGBA canvas filled with one color.

    Args:
        size: Canvas size (clamped to at least 1x1)
        background_color: Fill color

    Returns:
        (H, W, 4) uint8 array
    """
    target = Size.of(size).clamped()
    canvas = np.empty((target.height, target.width, ImageConstants.CHANNELS), dtype=np.uint8)
    canvas[:, :] = as_color(background_color).clamped().to_tuple()
    return canvas


def draw_image(canvas: np.ndarray, image: np.ndarray, x: int, y: int) -> None:
    """
    Draw an image onto a canvas in place, compositing source-over.

    Parts of the image falling outside the canvas are clipped, so negative
    offsets crop the image. Opaque source pixels replace the canvas exactly.

    Args:
        canvas: Destination RGBA array (modified)
        image: Source RGBA array
        x: Left offset of the image on the canvas
        y: Top offset of the image on the canvas
    """
    canvas_h, canvas_w = canvas.shape[:2]
    image_h, image_w = image.shape[:2]

    left, top = max(x, 0), max(y, 0)
    right, bottom = min(x + image_w, canvas_w), min(y + image_h, canvas_h)
    if right <= left or bottom <= top:
        return

    src = image[top - y : bottom - y, left - x : right - x]
    dst = canvas[top:bottom, left:right]

    src_alpha = src[:, :, 3:4].astype(np.float64) / 255.0
    dst_alpha = dst[:, :, 3:4].astype(np.float64) / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)

    weighted = src[:, :, :3] * src_alpha + dst[:, :, :3] * dst_alpha * (1.0 - src_alpha)
    out_rgb = np.divide(weighted, out_alpha, out=np.zeros_like(weighted), where=out_alpha > 0)

    blended = np.empty_like(dst)
    blended[:, :, :3] = np.clip(np.rint(out_rgb), 0, 255)
    blended[:, :, 3:4] = np.clip(np.rint(out_alpha * 255.0), 0, 255)

    opaque = src[:, :, 3] == 255
    blended[opaque] = src[opaque]
    dst[...] = blended


def _ratios(image: np.ndarray, target: Size) -> Tuple[float, float]:
    height, width = image.shape[:2]
    return height / width, target.height / target.width


def get_scaled_aspect_image(
    image: np.ndarray,
    new_size: SizeLike,
    scale_up: bool = False,
    high_quality: bool = False,
    pad: bool = False,
    background_color: ColorLike = WHITE,
) -> np.ndarray:
    """
    Get an image scaled to fit the new size while keeping its aspect ratio.

    Args:
        image: Source image
        new_size: Bounding size of the result
        scale_up: Allow the result to be larger than the source
        high_quality: Use the Mitchell resampler (slower) instead of OpenCV
        pad: Center the scaled image on a canvas of exactly new_size
        background_color: Color of the padding area

    Returns:
        Scaled image

    Example:
        >>> get_scaled_aspect_image(np.zeros((500, 1000, 4), np.uint8), (200, 200)).shape
        (100, 200, 4)
    """
    image = ImageConverters.ensure_rgba(image)
    target = Size.of(new_size).clamped()
    src_height, src_width = image.shape[:2]
    image_ratio, target_ratio = _ratios(image, target)

    if image_ratio < target_ratio:
        width = target.width
        if not scale_up and width > src_width:
            width = src_width
        height = round(width * image_ratio)
    else:
        height = target.height
        if not scale_up and height > src_height:
            height = src_height
        width = round(height / image_ratio)

    width = max(ImageConstants.MIN_DIMENSION, width)
    height = max(ImageConstants.MIN_DIMENSION, height)
    logger.debug(f"Scaled aspect {src_width}x{src_height} -> {width}x{height}")

    scaled = scale_image(image, (width, height), high_quality=high_quality)

    if pad and (width < target.width or height < target.height):
        padded = new_canvas(target, background_color)
        draw_image(padded, scaled, target.width // 2 - width // 2, target.height // 2 - height // 2)
        return padded

    return scaled


def get_fitted_image(
    image: np.ndarray,
    fitted_size: SizeLike,
    scale_up: bool = False,
    high_quality: bool = False,
    background_color: ColorLike = WHITE,
    position: Union[CropPosition, str] = CropPosition.CENTRE,
) -> np.ndarray:
    """
    Get an image resized to cover the fitted size and cropped to it.

    Args:
        image: Source image
        fitted_size: Exact size of the result
        scale_up: Allow the scaled image to be larger than the source
        high_quality: Use the Mitchell resampler (slower) instead of OpenCV
        background_color: Only visible when scale_up is false and the source
            is smaller than the fitted size
        position: Anchor of the scaled image on the result

    Returns:
        Image of exactly fitted_size
    """
    image = ImageConverters.ensure_rgba(image)
    target = Size.of(fitted_size).clamped()
    position = CropPosition(position)
    src_height, src_width = image.shape[:2]
    image_ratio, target_ratio = _ratios(image, target)

    if image_ratio < target_ratio:
        height = target.height
        if target.height > src_height and not scale_up:
            height = src_height
        width = round(height / image_ratio)
    else:
        width = target.width
        if target.width > src_width and not scale_up:
            width = src_width
        height = round(width * image_ratio)

    width = max(ImageConstants.MIN_DIMENSION, width)
    height = max(ImageConstants.MIN_DIMENSION, height)

    if (width, height) == (src_width, src_height):
        logger.debug("Fitted image needs no resample")
        scaled = image
    else:
        scaled = scale_image(image, (width, height), high_quality=high_quality)

    x, y = 0, 0
    if position in (CropPosition.CENTRE, CropPosition.TOP_CENTRE):
        x = round(target.width / 2.0 - width / 2.0)
    if position == CropPosition.CENTRE:
        y = round(target.height / 2.0 - height / 2.0)

    fitted = new_canvas(target, background_color)
    draw_image(fitted, scaled, x, y)
    return fitted


def get_padded_image(
    image: np.ndarray, padding: int, background_color: ColorLike = WHITE
) -> np.ndarray:
    """
    Surround an image with a solid border.

    Args:
        image: Source image
        padding: Border width in pixels on every side
        background_color: Border color

    Returns:
        Image enlarged by 2 * padding in each dimension
    """
    image = ImageConverters.ensure_rgba(image)
    height, width = image.shape[:2]
    padded = new_canvas((width + padding * 2, height + padding * 2), background_color)
    draw_image(padded, image, padding, padding)
    return padded


def get_cropped(
    image: np.ndarray, rect: Union[ROI, Tuple[int, int, int, int], Dict[str, Any]]
) -> np.ndarray:
    """
    Copy a sub-rectangle of an image.

    Args:
        image: Source image
        rect: Crop rectangle (ROI, (x, y, width, height) or dict)

    Returns:
        Cropped copy

    Raises:
        CropOutOfBoundsError: If the rectangle is empty or not fully inside
            the image
    """
    image = ImageConverters.ensure_rgba(image)
    roi = ROI.of(rect)
    height, width = image.shape[:2]

    if not roi.is_valid(width, height):
        logger.warning(f"Rejected crop {roi.to_dict()} for image {width}x{height}")
        raise CropOutOfBoundsError(roi.to_dict(), (width, height))

    return image[roi.y : roi.y2, roi.x : roi.x2].copy()
