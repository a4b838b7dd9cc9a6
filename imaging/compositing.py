"""
Image compositing.

Overlaying with the fixed blend modes is vectorized through
imaging.color.blend_pixels. The remaining operations take arbitrary Python
callables working on Color values and are evaluated pixel by pixel.
"""

import logging
from typing import Union

import numpy as np

from core.constants import ImageConstants
from core.enums import BlendMode
from core.image.converters import ImageConverters
from imaging.color import BlendColorFunction, Color, ColorLike, PixelFunction, as_color, blend_pixels

logger = logging.getLogger(__name__)


def overlay_image(
    underlying_image: np.ndarray,
    overlay: np.ndarray,
    blend: Union[BlendMode, str],
    amount: int,
) -> np.ndarray:
    """
    Blend one image on top of another.

    The overlay is anchored at the top-left corner. Underlying pixels outside
    the overlay are copied unchanged; overlay pixels outside the underlying
    image are ignored.

    Args:
        underlying_image: Base image
        overlay: Image blended on top (its alpha scales the effect)
        blend: Blend mode
        amount: Intensity 0-100

    Returns:
        New image the size of underlying_image
    """
    result = ImageConverters.ensure_rgba(underlying_image).copy()
    overlay = ImageConverters.ensure_rgba(overlay)

    height = min(result.shape[0], overlay.shape[0])
    width = min(result.shape[1], overlay.shape[1])
    if overlay.shape[:2] != (height, width):
        logger.debug(
            f"Overlay {overlay.shape[1]}x{overlay.shape[0]} clipped to {width}x{height}"
        )

    result[:height, :width] = blend_pixels(
        result[:height, :width], overlay[:height, :width], blend, amount
    )
    return result


def blend_images(img1: np.ndarray, img2: np.ndarray, blend_process: BlendColorFunction) -> np.ndarray:
    """
    Combine two images pixel by pixel with a custom function.

    Args:
        img1: First image
        img2: Second image
        blend_process: Called as blend_process(color1, color2) for each pixel;
            the returned color is clamped

    Returns:
        New image covering the intersection of both extents
    """
    img1 = ImageConverters.ensure_rgba(img1)
    img2 = ImageConverters.ensure_rgba(img2)
    height = min(img1.shape[0], img2.shape[0])
    width = min(img1.shape[1], img2.shape[1])

    result = np.empty((height, width, ImageConstants.CHANNELS), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            blended = blend_process(Color.from_pixel(img1[y, x]), Color.from_pixel(img2[y, x]))
            result[y, x] = blended.to_pixel()
    return result


def color_image(image: np.ndarray, color: ColorLike, blend_colors: BlendColorFunction) -> np.ndarray:
    """
    Recolor an image against a single color.

    Args:
        image: Source image
        color: Color passed as the second argument of every call
        blend_colors: Called as blend_colors(pixel, color) for each pixel

    Returns:
        New recolored image
    """
    image = ImageConverters.ensure_rgba(image)
    color = as_color(color)

    height, width = image.shape[:2]
    result = np.empty_like(image)
    for y in range(height):
        for x in range(width):
            result[y, x] = blend_colors(Color.from_pixel(image[y, x]), color).to_pixel()
    return result


def manipulate_pixel(image: np.ndarray, blender: PixelFunction) -> None:
    """
    Rewrite every pixel of an image in place.

    Args:
        image: RGBA image (modified)
        blender: Called with each pixel's Color; the returned color is clamped

    Example:
        >>> manipulate_pixel(image, lambda c: Color(c.r, c.g // 2, 0))
    """
    ImageConverters.validate_rgba(image)
    height, width = image.shape[:2]
    for y in range(height):
        for x in range(width):
            image[y, x] = blender(Color.from_pixel(image[y, x])).to_pixel()
