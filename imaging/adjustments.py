"""
Whole-image tone operators, masks and orientation.

Tone and mask operators work in place: they take an (H, W, 4) uint8 RGBA
array, mutate it and return None. Copy the array first if the original is
still needed. Alpha is left untouched by the tone operators.
"""

import logging
from typing import Union

import numpy as np

from core.constants import ToneConstants
from core.enums import RotateFlipType
from core.image.converters import ImageConverters

logger = logging.getLogger(__name__)


def greyscale(image: np.ndarray) -> None:
    """Replace RGB with the truncated luma 0.3R + 0.59G + 0.11B."""
    ImageConverters.validate_rgba(image)
    rgb = image[:, :, :3].astype(np.float64)
    luma = (
        rgb[:, :, 0] * ToneConstants.LUMA_RED
        + rgb[:, :, 1] * ToneConstants.LUMA_GREEN
        + rgb[:, :, 2] * ToneConstants.LUMA_BLUE
    ).astype(np.uint8)
    image[:, :, :3] = luma[:, :, np.newaxis]


def invert(image: np.ndarray) -> None:
    """Invert RGB channels (255 - value)."""
    ImageConverters.validate_rgba(image)
    np.subtract(255, image[:, :, :3], out=image[:, :, :3])


def create_gamma_array(gamma: float) -> np.ndarray:
    """
    Build a 256-entry gamma lookup table.

    Args:
        gamma: Gamma value, 1 leaves values unchanged

    Returns:
        uint8 table where table[i] = min(255, int(255 * (i / 255) ** (1 / gamma) + 0.5))
    """
    if gamma <= 0:
        raise ValueError(f"gamma must be positive, got {gamma}")

    levels = np.arange(ToneConstants.GAMMA_TABLE_SIZE, dtype=np.float64) / 255.0
    table = (255.0 * np.power(levels, 1.0 / gamma) + 0.5).astype(np.int64)
    return np.minimum(255, table).astype(np.uint8)


def set_gamma(image: np.ndarray, red: float, green: float, blue: float) -> None:
    """
    Change the gamma of each channel.

    Args:
        image: RGBA image (modified)
        red: Red gamma, 1 is unchanged
        green: Green gamma, 1 is unchanged
        blue: Blue gamma, 1 is unchanged
    """
    ImageConverters.validate_rgba(image)
    for channel, gamma in enumerate((red, green, blue)):
        table = create_gamma_array(gamma)
        image[:, :, channel] = table[image[:, :, channel]]


def set_brightness(image: np.ndarray, brightness: int) -> None:
    """
    Shift every RGB channel by a brightness amount.

    Args:
        image: RGBA image (modified)
        brightness: -255 (darkest) to 255 (brightest); values outside are
            clamped. Channels that would drop below 0 become 1.
    """
    ImageConverters.validate_rgba(image)
    brightness = max(ToneConstants.BRIGHTNESS_MIN, min(ToneConstants.BRIGHTNESS_MAX, int(brightness)))

    shifted = image[:, :, :3].astype(np.int32) + brightness
    shifted[shifted < 0] = ToneConstants.BRIGHTNESS_UNDERFLOW_VALUE
    shifted[shifted > 255] = 255
    image[:, :, :3] = shifted


def set_contrast(image: np.ndarray, contrast: float) -> None:
    """
    Change the contrast of an image.

    Args:
        image: RGBA image (modified)
        contrast: -100 (least contrast) to 100 (most contrast); values outside
            are clamped
    """
    ImageConverters.validate_rgba(image)
    contrast = max(ToneConstants.CONTRAST_MIN, min(ToneConstants.CONTRAST_MAX, float(contrast)))
    factor = ((100.0 + contrast) / 100.0) ** 2

    values = image[:, :, :3].astype(np.float64) / 255.0
    values = ((values - 0.5) * factor + 0.5) * 255.0
    image[:, :, :3] = np.clip(values, 0, 255).astype(np.uint8)


def rotate_flip(image: np.ndarray, rotate_flip_type: Union[RotateFlipType, str]) -> np.ndarray:
    """
    Rotate clockwise and optionally mirror horizontally.

    Unlike the tone operators this returns a new array, since a quarter turn
    swaps the dimensions.

    Args:
        image: Source image
        rotate_flip_type: Orientation to apply

    Returns:
        Reoriented copy
    """
    image = ImageConverters.ensure_rgba(image)
    rotate_flip_type = RotateFlipType(rotate_flip_type)

    result = np.rot90(image, k=-rotate_flip_type.quarter_turns, axes=(0, 1))
    if rotate_flip_type.flip_x:
        result = result[:, ::-1]
    return np.ascontiguousarray(result)


def _apply_mask_values(image: np.ndarray, values: np.ndarray, invert: bool) -> None:
    height, width = image.shape[:2]
    mask_height, mask_width = min(values.shape[0], height), min(values.shape[1], width)

    covered = values[:mask_height, :mask_width]
    if invert:
        covered = 255 - covered
    else:
        # Pixels the mask does not reach become fully transparent
        image[mask_height:, :, 3] = 0
        image[:mask_height, mask_width:, 3] = 0

    image[:mask_height, :mask_width, 3] = covered


def apply_mask(image: np.ndarray, mask: np.ndarray, invert: bool = False) -> None:
    """
    Mask an image using the alpha channel of another image.

    Args:
        image: RGBA image (modified)
        mask: Mask image; its alpha becomes the image alpha
        invert: Invert the effect of the mask. Outside the mask extent pixels
            are left unchanged when inverted and made transparent otherwise.
    """
    ImageConverters.validate_rgba(image)
    mask = ImageConverters.ensure_rgba(mask)
    _apply_mask_values(image, mask[:, :, 3], invert)


def apply_greyscale_mask(image: np.ndarray, mask: np.ndarray, invert: bool = False) -> None:
    """
    Mask an image using a greyscale image, lighter shades being more visible.

    The red channel of the mask is used as the new alpha.

    Args:
        image: RGBA image (modified)
        mask: Greyscale (or RGBA) mask image
        invert: Invert the effect of the mask
    """
    ImageConverters.validate_rgba(image)
    mask = ImageConverters.ensure_rgba(mask)
    _apply_mask_values(image, mask[:, :, 0], invert)
