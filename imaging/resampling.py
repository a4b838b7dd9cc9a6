"""
Resampling engine.

High-quality resizing splits an image into four per-channel sample planes
(widened to 16 bits), runs a separable Mitchell-Netravali filter along each
axis and quantizes the result back to 8-bit channels. The low-quality path is
a direct OpenCV resize with no plane conversion.
"""

import logging
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from core.constants import ResamplingConstants
from core.image.converters import ImageConverters
from schemas.common import Size

logger = logging.getLogger(__name__)


class MitchellFilter:
    """
    Mitchell-Netravali cubic reconstruction filter.

    The default B = C = 1/3 is the parameter pair recommended by Mitchell and
    Netravali. Support is 2 pixels on either side of the center.
    """

    def __init__(
        self,
        b: float = ResamplingConstants.MITCHELL_B,
        c: float = ResamplingConstants.MITCHELL_C,
    ):
        self.b = b
        self.c = c
        self.support = ResamplingConstants.MITCHELL_SUPPORT

    def __call__(self, x: np.ndarray) -> np.ndarray:
        b, c = self.b, self.c
        x = np.abs(np.asarray(x, dtype=np.float64))
        x2 = x * x
        x3 = x2 * x

        near = ((12 - 9 * b - 6 * c) * x3 + (-18 + 12 * b + 6 * c) * x2 + (6 - 2 * b)) / 6
        far = (
            (-b - 6 * c) * x3 + (6 * b + 30 * c) * x2 + (-12 * b - 48 * c) * x + (8 * b + 24 * c)
        ) / 6

        return np.where(x < 1, near, np.where(x < 2, far, 0.0))


class ResamplingService:
    """Separable 2D resampler working on (channels, height, width) planes."""

    def __init__(self, kernel: Optional[MitchellFilter] = None):
        self.kernel = kernel or MitchellFilter()

    def contributions(self, src_length: int, dst_length: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Filter taps mapping one axis of the source onto the destination.

        Row i holds the source indices and normalized filter weights that
        produce destination sample i. Every row has the same number of taps,
        which depends only on the kernel support and the scale. When
        shrinking, the kernel is stretched by the inverse scale so it still
        covers all source samples.

        Returns:
            (indices, weights), both shaped (dst_length, taps)
        """
        factor = dst_length / src_length
        scale = min(factor, 1.0)
        radius = self.kernel.support / scale
        taps = int(np.floor(2 * radius)) + 3

        centers = (np.arange(dst_length) + 0.5) / factor - 0.5
        left = np.floor(centers - radius).astype(np.intp)
        positions = left[:, None] + np.arange(taps)[None, :]

        weights = self.kernel((centers[:, None] - positions) * scale)
        totals = weights.sum(axis=1, keepdims=True)
        weights = weights / np.where(totals != 0, totals, 1.0)

        # Samples past the edges repeat the border sample
        indices = np.clip(positions, 0, src_length - 1)
        return indices, weights

    @staticmethod
    def _convolve(samples: np.ndarray, indices: np.ndarray, weights: np.ndarray, axis: int) -> np.ndarray:
        shape = list(samples.shape)
        shape[axis] = indices.shape[0]
        broadcast = [1] * samples.ndim
        broadcast[axis] = -1

        result = np.zeros(shape, dtype=np.float64)
        for tap in range(indices.shape[1]):
            result += np.take(samples, indices[:, tap], axis=axis) * weights[:, tap].reshape(broadcast)
        return result

    def resample(self, planes: np.ndarray, width: int, height: int) -> np.ndarray:
        """
        Resample sample planes to a new size.

        Args:
            planes: (channels, src_height, src_width) array
            width: Target width
            height: Target height

        Returns:
            (channels, height, width) uint16 planes
        """
        _, src_height, src_width = planes.shape
        if (src_width, src_height) == (width, height):
            return planes.astype(np.uint16, copy=True)

        samples = planes.astype(np.float64)
        # Horizontal pass, then vertical pass
        samples = self._convolve(samples, *self.contributions(src_width, width), axis=2)
        samples = self._convolve(samples, *self.contributions(src_height, height), axis=1)

        return np.clip(np.rint(samples), 0, ResamplingConstants.PLANE_MAX_VALUE).astype(np.uint16)


def image_to_planes(image: np.ndarray) -> np.ndarray:
    """Split an RGBA image into four (H, W) uint16 planes (R, G, B, A)."""
    return np.ascontiguousarray(np.moveaxis(image, 2, 0)).astype(np.uint16)


def planes_to_image(planes: np.ndarray) -> np.ndarray:
    """Quantize (4, H, W) planes back into an RGBA uint8 image."""
    clipped = np.clip(planes, 0, 255).astype(np.uint8)
    return np.ascontiguousarray(np.moveaxis(clipped, 0, 2))


def _target(size: Union[Size, Tuple[int, int]]) -> Size:
    return Size.of(size).clamped()


def scale_high_quality(image: np.ndarray, size: Union[Size, Tuple[int, int]]) -> np.ndarray:
    """
    Resize with the Mitchell resampler.

    Args:
        image: RGBA image array
        size: Target size

    Returns:
        New RGBA image of exactly the target size
    """
    image = ImageConverters.ensure_rgba(image)
    target = _target(size)

    service = ResamplingService()
    planes = service.resample(image_to_planes(image), target.width, target.height)
    logger.debug(
        f"High quality resample {image.shape[1]}x{image.shape[0]} -> {target.width}x{target.height}"
    )
    return planes_to_image(planes)


def scale_simple(image: np.ndarray, size: Union[Size, Tuple[int, int]]) -> np.ndarray:
    """
    Resize with OpenCV (area averaging when shrinking, bilinear when enlarging).

    Args:
        image: RGBA image array
        size: Target size

    Returns:
        New RGBA image of exactly the target size
    """
    image = ImageConverters.ensure_rgba(image)
    target = _target(size)
    height, width = image.shape[:2]

    if (width, height) == target.to_tuple():
        return image.copy()

    shrinking = target.width <= width and target.height <= height
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR
    return cv2.resize(image, target.to_tuple(), interpolation=interpolation)


def scale_image(
    image: np.ndarray, size: Union[Size, Tuple[int, int]], high_quality: bool = False
) -> np.ndarray:
    """Dispatch to scale_high_quality() or scale_simple()."""
    if high_quality:
        return scale_high_quality(image, size)
    return scale_simple(image, size)
