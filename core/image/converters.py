"""
Image format conversion utilities.

Handles conversions between the engine's canonical buffer and other forms:
- NumPy arrays (H, W, 4) uint8 in RGBA order (canonical)
- Greyscale / RGB arrays (normalized to RGBA)
- PIL Images
- Base64 encoded strings and byte streams
"""

import base64
import binascii
import io
import logging
from typing import Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from core.constants import ImageConstants
from core.exceptions import InvalidImageError

logger = logging.getLogger(__name__)


class ImageConverters:
    """Utilities for converting between image formats."""

    @staticmethod
    def validate_rgba(image: np.ndarray) -> np.ndarray:
        """
        Check that an array already has the canonical RGBA buffer layout.

        In-place operators use this instead of ensure_rgba() because they must
        mutate the caller's array, not a converted copy.

        Args:
            image: Candidate image

        Returns:
            The same array

        Raises:
            InvalidImageError: If the array is not (H, W, 4) uint8
        """
        if not isinstance(image, np.ndarray):
            raise InvalidImageError(f"Expected a NumPy array, got {type(image).__name__}")
        if (
            image.ndim != 3
            or image.shape[2] != ImageConstants.CHANNELS
            or image.dtype != np.uint8
        ):
            raise InvalidImageError(
                f"Expected an (H, W, 4) uint8 RGBA array, got shape {image.shape} "
                f"and dtype {image.dtype}",
                shape=image.shape,
            )
        if image.shape[0] < 1 or image.shape[1] < 1:
            raise InvalidImageError("Image must be at least 1x1", shape=image.shape)
        return image

    @staticmethod
    def ensure_rgba(image: Union[np.ndarray, Image.Image]) -> np.ndarray:
        """
        Normalize an image to a contiguous (H, W, 4) uint8 RGBA array.

        Greyscale arrays are replicated into RGB, missing alpha is set to 255
        and PIL Images are converted. Arrays already in canonical form are
        returned as-is (no copy).

        Args:
            image: Greyscale, RGB or RGBA array, or a PIL Image

        Returns:
            RGBA NumPy array
        """
        if isinstance(image, Image.Image):
            return ImageConverters.pil_to_numpy(image)

        if not isinstance(image, np.ndarray):
            raise InvalidImageError(f"Expected a NumPy array, got {type(image).__name__}")

        if image.dtype != np.uint8:
            image = np.clip(image, 0, 255).astype(np.uint8)

        if image.ndim == 3 and image.shape[2] == 1:
            image = image[:, :, 0]

        if image.ndim == 2:
            image = cv2.cvtColor(np.ascontiguousarray(image), cv2.COLOR_GRAY2RGBA)
        elif image.ndim == 3 and image.shape[2] == 3:
            image = cv2.cvtColor(np.ascontiguousarray(image), cv2.COLOR_RGB2RGBA)

        ImageConverters.validate_rgba(image)
        return np.ascontiguousarray(image)

    @staticmethod
    def numpy_to_pil(image: np.ndarray) -> Image.Image:
        """
        Convert an RGBA NumPy array to a PIL Image.

        Args:
            image: Image array (any form accepted by ensure_rgba)

        Returns:
            PIL Image in RGBA mode
        """
        return Image.fromarray(ImageConverters.ensure_rgba(image))

    @staticmethod
    def pil_to_numpy(image: Image.Image) -> np.ndarray:
        """
        Convert PIL Image to an RGBA NumPy array.

        Args:
            image: PIL Image in any mode

        Returns:
            (H, W, 4) uint8 array
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return np.array(image, dtype=np.uint8)

    @staticmethod
    def to_stream(image: np.ndarray, format: str = ImageConstants.DEFAULT_OUTPUT_FORMAT) -> io.BytesIO:
        """
        Encode image into an in-memory byte stream.

        Args:
            image: RGBA image array
            format: Pillow format name

        Returns:
            BytesIO positioned at the start of the encoded data
        """
        buffer = io.BytesIO()
        ImageConverters.numpy_to_pil(image).save(buffer, format=format)
        buffer.seek(0)
        return buffer

    @staticmethod
    def from_bytes(data: bytes) -> np.ndarray:
        """
        Decode encoded image bytes into an RGBA array.

        Args:
            data: Encoded image (PNG, JPEG, ...)

        Returns:
            RGBA NumPy array

        Raises:
            InvalidImageError: If Pillow cannot decode the data
        """
        try:
            with Image.open(io.BytesIO(data)) as image:
                return ImageConverters.pil_to_numpy(image)
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Failed to decode image bytes: {e}")
            raise InvalidImageError(f"Cannot decode image data: {e}") from e

    @staticmethod
    def to_base64(
        image: Union[np.ndarray, Image.Image, bytes],
        format: str = ImageConstants.DEFAULT_OUTPUT_FORMAT,
        quality: int = ImageConstants.DEFAULT_QUALITY,
    ) -> str:
        """
        Convert image to base64 string.

        Args:
            image: Input image (NumPy array, PIL Image, or raw bytes)
            format: Image format (PNG, JPEG, etc.)
            quality: JPEG quality (0-100, ignored for PNG)

        Returns:
            Base64 encoded string
        """
        if isinstance(image, bytes):
            return base64.b64encode(image).decode("utf-8")

        if isinstance(image, np.ndarray):
            image = ImageConverters.numpy_to_pil(image)

        buffer = io.BytesIO()
        save_kwargs = {"format": format}

        if format.upper() in ImageConstants.OPAQUE_FORMATS:
            image = image.convert("RGB")
        if format.upper() == "JPEG":
            save_kwargs["quality"] = quality
            save_kwargs["optimize"] = True

        image.save(buffer, **save_kwargs)
        return base64.b64encode(buffer.getvalue()).decode("utf-8")

    @staticmethod
    def from_base64(base64_string: str) -> np.ndarray:
        """
        Convert base64 string to an RGBA NumPy array.

        Args:
            base64_string: Base64 encoded image, optionally as a data URL

        Returns:
            RGBA NumPy array
        """
        if base64_string.startswith("data:") and "," in base64_string:
            base64_string = base64_string.split(",", 1)[1]

        try:
            image_bytes = base64.b64decode(base64_string, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"Failed to decode base64 image: {e}")
            raise InvalidImageError(f"Invalid base64 payload: {e}") from e

        return ImageConverters.from_bytes(image_bytes)

    @staticmethod
    def encode_image_to_base64(image: np.ndarray, format: str = ".png") -> str:
        """
        Encode an RGBA image to base64 with OpenCV.

        Faster than to_base64() for PNG responses since it skips the PIL
        round trip.

        Args:
            image: RGBA image array
            format: OpenCV extension ('.png', '.jpg', etc.)

        Returns:
            Base64 encoded string
        """
        image = ImageConverters.ensure_rgba(image)
        if format.lower() in (".jpg", ".jpeg", ".bmp"):
            converted = cv2.cvtColor(image, cv2.COLOR_RGBA2BGR)
        else:
            converted = cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)

        ok, buffer = cv2.imencode(format, converted)
        if not ok:
            raise InvalidImageError(f"OpenCV could not encode image as {format}")
        return base64.b64encode(buffer.tobytes()).decode("utf-8")
