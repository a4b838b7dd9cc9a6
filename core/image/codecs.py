"""
Codec lookup and saving.

Encoding itself is delegated to Pillow; this module only resolves which of
Pillow's registered writers to use (by file extension or MIME type) and
enforces the quality contract before any I/O happens.
"""

import io
import logging
import numbers
import os
from typing import Optional

import numpy as np
from PIL import Image

from core.constants import ImageConstants
from core.exceptions import InvalidImageError, InvalidQualityError
from core.image.converters import ImageConverters

logger = logging.getLogger(__name__)


class ImageCodecs:
    """Resolve Pillow codecs and save images with a quality setting."""

    @staticmethod
    def _registry() -> None:
        # Pillow loads its plugins lazily
        Image.init()

    @staticmethod
    def validate_quality(quality: int) -> int:
        """
        Check encoder quality.

        Raises:
            InvalidQualityError: If quality is not in [0, 100]
        """
        if (
            isinstance(quality, bool)
            or not isinstance(quality, numbers.Integral)
            or quality < ImageConstants.MIN_QUALITY
            or quality > ImageConstants.MAX_QUALITY
        ):
            raise InvalidQualityError(quality)
        return int(quality)

    @staticmethod
    def get_codec_info(mime_type: str) -> Optional[str]:
        """
        Get the Pillow format that writes a MIME type.

        Args:
            mime_type: Mime type string, for example "image/jpeg"

        Returns:
            Pillow format name, or None if no writer is registered
        """
        ImageCodecs._registry()
        for format_name, mime in Image.MIME.items():
            if mime == mime_type and format_name in Image.SAVE:
                return format_name
        return None

    @staticmethod
    def get_codec_info_from_extension(extension: str) -> Optional[str]:
        """
        Get the Pillow format for a filename extension.

        Args:
            extension: Extension such as ".jpg", "JPG" or "png"

        Returns:
            Pillow format name, or None if no writer is registered
        """
        ImageCodecs._registry()
        cleaned = extension.replace(".", "").lower()
        if not cleaned:
            return None

        format_name = Image.registered_extensions().get(f".{cleaned}")
        if format_name is not None and format_name in Image.SAVE:
            return format_name
        return None

    @staticmethod
    def resolve_format(target: str) -> str:
        """
        Pillow format for an extension or MIME type, PNG when none matches.

        Args:
            target: Extension ("jpg", ".png") or MIME type ("image/webp")
        """
        if "/" in target:
            format_name = ImageCodecs.get_codec_info(target)
        else:
            format_name = ImageCodecs.get_codec_info_from_extension(target)

        if format_name is None:
            logger.debug(f"No codec for '{target}', using {ImageConstants.FALLBACK_SAVE_FORMAT}")
            return ImageConstants.FALLBACK_SAVE_FORMAT
        return format_name

    @staticmethod
    def _prepare(image: np.ndarray, format_name: str) -> Image.Image:
        pil_image = ImageConverters.numpy_to_pil(image)
        if format_name in ImageConstants.OPAQUE_FORMATS:
            pil_image = pil_image.convert("RGB")
        return pil_image

    @staticmethod
    def _save(image: np.ndarray, target, format_name: str, quality: int) -> None:
        try:
            ImageCodecs._prepare(image, format_name).save(target, format=format_name, quality=quality)
        except (FileNotFoundError, PermissionError, IsADirectoryError):
            raise
        except (OSError, ValueError) as e:
            raise InvalidImageError(f"Cannot encode image as {format_name}: {e}", image.shape) from e

    @staticmethod
    def encode(image: np.ndarray, extension: str, quality: int = ImageConstants.DEFAULT_QUALITY) -> bytes:
        """
        Encode an image in memory.

        Args:
            image: RGBA image array
            extension: Target extension or MIME type ("jpg", ".png", "image/webp")
            quality: Quality, int between 0 and 100

        Returns:
            Encoded bytes

        Raises:
            InvalidQualityError: If quality is not in [0, 100]
            InvalidImageError: If the writer cannot store an RGBA image
        """
        quality = ImageCodecs.validate_quality(quality)
        format_name = ImageCodecs.resolve_format(extension)

        buffer = io.BytesIO()
        ImageCodecs._save(image, buffer, format_name, quality)
        return buffer.getvalue()

    @staticmethod
    def save_image(image: np.ndarray, filename: str, quality: int) -> str:
        """
        Save an image, resolving the codec from the filename extension.

        Unknown extensions fall back to a PNG save at the given path.

        Args:
            image: RGBA image array
            filename: Path to save image
            quality: Quality, int between 0 and 100

        Returns:
            Pillow format name that was used
        """
        quality = ImageCodecs.validate_quality(quality)

        extension = os.path.splitext(filename)[1]
        format_name = ImageCodecs.get_codec_info_from_extension(extension)

        if format_name is None:
            logger.warning(
                f"No codec registered for extension '{extension}', "
                f"saving {filename} as {ImageConstants.FALLBACK_SAVE_FORMAT}"
            )
            format_name = ImageConstants.FALLBACK_SAVE_FORMAT

        ImageCodecs._save(image, filename, format_name, quality)
        logger.info(f"Saved {filename} as {format_name} (quality {quality})")
        return format_name
