"""
Image Service - Business logic for raster transform operations.

This service sits between the API routers and the imaging engine: it
decodes the inline source images, runs the engine operation, and packs the
result into response models with timing information.
"""

import base64
import logging
from typing import Callable, Optional

import numpy as np

from config import ImageSettings
from core.constants import ImageConstants, TrimConstants
from core.image import ImageCodecs, ImageConverters
from core.utils.decorators import timer
from imaging import adjustments, compositing, geometry, trimming
from imaging.color import Color
from schemas import (
    AdjustRequest,
    ColorModel,
    CropRequest,
    EncodeRequest,
    EncodeResponse,
    FitRequest,
    ImageResponse,
    MaskRequest,
    OverlayRequest,
    PadRequest,
    RotateFlipRequest,
    ScaleRequest,
    Size,
    SmartFitRequest,
    TrimInfo,
    TrimRequest,
    TrimResponse,
)

logger = logging.getLogger(__name__)


def _color(model: Optional[ColorModel]) -> Optional[Color]:
    if model is None:
        return None
    return Color(*model.to_tuple())


class ImageService:
    """
    Service for raster transform operations.

    Every public method takes a validated request model and returns a
    response model. Engine errors (ImagingError subclasses) propagate to the
    API layer unchanged.
    """

    def __init__(
        self,
        output_format: str = ".png",
        default_quality: int = ImageConstants.DEFAULT_QUALITY,
        trim_threshold: int = TrimConstants.DEFAULT_THRESHOLD,
        high_quality: bool = False,
    ):
        """
        Initialize image service.

        Args:
            output_format: OpenCV extension used to encode result images
            default_quality: Encoder quality when a request omits it
            trim_threshold: Trim threshold when a request omits it
            high_quality: Resampler choice when a request omits it
        """
        self.output_format = output_format
        self.default_quality = default_quality
        self.trim_threshold = trim_threshold
        self.high_quality = high_quality

    @classmethod
    def from_settings(cls, settings: ImageSettings) -> "ImageService":
        """Build a service from the image settings group"""
        return cls(
            output_format=settings.output_extension,
            default_quality=settings.default_quality,
            trim_threshold=settings.trim_threshold,
            high_quality=settings.high_quality,
        )

    def _high_quality(self, value: Optional[bool]) -> bool:
        return self.high_quality if value is None else value

    def _threshold(self, value: Optional[int]) -> int:
        return self.trim_threshold if value is None else value

    def _run(
        self, name: str, image_base64: str, operation: Callable[[np.ndarray], np.ndarray]
    ) -> ImageResponse:
        """
        Template method for single-image operations.

        Args:
            name: Operation name used in the log line
            image_base64: Source image payload
            operation: Engine call mapping the decoded source to the result

        Returns:
            ImageResponse with the encoded result
        """
        with timer(name) as t:
            source = ImageConverters.from_base64(image_base64)
            result = operation(source)
            encoded = ImageConverters.encode_image_to_base64(result, self.output_format)

        height, width = result.shape[:2]
        logger.info(
            f"{name}: {source.shape[1]}x{source.shape[0]} -> {width}x{height} "
            f"in {t.elapsed_ms} ms"
        )
        return ImageResponse(
            image_base64=encoded,
            width=width,
            height=height,
            processing_time_ms=t.elapsed_ms,
        )

    # Geometry

    def scale(self, request: ScaleRequest) -> ImageResponse:
        return self._run(
            "scale",
            request.image_base64,
            lambda image: geometry.get_scaled_aspect_image(
                image,
                Size(width=request.width, height=request.height),
                scale_up=request.scale_up,
                high_quality=self._high_quality(request.high_quality),
                pad=request.pad,
                background_color=_color(request.background_color),
            ),
        )

    def fit(self, request: FitRequest) -> ImageResponse:
        return self._run(
            "fit",
            request.image_base64,
            lambda image: geometry.get_fitted_image(
                image,
                Size(width=request.width, height=request.height),
                scale_up=request.scale_up,
                high_quality=self._high_quality(request.high_quality),
                background_color=_color(request.background_color),
                position=request.position,
            ),
        )

    def smart_fit(self, request: SmartFitRequest) -> ImageResponse:
        return self._run(
            "smart-fit",
            request.image_base64,
            lambda image: trimming.get_smart_fit(
                image,
                Size(width=request.width, height=request.height),
                high_quality=self._high_quality(request.high_quality),
                padding=request.padding,
                threshold=self._threshold(request.threshold),
                position=request.position,
            ),
        )

    def pad(self, request: PadRequest) -> ImageResponse:
        return self._run(
            "pad",
            request.image_base64,
            lambda image: geometry.get_padded_image(
                image, request.padding, _color(request.background_color)
            ),
        )

    def crop(self, request: CropRequest) -> ImageResponse:
        return self._run(
            "crop",
            request.image_base64,
            lambda image: geometry.get_cropped(image, request.roi),
        )

    def rotate_flip(self, request: RotateFlipRequest) -> ImageResponse:
        return self._run(
            "rotate-flip",
            request.image_base64,
            lambda image: adjustments.rotate_flip(image, request.rotate_flip_type),
        )

    # Trimming

    def _detect(self, image: np.ndarray, request: TrimRequest) -> trimming.TrimResult:
        return trimming.get_trimmed_image_result(
            image, self._threshold(request.threshold), _color(request.background_color)
        )

    @staticmethod
    def _trim_info(result: trimming.TrimResult) -> TrimInfo:
        color = result.discovered_color
        return TrimInfo(
            top=result.top,
            left=result.left,
            right=result.right,
            bottom=result.bottom,
            discovered_color=ColorModel(r=color.r, g=color.g, b=color.b, a=color.a),
            has_all_sides_trimmed=result.has_all_sides_trimmed(),
        )

    def detect_trim(self, request: TrimRequest) -> TrimInfo:
        """
        Detect the background border without modifying the image.

        Args:
            request: Trim request (repad is ignored)

        Returns:
            TrimInfo with per-side magnitudes
        """
        with timer("trim-detect"):
            source = ImageConverters.from_base64(request.image_base64)
            result = self._detect(source, request)

        logger.info(f"trim-detect: {result.as_tuple()} (all sides: {result.has_all_sides_trimmed()})")
        return self._trim_info(result)

    def trim(self, request: TrimRequest) -> TrimResponse:
        """
        Detect and remove the background border.

        Args:
            request: Trim request

        Returns:
            TrimResponse with the trimmed image and the detected trims
        """
        with timer("trim") as t:
            source = ImageConverters.from_base64(request.image_base64)
            result = self._detect(trimming.get_repaired_source(source), request)
            trimmed = trimming.get_trimmed_image(source, repad=request.repad, result=result)
            encoded = ImageConverters.encode_image_to_base64(trimmed, self.output_format)

        height, width = trimmed.shape[:2]
        logger.info(f"trim: {result.as_tuple()} -> {width}x{height} in {t.elapsed_ms} ms")
        return TrimResponse(
            image_base64=encoded,
            width=width,
            height=height,
            processing_time_ms=t.elapsed_ms,
            trim=self._trim_info(result),
        )

    # Color pipeline

    def adjust(self, request: AdjustRequest) -> ImageResponse:
        """
        Run the tone operators on a copy of the source.

        Operators run in a fixed order: greyscale, invert, gamma,
        brightness, contrast. Omitted operators are skipped.
        """

        def operation(image: np.ndarray) -> np.ndarray:
            result = image.copy()
            if request.greyscale:
                adjustments.greyscale(result)
            if request.invert:
                adjustments.invert(result)
            if request.gamma is not None:
                adjustments.set_gamma(
                    result, request.gamma.red, request.gamma.green, request.gamma.blue
                )
            if request.brightness is not None:
                adjustments.set_brightness(result, request.brightness)
            if request.contrast is not None:
                adjustments.set_contrast(result, request.contrast)
            return result

        return self._run("adjust", request.image_base64, operation)

    def mask(self, request: MaskRequest) -> ImageResponse:
        mask = ImageConverters.from_base64(request.mask_base64)
        apply = adjustments.apply_greyscale_mask if request.greyscale else adjustments.apply_mask

        def operation(image: np.ndarray) -> np.ndarray:
            result = image.copy()
            apply(result, mask, invert=request.invert)
            return result

        return self._run("mask", request.image_base64, operation)

    def overlay(self, request: OverlayRequest) -> ImageResponse:
        overlay = ImageConverters.from_base64(request.overlay_base64)
        return self._run(
            "overlay",
            request.image_base64,
            lambda image: compositing.overlay_image(
                image, overlay, request.blend_mode, request.amount
            ),
        )

    # Encoding

    def encode(self, request: EncodeRequest) -> EncodeResponse:
        """
        Re-encode an image with a codec resolved from an extension or MIME type.

        Args:
            request: Encode request

        Returns:
            EncodeResponse with the encoded bytes

        Raises:
            InvalidQualityError: If quality is outside 0-100
        """
        quality = self.default_quality if request.quality is None else request.quality
        ImageCodecs.validate_quality(quality)
        source = ImageConverters.from_base64(request.image_base64)
        format_name = ImageCodecs.resolve_format(request.extension)
        data = ImageCodecs.encode(source, request.extension, quality)

        logger.info(f"encode: {format_name} quality {quality}, {len(data)} bytes")
        return EncodeResponse(
            data_base64=base64.b64encode(data).decode("utf-8"),
            format=format_name,
            size_bytes=len(data),
        )
