"""
Raster transform engine.

Modules:
- color: Color value type, difference metric and blend-mode algebra
- resampling: Mitchell-Netravali resampler and simple OpenCV resize
- geometry: Aspect scaling, fitting, padding, cropping
- trimming: Background trim detection and smart fit
- adjustments: Tone operators, masks, rotate/flip
- compositing: Overlay blending and custom per-pixel functions

Images are (H, W, 4) uint8 RGBA NumPy arrays throughout.
"""

from imaging.adjustments import (
    apply_greyscale_mask,
    apply_mask,
    create_gamma_array,
    greyscale,
    invert,
    rotate_flip,
    set_brightness,
    set_contrast,
    set_gamma,
)
from imaging.color import Color, color_difference, get_color_blend
from imaging.compositing import blend_images, color_image, manipulate_pixel, overlay_image
from imaging.geometry import (
    draw_image,
    get_cropped,
    get_fitted_image,
    get_padded_image,
    get_scaled_aspect_image,
    new_canvas,
)
from imaging.resampling import MitchellFilter, ResamplingService, scale_high_quality, scale_simple
from imaging.trimming import (
    TrimResult,
    get_repaired_source,
    get_smart_fit,
    get_trimmed_image,
    get_trimmed_image_result,
)

__all__ = [
    # color
    "Color",
    "color_difference",
    "get_color_blend",
    # resampling
    "MitchellFilter",
    "ResamplingService",
    "scale_high_quality",
    "scale_simple",
    # geometry
    "new_canvas",
    "draw_image",
    "get_scaled_aspect_image",
    "get_fitted_image",
    "get_padded_image",
    "get_cropped",
    # trimming
    "TrimResult",
    "get_trimmed_image_result",
    "get_trimmed_image",
    "get_repaired_source",
    "get_smart_fit",
    # adjustments
    "greyscale",
    "invert",
    "create_gamma_array",
    "set_gamma",
    "set_brightness",
    "set_contrast",
    "rotate_flip",
    "apply_mask",
    "apply_greyscale_mask",
    # compositing
    "overlay_image",
    "blend_images",
    "color_image",
    "manipulate_pixel",
]
