"""
Constants and configuration values for the raster transform engine.
Centralizes all magic numbers and configuration constants.
"""


# Image Constants
class ImageConstants:
    """Constants related to image buffers and encoding."""

    # Buffer layout
    CHANNELS = 4
    MIN_DIMENSION = 1

    # Encoding
    DEFAULT_QUALITY = 85
    MIN_QUALITY = 0
    MAX_QUALITY = 100
    DEFAULT_OUTPUT_FORMAT = "PNG"
    FALLBACK_SAVE_FORMAT = "PNG"

    # Formats that cannot store an alpha channel
    OPAQUE_FORMATS = ("JPEG", "BMP", "PPM", "EPS")


# Trim Constants
class TrimConstants:
    """Constants for background trimming and smart fit."""

    DEFAULT_THRESHOLD = 10
    MIN_THRESHOLD = 0
    MAX_THRESHOLD = 255

    DEFAULT_PADDING = 0
    DEFAULT_REPAD = 0

    # First column examined by the top-edge scan
    TOP_SCAN_START_COLUMN = 1


# Resampling Constants
class ResamplingConstants:
    """Mitchell-Netravali filter parameters."""

    MITCHELL_B = 1.0 / 3.0
    MITCHELL_C = 1.0 / 3.0
    MITCHELL_SUPPORT = 2.0

    # Intermediate sample planes are widened to 16 bits
    PLANE_MAX_VALUE = 65535


# Tone Constants
class ToneConstants:
    """Constants for the per-pixel tone operators."""

    LUMA_RED = 0.3
    LUMA_GREEN = 0.59
    LUMA_BLUE = 0.11

    BRIGHTNESS_MIN = -255
    BRIGHTNESS_MAX = 255
    # Channels pushed below zero by a brightness change land on 1, not 0
    BRIGHTNESS_UNDERFLOW_VALUE = 1

    CONTRAST_MIN = -100.0
    CONTRAST_MAX = 100.0

    GAMMA_TABLE_SIZE = 256


# Blend Constants
class BlendConstants:
    """Constants for blend-mode compositing."""

    MIN_AMOUNT = 0
    MAX_AMOUNT = 100
    SATURATE_DIVISOR = 16.0


# System Constants
class SystemConstants:
    """Constants for system operations."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8000
