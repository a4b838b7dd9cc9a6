"""
Pytest configuration and fixtures for raster transform tests
"""

import base64

import cv2
import numpy as np
import pytest

from services.image_service import ImageService


def make_image(width, height, color=(255, 255, 255, 255)):
    """Solid RGBA image"""
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :] = color
    return image


def to_png_base64(image):
    """Encode an RGBA array as base64 PNG, the way API clients send images"""
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA))
    assert ok
    return base64.b64encode(buffer.tobytes()).decode("utf-8")


def from_png_base64(data):
    """Decode a base64 PNG response back to an RGBA array"""
    raw = np.frombuffer(base64.b64decode(data), dtype=np.uint8)
    decoded = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED)
    return cv2.cvtColor(decoded, cv2.COLOR_BGRA2RGBA)


@pytest.fixture
def white_image():
    """Opaque white 100x100 image"""
    return make_image(100, 100)


@pytest.fixture
def bordered_image():
    """100x100 image: 10px red border around white content"""
    image = make_image(100, 100, (255, 0, 0, 255))
    image[10:90, 10:90] = (255, 255, 255, 255)
    return image


@pytest.fixture
def wide_image():
    """1000x500 image with a horizontal gradient"""
    image = np.zeros((500, 1000, 4), dtype=np.uint8)
    image[:, :, 0] = np.linspace(0, 255, 1000, dtype=np.uint8)[np.newaxis, :]
    image[:, :, 1] = 128
    image[:, :, 3] = 255
    return image


@pytest.fixture
def random_image():
    """Deterministic 40x30 noise image with varying alpha"""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(30, 40, 4), dtype=np.uint8)


@pytest.fixture
def image_service():
    """Create ImageService instance for testing"""
    return ImageService(output_format=".png")


@pytest.fixture
def solid_image():
    """Factory for solid RGBA images"""
    return make_image


@pytest.fixture
def png_base64():
    """Encoder for request payloads"""
    return to_png_base64


@pytest.fixture
def decode_png():
    """Decoder for response payloads"""
    return from_png_base64
