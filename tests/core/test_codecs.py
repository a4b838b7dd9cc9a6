"""
Tests for ImageCodecs
"""

import io

import numpy as np
import pytest
from PIL import Image

from core.exceptions import InvalidImageError, InvalidQualityError
from core.image import ImageCodecs


class TestCodecLookup:
    """Test codec resolution by MIME type and extension"""

    @pytest.mark.parametrize(
        "mime,expected",
        [("image/jpeg", "JPEG"), ("image/png", "PNG"), ("image/gif", "GIF")],
    )
    def test_get_codec_info(self, mime, expected):
        assert ImageCodecs.get_codec_info(mime) == expected

    def test_get_codec_info_unknown(self):
        assert ImageCodecs.get_codec_info("image/x-unknown") is None

    @pytest.mark.parametrize("extension", [".jpg", "jpg", "JPG", ".JPEG", "jpeg"])
    def test_extension_normalization(self, extension):
        assert ImageCodecs.get_codec_info_from_extension(extension) == "JPEG"

    def test_extension_unknown(self):
        assert ImageCodecs.get_codec_info_from_extension(".nope") is None
        assert ImageCodecs.get_codec_info_from_extension("") is None

    def test_resolve_format(self):
        assert ImageCodecs.resolve_format("image/png") == "PNG"
        assert ImageCodecs.resolve_format(".bmp") == "BMP"
        assert ImageCodecs.resolve_format("nope") == "PNG"


class TestQuality:
    """Test the quality contract"""

    @pytest.mark.parametrize("quality", [0, 50, 100])
    def test_accepts_range(self, quality):
        assert ImageCodecs.validate_quality(quality) == quality

    @pytest.mark.parametrize("quality", [np.int64(50), np.uint8(100), np.int32(0)])
    def test_accepts_numpy_integers(self, quality):
        result = ImageCodecs.validate_quality(quality)
        assert result == int(quality)
        assert type(result) is int

    @pytest.mark.parametrize("quality", [-1, 101, 1000, 50.5, True, "80"])
    def test_rejects_outside_range(self, quality):
        with pytest.raises(InvalidQualityError):
            ImageCodecs.validate_quality(quality)

    def test_quality_error_is_value_error(self):
        with pytest.raises(ValueError):
            ImageCodecs.validate_quality(101)

    def test_invalid_quality_checked_before_io(self, random_image, tmp_path):
        target = tmp_path / "out.jpg"
        with pytest.raises(InvalidQualityError):
            ImageCodecs.save_image(random_image, str(target), 101)
        assert not target.exists()


class TestEncoding:
    """Test in-memory encoding and saving"""

    def test_encode_jpeg(self, random_image):
        data = ImageCodecs.encode(random_image, "jpg", 80)
        with Image.open(io.BytesIO(data)) as decoded:
            assert decoded.format == "JPEG"
            assert decoded.mode == "RGB"
            assert decoded.size == (40, 30)

    def test_encode_by_mime(self, random_image):
        data = ImageCodecs.encode(random_image, "image/png")
        with Image.open(io.BytesIO(data)) as decoded:
            assert decoded.format == "PNG"
            assert decoded.mode == "RGBA"

    def test_lower_quality_is_smaller(self, random_image):
        low = ImageCodecs.encode(random_image, ".jpg", 5)
        high = ImageCodecs.encode(random_image, ".jpg", 95)
        assert len(low) < len(high)

    def test_save_by_extension(self, random_image, tmp_path):
        target = tmp_path / "out.jpeg"
        assert ImageCodecs.save_image(random_image, str(target), 70) == "JPEG"
        with Image.open(target) as saved:
            assert saved.format == "JPEG"

    def test_save_unknown_extension_falls_back_to_png(self, random_image, tmp_path):
        target = tmp_path / "out.unknownext"
        assert ImageCodecs.save_image(random_image, str(target), 85) == "PNG"
        with Image.open(target) as saved:
            assert saved.format == "PNG"

    @pytest.mark.parametrize("extension", ["xbm", "pcx", "msp"])
    def test_writer_without_rgba_support(self, random_image, extension):
        with pytest.raises(InvalidImageError, match="Cannot encode image"):
            ImageCodecs.encode(random_image, extension, 80)

    def test_save_writer_without_rgba_support(self, random_image, tmp_path):
        with pytest.raises(InvalidImageError):
            ImageCodecs.save_image(random_image, str(tmp_path / "out.pcx"), 80)

    def test_encode_numpy_quality(self, random_image):
        data = ImageCodecs.encode(random_image, "jpg", np.int64(60))
        with Image.open(io.BytesIO(data)) as decoded:
            assert decoded.format == "JPEG"
