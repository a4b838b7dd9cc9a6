"""
API Integration Tests for Color and Encoding Endpoints
"""

import base64
import io

import numpy as np
import pytest
from PIL import Image


class TestColorAPI:
    """Integration tests for the color pipeline endpoints"""

    @pytest.fixture
    def payload(self, solid_image, png_base64):
        return png_base64(solid_image(8, 6, (10, 100, 200, 255)))

    def test_adjust_invert(self, client, payload, decode_png):
        response = client.post("/api/color/adjust", json={"image_base64": payload, "invert": True})

        assert response.status_code == 200
        result = decode_png(response.json()["image_base64"])
        assert (result == (245, 155, 55, 255)).all()

    def test_adjust_no_operators_is_identity(self, client, payload, decode_png, solid_image):
        response = client.post("/api/color/adjust", json={"image_base64": payload})

        assert response.status_code == 200
        np.testing.assert_array_equal(
            decode_png(response.json()["image_base64"]), solid_image(8, 6, (10, 100, 200, 255))
        )

    def test_adjust_brightness_underflow(self, client, payload, decode_png):
        response = client.post(
            "/api/color/adjust", json={"image_base64": payload, "brightness": -300}
        )

        assert response.status_code == 200
        assert (decode_png(response.json()["image_base64"]) == (1, 1, 1, 255)).all()

    def test_adjust_pipeline_order(self, client, payload, decode_png):
        # Greyscale runs before invert: 255 - int(0.3*10 + 0.59*100 + 0.11*200)
        response = client.post(
            "/api/color/adjust",
            json={"image_base64": payload, "greyscale": True, "invert": True},
        )

        assert response.status_code == 200
        assert (decode_png(response.json()["image_base64"])[:, :, 0] == 255 - 84).all()

    def test_adjust_rejects_non_positive_gamma(self, client, payload):
        response = client.post(
            "/api/color/adjust",
            json={"image_base64": payload, "gamma": {"red": 0, "green": 1, "blue": 1}},
        )
        assert response.status_code == 422

    def test_mask(self, client, payload, solid_image, png_base64, decode_png):
        mask = png_base64(solid_image(4, 3, (0, 0, 0, 100)))
        response = client.post(
            "/api/color/mask", json={"image_base64": payload, "mask_base64": mask}
        )

        assert response.status_code == 200
        result = decode_png(response.json()["image_base64"])
        assert (result[:3, :4, 3] == 100).all()
        assert (result[3:, :, 3] == 0).all()

    def test_greyscale_mask(self, client, payload, solid_image, png_base64, decode_png):
        mask = png_base64(solid_image(8, 6, (60, 60, 60, 255)))
        response = client.post(
            "/api/color/mask",
            json={"image_base64": payload, "mask_base64": mask, "greyscale": True, "invert": True},
        )

        assert response.status_code == 200
        assert (decode_png(response.json()["image_base64"])[:, :, 3] == 195).all()

    def test_overlay(self, client, solid_image, png_base64, decode_png):
        under = png_base64(solid_image(5, 5, (200, 100, 50, 255)))
        over = png_base64(solid_image(5, 5, (100, 100, 100, 255)))
        response = client.post(
            "/api/color/overlay",
            json={"image_base64": under, "overlay_base64": over, "blend_mode": "multiply", "amount": 100},
        )

        assert response.status_code == 200
        assert (decode_png(response.json()["image_base64"]) == (78, 39, 19, 255)).all()

    def test_overlay_amount_validated(self, client, payload):
        response = client.post(
            "/api/color/overlay",
            json={"image_base64": payload, "overlay_base64": payload, "amount": 101},
        )
        assert response.status_code == 422

    def test_overlay_unknown_mode(self, client, payload):
        response = client.post(
            "/api/color/overlay",
            json={"image_base64": payload, "overlay_base64": payload, "blend_mode": "screen"},
        )
        assert response.status_code == 422


class TestEncodeAPI:
    """Integration tests for the encode endpoint"""

    @pytest.fixture
    def payload(self, random_image, png_base64):
        return png_base64(random_image)

    def test_encode_jpeg(self, client, payload):
        response = client.post(
            "/api/image/encode", json={"image_base64": payload, "extension": "jpg", "quality": 70}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "JPEG"
        raw = base64.b64decode(data["data_base64"])
        assert data["size_bytes"] == len(raw)
        with Image.open(io.BytesIO(raw)) as decoded:
            assert decoded.format == "JPEG"

    def test_encode_by_mime_type(self, client, payload):
        response = client.post(
            "/api/image/encode", json={"image_base64": payload, "extension": "image/png"}
        )

        assert response.status_code == 200
        assert response.json()["format"] == "PNG"

    def test_encode_unknown_extension_uses_png(self, client, payload):
        response = client.post(
            "/api/image/encode", json={"image_base64": payload, "extension": ".nope"}
        )

        assert response.status_code == 200
        assert response.json()["format"] == "PNG"

    @pytest.mark.parametrize("quality", [-1, 101])
    def test_encode_invalid_quality(self, client, payload, quality):
        response = client.post(
            "/api/image/encode",
            json={"image_base64": payload, "extension": "jpg", "quality": quality},
        )

        assert response.status_code == 400
        assert "quality" in response.json()["detail"]

    def test_encode_writer_without_rgba_support(self, client, payload):
        response = client.post(
            "/api/image/encode",
            json={"image_base64": payload, "extension": "xbm", "quality": 80},
        )

        assert response.status_code == 400
        assert "XBM" in response.json()["detail"]

    def test_encode_default_quality(self, client, payload):
        response = client.post(
            "/api/image/encode", json={"image_base64": payload, "extension": "jpg"}
        )

        assert response.status_code == 200
        assert response.json()["format"] == "JPEG"
