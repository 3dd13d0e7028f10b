"""
Tests for the image generation pipeline
"""

import base64
import unittest
import sys
import os
from unittest.mock import patch

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from imageproxy.config import Settings
from imageproxy.image.service import (
    INVALID_DEFAULT_MODEL_ERROR,
    MISSING_API_KEY_ERROR,
    MISSING_FIELDS_ERROR,
    MISSING_PROMPT_ERROR,
    generate_image,
    to_data_url,
)
from imageproxy.image.types import UpstreamFailure, UpstreamSuccess
from tests.helpers import JPEG_BYTES

SEND_PATH = "imageproxy.image.service.send_inference_request"


class TestGenerateImage(unittest.TestCase):
    """Test validation order, model resolution and result translation"""

    def setUp(self):
        self.settings = Settings(api_key="hf_test")

    @patch(SEND_PATH)
    def test_success_returns_data_url(self, mock_send):
        mock_send.return_value = UpstreamSuccess(content=JPEG_BYTES)

        result = generate_image("a lighthouse", "hf-sdxl-base", self.settings)

        self.assertTrue(result.ok)
        self.assertEqual(
            result.body,
            {"imageUrl": "data:image/jpeg;base64," + base64.b64encode(JPEG_BYTES).decode()},
        )

    @patch(SEND_PATH)
    def test_passes_resolved_model_and_settings(self, mock_send):
        mock_send.return_value = UpstreamSuccess(content=JPEG_BYTES)
        settings = Settings(api_key="hf_test", inference_base_url="http://localhost:9000/models")

        generate_image("a lighthouse", "hf-z-image-turbo", settings)

        args, kwargs = mock_send.call_args
        self.assertEqual(args[0], "a lighthouse")
        self.assertEqual(args[1].model_id, "hf-z-image-turbo")
        self.assertEqual(kwargs, {"api_key": "hf_test", "base_url": "http://localhost:9000/models"})

    @patch(SEND_PATH)
    def test_missing_prompt(self, mock_send):
        result = generate_image(None, "hf-sdxl-base", self.settings)

        self.assertEqual(result.status_code, 400)
        self.assertEqual(result.body, {"error": MISSING_FIELDS_ERROR})
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_empty_prompt(self, mock_send):
        result = generate_image("", "hf-sdxl-base", self.settings)

        self.assertEqual(result.status_code, 400)
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_missing_model_id(self, mock_send):
        result = generate_image("a lighthouse", None, self.settings)

        self.assertEqual(result.status_code, 400)
        self.assertIn("modelId", result.body["error"])
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_invalid_model_id(self, mock_send):
        result = generate_image("a lighthouse", "midjourney-v6", self.settings)

        self.assertEqual(result.status_code, 400)
        self.assertEqual(result.body, {"error": "Invalid image model ID: midjourney-v6"})
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_missing_credential(self, mock_send):
        result = generate_image("a lighthouse", "hf-sdxl-base", Settings(api_key=None))

        self.assertEqual(result.status_code, 500)
        self.assertEqual(result.body, {"error": MISSING_API_KEY_ERROR})
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_input_checked_before_credential(self, mock_send):
        result = generate_image(None, None, Settings(api_key=None))

        self.assertEqual(result.status_code, 400)
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_credential_checked_before_model(self, mock_send):
        result = generate_image("a lighthouse", "unknown", Settings(api_key=None))

        self.assertEqual(result.status_code, 500)
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_upstream_failure(self, mock_send):
        mock_send.return_value = UpstreamFailure(status_code=503, message="model loading")

        with self.assertLogs("imageproxy.image.service", level="ERROR") as logs:
            result = generate_image("a lighthouse", "hf-sdxl-base", self.settings)

        self.assertEqual(result.status_code, 500)
        self.assertEqual(result.body, {"error": "model loading"})
        self.assertIn("hf-sdxl-base", logs.output[0])


class TestSingleModelVariant(unittest.TestCase):
    """Test behaviour when a default model id is configured"""

    def setUp(self):
        self.settings = Settings(api_key="hf_test", default_model_id="hf-sdxl-base")

    @patch(SEND_PATH)
    def test_model_id_defaults(self, mock_send):
        mock_send.return_value = UpstreamSuccess(content=JPEG_BYTES)

        result = generate_image("a lighthouse", None, self.settings)

        self.assertTrue(result.ok)
        self.assertEqual(mock_send.call_args[0][1].model_id, "hf-sdxl-base")

    @patch(SEND_PATH)
    def test_explicit_model_id_wins(self, mock_send):
        mock_send.return_value = UpstreamSuccess(content=JPEG_BYTES)

        generate_image("a lighthouse", "hf-z-image-turbo", self.settings)

        self.assertEqual(mock_send.call_args[0][1].model_id, "hf-z-image-turbo")

    @patch(SEND_PATH)
    def test_unknown_default_is_configuration_error(self, mock_send):
        settings = Settings(api_key="hf_test", default_model_id="hf-sdxl-typo")

        with self.assertLogs("imageproxy.image.service", level="ERROR") as logs:
            result = generate_image("a lighthouse", None, settings)

        self.assertEqual(result.status_code, 500)
        self.assertEqual(
            result.body,
            {"error": f"{INVALID_DEFAULT_MODEL_ERROR}: hf-sdxl-typo"},
        )
        self.assertIn("hf-sdxl-typo", logs.output[0])
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_unknown_explicit_id_with_default_is_client_error(self, mock_send):
        result = generate_image("a lighthouse", "midjourney-v6", self.settings)

        self.assertEqual(result.status_code, 400)
        self.assertEqual(result.body, {"error": "Invalid image model ID: midjourney-v6"})
        mock_send.assert_not_called()

    @patch(SEND_PATH)
    def test_missing_prompt_message(self, mock_send):
        result = generate_image("", None, self.settings)

        self.assertEqual(result.status_code, 400)
        self.assertEqual(result.body, {"error": MISSING_PROMPT_ERROR})
        mock_send.assert_not_called()


class TestDataUrl(unittest.TestCase):

    def test_fixed_jpeg_mime_type(self):
        png_bytes = b"\x89PNG\r\n\x1a\n"
        self.assertTrue(to_data_url(png_bytes).startswith("data:image/jpeg;base64,"))

    def test_encoding(self):
        self.assertEqual(to_data_url(b"abc"), "data:image/jpeg;base64,YWJj")

    def test_empty_content(self):
        self.assertEqual(to_data_url(b""), "data:image/jpeg;base64,")


if __name__ == "__main__":
    unittest.main()
