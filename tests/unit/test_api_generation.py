"""Tests for the stateless /upload-image, /generate-prompt and /generate-image endpoints."""

import pytest
from fastapi.testclient import TestClient

from cartoon_generator.api import dependencies
from cartoon_generator.api.main import app
from cartoon_generator.api.models import OutputFormat
from cartoon_generator.config import IMAGE_DEFAULTS
from cartoon_generator.core.errors import ProviderError, ValidationError
from cartoon_generator.core.modules import ImageGenerator, JobPoller, PredictionSubmitter
from tests.unit.conftest import TEST_MODEL_VERSION, FakeInferenceProvider


def override_images(provider, no_sleep, max_attempts: int = 3) -> None:
    """Point /generate-image at a scripted inference provider."""
    generator = ImageGenerator(
        PredictionSubmitter(provider, model_version=TEST_MODEL_VERSION),
        JobPoller(provider, poll_interval=1.0, max_attempts=max_attempts, sleep=no_sleep),
    )
    app.dependency_overrides[dependencies.get_image_generator] = lambda: generator


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestUploadImage:
    """Tests for POST /upload-image."""

    def test_upload_success(self, client, mock_uploader):
        response = client.post("/upload-image", files={"image": ("me.jpg", b"jpeg-bytes", "image/jpeg")})

        assert response.status_code == 200
        assert response.json() == {"url": "https://media.test/photo.png"}
        mock_uploader.upload.assert_awaited_once_with("me.jpg", b"jpeg-bytes", "image/jpeg")

    def test_missing_file_is_400(self, client, mock_uploader):
        response = client.post("/upload-image")

        assert response.status_code == 400
        assert response.json()["detail"] == "No image file uploaded."
        mock_uploader.upload.assert_not_called()

    def test_unsupported_type_is_400(self, client, mock_uploader):
        mock_uploader.upload.side_effect = ValidationError("Unsupported file type.")

        response = client.post("/upload-image", files={"image": ("me.bmp", b"bmp", "image/bmp")})

        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported file type."

    def test_too_large_is_413(self, client, mock_uploader):
        from cartoon_generator.api.config import MAX_UPLOAD_BYTES

        response = client.post(
            "/upload-image",
            files={"image": ("big.png", b"0" * (MAX_UPLOAD_BYTES + 1), "image/png")},
        )

        assert response.status_code == 413
        mock_uploader.upload.assert_not_called()

    def test_media_host_failure_is_502(self, client, mock_uploader):
        mock_uploader.upload.side_effect = ProviderError("Media upload failed with status 500")

        response = client.post("/upload-image", files={"image": ("me.png", b"png", "image/png")})

        assert response.status_code == 502

    def test_unconfigured_uploader_is_503(self):
        def unconfigured():
            raise dependencies._not_configured(ValueError("Cloudinary credentials not found"))

        app.dependency_overrides[dependencies.get_uploader] = unconfigured
        try:
            with TestClient(app) as test_client:
                response = test_client.post("/upload-image", files={"image": ("me.png", b"png", "image/png")})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert "Cloudinary" in response.json()["detail"]


class TestGeneratePrompt:
    """Tests for POST /generate-prompt."""

    def test_character(self, client, fake_completion):
        response = client.post(
            "/generate-prompt",
            json={"type": "character", "imageUrl": "https://media.test/me.png"},
        )

        assert response.status_code == 200
        assert response.json() == {"description": "Sam is a cheerful boy with curly hair."}
        assert fake_completion.calls[0]["max_tokens"] == 300

    def test_story(self, client, fake_completion):
        fake_completion.texts.pop(0)

        response = client.post(
            "/generate-prompt",
            json={"type": "story", "event": "beach day", "characterDescription": "Sam"},
        )

        assert response.status_code == 200
        assert response.json() == {"story": "Sam went to the beach and built a sandcastle."}
        assert "Sam" in fake_completion.calls[0]["messages"][1]["content"]

    def test_image_prompts(self, client, fake_completion):
        fake_completion.texts[:2] = []

        response = client.post("/generate-prompt", json={"type": "image-prompts", "story": "A story"})

        assert response.status_code == 200
        prompts = response.json()["prompts"]
        assert len(prompts) == 3
        assert all(p.endswith("in TOK style") for p in prompts)

    def test_invalid_type_is_400(self, client, fake_completion):
        response = client.post("/generate-prompt", json={"type": "poem", "event": "x"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request type."
        assert fake_completion.calls == []

    def test_missing_input_is_400(self, client, fake_completion):
        response = client.post("/generate-prompt", json={"type": "story"})

        assert response.status_code == 400
        assert fake_completion.calls == []

    def test_no_prompts_returned_is_502(self, client, fake_completion):
        fake_completion.texts[:] = ["Sorry, I can't do that."]

        response = client.post("/generate-prompt", json={"type": "image-prompts", "story": "A story"})

        assert response.status_code == 502


class TestGenerateImage:
    """Tests for POST /generate-image."""

    def test_success(self, client, fake_inference):
        response = client.post("/generate-image", json={"prompt": "a cat in TOK style"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["status"] == "succeeded"
        assert data["images"] == ["https://img.test/pred-1.webp"]
        assert data["prediction_id"] == "pred-1"

        _, payload = fake_inference.create_calls[0]
        assert payload["width"] == 1024
        assert payload["output_format"] == "webp"

    def test_request_options_forwarded(self, client, fake_inference):
        response = client.post(
            "/generate-image",
            json={
                "prompt": "a cat",
                "output_format": "png",
                "width": 512,
                "seed": 7,
                "subject_locator": "https://media.test/me.png",
            },
        )

        assert response.status_code == 200
        _, payload = fake_inference.create_calls[0]
        assert payload["output_format"] == "png"
        assert payload["width"] == 512
        assert payload["seed"] == 7
        assert payload["image"] == "https://media.test/me.png"

    def test_missing_prompt_is_400(self, client, fake_inference):
        response = client.post("/generate-image", json={})

        assert response.status_code == 400
        assert fake_inference.create_calls == []

    def test_invalid_output_format_is_422(self, client):
        response = client.post("/generate-image", json={"prompt": "p", "output_format": "bmp"})

        assert response.status_code == 422

    @pytest.mark.parametrize("output_format", [f.value for f in OutputFormat])
    def test_every_output_format_is_accepted(self, client, fake_inference, output_format):
        response = client.post("/generate-image", json={"prompt": "p", "output_format": output_format})

        assert response.status_code == 200
        assert fake_inference.create_calls[0][1]["output_format"] == output_format

    def test_default_output_format_is_an_accepted_format(self):
        assert IMAGE_DEFAULTS["output_format"] in {f.value for f in OutputFormat}

    def test_failed_prediction_body(self, client, no_sleep):
        override_images(FakeInferenceProvider(statuses=[("failed", [], "NSFW")]), no_sleep)

        response = client.post("/generate-image", json={"prompt": "p"})

        assert response.status_code == 502
        data = response.json()
        assert data["success"] is False
        assert data["status"] == "failed"
        assert data["error"] == "Failed to generate image"
        assert "NSFW" in data["details"]
        assert "timestamp" in data
        assert "images" not in data

    def test_timeout_is_504(self, client, no_sleep):
        provider = FakeInferenceProvider(statuses=[("processing", [], None)])
        override_images(provider, no_sleep, max_attempts=3)

        response = client.post("/generate-image", json={"prompt": "p"})

        assert response.status_code == 504
        assert response.json()["status"] == "failed"
        assert len(provider.get_calls) == 3

    def test_unknown_status_is_failure(self, client, no_sleep):
        override_images(FakeInferenceProvider(statuses=[("weird", [], None)]), no_sleep)

        response = client.post("/generate-image", json={"prompt": "p"})

        assert response.status_code == 502
        assert "Unknown prediction status" in response.json()["details"]
