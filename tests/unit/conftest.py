"""Pytest fixtures for unit tests.

Providers are replaced with scripted fakes so no test reaches the network.
"""

from types import SimpleNamespace
from typing import Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from cartoon_generator.api import dependencies
from cartoon_generator.api.main import app
from cartoon_generator.api.services.session_store import SessionStore
from cartoon_generator.core.errors import ProviderError
from cartoon_generator.core.modules import (
    ComicWizard,
    ImageGenerator,
    JobPoller,
    PredictionSubmitter,
    PromptPipeline,
)
from cartoon_generator.core.types import PredictionSnapshot

TEST_MODEL_VERSION = "test-version-123"


class FakeInferenceProvider:
    """
    Scripted inference provider.

    Every get() returns the next scripted (status, output, error) tuple; the
    last one repeats once the script runs out. Prompts listed in
    fail_on_prompts make create() raise ProviderError.
    """

    def __init__(self, statuses=None, prediction_id: str = "pred-1", fail_on_prompts=()):
        self.statuses = list(statuses or [("succeeded", ["https://img.test/1.webp"], None)])
        self.prediction_id = prediction_id
        self.fail_on_prompts = set(fail_on_prompts)
        self.create_calls: list[tuple[str, dict]] = []
        self.get_calls: list[str] = []
        self._index = 0

    async def create(self, version, input):
        self.create_calls.append((version, input))
        if input["prompt"] in self.fail_on_prompts:
            raise ProviderError(f"create failed for {input['prompt']}")
        return PredictionSnapshot(id=self.prediction_id, status="starting")

    async def get(self, prediction_id):
        self.get_calls.append(prediction_id)
        status, output, error = self.statuses[min(self._index, len(self.statuses) - 1)]
        self._index += 1
        return PredictionSnapshot(id=prediction_id, status=status, output=list(output or []), error=error)


class PerPromptInferenceProvider(FakeInferenceProvider):
    """Succeeds immediately with one image URL derived from each prompt."""

    async def create(self, version, input):
        await super().create(version, input)
        return PredictionSnapshot(id=f"pred-{len(self.create_calls)}", status="starting")

    async def get(self, prediction_id):
        self.get_calls.append(prediction_id)
        return PredictionSnapshot(
            id=prediction_id,
            status="succeeded",
            output=[f"https://img.test/{prediction_id}.webp"],
        )


def make_completion(text: Optional[str]):
    """Build an OpenAI-shaped completion; None means no choices."""
    if text is None:
        return SimpleNamespace(choices=[])
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


class FakeCompletionProvider:
    """Returns scripted completion texts in order and records every call."""

    def __init__(self, *texts):
        self.texts = list(texts)
        self.calls: list[dict] = []

    async def complete(self, model, messages, max_tokens):
        self.calls.append({"model": model, "messages": messages, "max_tokens": max_tokens})
        text = self.texts.pop(0) if self.texts else None
        return make_completion(text)


PROMPTS_TEXT = """Here are your prompts:

1. Create a cartoon scene of Sam waving, saying "Hi!" in TOK style
2. Create a cartoon scene of Sam at the beach, saying "Waves!" in TOK style
3. Create a cartoon scene of Sam going home, saying "Bye!" in TOK style"""


@pytest.fixture
def no_sleep():
    """Async sleep replacement that records requested delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def fake_inference():
    return PerPromptInferenceProvider()


@pytest.fixture
def fake_completion():
    return FakeCompletionProvider(
        "Sam is a cheerful boy with curly hair.",
        "Sam went to the beach and built a sandcastle.",
        PROMPTS_TEXT,
    )


@pytest.fixture
def image_generator(fake_inference, no_sleep):
    return ImageGenerator(
        PredictionSubmitter(fake_inference, model_version=TEST_MODEL_VERSION),
        JobPoller(fake_inference, poll_interval=1.0, max_attempts=5, sleep=no_sleep),
    )


@pytest.fixture
def mock_uploader():
    uploader = AsyncMock()
    uploader.upload = AsyncMock(return_value="https://media.test/photo.png")
    return uploader


@pytest.fixture
def mock_exporter():
    exporter = AsyncMock()
    exporter.export = AsyncMock(return_value=b"%PDF-1.3 fake")
    return exporter


@pytest.fixture
def wizard(fake_completion, image_generator, mock_uploader, mock_exporter):
    return ComicWizard(PromptPipeline(fake_completion), image_generator, mock_uploader, mock_exporter)


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
def client(fake_completion, image_generator, mock_uploader, mock_exporter, session_store):
    """TestClient with every provider replaced by fakes."""
    pipeline = PromptPipeline(fake_completion)

    app.dependency_overrides[dependencies.get_prompt_pipeline] = lambda: pipeline
    app.dependency_overrides[dependencies.get_image_generator] = lambda: image_generator
    app.dependency_overrides[dependencies.get_optional_prompt_pipeline] = lambda: pipeline
    app.dependency_overrides[dependencies.get_optional_image_generator] = lambda: image_generator
    app.dependency_overrides[dependencies.get_uploader] = lambda: mock_uploader
    app.dependency_overrides[dependencies.get_optional_uploader] = lambda: mock_uploader
    app.dependency_overrides[dependencies.get_exporter] = lambda: mock_exporter
    app.dependency_overrides[dependencies.get_session_store] = lambda: session_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
