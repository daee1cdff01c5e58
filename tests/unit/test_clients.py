"""Unit tests for the Replicate and OpenAI provider adapters."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from replicate.exceptions import ReplicateError

from cartoon_generator.core.clients import (
    OpenAICompletionProvider,
    ReplicateInferenceProvider,
    _normalize_output,
)
from cartoon_generator.core.errors import ProviderError


def make_prediction(**overrides):
    values = {"id": "pred-1", "status": "starting", "output": None, "error": None}
    values.update(overrides)
    return SimpleNamespace(**values)


def make_replicate_client(create=None, get=None):
    client = MagicMock()
    client.predictions.async_create = AsyncMock(return_value=create)
    client.predictions.async_get = AsyncMock(return_value=get)
    return client


class TestNormalizeOutput:

    def test_none(self):
        assert _normalize_output(None) == []

    def test_single_string(self):
        assert _normalize_output("https://img.test/a.webp") == ["https://img.test/a.webp"]

    def test_list_of_strings(self):
        assert _normalize_output(["a", "b"]) == ["a", "b"]

    def test_file_output_objects(self):
        outputs = [SimpleNamespace(url="https://img.test/1.webp"), SimpleNamespace(url="https://img.test/2.webp")]

        assert _normalize_output(outputs) == ["https://img.test/1.webp", "https://img.test/2.webp"]


class TestReplicateInferenceProvider:

    @pytest.mark.asyncio
    async def test_create_passes_version_and_input(self):
        client = make_replicate_client(create=make_prediction())
        provider = ReplicateInferenceProvider(client=client)

        snapshot = await provider.create("v1", {"prompt": "p"})

        client.predictions.async_create.assert_awaited_once_with(version="v1", input={"prompt": "p"})
        assert snapshot.id == "pred-1"
        assert snapshot.status == "starting"
        assert snapshot.output == []

    @pytest.mark.asyncio
    async def test_get_returns_snapshot(self):
        client = make_replicate_client(
            get=make_prediction(status="failed", error="out of memory"),
        )
        provider = ReplicateInferenceProvider(client=client)

        snapshot = await provider.get("pred-1")

        assert snapshot.status == "failed"
        assert snapshot.error == "out of memory"

    @pytest.mark.asyncio
    async def test_missing_id_becomes_empty_string(self):
        provider = ReplicateInferenceProvider(client=make_replicate_client(create=make_prediction(id=None)))

        snapshot = await provider.create("v1", {"prompt": "p"})

        assert snapshot.id == ""

    @pytest.mark.asyncio
    async def test_replicate_error_wrapped(self):
        client = make_replicate_client()
        client.predictions.async_create.side_effect = ReplicateError("invalid version")
        provider = ReplicateInferenceProvider(client=client)

        with pytest.raises(ProviderError, match="Failed to create prediction"):
            await provider.create("v1", {"prompt": "p"})

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self):
        client = make_replicate_client()
        client.predictions.async_get.side_effect = httpx.ConnectError("connection refused")
        provider = ReplicateInferenceProvider(client=client)

        with pytest.raises(ProviderError, match="pred-1"):
            await provider.get("pred-1")

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("REPLICATE_API_TOKEN", raising=False)
        monkeypatch.delenv("REPLICATE_API_KEY", raising=False)

        with pytest.raises(ValueError, match="REPLICATE_API_TOKEN"):
            ReplicateInferenceProvider()


class TestOpenAICompletionProvider:

    @pytest.mark.asyncio
    async def test_complete_calls_chat_completions(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value="response")
        provider = OpenAICompletionProvider(client=client)
        messages = [{"role": "user", "content": "hi"}]

        result = await provider.complete(model="gpt-4o", messages=messages, max_tokens=300)

        assert result == "response"
        client.chat.completions.create.assert_awaited_once_with(
            model="gpt-4o", messages=messages, max_tokens=300
        )

    @pytest.mark.asyncio
    async def test_api_error_wrapped_without_retry(self):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        error = openai.BadRequestError(
            "bad request",
            response=httpx.Response(400, request=request),
            body=None,
        )
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=error)
        provider = OpenAICompletionProvider(client=client)

        with pytest.raises(ProviderError, match="Completion request failed"):
            await provider.complete(model="gpt-4o", messages=[], max_tokens=10)

        assert client.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_transient_errors_retried(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(
            side_effect=[ConnectionError("reset"), ConnectionError("reset"), "response"]
        )
        provider = OpenAICompletionProvider(client=client)

        with patch("asyncio.sleep", new=AsyncMock()):
            result = await provider.complete(model="gpt-4o", messages=[], max_tokens=10)

        assert result == "response"
        assert client.chat.completions.create.await_count == 3

    @pytest.mark.asyncio
    async def test_retries_exhausted(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=TimeoutError("slow"))
        provider = OpenAICompletionProvider(client=client)

        with patch("asyncio.sleep", new=AsyncMock()):
            with pytest.raises(ProviderError):
                await provider.complete(model="gpt-4o", messages=[], max_tokens=10)

        assert client.chat.completions.create.await_count == 3

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            OpenAICompletionProvider()
