"""
Thin adapters over the vendor SDKs.

The rest of the core only talks to these three interfaces, which keeps the
vendor response shapes (and vendor exceptions) out of the workflow logic and
lets tests swap in fakes.
"""

import logging
from typing import Any, Optional, Protocol

import httpx
import openai
from replicate.exceptions import ReplicateError

from cartoon_generator.config import get_completion_client, get_inference_client, llm_retry
from .errors import ProviderError
from .types import PredictionSnapshot

logger = logging.getLogger(__name__)


class InferenceProvider(Protocol):
    async def create(self, version: str, input: dict[str, Any]) -> PredictionSnapshot: ...

    async def get(self, prediction_id: str) -> PredictionSnapshot: ...


class CompletionProvider(Protocol):
    async def complete(self, model: str, messages: list[dict[str, Any]], max_tokens: int) -> Any: ...


def _normalize_output(output: Any) -> list[str]:
    """Flatten a Replicate output value into a list of URL strings."""
    if output is None:
        return []
    if isinstance(output, (list, tuple)):
        items = output
    else:
        items = [output]
    # FileOutput objects expose .url, plain JSON outputs are strings
    return [getattr(item, "url", None) or str(item) for item in items]


class ReplicateInferenceProvider:
    """Inference provider backed by the Replicate predictions API."""

    def __init__(self, client=None):
        self.client = client or get_inference_client()

    def _snapshot(self, prediction) -> PredictionSnapshot:
        return PredictionSnapshot(
            id=prediction.id or "",
            status=prediction.status,
            output=_normalize_output(prediction.output),
            error=str(prediction.error) if prediction.error else None,
        )

    async def create(self, version: str, input: dict[str, Any]) -> PredictionSnapshot:
        try:
            prediction = await self.client.predictions.async_create(version=version, input=input)
        except (ReplicateError, httpx.HTTPError) as e:
            raise ProviderError(f"Failed to create prediction: {e}") from e
        return self._snapshot(prediction)

    async def get(self, prediction_id: str) -> PredictionSnapshot:
        try:
            prediction = await self.client.predictions.async_get(prediction_id)
        except (ReplicateError, httpx.HTTPError) as e:
            raise ProviderError(f"Failed to fetch prediction {prediction_id}: {e}") from e
        return self._snapshot(prediction)


class OpenAICompletionProvider:
    """Completion provider backed by OpenAI chat completions."""

    def __init__(self, client: Optional[openai.AsyncOpenAI] = None):
        self.client = client or get_completion_client()

    @llm_retry
    async def _create(self, model: str, messages: list[dict[str, Any]], max_tokens: int):
        return await self.client.chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
        )

    async def complete(self, model: str, messages: list[dict[str, Any]], max_tokens: int):
        try:
            return await self._create(model, messages, max_tokens)
        except (openai.APIError, ConnectionError, TimeoutError) as e:
            raise ProviderError(f"Completion request failed: {e}") from e
