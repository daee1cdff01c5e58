"""
Submit image generation requests to the inference provider.

A submission is a single creation call: no retry happens here, so a failed
create is reported to the caller immediately.
"""

import logging
from typing import Any, Optional

from cartoon_generator.config import IMAGE_DEFAULTS, get_model_version
from ..clients import InferenceProvider
from ..errors import ProviderError, ValidationError
from ..types import GenerationRequest

logger = logging.getLogger(__name__)


def build_prediction_input(
    request: GenerationRequest,
    defaults: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Build the provider input payload, filling every unset field from defaults.

    Optional fields without a value (seed, subject image) are left out of the
    payload entirely so the model applies its own behaviour.
    """
    defaults = {**IMAGE_DEFAULTS, **(defaults or {})}

    def pick(name: str):
        value = getattr(request, name)
        return defaults[name] if value is None else value

    payload = {
        "prompt": request.prompt,
        "num_outputs": pick("num_outputs"),
        "width": pick("width"),
        "height": pick("height"),
        "output_format": pick("output_format"),
        "output_quality": pick("output_quality"),
        "disable_safety_checker": pick("disable_safety_checker"),
    }

    seed = pick("seed")
    if seed is not None:
        payload["seed"] = seed

    subject = pick("subject_locator")
    if subject:
        payload["image"] = subject

    return payload


class PredictionSubmitter:
    """Validates a GenerationRequest and creates a prediction for it."""

    def __init__(
        self,
        provider: InferenceProvider,
        model_version: Optional[str] = None,
        defaults: Optional[dict[str, Any]] = None,
    ):
        self.provider = provider
        self.model_version = model_version or get_model_version()
        self.defaults = defaults

    async def submit(self, request: GenerationRequest) -> str:
        """
        Submit a request and return the prediction id (the job handle).

        Raises:
            ValidationError: If the prompt is empty
            ProviderError: If the provider fails or returns no prediction id
        """
        if not request.prompt or not request.prompt.strip():
            raise ValidationError("Prompt is required")

        payload = build_prediction_input(request, self.defaults)
        prediction = await self.provider.create(self.model_version, payload)

        if not prediction.id:
            raise ProviderError("Prediction ID not returned from inference provider")

        logger.info(
            f"Prediction created with ID: {prediction.id}",
            extra={"prediction_id": prediction.id},
        )
        return prediction.id
