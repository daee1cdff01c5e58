"""
Error taxonomy for the Cartoon Generator.

Every failure the core can produce is a CartoonGeneratorError subclass, so a
stage boundary can catch one base type and still report the specific kind.
"""

from typing import Optional


class CartoonGeneratorError(Exception):
    """Base class for all workflow errors."""


class ValidationError(CartoonGeneratorError):
    """Required input is missing or malformed (e.g. an empty prompt)."""


class MissingInputError(ValidationError):
    """A pipeline stage was invoked without its upstream artifact."""


class ProviderError(CartoonGeneratorError):
    """A provider call failed or returned a malformed/empty response."""


class NoPromptsReturnedError(ProviderError):
    """The image-prompt completion contained no numbered prompt lines."""


class JobFailedError(CartoonGeneratorError):
    """The remote prediction reported failed or canceled."""

    def __init__(self, message: str, prediction_id: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.prediction_id = prediction_id
        self.detail = detail


class UnknownStatusError(CartoonGeneratorError):
    """The provider reported a status string we do not recognise."""

    def __init__(self, status: str):
        super().__init__(f"Unknown prediction status: {status}")
        self.status = status


class PollTimeoutError(CartoonGeneratorError):
    """The attempt ceiling was reached before a terminal status."""

    def __init__(self, prediction_id: str, attempts: int):
        super().__init__(f"Polling timed out after {attempts} attempts for prediction {prediction_id}")
        self.prediction_id = prediction_id
        self.attempts = attempts


class InvalidTransitionError(CartoonGeneratorError):
    """A wizard action is not allowed from the current stage."""


class NotConfiguredError(CartoonGeneratorError):
    """A stage needs a provider whose credentials are not configured."""
