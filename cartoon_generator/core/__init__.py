# Cartoon Generator - Core Domain

# Re-export types for convenient access
from .types import (
    JobStatus,
    GenerationRequest,
    PredictionSnapshot,
    JobResult,
    WizardStage,
    WizardAction,
    WizardState,
    StageResult,
)
from .errors import (
    CartoonGeneratorError,
    ValidationError,
    MissingInputError,
    ProviderError,
    NoPromptsReturnedError,
    JobFailedError,
    UnknownStatusError,
    PollTimeoutError,
    InvalidTransitionError,
    NotConfiguredError,
)

__all__ = [
    # Types
    "JobStatus",
    "GenerationRequest",
    "PredictionSnapshot",
    "JobResult",
    "WizardStage",
    "WizardAction",
    "WizardState",
    "StageResult",
    # Errors
    "CartoonGeneratorError",
    "ValidationError",
    "MissingInputError",
    "ProviderError",
    "NoPromptsReturnedError",
    "JobFailedError",
    "UnknownStatusError",
    "PollTimeoutError",
    "InvalidTransitionError",
    "NotConfiguredError",
]
