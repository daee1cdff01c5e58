"""
Centralized domain types for the Cartoon Generator.

All dataclasses and enums that are used across multiple modules are defined
here to make data flow explicit and avoid circular imports.
"""

from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum
from typing import Any, Optional

from .errors import UnknownStatusError


# =============================================================================
# Inference Job Types
# =============================================================================


class JobStatus(str, Enum):
    """Normalised status of a remote prediction."""

    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"

    @classmethod
    def from_provider(cls, status: str) -> "JobStatus":
        """
        Map a provider status string to a JobStatus.

        Replicate reports "starting" and "processing" while a prediction is
        in flight; both are treated as running.

        Raises:
            UnknownStatusError: If the string is not part of the vocabulary
        """
        try:
            return _PROVIDER_STATUSES[status]
        except (KeyError, TypeError):
            raise UnknownStatusError(str(status))

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED, JobStatus.CANCELED)


_PROVIDER_STATUSES = {
    "queued": JobStatus.QUEUED,
    "starting": JobStatus.RUNNING,
    "processing": JobStatus.RUNNING,
    "running": JobStatus.RUNNING,
    "succeeded": JobStatus.SUCCEEDED,
    "failed": JobStatus.FAILED,
    "canceled": JobStatus.CANCELED,
}


@dataclass(frozen=True)
class GenerationRequest:
    """
    A single image generation request.

    Only the prompt is required; every other field falls back to
    IMAGE_DEFAULTS when the request is submitted.
    """

    prompt: str
    output_format: Optional[str] = None  # webp, jpg or png
    width: Optional[int] = None
    height: Optional[int] = None
    num_outputs: Optional[int] = None
    output_quality: Optional[int] = None
    seed: Optional[int] = None
    subject_locator: Optional[str] = None  # URL of the reference photo
    disable_safety_checker: Optional[bool] = None


@dataclass
class PredictionSnapshot:
    """One observation of a remote prediction, as returned by the provider."""

    id: str
    status: str
    output: list[str] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class JobResult:
    """Output of a prediction that reached 'succeeded'."""

    prediction_id: str
    images: list[str]
    status: JobStatus = JobStatus.SUCCEEDED


# =============================================================================
# Wizard Types
# =============================================================================


class WizardStage(IntEnum):
    """The six stages of the comic wizard, in order."""

    UPLOAD = 1
    REVIEW_CHARACTER = 2
    ENTER_EVENT = 3
    REVIEW_STORY = 4
    REVIEW_PROMPTS = 5
    RESULTS = 6


class WizardAction(str, Enum):
    """User or system actions that move the wizard between stages."""

    CHARACTER_DESCRIBED = "character_described"
    CHARACTER_APPROVED = "character_approved"
    STORY_WRITTEN = "story_written"
    PROMPTS_GENERATED = "prompts_generated"
    IMAGES_GENERATED = "images_generated"
    GO_BACK = "go_back"
    START_OVER = "start_over"


@dataclass
class WizardState:
    """
    Mutable record of one user's wizard session.

    Generated values are kept next to the user's edited copies. Later stages
    always read the edited copy (character_description, story, prompts).
    """

    stage: WizardStage = WizardStage.UPLOAD
    image_url: str = ""

    generated_character_description: str = ""
    character_description: str = ""

    event: str = ""

    generated_story: str = ""
    story: str = ""

    generated_prompts: list[str] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    images: list[str] = field(default_factory=list)

    last_error: Optional[str] = None
    last_error_type: Optional[str] = None

    def reset(self) -> None:
        """Return every field to its initial empty value."""
        fresh = WizardState()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))

    def clear_error(self) -> None:
        self.last_error = None
        self.last_error_type = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "stage": int(self.stage),
            "stage_name": self.stage.name.lower(),
            "image_url": self.image_url or None,
            "generated_character_description": self.generated_character_description or None,
            "character_description": self.character_description or None,
            "event": self.event or None,
            "generated_story": self.generated_story or None,
            "story": self.story or None,
            "generated_prompts": list(self.generated_prompts),
            "prompts": list(self.prompts),
            "images": list(self.images),
            "last_error": self.last_error,
            "last_error_type": self.last_error_type,
        }


@dataclass
class StageResult:
    """Structured outcome of one wizard stage handler."""

    success: bool
    stage: WizardStage
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, stage: WizardStage) -> "StageResult":
        return cls(success=True, stage=stage)

    @classmethod
    def failed(cls, stage: WizardStage, error: Exception) -> "StageResult":
        return cls(
            success=False,
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )
