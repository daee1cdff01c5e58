"""Pydantic models for API responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class UploadImageResponse(BaseModel):
    url: str


class CharacterDescriptionResponse(BaseModel):
    description: str


class StoryTextResponse(BaseModel):
    story: str


class ImagePromptsResponse(BaseModel):
    prompts: list[str]


class GenerateImageResponse(BaseModel):
    """Result of a single submit-and-poll image generation.

    There is no "processing" variant: the route only returns once the
    prediction has finished or failed.
    """

    success: bool
    status: Literal["succeeded", "failed"]
    images: Optional[list[str]] = None
    prediction_id: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None
    timestamp: Optional[datetime] = None


class StageResultResponse(BaseModel):
    """Outcome of the last wizard action."""

    success: bool
    stage: int
    error: Optional[str] = None
    error_type: Optional[str] = None


class SessionResponse(BaseModel):
    """Snapshot of a wizard session."""

    id: str
    stage: int
    stage_name: str
    image_url: Optional[str] = None
    generated_character_description: Optional[str] = None
    character_description: Optional[str] = None
    event: Optional[str] = None
    generated_story: Optional[str] = None
    story: Optional[str] = None
    generated_prompts: list[str] = Field(default_factory=list)
    prompts: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    last_error: Optional[str] = None
    last_error_type: Optional[str] = None

    # Populated by action endpoints
    result: Optional[StageResultResponse] = None
