"""Pydantic models for API requests and responses."""

from .enums import OutputFormat, PromptType
from .requests import (
    GeneratePromptRequest,
    GenerateImageRequest,
    DescribeCharacterRequest,
    EditCharacterRequest,
    WriteStoryRequest,
    EditStoryRequest,
    EditPromptRequest,
)
from .responses import (
    UploadImageResponse,
    CharacterDescriptionResponse,
    StoryTextResponse,
    ImagePromptsResponse,
    GenerateImageResponse,
    StageResultResponse,
    SessionResponse,
)

__all__ = [
    "OutputFormat",
    "PromptType",
    "GeneratePromptRequest",
    "GenerateImageRequest",
    "DescribeCharacterRequest",
    "EditCharacterRequest",
    "WriteStoryRequest",
    "EditStoryRequest",
    "EditPromptRequest",
    "UploadImageResponse",
    "CharacterDescriptionResponse",
    "StoryTextResponse",
    "ImagePromptsResponse",
    "GenerateImageResponse",
    "StageResultResponse",
    "SessionResponse",
]
