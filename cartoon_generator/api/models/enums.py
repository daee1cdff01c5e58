"""Shared enums for API models."""

from enum import Enum


class PromptType(str, Enum):
    """Which text stage /generate-prompt should run."""

    CHARACTER = "character"
    STORY = "story"
    IMAGE_PROMPTS = "image-prompts"


class OutputFormat(str, Enum):
    """Image formats the inference model can return."""

    WEBP = "webp"
    JPG = "jpg"
    PNG = "png"
