"""Pydantic models for API requests."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import OutputFormat


class GeneratePromptRequest(BaseModel):
    """Request body for /generate-prompt.

    `type` is validated by the route so an unknown value returns 400
    rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="One of: character, story, image-prompts")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    event: Optional[str] = None
    story: Optional[str] = None
    character_description: Optional[str] = Field(default=None, alias="characterDescription")


class GenerateImageRequest(BaseModel):
    """Request body for /generate-image. Unset fields use the model defaults."""

    prompt: Optional[str] = None
    num_outputs: Optional[int] = Field(default=None, ge=1, le=4)
    width: Optional[int] = Field(default=None, ge=256, le=2048)
    height: Optional[int] = Field(default=None, ge=256, le=2048)
    output_format: Optional[OutputFormat] = None
    output_quality: Optional[int] = Field(default=None, ge=0, le=100)
    seed: Optional[int] = None
    subject_locator: Optional[str] = None
    disable_safety_checker: Optional[bool] = None


class DescribeCharacterRequest(BaseModel):
    """Optional body for describing a character from an already hosted image."""

    image_url: Optional[str] = None


class EditCharacterRequest(BaseModel):
    description: str


class WriteStoryRequest(BaseModel):
    event: str = Field(..., description="What happened, in the user's words")


class EditStoryRequest(BaseModel):
    story: str


class EditPromptRequest(BaseModel):
    prompt: str
