"""Stateless generation endpoints: upload, text stages and single images."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse

from cartoon_generator.core.errors import CartoonGeneratorError, ValidationError
from cartoon_generator.core.types import GenerationRequest
from ..config import MAX_UPLOAD_BYTES
from ..dependencies import Images, Pipeline, Uploader
from ..errors import status_for_error
from ..models.enums import PromptType
from ..models.requests import GenerateImageRequest, GeneratePromptRequest
from ..models.responses import (
    CharacterDescriptionResponse,
    GenerateImageResponse,
    ImagePromptsResponse,
    StoryTextResponse,
    UploadImageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/upload-image",
    response_model=UploadImageResponse,
    summary="Upload a photo",
    description="Upload a JPEG, PNG or GIF photo to the media host and return its URL.",
)
async def upload_image(uploader: Uploader, image: Optional[UploadFile] = File(default=None)):
    """Host an uploaded photo."""
    if image is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No image file uploaded.")

    content = await image.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Image is too large.")

    try:
        url = await uploader.upload(image.filename, content, image.content_type)
    except CartoonGeneratorError as e:
        logger.error(f"Error in upload-image: {e}", extra={"error_type": type(e).__name__})
        raise HTTPException(status_code=status_for_error(e), detail=str(e))

    return UploadImageResponse(url=url)


@router.post(
    "/generate-prompt",
    response_model=CharacterDescriptionResponse | StoryTextResponse | ImagePromptsResponse,
    summary="Run one text stage",
    description="Generate a character description, a story, or image prompts depending on `type`.",
)
async def generate_prompt(request: GeneratePromptRequest, pipeline: Pipeline):
    """Dispatch to one prompt-pipeline stage."""
    try:
        prompt_type = PromptType(request.type)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request type.")

    try:
        if prompt_type == PromptType.CHARACTER:
            description = await pipeline.describe_character(request.image_url or "")
            return CharacterDescriptionResponse(description=description)

        if prompt_type == PromptType.STORY:
            story = await pipeline.write_story(request.event or "", request.character_description)
            return StoryTextResponse(story=story)

        prompts = await pipeline.generate_image_prompts(request.story or "", request.character_description)
        return ImagePromptsResponse(prompts=prompts)

    except CartoonGeneratorError as e:
        logger.error(f"Error in generate-prompt: {e}", extra={"error_type": type(e).__name__})
        raise HTTPException(status_code=status_for_error(e), detail=str(e))


@router.post(
    "/generate-image",
    response_model=GenerateImageResponse,
    summary="Generate one image",
    description="Submit an image prediction and wait until it finishes. Blocks for up to the polling ceiling.",
)
async def generate_image(request: GenerateImageRequest, images: Images):
    """Submit a prediction and poll it to completion."""
    generation_request = GenerationRequest(
        prompt=request.prompt or "",
        output_format=request.output_format.value if request.output_format else None,
        width=request.width,
        height=request.height,
        num_outputs=request.num_outputs,
        output_quality=request.output_quality,
        seed=request.seed,
        subject_locator=request.subject_locator,
        disable_safety_checker=request.disable_safety_checker,
    )

    try:
        result = await images.generate(generation_request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CartoonGeneratorError as e:
        logger.error(f"Error in generate-image: {e}", extra={"error_type": type(e).__name__})
        failure = GenerateImageResponse(
            success=False,
            status="failed",
            error="Failed to generate image",
            details=str(e),
            timestamp=datetime.now(timezone.utc),
        )
        return JSONResponse(
            status_code=status_for_error(e),
            content=failure.model_dump(mode="json", exclude_none=True),
        )

    return GenerateImageResponse(
        success=True,
        status="succeeded",
        images=result.images,
        prediction_id=result.prediction_id,
    )
