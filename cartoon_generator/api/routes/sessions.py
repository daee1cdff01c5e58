"""Wizard session endpoints.

Each action endpoint returns the session snapshot together with the stage
result. Failed stages answer with a non-2xx status but the same body shape,
and the session stays in the stage it was in.
"""

from typing import Optional

from fastapi import APIRouter, File, HTTPException, Response, UploadFile, status
from fastapi.responses import JSONResponse

from cartoon_generator.core.types import StageResult, WizardState
from ..config import MAX_UPLOAD_BYTES
from ..dependencies import Session, Store, Wizard
from ..errors import status_for_error_type
from ..logging import wizard_logger
from ..models.requests import (
    DescribeCharacterRequest,
    EditCharacterRequest,
    EditPromptRequest,
    EditStoryRequest,
    WriteStoryRequest,
)
from ..models.responses import SessionResponse, StageResultResponse

router = APIRouter()


def _snapshot(session_id: str, state: WizardState, result: Optional[StageResult] = None) -> SessionResponse:
    response = SessionResponse(id=session_id, **state.to_dict())
    if result is not None:
        response.result = StageResultResponse(
            success=result.success,
            stage=int(result.stage),
            error=result.error,
            error_type=result.error_type,
        )
    return response


def _respond(session_id: str, state: WizardState, result: StageResult):
    snapshot = _snapshot(session_id, state, result)
    if result.success:
        return snapshot
    return JSONResponse(
        status_code=status_for_error_type(result.error_type),
        content=snapshot.model_dump(mode="json"),
    )


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a wizard session",
)
async def create_session(store: Store):
    """Create a new session at stage 1."""
    session_id, state = store.create()
    wizard_logger.session_created(session_id)
    return _snapshot(session_id, state)


@router.get("/{session_id}", response_model=SessionResponse, summary="Get a wizard session")
async def get_session(session_id: str, state: Session):
    return _snapshot(session_id, state)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Discard a wizard session")
async def delete_session(session_id: str, store: Store):
    if not store.delete(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )


# === Stage 1 ===


@router.post("/{session_id}/photo", response_model=SessionResponse, summary="Upload the character photo")
async def upload_photo(
    session_id: str,
    state: Session,
    wizard: Wizard,
    photo: Optional[UploadFile] = File(default=None),
):
    content = await photo.read() if photo else b""
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Image is too large.")

    filename = photo.filename if photo else ""
    content_type = photo.content_type if photo else None

    result = await wizard.upload_photo(session_id, state, filename, content, content_type)
    return _respond(session_id, state, result)


@router.post(
    "/{session_id}/character",
    response_model=SessionResponse,
    summary="Describe the character (stage 1 -> 2)",
)
async def describe_character(
    session_id: str,
    state: Session,
    wizard: Wizard,
    request: Optional[DescribeCharacterRequest] = None,
):
    image_url = request.image_url if request else None
    result = await wizard.describe_character(session_id, state, image_url)
    return _respond(session_id, state, result)


# === Stage 2 ===


@router.put("/{session_id}/character", response_model=SessionResponse, summary="Edit the character description")
async def edit_character(session_id: str, request: EditCharacterRequest, state: Session, wizard: Wizard):
    result = await wizard.edit_character_description(session_id, state, request.description)
    return _respond(session_id, state, result)


@router.post(
    "/{session_id}/character/approve",
    response_model=SessionResponse,
    summary="Approve the character (stage 2 -> 3)",
)
async def approve_character(session_id: str, state: Session, wizard: Wizard):
    result = await wizard.approve_character(session_id, state)
    return _respond(session_id, state, result)


# === Stage 3 ===


@router.post("/{session_id}/story", response_model=SessionResponse, summary="Write the story (stage 3 -> 4)")
async def write_story(session_id: str, request: WriteStoryRequest, state: Session, wizard: Wizard):
    result = await wizard.write_story(session_id, state, request.event)
    return _respond(session_id, state, result)


# === Stage 4 ===


@router.put("/{session_id}/story", response_model=SessionResponse, summary="Edit the story")
async def edit_story(session_id: str, request: EditStoryRequest, state: Session, wizard: Wizard):
    result = await wizard.edit_story(session_id, state, request.story)
    return _respond(session_id, state, result)


@router.post(
    "/{session_id}/prompts",
    response_model=SessionResponse,
    summary="Generate image prompts (stage 4 -> 5)",
)
async def generate_prompts(session_id: str, state: Session, wizard: Wizard):
    result = await wizard.generate_prompts(session_id, state)
    return _respond(session_id, state, result)


# === Stage 5 ===


@router.put("/{session_id}/prompts/{index}", response_model=SessionResponse, summary="Edit one image prompt")
async def edit_prompt(session_id: str, index: int, request: EditPromptRequest, state: Session, wizard: Wizard):
    result = await wizard.edit_prompt(session_id, state, index, request.prompt)
    return _respond(session_id, state, result)


@router.post(
    "/{session_id}/images",
    response_model=SessionResponse,
    summary="Render the comic panels (stage 5 -> 6)",
    description="Generates one panel per prompt, sequentially. Stops at the first failure.",
)
async def generate_images(session_id: str, state: Session, wizard: Wizard):
    result = await wizard.generate_images(session_id, state)
    return _respond(session_id, state, result)


# === Stage 6 ===


@router.get(
    "/{session_id}/export.pdf",
    summary="Download the comic as PDF",
    responses={
        200: {"content": {"application/pdf": {}}},
    },
)
async def export_pdf(session_id: str, state: Session, wizard: Wizard):
    result, pdf_bytes = await wizard.export_pdf(session_id, state)
    if not result.success:
        return _respond(session_id, state, result)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="comic.pdf"'},
    )


# === Navigation ===


@router.post("/{session_id}/back", response_model=SessionResponse, summary="Go back to edit (2 -> 1, 4 -> 3)")
async def go_back(session_id: str, state: Session, wizard: Wizard):
    result = await wizard.go_back(session_id, state)
    return _respond(session_id, state, result)


@router.post("/{session_id}/reset", response_model=SessionResponse, summary="Start over")
async def start_over(session_id: str, state: Session, wizard: Wizard):
    result = await wizard.start_over(session_id, state)
    return _respond(session_id, state, result)
