"""FastAPI dependency injection for providers, services and sessions."""

import logging
from functools import lru_cache
from typing import Annotated, Optional

from dotenv import find_dotenv, load_dotenv
from fastapi import Depends, HTTPException, status

# Load .env from project root (find_dotenv searches parent directories)
load_dotenv(find_dotenv())

from cartoon_generator.core.clients import OpenAICompletionProvider, ReplicateInferenceProvider  # noqa: E402
from cartoon_generator.core.modules import (  # noqa: E402
    CloudinaryUploader,
    ComicWizard,
    ImageGenerator,
    JobPoller,
    PdfExporter,
    PredictionSubmitter,
    PromptPipeline,
)
from cartoon_generator.core.types import WizardState  # noqa: E402
from .services.session_store import SessionStore, session_store  # noqa: E402
from .services.wizard_service import WizardService  # noqa: E402

logger = logging.getLogger(__name__)


def _not_configured(error: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(error),
    )


# Provider clients are built once per process
@lru_cache
def _completion_provider() -> OpenAICompletionProvider:
    return OpenAICompletionProvider()


@lru_cache
def _inference_provider() -> ReplicateInferenceProvider:
    return ReplicateInferenceProvider()


def get_prompt_pipeline() -> PromptPipeline:
    """Get a PromptPipeline backed by OpenAI."""
    try:
        return PromptPipeline(_completion_provider())
    except ValueError as e:
        raise _not_configured(e)


def get_image_generator() -> ImageGenerator:
    """Get a submit-and-poll ImageGenerator backed by Replicate."""
    try:
        provider = _inference_provider()
    except ValueError as e:
        raise _not_configured(e)
    return ImageGenerator(PredictionSubmitter(provider), JobPoller(provider))


def get_optional_prompt_pipeline() -> Optional[PromptPipeline]:
    """Pipeline for the wizard; None when OpenAI is not configured."""
    try:
        return PromptPipeline(_completion_provider())
    except ValueError as e:
        logger.warning(f"Text generation disabled: {e}")
        return None


def get_optional_image_generator() -> Optional[ImageGenerator]:
    """Image generator for the wizard; None when Replicate is not configured."""
    try:
        provider = _inference_provider()
    except ValueError as e:
        logger.warning(f"Image generation disabled: {e}")
        return None
    return ImageGenerator(PredictionSubmitter(provider), JobPoller(provider))


def get_uploader() -> CloudinaryUploader:
    """Get the Cloudinary uploader."""
    try:
        return CloudinaryUploader()
    except ValueError as e:
        raise _not_configured(e)


def get_optional_uploader() -> Optional[CloudinaryUploader]:
    """Uploader for the wizard; photo upload is optional when images are hosted elsewhere."""
    try:
        return CloudinaryUploader()
    except ValueError as e:
        logger.warning(f"Photo uploads disabled: {e}")
        return None


def get_exporter() -> PdfExporter:
    return PdfExporter()


def get_wizard_service(
    pipeline: Annotated[Optional[PromptPipeline], Depends(get_optional_prompt_pipeline)],
    image_generator: Annotated[Optional[ImageGenerator], Depends(get_optional_image_generator)],
    uploader: Annotated[Optional[CloudinaryUploader], Depends(get_optional_uploader)],
    exporter: Annotated[PdfExporter, Depends(get_exporter)],
) -> WizardService:
    """Get a WizardService wired to every configured provider.

    Unconfigured providers are left out, so navigation and edits keep working
    and only the stages that need a missing provider fail.
    """
    return WizardService(ComicWizard(pipeline, image_generator, uploader, exporter))


def get_session_store() -> SessionStore:
    return session_store


def get_session_state(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> WizardState:
    """Look up a session's state.

    Raises:
        HTTPException: 404 if the session does not exist
    """
    state = store.get(session_id)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return state


# Type aliases for cleaner route signatures
Pipeline = Annotated[PromptPipeline, Depends(get_prompt_pipeline)]
Images = Annotated[ImageGenerator, Depends(get_image_generator)]
Uploader = Annotated[CloudinaryUploader, Depends(get_uploader)]
Wizard = Annotated[WizardService, Depends(get_wizard_service)]
Store = Annotated[SessionStore, Depends(get_session_store)]
Session = Annotated[WizardState, Depends(get_session_state)]
