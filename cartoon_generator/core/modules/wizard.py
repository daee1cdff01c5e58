"""
Six-stage comic wizard.

Stage order:
    1 upload -> 2 review character -> 3 enter event -> 4 review story
    -> 5 review prompts -> 6 results

Only 2 -> 1 and 4 -> 3 go backwards, and "start over" returns to 1 from
anywhere. Stage changes are computed by the pure transition() function; the
ComicWizard handlers call the providers and apply the new stage only after
the network call succeeded, so a failed stage leaves the state where it was.
"""

import logging
from typing import Optional

from ..errors import InvalidTransitionError, MissingInputError, NotConfiguredError, ValidationError
from ..types import GenerationRequest, WizardAction, WizardStage, WizardState
from .image_generator import ImageGenerator
from .prompt_pipeline import PromptPipeline

logger = logging.getLogger(__name__)

TRANSITIONS: dict[tuple[WizardStage, WizardAction], WizardStage] = {
    (WizardStage.UPLOAD, WizardAction.CHARACTER_DESCRIBED): WizardStage.REVIEW_CHARACTER,
    (WizardStage.REVIEW_CHARACTER, WizardAction.CHARACTER_APPROVED): WizardStage.ENTER_EVENT,
    (WizardStage.REVIEW_CHARACTER, WizardAction.GO_BACK): WizardStage.UPLOAD,
    (WizardStage.ENTER_EVENT, WizardAction.STORY_WRITTEN): WizardStage.REVIEW_STORY,
    (WizardStage.REVIEW_STORY, WizardAction.PROMPTS_GENERATED): WizardStage.REVIEW_PROMPTS,
    (WizardStage.REVIEW_STORY, WizardAction.GO_BACK): WizardStage.ENTER_EVENT,
    (WizardStage.REVIEW_PROMPTS, WizardAction.IMAGES_GENERATED): WizardStage.RESULTS,
}


def transition(stage: WizardStage, action: WizardAction) -> WizardStage:
    """
    Return the stage reached by applying action in stage.

    Raises:
        InvalidTransitionError: If the action is not allowed in this stage
    """
    if action == WizardAction.START_OVER:
        return WizardStage.UPLOAD

    try:
        return TRANSITIONS[(stage, action)]
    except KeyError:
        raise InvalidTransitionError(
            f"Action '{action.value}' is not allowed in stage {int(stage)} ({stage.name.lower()})"
        )


def _require_stage(state: WizardState, stage: WizardStage, operation: str) -> None:
    if state.stage != stage:
        raise InvalidTransitionError(
            f"Cannot {operation} in stage {int(state.stage)} ({state.stage.name.lower()})"
        )


def _require(collaborator, feature: str):
    if collaborator is None:
        raise NotConfiguredError(f"{feature} is not configured")
    return collaborator


class ComicWizard:
    """
    Stage handlers for the comic wizard.

    Each handler takes the session's WizardState explicitly and mutates it
    only once the stage's work has succeeded. Errors are raised, not caught;
    the service layer turns them into stage results.
    """

    def __init__(
        self,
        pipeline: Optional[PromptPipeline] = None,
        image_generator: Optional[ImageGenerator] = None,
        uploader=None,
        exporter=None,
    ):
        self.pipeline = pipeline
        self.image_generator = image_generator
        self.uploader = uploader
        self.exporter = exporter

    # === Stage 1: upload ===

    async def upload_photo(
        self,
        state: WizardState,
        filename: str,
        content: bytes,
        content_type: Optional[str],
    ) -> str:
        _require_stage(state, WizardStage.UPLOAD, "upload a photo")
        uploader = _require(self.uploader, "Photo upload")

        url = await uploader.upload(filename, content, content_type)
        state.image_url = url
        return url

    async def describe_character(self, state: WizardState, image_url: Optional[str] = None) -> None:
        """Describe the uploaded photo and move to character review (1 -> 2)."""
        next_stage = transition(state.stage, WizardAction.CHARACTER_DESCRIBED)
        url = image_url or state.image_url
        pipeline = _require(self.pipeline, "Text generation")

        description = await pipeline.describe_character(url)

        state.image_url = url
        state.generated_character_description = description
        state.character_description = description
        state.stage = next_stage

    # === Stage 2: review character ===

    def edit_character_description(self, state: WizardState, description: str) -> None:
        _require_stage(state, WizardStage.REVIEW_CHARACTER, "edit the character description")
        state.character_description = description

    def approve_character(self, state: WizardState) -> None:
        next_stage = transition(state.stage, WizardAction.CHARACTER_APPROVED)
        if not state.character_description.strip():
            raise MissingInputError("Character description cannot be empty.")
        state.stage = next_stage

    # === Stage 3: enter event ===

    async def write_story(self, state: WizardState, event: str) -> None:
        """Write a story about the event and move to story review (3 -> 4)."""
        next_stage = transition(state.stage, WizardAction.STORY_WRITTEN)
        pipeline = _require(self.pipeline, "Text generation")
        # Keep what the user typed even if generation fails
        state.event = event

        story = await pipeline.write_story(event, state.character_description)

        state.generated_story = story
        state.story = story
        state.stage = next_stage

    # === Stage 4: review story ===

    def edit_story(self, state: WizardState, story: str) -> None:
        _require_stage(state, WizardStage.REVIEW_STORY, "edit the story")
        state.story = story

    async def generate_prompts(self, state: WizardState) -> None:
        """Derive image prompts from the edited story (4 -> 5)."""
        next_stage = transition(state.stage, WizardAction.PROMPTS_GENERATED)

        pipeline = _require(self.pipeline, "Text generation")
        prompts = await pipeline.generate_image_prompts(state.story, state.character_description)

        state.generated_prompts = list(prompts)
        state.prompts = list(prompts)
        state.stage = next_stage

    # === Stage 5: review prompts ===

    def edit_prompt(self, state: WizardState, index: int, prompt: str) -> None:
        _require_stage(state, WizardStage.REVIEW_PROMPTS, "edit a prompt")
        if not 0 <= index < len(state.prompts):
            raise ValidationError(f"Prompt index {index} is out of range (0-{len(state.prompts) - 1})")
        state.prompts[index] = prompt

    async def generate_images(self, state: WizardState) -> None:
        """
        Render one panel per prompt, in order, and move to results (5 -> 6).

        Panels are generated strictly one after another. The first failure
        aborts the batch: no further prompts are submitted and the panels
        already rendered in this run are discarded.
        """
        next_stage = transition(state.stage, WizardAction.IMAGES_GENERATED)
        if not state.prompts:
            raise MissingInputError("No prompts to generate images from.")
        image_generator = _require(self.image_generator, "Image generation")

        state.images = []
        images: list[str] = []
        for index, prompt in enumerate(state.prompts, start=1):
            logger.info(f"Generating panel {index}/{len(state.prompts)}")
            request = GenerationRequest(prompt=prompt, subject_locator=state.image_url or None)
            result = await image_generator.generate(request)
            images.extend(result.images)

        state.images = images
        state.stage = next_stage

    # === Stage 6: results ===

    async def export_pdf(self, state: WizardState) -> bytes:
        _require_stage(state, WizardStage.RESULTS, "export a PDF")
        return await _require(self.exporter, "PDF export").export(state.images)

    # === Navigation ===

    def go_back(self, state: WizardState) -> None:
        """Return to the previous input stage (2 -> 1 or 4 -> 3), keeping entered values."""
        state.stage = transition(state.stage, WizardAction.GO_BACK)

    def start_over(self, state: WizardState) -> None:
        state.reset()
