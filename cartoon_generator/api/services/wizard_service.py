"""
Wizard stage boundary.

Every wizard operation runs through _run_stage, which catches workflow errors,
logs them, records them on the session state and returns a StageResult. No
workflow error propagates past this layer; the wizard stays in the stage it
was in and the user may retry or go back.
"""

import inspect
import time
from typing import Any, Callable, Optional

from cartoon_generator.core.errors import CartoonGeneratorError
from cartoon_generator.core.modules.wizard import ComicWizard
from cartoon_generator.core.types import StageResult, WizardState
from ..logging import wizard_logger


class WizardService:
    """Runs ComicWizard handlers and turns their errors into stage results."""

    def __init__(self, wizard: ComicWizard):
        self.wizard = wizard

    async def _run_stage(
        self,
        session_id: str,
        state: WizardState,
        operation: str,
        handler: Callable[..., Any],
        *args,
    ) -> tuple[StageResult, Any]:
        start_time = time.time()
        wizard_logger.stage_started(session_id, operation, int(state.stage))

        try:
            value = handler(state, *args)
            if inspect.isawaitable(value):
                value = await value
        except CartoonGeneratorError as e:
            wizard_logger.stage_failed(session_id, operation, int(state.stage), e)
            state.last_error = str(e)
            state.last_error_type = type(e).__name__
            return StageResult.failed(state.stage, e), None

        state.clear_error()
        wizard_logger.stage_completed(session_id, operation, int(state.stage), time.time() - start_time)
        return StageResult.ok(state.stage), value

    async def upload_photo(
        self,
        session_id: str,
        state: WizardState,
        filename: str,
        content: bytes,
        content_type: Optional[str],
    ) -> StageResult:
        result, _ = await self._run_stage(
            session_id, state, "upload_photo", self.wizard.upload_photo, filename, content, content_type
        )
        return result

    async def describe_character(
        self,
        session_id: str,
        state: WizardState,
        image_url: Optional[str] = None,
    ) -> StageResult:
        result, _ = await self._run_stage(
            session_id, state, "describe_character", self.wizard.describe_character, image_url
        )
        return result

    async def edit_character_description(self, session_id: str, state: WizardState, description: str) -> StageResult:
        result, _ = await self._run_stage(
            session_id, state, "edit_character", self.wizard.edit_character_description, description
        )
        return result

    async def approve_character(self, session_id: str, state: WizardState) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "approve_character", self.wizard.approve_character)
        return result

    async def write_story(self, session_id: str, state: WizardState, event: str) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "write_story", self.wizard.write_story, event)
        return result

    async def edit_story(self, session_id: str, state: WizardState, story: str) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "edit_story", self.wizard.edit_story, story)
        return result

    async def generate_prompts(self, session_id: str, state: WizardState) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "generate_prompts", self.wizard.generate_prompts)
        return result

    async def edit_prompt(self, session_id: str, state: WizardState, index: int, prompt: str) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "edit_prompt", self.wizard.edit_prompt, index, prompt)
        return result

    async def generate_images(self, session_id: str, state: WizardState) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "generate_images", self.wizard.generate_images)
        return result

    async def export_pdf(self, session_id: str, state: WizardState) -> tuple[StageResult, Optional[bytes]]:
        return await self._run_stage(session_id, state, "export_pdf", self.wizard.export_pdf)

    async def go_back(self, session_id: str, state: WizardState) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "go_back", self.wizard.go_back)
        return result

    async def start_over(self, session_id: str, state: WizardState) -> StageResult:
        result, _ = await self._run_stage(session_id, state, "start_over", self.wizard.start_over)
        wizard_logger.session_reset(session_id)
        return result
