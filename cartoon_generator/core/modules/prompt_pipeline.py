"""
Text-generation stages of the comic workflow.

Three independent completion calls: character description, short story and
image prompts. The caller chains them, because the user reviews and edits
each result before the next stage runs.
"""

import logging
import re
from typing import Any, Optional

from cartoon_generator.config import LLM_CONSTANTS
from ..clients import CompletionProvider
from ..errors import MissingInputError, NoPromptsReturnedError, ProviderError

logger = logging.getLogger(__name__)

STYLE_MARKER = "in TOK style"
PROMPT_COUNT = 6

# A prompt line looks like "3. Create a cartoon scene of ..."
NUMBERED_LINE = re.compile(r"^\d+\.\s+")

CHARACTER_PROMPT = """Create a detailed character description of the person in this photo: {image_url}
Include the character's appearance, clothing, personality, and background.
Describe them so an illustrator could draw them consistently as a cartoon character."""

STORY_PROMPT = """Write a short story based on the following event: "{event}".
The story should be engaging, coherent, and suitable for a general audience.{character_block}"""

IMAGE_PROMPTS_PROMPT = """Generate {count} highly detailed prompts for image creation based on the following story:

"{story}"
{character_block}
Each prompt should include:
- A comprehensive character description.
- A specific scene or moment from the story.
- Thought bubbles showing conversation with the exact words in quotes.
- The phrase "{style_marker}" at the end.

Structure each prompt as a numbered list item, for example:

1. Create a cartoon scene of...

Make the prompts distinct, covering the beginning, middle, and end of the story.
The last prompt should conclude the story with a happy and educational ending.

Example prompt:

1. Create a cartoon scene of a young man with medium-length, slightly wavy black hair, wearing a soft zip-up jacket. He is standing in a peaceful park, facing a girl with long brown hair in a yellow dress. Tall trees, blooming flowers, and a clear blue sky create a tranquil backdrop. He says the exact words, "I feel at peace here." shown in a thought bubble over his head. The girl, smiling softly, answers with the exact words "Me too." in a thought bubble over her head. Sunlight streams through the trees and birds fly overhead {style_marker}."""


def parse_numbered_prompts(text: str) -> list[str]:
    """
    Extract prompts from a numbered list.

    Each line starting with "<integer>. " is one prompt with the numbering
    removed; every other line is discarded.
    """
    prompts = []
    for line in text.strip().split("\n"):
        line = line.strip()
        if NUMBERED_LINE.match(line):
            prompts.append(NUMBERED_LINE.sub("", line, count=1))
    return prompts


def _character_block(character_description: Optional[str]) -> str:
    if not character_description or not character_description.strip():
        return ""
    return f"\n\nThe main character is:\n{character_description.strip()}\n"


class PromptPipeline:
    """Runs the three completion stages against a CompletionProvider."""

    def __init__(self, provider: CompletionProvider, settings: Optional[dict] = None):
        self.provider = provider
        self.settings = settings or LLM_CONSTANTS

    async def _complete(self, stage: str, user_content: Any) -> str:
        """Run one completion round trip and return the first choice's text."""
        stage_settings = self.settings[stage]
        messages = [
            {"role": "system", "content": stage_settings["system_prompt"]},
            {"role": "user", "content": user_content},
        ]

        response = await self.provider.complete(
            model=stage_settings["model"],
            messages=messages,
            max_tokens=stage_settings["max_tokens"],
        )

        choices = getattr(response, "choices", None)
        if not choices:
            raise ProviderError(f"No {stage.replace('_', ' ')} returned from completion provider")

        content = choices[0].message.content
        if not content or not content.strip():
            raise ProviderError(f"Empty {stage.replace('_', ' ')} returned from completion provider")

        return content.strip()

    async def describe_character(self, image_url: str) -> str:
        """
        Describe the character in an uploaded photo.

        The photo URL is sent both in the text and as an image part, so
        vision-capable models can look at it directly.
        """
        if not image_url or not image_url.strip():
            raise MissingInputError("Image URL is required for character description.")

        content = [
            {"type": "text", "text": CHARACTER_PROMPT.format(image_url=image_url)},
            {"type": "image_url", "image_url": {"url": image_url}},
        ]
        return await self._complete("character", content)

    async def write_story(self, event: str, character_description: Optional[str] = None) -> str:
        """Write a short story about an event."""
        if not event or not event.strip():
            raise MissingInputError("Event description is required to generate a story.")

        prompt = STORY_PROMPT.format(
            event=event.strip(),
            character_block=_character_block(character_description),
        )
        return await self._complete("story", prompt)

    async def generate_image_prompts(
        self,
        story: str,
        character_description: Optional[str] = None,
    ) -> list[str]:
        """
        Turn a story into numbered image-generation prompts.

        Raises:
            MissingInputError: If the story is empty
            NoPromptsReturnedError: If no numbered lines came back
        """
        if not story or not story.strip():
            raise MissingInputError("Story is required to generate image prompts.")

        prompt = IMAGE_PROMPTS_PROMPT.format(
            count=PROMPT_COUNT,
            story=story.strip(),
            character_block=_character_block(character_description),
            style_marker=STYLE_MARKER,
        )
        text = await self._complete("image_prompts", prompt)

        prompts = parse_numbered_prompts(text)
        if not prompts:
            raise NoPromptsReturnedError("No prompts returned from completion provider.")

        logger.info(f"Parsed {len(prompts)} image prompts")
        return prompts
