"""
Text-completion configuration for the Cartoon Generator.

All three prompt-pipeline stages use OpenAI chat completions. Each stage has
its own model and token budget.

Includes:
- 120s timeout per completion call to fail fast on hanging connections
- Retry with exponential backoff for transient network errors
"""

import os
import logging

import openai
from dotenv import load_dotenv
from openai import AsyncOpenAI
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Timeout for completion calls (seconds)
LLM_TIMEOUT = 120

# Per-stage model and token budget
LLM_CONSTANTS = {
    "character": {
        "model": os.getenv("CHARACTER_MODEL", "gpt-4o"),
        "max_tokens": 300,
        "system_prompt": "You are a creative and descriptive assistant.",
    },
    "story": {
        "model": os.getenv("STORY_MODEL", "gpt-4o"),
        "max_tokens": 500,
        "system_prompt": "You are a creative and narrative-focused assistant.",
    },
    "image_prompts": {
        "model": os.getenv("IMAGE_PROMPTS_MODEL", "gpt-4o"),
        "max_tokens": 800,
        "system_prompt": "You are an assistant that generates detailed image prompts based on a story.",
    },
}

# Network errors that should trigger retry
RETRYABLE_EXCEPTIONS = (
    openai.APIConnectionError,  # Includes APITimeoutError
    ConnectionError,
    TimeoutError,
)


def get_completion_client() -> AsyncOpenAI:
    """
    Get the OpenAI client used by the prompt pipeline.

    Uses OPENAI_API_KEY from environment.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY not found in environment. Set it in .env file.")

    return AsyncOpenAI(api_key=api_key, timeout=LLM_TIMEOUT)


# Retry decorator for completion calls with network errors
llm_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=2, min=2, max=10),
    retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
