"""
Image inference configuration for the Cartoon Generator.

Comic panels are rendered by a fine-tuned model hosted on Replicate. The
model was trained on the "TOK" style token, which is why every image prompt
ends with "in TOK style".
"""

import os

import replicate
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

INFERENCE_CONSTANTS = {
    "model_version": os.getenv(
        "REPLICATE_MODEL_VERSION",
        "cc3beea6ddc39416cf121390b476b1a8802ca47db03fb97306ef6c25f38f60a2",
    ),
    "poll_interval": 1.0,  # seconds between status checks
    "max_attempts": 120,  # 2 minutes total polling time
}

# Defaults applied to every GenerationRequest field left unset
IMAGE_DEFAULTS = {
    "output_format": "webp",
    "width": 1024,
    "height": 1024,
    "num_outputs": 1,
    "output_quality": 80,
    "seed": None,
    "subject_locator": None,
    "disable_safety_checker": False,
}


def _get_api_token() -> str:
    # REPLICATE_API_KEY is the name older deployments used
    return os.getenv("REPLICATE_API_TOKEN") or os.getenv("REPLICATE_API_KEY", "")


def get_inference_client() -> replicate.Client:
    """
    Get the Replicate client for panel generation.

    Uses REPLICATE_API_TOKEN (or REPLICATE_API_KEY) from environment.
    """
    api_token = _get_api_token()
    if not api_token:
        raise ValueError("REPLICATE_API_TOKEN not found in environment. Set it in .env file.")

    return replicate.Client(api_token=api_token)


def get_model_version() -> str:
    """Get the Replicate model version ID."""
    return INFERENCE_CONSTANTS["model_version"]
