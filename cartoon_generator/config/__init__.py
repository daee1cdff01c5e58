"""
Configuration module for the Cartoon Generator.

Re-exports provider configuration so callers can import from one place.
"""

from .llm import LLM_CONSTANTS, get_completion_client, llm_retry
from .inference import (
    INFERENCE_CONSTANTS,
    IMAGE_DEFAULTS,
    get_inference_client,
    get_model_version,
)
from .media import MEDIA_CONSTANTS, get_cloudinary_credentials
from .export import PDF_CONSTANTS

__all__ = [
    # LLM
    "LLM_CONSTANTS",
    "get_completion_client",
    "llm_retry",
    # Inference
    "INFERENCE_CONSTANTS",
    "IMAGE_DEFAULTS",
    "get_inference_client",
    "get_model_version",
    # Media
    "MEDIA_CONSTANTS",
    "get_cloudinary_credentials",
    # Export
    "PDF_CONSTANTS",
]
