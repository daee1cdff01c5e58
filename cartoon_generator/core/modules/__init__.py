# Image jobs
from .prediction_submitter import PredictionSubmitter, build_prediction_input
from .job_poller import JobPoller
from .image_generator import ImageGenerator

# Text stages
from .prompt_pipeline import PromptPipeline, parse_numbered_prompts

# Wizard and its collaborators
from .wizard import ComicWizard, transition
from .media_uploader import CloudinaryUploader
from .pdf_exporter import PdfExporter

__all__ = [
    # Image jobs
    "PredictionSubmitter",
    "build_prediction_input",
    "JobPoller",
    "ImageGenerator",
    # Text stages
    "PromptPipeline",
    "parse_numbered_prompts",
    # Wizard and its collaborators
    "ComicWizard",
    "transition",
    "CloudinaryUploader",
    "PdfExporter",
]
