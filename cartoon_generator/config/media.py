"""
Media hosting configuration for the Cartoon Generator.

Uploaded photos are stored on Cloudinary so the completion and inference
providers can fetch them by URL.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

MEDIA_CONSTANTS = {
    "upload_url": "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload",
    "folder": "cartoon_generator",
    "allowed_types": ("image/jpeg", "image/png", "image/gif"),
    "timeout": 60,
}


def get_cloudinary_credentials() -> tuple[str, str, str]:
    """
    Get (cloud_name, api_key, api_secret) for signed uploads.

    Raises:
        ValueError: If any credential is missing
    """
    cloud_name = os.getenv("CLOUDINARY_CLOUD_NAME")
    api_key = os.getenv("CLOUDINARY_API_KEY")
    api_secret = os.getenv("CLOUDINARY_API_SECRET")

    if not (cloud_name and api_key and api_secret):
        raise ValueError(
            "Cloudinary credentials not found. Set CLOUDINARY_CLOUD_NAME, "
            "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET in .env"
        )

    return cloud_name, api_key, api_secret
