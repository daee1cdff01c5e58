"""Upload user photos to Cloudinary and return their hosted URL."""

import hashlib
import logging
import time
from typing import Optional

import httpx

from cartoon_generator.config import MEDIA_CONSTANTS, get_cloudinary_credentials
from ..errors import ProviderError, ValidationError

logger = logging.getLogger(__name__)


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary signature: SHA-1 of the sorted query string plus the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryUploader:
    """Signed uploads over the Cloudinary REST API."""

    def __init__(
        self,
        credentials: Optional[tuple[str, str, str]] = None,
        folder: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cloud_name, self.api_key, self.api_secret = credentials or get_cloudinary_credentials()
        self.folder = folder or MEDIA_CONSTANTS["folder"]
        self.transport = transport

    async def upload(self, filename: str, content: bytes, content_type: Optional[str]) -> str:
        """
        Upload an image and return its secure URL.

        Raises:
            ValidationError: If no file was given or its type is not allowed
            ProviderError: If the upload fails or no secure_url comes back
        """
        if not content:
            raise ValidationError("No image file uploaded.")
        if content_type not in MEDIA_CONSTANTS["allowed_types"]:
            raise ValidationError("Unsupported file type.")

        params = {"folder": self.folder, "timestamp": str(int(time.time()))}
        data = {**params, "api_key": self.api_key, "signature": sign_params(params, self.api_secret)}
        url = MEDIA_CONSTANTS["upload_url"].format(cloud_name=self.cloud_name)

        try:
            async with httpx.AsyncClient(
                timeout=MEDIA_CONSTANTS["timeout"],
                transport=self.transport,
            ) as client:
                response = await client.post(
                    url,
                    data=data,
                    files={"file": (filename or "upload", content, content_type)},
                )
        except httpx.RequestError as e:
            raise ProviderError(f"Failed to connect to media host: {e}") from e

        if response.status_code != 200:
            raise ProviderError(f"Media upload failed with status {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError("Media host returned a malformed response") from e

        secure_url = body.get("secure_url") if isinstance(body, dict) else None
        if not secure_url:
            raise ProviderError("Media host did not return a secure_url")

        logger.info(f"Uploaded {filename} to {secure_url}")
        return secure_url
