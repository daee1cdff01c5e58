"""API configuration constants.

Single source of truth for settings used across the API layer.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# CORS - comma separated list of origins, "*" for development
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Logging
LOG_JSON = os.getenv("LOG_FORMAT", "json").lower() == "json"
LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# Uploads larger than this are rejected before reaching the media host
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
