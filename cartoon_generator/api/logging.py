"""Structured logging infrastructure for the API layer.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a WizardLogger helper for wizard stage events.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

# Structured fields copied from LogRecord extras into the JSON payload
EXTRA_FIELDS = (
    "session_id",
    "stage",
    "prediction_id",
    "attempt",
    "duration",
    "error_type",
)

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP and SDK loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "replicate")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(json_format: bool = True, level: int = logging.INFO) -> None:
    """
    Route all logging to one stderr handler.

    JSON lines in production, plain text for the CLI and local runs. Provider
    SDK loggers are capped at WARNING.
    """
    formatter = JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


class WizardLogger:
    """Logger for wizard stage events with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("comic_wizard")

    def session_created(self, session_id: str) -> None:
        self.logger.info("Wizard session created", extra={"session_id": session_id, "stage": 1})

    def stage_started(self, session_id: str, operation: str, stage: int) -> None:
        self.logger.info(
            f"Stage started: {operation}",
            extra={"session_id": session_id, "stage": stage},
        )

    def stage_completed(self, session_id: str, operation: str, stage: int, duration: Optional[float] = None) -> None:
        extra = {"session_id": session_id, "stage": stage}
        if duration:
            extra["duration"] = round(duration, 2)
        self.logger.info(f"Stage completed: {operation}", extra=extra)

    def stage_failed(self, session_id: str, operation: str, stage: int, error: Exception) -> None:
        self.logger.error(
            f"Stage failed: {operation}: {error}",
            extra={"session_id": session_id, "stage": stage, "error_type": type(error).__name__},
        )

    def session_reset(self, session_id: str) -> None:
        self.logger.info("Wizard session reset", extra={"session_id": session_id, "stage": 1})


# Global wizard logger instance
wizard_logger = WizardLogger()
