"""
Poll a remote prediction until it reaches a terminal status.

The wait is bounded by attempt count, not wall-clock time: the effective
timeout is poll_interval * max_attempts regardless of how long each status
query takes. The sleep function is injectable so tests can run the loop
without real delays.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from cartoon_generator.config import INFERENCE_CONSTANTS
from ..clients import InferenceProvider
from ..errors import JobFailedError, PollTimeoutError
from ..types import JobStatus

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class JobPoller:
    """Drives a prediction handle to completion."""

    def __init__(
        self,
        provider: InferenceProvider,
        poll_interval: Optional[float] = None,
        max_attempts: Optional[int] = None,
        sleep: SleepFn = asyncio.sleep,
    ):
        self.provider = provider
        self.poll_interval = (
            INFERENCE_CONSTANTS["poll_interval"] if poll_interval is None else poll_interval
        )
        self.max_attempts = (
            INFERENCE_CONSTANTS["max_attempts"] if max_attempts is None else max_attempts
        )
        self.sleep = sleep

    async def wait(self, prediction_id: str) -> list[str]:
        """
        Poll until the prediction finishes and return its output URLs.

        Returns:
            Output URLs in the order the provider reported them

        Raises:
            JobFailedError: Prediction reported failed or canceled
            UnknownStatusError: Provider reported an unrecognised status
            PollTimeoutError: max_attempts queries without a terminal status
        """
        for attempt in range(1, self.max_attempts + 1):
            prediction = await self.provider.get(prediction_id)
            logger.info(
                f"Polling attempt {attempt}/{self.max_attempts}, status: {prediction.status}",
                extra={"prediction_id": prediction_id, "attempt": attempt},
            )

            status = JobStatus.from_provider(prediction.status)
            if not status.is_terminal:
                await self.sleep(self.poll_interval)
                continue

            if status == JobStatus.SUCCEEDED:
                return list(prediction.output)

            if status == JobStatus.FAILED:
                raise JobFailedError(
                    f"Prediction failed: {prediction.error}",
                    prediction_id=prediction_id,
                    detail=prediction.error,
                )

            raise JobFailedError(
                "Prediction was canceled",
                prediction_id=prediction_id,
                detail=prediction.error,
            )

        raise PollTimeoutError(prediction_id, self.max_attempts)
