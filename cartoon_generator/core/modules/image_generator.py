"""Submit-then-poll image generation for a single request."""

from ..types import GenerationRequest, JobResult
from .job_poller import JobPoller
from .prediction_submitter import PredictionSubmitter


class ImageGenerator:
    """
    Generate one comic panel: submit the request, then poll it to completion.

    Errors from either step propagate unchanged so batch callers can stop at
    the first failure.
    """

    def __init__(self, submitter: PredictionSubmitter, poller: JobPoller):
        self.submitter = submitter
        self.poller = poller

    async def generate(self, request: GenerationRequest) -> JobResult:
        prediction_id = await self.submitter.submit(request)
        images = await self.poller.wait(prediction_id)
        return JobResult(prediction_id=prediction_id, images=images)
