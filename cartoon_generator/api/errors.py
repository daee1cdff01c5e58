"""HTTP status codes for workflow errors."""

from fastapi import status

from cartoon_generator.core.errors import CartoonGeneratorError

ERROR_STATUS_CODES = {
    "ValidationError": status.HTTP_400_BAD_REQUEST,
    "MissingInputError": status.HTTP_400_BAD_REQUEST,
    "InvalidTransitionError": status.HTTP_409_CONFLICT,
    "NotConfiguredError": status.HTTP_503_SERVICE_UNAVAILABLE,
    "PollTimeoutError": status.HTTP_504_GATEWAY_TIMEOUT,
    "ProviderError": status.HTTP_502_BAD_GATEWAY,
    "NoPromptsReturnedError": status.HTTP_502_BAD_GATEWAY,
    "JobFailedError": status.HTTP_502_BAD_GATEWAY,
    "UnknownStatusError": status.HTTP_502_BAD_GATEWAY,
}


def status_for_error_type(error_type: str) -> int:
    return ERROR_STATUS_CODES.get(error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)


def status_for_error(error: CartoonGeneratorError) -> int:
    return status_for_error_type(type(error).__name__)
