"""Domain exceptions raised below the HTTP layer and mapped by the error handler."""

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
QUOTA_MESSAGE = "AI credits depleted. Please add credits to continue."
UPSTREAM_FAILURE_MESSAGE = "Failed to get AI response"


class TutorError(Exception):
    status_code = 500
    error_type = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(TutorError):
    status_code = 400
    error_type = "invalid_request"


class ConfigurationError(TutorError):
    status_code = 500
    error_type = "configuration_error"


class UpstreamError(TutorError):
    """Non-success answer from the model API, classified by its HTTP status."""

    def __init__(self, upstream_status: int | None, detail: str = ""):
        self.upstream_status = upstream_status
        self.detail = detail
        self.status_code, self.error_type, message = classify_upstream_status(upstream_status)
        super().__init__(message)


def classify_upstream_status(status: int | None) -> tuple[int, str, str]:
    """Return (response status, error type, client message) for an upstream status."""
    if status == 429:
        return 429, "rate_limit", RATE_LIMIT_MESSAGE
    if status == 402:
        return 402, "quota_exhausted", QUOTA_MESSAGE
    return 500, "upstream_error", UPSTREAM_FAILURE_MESSAGE
