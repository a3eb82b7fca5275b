class PromptBuilderError(Exception):
    """Base exception for the prompt builder.

    ``code`` is the machine-readable tag returned as ``error`` in HTTP
    responses; ``status_code`` is the HTTP status the API layer maps it to.
    """

    code: str = "PROMPT_BUILDER_ERROR"
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PromptValidationError(PromptBuilderError):
    """Raised when a request fails local validation before any network call."""

    code = "VALIDATION_ERROR"
    status_code = 400


class GenerationFailedError(PromptBuilderError):
    """Raised when the upstream language-model call does not yield usable text."""

    code = "GENERATION_FAILED"
    status_code = 502

    def __init__(self, message: str, upstream_status: int | None = None):
        self.upstream_status = upstream_status
        super().__init__(message)


class UnknownConstraintKindError(PromptBuilderError, ValueError):
    """Raised when a constraint carries a kind outside the known set."""

    code = "UNKNOWN_CONSTRAINT_KIND"
    status_code = 422

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unknown constraint kind: {kind!r}")


class RateLimitExceededError(PromptBuilderError):
    """Raised when a client exceeds the request ceiling for the current window."""

    code = "RATE_LIMITED"
    status_code = 429

    def __init__(self, key: str, retry_after: float):
        self.key = key
        self.retry_after = retry_after
        super().__init__(f"Too many requests. Retry in {retry_after:.0f} seconds.")
