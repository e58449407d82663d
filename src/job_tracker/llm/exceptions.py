"""
Custom exceptions for the LLM client layer.

These exceptions give the classification pipeline a single family to
catch: any LLMClientError skips the current email without aborting the
batch. Subclasses let callers tell timeouts apart from other failures.
"""


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.

    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to connect to the LLM API.

    Includes network errors, DNS failures, refused connections, etc.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """
    Raised when a completion call exceeds its timeout.

    Separate from generic connection errors: when the batch deadline is
    also exhausted the analyzer stops the whole batch instead of skipping.
    """
    pass


class LLMGenerationError(LLMClientError):
    """
    Raised when the API returns an error or an unusable response.

    Examples:
    - Non-2xx status not covered by a more specific subclass
    - Response body that is not JSON
    - Response without any choices
    """
    pass


class LLMRateLimitError(LLMGenerationError):
    """Raised on HTTP 429 (rate limit or exhausted quota)."""
    pass


class LLMAuthenticationError(LLMGenerationError):
    """Raised on HTTP 401/403 (missing or invalid API key)."""
    pass
