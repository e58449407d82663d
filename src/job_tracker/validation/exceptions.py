"""
Exceptions raised while decoding LLM responses.

The analyzer catches ValidationError, logs it with its details and skips
the email; the batch continues.
"""

from typing import Any


class ValidationError(Exception):
    """
    Base exception for all response decoding errors.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error description
            details: Structured error data for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class JSONParseError(ValidationError):
    """
    The LLM response does not contain a decodable JSON object.
    """

    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Initialize JSON parse error.

        Args:
            message: Error description
            raw_content: Offending response text (first 500 chars kept)
            parse_error: Original json.JSONDecodeError message
        """
        details = {}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error

        super().__init__(message, details)


class SchemaValidationError(ValidationError):
    """
    The decoded JSON object has fields of the wrong type.
    """

    def __init__(
        self,
        message: str,
        validation_errors: list[str] | None = None,
        raw_content: str | None = None,
    ):
        """
        Initialize schema validation error.

        Args:
            message: Error description
            validation_errors: pydantic error messages
            raw_content: Offending response text (first 500 chars kept)
        """
        details: dict[str, Any] = {}
        if validation_errors:
            details["validation_errors"] = validation_errors
        if raw_content:
            details["content_snippet"] = raw_content[:500]

        super().__init__(message, details)
