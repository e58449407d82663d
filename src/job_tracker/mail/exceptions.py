"""
Mail source exceptions.

Any MailSourceError is fatal to a run: fetching is not retried.
"""


class MailSourceError(Exception):
    """Base exception for connectivity, authentication and decoding failures."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class GatewayError(MailSourceError):
    """
    The JSON-RPC email gateway failed.

    ``code`` carries the JSON-RPC error code when the gateway returned an
    error object, None for transport or decoding failures.
    """

    def __init__(self, message: str, code: int | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.code = code


class LoginError(GatewayError):
    """The gateway could not start a login session."""
