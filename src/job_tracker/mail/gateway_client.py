"""
JSON-RPC email gateway client.

The gateway owns the mailbox credentials (OAuth or app passwords) and
exposes two JSON-RPC 2.0 methods over a single HTTP endpoint:

- ``email.login``: start a login session; may return a URL to open in a browser
- ``email.fetch``: return the emails matching a query

Communicates using httpx AsyncClient. Calls are not retried.
"""

import json
import time
from typing import Any, Optional

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError

from job_tracker.mail.base import EmailQuery
from job_tracker.mail.exceptions import GatewayError, LoginError
from job_tracker.models.email_models import EmailMessage


logger = structlog.get_logger(__name__)


class JsonRpcError(BaseModel):
    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response envelope; exactly one of result/error is set."""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: str = "2.0"
    id: Optional[str] = None
    result: Any = None
    error: Optional[JsonRpcError] = None


class LoginSession(BaseModel):
    """
    Login session returned by ``email.login``.

    ``login_url`` is empty when no browser step is needed (app passwords).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    session_id: str = ""
    login_url: str = ""
    status: str = ""
    message: str = ""


class GatewayEmailClient:
    """
    Mail source backed by the JSON-RPC email gateway.

    Usage:
        async with GatewayEmailClient(endpoint, "gmail", "me@gmail.com") as gateway:
            session = await gateway.initiate_login()
            emails = await gateway.fetch(query)
    """

    def __init__(
        self,
        endpoint: str,
        provider: str,
        email: str,
        api_key: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            endpoint: Full JSON-RPC URL (e.g., http://localhost:8080/mcp)
            provider: Mailbox provider (gmail, outlook, yahoo, chinese, custom)
            email: Mailbox address
            api_key: Bearer token sent with fetch requests (optional)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.endpoint = endpoint
        self.provider = provider
        self.email = email
        self.api_key = api_key
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport)

    async def _call(self, method: str, request_id: str, params: dict[str, Any], authorize: bool) -> Any:
        payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
        headers = {"Content-Type": "application/json"}
        if authorize and self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        logger.debug("Calling email gateway", method=method, request_id=request_id)

        try:
            response = await self._client.post(self.endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise GatewayError(
                f"HTTP request to email gateway failed: {e}",
                details={"method": method, "error_type": type(e).__name__},
            ) from e

        if response.status_code != 200:
            raise GatewayError(
                f"Email gateway error: {response.text[:500]}",
                details={"method": method, "status": response.status_code},
            )

        try:
            envelope = JsonRpcResponse.model_validate(response.json())
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise GatewayError(
                "Could not decode email gateway response",
                details={"method": method, "error": str(e)},
            ) from e

        if envelope.error is not None:
            raise GatewayError(
                f"Email gateway error: {envelope.error.message}",
                code=envelope.error.code,
                details={"method": method},
            )

        return envelope.result

    async def initiate_login(self) -> LoginSession:
        """
        Start a login session for the mailbox.

        Raises:
            LoginError: If the gateway rejects the request
        """
        try:
            result = await self._call(
                "email.login",
                f"login_{int(time.time())}",
                {"provider": self.provider, "email": self.email},
                authorize=False,
            )
            session = LoginSession.model_validate(result or {})
        except PydanticValidationError as e:
            raise LoginError("Could not decode login session", details={"error": str(e)}) from e
        except GatewayError as e:
            raise LoginError(e.message, code=e.code, details=e.details) from e

        logger.info("Email gateway login initiated", session_id=session.session_id, status=session.status)
        return session

    async def fetch(self, query: EmailQuery) -> list[EmailMessage]:
        """
        Fetch emails through ``email.fetch``.

        Raises:
            GatewayError: On transport, JSON-RPC or decoding failure
        """
        params = {
            "provider": self.provider,
            "email": self.email,
            "start_date": query.start_date.astimezone().isoformat(timespec="seconds"),
            "end_date": query.end_date.astimezone().isoformat(timespec="seconds"),
            "max_emails": query.max_emails,
            "folders": query.folders,
            "keywords": query.keywords,
        }
        result = await self._call("email.fetch", f"fetch_{int(time.time())}", params, authorize=True)

        try:
            emails = [EmailMessage.model_validate(item) for item in (result or [])]
        except (PydanticValidationError, TypeError) as e:
            raise GatewayError("Could not decode emails from gateway", details={"error": str(e)}) from e

        logger.info("Fetched emails from gateway", count=len(emails))
        return emails

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
