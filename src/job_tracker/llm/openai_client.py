"""
OpenAI-compatible chat-completions client.

Communicates with any ``/chat/completions`` API (OpenAI, DeepSeek, vLLM,
Ollama's OpenAI endpoint...) using httpx AsyncClient. Supports:
- Single user-message prompts
- Per-call timeout override
- Health checks via GET /models

There is no retry loop: a failed call is reported to the caller, which
skips the email.
"""

import json
import time
from typing import Optional
import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from job_tracker.llm.base_client import BaseLLMClient
from job_tracker.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from job_tracker.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from job_tracker.monitoring.metrics import llm_latency_seconds


logger = structlog.get_logger(__name__)


class OpenAICompatibleClient(BaseLLMClient):
    """
    LLM client for OpenAI-compatible chat-completions APIs.

    API Endpoints:
    - POST {base_url}/chat/completions: generate completion
    - GET {base_url}/models: list models (health check)
    """

    def __init__(
        self,
        base_url: str = "https://api.openai.com/v1",
        api_key: str = "",
        model: str = "gpt-4o-mini",
        temperature: float = 0.1,
        max_tokens: int = 2000,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL, without the /chat/completions suffix
            api_key: Bearer token (omitted from headers when empty)
            model: Model name
            temperature: Sampling temperature
            max_tokens: Completion token limit
            timeout: Default request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(base_url, model, temperature, max_tokens, timeout)
        self.api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"Content-Type": "application/json"}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                follow_redirects=True,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate completion via POST /chat/completions.

        Payload:
        {
            "model": "gpt-4o-mini",
            "messages": [{"role": "user", "content": "..."}],
            "temperature": 0.1,
            "max_tokens": 2000
        }

        Response:
        {
            "model": "gpt-4o-mini",
            "choices": [{"message": {"content": "..."}, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 50, "completion_tokens": 10}
        }
        """
        start_time = time.monotonic()
        timeout = request.timeout or self.timeout

        payload = {
            "model": request.model,
            "messages": [{"role": "user", "content": request.prompt}],
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

        logger.debug(
            "Sending chat completion request",
            model=request.model,
            prompt_length=len(request.prompt),
            timeout=timeout,
        )

        try:
            client = await self._get_client()
            response = await client.post("/chat/completions", json=payload, timeout=timeout)
        except httpx.TimeoutException as e:
            self._observe(request.model, start_time, success=False)
            raise LLMTimeoutError(
                f"Request timeout after {timeout}s",
                details={"timeout": timeout, "error": str(e)},
            ) from e
        except httpx.TransportError as e:
            self._observe(request.model, start_time, success=False)
            raise LLMConnectionError(
                f"Network error: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if response.status_code != 200:
            self._observe(request.model, start_time, success=False)
            raise self._status_error(response)

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            self._observe(request.model, start_time, success=False)
            raise LLMGenerationError(
                "Invalid JSON response from LLM API",
                details={"parse_error": str(e), "body": response.text[:500]},
            ) from e

        if not isinstance(data, dict):
            self._observe(request.model, start_time, success=False)
            raise LLMGenerationError(
                "LLM response is not a JSON object",
                details={"body": response.text[:500]},
            )

        choices = data.get("choices") or []
        if not isinstance(choices, list) or not choices:
            self._observe(request.model, start_time, success=False)
            raise LLMGenerationError("No choices in LLM response", details={"response": data})

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            self._observe(request.model, start_time, success=False)
            raise LLMGenerationError("Malformed choice in LLM response", details={"choice": first})

        content = message.get("content") or ""
        if not isinstance(content, str):
            self._observe(request.model, start_time, success=False)
            raise LLMGenerationError("Non-text message content in LLM response", details={"choice": first})

        usage = data.get("usage") if isinstance(data.get("usage"), dict) else {}
        model_version = data.get("model")
        if not isinstance(model_version, str) or not model_version:
            model_version = request.model
        latency_ms = self._observe(model_version, start_time, success=True)

        logger.debug(
            "Chat completion successful",
            model=model_version,
            latency_ms=latency_ms,
            prompt_tokens=usage.get("prompt_tokens"),
            completion_tokens=usage.get("completion_tokens"),
        )

        try:
            return LLMGenerationResponse(
                content=content,
                model_version=model_version,
                finish_reason=first.get("finish_reason"),
                prompt_tokens=usage.get("prompt_tokens"),
                completion_tokens=usage.get("completion_tokens"),
                latency_ms=latency_ms,
                raw_metadata={"id": data.get("id")},
            )
        except PydanticValidationError as e:
            raise LLMGenerationError(
                "Malformed metadata in LLM response",
                details={"errors": e.errors(include_url=False)},
            ) from e

    @staticmethod
    def _observe(model: str, start_time: float, success: bool) -> int:
        elapsed = time.monotonic() - start_time
        llm_latency_seconds.labels(model=model, success=str(success).lower()).observe(elapsed)
        return int(elapsed * 1000)

    @staticmethod
    def _status_error(response: httpx.Response) -> LLMGenerationError:
        status_code = response.status_code
        details = {"status": status_code, "error": response.text[:500]}

        logger.warning("LLM API HTTP error", status_code=status_code)

        if status_code in (401, 403):
            return LLMAuthenticationError(f"LLM API rejected credentials: {status_code}", details)
        if status_code == 429:
            return LLMRateLimitError("LLM API rate limit exceeded", details)
        return LLMGenerationError(f"LLM API error: {status_code}", details)

    async def health_check(self) -> bool:
        """
        Check API reachability via GET /models.

        Returns True if the server answers 2xx, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get("/models", timeout=10.0)
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning("LLM API health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed LLM client connection")
