"""
Abstract base client for LLM inference.

Defines the interface that all LLM client implementations must adhere to.
The classification pipeline only depends on ``complete()``: prompt text in,
response text out.
"""

from abc import ABC, abstractmethod
from typing import Optional
import structlog

from job_tracker.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM inference clients.

    Responsibilities:
    - Send generation requests to the inference API
    - Parse responses into standardized format
    - Map transport and API failures to LLMClientError subclasses

    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Response parsing (that's ResponseParser's job)
    - Retries (failed calls skip the email)
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        timeout: float = 60.0,
    ):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the API (e.g., https://api.openai.com/v1)
            model: Model name sent with every request
            temperature: Sampling temperature
            max_tokens: Completion token limit
            timeout: Default request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            model=model,
            timeout=timeout,
        )

    @abstractmethod
    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate a completion.

        Args:
            request: Standardized generation request

        Returns:
            LLMGenerationResponse with generated text and metadata

        Raises:
            LLMConnectionError: Network errors
            LLMTimeoutError: Request exceeded timeout
            LLMGenerationError: API-side errors or unusable response
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the API is reachable.

        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass

    async def complete(self, prompt: str, timeout: Optional[float] = None) -> str:
        """
        Send a single prompt with the client defaults and return the text.

        Args:
            prompt: Prompt text
            timeout: Override of the default timeout (e.g. capped by a deadline)

        Returns:
            Generated text
        """
        request = LLMGenerationRequest(
            prompt=prompt,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=timeout,
        )
        response = await self.generate(request)
        return response.content

    async def close(self):
        """
        Close client connections and cleanup resources.

        Default implementation does nothing.
        """
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"model={self.model}, "
            f"timeout={self.timeout}s)"
        )
