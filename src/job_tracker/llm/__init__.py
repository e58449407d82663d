"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for LLM clients
- OpenAICompatibleClient: Implementation for chat-completions APIs
- PromptBuilder: Renders relevance and detail prompts from an EmailMessage
- text_utils: Truncation and whitespace cleanup
- exceptions: LLM-specific exceptions
"""

from job_tracker.llm.base_client import BaseLLMClient
from job_tracker.llm.openai_client import OpenAICompatibleClient
from job_tracker.llm.prompt_builder import PromptBuilder
from job_tracker.llm.exceptions import (
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    LLMTimeoutError,
    LLMAuthenticationError,
)

__all__ = [
    "BaseLLMClient",
    "OpenAICompatibleClient",
    "PromptBuilder",
    "LLMClientError",
    "LLMConnectionError",
    "LLMGenerationError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "LLMAuthenticationError",
]
