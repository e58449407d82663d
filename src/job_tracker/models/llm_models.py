"""
LLM-specific data models for request/response cycle.

These models are internal to the LLM layer and handle the raw communication
with the chat-completions API. They are separate from the business models
(JobApplication) so the pipeline only ever sees prompt text in and
response text out.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


class LLMGenerationRequest(BaseModel):
    """
    Internal request model for LLM generation.

    Sent as a single user message to an OpenAI-compatible
    ``/chat/completions`` endpoint.
    """
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., description="Complete prompt, sent as the user message")
    model: str = Field(..., description="Model name/identifier (e.g., 'gpt-4o-mini')")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=2000, ge=1, description="Maximum tokens to generate")
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-call timeout in seconds (client default when None)"
    )


class LLMGenerationResponse(BaseModel):
    """
    Internal response model from LLM generation.

    Contains the raw generated text plus metadata for logging.
    Parsing of the content happens in the validation layer.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text")
    model_version: str = Field(..., description="Model reported by the server")
    finish_reason: Optional[str] = Field(default=None, description="Why generation stopped")
    prompt_tokens: Optional[int] = Field(default=None, description="Tokens in prompt")
    completion_tokens: Optional[int] = Field(default=None, description="Tokens in completion")
    latency_ms: int = Field(..., ge=0, description="Generation latency in milliseconds")
    raw_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific metadata (for debugging)"
    )
