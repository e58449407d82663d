"""Unit test fixtures (mocks and stubs).

Provides an in-memory LLM client so the pipeline can be tested without
any network access.
"""

import json
from typing import Optional, Union

import pytest

from job_tracker.llm.base_client import BaseLLMClient
from job_tracker.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


class ScriptedLLMClient(BaseLLMClient):
    """
    LLM client answering from a fixed script, in call order.

    Each script entry is response text, an exception instance to raise, or
    a zero-argument callable producing either (for side effects mid-batch).
    Every request is recorded for assertions.
    """

    def __init__(self, script: list[Union[str, Exception]], timeout: float = 60.0):
        super().__init__(base_url="http://llm.test/v1", model="test-model", timeout=timeout)
        self.script = list(script)
        self.requests: list[LLMGenerationRequest] = []

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        self.requests.append(request)
        if not self.script:
            raise AssertionError("ScriptedLLMClient ran out of responses")
        answer = self.script.pop(0)
        if callable(answer):
            answer = answer()
        if isinstance(answer, Exception):
            raise answer
        return LLMGenerationResponse(content=answer, model_version=self.model, latency_ms=1)

    async def health_check(self) -> bool:
        return True

    @property
    def prompts(self) -> list[str]:
        return [request.prompt for request in self.requests]

    @property
    def timeouts(self) -> list[Optional[float]]:
        return [request.timeout for request in self.requests]


@pytest.fixture
def scripted_llm():
    """Factory: scripted_llm(["yes", details_json(...)]) -> ScriptedLLMClient."""

    def _make(script, timeout: float = 60.0) -> ScriptedLLMClient:
        return ScriptedLLMClient(script, timeout=timeout)

    return _make


def details_json(company: str = "Acme", position: str = "Engineer", status: str = "Applied", **extra) -> str:
    """A detail-extraction answer as the LLM would send it."""
    payload = {
        "company": company,
        "position": position,
        "status": status,
        "location": extra.pop("location", ""),
        "description": extra.pop("description", ""),
    }
    payload.update(extra)
    return json.dumps(payload, ensure_ascii=False)


@pytest.fixture
def details():
    """Expose details_json() to tests."""
    return details_json
