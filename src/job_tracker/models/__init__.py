"""
Pydantic data models for JobTracker.

Includes:
- Enums (JobStatus)
- Email models (EmailMessage)
- Application models (JobDetailsPayload, JobApplication)
- LLM models (LLMGenerationRequest, LLMGenerationResponse)
"""

from job_tracker.models.enums import JobStatus
from job_tracker.models.email_models import EmailMessage
from job_tracker.models.application_models import JobDetailsPayload, JobApplication
from job_tracker.models.llm_models import LLMGenerationRequest, LLMGenerationResponse

__all__ = [
    # Enums
    "JobStatus",
    # Email models
    "EmailMessage",
    # Application models
    "JobDetailsPayload",
    "JobApplication",
    # LLM models
    "LLMGenerationRequest",
    "LLMGenerationResponse",
]
