"""
Output data models for the classification pipeline.

JobDetailsPayload is the decoded LLM answer (all strings, already cleaned);
JobApplication is the final, immutable outcome for one relevant email.
"""

from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator

from job_tracker.models.email_models import EmailMessage
from job_tracker.models.enums import JobStatus


class JobDetailsPayload(BaseModel):
    """
    Structured fields returned by the detail-extraction prompt.

    Every field is optional in the LLM output: missing or null values
    become empty strings. ``status`` is still free text at this point and is
    normalized into a JobStatus by the analyzer.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    company: str = ""
    position: str = ""
    status: str = ""
    location: str = ""
    description: str = ""

    @field_validator("company", "position", "status", "location", "description", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """LLMs often answer ``null`` for unknown optional fields."""
        return "" if v is None else v


class JobApplication(BaseModel):
    """
    Classification outcome for one job-related email.

    Created at most once per EmailMessage (only when the relevance check
    is positive) and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    company: str = Field(default="", description="Company name")
    position: str = Field(default="", description="Position / job title")
    status: JobStatus = Field(..., description="Normalized application status")
    location: str = Field(default="", description="Work location (optional)")
    description: str = Field(default="", description="Short description of the current status")
    email: EmailMessage = Field(..., description="Originating email")
    extracted_at: datetime = Field(..., description="When the details were extracted")
