"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit tests.
"""

from datetime import datetime

import pytest

from job_tracker.config import Settings
from job_tracker.models.application_models import JobApplication
from job_tracker.models.email_models import EmailMessage
from job_tracker.models.enums import JobStatus


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults, isolated from any local .env file.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.model_copy(update={"LLM_MODEL": "other"})
    """
    return Settings(
        _env_file=None,
        # === Application ===
        APP_NAME="JobTracker (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        # === Mailbox ===
        EMAIL_ADDRESS="candidate@gmail.com",
        EMAIL_APP_PASSWORD="app-password",
        # === LLM ===
        LLM_API_BASE="http://llm.test/v1",
        LLM_API_KEY="test-key",
        LLM_MODEL="test-model",
        REQUEST_DELAY_SECONDS=0,
    )


@pytest.fixture
def sample_email() -> EmailMessage:
    """An English interview invitation."""
    return EmailMessage(
        id="42",
        sender="recruitment@startup.io",
        subject="Interview Invitation - Frontend Developer Position",
        date=datetime(2026, 3, 2, 14, 30, 0),
        body_text="We would like to invite you for an interview for the Frontend Developer position.",
        body_html="<p>We would like to invite you for an interview.</p>",
        folder="INBOX",
    )


@pytest.fixture
def make_email():
    """Factory for EmailMessage with overridable fields."""

    def _make(index: int = 1, **overrides) -> EmailMessage:
        fields = {
            "id": str(index),
            "sender": f"hr{index}@company{index}.com",
            "subject": f"Email {index}",
            "date": datetime(2026, 3, index % 28 + 1, 9, 0, 0),
            "body_text": f"Body of email {index}",
            "folder": "INBOX",
        }
        fields.update(overrides)
        return EmailMessage(**fields)

    return _make


@pytest.fixture
def make_application(make_email):
    """Factory for JobApplication; company and status are the usual knobs."""

    def _make(company: str = "Acme", status: JobStatus = JobStatus.APPLIED, index: int = 1, **overrides):
        fields = {
            "company": company,
            "position": "Software Engineer",
            "status": status,
            "location": "Remote",
            "description": "Application received",
            "email": make_email(index),
            "extracted_at": datetime(2026, 3, 10, 12, 0, 0),
        }
        fields.update(overrides)
        return JobApplication(**fields)

    return _make
