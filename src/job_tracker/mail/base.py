"""
Mail source contract shared by the gateway, IMAP and mock sources.
"""

from datetime import datetime
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from job_tracker.models.email_models import EmailMessage


class EmailQuery(BaseModel):
    """Time range, folders and size limit of one fetch."""

    model_config = ConfigDict(frozen=True)

    start_date: datetime
    end_date: datetime
    max_emails: int = Field(default=100, ge=1)
    folders: list[str] = Field(default_factory=lambda: ["INBOX"])
    keywords: list[str] = Field(default_factory=list)


class MailSource(Protocol):
    """Anything that can turn an EmailQuery into an ordered list of emails."""

    async def fetch(self, query: EmailQuery) -> list[EmailMessage]:
        """
        Raises:
            MailSourceError: On connectivity, authentication or decoding failure
        """
        ...
