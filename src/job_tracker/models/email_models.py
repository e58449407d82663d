"""
Email data models.

EmailMessage is produced by a mail source (gateway, IMAP or mock) and is
read-only for the classification pipeline.
"""

from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, AliasChoices


class EmailMessage(BaseModel):
    """
    A single email under analysis.

    Field aliases accept the gateway wire format (``from``, ``body_text``...)
    as well as the Python attribute names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="Source-specific identifier (IMAP UID, gateway id)")
    sender: str = Field(
        default="",
        validation_alias=AliasChoices("sender", "from"),
        description="From address",
    )
    subject: str = Field(default="", description="Decoded subject line")
    date: datetime = Field(..., description="Date the email was sent")
    body_text: str = Field(default="", description="Plain-text body")
    body_html: str = Field(default="", description="HTML body, empty when absent")
    message_id: str = Field(default="", description="RFC5322 Message-ID header")
    folder: str = Field(default="INBOX", description="Source folder label")
