"""
Built-in sample emails for ``--mock`` runs.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

import structlog

from job_tracker.mail.base import EmailQuery
from job_tracker.models.email_models import EmailMessage

logger = structlog.get_logger(__name__)

# (id, sender, subject, body, days ago)
_SAMPLES = [
    (
        "1",
        "noreply@company.com",
        "感谢您投递简历 - 软件工程师职位",
        "感谢您投递我们公司软件工程师职位的简历。我们已收到您的申请，将在3-5个工作日内回复。",
        1,
    ),
    (
        "2",
        "hr@techcorp.com",
        "邀请您参加在线技术测试",
        "恭喜您通过简历筛选！我们邀请您参加在线技术测试，请在48小时内完成。",
        3,
    ),
    (
        "3",
        "recruitment@startup.io",
        "Interview Invitation - Frontend Developer Position",
        "We would like to invite you for an interview for the Frontend Developer position. "
        "Please confirm your availability.",
        5,
    ),
]


def sample_emails(now: Optional[datetime] = None) -> list[EmailMessage]:
    """The three sample emails, dated 1, 3 and 5 days before ``now``."""
    now = now or datetime.now()
    return [
        EmailMessage(
            id=email_id,
            sender=sender,
            subject=subject,
            date=now - timedelta(days=days_ago),
            body_text=body,
            body_html=f"<p>{body}</p>",
            folder="INBOX",
        )
        for email_id, sender, subject, body, days_ago in _SAMPLES
    ]


class MockMailSource:
    """MailSource returning the sample emails regardless of the query window."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or datetime.now

    async def fetch(self, query: EmailQuery) -> list[EmailMessage]:
        emails = sample_emails(self._clock())[:query.max_emails]
        logger.info("Using mock emails", count=len(emails))
        return emails
