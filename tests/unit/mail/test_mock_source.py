"""Unit tests for the built-in sample emails."""

from datetime import datetime, timedelta

import pytest

from job_tracker.mail.base import EmailQuery
from job_tracker.mail.mock_source import MockMailSource, sample_emails

NOW = datetime(2026, 3, 10, 9, 0, 0)


class TestSampleEmails:
    """Test the sample data."""

    def test_three_samples(self):
        emails = sample_emails(NOW)

        assert [e.id for e in emails] == ["1", "2", "3"]
        assert emails[1].sender == "hr@techcorp.com"
        assert emails[1].subject == "邀请您参加在线技术测试"
        assert emails[2].subject == "Interview Invitation - Frontend Developer Position"

    def test_dates_relative_to_now(self):
        emails = sample_emails(NOW)
        assert [NOW - e.date for e in emails] == [timedelta(days=1), timedelta(days=3), timedelta(days=5)]

    def test_html_wraps_text(self):
        for email in sample_emails(NOW):
            assert email.body_html == f"<p>{email.body_text}</p>"


class TestMockMailSource:
    """Test the MailSource implementation."""

    @pytest.mark.asyncio
    async def test_fetch_ignores_window(self):
        source = MockMailSource(clock=lambda: NOW)
        query = EmailQuery(start_date=datetime(2020, 1, 1), end_date=datetime(2020, 1, 2))

        emails = await source.fetch(query)

        assert len(emails) == 3

    @pytest.mark.asyncio
    async def test_fetch_respects_max_emails(self):
        source = MockMailSource(clock=lambda: NOW)
        query = EmailQuery(start_date=NOW, end_date=NOW, max_emails=2)

        assert len(await source.fetch(query)) == 2
