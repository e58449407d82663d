"""
Mail sources.

Components:
- GatewayEmailClient: JSON-RPC email gateway (email.login / email.fetch)
- ImapEmailFetcher: direct IMAP over SSL
- MockMailSource: built-in sample emails
- EmailQuery / MailSource: fetch request and source protocol
"""

from job_tracker.mail.base import EmailQuery, MailSource
from job_tracker.mail.exceptions import GatewayError, LoginError, MailSourceError
from job_tracker.mail.gateway_client import GatewayEmailClient, LoginSession
from job_tracker.mail.imap_fetcher import ImapEmailFetcher
from job_tracker.mail.mock_source import MockMailSource, sample_emails

__all__ = [
    "EmailQuery",
    "MailSource",
    "MailSourceError",
    "GatewayError",
    "LoginError",
    "GatewayEmailClient",
    "LoginSession",
    "ImapEmailFetcher",
    "MockMailSource",
    "sample_emails",
]
