"""
Direct IMAP mail source.

Used when no email gateway is configured. Logs in with an (app) password
over IMAP4_SSL and searches each folder by date range.
"""

import asyncio
import imaplib
import re
from datetime import datetime, timedelta
from email import message_from_bytes
from email.header import decode_header as email_decode_header
from email.message import Message
from email.utils import parsedate_to_datetime
from typing import Optional

import structlog

from job_tracker.mail.base import EmailQuery
from job_tracker.mail.exceptions import MailSourceError
from job_tracker.models.email_models import EmailMessage

logger = structlog.get_logger(__name__)

DEFAULT_IMAP_PORT = 993

_TAG_RE = re.compile(r"<[^>]+>")


def split_host(host: str) -> tuple[str, int]:
    """Split "host:port" into its parts; the port defaults to 993."""
    name, sep, port = host.rpartition(":")
    if sep and port.isdigit():
        return name, int(port)
    return host, DEFAULT_IMAP_PORT


def decode_mime_header(header: Optional[str]) -> str:
    """Decode an RFC 2047 header ('=?UTF-8?B?...?=') to a single line."""
    if not header:
        return ""
    decoded_parts = []
    for part, charset in email_decode_header(header):
        if isinstance(part, bytes):
            decoded_parts.append(part.decode(charset or "utf-8", errors="replace"))
        else:
            decoded_parts.append(part)
    return "".join(decoded_parts).replace("\r\n", "").replace("\n", "")


def extract_bodies(msg: Message) -> tuple[str, str]:
    """Plain-text and HTML bodies of a message, attachments skipped."""
    text_plain = ""
    text_html = ""

    parts = msg.walk() if msg.is_multipart() else [msg]
    for part in parts:
        if "attachment" in part.get("Content-Disposition", ""):
            continue
        payload = part.get_payload(decode=True)
        if not payload:
            continue

        text = payload.decode(part.get_content_charset() or "utf-8", errors="replace")
        content_type = part.get_content_type()
        if content_type == "text/plain":
            text_plain += text
        elif content_type == "text/html":
            text_html += text

    return text_plain, text_html


def html_to_text(html: str) -> str:
    return " ".join(_TAG_RE.sub(" ", html).split())


def parse_message(raw: bytes, uid: str, folder: str) -> Optional[EmailMessage]:
    """
    Build an EmailMessage from raw RFC822 bytes.

    Returns None when the Date header is missing or unparseable.
    """
    msg = message_from_bytes(raw)

    date_header = msg.get("Date")
    if not date_header:
        return None
    try:
        date = parsedate_to_datetime(date_header)
    except (TypeError, ValueError):
        return None

    body_text, body_html = extract_bodies(msg)
    if not body_text and body_html:
        body_text = html_to_text(body_html)

    return EmailMessage(
        id=uid,
        sender=decode_mime_header(msg.get("From")),
        subject=decode_mime_header(msg.get("Subject")),
        date=date,
        body_text=body_text,
        body_html=body_html,
        message_id=msg.get("Message-ID", ""),
        folder=folder,
    )


class ImapEmailFetcher:
    """
    Mail source reading a mailbox directly over IMAP.

    imaplib is blocking, so fetch() runs the whole session in a worker
    thread. A folder that cannot be selected or searched is logged and
    skipped; a failed login aborts the fetch.
    """

    def __init__(self, host: str, email: str, password: str):
        self.host = host
        self.email = email
        self.password = password

    async def fetch(self, query: EmailQuery) -> list[EmailMessage]:
        return await asyncio.to_thread(self._fetch_sync, query)

    def _connect(self) -> imaplib.IMAP4_SSL:
        hostname, port = split_host(self.host)
        logger.info("Connecting to IMAP server", host=hostname, port=port, email=self.email)
        try:
            conn = imaplib.IMAP4_SSL(hostname, port)
        except OSError as e:
            raise MailSourceError(
                f"Could not connect to IMAP server {hostname}:{port}: {e}",
                details={"host": hostname, "port": port},
            ) from e

        try:
            conn.login(self.email, self.password)
        except imaplib.IMAP4.error as e:
            try:
                conn.logout()
            except (imaplib.IMAP4.error, OSError):
                pass
            raise MailSourceError(
                f"IMAP login failed for {self.email}: {e}",
                details={"host": hostname},
            ) from e
        return conn

    def _fetch_sync(self, query: EmailQuery) -> list[EmailMessage]:
        conn = self._connect()
        emails: list[EmailMessage] = []
        try:
            for folder in query.folders:
                remaining = query.max_emails - len(emails)
                if remaining <= 0:
                    break
                try:
                    emails.extend(self._fetch_folder(conn, folder, query, remaining))
                except (imaplib.IMAP4.error, OSError) as e:
                    logger.warning("Skipping IMAP folder", folder=folder, error=str(e))
        finally:
            try:
                conn.logout()
            except (imaplib.IMAP4.error, OSError):
                pass

        logger.info("Fetched emails over IMAP", count=len(emails), folders=query.folders)
        return emails

    def _fetch_folder(
        self,
        conn: imaplib.IMAP4_SSL,
        folder: str,
        query: EmailQuery,
        limit: int,
    ) -> list[EmailMessage]:
        status, _ = conn.select(_quote_folder(folder), readonly=True)
        if status != "OK":
            raise imaplib.IMAP4.error(f"cannot select folder {folder}")

        status, data = conn.uid("SEARCH", None, fetch_date_range(query.start_date, query.end_date))
        if status != "OK":
            raise imaplib.IMAP4.error(f"search failed in {folder}")

        uids = data[0].split() if data and data[0] else []
        logger.info("Searching IMAP folder", folder=folder, matches=len(uids))

        emails: list[EmailMessage] = []
        for uid in uids:
            if len(emails) >= limit:
                break
            uid_str = uid.decode()
            status, msg_data = conn.uid("FETCH", uid, "(RFC822)")
            if status != "OK" or not msg_data or not isinstance(msg_data[0], tuple):
                logger.warning("IMAP fetch returned no data", folder=folder, uid=uid_str)
                continue

            email = parse_message(msg_data[0][1], uid_str, folder)
            if email is None:
                logger.warning("Skipping email without a valid Date header", folder=folder, uid=uid_str)
                continue
            emails.append(email)

        return emails


def _quote_folder(folder: str) -> str:
    # Folder names like "[Gmail]/Sent Mail" contain spaces
    if folder.startswith('"') or " " not in folder:
        return folder
    return f'"{folder}"'


def fetch_date_range(start: datetime, end: datetime) -> str:
    """IMAP SEARCH criteria covering ``start`` through ``end`` inclusive."""
    # BEFORE is exclusive
    before = end + timedelta(days=1)
    return f"(SINCE {start.strftime('%d-%b-%Y')} BEFORE {before.strftime('%d-%b-%Y')})"
