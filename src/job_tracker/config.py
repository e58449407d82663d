"""
Configuration settings for JobTracker.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when the settings are not usable for the requested run."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "JobTracker"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Mailbox ===
    EMAIL_ADDRESS: str = ""
    EMAIL_PROVIDER: str = ""  # inferred from EMAIL_ADDRESS when empty
    EMAIL_PASSWORD: str = ""
    EMAIL_APP_PASSWORD: str = ""
    IMAP_HOST: str = ""  # host or host:port, inferred when empty
    IMAP_FOLDERS: list[str] = []  # provider defaults when empty

    # === Email Gateway (JSON-RPC) ===
    GATEWAY_ENDPOINT: str = ""  # e.g. http://localhost:8080/mcp; IMAP is used when empty
    GATEWAY_API_KEY: str = ""
    GATEWAY_TIMEOUT: float = 30.0  # seconds
    LOGIN_WAIT_SECONDS: float = 30.0

    # === Fetch ===
    FETCH_START: str = ""  # YYYY-MM-DD or RFC3339, default 7 days ago
    FETCH_END: str = ""  # YYYY-MM-DD or RFC3339, default now
    FETCH_MAX_EMAILS: int = 100
    FETCH_KEYWORDS: list[str] = [
        "job", "interview", "offer", "application", "招聘", "面试", "职位", "工作",
    ]

    # === LLM ===
    LLM_API_BASE: str = "https://api.openai.com/v1"
    LLM_API_KEY: str = ""
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.1
    LLM_MAX_TOKENS: int = 2000
    LLM_TIMEOUT: float = 60.0  # seconds, per call
    REQUEST_DELAY_SECONDS: float = 0.5  # pause after each classified email
    ANALYSIS_TIMEOUT: float = 300.0  # deadline for the whole batch

    # === Prompting ===
    RELEVANCE_BODY_LIMIT: int = 1000  # chars
    DETAIL_BODY_LIMIT: int = 2000  # chars
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # packaged templates when None

    # === Export ===
    EXPORT_FILE: str = ""  # default job_applications_<timestamp>.csv
    STATISTICS_FILE: str = ""  # default job_statistics_<timestamp>.csv
    EXPORT_TOP_N: int = 10
    CONSOLE_TOP_N: int = 5

    # === Monitoring ===
    METRICS_TEXTFILE: Optional[str] = None  # Prometheus textfile collector output

    @property
    def email_provider(self) -> str:
        return self.EMAIL_PROVIDER or infer_email_provider(self.EMAIL_ADDRESS)

    @property
    def imap_host(self) -> str:
        return self.IMAP_HOST or infer_imap_host(self.EMAIL_ADDRESS)

    @property
    def imap_folders(self) -> list[str]:
        return self.IMAP_FOLDERS or default_folders(self.email_provider)

    @property
    def email_password(self) -> str:
        return self.EMAIL_PASSWORD or self.EMAIL_APP_PASSWORD

    def fetch_window(self, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        """Resolve FETCH_START/FETCH_END into concrete datetimes."""
        now = now or datetime.now()
        start = parse_date_loose(self.FETCH_START, now - timedelta(days=7))
        end = parse_date_loose(self.FETCH_END, now)
        return start, end

    def export_paths(self, now: Optional[datetime] = None) -> tuple[str, str]:
        """Output paths for the applications and statistics CSV files."""
        stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
        return (
            self.EXPORT_FILE or f"job_applications_{stamp}.csv",
            self.STATISTICS_FILE or f"job_statistics_{stamp}.csv",
        )

    def validate_for_fetch(self) -> None:
        """
        Check the settings needed for a real (non-mock) run.

        Raises:
            ConfigurationError: if the mailbox or LLM endpoint is missing
        """
        if not self.EMAIL_ADDRESS:
            raise ConfigurationError("EMAIL_ADDRESS is required")
        if not self.LLM_API_BASE:
            raise ConfigurationError("LLM_API_BASE is required")
        if not self.GATEWAY_ENDPOINT:
            if not self.imap_host:
                raise ConfigurationError(
                    f"Cannot infer IMAP host for {self.EMAIL_ADDRESS}, set IMAP_HOST"
                )
            if not self.email_password:
                raise ConfigurationError("EMAIL_PASSWORD or EMAIL_APP_PASSWORD is required for IMAP")


def infer_email_provider(email: str) -> str:
    """Guess the mailbox provider from the address domain."""
    email = email.lower()

    if "@gmail.com" in email or "@googlemail.com" in email:
        return "gmail"
    if "@outlook.com" in email or "@hotmail.com" in email or "@live.com" in email:
        return "outlook"
    if "@yahoo.com" in email or "@yahoo.co." in email:
        return "yahoo"
    if "@qq.com" in email or "@163.com" in email or "@126.com" in email:
        return "chinese"
    return "custom"


_IMAP_HOSTS = {
    "@gmail.com": "imap.gmail.com:993",
    "@googlemail.com": "imap.gmail.com:993",
    "@outlook.com": "outlook.office365.com:993",
    "@hotmail.com": "outlook.office365.com:993",
    "@live.com": "outlook.office365.com:993",
    "@yahoo.com": "imap.mail.yahoo.com:993",
    "@qq.com": "imap.qq.com:993",
    "@163.com": "imap.163.com:993",
    "@126.com": "imap.126.com:993",
}


def infer_imap_host(email: str) -> str:
    """Known IMAP host for the address domain, or "" when it must be configured."""
    email = email.lower()
    for domain, host in _IMAP_HOSTS.items():
        if email.endswith(domain):
            return host
    return ""


def default_folders(provider: str) -> list[str]:
    if provider == "gmail":
        return ["INBOX", "[Gmail]/Sent Mail", "[Gmail]/All Mail"]
    if provider == "outlook":
        return ["INBOX", "Sent Items"]
    if provider == "yahoo":
        return ["INBOX", "Sent"]
    return ["INBOX"]


def parse_date_loose(value: str, default: datetime) -> datetime:
    """
    Parse ``YYYY-MM-DD`` or RFC3339, falling back to ``default``.

    Unparseable input is not an error: the fetch window simply keeps its default.
    """
    if not value:
        return default
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return default


# Global settings instance
settings = Settings()
