"""
Prompt builder for LLM requests.

Responsible for:
- Loading and rendering Jinja2 templates (relevance + detail prompts)
- Truncating the email body (plain character cut with ellipsis)
- Listing the allowed JobStatus values in the detail prompt
"""

from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader, StrictUndefined
import structlog

from job_tracker.models.email_models import EmailMessage
from job_tracker.models.enums import JobStatus
from job_tracker.llm.text_utils import truncate_text


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

RELEVANCE_TEMPLATE = "relevance_prompt.txt"
DETAIL_TEMPLATE = "detail_prompt.txt"


class PromptBuilder:
    """
    Build the two prompts sent for each email.

    - Relevance prompt: sender, subject, body cut to ``relevance_body_limit``;
      asks for a bare yes/no answer.
    - Detail prompt: sender, subject, ISO date, body cut to
      ``detail_body_limit``; asks for a JSON object with company, position,
      status, location and description.

    Building a prompt has no side effects.
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        relevance_body_limit: int = 1000,
        detail_body_limit: int = 2000,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing prompt templates (packaged ones when None)
            relevance_body_limit: Max body characters in the relevance prompt
            detail_body_limit: Max body characters in the detail prompt
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.relevance_body_limit = relevance_body_limit
        self.detail_body_limit = detail_body_limit

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False  # We're generating prompts, not HTML
        )

        try:
            self.relevance_template = self.jinja_env.get_template(RELEVANCE_TEMPLATE)
            self.detail_template = self.jinja_env.get_template(DETAIL_TEMPLATE)
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e), templates_dir=str(self.templates_dir))
            raise

        logger.debug(
            "PromptBuilder initialized",
            templates_dir=str(self.templates_dir),
            relevance_body_limit=relevance_body_limit,
            detail_body_limit=detail_body_limit,
        )

    def build_relevance_prompt(self, email: EmailMessage) -> str:
        """
        Render the job-relevance question for one email.

        Args:
            email: Email to check

        Returns:
            Rendered prompt
        """
        return self.relevance_template.render(
            sender=email.sender,
            subject=email.subject,
            body=truncate_text(email.body_text, self.relevance_body_limit),
        ).strip()

    def build_detail_prompt(self, email: EmailMessage) -> str:
        """
        Render the detail-extraction request for one email.

        Args:
            email: Email already judged job-related

        Returns:
            Rendered prompt
        """
        return self.detail_template.render(
            sender=email.sender,
            subject=email.subject,
            date=email.date.strftime("%Y-%m-%d"),
            body=truncate_text(email.body_text, self.detail_body_limit),
            statuses=list(JobStatus),
        ).strip()
