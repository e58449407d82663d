"""
Classification pipeline: job-related email detection and detail extraction.

For each email, strictly in input order:

1. Relevance check: relevance prompt, yes/no answer.
2. Detail extraction (relevant emails only): detail prompt, JSON parsing,
   status normalization, JobApplication construction.

LLM and parse failures skip the email without aborting the batch.
Cancellation is checked between emails; partial results travel with the
AnalysisCancelledError.

Usage:
    analyzer = JobAnalyzer(llm_client, request_delay=0.5)
    applications = await analyzer.analyze_emails(emails, CancellationToken.with_timeout(300))
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional, Sequence

import structlog

from job_tracker.analysis.cancellation import CancellationToken
from job_tracker.analysis.exceptions import AnalysisCancelledError
from job_tracker.llm.base_client import BaseLLMClient
from job_tracker.llm.exceptions import LLMClientError, LLMTimeoutError
from job_tracker.llm.prompt_builder import PromptBuilder
from job_tracker.models.application_models import JobApplication
from job_tracker.models.email_models import EmailMessage
from job_tracker.monitoring.metrics import applications_by_status_total, emails_analyzed_total
from job_tracker.validation.exceptions import ValidationError
from job_tracker.validation.response_parser import ResponseParser
from job_tracker.validation.status_normalizer import normalize_status

logger = structlog.get_logger(__name__)

AFFIRMATIVE_ANSWERS = ("yes", "是")


def is_affirmative(answer: str) -> bool:
    """
    Interpret the relevance answer.

    Trimmed and case-folded, the answer is positive when it is exactly
    "yes" or "是", or when it contains "是" anywhere.
    """
    answer = answer.strip().casefold()
    return answer in AFFIRMATIVE_ANSWERS or "是" in answer


class JobAnalyzer:
    """
    Sequential two-phase classifier for a batch of emails.

    Attributes:
        llm_client: Text-in/text-out classifier
        prompt_builder: Builds relevance and detail prompts
        response_parser: Decodes detail answers
        request_delay: Pause in seconds after each email that reached the LLM
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: Optional[PromptBuilder] = None,
        response_parser: Optional[ResponseParser] = None,
        request_delay: float = 0.5,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            llm_client: LLM client used for both phases
            prompt_builder: Prompt builder (default limits when None)
            response_parser: Response parser (default when None)
            request_delay: Rate-limit pause after each classified email
            clock: Source of ``extracted_at`` timestamps (datetime.now when None)
        """
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.response_parser = response_parser or ResponseParser()
        self.request_delay = request_delay
        self._clock = clock or datetime.now

    async def _complete(self, prompt: str, cancel_token: Optional[CancellationToken]) -> str:
        timeout = None
        if cancel_token is not None:
            timeout = cancel_token.cap_timeout(self.llm_client.timeout)
            if cancel_token.deadline_exceeded or (timeout is not None and timeout <= 0):
                raise LLMTimeoutError("Batch deadline exhausted before LLM call")
        return await self.llm_client.complete(prompt, timeout=timeout)

    async def is_job_related(
        self,
        email: EmailMessage,
        cancel_token: Optional[CancellationToken] = None,
    ) -> bool:
        """
        Ask the LLM whether an email concerns a job search.

        Raises:
            LLMClientError: If the LLM call fails
        """
        prompt = self.prompt_builder.build_relevance_prompt(email)
        answer = await self._complete(prompt, cancel_token)
        return is_affirmative(answer)

    async def analyze_job_email(
        self,
        email: EmailMessage,
        cancel_token: Optional[CancellationToken] = None,
    ) -> JobApplication:
        """
        Extract company, position and status from a job-related email.

        Raises:
            LLMClientError: If the LLM call fails
            ValidationError: If the answer cannot be decoded
        """
        prompt = self.prompt_builder.build_detail_prompt(email)
        answer = await self._complete(prompt, cancel_token)
        details = self.response_parser.parse(answer)

        return JobApplication(
            company=details.company,
            position=details.position,
            status=normalize_status(details.status),
            location=details.location,
            description=details.description,
            email=email,
            extracted_at=self._clock(),
        )

    async def analyze_emails(
        self,
        emails: Sequence[EmailMessage],
        cancel_token: Optional[CancellationToken] = None,
    ) -> list[JobApplication]:
        """
        Classify a batch of emails, one at a time.

        Args:
            emails: Emails in processing order
            cancel_token: Checked before each email; its deadline also caps
                every LLM call timeout

        Returns:
            JobApplications for the relevant emails, in input order

        Raises:
            AnalysisCancelledError: When cancelled or out of time; carries
                the applications extracted so far
        """
        applications: list[JobApplication] = []
        total = len(emails)

        for index, email in enumerate(emails):
            if cancel_token is not None and cancel_token.is_cancelled:
                logger.warning(
                    "Analysis cancelled",
                    reason=cancel_token.reason,
                    processed=index,
                    total=total,
                )
                raise AnalysisCancelledError(cancel_token.reason or "cancelled", applications, index)

            log = logger.bind(position=f"{index + 1}/{total}", subject=email.subject)
            log.info("Analyzing email")

            try:
                relevant = await self.is_job_related(email, cancel_token)
            except LLMClientError as e:
                self._raise_if_out_of_time(e, cancel_token, applications, index)
                log.warning("Relevance check failed, skipping email", error=e.message, details=e.details)
                emails_analyzed_total.labels(outcome="skipped_relevance").inc()
                await self._pause()
                continue

            if relevant:
                application = await self._extract(email, cancel_token, applications, index, log)
                if application is not None:
                    applications.append(application)
            else:
                emails_analyzed_total.labels(outcome="irrelevant").inc()

            await self._pause()

        logger.info("Analysis complete", emails=total, applications=len(applications))
        return applications

    async def _extract(self, email, cancel_token, applications, index, log) -> Optional[JobApplication]:
        try:
            application = await self.analyze_job_email(email, cancel_token)
        except LLMClientError as e:
            self._raise_if_out_of_time(e, cancel_token, applications, index)
            log.warning("Detail extraction failed, skipping email", error=e.message, details=e.details)
            emails_analyzed_total.labels(outcome="skipped_detail").inc()
            return None
        except ValidationError as e:
            log.warning("Unparseable detail response, skipping email", error=e.message, details=e.details)
            emails_analyzed_total.labels(outcome="skipped_detail").inc()
            return None

        emails_analyzed_total.labels(outcome="relevant").inc()
        applications_by_status_total.labels(status=application.status.value).inc()
        log.info(
            "Job email found",
            company=application.company,
            job_position=application.position,
            status=application.status.value,
        )
        return application

    @staticmethod
    def _raise_if_out_of_time(
        error: LLMClientError,
        cancel_token: Optional[CancellationToken],
        applications: list[JobApplication],
        index: int,
    ) -> None:
        # A timeout caused by the batch deadline ends the batch, other errors only skip the email
        if (
            isinstance(error, LLMTimeoutError)
            and cancel_token is not None
            and cancel_token.deadline_exceeded
        ):
            logger.warning("Batch deadline exhausted during LLM call", processed=index)
            raise AnalysisCancelledError("deadline_exceeded", applications, index) from error

    async def _pause(self) -> None:
        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)
