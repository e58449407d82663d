"""
Command-line entry point: fetch, classify, report, export.

    jobtracker [--mock] [--env-file PATH] [--log-level LEVEL]
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from job_tracker.analysis import AnalysisCancelledError, CancellationToken, JobAnalyzer, JobStatistics
from job_tracker.config import ConfigurationError, Settings, settings as default_settings
from job_tracker.export import CSVExporter, print_recent_applications, print_statistics
from job_tracker.llm import OpenAICompatibleClient, PromptBuilder
from job_tracker.logging_config import configure_logging
from job_tracker.mail import (
    EmailQuery,
    GatewayEmailClient,
    ImapEmailFetcher,
    MailSourceError,
    MockMailSource,
)
from job_tracker.models.application_models import JobApplication
from job_tracker.models.email_models import EmailMessage
from job_tracker.monitoring import write_metrics_textfile

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobtracker",
        description="Classify job-search emails with an LLM and export the results to CSV",
    )
    parser.add_argument("--mock", action="store_true", help="Use built-in sample emails instead of a mailbox")
    parser.add_argument("--env-file", default=None, help="Read settings from this .env file")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, WARNING...)")
    return parser


def load_settings(env_file: Optional[str]) -> Settings:
    if env_file is None:
        return default_settings
    if not Path(env_file).is_file():
        raise ConfigurationError(f"Env file not found: {env_file}")
    return Settings(_env_file=env_file)


def build_query(config: Settings) -> EmailQuery:
    start, end = config.fetch_window()
    return EmailQuery(
        start_date=start,
        end_date=end,
        max_emails=config.FETCH_MAX_EMAILS,
        folders=config.imap_folders,
        keywords=config.FETCH_KEYWORDS,
    )


async def fetch_emails(config: Settings, mock: bool) -> list[EmailMessage]:
    """
    Fetch emails from the configured source.

    Raises:
        ConfigurationError: If a real run is missing required settings
        MailSourceError: If the mailbox cannot be reached
    """
    if mock:
        return await MockMailSource().fetch(build_query(config))

    config.validate_for_fetch()
    query = build_query(config)

    print(f"Fetching emails for {config.EMAIL_ADDRESS} (provider: {config.email_provider})")
    print(f"Date range: {query.start_date:%Y-%m-%d} to {query.end_date:%Y-%m-%d}")

    if config.GATEWAY_ENDPOINT:
        async with GatewayEmailClient(
            endpoint=config.GATEWAY_ENDPOINT,
            provider=config.email_provider,
            email=config.EMAIL_ADDRESS,
            api_key=config.GATEWAY_API_KEY,
            timeout=config.GATEWAY_TIMEOUT,
        ) as gateway:
            session = await gateway.initiate_login()
            if session.login_url:
                print(f"Complete the login in your browser: {session.login_url}")
                print("Waiting for login to complete...")
                await asyncio.sleep(config.LOGIN_WAIT_SECONDS)
            return await gateway.fetch(query)

    fetcher = ImapEmailFetcher(config.imap_host, config.EMAIL_ADDRESS, config.email_password)
    return await fetcher.fetch(query)


async def analyze(config: Settings, emails: list[EmailMessage]) -> list[JobApplication]:
    """Classify emails under the ANALYSIS_TIMEOUT deadline; partial results on cancellation."""
    prompt_builder = PromptBuilder(
        templates_dir=Path(config.PROMPT_TEMPLATES_DIR) if config.PROMPT_TEMPLATES_DIR else None,
        relevance_body_limit=config.RELEVANCE_BODY_LIMIT,
        detail_body_limit=config.DETAIL_BODY_LIMIT,
    )

    async with OpenAICompatibleClient(
        base_url=config.LLM_API_BASE,
        api_key=config.LLM_API_KEY,
        model=config.LLM_MODEL,
        temperature=config.LLM_TEMPERATURE,
        max_tokens=config.LLM_MAX_TOKENS,
        timeout=config.LLM_TIMEOUT,
    ) as llm_client:
        analyzer = JobAnalyzer(
            llm_client,
            prompt_builder=prompt_builder,
            request_delay=config.REQUEST_DELAY_SECONDS,
        )
        token = CancellationToken.with_timeout(config.ANALYSIS_TIMEOUT)
        try:
            return await analyzer.analyze_emails(emails, token)
        except AnalysisCancelledError as e:
            logger.warning(
                "Analysis stopped early, keeping partial results",
                reason=e.reason,
                processed=e.processed,
                total=len(emails),
                applications=len(e.applications),
            )
            return e.applications


def export(config: Settings, applications: list[JobApplication], statistics: JobStatistics) -> None:
    applications_path, statistics_path = config.export_paths()
    exporter = CSVExporter(applications_path)

    try:
        exporter.export_applications(applications)
        print(f"\nJob applications exported to: {applications_path}")
    except OSError as e:
        logger.error("Applications export failed", path=applications_path, error=str(e))

    try:
        exporter.export_statistics(statistics, statistics_path, top_n=config.EXPORT_TOP_N)
        print(f"Statistics exported to: {statistics_path}")
    except OSError as e:
        logger.error("Statistics export failed", path=statistics_path, error=str(e))


async def run(config: Settings, mock: bool) -> int:
    emails = await fetch_emails(config, mock)
    print(f"Fetched {len(emails)} emails")

    if not emails:
        print("No emails found, nothing to analyze")
        return 0

    print("\nAnalyzing emails with the LLM...")
    applications = await analyze(config, emails)

    statistics = JobStatistics.from_applications(applications)
    print_statistics(statistics, console_top_n=config.CONSOLE_TOP_N)

    if applications:
        export(config, applications, statistics)

    print("\n=== Analysis complete ===")
    print_recent_applications(applications, limit=config.CONSOLE_TOP_N)

    if config.METRICS_TEXTFILE:
        write_metrics_textfile(config.METRICS_TEXTFILE)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_settings(args.env_file)
    except ConfigurationError as e:
        configure_logging(args.log_level or default_settings.LOG_LEVEL, default_settings.ENVIRONMENT)
        logger.error("Invalid configuration", error=str(e))
        return 1

    configure_logging(args.log_level or config.LOG_LEVEL, config.ENVIRONMENT)
    logger.info("Starting run", version=config.APP_VERSION, mock=args.mock, environment=config.ENVIRONMENT)

    try:
        return asyncio.run(run(config, args.mock))
    except ConfigurationError as e:
        logger.error("Invalid configuration", error=str(e))
        return 1
    except MailSourceError as e:
        logger.error("Email fetch failed", error=e.message, details=e.details)
        if not args.mock:
            print("Hint: run with --mock to try the pipeline on sample emails", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
