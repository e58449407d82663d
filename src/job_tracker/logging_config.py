"""structlog setup for the jobtracker CLI.

Log events go to stderr; stdout is reserved for the run report
(statistics, recent applications, export paths). ENVIRONMENT=production
switches the renderer to one JSON object per line.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, WrappedLogger

APP_NAME = "job-tracker"

# Libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict["app"] = APP_NAME
    return event_dict


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Install structlog and a single stderr handler on the root logger.

    Args:
        log_level: Level name; unknown names fall back to INFO
        environment: "production" renders JSON (non-ASCII kept as is, so
            Chinese subjects stay readable); anything else uses the console
            renderer, coloured only when stderr is a terminal

    Calling it again replaces the previous handler.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    json_output = environment.lower() == "production"

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stdlib records (imaplib warnings, httpx) share the structlog pipeline
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )
    handler.setLevel(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if json_output else "console",
    )
