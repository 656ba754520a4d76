"""structlog configuration shared by the API and the CLI."""

import logging

import structlog

from mythoughts.config import settings


def configure_logging(*, with_context: bool = True) -> None:
    """Configure structlog and the stdlib root logger.

    ``with_context`` merges contextvars (the per-request id) into every
    event; the CLI has no request context and leaves it off.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    processors = []
    if with_context:
        processors.append(structlog.contextvars.merge_contextvars)
    processors.extend(
        [
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
        ]
    )

    if settings.log_format == "json":
        processors.extend(
            [
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
