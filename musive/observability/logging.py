"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog


# Libraries that log every request at INFO; a digest run issues dozens.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the digest.

    Sets up structlog with timestamps, log levels, and contextvars so
    that every line of a run carries its ``run_id``.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        json_format: JSON lines when True, colored console output otherwise.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_run_context(run_id: str, trigger: str | None = None) -> None:
    """Bind run context to all subsequent log messages.

    Args:
        run_id: Unique run identifier.
        trigger: What started the run ("scheduled" or "inspect").
    """
    context: dict[str, str] = {"run_id": run_id}
    if trigger:
        context["trigger"] = trigger
    structlog.contextvars.bind_contextvars(**context)


def clear_run_context() -> None:
    """Clear run context from log messages."""
    structlog.contextvars.unbind_contextvars("run_id", "trigger")
