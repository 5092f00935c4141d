"""Structured logging configuration for typed_events.

Uses structlog for structured, context-rich logging with
support for both console and JSON output formats.

Importing the library never changes global logging state. Library loggers
wrap the stdlib logger of the same name and render with whatever structlog
processors are current, so the host's stdlib levels decide what is emitted
and only :func:`configure_logging` / :func:`configure_from_env` reconfigure
the process.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

import structlog

LOG_LEVEL_ENV = "TYPED_EVENTS_LOG_LEVEL"
LOG_JSON_ENV = "TYPED_EVENTS_LOG_JSON"
LOG_FILE_ENV = "TYPED_EVENTS_LOG_FILE"

_TRUTHY = ("1", "true", "yes", "on")

# File opened by the last configure_logging call, if any
_log_stream: TextIO | None = None


def _build_processors(json_output: bool, colors: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def _parse_level(level: str) -> int:
    value = getattr(logging, str(level).upper(), None)
    if not isinstance(value, int):
        raise ValueError(
            f"Invalid log level {level!r}; expected DEBUG, INFO, WARNING, ERROR or CRITICAL"
        )
    return value


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
    colors: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON format
        log_file: Optional file to log to
        colors: Whether to use colors in console output

    Raises:
        ValueError: If ``level`` is not a known log level
    """
    global _log_stream

    numeric_level = _parse_level(level)

    # Determine output stream
    stream: TextIO = sys.stderr
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        stream = open(log_file, "a")  # noqa: SIM115

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=numeric_level,
        force=True,
    )

    # basicConfig(force=True) drops the old handler but leaves its file open
    if _log_stream is not None and not _log_stream.closed:
        _log_stream.close()
    _log_stream = stream if log_file is not None else None

    structlog.configure(
        processors=_build_processors(json_output, colors),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_env(environ: dict[str, str] | None = None) -> None:
    """Configure logging from ``TYPED_EVENTS_LOG_*`` environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``
    """
    env = os.environ if environ is None else environ
    level = env.get(LOG_LEVEL_ENV, "WARNING")
    json_output = env.get(LOG_JSON_ENV, "").strip().lower() in _TRUTHY
    log_file = env.get(LOG_FILE_ENV)

    configure_logging(
        level=level,
        json_output=json_output,
        log_file=Path(log_file) if log_file else None,
        colors=not json_output,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    The logger is bound lazily, so it follows any later
    :func:`configure_logging` or host ``structlog.configure`` call.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


# Usage example:
# from typed_events.logging_config import get_logger
#
# logger = get_logger(__name__)
#
# logger.debug("event_dispatching", key="user.logged_in", handlers=2)
