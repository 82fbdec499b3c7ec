"""Logging utilities for polyprompt.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to a file or to stderr. Each logger
is self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from functools import lru_cache
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from polyprompt.config import LoggingConfig

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str, *, respect_env: bool = True) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, POLYPROMPT_DEBUG overrides to DEBUG level.
    """
    if respect_env and getenv("POLYPROMPT_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.WARNING)


def create_logger(
    *,
    level: str = "warning",
    log_format: LogFormatType = "text",
    log_file: str = "",
    stream: TextIO | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger.

    Args:
        level: Log level threshold (debug, info, warning, error).
            POLYPROMPT_DEBUG forces DEBUG regardless of this value.
        log_format: Output format, either "json" or "text".
        log_file: Path to a log file opened in append mode. When empty, logs
            go to ``stream``.
        stream: Text stream used when no log file is given. Defaults to
            ``sys.stderr``.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))
    else:
        logger_factory = structlog.WriteLoggerFactory(
            file=stream if stream is not None else sys.stderr
        )

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(
        _log_level_from_string(level)
    )

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


@lru_cache(maxsize=16)
def _cached_logger(
    config: "LoggingConfig", stream: TextIO | None
) -> "FilteringBoundLogger":  # noqa: UP037
    return create_logger(
        level=config.level.value,
        log_format=cast("LogFormatType", config.format.value),
        log_file=config.file,
        stream=stream,
    )


def get_logger(
    config: "LoggingConfig | None" = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Return the logger for a logging configuration.

    Loggers are cached per configuration. When no configuration is given the
    process-wide settings are used.

    Args:
        config: Logging configuration section.

    Returns:
        A FilteringBoundLogger bound to ``logger="polyprompt"``.
    """
    if config is None:
        from polyprompt.config import get_settings  # noqa: PLC0415

        config = get_settings().logging

    # The current stderr is part of the key so redirected streams get their own logger
    stream = None if config.file else sys.stderr
    return _cached_logger(config, stream).bind(logger="polyprompt")
