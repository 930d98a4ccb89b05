"""Structured logging for rasterkit, built on structlog.

Every event can carry the correlation fields of the job it belongs to:

    job_id     short random id of one CLI invocation or caller-defined job
    source     the input image (usually its path)
    operation  resize, crop, rotate, trim or border

Fields are held in a single context variable, so they follow the current
thread or task. `correlation_context` scopes them to a block;
`set_correlation_context` / `clear_correlation_context` manage them
without a block. Fields passed explicitly to a log call win over the
correlation values.

Output is a colored console renderer for development or one JSON object
per line for production, chosen by LOG_FORMAT.
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.types import Processor

from rasterkit.config import ConfigError, settings

_correlation: ContextVar[dict[str, str]] = ContextVar("rasterkit_correlation")


def _current() -> dict[str, str]:
    return _correlation.get({})


def _merged(**fields: str | None) -> dict[str, str]:
    updated = dict(_current())
    updated.update({key: value for key, value in fields.items() if value is not None})
    return updated


def set_correlation_context(
    job_id: str | None = None,
    source: str | None = None,
    operation: str | None = None,
) -> None:
    """Set correlation fields for the current context.

    Fields left as None keep their previous value.
    """
    _correlation.set(_merged(job_id=job_id, source=source, operation=operation))


def clear_correlation_context() -> None:
    """Drop all correlation fields."""
    _correlation.set({})


@contextmanager
def correlation_context(
    job_id: str | None = None,
    source: str | None = None,
    operation: str | None = None,
) -> Iterator[None]:
    """Apply correlation fields for the duration of a block.

    The previous fields are restored on exit, also when the block raises.

    Example:
        >>> with correlation_context(job_id="a1b2", operation="trim"):
        ...     get_logger(__name__).info("Trimming")  # doctest: +SKIP
    """
    token = _correlation.set(
        _merged(job_id=job_id, source=source, operation=operation)
    )
    try:
        yield
    finally:
        _correlation.reset(token)


def _add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor adding the current correlation fields."""
    _ = logger, method_name
    for key, value in _current().items():
        event_dict.setdefault(key, value)
    return event_dict


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigError("LOG_LEVEL", f"unknown level {level!r}")
    return resolved


def _final_processors(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to
            settings.LOG_LEVEL.
        log_format: "console" or "json". Defaults to settings.LOG_FORMAT.

    Raises:
        ConfigError: If the level or format is not recognised.
    """
    numeric_level = _resolve_level(level or settings.LOG_LEVEL)
    log_format = log_format or settings.require_log_format()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            _add_correlation_ids,
            *_final_processors(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdlib logging carries the rendered line
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)
    logging.getLogger().setLevel(numeric_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, named after the calling module when name is None."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
