"""Structured logging configuration.

JSON logs with automatic context binding. Uses structlog with stdlib integration.
Library modules only call ``get_logger``; applications (such as the reference
item service) call ``configure_logging`` once at startup.
"""

import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO 8601 UTC timestamp with timezone offset."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


class LoggingSettings(BaseSettings):
    """Logging settings from environment variables.

    ``QLM_LOG_LEVEL`` wins over the generic ``LOG_LEVEL``.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("QLM_LOG_LEVEL", "LOG_LEVEL"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


def configure_logging(settings: LoggingSettings) -> None:
    """Configure structlog with JSON output to stdout.

    After this, all loggers created via get_logger() output JSON, including
    context bound per loader (``service_url``) and anything bound with
    ``structlog.contextvars``.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": structlog.processors.JSONRenderer(),
                    "foreign_pre_chain": processors,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": sys.stdout,
                },
            },
            "loggers": {
                "": {
                    "handlers": ["default"],
                    "level": settings.log_level,
                    "propagate": True,
                },
            },
        }
    )


def get_logger(name: str, **context: Any) -> BoundLogger:
    """Get a structured logger, optionally bound to loader context.

    The logger stays lazy, so it picks up ``configure_logging`` even when it was
    created before logging was configured.

    Args:
        name: Logger name, typically __name__
        **context: Key-value pairs added to every entry, e.g. ``service_url``

    Example:
        log = get_logger(__name__, service_url="/items")
        log.info("fetch_completed", url=url, item_count=50)
        # Output: {"event": "fetch_completed", "service_url": "/items", "url": "...", ...}
    """
    return structlog.get_logger(name, **context)  # type: ignore[no-any-return]
