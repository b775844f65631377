"""Logging configuration shared by the API process and scripts."""

from __future__ import annotations

import logging
import logging.config

from asgi_correlation_id import CorrelationIdFilter

from pos_pricing.core.config import get_settings
from pos_pricing.security.logging_filters import SensitiveFilter

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install console logging with correlation ids and redaction."""
    settings = get_settings()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "correlation_id": {
                    "()": CorrelationIdFilter,
                    "uuid_length": 32,
                    "default_value": "-",
                },
                "redact": {"()": SensitiveFilter},
            },
            "formatters": {"default": {"format": _LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "filters": ["correlation_id", "redact"],
                    "formatter": "default",
                }
            },
            "loggers": {
                "pos_pricing": {
                    "handlers": ["console"],
                    "level": level or settings.log_level,
                    "propagate": False,
                },
                "uvicorn": {"handlers": ["console"], "level": "INFO"},
            },
        }
    )


__all__ = ["configure_logging"]
