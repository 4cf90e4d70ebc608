"""Logging settings for the System Admin console.

Configures structlog with JSON output, shares its processor chain with the
stdlib loggers used by Django and httpx, and optionally ships records to Loki.
"""

import re
import typing as t

import structlog
from decouple import config

from .base import DEBUG, VERSION

ENABLE_OBSERVABILITY = config("ENABLE_OBSERVABILITY", default=False, cast=bool)

SERVICE_NAME = config("SERVICE_NAME", default="sysadmin")
SERVICE_VERSION = VERSION
DEPLOYMENT_ENVIRONMENT = config("DEPLOYMENT_ENVIRONMENT", default="development" if DEBUG else "production")

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

SENSITIVE_LOG_KEYS = (
    "password",
    "secret",
    "api_key",
    "token",
    "access_token",
    "refresh_token",
    "authorization",
    "cookie",
)


def scrub_pii(logger: t.Any, method_name: str, event_dict: dict[str, t.Any]) -> dict[str, t.Any]:
    """Scrub secrets and email addresses from log events."""

    def _scrub_dict(d: t.Any) -> dict[str, t.Any]:
        if not isinstance(d, dict):
            return t.cast(dict[str, t.Any], d)

        for key in list(d.keys()):
            if any(sensitive in key.lower() for sensitive in SENSITIVE_LOG_KEYS):
                d[key] = "[REDACTED]"
            elif isinstance(d[key], dict):
                d[key] = _scrub_dict(d[key])
            elif isinstance(d[key], str) and "email" not in key.lower():
                d[key] = re.sub(r"\b[\w\.-]+@[\w\.-]+\.\w+\b", "[EMAIL]", d[key])

        return t.cast(dict[str, t.Any], d)

    return _scrub_dict(event_dict)


def add_app_context(logger: t.Any, method_name: str, event_dict: dict[str, t.Any]) -> dict[str, t.Any]:
    """Add application-level context to all log events."""
    event_dict["service"] = SERVICE_NAME
    event_dict["version"] = SERVICE_VERSION
    event_dict["environment"] = DEPLOYMENT_ENVIRONMENT
    return event_dict


STRUCTLOG_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    add_app_context,
    scrub_pii,
    structlog.processors.JSONRenderer(),
]

# Processors for foreign loggers (Django, httpx)
FOREIGN_PRE_CHAIN = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    add_app_context,
    scrub_pii,
]

structlog.configure(
    processors=STRUCTLOG_PROCESSORS,  # type: ignore[arg-type]
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

LOKI_URL = config("LOKI_URL", default="http://localhost:3100")

LOGGING_HANDLERS: dict[str, dict[str, t.Any]] = {
    "console": {
        "class": "logging.StreamHandler",
        "formatter": "json",
    },
}

if ENABLE_OBSERVABILITY:
    LOGGING_HANDLERS["loki"] = {
        "class": "logging_loki.LokiHandler",
        "url": f"{LOKI_URL}/loki/api/v1/push",
        "tags": {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "environment": DEPLOYMENT_ENVIRONMENT,
        },
        "version": "1",
    }

    # Records are queued and shipped by the listener started in CommonConfig.ready()
    LOGGING_HANDLERS["queue"] = {
        "class": "logging.handlers.QueueHandler",
        "queue": {
            "()": "queue.Queue",
            "maxsize": 10000,
        },
    }

ROOT_HANDLERS = ["console", "queue"] if ENABLE_OBSERVABILITY else ["console"]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.JSONRenderer(),
            "foreign_pre_chain": FOREIGN_PRE_CHAIN,
        },
    },
    "handlers": LOGGING_HANDLERS,
    "root": {
        "handlers": ROOT_HANDLERS,
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ROOT_HANDLERS,
            "level": "INFO",
            "propagate": False,
        },
        "django.db.backends": {
            "handlers": ROOT_HANDLERS,
            "level": "WARNING",
            "propagate": False,
        },
        # httpx logs every request at INFO; the events client logs its own.
        "httpx": {
            "handlers": ROOT_HANDLERS,
            "level": "WARNING",
            "propagate": False,
        },
        "httpcore": {
            "handlers": ROOT_HANDLERS,
            "level": "WARNING",
            "propagate": False,
        },
    },
}
