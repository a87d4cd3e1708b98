"""Structured logging for the service.

Every record is reshaped into ``timestamp / level / logger / message /
context`` with all other fields under ``extra``. Production renders JSON;
tests render one readable line per record. Credentials that leak into log
values through request URLs (``key=...``) are masked before rendering.
"""

import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import uuid4

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

PACKAGE_PREFIX = "signal_insights"

CORRELATION_ID = "correlation_id"
CONTEXT = "context"
EXTRA = "extra"
STANDARD_FIELDS = ("timestamp", "level", "logger", "message", CONTEXT)

_CREDENTIAL_PARAM = re.compile(r"\b(key|api_key|apikey)=[^&\s'\"]+", re.IGNORECASE)


@dataclass(frozen=True)
class LogDefaults:
    context: str = "default"
    correlation_id: str = "unknown"
    log_level: str = "INFO"
    max_value_length: int = 60
    correlation_id_display_length: int = 8


DEFAULTS = LogDefaults()


# --- Context ---


def get_correlation_id() -> str:
    return str(get_context_vars().get(CORRELATION_ID, DEFAULTS.correlation_id))


def new_correlation_id() -> str:
    """Bind a fresh short correlation ID for the current task and return it."""
    correlation_id = uuid4().hex[: DEFAULTS.correlation_id_display_length]
    bind_context_vars(**{CORRELATION_ID: correlation_id})
    return correlation_id


def clear_context_fields() -> None:
    structlog.contextvars.clear_contextvars()


def bind_context_vars(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def get_context_vars() -> dict[str, Any]:
    return structlog.contextvars.get_contextvars()


# --- Processors ---


def redact_credentials(value: str) -> str:
    """Mask credential query parameters: 'key=abc123' -> 'key=***'."""
    return _CREDENTIAL_PARAM.sub(lambda m: f"{m.group(1)}=***", value)


def _redact_processor(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_credentials(value)
    return event_dict


def _restructure_fields(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message' and move non-standard fields under 'extra'."""
    event_dict["message"] = event_dict.pop("event", "")
    event_dict[CONTEXT] = str(event_dict.pop(CONTEXT, DEFAULTS.context))

    extra = {key: event_dict.pop(key) for key in list(event_dict) if key not in STANDARD_FIELDS}
    # The correlation id arrives through merge_contextvars; it is dropped when unset.
    if extra.get(CORRELATION_ID, DEFAULTS.correlation_id) == DEFAULTS.correlation_id:
        extra.pop(CORRELATION_ID, None)
    if extra:
        event_dict[EXTRA] = extra
    return event_dict


# --- Human-readable rendering ---


class HumanReadableFormatter:
    """Renders ``HH:MM:SS [LEVEL] logger: message [k=v, ...] [id:xxxxxxxx]``."""

    def __init__(self, defaults: LogDefaults = DEFAULTS):
        self.defaults = defaults

    def __call__(self, _: WrappedLogger, __: str, event_dict: EventDict) -> str:
        extra = dict(event_dict.get(EXTRA, {}))
        correlation_id = str(extra.pop(CORRELATION_ID, ""))

        line = (
            f"{self.format_timestamp(event_dict.get('timestamp', ''))} "
            f"[{event_dict.get('level', 'info').upper()}] "
            f"{self.format_logger_name(event_dict.get('logger', ''))}: "
            f"{event_dict.get('message', '')}"
        )
        if extra:
            line += " [" + ", ".join(f"{k}={self.format_field_value(v)}" for k, v in extra.items()) + "]"
        if correlation_id:
            line += f" [id:{correlation_id[: self.defaults.correlation_id_display_length]}]"
        return line

    def format_field_value(self, value: Any) -> str:
        text = str(value)
        limit = self.defaults.max_value_length
        return text if len(text) <= limit else f"{text[: limit - 3]}..."

    def format_timestamp(self, timestamp: str) -> str:
        if not timestamp:
            return ""
        try:
            return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).strftime("%H:%M:%S")
        except ValueError:
            return ""

    def format_logger_name(self, logger_name: str) -> str:
        """Drop the package prefix: 'signal_insights.search' -> 'search'."""
        if logger_name.startswith(f"{PACKAGE_PREFIX}."):
            return logger_name[len(PACKAGE_PREFIX) + 1 :]
        return logger_name


# --- Configuration ---


def _resolve_level() -> int:
    name = os.environ.get("LOGGING_LEVEL", DEFAULTS.log_level).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_structlog(testing: bool = False) -> None:
    """Route structlog through stdlib logging with JSON or human-readable output.

    Args:
        testing: Render readable lines instead of JSON.
    """
    level = _resolve_level()

    logging.basicConfig(format="%(message)s", level=level, stream=sys.stdout)
    logging.getLogger().setLevel(level)

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.contextvars.merge_contextvars,
        _redact_processor,
        _restructure_fields,
        structlog.processors.TimeStamper(fmt="iso"),
        HumanReadableFormatter() if testing else structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "") -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name or __name__)  # type: ignore[no-any-return]
