"""
Logging setup for IncidentFlow.

Modules log through ``logging.getLogger("incidentflow.<module>")``.
configure_logging attaches a single handler to the ``incidentflow``
logger according to LoggingConfig; applications that manage logging
themselves can skip it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from incidentflow.config.schema import LoggingConfig

PACKAGE_LOGGER = "incidentflow"

# LogRecord attributes that are not user-supplied extras.
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "taskName",
    }
)


class JSONFormatter(logging.Formatter):
    """
    Formats each record as one JSON object per line.

    Output format::

        {"timestamp": "2024-01-15T10:30:00.000Z", "level": "INFO",
         "logger": "incidentflow.config.loader", "message": "..."}

    Values passed through ``extra=`` are added as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc)
        log_obj: dict[str, Any] = {
            "timestamp": timestamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_obj[key] = value

        return json.dumps(log_obj, default=str)


def configure_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """
    Configure the ``incidentflow`` logger.

    Replaces any handler installed by an earlier call, so it is safe to
    call again after the configuration changes.

    Args:
        config: Logging options. Defaults to LoggingConfig().

    Returns:
        The configured package logger.
    """
    config = config or LoggingConfig()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, config.level.upper()))

    for existing in package_logger.handlers[:]:
        package_logger.removeHandler(existing)
        existing.close()

    handler: logging.Handler
    if config.output_path:
        handler = logging.FileHandler(config.output_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    if config.json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    package_logger.addHandler(handler)
    return package_logger
