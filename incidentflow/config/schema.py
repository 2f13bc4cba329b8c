"""
Configuration schema definitions for IncidentFlow.

This module defines the configuration structure using dataclasses.
All configuration options are strongly typed with validation support.
The incident taxonomy is configured separately; the settings only point
at its file.
"""

import re
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

from incidentflow.models.channel import DEFAULT_CHANNEL_PREFIX

# Prefixes are used verbatim in channel names, so they must already be
# in channel-name form.
_CHANNEL_PREFIX_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,19}$")


class LogLevel(Enum):
    """Logging level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class IncidentConfig:
    """
    Incident handling options.

    Attributes:
        channel_prefix: Prefix of every incident channel name, as in
            ``inc-42-database-outage``.
        frontend_url: Base URL of the web dashboard. Used to build links
            to incidents; empty disables the links.
    """

    channel_prefix: str = DEFAULT_CHANNEL_PREFIX
    frontend_url: str = ""

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not _CHANNEL_PREFIX_PATTERN.match(self.channel_prefix):
            raise ValueError(
                "channel_prefix must be 1-20 lowercase letters, digits, '-' or '_'"
            )
        if self.frontend_url and not self.frontend_url.startswith(("http://", "https://")):
            raise ValueError("frontend_url must start with http:// or https://")


@dataclass
class SessionConfig:
    """
    Browser session options.

    Attributes:
        duration_hours: Lifetime of a new session.
    """

    duration_hours: int = 168

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.duration_hours < 1:
            raise ValueError("duration_hours must be at least 1")

    def duration(self) -> timedelta:
        """Return the session lifetime."""
        return timedelta(hours=self.duration_hours)


@dataclass
class RequestConfig:
    """
    Pending incident request options.

    Attributes:
        ttl_minutes: How long a declaration may wait for confirmation.
    """

    ttl_minutes: int = 30

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.ttl_minutes < 1:
            raise ValueError("ttl_minutes must be at least 1")

    def ttl(self) -> timedelta:
        """Return how long a pending request stays valid."""
        return timedelta(minutes=self.ttl_minutes)


@dataclass
class LoggingConfig:
    """
    Logging configuration options.

    Attributes:
        level: Minimum log level to output. One of: DEBUG, INFO,
            WARNING, ERROR, CRITICAL.
        format: Log message format string. Supports standard Python
            logging format specifiers. Ignored when json_format is set.
        output_path: Path to log file. If empty, logs are written to
            stderr only.
        json_format: Whether to output one JSON object per line for
            structured logging systems.
    """

    level: str = LogLevel.INFO.value
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    output_path: str = ""
    json_format: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        valid_levels = [level.value for level in LogLevel]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"level must be one of: {valid_levels}")


@dataclass
class IncidentFlowConfig:
    """
    Root configuration object for IncidentFlow.

    This is the main configuration class that contains all other
    configuration sections. It can be loaded from YAML files and/or
    environment variables.

    Attributes:
        environment: The environment profile name (development, staging,
            production, test).
        incident: Incident handling options.
        session: Browser session options.
        request: Pending incident request options.
        logging: Logging configuration options.
        taxonomy_path: Path to the YAML file with categories, severities
            and assets.
        metadata: Additional custom configuration as key-value pairs.
    """

    environment: str = "development"
    incident: IncidentConfig = field(default_factory=IncidentConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    request: RequestConfig = field(default_factory=RequestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    taxonomy_path: str = "taxonomy.yaml"
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        valid_environments = ["development", "staging", "production", "test"]
        if self.environment.lower() not in valid_environments:
            raise ValueError(f"environment must be one of: {valid_environments}")

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "environment": self.environment,
            "incident": {
                "channel_prefix": self.incident.channel_prefix,
                "frontend_url": self.incident.frontend_url,
            },
            "session": {
                "duration_hours": self.session.duration_hours,
            },
            "request": {
                "ttl_minutes": self.request.ttl_minutes,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "output_path": self.logging.output_path,
                "json_format": self.logging.json_format,
            },
            "taxonomy_path": self.taxonomy_path,
            "metadata": self.metadata,
        }
