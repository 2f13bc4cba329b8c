"""
Configuration system for IncidentFlow.

This module provides configuration loading, validation, and management
for IncidentFlow. Settings can be loaded from YAML files with
environment variable overrides; the taxonomy is loaded from its own
YAML file.
"""

from incidentflow.config.loader import ConfigLoader, load_config, load_taxonomy
from incidentflow.config.schema import (
    IncidentConfig,
    IncidentFlowConfig,
    LoggingConfig,
    RequestConfig,
    SessionConfig,
)

__all__ = [
    "ConfigLoader",
    "load_config",
    "load_taxonomy",
    "IncidentFlowConfig",
    "IncidentConfig",
    "SessionConfig",
    "RequestConfig",
    "LoggingConfig",
]
