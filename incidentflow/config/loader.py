"""
Configuration loader for IncidentFlow.

This module provides the ConfigLoader class for loading settings from
YAML files with environment variable overrides, and load_taxonomy for
reading the incident taxonomy file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from incidentflow.config.defaults import (
    get_default_config,
    get_development_config,
    get_production_config,
    get_test_config,
)
from incidentflow.config.schema import (
    IncidentConfig,
    IncidentFlowConfig,
    LoggingConfig,
    RequestConfig,
    SessionConfig,
)
from incidentflow.exceptions import ConfigurationError, TaxonomyError
from incidentflow.taxonomy.resolver import TaxonomyConfig

logger = logging.getLogger("incidentflow.config.loader")


def _read_yaml(path: str | Path, kind: str) -> dict[str, Any]:
    """
    Read a YAML mapping from a file.

    Args:
        path: Path to the YAML file.
        kind: What the file holds, used in error messages.

    Returns:
        The parsed mapping; an empty file yields an empty dict.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
            YAML, or its top level is not a mapping.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigurationError(
            f"{kind.capitalize()} file not found: {path}",
            details={"path": str(path)},
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {kind} file: {e}",
            details={"path": str(path)},
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read {kind} file: {e}",
            details={"path": str(path)},
        ) from e

    if not data:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{kind.capitalize()} file must contain a mapping",
            details={"path": str(path), "type": type(data).__name__},
        )
    return data


class ConfigLoader:
    """
    Loads and validates IncidentFlow configuration.

    The ConfigLoader supports loading configuration from:
    1. Default values for the environment profile
    2. YAML configuration files
    3. Environment variables (INCIDENTFLOW_ prefix)

    Configuration sources are applied in order, with later sources
    overriding earlier ones.

    Example:
        Loading configuration::

            loader = ConfigLoader()

            # Load from file with env overrides
            config = loader.load("config/incidentflow.yaml")

            # Load with specific environment profile
            config = loader.load("config/incidentflow.yaml", environment="production")
    """

    ENV_PREFIX = "INCIDENTFLOW_"

    def __init__(self) -> None:
        """Initialize the configuration loader."""
        self._config: IncidentFlowConfig | None = None

    def load(
        self,
        config_path: str | Path | None = None,
        environment: str | None = None,
    ) -> IncidentFlowConfig:
        """
        Load configuration from file and environment.

        Args:
            config_path: Path to a YAML configuration file. If None,
                only defaults and environment variables are used.
            environment: Environment profile to use. Overrides any
                environment setting in the config file.

        Returns:
            A validated IncidentFlowConfig object.

        Raises:
            ConfigurationError: If configuration is invalid or file not found.
        """
        if environment:
            config = self._get_environment_defaults(environment)
        else:
            config = get_default_config()

        if config_path:
            file_config = _read_yaml(config_path, "configuration")
            config = self._merge_config(config, file_config)
            logger.debug(f"Loaded configuration file {config_path}")

        config = self._apply_env_overrides(config)

        if environment:
            config.environment = environment

        self._validate(config)

        self._config = config
        return config

    def _get_environment_defaults(self, environment: str) -> IncidentFlowConfig:
        """Get default configuration for an environment."""
        env_lower = environment.lower()
        if env_lower == "production":
            return get_production_config()
        elif env_lower == "development":
            return get_development_config()
        elif env_lower == "test":
            return get_test_config()
        else:
            config = get_default_config()
            config.environment = environment
            return config

    def _merge_config(
        self,
        base: IncidentFlowConfig,
        override: dict[str, Any],
    ) -> IncidentFlowConfig:
        """
        Merge file configuration into base configuration.

        Section constructors validate their values, so a bad value in the
        file surfaces here as a ConfigurationError naming the section.
        """
        if not override:
            return base

        if "environment" in override:
            base.environment = str(override["environment"])

        if "taxonomy_path" in override:
            base.taxonomy_path = str(override["taxonomy_path"])

        if "metadata" in override and isinstance(override["metadata"], dict):
            base.metadata.update(override["metadata"])

        sections = {
            "incident": self._merge_incident,
            "session": self._merge_session,
            "request": self._merge_request,
            "logging": self._merge_logging,
        }
        for name, merge in sections.items():
            if name not in override:
                continue
            section = override[name] or {}
            if not isinstance(section, dict):
                raise ConfigurationError(
                    f"Configuration section '{name}' must be a mapping",
                    details={"section": name},
                )
            try:
                setattr(base, name, merge(getattr(base, name), section))
            except (ValueError, TypeError) as e:
                raise ConfigurationError(
                    f"Invalid {name} configuration: {e}",
                    details={"section": name},
                ) from e

        return base

    def _merge_incident(
        self,
        base: IncidentConfig,
        override: dict[str, Any],
    ) -> IncidentConfig:
        """Merge incident configuration."""
        return IncidentConfig(
            channel_prefix=override.get("channel_prefix", base.channel_prefix),
            frontend_url=override.get("frontend_url", base.frontend_url),
        )

    def _merge_session(
        self,
        base: SessionConfig,
        override: dict[str, Any],
    ) -> SessionConfig:
        """Merge session configuration."""
        return SessionConfig(
            duration_hours=override.get("duration_hours", base.duration_hours),
        )

    def _merge_request(
        self,
        base: RequestConfig,
        override: dict[str, Any],
    ) -> RequestConfig:
        """Merge request configuration."""
        return RequestConfig(
            ttl_minutes=override.get("ttl_minutes", base.ttl_minutes),
        )

    def _merge_logging(
        self,
        base: LoggingConfig,
        override: dict[str, Any],
    ) -> LoggingConfig:
        """Merge logging configuration."""
        return LoggingConfig(
            level=override.get("level", base.level),
            format=override.get("format", base.format),
            output_path=override.get("output_path", base.output_path),
            json_format=override.get("json_format", base.json_format),
        )

    def _apply_env_overrides(self, config: IncidentFlowConfig) -> IncidentFlowConfig:
        """
        Apply environment variable overrides to configuration.

        Environment variables use the format:
        INCIDENTFLOW_SECTION_OPTION=value

        For example:
        - INCIDENTFLOW_INCIDENT_CHANNEL_PREFIX=sev
        - INCIDENTFLOW_LOGGING_LEVEL=DEBUG
        - INCIDENTFLOW_TAXONOMY_PATH=/etc/incidentflow/taxonomy.yaml

        Args:
            config: Configuration object to update.

        Returns:
            Updated configuration object.
        """
        env_mapping = {
            # Top-level
            "INCIDENTFLOW_ENVIRONMENT": ("environment", str),
            "INCIDENTFLOW_TAXONOMY_PATH": ("taxonomy_path", str),
            # Incident
            "INCIDENTFLOW_INCIDENT_CHANNEL_PREFIX": ("incident.channel_prefix", str),
            "INCIDENTFLOW_INCIDENT_FRONTEND_URL": ("incident.frontend_url", str),
            # Session
            "INCIDENTFLOW_SESSION_DURATION_HOURS": ("session.duration_hours", int),
            # Request
            "INCIDENTFLOW_REQUEST_TTL_MINUTES": ("request.ttl_minutes", int),
            # Logging
            "INCIDENTFLOW_LOGGING_LEVEL": ("logging.level", str),
            "INCIDENTFLOW_LOGGING_OUTPUT_PATH": ("logging.output_path", str),
            "INCIDENTFLOW_LOGGING_JSON_FORMAT": ("logging.json_format", self._parse_bool),
        }

        for env_var, (path, converter) in env_mapping.items():
            value = os.environ.get(env_var)
            if value is not None:
                try:
                    converted = converter(value)
                    self._set_nested_attr(config, path, converted)
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(
                        f"Invalid value for {env_var}: {e}",
                        details={"env_var": env_var, "value": value},
                    ) from e

        return config

    def _set_nested_attr(self, obj: Any, path: str, value: Any) -> None:
        """Set a nested attribute using dot notation."""
        parts = path.split(".")
        for part in parts[:-1]:
            obj = getattr(obj, part)
        setattr(obj, parts[-1], value)

    def _parse_bool(self, value: str) -> bool:
        """Parse a string to boolean."""
        if value.lower() in ("true", "1", "yes", "on"):
            return True
        elif value.lower() in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"Cannot parse '{value}' as boolean")

    def _validate(self, config: IncidentFlowConfig) -> None:
        """
        Validate the complete configuration.

        Environment overrides are assigned after construction, so each
        section is rebuilt here to run its __post_init__ checks again.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        errors: list[str] = []

        checks = [
            ("incident", IncidentConfig, config.incident),
            ("session", SessionConfig, config.session),
            ("request", RequestConfig, config.request),
            ("logging", LoggingConfig, config.logging),
        ]
        for name, section_type, section in checks:
            try:
                section_type(**vars(section))
            except (ValueError, TypeError) as e:
                errors.append(f"{name}: {e}")

        try:
            IncidentFlowConfig(environment=config.environment)
        except ValueError as e:
            errors.append(f"environment: {e}")

        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}",
                details={"errors": errors},
            )

    @property
    def config(self) -> IncidentFlowConfig:
        """Get the currently loaded configuration."""
        if self._config is None:
            raise ConfigurationError("Configuration not loaded. Call load() first.")
        return self._config


def load_config(
    config_path: str | Path | None = None,
    environment: str | None = None,
) -> IncidentFlowConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to a YAML configuration file.
        environment: Environment profile to use.

    Returns:
        A validated IncidentFlowConfig object.
    """
    loader = ConfigLoader()
    return loader.load(config_path, environment)


def load_taxonomy(path: str | Path) -> TaxonomyConfig:
    """
    Load and validate the incident taxonomy from a YAML file.

    The file holds top-level ``categories``, ``severities`` and ``assets``
    lists. Only categories are required.

    Example:
        A minimal taxonomy file::

            categories:
              - id: unknown
                name: Unknown
                description: Category could not be determined

    Args:
        path: Path to the taxonomy YAML file.

    Returns:
        A validated TaxonomyConfig.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or the
            taxonomy fails validation.
    """
    data = _read_yaml(path, "taxonomy")

    try:
        taxonomy = TaxonomyConfig.from_dict(data)
        taxonomy.validate()
    except TaxonomyError as e:
        raise ConfigurationError(
            f"Invalid taxonomy in {path}: {e.message}",
            details={"path": str(path), **e.details},
        ) from e

    logger.debug(
        f"Loaded taxonomy from {path}: {len(taxonomy.categories)} categories, "
        f"{len(taxonomy.severities)} severities, {len(taxonomy.assets)} assets"
    )
    return taxonomy
