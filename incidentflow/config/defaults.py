"""
Default configuration values for IncidentFlow.

These defaults can be overridden by YAML configuration files and/or
environment variables.
"""

from incidentflow.config.schema import (
    IncidentConfig,
    IncidentFlowConfig,
    LoggingConfig,
    RequestConfig,
    SessionConfig,
)

DEFAULT_INCIDENT = IncidentConfig(
    channel_prefix="inc",
    frontend_url="",  # No dashboard links by default
)

DEFAULT_SESSION = SessionConfig(
    duration_hours=168,  # One week
)

DEFAULT_REQUEST = RequestConfig(
    ttl_minutes=30,
)

DEFAULT_LOGGING = LoggingConfig(
    level="INFO",
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    output_path="",  # stderr only by default
    json_format=False,
)


def get_default_config() -> IncidentFlowConfig:
    """
    Get the default configuration.

    Returns:
        IncidentFlowConfig with default values.
    """
    return IncidentFlowConfig(
        environment="development",
        incident=IncidentConfig(
            channel_prefix=DEFAULT_INCIDENT.channel_prefix,
            frontend_url=DEFAULT_INCIDENT.frontend_url,
        ),
        session=SessionConfig(duration_hours=DEFAULT_SESSION.duration_hours),
        request=RequestConfig(ttl_minutes=DEFAULT_REQUEST.ttl_minutes),
        logging=LoggingConfig(
            level=DEFAULT_LOGGING.level,
            format=DEFAULT_LOGGING.format,
            output_path=DEFAULT_LOGGING.output_path,
            json_format=DEFAULT_LOGGING.json_format,
        ),
        taxonomy_path="taxonomy.yaml",
        metadata={},
    )


def get_production_config() -> IncidentFlowConfig:
    """
    Get a production-ready configuration.

    Logs at WARNING and emits JSON lines for log collectors.

    Returns:
        IncidentFlowConfig with production settings.
    """
    config = get_default_config()
    config.environment = "production"
    config.logging.level = "WARNING"
    config.logging.json_format = True
    return config


def get_development_config() -> IncidentFlowConfig:
    """
    Get a development configuration with verbose logging.

    Returns:
        IncidentFlowConfig with development settings.
    """
    config = get_default_config()
    config.environment = "development"
    config.logging.level = "DEBUG"
    config.incident.frontend_url = "http://localhost:3000"
    return config


def get_test_config() -> IncidentFlowConfig:
    """
    Get a test configuration.

    Sessions and requests are short-lived so expiry paths are easy to
    exercise.

    Returns:
        IncidentFlowConfig with test settings.
    """
    config = get_default_config()
    config.environment = "test"
    config.logging.level = "DEBUG"
    config.session.duration_hours = 1
    config.request.ttl_minutes = 1
    return config
