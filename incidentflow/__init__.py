"""
IncidentFlow: incident lifecycle core for chat-driven incident response.

IncidentFlow holds the domain model of an incident management bot: each
incident gets its own chat channel, moves through a small set of
statuses, collects remediation tasks and is classified against a
configured taxonomy of categories, severities and assets.

Key Features:
    - Incident lifecycle with an append-only status history
    - Tasks with their own independent status
    - Deterministic channel naming from incident titles
    - Taxonomy lookups with display fallbacks for removed entries
    - Typed identifiers and explicit authentication context

Example:
    Declaring an incident::

        from incidentflow.incidents import Incident

        incident = Incident.create(
            "inc", 1, "Database Outage!!", "C01", "general", "U01"
        )
        print(incident.channel_name)  # inc-1-database-outage

Public API:
    This module exports the following public API components:

    Version:
        __version__: The package version string

    Exceptions:
        IncidentFlowError: Base exception for all IncidentFlow errors
        ConfigurationError: Settings or taxonomy file errors
        ValidationError: Invalid input to a constructor or mutator
        TaxonomyError: Malformed taxonomy entries or collections
        AlreadyInStateError: Convenience transition to the current state
        IdentifierError: Time-ordered ID generation failed
        IncidentError: Incident-level errors raised by collaborators
            such as storage (not raised by this package)
        TaskError: Task-level errors raised by collaborators (not raised
            by this package)

    Packages:
        incidentflow.models: Identifiers, channel naming, users, messages
        incidentflow.taxonomy: Categories, severities, assets and lookups
        incidentflow.incidents: Incidents, status history, tasks, requests
        incidentflow.auth: Sessions and authentication context
        incidentflow.config: Settings and taxonomy loading
        incidentflow.logging_setup: configure_logging for applications
            embedding the package; the library itself only creates loggers
"""

from incidentflow.exceptions import (
    AlreadyInStateError,
    ConfigurationError,
    IdentifierError,
    IncidentError,
    IncidentFlowError,
    TaskError,
    TaxonomyError,
    ValidationError,
)
from incidentflow.version import __version__

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "IncidentFlowError",
    "ConfigurationError",
    "ValidationError",
    "TaxonomyError",
    "AlreadyInStateError",
    "IdentifierError",
    "IncidentError",
    "TaskError",
]
