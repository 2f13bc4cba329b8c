"""
Exception classes for IncidentFlow.

This module defines the exception hierarchy used throughout IncidentFlow.
All custom exceptions inherit from IncidentFlowError to allow for easy
catching of any IncidentFlow-specific exception.
"""

from typing import Any


class IncidentFlowError(Exception):
    """
    Base exception for all IncidentFlow errors.

    All custom exceptions in IncidentFlow inherit from this class,
    allowing callers to catch any IncidentFlow-specific exception
    with a single except clause.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context,
            typically the offending field and value.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class ConfigurationError(IncidentFlowError):
    """
    Raised when application settings or the taxonomy are invalid.

    Examples:
        - Missing configuration or taxonomy file
        - Invalid YAML syntax
        - Setting value out of its allowed range
        - Taxonomy file that fails validation
    """

    pass


class ValidationError(IncidentFlowError):
    """
    Raised when input handed to a constructor or mutator is invalid.

    Examples:
        - Non-positive incident ID
        - Empty origin channel or creator
        - Empty task title
        - Status value outside the allowed set
        - Asset IDs that do not resolve against the taxonomy
    """

    pass


class TaxonomyError(ValidationError):
    """
    Raised when a category, severity or asset collection is malformed.

    Examples:
        - Entry with an empty ID or name
        - Severity level outside 0-99
        - Duplicate ID within a collection
        - Category list without the "unknown" entry
    """

    pass


class AlreadyInStateError(IncidentFlowError):
    """
    Raised when a convenience transition targets the current state.

    Callers decide whether to ignore or surface it; the entity is left
    untouched.

    Examples:
        - Completing a task that is already completed
        - Reopening a task that is already todo
    """

    pass


class IdentifierError(IncidentFlowError):
    """
    Raised when a time-ordered identifier cannot be generated.

    This happens only when the operating system entropy source is
    unavailable. It is never replaced by a different kind of ID.
    """

    pass


class IncidentError(IncidentFlowError):
    """
    Raised for incident-level failures reported by collaborators.

    Examples:
        - Incident not found in storage
        - Incident request not found or expired
    """

    pass


class TaskError(IncidentFlowError):
    """
    Raised for task-level failures reported by collaborators.

    Examples:
        - Task not found in storage
        - Task belongs to a different incident
    """

    pass
