"""
Incident and task lifecycle for IncidentFlow.

This module provides the incident aggregate with its status history,
remediation tasks, and the requests used to declare incidents.
"""

from incidentflow.incidents.models import (
    Incident,
    IncidentStatus,
    StatusHistory,
    StatusHistoryWithUser,
)
from incidentflow.incidents.requests import (
    DEFAULT_REQUEST_TTL,
    CreateIncidentRequest,
    IncidentRequest,
)
from incidentflow.incidents.tasks import Task, TaskStatus

__all__ = [
    "Incident",
    "IncidentStatus",
    "StatusHistory",
    "StatusHistoryWithUser",
    "CreateIncidentRequest",
    "IncidentRequest",
    "DEFAULT_REQUEST_TTL",
    "Task",
    "TaskStatus",
]
