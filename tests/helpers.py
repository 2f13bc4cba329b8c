"""
Test utilities and helpers for IncidentFlow tests.

This module provides:
- Factory functions for creating test objects
- Sample taxonomy data
- A fixed clock for timestamp assertions
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from incidentflow.incidents.models import Incident
from incidentflow.incidents.requests import CreateIncidentRequest
from incidentflow.incidents.tasks import Task
from incidentflow.models.identifiers import (
    ChannelID,
    ChannelName,
    SlackUserID,
    TeamID,
)


# =============================================================================
# Taxonomy Data
# =============================================================================


def taxonomy_data() -> dict[str, Any]:
    """Return a complete, valid taxonomy as plain data."""
    return {
        "categories": [
            {
                "id": "unknown",
                "name": "Unknown",
                "description": "Category could not be determined",
            },
            {
                "id": "database",
                "name": "Database",
                "description": "Database outages and slowdowns",
                "invite_users": ["U_DBA"],
                "invite_groups": ["S_DB_ONCALL"],
            },
            {
                "id": "security",
                "name": "Security",
                "description": "Security incidents",
            },
        ],
        "severities": [
            {"id": "critical", "name": "Critical", "description": "Full outage", "level": 1},
            {"id": "high", "name": "High", "description": "Major impact", "level": 2},
            {"id": "info", "name": "Info", "description": "No action needed", "level": 0},
        ],
        "assets": [
            {"id": "api", "name": "Public API", "description": "REST API"},
            {"id": "db", "name": "Primary DB", "description": "PostgreSQL cluster"},
            {"id": "web", "name": "Web Frontend", "description": "Dashboard"},
        ],
    }


# =============================================================================
# Factory Functions
# =============================================================================


class IncidentFactory:
    """Factory for creating incident test objects."""

    @staticmethod
    def create(
        incident_id: int = 1,
        title: str = "Database Outage!!",
        prefix: str = "inc",
        created_by: str = "U_CREATOR",
        **kwargs: Any,
    ) -> Incident:
        """Declare an incident with sensible defaults.

        Args:
            incident_id: Serial number.
            title: Incident title.
            prefix: Channel prefix.
            created_by: Declaring user.
            **kwargs: Passed through to Incident.create.

        Returns:
            A new Incident.
        """
        kwargs.setdefault("origin_channel_id", ChannelID("C_ORIGIN"))
        kwargs.setdefault("origin_channel_name", ChannelName("general"))
        return Incident.create(
            prefix,
            incident_id,
            title,
            created_by=SlackUserID(created_by),
            **kwargs,
        )

    @staticmethod
    def create_request(**overrides: Any) -> CreateIncidentRequest:
        """Build a CreateIncidentRequest with sensible defaults."""
        values: dict[str, Any] = {
            "title": "API latency spike",
            "origin_channel_id": "C_ORIGIN",
            "origin_channel_name": "general",
            "created_by": "U_CREATOR",
            "description": "p99 above 2s",
            "category_id": "database",
            "severity_id": "high",
            "asset_ids": ["api", "db"],
            "team_id": "T_TEAM",
        }
        values.update(overrides)
        return CreateIncidentRequest(**values)

    @staticmethod
    def with_channel(incident: Incident, channel_id: str = "C_INCIDENT") -> Incident:
        """Bind a channel and team so URL helpers have data."""
        incident.bind_channel(ChannelID(channel_id))
        return incident


class TaskFactory:
    """Factory for creating task test objects."""

    @staticmethod
    def create(
        incident_id: int = 1,
        title: str = "Restart replica",
        created_by: str = "U_CREATOR",
    ) -> Task:
        """Create a TODO task with sensible defaults."""
        return Task.create(incident_id, title, SlackUserID(created_by))


def incident_with_team(**kwargs: Any) -> Incident:
    """Declare an incident that knows its chat workspace."""
    kwargs.setdefault("team_id", TeamID("T_TEAM"))
    return IncidentFactory.create(**kwargs)


# =============================================================================
# Clock
# =============================================================================


class FixedClock:
    """A clock that only moves when told to.

    Patch it over ``utc_now`` in the module under test::

        clock = FixedClock()
        monkeypatch.setattr("incidentflow.incidents.tasks.utc_now", clock)
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        """Move the clock forward by a timedelta built from kwargs."""
        self.now = self.now + timedelta(**kwargs)
        return self.now
