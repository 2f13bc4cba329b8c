"""
Incident data models for IncidentFlow.

This module defines the incident aggregate, its lifecycle status and the
append-only status history that records every status change.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from incidentflow.exceptions import ValidationError
from incidentflow.incidents.requests import CreateIncidentRequest
from incidentflow.models.base import model_to_dict, model_to_json, utc_now
from incidentflow.models.channel import format_channel_name
from incidentflow.models.identifiers import (
    AssetID,
    ChannelID,
    ChannelName,
    IncidentID,
    SeverityID,
    SlackUserID,
    StatusHistoryID,
    TeamID,
)
from incidentflow.models.user import User

logger = logging.getLogger("incidentflow.incidents.models")


class IncidentStatus(Enum):
    """
    Status values for the incident lifecycle.

    Any status may follow any other; there is no transition table.
    """

    TRIAGE = "triage"
    """Incident was declared and is waiting to be assessed."""

    HANDLING = "handling"
    """Responders are actively working on the incident."""

    MONITORING = "monitoring"
    """A fix is in place and the situation is being watched."""

    CLOSED = "closed"
    """No further action needed."""

    @classmethod
    def parse(cls, value: "IncidentStatus | str") -> "IncidentStatus":
        """
        Convert a status or its exact string value to an IncidentStatus.

        Raises:
            ValidationError: If the value is not a valid status. Matching is
                case-sensitive.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                "invalid status", details={"status": value}
            ) from None

    @classmethod
    def is_valid(cls, value: "IncidentStatus | str") -> bool:
        """Check if the value names a valid status."""
        try:
            cls.parse(value)
        except ValidationError:
            return False
        return True


# Fields that cannot be reassigned once an Incident exists.
_IMMUTABLE_INCIDENT_FIELDS = frozenset(
    {
        "id",
        "channel_name",
        "origin_channel_id",
        "origin_channel_name",
        "team_id",
        "created_by",
        "created_at",
        "initial_triage",
    }
)


@dataclass
class Incident:
    """
    An incident tracked in its own chat channel.

    Use Incident.create to declare a new incident; the plain constructor
    is meant for collaborators that rebuild stored incidents. Both paths
    validate the invariants, so an Incident object is always complete.

    Attributes:
        id: Incident serial number assigned by the storage sequence.
        title: Short title; also the source of the channel name.
        origin_channel_id: Channel where the incident was declared.
        origin_channel_name: Name of the declaring channel.
        created_by: Chat user who declared the incident.
        channel_name: Name of the dedicated incident channel, derived once
            from the prefix, ID and title.
        description: Optional longer description.
        category_id: Key into the configured categories. May reference a
            category that is no longer configured.
        severity_id: Key into the configured severities. Empty means not
            yet assessed.
        asset_ids: Keys of the affected assets.
        channel_id: ID of the dedicated channel, set once the chat
            collaborator has created it.
        team_id: Chat workspace the incident belongs to.
        created_at: Creation timestamp.
        status: Current lifecycle status. Assigned values are parsed, so
            it is always an IncidentStatus member.
        lead: Chat user currently owning the incident. Defaults to the
            creator.
        initial_triage: Whether the incident started in TRIAGE.
    """

    id: IncidentID
    title: str
    origin_channel_id: ChannelID
    origin_channel_name: ChannelName
    created_by: SlackUserID
    channel_name: ChannelName
    description: str = ""
    category_id: str = ""
    severity_id: SeverityID = SeverityID("")
    asset_ids: list[AssetID] = field(default_factory=list)
    channel_id: ChannelID | None = None
    team_id: TeamID = TeamID("")
    created_at: datetime = field(default_factory=utc_now)
    status: IncidentStatus = IncidentStatus.HANDLING
    lead: SlackUserID | None = None
    initial_triage: bool = False

    def __post_init__(self) -> None:
        """Validate invariants and fill derived defaults."""
        object.__setattr__(self, "id", IncidentID.parse(self.id))
        if not self.origin_channel_id:
            raise ValidationError("origin channel ID is required")
        if not self.origin_channel_name:
            raise ValidationError("origin channel name is required")
        if not self.created_by:
            raise ValidationError("creator user ID is required")
        if not self.channel_name:
            raise ValidationError(
                "channel name is required", details={"incident_id": int(self.id)}
            )

        if not self.lead:
            self.lead = self.created_by

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_INCIDENT_FIELDS and name in self.__dict__:
            raise AttributeError(f"Incident.{name} cannot be changed after creation")
        if name == "status":
            value = IncidentStatus.parse(value)
        super().__setattr__(name, value)

    @classmethod
    def create(
        cls,
        prefix: str,
        incident_id: int,
        title: str,
        origin_channel_id: ChannelID,
        origin_channel_name: ChannelName,
        created_by: SlackUserID,
        description: str = "",
        category_id: str = "",
        severity_id: str = "",
        asset_ids: list[AssetID] | None = None,
        team_id: TeamID = TeamID(""),
        initial_triage: bool = False,
    ) -> "Incident":
        """
        Declare a new incident.

        The channel name is derived here and never recomputed, and the
        initial status is TRIAGE when ``initial_triage`` is set and
        HANDLING otherwise. The creator becomes the lead.

        Args:
            prefix: Channel name prefix from configuration.
            incident_id: Serial number from the storage sequence.
            title: Incident title.
            origin_channel_id: Channel where the incident was declared.
            origin_channel_name: Name of that channel.
            created_by: Declaring chat user.
            description: Optional description.
            category_id: Category key.
            severity_id: Severity key.
            asset_ids: Affected asset keys.
            team_id: Chat workspace ID, if known.
            initial_triage: Start in TRIAGE instead of HANDLING.

        Returns:
            The new incident. Its channel_id is None until the channel
            has been created.

        Raises:
            ValidationError: If the ID is not positive or a required field
                is empty.
        """
        incident_id = IncidentID.parse(incident_id)

        return cls(
            id=incident_id,
            title=title,
            origin_channel_id=origin_channel_id,
            origin_channel_name=origin_channel_name,
            created_by=created_by,
            channel_name=format_channel_name(prefix, incident_id, title),
            description=description,
            category_id=category_id,
            severity_id=SeverityID(severity_id),
            asset_ids=list(asset_ids or []),
            team_id=team_id,
            status=IncidentStatus.TRIAGE if initial_triage else IncidentStatus.HANDLING,
            lead=created_by,
            initial_triage=initial_triage,
        )

    @classmethod
    def create_from_request(
        cls,
        prefix: str,
        incident_id: int,
        request: CreateIncidentRequest,
    ) -> "Incident":
        """
        Declare a new incident from a CreateIncidentRequest.

        Raises:
            ValidationError: As for Incident.create.
        """
        return cls.create(
            prefix,
            incident_id,
            request.title,
            ChannelID(request.origin_channel_id),
            ChannelName(request.origin_channel_name),
            SlackUserID(request.created_by),
            description=request.description,
            category_id=request.category_id,
            severity_id=request.severity_id,
            asset_ids=[AssetID(a) for a in request.asset_ids],
            team_id=TeamID(request.team_id),
            initial_triage=request.initial_triage,
        )

    def change_status(
        self,
        status: IncidentStatus | str,
        changed_by: SlackUserID,
        note: str = "",
    ) -> "StatusHistory":
        """
        Move the incident to a new status.

        Any status may be reached from any other, including the current
        one. The returned history entry must be stored together with the
        new status; the storage collaborator provides the atomicity.

        Args:
            status: Target status.
            changed_by: Chat user making the change.
            note: Optional free-text note for the history.

        Returns:
            The StatusHistory entry recording this change.

        Raises:
            ValidationError: If the status is invalid or changed_by is
                empty. The incident is left unchanged.
        """
        new_status = IncidentStatus.parse(status)
        history = StatusHistory.create(self.id, new_status, changed_by, note)

        previous = self.status
        self.status = new_status
        logger.debug(
            f"Incident {int(self.id)} status {previous.value} -> {new_status.value} "
            f"by {changed_by}"
        )
        return history

    def assign_lead(self, user_id: SlackUserID) -> None:
        """
        Hand the incident to a new lead.

        Raises:
            ValidationError: If user_id is empty.
        """
        if not user_id:
            raise ValidationError(
                "lead user ID is required", details={"incident_id": int(self.id)}
            )
        self.lead = user_id

    def bind_channel(self, channel_id: ChannelID) -> None:
        """
        Record the ID of the dedicated channel once it has been created.

        Raises:
            ValidationError: If channel_id is empty.
        """
        if not channel_id:
            raise ValidationError(
                "channel ID is required", details={"incident_id": int(self.id)}
            )
        self.channel_id = channel_id

    def update_details(
        self,
        title: str | None = None,
        description: str | None = None,
        category_id: str | None = None,
        severity_id: str | None = None,
        asset_ids: list[AssetID] | None = None,
    ) -> list[str]:
        """
        Edit the descriptive fields of the incident.

        Only arguments that are not None are applied. The channel name is
        not recomputed when the title changes. Taxonomy IDs are not checked
        here; callers validate them against the taxonomy first.

        Returns:
            Names of the fields whose value changed.

        Raises:
            ValidationError: If title is given but empty. Nothing is changed.
        """
        if title is not None and not title:
            raise ValidationError(
                "incident title cannot be empty", details={"incident_id": int(self.id)}
            )

        updates: dict[str, Any] = {}
        if title is not None:
            updates["title"] = title
        if description is not None:
            updates["description"] = description
        if category_id is not None:
            updates["category_id"] = category_id
        if severity_id is not None:
            updates["severity_id"] = SeverityID(severity_id)
        if asset_ids is not None:
            updates["asset_ids"] = [AssetID(a) for a in asset_ids]

        changed = []
        for name, value in updates.items():
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.append(name)
        return changed

    def is_open(self) -> bool:
        """Check if the incident is not closed."""
        return self.status != IncidentStatus.CLOSED

    def is_closed(self) -> bool:
        """Check if the incident is closed."""
        return self.status == IncidentStatus.CLOSED

    def in_triage(self) -> bool:
        """Check if the incident is waiting for triage."""
        return self.status == IncidentStatus.TRIAGE

    def get_channel_url(self) -> str:
        """
        Return the web client URL of the incident channel.

        Empty until both the team and the channel ID are known.
        """
        if not self.team_id or not self.channel_id:
            return ""
        return f"https://app.slack.com/client/{self.team_id}/{self.channel_id}"

    def get_web_url(self, frontend_url: str) -> str:
        """Return the dashboard URL of the incident, or "" without a frontend."""
        if not frontend_url:
            return ""
        return f"{frontend_url.rstrip('/')}/incidents/{int(self.id)}"

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the incident to a dictionary."""
        return model_to_dict(self, exclude_none)

    def to_json(self, indent: int | None = None, exclude_none: bool = False) -> str:
        """Convert the incident to a JSON string."""
        return model_to_json(self, indent, exclude_none)

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return (
            f"Incident(id={int(self.id)}, title={self.title!r}, "
            f"channel={self.channel_name!s}, status={self.status.value})"
        )


@dataclass(frozen=True)
class StatusHistory:
    """
    One recorded incident status change.

    Entries are created once per change and never modified or deleted.
    The incident does not keep them; storage returns them on request.

    Attributes:
        id: Time-ordered entry ID.
        incident_id: Incident whose status changed.
        status: Status the incident moved to.
        changed_by: Chat user who made the change.
        changed_at: When the change happened.
        note: Optional note supplied with the change.
    """

    id: StatusHistoryID
    incident_id: IncidentID
    status: IncidentStatus
    changed_by: SlackUserID
    changed_at: datetime = field(default_factory=utc_now)
    note: str = ""

    @classmethod
    def create(
        cls,
        incident_id: IncidentID,
        status: IncidentStatus | str,
        changed_by: SlackUserID,
        note: str = "",
    ) -> "StatusHistory":
        """
        Record a new status change.

        Raises:
            ValidationError: If the incident ID is not positive, the status
                is invalid or changed_by is empty.
            IdentifierError: If the entry ID cannot be generated.
        """
        incident_id = IncidentID.parse(incident_id)
        parsed = IncidentStatus.parse(status)
        if not changed_by:
            raise ValidationError("changed by user ID is required")

        return cls(
            id=StatusHistoryID.new(),
            incident_id=incident_id,
            status=parsed,
            changed_by=changed_by,
            note=note,
        )

    def validate(self) -> None:
        """
        Check a stored entry before it is used.

        Raises:
            ValidationError: If any field is missing or invalid.
        """
        StatusHistoryID(self.id).validate()
        IncidentID.parse(self.incident_id)
        IncidentStatus.parse(self.status)
        if not self.changed_by:
            raise ValidationError("changed by user ID is required")
        if self.changed_at is None:
            raise ValidationError("changed at timestamp is required")

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the entry to a dictionary."""
        return model_to_dict(self, exclude_none)

    def to_json(self, indent: int | None = None, exclude_none: bool = False) -> str:
        """Convert the entry to a JSON string."""
        return model_to_json(self, indent, exclude_none)


@dataclass(frozen=True)
class StatusHistoryWithUser:
    """A status history entry paired with the user who made the change."""

    history: StatusHistory
    user: User

    @classmethod
    def resolve(cls, history: StatusHistory, user: User | None) -> "StatusHistoryWithUser":
        """Pair an entry with its user, using a placeholder for unknown users."""
        return cls(history=history, user=user or User.placeholder(history.changed_by))

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert to a dictionary with the history fields at the top level."""
        data = self.history.to_dict(exclude_none)
        data["user"] = self.user.to_dict(exclude_none)
        return data
