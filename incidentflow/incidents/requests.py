"""
Incident creation requests.

Declaring an incident is a two-step interaction: a user's message is
captured as a short-lived IncidentRequest while the chat collaborator
shows a confirmation dialog, and the confirmed dialog produces a
CreateIncidentRequest that carries everything Incident.create needs.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from incidentflow.models.base import model_to_dict, model_to_json, utc_now
from incidentflow.models.identifiers import (
    ChannelID,
    IncidentRequestID,
    MessageTS,
    SlackUserID,
)

DEFAULT_REQUEST_TTL = timedelta(minutes=30)


@dataclass
class CreateIncidentRequest:
    """
    Parameters for declaring an incident.

    Attributes:
        title: Incident title.
        origin_channel_id: Channel where the incident is being declared.
        origin_channel_name: Name of that channel.
        created_by: Declaring chat user.
        description: Optional description.
        category_id: Chosen category key.
        severity_id: Chosen severity key; empty when not assessed.
        asset_ids: Chosen affected asset keys.
        team_id: Chat workspace ID, if known.
        initial_triage: Start the incident in TRIAGE.
    """

    title: str
    origin_channel_id: str
    origin_channel_name: str
    created_by: str
    description: str = ""
    category_id: str = ""
    severity_id: str = ""
    asset_ids: list[str] = field(default_factory=list)
    team_id: str = ""
    initial_triage: bool = False

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the request to a dictionary."""
        return model_to_dict(self, exclude_none)


@dataclass
class IncidentRequest:
    """
    A pending incident declaration awaiting confirmation.

    Attributes:
        id: Random request ID, used to correlate the dialog submission.
        channel_id: Channel of the triggering message.
        message_ts: Timestamp of the triggering message.
        title: Proposed title.
        requested_by: Chat user who triggered the request.
        created_at: When the request was captured.
        expires_at: After this time the request can no longer be confirmed.
    """

    id: IncidentRequestID
    channel_id: ChannelID
    message_ts: MessageTS
    title: str
    requested_by: SlackUserID
    created_at: datetime = field(default_factory=utc_now)
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.expires_at is None:
            self.expires_at = self.created_at + DEFAULT_REQUEST_TTL

    @classmethod
    def create(
        cls,
        channel_id: ChannelID,
        message_ts: MessageTS,
        title: str,
        requested_by: SlackUserID,
        ttl: timedelta = DEFAULT_REQUEST_TTL,
    ) -> "IncidentRequest":
        """Capture a new request that expires after ``ttl``."""
        now = utc_now()
        return cls(
            id=IncidentRequestID.new(),
            channel_id=channel_id,
            message_ts=message_ts,
            title=title,
            requested_by=requested_by,
            created_at=now,
            expires_at=now + ttl,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the request can no longer be confirmed."""
        return (now or utc_now()) > self.expires_at

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the request to a dictionary."""
        return model_to_dict(self, exclude_none)

    def to_json(self, indent: int | None = None, exclude_none: bool = False) -> str:
        """Convert the request to a JSON string."""
        return model_to_json(self, indent, exclude_none)
