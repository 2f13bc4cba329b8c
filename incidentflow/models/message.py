"""
Chat message value object.

Messages are captured from the chat platform when a user declares an
incident or when the analysis collaborator reads channel history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from incidentflow.models.base import model_to_dict, model_to_json, utc_now
from incidentflow.models.identifiers import (
    ChannelID,
    EventTS,
    MessageID,
    SlackUserID,
    ThreadTS,
)


@dataclass(frozen=True)
class Message:
    """
    A chat message as seen by IncidentFlow.

    Attributes:
        id: Internal message identifier (``msg-`` prefixed UUID).
        user_id: Chat user who posted the message.
        user_name: Display name of the poster at capture time.
        channel_id: Channel the message was posted in.
        text: Raw message text.
        timestamp: When the message was captured.
        thread_ts: Root timestamp if the message is part of a thread.
        event_ts: Timestamp of the platform event that delivered it.
    """

    id: MessageID
    user_id: SlackUserID
    user_name: str
    channel_id: ChannelID
    text: str
    timestamp: datetime = field(default_factory=utc_now)
    thread_ts: ThreadTS | None = None
    event_ts: EventTS | None = None

    @classmethod
    def create(
        cls,
        user_id: SlackUserID,
        user_name: str,
        channel_id: ChannelID,
        text: str,
        thread_ts: ThreadTS | None = None,
        event_ts: EventTS | None = None,
    ) -> "Message":
        """Capture a new message with a freshly generated ID."""
        return cls(
            id=MessageID.new(),
            user_id=user_id,
            user_name=user_name,
            channel_id=channel_id,
            text=text,
            thread_ts=thread_ts,
            event_ts=event_ts,
        )

    def is_threaded(self) -> bool:
        """Check if the message belongs to a thread."""
        return bool(self.thread_ts)

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the message to a dictionary."""
        return model_to_dict(self, exclude_none)

    def to_json(self, indent: int | None = None, exclude_none: bool = False) -> str:
        """Convert the message to a JSON string."""
        return model_to_json(self, indent, exclude_none)
