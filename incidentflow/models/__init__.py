"""
Shared data models for IncidentFlow.

This module exports identifier types, the channel name helpers and the
chat-side value objects used by the incident and auth packages.
"""

from incidentflow.models.base import (
    generate_uuid,
    generate_uuid7,
    model_to_dict,
    model_to_json,
    utc_now,
)
from incidentflow.models.channel import (
    DEFAULT_CHANNEL_PREFIX,
    MAX_CHANNEL_NAME_BYTES,
    MAX_TITLE_BYTES,
    format_channel_name,
    sanitize_channel_name,
)
from incidentflow.models.identifiers import (
    AssetID,
    ChannelID,
    ChannelName,
    EventTS,
    IncidentID,
    IncidentRequestID,
    MessageID,
    MessageTS,
    SessionID,
    SessionSecret,
    SeverityID,
    SlackUserID,
    StatusHistoryID,
    TaskID,
    TeamID,
    ThreadTS,
    UserID,
)
from incidentflow.models.message import Message
from incidentflow.models.user import User

__all__ = [
    # Helpers
    "generate_uuid",
    "generate_uuid7",
    "model_to_dict",
    "model_to_json",
    "utc_now",
    # Channel names
    "DEFAULT_CHANNEL_PREFIX",
    "MAX_CHANNEL_NAME_BYTES",
    "MAX_TITLE_BYTES",
    "format_channel_name",
    "sanitize_channel_name",
    # Identifiers
    "AssetID",
    "ChannelID",
    "ChannelName",
    "EventTS",
    "IncidentID",
    "IncidentRequestID",
    "MessageID",
    "MessageTS",
    "SessionID",
    "SessionSecret",
    "SeverityID",
    "SlackUserID",
    "StatusHistoryID",
    "TaskID",
    "TeamID",
    "ThreadTS",
    "UserID",
    # Value objects
    "Message",
    "User",
]
