"""
Typed identifiers for IncidentFlow.

Each identifier space gets its own nominal type so that a channel ID
cannot be handed to a parameter expecting a user ID without a type
checker noticing. The types subclass ``str`` or ``int`` and therefore
serialize and compare like the primitive they wrap.

Generation rules:
    - Random IDs (tasks, incident requests, messages, users) use UUID4.
    - Session and status history IDs use a time-ordered UUID7 so that
      storage indexes stay roughly append-only. Generation may raise
      IdentifierError and never degrades to a random ID.
    - Incident IDs are assigned by an external sequence; the type only
      validates positivity.
"""

from typing import TypeVar

from incidentflow.exceptions import ValidationError
from incidentflow.models.base import generate_uuid, generate_uuid7

S = TypeVar("S", bound="StringID")


class StringID(str):
    """Base class for string-backed identifiers."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__str__(self)!r})"


class RandomStringID(StringID):
    """String identifier generated from a random UUID4."""

    __slots__ = ()

    @classmethod
    def new(cls: type[S]) -> S:
        """Generate a fresh random identifier."""
        return cls(generate_uuid())


class TimeOrderedStringID(StringID):
    """String identifier generated from a time-ordered UUID7."""

    __slots__ = ()

    @classmethod
    def new(cls: type[S]) -> S:
        """
        Generate a fresh time-ordered identifier.

        Raises:
            IdentifierError: If the entropy source is unavailable.
        """
        return cls(generate_uuid7())


class UserID(RandomStringID):
    """Internal user identifier."""

    __slots__ = ()


class SlackUserID(StringID):
    """Chat platform user identifier (e.g. ``U01234ABCDE``)."""

    __slots__ = ()


class ChannelID(StringID):
    """Chat platform channel identifier (e.g. ``C01234ABCDE``)."""

    __slots__ = ()


class ChannelName(StringID):
    """Chat platform channel name (e.g. ``inc-1-database-outage``)."""

    __slots__ = ()


class TeamID(StringID):
    """Chat workspace identifier."""

    __slots__ = ()


class MessageID(StringID):
    """Internal identifier for a recorded chat message."""

    __slots__ = ()

    @classmethod
    def new(cls) -> "MessageID":
        """Generate a fresh message identifier with the ``msg-`` prefix."""
        return cls(f"msg-{generate_uuid()}")


class MessageTS(StringID):
    """Chat message timestamp (e.g. ``1234567890.123456``)."""

    __slots__ = ()


class ThreadTS(StringID):
    """Timestamp of the thread root message."""

    __slots__ = ()


class EventTS(StringID):
    """Timestamp of a chat platform event."""

    __slots__ = ()


class SessionID(TimeOrderedStringID):
    """Authenticated session identifier."""

    __slots__ = ()


class SessionSecret(StringID):
    """Secret token paired with a session ID."""

    __slots__ = ()


class IncidentRequestID(RandomStringID):
    """Identifier of a pending incident creation request."""

    __slots__ = ()


class TaskID(RandomStringID):
    """Identifier of an incident task."""

    __slots__ = ()


class StatusHistoryID(TimeOrderedStringID):
    """Identifier of a status history entry."""

    __slots__ = ()

    def validate(self) -> None:
        """Raise ValidationError if the ID is empty."""
        if not self:
            raise ValidationError("status history ID cannot be empty")


class SeverityID(StringID):
    """Key into the configured severities."""

    __slots__ = ()


class AssetID(StringID):
    """Key into the configured assets."""

    __slots__ = ()


class IncidentID(int):
    """
    Incident serial number.

    Incident numbers are handed out by the storage sequence (1, 2, 3, ...).
    This type never generates values; it only checks that one is usable.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"IncidentID({int(self)})"

    @classmethod
    def parse(cls, value: object) -> "IncidentID":
        """
        Convert a stored or submitted value to a validated IncidentID.

        Only integers are accepted. Strings, floats and booleans are
        rejected rather than converted.

        Raises:
            ValidationError: If the value is not an integer or not positive.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(
                "incident ID must be an integer",
                details={"incident_id": value},
            )
        incident_id = value if isinstance(value, cls) else cls(value)
        incident_id.validate()
        return incident_id

    def validate(self) -> None:
        """
        Check that the incident ID is positive.

        Raises:
            ValidationError: If the ID is zero or negative.
        """
        if self <= 0:
            raise ValidationError(
                "incident ID must be positive",
                details={"incident_id": int(self)},
            )
