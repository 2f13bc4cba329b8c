"""
Authentication models for IncidentFlow.

A Session binds a browser login to an internal user. AuthContext is the
identity of the caller for one operation; it is passed explicitly to the
code that needs it and never kept in module or context-variable state.
"""

import base64
import json
import secrets
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any

from incidentflow.exceptions import IdentifierError
from incidentflow.models.base import model_to_dict, utc_now
from incidentflow.models.identifiers import (
    SessionID,
    SessionSecret,
    SlackUserID,
    UserID,
)

SESSION_SECRET_BYTES = 24
DEFAULT_SESSION_DURATION = timedelta(days=7)


def generate_session_secret() -> SessionSecret:
    """
    Generate a URL-safe session secret without padding.

    Raises:
        IdentifierError: If the entropy source is unavailable.
    """
    try:
        raw = secrets.token_bytes(SESSION_SECRET_BYTES)
    except NotImplementedError as e:
        raise IdentifierError(
            "entropy source unavailable for session secret",
            details={"generator": "session_secret"},
        ) from e
    return SessionSecret(base64.urlsafe_b64encode(raw).decode("ascii").rstrip("="))


@dataclass
class Session:
    """
    An authenticated browser session.

    Attributes:
        id: Time-ordered session ID.
        secret: Random secret checked together with the ID. Never
            included in serialized output.
        user_id: Internal user the session belongs to.
        created_at: When the session was created.
        expires_at: When the session stops being valid.
    """

    id: SessionID
    secret: SessionSecret
    user_id: UserID
    created_at: datetime = field(default_factory=utc_now)
    expires_at: datetime = field(
        default_factory=lambda: utc_now() + DEFAULT_SESSION_DURATION
    )

    @classmethod
    def create(
        cls,
        user_id: UserID,
        duration: timedelta = DEFAULT_SESSION_DURATION,
    ) -> "Session":
        """
        Start a new session for a user.

        Raises:
            IdentifierError: If the session ID or secret cannot be generated.
        """
        now = utc_now()
        return cls(
            id=SessionID.new(),
            secret=generate_session_secret(),
            user_id=user_id,
            created_at=now,
            expires_at=now + duration,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the session has passed its expiry time."""
        return (now or utc_now()) > self.expires_at

    def is_valid(self) -> bool:
        """Check that the session is complete and not expired."""
        return (
            bool(self.id)
            and bool(self.secret)
            and bool(self.user_id)
            and not self.is_expired()
        )

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the session to a dictionary, leaving out the secret."""
        data = model_to_dict(self, exclude_none)
        data.pop("secret", None)
        return data

    def to_json(self, indent: int | None = None, exclude_none: bool = False) -> str:
        """Convert the session to a JSON string, leaving out the secret."""
        return json.dumps(self.to_dict(exclude_none), indent=indent)

    def __repr__(self) -> str:
        return (
            f"Session(id={self.id!s}, user_id={self.user_id!s}, "
            f"expires_at={self.expires_at.isoformat()})"
        )


@dataclass(frozen=True)
class AuthContext:
    """
    Identity of the caller of an operation.

    Attributes:
        user_id: Internal user ID.
        slack_user_id: Chat platform user ID.
        session_id: Session the request was authenticated with, if any.
            Chat events carry no session.
    """

    user_id: UserID
    slack_user_id: SlackUserID
    session_id: SessionID | None = None

    @classmethod
    def from_session(cls, session: Session, slack_user_id: SlackUserID) -> "AuthContext":
        """Build the context for a request authenticated by a session."""
        return cls(
            user_id=session.user_id,
            slack_user_id=slack_user_id,
            session_id=session.id,
        )

    def clone(self) -> "AuthContext":
        """Return an equal, independent copy."""
        return replace(self)

    def with_session(self, session_id: SessionID | None) -> "AuthContext":
        """Return a copy bound to a different session."""
        return replace(self, session_id=session_id)

    def has_session(self) -> bool:
        return bool(self.session_id)

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the context to a dictionary."""
        return model_to_dict(self, exclude_none)
