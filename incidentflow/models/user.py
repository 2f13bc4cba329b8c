"""
Chat user record.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from incidentflow.models.base import model_to_dict, model_to_json, utc_now
from incidentflow.models.identifiers import SlackUserID, UserID


@dataclass
class User:
    """
    A chat platform user known to IncidentFlow.

    Attributes:
        id: Internal user identifier.
        slack_user_id: Chat platform user identifier.
        name: Display name; may be empty when the profile was not fetched.
        email: Email address from the chat profile.
        created_at: When the record was created.
        updated_at: When the record was last refreshed.
    """

    slack_user_id: SlackUserID
    name: str = ""
    email: str = ""
    id: UserID = field(default_factory=UserID.new)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def placeholder(cls, slack_user_id: SlackUserID) -> "User":
        """
        Build a minimal user for an ID with no stored profile.

        The chat user ID doubles as the display name.
        """
        return cls(
            id=UserID(slack_user_id),
            slack_user_id=slack_user_id,
            name=str(slack_user_id),
        )

    def get_display_name(self) -> str:
        """Return the name to show for this user, falling back to the chat ID."""
        return self.name or str(self.slack_user_id)

    def update_profile(self, name: str, email: str) -> None:
        """Refresh name and email from the chat platform."""
        self.name = name
        self.email = email
        self.updated_at = utc_now()

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the user to a dictionary."""
        return model_to_dict(self, exclude_none)

    def to_json(self, indent: int | None = None, exclude_none: bool = False) -> str:
        """Convert the user to a JSON string."""
        return model_to_json(self, indent, exclude_none)
