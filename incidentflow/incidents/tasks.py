"""
Incident tasks for IncidentFlow.

Tasks are remediation action items owned by one incident. Their status
moves independently of the incident's status.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from incidentflow.exceptions import AlreadyInStateError, ValidationError
from incidentflow.models.base import model_to_dict, model_to_json, utc_now
from incidentflow.models.identifiers import (
    ChannelID,
    IncidentID,
    MessageTS,
    SlackUserID,
    TaskID,
)

logger = logging.getLogger("incidentflow.incidents.tasks")

MESSAGE_ARCHIVE_URL = "https://slack.com/archives"


class TaskStatus(Enum):
    """Status values for a task. Any status may follow any other."""

    TODO = "todo"
    """Task needs to be done."""

    FOLLOW_UP = "follow-up"
    """Task needs follow-up after the incident."""

    COMPLETED = "completed"
    """Task is done."""

    @classmethod
    def parse(cls, value: "TaskStatus | str") -> "TaskStatus":
        """
        Convert a status or its exact string value to a TaskStatus.

        Raises:
            ValidationError: If the value is not a valid task status.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                "invalid task status", details={"status": value}
            ) from None


_IMMUTABLE_TASK_FIELDS = frozenset({"id", "incident_id", "created_by", "created_at"})


@dataclass
class Task:
    """
    A remediation task attached to an incident.

    ``completed_at`` is set exactly while the status is COMPLETED. Assigning
    ``status`` behaves like update_status(), and ``completed_at`` cannot be
    assigned directly. Every mutator refreshes ``updated_at``.

    Attributes:
        id: Random task ID.
        incident_id: Owning incident.
        title: Short task title, never empty.
        created_by: Chat user who created the task.
        description: Optional details.
        status: Current task status.
        assignee_id: Chat user the task is assigned to, if any.
        channel_id: Channel where the task message was last posted.
        message_ts: Timestamp of that message, used for permalinks.
        created_at: Creation timestamp.
        updated_at: Timestamp of the last mutation.
        completed_at: When the task was completed, None unless COMPLETED.
    """

    id: TaskID
    incident_id: IncidentID
    title: str
    created_by: SlackUserID
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    assignee_id: SlackUserID | None = None
    channel_id: ChannelID | None = None
    message_ts: MessageTS | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        object.__setattr__(self, "incident_id", IncidentID.parse(self.incident_id))
        if not self.title:
            raise ValidationError("task title is required")
        if not self.created_by:
            raise ValidationError("creator user ID is required")

        if (self.status == TaskStatus.COMPLETED) != (self.completed_at is not None):
            raise ValidationError(
                "completed_at must be set exactly when the task is completed",
                details={
                    "task_id": str(self.id),
                    "status": self.status.value,
                    "completed_at": self.completed_at,
                },
            )

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "status":
            value = TaskStatus.parse(value)
            if name in self.__dict__:
                self._set_status(value)
                return
        elif name in self.__dict__:
            if name in _IMMUTABLE_TASK_FIELDS:
                raise AttributeError(f"Task.{name} cannot be changed after creation")
            if name == "completed_at":
                raise AttributeError("Task.completed_at follows the task status")
        super().__setattr__(name, value)

    @classmethod
    def create(
        cls,
        incident_id: int,
        title: str,
        created_by: SlackUserID,
    ) -> "Task":
        """
        Create a new TODO task.

        Raises:
            ValidationError: If the incident ID is not positive or the
                title or creator is empty.
        """
        incident_id = IncidentID.parse(incident_id)
        now = utc_now()
        return cls(
            id=TaskID.new(),
            incident_id=incident_id,
            title=title,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )

    def complete(self) -> None:
        """
        Mark the task as completed.

        Raises:
            AlreadyInStateError: If the task is already completed.
        """
        if self.status == TaskStatus.COMPLETED:
            raise AlreadyInStateError(
                "task is already completed", details={"task_id": str(self.id)}
            )
        self._set_status(TaskStatus.COMPLETED)

    def uncomplete(self) -> None:
        """
        Move the task back to TODO.

        Raises:
            AlreadyInStateError: If the task is already TODO.
        """
        if self.status == TaskStatus.TODO:
            raise AlreadyInStateError(
                "task is already todo", details={"task_id": str(self.id)}
            )
        self._set_status(TaskStatus.TODO)

    def update_status(self, status: TaskStatus | str) -> None:
        """
        Set the task status.

        Unlike complete(), re-applying the current status is accepted and
        still refreshes the timestamps.

        Raises:
            ValidationError: If the status is invalid.
        """
        self._set_status(TaskStatus.parse(status))

    def _set_status(self, status: TaskStatus) -> None:
        now = utc_now()
        previous = self.status
        object.__setattr__(self, "status", status)
        object.__setattr__(
            self, "completed_at", now if status == TaskStatus.COMPLETED else None
        )
        self.updated_at = now
        logger.debug(f"Task {self.id} status {previous.value} -> {status.value}")

    def assign(self, user_id: SlackUserID | None) -> None:
        """Assign the task to a user, or unassign it with None."""
        self.assignee_id = user_id
        self.updated_at = utc_now()

    def update_title(self, title: str) -> None:
        """
        Change the task title.

        Raises:
            ValidationError: If the title is empty. The task is unchanged.
        """
        if not title:
            raise ValidationError(
                "task title cannot be empty", details={"task_id": str(self.id)}
            )
        self.title = title
        self.updated_at = utc_now()

    def update_description(self, description: str) -> None:
        self.description = description
        self.updated_at = utc_now()

    def set_message_ts(self, message_ts: MessageTS) -> None:
        self.message_ts = message_ts
        self.updated_at = utc_now()

    def set_channel_id(self, channel_id: ChannelID) -> None:
        self.channel_id = channel_id
        self.updated_at = utc_now()

    def is_completed(self) -> bool:
        """Check if the task is completed."""
        return self.status == TaskStatus.COMPLETED

    def is_assigned(self) -> bool:
        """Check if the task has an assignee."""
        return bool(self.assignee_id)

    def get_message_url(self, channel_id: ChannelID | None = None) -> str:
        """
        Return the permalink of the task message.

        Args:
            channel_id: Channel to link into. Defaults to the channel the
                task was last posted in.

        Returns:
            ``https://slack.com/archives/<channel>/p<ts>`` with the first
            dot removed from the timestamp, or "" when the channel or the
            message timestamp is unknown.
        """
        channel = channel_id or self.channel_id
        if not self.message_ts or not channel:
            return ""
        formatted_ts = self.message_ts.replace(".", "", 1)
        return f"{MESSAGE_ARCHIVE_URL}/{channel}/p{formatted_ts}"

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert the task to a dictionary."""
        return model_to_dict(self, exclude_none)

    def to_json(self, indent: int | None = None, exclude_none: bool = False) -> str:
        """Convert the task to a JSON string."""
        return model_to_json(self, indent, exclude_none)

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return (
            f"Task(id={self.id!s}, incident_id={int(self.incident_id)}, "
            f"title={self.title!r}, status={self.status.value})"
        )
