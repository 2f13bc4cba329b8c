"""
Unit tests for incident tasks.

Covers task creation and validation, the completion state machine and
its completed_at bookkeeping, edits, and message permalinks.
"""

import pytest

from incidentflow.exceptions import AlreadyInStateError, ValidationError
from incidentflow.incidents.tasks import Task, TaskStatus
from incidentflow.models.identifiers import ChannelID, MessageTS, SlackUserID, TaskID

from helpers import FixedClock, TaskFactory


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FixedClock:
    """Freeze the task module's clock."""
    fixed = FixedClock()
    monkeypatch.setattr("incidentflow.incidents.tasks.utc_now", fixed)
    return fixed


class TestTaskStatus:
    """Tests for TaskStatus."""

    def test_values(self) -> None:
        """Test the stored string values."""
        assert TaskStatus.TODO.value == "todo"
        assert TaskStatus.FOLLOW_UP.value == "follow-up"
        assert TaskStatus.COMPLETED.value == "completed"

    def test_parse(self) -> None:
        """Test parsing string values."""
        assert TaskStatus.parse("follow-up") is TaskStatus.FOLLOW_UP

    @pytest.mark.parametrize("value", ["", "done", "TODO", "follow_up"])
    def test_parse_invalid(self, value: str) -> None:
        """Test that unknown values are rejected."""
        with pytest.raises(ValidationError, match="invalid task status"):
            TaskStatus.parse(value)


class TestTaskCreate:
    """Tests for Task.create."""

    def test_defaults(self, clock: FixedClock) -> None:
        """Test a new task."""
        task = TaskFactory.create(incident_id=5, title="Rotate keys")
        assert isinstance(task.id, TaskID)
        assert task.incident_id == 5
        assert task.title == "Rotate keys"
        assert task.description == ""
        assert task.status == TaskStatus.TODO
        assert task.assignee_id is None
        assert task.completed_at is None
        assert task.created_at == clock.now
        assert task.updated_at == clock.now

    @pytest.mark.parametrize("incident_id", [0, -1])
    def test_non_positive_incident(self, incident_id: int) -> None:
        """Test that the incident ID must be positive."""
        with pytest.raises(ValidationError, match="incident ID must be positive"):
            TaskFactory.create(incident_id=incident_id)

    @pytest.mark.parametrize("incident_id", ["1", 1.0, True])
    def test_non_integer_incident(self, incident_id: object) -> None:
        """Test that incident IDs of other types are rejected, not converted."""
        with pytest.raises(ValidationError, match="incident ID must be an integer"):
            TaskFactory.create(incident_id=incident_id)  # type: ignore[arg-type]

    def test_empty_title(self) -> None:
        """Test that a title is required."""
        with pytest.raises(ValidationError, match="task title is required"):
            TaskFactory.create(title="")

    def test_empty_creator(self) -> None:
        """Test that a creator is required."""
        with pytest.raises(ValidationError, match="creator user ID is required"):
            TaskFactory.create(created_by="")

    def test_unique_ids(self) -> None:
        """Test that tasks get distinct IDs."""
        assert TaskFactory.create().id != TaskFactory.create().id


class TestTaskReconstruction:
    """Tests for building tasks from stored data."""

    def test_completed_without_timestamp(self) -> None:
        """Test that a completed task must carry completed_at."""
        with pytest.raises(ValidationError, match="completed_at"):
            Task(
                id=TaskID.new(),
                incident_id=1,  # type: ignore[arg-type]
                title="Stored",
                created_by=SlackUserID("U1"),
                status=TaskStatus.COMPLETED,
            )

    def test_open_with_timestamp(self, clock: FixedClock) -> None:
        """Test that an open task must not carry completed_at."""
        with pytest.raises(ValidationError, match="completed_at"):
            Task(
                id=TaskID.new(),
                incident_id=1,  # type: ignore[arg-type]
                title="Stored",
                created_by=SlackUserID("U1"),
                status="todo",  # type: ignore[arg-type]
                completed_at=clock.now,
            )

    def test_status_string_is_parsed(self, clock: FixedClock) -> None:
        """Test that a stored status string becomes a member."""
        task = Task(
            id=TaskID.new(),
            incident_id=1,  # type: ignore[arg-type]
            title="Stored",
            created_by=SlackUserID("U1"),
            status="completed",  # type: ignore[arg-type]
            completed_at=clock.now,
        )
        assert task.is_completed()


class TestTaskCompletion:
    """Tests for complete, uncomplete and update_status."""

    def test_complete(self, clock: FixedClock) -> None:
        """Test completing a task."""
        task = TaskFactory.create()
        done_at = clock.advance(minutes=5)
        task.complete()
        assert task.status == TaskStatus.COMPLETED
        assert task.is_completed()
        assert task.completed_at == done_at
        assert task.updated_at == done_at
        assert task.updated_at > task.created_at

    def test_complete_twice(self, task: Task) -> None:
        """Test that completing a completed task raises and changes nothing."""
        task.complete()
        completed_at = task.completed_at
        updated_at = task.updated_at
        with pytest.raises(AlreadyInStateError, match="task is already completed"):
            task.complete()
        assert task.completed_at == completed_at
        assert task.updated_at == updated_at

    def test_uncomplete(self, clock: FixedClock) -> None:
        """Test reopening a completed task."""
        task = TaskFactory.create()
        task.complete()
        reopened_at = clock.advance(minutes=1)
        task.uncomplete()
        assert task.status == TaskStatus.TODO
        assert task.completed_at is None
        assert task.updated_at == reopened_at

    def test_uncomplete_todo(self, task: Task) -> None:
        """Test that reopening a TODO task raises."""
        with pytest.raises(AlreadyInStateError, match="task is already todo"):
            task.uncomplete()
        assert task.status == TaskStatus.TODO

    def test_uncomplete_follow_up(self, task: Task) -> None:
        """Test that a follow-up task can be moved back to TODO."""
        task.update_status(TaskStatus.FOLLOW_UP)
        task.uncomplete()
        assert task.status == TaskStatus.TODO

    def test_update_status_to_completed(self, clock: FixedClock) -> None:
        """Test that update_status sets completed_at."""
        task = TaskFactory.create()
        now = clock.advance(seconds=30)
        task.update_status("completed")
        assert task.completed_at == now

    def test_update_status_clears_completed_at(self, task: Task) -> None:
        """Test that leaving COMPLETED clears completed_at."""
        task.complete()
        task.update_status(TaskStatus.FOLLOW_UP)
        assert task.status == TaskStatus.FOLLOW_UP
        assert task.completed_at is None
        assert not task.is_completed()

    def test_update_status_same_status(self, clock: FixedClock) -> None:
        """Test that re-applying a status is accepted and refreshes timestamps."""
        task = TaskFactory.create()
        task.update_status(TaskStatus.COMPLETED)
        later = clock.advance(minutes=2)
        task.update_status(TaskStatus.COMPLETED)
        assert task.completed_at == later
        assert task.updated_at == later

    def test_update_status_invalid(self, task: Task) -> None:
        """Test that an invalid status raises and changes nothing."""
        with pytest.raises(ValidationError):
            task.update_status("done")
        assert task.status == TaskStatus.TODO

    def test_completed_at_invariant(self, task: Task) -> None:
        """Test completed_at across a sequence of transitions."""
        for status in ["completed", "todo", "follow-up", "completed", "follow-up"]:
            task.update_status(status)
            assert (task.completed_at is not None) == (status == "completed")

    def test_status_assignment_sets_completed_at(self, clock: FixedClock) -> None:
        """Test that assigning COMPLETED behaves like update_status."""
        task = TaskFactory.create()
        now = clock.advance(minutes=1)
        task.status = TaskStatus.COMPLETED
        assert task.completed_at == now
        assert task.updated_at == now

        task.status = "todo"  # type: ignore[assignment]
        assert task.status == TaskStatus.TODO
        assert task.completed_at is None

    def test_status_assignment_invalid(self, task: Task) -> None:
        """Test that assigning an unknown status raises and changes nothing."""
        with pytest.raises(ValidationError, match="invalid task status"):
            task.status = "bogus"  # type: ignore[assignment]
        assert task.status == TaskStatus.TODO
        assert task.completed_at is None

    def test_completed_at_not_assignable(self, task: Task) -> None:
        """Test that completed_at only moves with the status."""
        task.complete()
        with pytest.raises(AttributeError):
            task.completed_at = None
        assert task.completed_at is not None


class TestTaskEdits:
    """Tests for task edits."""

    def test_assign(self, clock: FixedClock) -> None:
        """Test assigning and unassigning."""
        task = TaskFactory.create()
        now = clock.advance(seconds=1)
        task.assign(SlackUserID("U_OWNER"))
        assert task.assignee_id == "U_OWNER"
        assert task.is_assigned()
        assert task.updated_at == now

        task.assign(None)
        assert task.assignee_id is None
        assert not task.is_assigned()

    def test_update_title(self, clock: FixedClock) -> None:
        """Test renaming a task."""
        task = TaskFactory.create()
        now = clock.advance(seconds=1)
        task.update_title("Failover to replica")
        assert task.title == "Failover to replica"
        assert task.updated_at == now

    def test_update_title_empty(self, clock: FixedClock) -> None:
        """Test that an empty title is rejected without touching the task."""
        task = TaskFactory.create()
        created = task.updated_at
        clock.advance(seconds=1)
        with pytest.raises(ValidationError, match="task title cannot be empty"):
            task.update_title("")
        assert task.title == "Restart replica"
        assert task.updated_at == created

    def test_update_description(self, task: Task) -> None:
        """Test editing the description."""
        task.update_description("Use the runbook")
        assert task.description == "Use the runbook"

    def test_cannot_reassign_identity(self, task: Task) -> None:
        """Test that identity fields are fixed."""
        with pytest.raises(AttributeError):
            task.incident_id = 2  # type: ignore[assignment]
        with pytest.raises(AttributeError):
            task.id = TaskID.new()


class TestTaskMessageUrl:
    """Tests for Task.get_message_url."""

    def test_url(self, task: Task) -> None:
        """Test the permalink with the stored channel."""
        task.set_channel_id(ChannelID("C123"))
        task.set_message_ts(MessageTS("1700000000.123456"))
        assert task.get_message_url() == (
            "https://slack.com/archives/C123/p1700000000123456"
        )

    def test_url_with_explicit_channel(self, task: Task) -> None:
        """Test that an explicit channel overrides the stored one."""
        task.set_channel_id(ChannelID("C123"))
        task.set_message_ts(MessageTS("1700000000.123456"))
        assert task.get_message_url(ChannelID("C999")) == (
            "https://slack.com/archives/C999/p1700000000123456"
        )

    def test_only_first_dot_removed(self, task: Task) -> None:
        """Test that only the first dot of the timestamp is removed."""
        task.set_message_ts(MessageTS("1.2.3"))
        assert task.get_message_url(ChannelID("C1")) == "https://slack.com/archives/C1/p12.3"

    def test_missing_parts(self, task: Task) -> None:
        """Test that the URL is empty without a channel or timestamp."""
        assert task.get_message_url() == ""
        assert task.get_message_url(ChannelID("C1")) == ""
        task.set_message_ts(MessageTS("1700000000.123456"))
        assert task.get_message_url() == ""


class TestTaskSerialization:
    """Tests for task serialization."""

    def test_to_dict(self, task: Task) -> None:
        """Test dictionary output."""
        task.complete()
        data = task.to_dict()
        assert data["status"] == "completed"
        assert data["incident_id"] == 1
        assert isinstance(data["completed_at"], str)

    def test_repr(self, task: Task) -> None:
        """Test the debug representation."""
        assert repr(task) == (
            f"Task(id={task.id}, incident_id=1, title='Restart replica', status=todo)"
        )
