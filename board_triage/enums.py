"""Enumerations shared by the store client and the triage engine."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle status of a work item or subtask.

    Declaration order is the board's column order. Triage only ever moves
    an item out of INBOX, into TRIAGE or NEEDS_CLARIFICATION.
    """

    INBOX = "inbox"
    TRIAGE = "triage"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    REVIEW = "review"
    NEEDS_CLARIFICATION = "needs_clarification"
    DONE = "done"
    CANCELED = "canceled"

    def __str__(self) -> str:
        return self.value


class Bucket(str, Enum):
    """Topic bucket assigned by the classifier."""

    COMMUNITY = "community"
    OPERATIONS = "operations"
    ENGINEERING = "engineering"
    RESEARCH = "research"
    GENERAL = "general"

    def __str__(self) -> str:
        return self.value

    @property
    def is_specialized(self) -> bool:
        """Check if the bucket gets its own step in a plan."""
        return self is not Bucket.GENERAL


class ActorType(str, Enum):
    """Kind of author for comments and activity entries."""

    HUMAN = "human"
    AGENT = "agent"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value


class ActivityAction(str, Enum):
    """Actions recorded in the activity log by a triage run."""

    CREATE_SUBTASKS = "create_subtasks"
    ADD_COMMENT = "add_comment"
    MOVE_STATUS = "move_status"

    def __str__(self) -> str:
        return self.value


class EntityType(str, Enum):
    """Target entity kinds referenced by activity entries."""

    TASK = "task"
    SUBTASK = "subtask"
    COMMENT = "comment"

    def __str__(self) -> str:
        return self.value
