"""
Domain models for the triage job.

These dataclasses are the normalized internal representation of the rows
the store client reads and writes. The store client converts them to and
from the relational store's row format; the engine only ever sees these.

Example:
    Building a subtask row for a plan step::

        subtask = Subtask(
            task_id=item.id,
            owner_id=item.owner_id,
            title=step.title,
            definition_of_done=step.definition_of_done,
            sort_order=0,
            assignee_agent_id=roster.resolve(step.bucket),
            metadata={"triage_bucket": step.bucket.value},
        )
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from board_triage.enums import ActivityAction, ActorType, Bucket, EntityType, TaskStatus


@dataclass
class WorkItem:
    """A backlog item on the board.

    Owned by the store. Triage never deletes one and only changes its status
    through a conditional write expecting INBOX.
    """

    id: str
    """Store-assigned identity (UUID string)."""

    title: str
    """One-line summary typed by the owner. May be very short."""

    status: TaskStatus
    """Current lifecycle status as read from the store."""

    owner_id: str
    """Identity of the board owner; every query is scoped by it."""

    description: str | None = None
    """Free-form description. Missing and blank are treated the same."""

    priority: str | None = None
    """Board priority (low, medium, high, urgent). Not used by triage."""

    created_at: datetime | None = None
    """Creation timestamp; the backlog is processed oldest first."""

    updated_at: datetime | None = None


@dataclass
class Subtask:
    """An actionable decomposition step of a work item.

    Raises:
        ValueError: If definition_of_done is blank. Every subtask must say
            what "done" means.
    """

    task_id: str
    """Parent work item identity."""

    owner_id: str
    title: str

    definition_of_done: str
    """Verifiable completion criterion. Never empty."""

    sort_order: int
    """Zero-based position within the parent's plan."""

    status: TaskStatus = TaskStatus.IN_PROGRESS
    assignee_agent_id: str | None = None
    result_summary: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)
    """Free-form metadata; triage stores the source bucket under ``triage_bucket``."""

    id: str | None = None
    """Store-assigned identity, None until inserted."""

    def __post_init__(self) -> None:
        if not self.definition_of_done.strip():
            raise ValueError(f"Subtask '{self.title}' has an empty definition of done")


@dataclass
class Comment:
    """Append-only comment attached to a work item."""

    task_id: str
    owner_id: str
    body: str
    author_type: ActorType = ActorType.AGENT
    author_agent_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class ActivityLogEntry:
    """Immutable audit record of one state-changing action."""

    owner_id: str
    action: ActivityAction
    entity_type: EntityType
    entity_id: str
    actor_type: ActorType = ActorType.AGENT
    actor_agent_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class RosterEntry:
    """Executor identity from the roster (agents directory).

    Read-only from the triage job's point of view.
    """

    id: str
    name: str
    role: str | None = None
    """Bucket affinity, e.g. "engineering". Optional."""

    is_active: bool = True


@dataclass(frozen=True)
class PlanStep:
    """One step of an execution plan, before it becomes a Subtask."""

    title: str
    definition_of_done: str
    bucket: Bucket


@dataclass
class ItemOutcome:
    """What a triage run did to one work item."""

    item_id: str
    bucket: Bucket
    status: TaskStatus
    """Target status of the transition (attempted, see status_applied)."""

    subtasks_created: int = 0

    skipped_existing: bool = False
    """True when decomposition was suppressed because subtasks already existed."""

    status_applied: bool = True
    """False when the conditional status write matched no row."""


@dataclass
class TriageReport:
    """Summary of one triage run."""

    outcomes: list[ItemOutcome] = field(default_factory=list)

    skipped_item_ids: list[str] = field(default_factory=list)
    """Fetched items that were no longer in the inbox when re-checked."""

    @property
    def processed_count(self) -> int:
        return len(self.outcomes)

    @property
    def subtasks_created(self) -> int:
        return sum(outcome.subtasks_created for outcome in self.outcomes)
