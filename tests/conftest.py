"""Pytest configuration and shared fixtures."""

import itertools
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest
import structlog

from board_triage.config.settings import TriageSettings
from board_triage.engine.roster import Roster
from board_triage.enums import TaskStatus
from board_triage.exceptions import StoreError
from board_triage.models.domain import ActivityLogEntry, Comment, RosterEntry, Subtask, WorkItem
from board_triage.store.base import TaskStore

OWNER_ID = "owner-1"
BASE_TIME = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)


class InMemoryStore(TaskStore):
    """TaskStore double holding rows in lists.

    ``hooks`` run before the named operation (used to simulate a concurrent
    actor); ``fail_on`` makes the named operation raise StoreError.
    """

    def __init__(self, items: list[WorkItem] | None = None, roster: list[RosterEntry] | None = None):
        self.items: dict[str, WorkItem] = {item.id: item for item in items or []}
        self.roster = list(roster or [])
        self.subtasks: list[Subtask] = []
        self.comments: list[Comment] = []
        self.activity: list[ActivityLogEntry] = []
        self.calls: list[str] = []
        self.hooks: dict[str, Callable[[], None]] = {}
        self.fail_on: str | None = None
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "InMemoryStore":
        return self

    async def __aexit__(self, *args) -> None:
        pass

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        hook = self.hooks.pop(operation, None)
        if hook is not None:
            hook()
        if self.fail_on == operation:
            raise StoreError("simulated failure", operation=operation, status_code=500)

    def add_items(self, *items: WorkItem) -> None:
        for item in items:
            self.items[item.id] = item

    def set_status(self, item_id: str, status: TaskStatus) -> None:
        self.items[item_id] = replace(self.items[item_id], status=status)

    def subtasks_for(self, item_id: str) -> list[Subtask]:
        return [subtask for subtask in self.subtasks if subtask.task_id == item_id]

    def actions_for(self, item_id: str) -> list[str]:
        return [entry.action.value for entry in self.activity if entry.entity_id == item_id]

    async def list_inbox_items(self, owner_id: str, limit: int) -> list[WorkItem]:
        self._enter("list_inbox_items")
        inbox = [
            replace(item)
            for item in self.items.values()
            if item.owner_id == owner_id and item.status is TaskStatus.INBOX
        ]
        inbox.sort(key=lambda item: item.created_at or BASE_TIME)
        return inbox[:limit]

    async def has_any_subtask(self, owner_id: str, item_id: str) -> bool:
        self._enter("has_any_subtask")
        return any(s.owner_id == owner_id and s.task_id == item_id for s in self.subtasks)

    async def insert_subtasks(self, subtasks: list[Subtask]) -> list[str]:
        self._enter("insert_subtasks")
        ids = []
        for subtask in subtasks:
            stored = replace(subtask, id=f"sub-{next(self._ids)}")
            self.subtasks.append(stored)
            ids.append(stored.id)
        return ids

    async def insert_comment(self, comment: Comment) -> None:
        self._enter("insert_comment")
        self.comments.append(replace(comment, id=f"com-{next(self._ids)}"))

    async def conditional_update_status(
        self,
        item_id: str,
        owner_id: str,
        expected_status: TaskStatus,
        new_status: TaskStatus,
    ) -> int:
        self._enter("conditional_update_status")
        item = self.items.get(item_id)
        if item is None or item.owner_id != owner_id or item.status is not expected_status:
            return 0
        self.items[item_id] = replace(item, status=new_status)
        return 1

    async def append_activity(self, entry: ActivityLogEntry) -> None:
        self._enter("append_activity")
        self.activity.append(replace(entry, id=f"act-{next(self._ids)}"))

    async def list_active_roster(self, owner_id: str) -> list[RosterEntry]:
        self._enter("list_active_roster")
        return [entry for entry in self.roster if entry.is_active]


def make_item(item_id: str, title: str, description: str | None = "", minutes: int = 0, **kwargs) -> WorkItem:
    """Build an inbox work item created ``minutes`` after BASE_TIME."""
    return WorkItem(
        id=item_id,
        title=title,
        description=description,
        status=kwargs.pop("status", TaskStatus.INBOX),
        owner_id=kwargs.pop("owner_id", OWNER_ID),
        created_at=BASE_TIME + timedelta(minutes=minutes),
        **kwargs,
    )


@pytest.fixture(autouse=True)
def quiet_structlog():
    """Keep log output out of test output, then restore structlog defaults."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def roster_entries() -> list[RosterEntry]:
    """Active roster with a default agent and two specialists."""
    return [
        RosterEntry(id="agent-dispatcher", name="Dispatcher", role="coordinator"),
        RosterEntry(id="agent-dev", name="Dev", role="engineering"),
        RosterEntry(id="agent-ops", name="Ops", role="operations"),
        RosterEntry(id="agent-retired", name="Research", role="research", is_active=False),
    ]


@pytest.fixture
def roster(roster_entries: list[RosterEntry]) -> Roster:
    return Roster.from_entries(roster_entries, default_agent="dispatcher")


@pytest.fixture
def store(roster_entries: list[RosterEntry]) -> InMemoryStore:
    """Empty in-memory store with the default roster."""
    return InMemoryStore(roster=roster_entries)


@pytest.fixture
def settings() -> TriageSettings:
    """Settings for tests, built without touching the environment."""
    return TriageSettings(
        store={"url": "https://store.example.com", "service_key": "service-key"},
        owner_id=OWNER_ID,
    )


@pytest.fixture
def item_factory() -> Callable[..., WorkItem]:
    """Factory for inbox work items, see make_item."""
    return make_item
