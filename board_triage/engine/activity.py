"""Audit trail for triage actions."""

from typing import Any

import structlog

from board_triage.enums import ActivityAction, ActorType, EntityType
from board_triage.models.domain import ActivityLogEntry
from board_triage.store.base import TaskStore

log = structlog.get_logger(__name__)


class ActivityLogger:
    """Appends one activity entry per state-changing action.

    Every entry is authored by the default agent on behalf of the owner
    and targets a work item.
    """

    def __init__(self, store: TaskStore, owner_id: str, actor_agent_id: str | None):
        self.store = store
        self.owner_id = owner_id
        self.actor_agent_id = actor_agent_id

    async def record(self, action: ActivityAction, item_id: str, data: dict[str, Any] | None = None) -> None:
        """Append an entry for ``action`` on work item ``item_id``.

        Raises:
            StoreError: If the append fails.
        """
        entry = ActivityLogEntry(
            owner_id=self.owner_id,
            actor_type=ActorType.AGENT,
            actor_agent_id=self.actor_agent_id,
            action=action,
            entity_type=EntityType.TASK,
            entity_id=item_id,
            data=data or {},
        )
        await self.store.append_activity(entry)
        log.debug("activity_recorded", action=action.value, item_id=item_id)

    async def subtasks_created(self, item_id: str, count: int) -> None:
        await self.record(ActivityAction.CREATE_SUBTASKS, item_id, {"created": count})

    async def comment_added(self, item_id: str) -> None:
        await self.record(ActivityAction.ADD_COMMENT, item_id, {"kind": "triage_summary"})

    async def status_moved(self, item_id: str, from_status: str, to_status: str, applied: bool) -> None:
        await self.record(
            ActivityAction.MOVE_STATUS,
            item_id,
            {"from": from_status, "to": to_status, "applied": applied},
        )
