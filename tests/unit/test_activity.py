"""Unit tests for the activity logger."""

import pytest

from board_triage.engine.activity import ActivityLogger
from board_triage.enums import ActivityAction, ActorType, EntityType
from board_triage.exceptions import StoreError


@pytest.fixture
def logger(store) -> ActivityLogger:
    return ActivityLogger(store, owner_id="owner-1", actor_agent_id="agent-dispatcher")


class TestActivityLogger:
    """Tests for ActivityLogger entries."""

    @pytest.mark.asyncio
    async def test_record_builds_agent_entry(self, logger, store):
        await logger.record(ActivityAction.ADD_COMMENT, "task-1", {"kind": "triage_summary"})

        entry = store.activity[0]
        assert entry.owner_id == "owner-1"
        assert entry.actor_type == ActorType.AGENT
        assert entry.actor_agent_id == "agent-dispatcher"
        assert entry.entity_type == EntityType.TASK
        assert entry.entity_id == "task-1"
        assert entry.data == {"kind": "triage_summary"}

    @pytest.mark.asyncio
    async def test_subtasks_created_payload(self, logger, store):
        await logger.subtasks_created("task-1", 3)

        assert store.activity[0].action == ActivityAction.CREATE_SUBTASKS
        assert store.activity[0].data == {"created": 3}

    @pytest.mark.asyncio
    async def test_status_moved_payload(self, logger, store):
        await logger.status_moved("task-1", "inbox", "triage", applied=False)

        assert store.activity[0].action == ActivityAction.MOVE_STATUS
        assert store.activity[0].data == {"from": "inbox", "to": "triage", "applied": False}

    @pytest.mark.asyncio
    async def test_record_without_payload(self, logger, store):
        await logger.record(ActivityAction.ADD_COMMENT, "task-1")

        assert store.activity[0].data == {}

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, logger, store):
        store.fail_on = "append_activity"

        with pytest.raises(StoreError):
            await logger.comment_added("task-1")
