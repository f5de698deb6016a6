"""
Triage coordinator - one pass over the owner's inbox.

Items are handled strictly one after another, oldest first. For each one:
check for existing subtasks, classify, decompose when the item is clear and
has never been decomposed, comment, then move it out of the inbox with a
conditional write. Any StoreError propagates and aborts the run; writes
already made for earlier items stay in place.

Known race: two overlapping runs can both see "no subtasks" for the same
item before either inserts, and both will decompose it. Runs are expected
to be serialized by the scheduler.
"""

import structlog

from board_triage.config.settings import TriageSettings
from board_triage.engine.activity import ActivityLogger
from board_triage.engine.classifier import classify
from board_triage.engine.planner import build_plan
from board_triage.engine.roster import Roster
from board_triage.engine.summary import render_triage_comment
from board_triage.enums import ActorType, Bucket, TaskStatus
from board_triage.models.domain import Comment, ItemOutcome, Subtask, TriageReport, WorkItem
from board_triage.store.base import TaskStore

log = structlog.get_logger(__name__)

DEFAULT_BATCH_SIZE = 20


class TriageCoordinator:
    """Drives inbox items through classification, planning and routing."""

    def __init__(
        self,
        store: TaskStore,
        roster: Roster,
        owner_id: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
        summary_max_chars: int = 240,
    ):
        """Initialize coordinator.

        Args:
            store: Record store client
            roster: Roster loaded for this run
            owner_id: Owner whose inbox is triaged
            batch_size: Maximum number of items fetched per run
            summary_max_chars: Description characters quoted in comments
        """
        self.store = store
        self.roster = roster
        self.owner_id = owner_id
        self.batch_size = batch_size
        self.summary_max_chars = summary_max_chars
        self.activity = ActivityLogger(store, owner_id, roster.default_agent_id)

    async def run(self) -> TriageReport:
        """Triage up to ``batch_size`` inbox items.

        Returns:
            TriageReport with one outcome per processed item

        Raises:
            StoreError: On the first failed store call.
        """
        items = await self.store.list_inbox_items(self.owner_id, self.batch_size)
        log.info("triage_run_start", owner_id=self.owner_id, fetched=len(items))

        report = TriageReport()
        for item in items:
            if item.status is not TaskStatus.INBOX:
                log.info("triage_item_skipped", item_id=item.id, status=item.status.value)
                report.skipped_item_ids.append(item.id)
                continue

            with structlog.contextvars.bound_contextvars(item_id=item.id):
                outcome = await self.triage_item(item)
            report.outcomes.append(outcome)

        log.info(
            "triage_run_complete",
            processed=report.processed_count,
            skipped=len(report.skipped_item_ids),
            subtasks_created=report.subtasks_created,
        )
        return report

    async def triage_item(self, item: WorkItem) -> ItemOutcome:
        """Triage a single inbox item.

        Raises:
            StoreError: If any store call for this item fails.
        """
        already_decomposed = await self.store.has_any_subtask(self.owner_id, item.id)
        verdict = classify(item.title, item.description)
        target = TaskStatus.NEEDS_CLARIFICATION if verdict.vague else TaskStatus.TRIAGE
        log.info(
            "triage_item_start",
            bucket=verdict.bucket.value,
            vague=verdict.vague,
            already_decomposed=already_decomposed,
        )

        created = 0
        if not already_decomposed and not verdict.vague:
            created = await self._create_subtasks(item, verdict.bucket)

        await self._post_comment(item, verdict.vague)

        rows = await self.store.conditional_update_status(item.id, self.owner_id, TaskStatus.INBOX, target)
        applied = rows > 0
        if not applied:
            log.info("status_write_noop", target=target.value)
        await self.activity.status_moved(item.id, TaskStatus.INBOX.value, target.value, applied)

        return ItemOutcome(
            item_id=item.id,
            bucket=verdict.bucket,
            status=target,
            subtasks_created=created,
            skipped_existing=already_decomposed,
            status_applied=applied,
        )

    async def _create_subtasks(self, item: WorkItem, bucket: Bucket) -> int:
        steps = build_plan(item, bucket)
        subtasks = [
            Subtask(
                task_id=item.id,
                owner_id=self.owner_id,
                title=step.title,
                definition_of_done=step.definition_of_done,
                sort_order=index,
                status=TaskStatus.IN_PROGRESS,
                assignee_agent_id=self.roster.resolve(step.bucket),
                metadata={"triage_bucket": step.bucket.value},
            )
            for index, step in enumerate(steps)
        ]

        inserted_ids = await self.store.insert_subtasks(subtasks)
        created = len(inserted_ids) or len(subtasks)
        log.info("subtasks_created", count=created)

        await self.activity.subtasks_created(item.id, created)
        return created

    async def _post_comment(self, item: WorkItem, vague: bool) -> None:
        comment = Comment(
            task_id=item.id,
            owner_id=self.owner_id,
            body=render_triage_comment(item, vague, self.summary_max_chars),
            author_type=ActorType.AGENT,
            author_agent_id=self.roster.default_agent_id,
        )
        await self.store.insert_comment(comment)
        await self.activity.comment_added(item.id)


async def run_triage(store: TaskStore, settings: TriageSettings, batch_size: int | None = None) -> TriageReport:
    """Load the roster once and run a triage pass.

    Args:
        store: Connected record store client
        settings: Run settings
        batch_size: Overrides ``settings.triage.batch_size`` when given

    Raises:
        StoreError: On the first failed store call.
    """
    entries = await store.list_active_roster(settings.owner_id)
    roster = Roster.from_entries(entries, settings.triage.default_agent)
    log.info(
        "roster_loaded",
        entries=len(entries),
        default_agent=settings.triage.default_agent,
        default_agent_found=roster.default_agent_id is not None,
    )

    coordinator = TriageCoordinator(
        store=store,
        roster=roster,
        owner_id=settings.owner_id,
        batch_size=batch_size or settings.triage.batch_size,
        summary_max_chars=settings.triage.summary_max_chars,
    )
    return await coordinator.run()
