"""
Abstract base class for the record store.

The triage engine talks to the store only through this contract, so it can
be driven by the REST client in production and by an in-memory double in
tests.
"""

from abc import ABC, abstractmethod

from board_triage.enums import TaskStatus
from board_triage.models.domain import ActivityLogEntry, Comment, RosterEntry, Subtask, WorkItem


class TaskStore(ABC):
    """Abstract base class for record store implementations.

    Every operation is one round-trip. Implementations raise StoreError on
    any failure and never retry; the caller decides what a failure means.
    All methods are async to support non-blocking I/O with HTTP clients.
    """

    @abstractmethod
    async def list_inbox_items(self, owner_id: str, limit: int) -> list[WorkItem]:
        """List the owner's work items whose status is exactly INBOX.

        Args:
            owner_id: Owner scoping the query
            limit: Maximum number of items to return

        Returns:
            Work items ordered by creation time, oldest first.

        Raises:
            StoreError: If the query fails.
        """
        pass

    @abstractmethod
    async def has_any_subtask(self, owner_id: str, item_id: str) -> bool:
        """Check whether any subtask references the work item.

        Raises:
            StoreError: If the query fails.
        """
        pass

    @abstractmethod
    async def insert_subtasks(self, subtasks: list[Subtask]) -> list[str]:
        """Insert subtasks as a single batch.

        Args:
            subtasks: Rows to insert, all for the same parent item

        Returns:
            Identities of the inserted rows, in insertion order.

        Raises:
            StoreError: If the insert fails. No row is inserted in that case.
        """
        pass

    @abstractmethod
    async def insert_comment(self, comment: Comment) -> None:
        """Append a comment to a work item.

        Raises:
            StoreError: If the insert fails.
        """
        pass

    @abstractmethod
    async def conditional_update_status(
        self,
        item_id: str,
        owner_id: str,
        expected_status: TaskStatus,
        new_status: TaskStatus,
    ) -> int:
        """Set a work item's status only if it still has the expected status.

        Args:
            item_id: Work item identity
            owner_id: Owner scoping the update
            expected_status: Status the item must currently have
            new_status: Status to write

        Returns:
            Number of rows changed: 1 on success, 0 when the item's status was
            no longer ``expected_status`` (or the item does not exist).

        Raises:
            StoreError: If the update fails. Zero rows affected is not a failure.
        """
        pass

    @abstractmethod
    async def append_activity(self, entry: ActivityLogEntry) -> None:
        """Append an audit record to the activity log.

        Raises:
            StoreError: If the insert fails.
        """
        pass

    @abstractmethod
    async def list_active_roster(self, owner_id: str) -> list[RosterEntry]:
        """List the owner's active roster entries.

        Raises:
            StoreError: If the query fails.
        """
        pass
