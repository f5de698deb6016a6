"""Record store client using the hosted store's PostgREST interface."""

from datetime import datetime
from typing import Any

import httpx
import structlog

from board_triage.enums import TaskStatus
from board_triage.exceptions import StoreError
from board_triage.models.domain import ActivityLogEntry, Comment, RosterEntry, Subtask, WorkItem
from board_triage.store.base import TaskStore

log = structlog.get_logger(__name__)

TASK_COLUMNS = "id,title,description,status,priority,owner_id,created_at,updated_at"
ROSTER_COLUMNS = "id,name,role,is_active"


def _eq(value: Any) -> str:
    """Format a PostgREST equality filter."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"eq.{value}"


class PostgrestStore(TaskStore):
    """TaskStore implementation over ``<url>/rest/v1``.

    Relations: ``tasks``, ``subtasks``, ``comments``, ``activity_log`` and
    ``agents``. Writes ask for ``return=representation`` so the response
    body tells us which rows were inserted or changed.
    """

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize store client.

        Args:
            base_url: Store base URL (e.g., https://abc.supabase.co)
            service_key: Service credential, sent as apikey and bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_base = f"{self.base_url}/rest/v1"
        self.service_key = service_key.strip() if service_key else service_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Open the HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self.api_base,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "apikey": self.service_key,
                "Authorization": f"Bearer {self.service_key}",
                "Content-Type": "application/json",
            },
        )
        log.info("store_connected", base_url=self.base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("store_disconnected", base_url=self.base_url)

    async def __aenter__(self) -> "PostgrestStore":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.disconnect()

    async def list_inbox_items(self, owner_id: str, limit: int) -> list[WorkItem]:
        """List inbox items, oldest first."""
        rows = await self._request(
            "list_inbox_items",
            "GET",
            "/tasks",
            params={
                "select": TASK_COLUMNS,
                "owner_id": _eq(owner_id),
                "status": _eq(TaskStatus.INBOX.value),
                "order": "created_at.asc",
                "limit": str(limit),
            },
        )
        return [self._parse_work_item(row) for row in rows]

    async def has_any_subtask(self, owner_id: str, item_id: str) -> bool:
        """Check for at least one subtask of the item."""
        rows = await self._request(
            "has_any_subtask",
            "GET",
            "/subtasks",
            params={
                "select": "id",
                "owner_id": _eq(owner_id),
                "task_id": _eq(item_id),
                "limit": "1",
            },
        )
        return len(rows) > 0

    async def insert_subtasks(self, subtasks: list[Subtask]) -> list[str]:
        """Insert all subtasks in one request."""
        if not subtasks:
            return []
        rows = await self._request(
            "insert_subtasks",
            "POST",
            "/subtasks",
            params={"select": "id"},
            json=[self._subtask_row(subtask) for subtask in subtasks],
            prefer="return=representation",
        )
        return [str(row["id"]) for row in rows]

    async def insert_comment(self, comment: Comment) -> None:
        """Insert one comment."""
        await self._request(
            "insert_comment",
            "POST",
            "/comments",
            json={
                "owner_id": comment.owner_id,
                "task_id": comment.task_id,
                "author_type": comment.author_type.value,
                "author_agent_id": comment.author_agent_id,
                "body": comment.body,
            },
            prefer="return=minimal",
        )

    async def conditional_update_status(
        self,
        item_id: str,
        owner_id: str,
        expected_status: TaskStatus,
        new_status: TaskStatus,
    ) -> int:
        """PATCH the status filtered on id, owner and the expected status."""
        rows = await self._request(
            "conditional_update_status",
            "PATCH",
            "/tasks",
            params={
                "select": "id",
                "id": _eq(item_id),
                "owner_id": _eq(owner_id),
                "status": _eq(expected_status.value),
            },
            json={"status": new_status.value},
            prefer="return=representation",
        )
        return len(rows)

    async def append_activity(self, entry: ActivityLogEntry) -> None:
        """Insert one activity log row."""
        await self._request(
            "append_activity",
            "POST",
            "/activity_log",
            json={
                "owner_id": entry.owner_id,
                "actor_type": entry.actor_type.value,
                "actor_agent_id": entry.actor_agent_id,
                "action": entry.action.value,
                "entity_type": entry.entity_type.value,
                "entity_id": entry.entity_id,
                "data": entry.data,
            },
            prefer="return=minimal",
        )

    async def list_active_roster(self, owner_id: str) -> list[RosterEntry]:
        """List active agents for the owner."""
        rows = await self._request(
            "list_active_roster",
            "GET",
            "/agents",
            params={
                "select": ROSTER_COLUMNS,
                "owner_id": _eq(owner_id),
                "is_active": _eq(True),
            },
        )
        return [self._parse_roster_entry(row) for row in rows]

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> list[dict[str, Any]]:
        """Perform one round-trip and return the decoded row list.

        Raises:
            StoreError: On transport failure, non-2xx status or a body that
                is not a JSON row list. ``return=minimal`` writes yield [].
        """
        if self._client is None:
            await self.connect()
        assert self._client is not None

        headers = {"Prefer": prefer} if prefer else None
        log.debug("store_request", operation=operation, method=method, path=path)

        try:
            response = await self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            raise StoreError(f"Request failed: {e}", operation=operation) from e

        if response.is_error:
            raise StoreError(
                self._error_message(response),
                operation=operation,
                status_code=response.status_code,
                response_text=response.text,
            )

        if not response.content:
            return []

        try:
            data = response.json()
        except ValueError as e:
            raise StoreError("Response body is not valid JSON", operation=operation) from e

        if not isinstance(data, list):
            raise StoreError(f"Expected a row list, got {type(data).__name__}", operation=operation)
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Pull the message out of a PostgREST error body when there is one."""
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase or "Store request failed"
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.reason_phrase or "Store request failed"

    @staticmethod
    def _subtask_row(subtask: Subtask) -> dict[str, Any]:
        return {
            "owner_id": subtask.owner_id,
            "task_id": subtask.task_id,
            "title": subtask.title,
            "status": subtask.status.value,
            "assignee_agent_id": subtask.assignee_agent_id,
            "definition_of_done": subtask.definition_of_done,
            "sort_order": subtask.sort_order,
            "metadata": subtask.metadata,
        }

    def _parse_work_item(self, data: dict[str, Any]) -> WorkItem:
        """Parse a ``tasks`` row into a WorkItem.

        Note:
            Timestamps come back as ISO 8601 strings; a trailing 'Z' is
            replaced with '+00:00' for fromisoformat().
        """
        try:
            status = TaskStatus(data["status"])
        except ValueError as e:
            raise StoreError(f"Unknown task status: {data['status']!r}", operation="list_inbox_items") from e

        return WorkItem(
            id=str(data["id"]),
            title=data.get("title") or "",
            description=data.get("description"),
            status=status,
            owner_id=str(data["owner_id"]),
            priority=data.get("priority"),
            created_at=self._parse_timestamp(data.get("created_at")),
            updated_at=self._parse_timestamp(data.get("updated_at")),
        )

    @staticmethod
    def _parse_roster_entry(data: dict[str, Any]) -> RosterEntry:
        return RosterEntry(
            id=str(data["id"]),
            name=data.get("name") or "",
            role=data.get("role"),
            is_active=bool(data.get("is_active", True)),
        )

    @staticmethod
    def _parse_timestamp(value: str | None) -> datetime | None:
        if not value:
            return None
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
