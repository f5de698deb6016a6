"""Resolution of plan buckets to executor identities."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from board_triage.enums import Bucket
from board_triage.models.domain import RosterEntry


@dataclass(frozen=True)
class Roster:
    """Active roster loaded once per run.

    Entries are keyed by lower-cased name and lower-cased role. A name takes
    precedence over another entry's role with the same key.
    """

    by_key: dict[str, str] = field(default_factory=dict)
    default_agent_id: str | None = None

    @classmethod
    def from_entries(cls, entries: Iterable[RosterEntry], default_agent: str | None = None) -> "Roster":
        """Build a roster from store entries.

        Args:
            entries: Roster entries; inactive ones are ignored
            default_agent: Name of the fallback agent, matched case-insensitively

        Returns:
            Roster whose default_agent_id is the fallback agent's identity,
            or None when no entry has that name.
        """
        active = [entry for entry in entries if entry.is_active]
        by_key: dict[str, str] = {}
        for entry in active:
            if entry.role:
                by_key.setdefault(entry.role.strip().lower(), entry.id)
        for entry in active:
            if entry.name:
                by_key[entry.name.strip().lower()] = entry.id

        default_agent_id = by_key.get(default_agent.strip().lower()) if default_agent else None
        return cls(by_key=by_key, default_agent_id=default_agent_id)

    def resolve(self, bucket: Bucket | str) -> str | None:
        """Return the executor for a bucket.

        Falls back to the default agent, then to None (unassigned).
        """
        key = str(bucket).strip().lower()
        return self.by_key.get(key) or self.default_agent_id
