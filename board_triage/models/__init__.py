"""Domain models for the triage job.

Key Models:
    - WorkItem: Backlog item awaiting triage
    - Subtask: Actionable decomposition step of a work item
    - Comment: Append-only note on a work item
    - ActivityLogEntry: Append-only audit record
    - RosterEntry: Executor identity from the roster
    - PlanStep: Step produced by the plan builder before it is stored
    - ItemOutcome / TriageReport: Results of a triage run
"""

from board_triage.models.domain import (
    ActivityLogEntry,
    Comment,
    ItemOutcome,
    PlanStep,
    RosterEntry,
    Subtask,
    TriageReport,
    WorkItem,
)

__all__ = [
    "ActivityLogEntry",
    "Comment",
    "ItemOutcome",
    "PlanStep",
    "RosterEntry",
    "Subtask",
    "TriageReport",
    "WorkItem",
]
