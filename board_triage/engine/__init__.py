"""Triage engine.

Key Components:
    - classify / infer_bucket / needs_clarification: Keyword classifier
    - build_plan: Execution plan for a classified item
    - Roster: Bucket to executor resolution
    - ActivityLogger: Audit trail writer
    - render_triage_comment: Body of the generated triage comment
    - TriageCoordinator: One triage pass over the inbox
"""

from board_triage.engine.activity import ActivityLogger
from board_triage.engine.classifier import Classification, classify, infer_bucket, needs_clarification
from board_triage.engine.coordinator import TriageCoordinator
from board_triage.engine.planner import MAX_PLAN_STEPS, build_plan
from board_triage.engine.roster import Roster
from board_triage.engine.summary import render_triage_comment

__all__ = [
    "MAX_PLAN_STEPS",
    "ActivityLogger",
    "Classification",
    "Roster",
    "TriageCoordinator",
    "build_plan",
    "classify",
    "infer_bucket",
    "needs_clarification",
    "render_triage_comment",
]
