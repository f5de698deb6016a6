"""
Execution plans for triaged work items.

A plan is always: clarify scope, at most one bucket-specific step, final
validation. The framing steps belong to the GENERAL bucket so they land on
the default agent.
"""

from board_triage.enums import Bucket
from board_triage.models.domain import PlanStep, WorkItem

MAX_PLAN_STEPS = 7

CLARIFY_STEP = PlanStep(
    title="Clarify scope and acceptance criteria",
    definition_of_done=(
        "The item states in writing: the objective, the required inputs, the constraints, "
        "and a verifiable success criterion (what counts as done)."
    ),
    bucket=Bucket.GENERAL,
)

VALIDATION_STEP = PlanStep(
    title="Final validation",
    definition_of_done=(
        "Verification checklist completed and a closing note on the item confirms the objective was met."
    ),
    bucket=Bucket.GENERAL,
)

BUCKET_STEPS: dict[Bucket, PlanStep] = {
    Bucket.RESEARCH: PlanStep(
        title="Quick research (3 sources)",
        definition_of_done=(
            "A 10-15 line summary, 3 relevant links and a clear recommendation "
            "(what to do and what not to do) with pros and cons."
        ),
        bucket=Bucket.RESEARCH,
    ),
    Bucket.COMMUNITY: PlanStep(
        title="Draft community piece or action",
        definition_of_done=(
            "A publish-ready draft (final text) plus a publishing checklist: where, when and call to action."
        ),
        bucket=Bucket.COMMUNITY,
    ),
    Bucket.ENGINEERING: PlanStep(
        title="Technical implementation",
        definition_of_done=(
            "Change merged or applied, stating what changed, how to test it, "
            "and evidence (screenshot or log) that it passes."
        ),
        bucket=Bucket.ENGINEERING,
    ),
    Bucket.OPERATIONS: PlanStep(
        title="Operational execution",
        definition_of_done=(
            "Change applied in the target environment, verified (command, screenshot or log), "
            "with a documented rollback plan."
        ),
        bucket=Bucket.OPERATIONS,
    ),
}


def build_plan(item: WorkItem, bucket: Bucket) -> list[PlanStep]:
    """Build the ordered plan for an item already classified into ``bucket``.

    Args:
        item: Work item being decomposed
        bucket: Bucket returned by the classifier for the item

    Returns:
        Between 2 and MAX_PLAN_STEPS steps; first is scope clarification,
        last is final validation.
    """
    steps = [CLARIFY_STEP]

    specialized = BUCKET_STEPS.get(bucket)
    if specialized is not None:
        steps.append(specialized)

    steps.append(VALIDATION_STEP)
    return steps[:MAX_PLAN_STEPS]
