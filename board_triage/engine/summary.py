"""Body of the comment posted on every triaged item."""

from board_triage.models.domain import WorkItem

MISSING_DESCRIPTION_NOTE = "No description (clarification required)."

CLARIFICATION_STEPS = (
    "Missing critical context: describe the objective, the expected deliverable "
    "and any context (links, examples).",
)
PLAN_STEPS = (
    "Review the subtasks and execute them in order.",
    "Record results on each subtask.",
    "Close with the final validation.",
)

CLARIFICATION_RISK = "Blocked until context is provided."
PLAN_RISK = "Estimate may change as dependencies are discovered."


def render_triage_comment(item: WorkItem, vague: bool, summary_max_chars: int = 240) -> str:
    """Render the triage comment for an item.

    Sections: summary (the description truncated to ``summary_max_chars``,
    or a missing-description note), next steps, links and risks.
    """
    description = (item.description or "").strip()
    summary = description[:summary_max_chars] if description else MISSING_DESCRIPTION_NOTE

    steps = CLARIFICATION_STEPS if vague else PLAN_STEPS
    risk = CLARIFICATION_RISK if vague else PLAN_RISK

    lines = [
        f"Summary: {summary}",
        "",
        "Next steps:",
        *(f"- {step}" for step in steps),
        "",
        "Links:",
        "- (none yet)",
        "",
        "Risks:",
        f"- {risk}",
    ]
    return "\n".join(lines)
