"""
Keyword classification of work items.

Bucket inference walks BUCKET_RULES top to bottom and the first rule with a
matching keyword wins, so rule order decides ties: "fix the community post"
is COMMUNITY, not ENGINEERING. Matching is plain substring search on the
lower-cased title and description.
"""

import re
from dataclasses import dataclass

from board_triage.enums import Bucket

MIN_TITLE_LENGTH = 8

# Titles that say nothing on their own; surrounding punctuation is ignored.
FILLER_TITLE_PATTERN = re.compile(
    r"^\W*(idea|ayuda|help|pendiente|pending|hacer|tbd|todo)\W*$",
    re.IGNORECASE,
)

BUCKET_RULES: tuple[tuple[frozenset[str], Bucket], ...] = (
    (
        frozenset({"skool", "comunidad", "community", "curso", "course", "miembros", "members", "post", "contenido"}),
        Bucket.COMMUNITY,
    ),
    (
        frozenset({"deploy", "infra", "servidor", "gateway", "cron", "ssh", "dns", "docker", "uptime", "monitor"}),
        Bucket.OPERATIONS,
    ),
    (
        frozenset(
            {
                "bug",
                "error",
                "fix",
                "api",
                "next",
                "frontend",
                "backend",
                "supabase",
                "sql",
                "typescript",
                "codigo",
                "código",
            }
        ),
        Bucket.ENGINEERING,
    ),
    (
        frozenset({"investigar", "research", "benchmark", "comparar", "alternativa", "documentación", "docs"}),
        Bucket.RESEARCH,
    ),
)


@dataclass(frozen=True)
class Classification:
    """Classifier verdict for one work item."""

    bucket: Bucket
    vague: bool


def _normalize(text: str | None) -> str:
    return (text or "").strip()


def infer_bucket(title: str | None, description: str | None) -> Bucket:
    """Return the bucket of the first rule with a keyword in the text.

    Falls back to Bucket.GENERAL when no rule matches.
    """
    text = f"{_normalize(title)}\n{_normalize(description)}".lower()
    for keywords, bucket in BUCKET_RULES:
        if any(keyword in text for keyword in keywords):
            return bucket
    return Bucket.GENERAL


def needs_clarification(title: str | None, description: str | None) -> bool:
    """Check whether an item is too vague to plan.

    True iff the trimmed title is shorter than MIN_TITLE_LENGTH or is a
    filler word, and the trimmed description is empty.
    """
    title = _normalize(title)
    too_vague = len(title) < MIN_TITLE_LENGTH or FILLER_TITLE_PATTERN.match(title) is not None
    return too_vague and not _normalize(description)


def classify(title: str | None, description: str | None) -> Classification:
    """Classify an item by bucket and vagueness."""
    return Classification(
        bucket=infer_bucket(title, description),
        vague=needs_clarification(title, description),
    )
