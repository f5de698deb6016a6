"""Unit tests for execution plan building."""

import pytest

from board_triage.engine import planner
from board_triage.engine.planner import BUCKET_STEPS, CLARIFY_STEP, MAX_PLAN_STEPS, VALIDATION_STEP, build_plan
from board_triage.enums import Bucket
from board_triage.models.domain import PlanStep


@pytest.fixture
def item(item_factory):
    return item_factory("task-1", "Fix bug in API")


class TestBuildPlan:
    """Tests for build_plan."""

    @pytest.mark.parametrize("bucket", [b for b in Bucket if b.is_specialized])
    def test_specialized_bucket_gets_three_steps(self, item, bucket):
        steps = build_plan(item, bucket)

        assert len(steps) == 3
        assert steps[0] == CLARIFY_STEP
        assert steps[1] == BUCKET_STEPS[bucket]
        assert steps[1].bucket == bucket
        assert steps[2] == VALIDATION_STEP

    def test_general_bucket_gets_framing_steps_only(self, item):
        steps = build_plan(item, Bucket.GENERAL)

        assert [step.title for step in steps] == [CLARIFY_STEP.title, VALIDATION_STEP.title]

    def test_framing_steps_belong_to_general_bucket(self, item):
        steps = build_plan(item, Bucket.ENGINEERING)

        assert steps[0].bucket == Bucket.GENERAL
        assert steps[-1].bucket == Bucket.GENERAL

    @pytest.mark.parametrize("bucket", list(Bucket))
    def test_every_step_has_definition_of_done(self, item, bucket):
        for step in build_plan(item, bucket):
            assert step.definition_of_done.strip()

    @pytest.mark.parametrize("bucket", list(Bucket))
    def test_length_within_bounds(self, item, bucket):
        assert 2 <= len(build_plan(item, bucket)) <= MAX_PLAN_STEPS

    def test_first_and_last_titles(self, item):
        steps = build_plan(item, Bucket.RESEARCH)

        assert steps[0].title.lower() == "clarify scope and acceptance criteria"
        assert steps[-1].title.lower() == "final validation"

    def test_cap_is_enforced(self, item, monkeypatch):
        """A bucket step list that grows past the cap is truncated."""
        monkeypatch.setattr(planner, "MAX_PLAN_STEPS", 2)

        steps = build_plan(item, Bucket.OPERATIONS)

        assert len(steps) == 2
        assert isinstance(steps[0], PlanStep)
