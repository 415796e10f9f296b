"""
Transition component unit tests.

Tests for one-stage-at-a-time progression and the cumulative field gates.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from stagegate.components.transition import (
    AdvanceStageInput,
    AdvanceStageOutput,
    ValidateStageInput,
    advance_stage,
    run,
    validate_stage_requirements,
)
from stagegate.domain.entities import Content, FinalCheck
from stagegate.domain.errors import StageTransitionError
from stagegate.rules.models import PipelineRules, ValidationRules

LONG_SCRIPT = "A script that is comfortably longer than fifty characters in total."
NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


def make_content(**overrides: Any) -> Content:
    data: dict[str, Any] = {"topic": "test-topic", "category": "Demanding"}
    data.update(overrides)
    return Content(**data)


def publishable(**overrides: Any) -> Content:
    data: dict[str, Any] = {
        "current_stage": 10,
        "title": "A Title",
        "script": LONG_SCRIPT,
        "link": "https://example.com/video",
        "final_checks": [FinalCheck(text="Reviewed", completed=True)],
    }
    data.update(overrides)
    return make_content(**data)


# --- Ordering ---


class TestStageOrdering:
    def test_next_stage_without_gate_passes(self) -> None:
        content = make_content(current_stage=1, title="A Title")
        result = validate_stage_requirements(content, 2)
        assert result.is_valid
        assert result.errors == []

    def test_previous_stage_rejected(self) -> None:
        content = make_content(current_stage=3, title="A Title")
        result = validate_stage_requirements(content, 2)
        assert not result.is_valid
        assert "Cannot move to a previous stage" in result.errors

    def test_skipping_rejected(self) -> None:
        content = make_content(current_stage=1, title="A Title")
        result = validate_stage_requirements(content, 3)
        assert not result.is_valid
        assert "Cannot skip stages - must progress one stage at a time" in result.errors

    def test_same_stage_rejected(self) -> None:
        content = make_content(current_stage=2, title="A Title")
        result = validate_stage_requirements(content, 2)
        assert not result.is_valid

    @pytest.mark.parametrize("target", [-1, 12, 40])
    def test_nonexistent_stage_rejected(self, target: int) -> None:
        content = make_content(current_stage=0)
        result = validate_stage_requirements(content, target)
        assert not result.is_valid
        assert f"Stage {target} does not exist" in result.errors


# --- Gates ---


class TestTitleGate:
    def test_missing_title_blocks_stage_one(self) -> None:
        result = validate_stage_requirements(make_content(), 1)
        assert result.errors == ["Title is required to advance to this stage"]

    def test_blank_title_blocks_stage_one(self) -> None:
        result = validate_stage_requirements(make_content(title="   "), 1)
        assert not result.is_valid

    def test_title_present_passes(self) -> None:
        assert validate_stage_requirements(make_content(title="X"), 1).is_valid


class TestScriptGate:
    def test_short_script_blocks_stage_five(self) -> None:
        content = make_content(current_stage=4, title="A Title", script="x" * 10)
        result = validate_stage_requirements(content, 5)
        assert not result.is_valid
        assert result.errors[0].startswith("Script is required")

    def test_fifty_characters_pass(self) -> None:
        content = make_content(current_stage=4, title="A Title", script="x" * 50)
        assert validate_stage_requirements(content, 5).is_valid

    def test_minimum_comes_from_rules(self) -> None:
        rules = PipelineRules(validation=ValidationRules(min_script_length=5))
        content = make_content(current_stage=4, title="A Title", script="short")
        assert validate_stage_requirements(content, 5, rules).is_valid

    def test_title_still_required_after_stage_one(self) -> None:
        content = make_content(current_stage=4, script=LONG_SCRIPT)
        result = validate_stage_requirements(content, 5)
        assert result.errors == ["Title is required to advance to this stage"]


class TestPublishGate:
    def test_complete_item_passes(self) -> None:
        assert validate_stage_requirements(publishable(), 11).is_valid

    def test_missing_link_blocks(self) -> None:
        result = validate_stage_requirements(publishable(link=None), 11)
        assert result.errors == ["Link is required to advance to Published stage"]

    def test_incomplete_final_check_blocks(self) -> None:
        checks = [FinalCheck(text="a", completed=True), FinalCheck(text="b", completed=False)]
        result = validate_stage_requirements(publishable(final_checks=checks), 11)
        assert result.errors == ["All final checks must be completed before publishing"]

    def test_no_final_checks_is_complete(self) -> None:
        assert validate_stage_requirements(publishable(final_checks=[]), 11).is_valid

    def test_all_violations_reported(self) -> None:
        content = make_content(
            current_stage=8,
            final_checks=[FinalCheck(text="a", completed=False)],
        )
        result = validate_stage_requirements(content, 11)
        assert not result.is_valid
        assert result.errors == [
            "Cannot skip stages - must progress one stage at a time",
            "Title is required to advance to this stage",
            "Script is required and must be at least 50 characters to advance to this stage",
            "Link is required to advance to Published stage",
            "All final checks must be completed before publishing",
        ]


# --- advance_stage / run ---


class TestAdvanceStage:
    def test_returns_new_snapshot(self) -> None:
        content = make_content(title="A Title")
        advanced = advance_stage(content, 1, NOW)

        assert advanced.current_stage == 1
        assert advanced.updated_at == NOW
        assert advanced.id == content.id
        # Input untouched
        assert content.current_stage == 0

    def test_rejection_raises_with_errors(self) -> None:
        with pytest.raises(StageTransitionError) as exc_info:
            advance_stage(make_content(), 1, NOW)
        assert exc_info.value.errors == ["Title is required to advance to this stage"]


class TestRun:
    def test_dispatches_validation(self) -> None:
        result = run(ValidateStageInput(content=make_content(title="T"), target_stage=1))
        assert result.is_valid  # type: ignore[union-attr]

    def test_dispatches_advance_failure(self) -> None:
        output = run(AdvanceStageInput(content=make_content(), target_stage=1, now=NOW))
        assert isinstance(output, AdvanceStageOutput)
        assert output.content is None
        assert not output.result.is_valid

    def test_dispatches_advance_success(self) -> None:
        output = run(AdvanceStageInput(content=make_content(title="T"), target_stage=1, now=NOW))
        assert isinstance(output, AdvanceStageOutput)
        assert output.result.is_valid
        assert output.content is not None and output.content.current_stage == 1

    def test_unknown_input(self) -> None:
        with pytest.raises(TypeError):
            run("not an input")  # type: ignore[arg-type]
