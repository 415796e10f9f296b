"""
Transition component - stage gate checks for the content pipeline.

A content item moves forward exactly one stage at a time, and only once the
fields gated by the target stage (and every stage before it) are satisfied.

Gates (cumulative, see stagegate.domain.stages.STAGES):
- stage 1 (Title): title present and not blank
- stage 5 (Scripted): script of at least ``min_script_length`` characters
- stage 11 (Published): link present, every final check completed

Every violated rule is reported; nothing here raises for a rule failure
except ``advance_stage``, which is the raising form used by mutating callers.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from stagegate.domain.entities import Content
from stagegate.domain.errors import StageTransitionError
from stagegate.domain.stages import GatedField, is_valid_stage, required_fields_for
from stagegate.domain.validation import ValidationResult, is_blank
from stagegate.rules.models import PipelineRules

from .models import AdvanceStageInput, AdvanceStageOutput, ValidateStageInput

MSG_PREVIOUS_STAGE = "Cannot move to a previous stage"
MSG_SKIP_STAGES = "Cannot skip stages - must progress one stage at a time"
MSG_TITLE_REQUIRED = "Title is required to advance to this stage"
MSG_LINK_REQUIRED = "Link is required to advance to Published stage"
MSG_FINAL_CHECKS = "All final checks must be completed before publishing"


def _script_message(rules: PipelineRules) -> str:
    min_length = rules.validation.min_script_length
    return (
        f"Script is required and must be at least {min_length} characters "
        "to advance to this stage"
    )


# --- Gate checks ---

GateCheck = Callable[[Content, PipelineRules], str | None]


def _check_title(content: Content, rules: PipelineRules) -> str | None:
    if is_blank(content.title):
        return MSG_TITLE_REQUIRED
    return None


def _check_script(content: Content, rules: PipelineRules) -> str | None:
    script = (content.script or "").strip()
    if len(script) < max(rules.validation.min_script_length, 1):
        return _script_message(rules)
    return None


def _check_link(content: Content, rules: PipelineRules) -> str | None:
    if is_blank(content.link):
        return MSG_LINK_REQUIRED
    return None


def _check_final_checks(content: Content, rules: PipelineRules) -> str | None:
    if any(not check.completed for check in content.final_checks):
        return MSG_FINAL_CHECKS
    return None


GATE_CHECKS: dict[GatedField, GateCheck] = {
    "title": _check_title,
    "script": _check_script,
    "link": _check_link,
    "final_checks": _check_final_checks,
}


# --- Entry points ---


def validate_stage_requirements(
    content: Content,
    target_stage: int,
    rules: PipelineRules | None = None,
) -> ValidationResult:
    """Check whether ``content`` may move to ``target_stage``."""
    rules = rules or PipelineRules()
    errors: list[str] = []

    if not is_valid_stage(target_stage):
        errors.append(f"Stage {target_stage} does not exist")

    if target_stage < content.current_stage:
        errors.append(MSG_PREVIOUS_STAGE)

    if target_stage > content.current_stage + 1:
        errors.append(MSG_SKIP_STAGES)

    # Staying put is not a transition
    if target_stage == content.current_stage and is_valid_stage(target_stage):
        errors.append(f"Content is already at stage {target_stage}")

    for gated_field in required_fields_for(max(target_stage, 0)):
        message = GATE_CHECKS[gated_field](content, rules)
        if message:
            errors.append(message)

    return ValidationResult.from_errors(errors)


def advance_stage(
    content: Content,
    target_stage: int,
    now: datetime,
    rules: PipelineRules | None = None,
) -> Content:
    """
    Return a NEW Content at ``target_stage`` with ``updated_at`` set to ``now``.
    Raises StageTransitionError if the stage gate rejects the move.
    """
    result = validate_stage_requirements(content, target_stage, rules)
    if not result.is_valid:
        raise StageTransitionError("Stage validation failed", result.errors)

    return content.model_copy(update={"current_stage": target_stage, "updated_at": now})


def run(
    input_data: ValidateStageInput | AdvanceStageInput,
    rules: PipelineRules | None = None,
) -> ValidationResult | AdvanceStageOutput:
    """Main dispatcher - routes to appropriate handler based on input type."""
    if isinstance(input_data, ValidateStageInput):
        return validate_stage_requirements(input_data.content, input_data.target_stage, rules)
    elif isinstance(input_data, AdvanceStageInput):
        try:
            advanced = advance_stage(
                input_data.content, input_data.target_stage, input_data.now, rules
            )
        except StageTransitionError as e:
            return AdvanceStageOutput(result=ValidationResult.from_errors(e.errors))
        return AdvanceStageOutput(result=ValidationResult.from_errors([]), content=advanced)
    else:
        raise TypeError(f"Unknown input type: {type(input_data)}")
