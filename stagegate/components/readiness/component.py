"""
Readiness component - publication readiness scoring.

Score (higher = closer to publishable):
- base: current_stage / terminal_stage * stage_weight
- bonus for each of title/script/link present
- bonus proportional to the fraction of final checks completed
- penalty for each field the item's *current* stage already requires but
  which is missing, so items failing their own gate rank below compliant
  ones at the same stage
- clamped to [min_score, max_score]

Remaining steps: stages left, plus a fractional step for each gated field
still outstanding ahead of its threshold, plus a smaller step per incomplete
final check; rounded to one decimal place.

All functions are pure over the Content snapshot.
"""

from __future__ import annotations

from stagegate.domain.entities import Content
from stagegate.domain.stages import (
    TERMINAL_STAGE,
    GatedField,
    required_fields_for,
    threshold_for,
)
from stagegate.domain.validation import is_field_present
from stagegate.rules.models import PipelineRules

from .models import Priority, ReadinessAssessment

# Optional text fields that take part in scoring
SCORED_FIELDS: tuple[GatedField, ...] = ("title", "script", "link")


def calculate_readiness_score(content: Content, rules: PipelineRules | None = None) -> float:
    scoring = (rules or PipelineRules()).scoring
    score = content.current_stage / TERMINAL_STAGE * scoring.stage_weight

    for field_name in SCORED_FIELDS:
        if is_field_present(content, field_name):
            score += scoring.field_bonus.get(field_name, 0)

    total_checks = len(content.final_checks)
    if total_checks > 0:
        completed = sum(1 for check in content.final_checks if check.completed)
        score += completed / total_checks * scoring.final_checks_bonus

    required_now = required_fields_for(content.current_stage)
    for field_name in SCORED_FIELDS:
        if field_name in required_now and not is_field_present(content, field_name):
            score -= scoring.missing_field_penalty.get(field_name, 0)

    return max(scoring.min_score, min(scoring.max_score, score))


def calculate_remaining_steps(content: Content, rules: PipelineRules | None = None) -> float:
    scoring = (rules or PipelineRules()).scoring
    remaining = float(TERMINAL_STAGE - content.current_stage)

    for field_name in SCORED_FIELDS:
        outstanding = content.current_stage < threshold_for(field_name)
        if outstanding and not is_field_present(content, field_name):
            remaining += scoring.missing_field_step

    incomplete = sum(1 for check in content.final_checks if not check.completed)
    remaining += incomplete * scoring.incomplete_check_step

    return round(remaining, 1)


def priority_for(score: float, rules: PipelineRules | None = None) -> Priority:
    suggestions = (rules or PipelineRules()).suggestions
    if score > suggestions.high_priority_above:
        return "high"
    if score > suggestions.medium_priority_above:
        return "medium"
    return "low"


def assess_readiness(content: Content, rules: PipelineRules | None = None) -> ReadinessAssessment:
    score = calculate_readiness_score(content, rules)
    return ReadinessAssessment(
        score=score,
        remaining_steps=calculate_remaining_steps(content, rules),
        priority=priority_for(score, rules),
    )
