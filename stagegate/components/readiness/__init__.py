"""Readiness component - publication readiness scoring."""

from stagegate.components.readiness.component import (
    SCORED_FIELDS,
    assess_readiness,
    calculate_readiness_score,
    calculate_remaining_steps,
    priority_for,
)
from stagegate.components.readiness.models import Priority, ReadinessAssessment

__all__ = [
    "assess_readiness",
    "calculate_readiness_score",
    "calculate_remaining_steps",
    "priority_for",
    "SCORED_FIELDS",
    "Priority",
    "ReadinessAssessment",
]
