"""Transition component - stage gate validation for pipeline advances."""

from stagegate.components.transition.component import (
    GATE_CHECKS,
    advance_stage,
    run,
    validate_stage_requirements,
)
from stagegate.components.transition.models import (
    AdvanceStageInput,
    AdvanceStageOutput,
    ValidateStageInput,
    ValidationResult,
)

__all__ = [
    # Entry points
    "run",
    "validate_stage_requirements",
    "advance_stage",
    "GATE_CHECKS",
    # Models
    "ValidateStageInput",
    "AdvanceStageInput",
    "AdvanceStageOutput",
    "ValidationResult",
]
