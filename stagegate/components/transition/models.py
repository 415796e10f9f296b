"""Transition component models - frozen dataclass inputs and outputs."""

from dataclasses import dataclass
from datetime import datetime

from stagegate.domain.entities import Content
from stagegate.domain.validation import ValidationResult


@dataclass(frozen=True)
class ValidateStageInput:
    """Input for checking a proposed stage change."""

    content: Content
    target_stage: int


@dataclass(frozen=True)
class AdvanceStageInput:
    """Input for producing the advanced snapshot of a content item."""

    content: Content
    target_stage: int
    now: datetime


@dataclass(frozen=True)
class AdvanceStageOutput:
    """Output of an advance attempt; ``content`` is None when rejected."""

    result: ValidationResult
    content: Content | None = None


__all__ = [
    "AdvanceStageInput",
    "AdvanceStageOutput",
    "ValidateStageInput",
    "ValidationResult",
]
