"""Readiness component models."""

from dataclasses import dataclass
from typing import Literal

Priority = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class ReadinessAssessment:
    """How close a content item is to publication."""

    score: float
    remaining_steps: float
    priority: Priority
