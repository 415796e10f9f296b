"""Suggestions component models - frozen dataclass inputs and outputs."""

from dataclasses import dataclass, field
from typing import Literal

from stagegate.components.readiness.models import Priority
from stagegate.domain.entities import Content

SuggestionType = Literal["stage", "dependency", "moral"]


@dataclass(frozen=True)
class ContentSuggestion:
    """A content item worth working on next, with its readiness figures."""

    id: str
    type: SuggestionType
    title: str
    description: str
    priority: Priority
    content: Content
    score: float
    remaining_steps: float
    blocked_by: list[str] = field(default_factory=list)

    @property
    def content_id(self) -> str:
        return str(self.content.id)


@dataclass(frozen=True)
class SuggestionStatistics:
    """Summary of the non-published content set."""

    total_eligible: int = 0
    ready_to_advance: int = 0
    blocked_by_dependencies: int = 0
    average_readiness_score: float = 0.0
    top_suggestions: int = 0


@dataclass(frozen=True)
class GetSuggestionsInput:
    """Input for the bounded suggestion list; None means the configured maximum."""

    max_suggestions: int | None = None


@dataclass(frozen=True)
class GetStatisticsInput:
    """Input for suggestion statistics - empty input."""

    pass


@dataclass(frozen=True)
class GetContentSuggestionInput:
    """Input for the suggestion of a single topic."""

    topic: str
