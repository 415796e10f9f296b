"""
Suggestions component - what to work on next.

Pulls every content item from the store, drops published ones, drops items
whose ``publish_after`` dependency is not published (or cannot be found),
scores the rest and returns the best few.

Failure policy: these are read-only, UI-facing queries. A store failure
anywhere in a batch, including a single dependency lookup, yields an empty
list (or zeroed statistics) and is logged; it is never raised.
"""

from __future__ import annotations

import asyncio
import logging

from stagegate.components.dependencies.component import DependencyValidator
from stagegate.components.readiness.component import assess_readiness
from stagegate.components.transition.component import validate_stage_requirements
from stagegate.domain.entities import Content
from stagegate.domain.stages import is_terminal, stage_name
from stagegate.rules.models import PipelineRules

from .models import (
    ContentSuggestion,
    GetContentSuggestionInput,
    GetStatisticsInput,
    GetSuggestionsInput,
    SuggestionStatistics,
)
from .ports import ContentSourcePort

logger = logging.getLogger(__name__)


def _sort_key(suggestion: ContentSuggestion) -> tuple[float, float, float]:
    # Score descending, then fewest remaining steps, then oldest first
    return (
        -suggestion.score,
        suggestion.remaining_steps,
        suggestion.content.created_at.timestamp(),
    )


class SuggestionAggregator:
    """Ranks unpublished content by closeness to publication."""

    def __init__(self, store: ContentSourcePort, rules: PipelineRules | None = None) -> None:
        self._store = store
        self._rules = rules or PipelineRules()
        self._dependencies = DependencyValidator(store)

    async def run(
        self,
        input_data: GetSuggestionsInput | GetStatisticsInput | GetContentSuggestionInput,
    ) -> list[ContentSuggestion] | SuggestionStatistics | ContentSuggestion | None:
        """Main dispatcher - routes to appropriate handler based on input type."""
        if isinstance(input_data, GetSuggestionsInput):
            return await self.get_publication_suggestions(input_data.max_suggestions)
        elif isinstance(input_data, GetStatisticsInput):
            return await self.get_suggestion_statistics()
        elif isinstance(input_data, GetContentSuggestionInput):
            return await self.get_content_suggestion(input_data.topic)
        else:
            raise TypeError(f"Unknown input type: {type(input_data)}")

    # --- Building blocks ---

    def build_suggestion(self, content: Content, blocked_by: list[str]) -> ContentSuggestion:
        assessment = assess_readiness(content, self._rules)
        stage = content.current_stage
        return ContentSuggestion(
            id=f"suggestion_{content.id}",
            type="stage",
            title=f"Continue with {content.topic}",
            description=(
                f"Content is at stage {stage} ({stage_name(stage)}) "
                f"with {assessment.remaining_steps} steps remaining"
            ),
            priority=assessment.priority,
            content=content,
            score=assessment.score,
            remaining_steps=assessment.remaining_steps,
            blocked_by=list(blocked_by),
        )

    async def _assess_unpublished(self) -> list[ContentSuggestion]:
        """
        Suggestion for every non-terminal item, blocked or not.
        A failing get_all propagates as is; failing lookups arrive wrapped
        in an ExceptionGroup, which callers catch as any other Exception.
        """
        contents = await self._store.get_all()
        unpublished = [c for c in contents if not is_terminal(c.current_stage)]

        # Each item's decision depends only on its own chain; fan out.
        # A failing lookup cancels its siblings before the group re-raises.
        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(self._dependencies.check_dependency_blocks(c))
                for c in unpublished
            ]
        return [
            self.build_suggestion(content, task.result())
            for content, task in zip(unpublished, tasks, strict=True)
        ]

    # --- Entry points ---

    async def get_publication_suggestions(
        self, max_suggestions: int | None = None
    ) -> list[ContentSuggestion]:
        """Top unblocked, unpublished items, best first."""
        limit = max_suggestions
        if limit is None:
            limit = self._rules.suggestions.max_suggestions
        try:
            assessed = await self._assess_unpublished()
        except Exception:
            logger.exception("Error getting publication suggestions")
            return []

        eligible = sorted((s for s in assessed if not s.blocked_by), key=_sort_key)
        return eligible[: max(limit, 0)]

    async def refresh_suggestions(self) -> list[ContentSuggestion]:
        # Stateless: recomputing is the refresh
        return await self.get_publication_suggestions()

    async def get_suggestion_statistics(self) -> SuggestionStatistics:
        try:
            assessed = await self._assess_unpublished()
        except Exception:
            logger.exception("Error getting suggestion statistics")
            return SuggestionStatistics()

        total = len(assessed)
        ready = sum(1 for s in assessed if not s.blocked_by)
        average = round(sum(s.score for s in assessed) / total, 1) if total else 0.0

        return SuggestionStatistics(
            total_eligible=total,
            ready_to_advance=ready,
            blocked_by_dependencies=total - ready,
            average_readiness_score=average,
            top_suggestions=min(ready, max(self._rules.suggestions.max_suggestions, 0)),
        )

    async def get_content_suggestion(self, topic: str) -> ContentSuggestion | None:
        try:
            content = await self._store.get_by_topic(topic)
            if content is None:
                return None
            blocked_by = await self._dependencies.check_dependency_blocks(content)
        except Exception:
            logger.exception("Error getting suggestion for content %s", topic)
            return None

        return self.build_suggestion(content, blocked_by)

    async def is_content_ready_for_next_stage(self, content: Content) -> bool:
        """Whether the item's next stage change would be accepted right now."""
        if is_terminal(content.current_stage):
            return False

        next_stage = content.current_stage + 1
        if not validate_stage_requirements(content, next_stage, self._rules).is_valid:
            return False

        if is_terminal(next_stage):
            result = await self._dependencies.validate_publish_dependencies(content)
            return result.is_valid

        return True

    async def get_all_ready_contents(self) -> list[ContentSuggestion]:
        """Every unpublished item that could advance now, best first."""
        try:
            contents = await self._store.get_all()
            ready: list[ContentSuggestion] = []
            for content in contents:
                if is_terminal(content.current_stage):
                    continue
                if await self.is_content_ready_for_next_stage(content):
                    ready.append(self.build_suggestion(content, []))
        except Exception:
            logger.exception("Error getting all ready contents")
            return []

        return sorted(ready, key=_sort_key)

    async def get_blocked_contents(self) -> list[ContentSuggestion]:
        """Every unpublished item held back by its ``publish_after`` dependency."""
        try:
            assessed = await self._assess_unpublished()
        except Exception:
            logger.exception("Error getting blocked contents")
            return []

        return sorted((s for s in assessed if s.blocked_by), key=_sort_key)
