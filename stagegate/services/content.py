import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from stagegate.components.dependencies import DependencyValidator
from stagegate.components.suggestions import SuggestionAggregator
from stagegate.components.transition import validate_stage_requirements
from stagegate.domain.entities import (
    Content,
    ContentDependency,
    ContentFlag,
    ContentFormData,
    ContentStatistics,
    FinalCheck,
)
from stagegate.domain.errors import (
    ContentNotFoundError,
    ContentValidationError,
    DuplicateTopicError,
    StageTransitionError,
)
from stagegate.domain.stages import TERMINAL_STAGE, is_terminal, stage_name
from stagegate.domain.state import ContentFilters, apply_filters
from stagegate.domain.validation import validate_content_data
from stagegate.ports.repo import ContentStorePort
from stagegate.rules.models import PipelineRules

logger = logging.getLogger(__name__)

_FORM_FIELDS = frozenset(ContentFormData.model_fields)
_OPTIONAL_TEXT_FIELDS = ("title", "script", "link", "publish_after", "publish_before")


def _clean_optional(value: str | None) -> str | None:
    # Blank optional text is stored as unset
    if value is None or not value.strip():
        return None
    return value


class ContentService:
    """
    Mutating entry points for content records.

    Every mutation is validated first and raises a descriptive error when
    rejected; store failures propagate unchanged.
    """

    def __init__(self, store: ContentStorePort, rules: PipelineRules | None = None):
        self.store = store
        self.rules = rules or PipelineRules()
        self.dependencies = DependencyValidator(store)
        self.suggestions = SuggestionAggregator(store, self.rules)

    async def _require(self, content_id: UUID) -> Content:
        content = await self.store.get_by_id(content_id)
        if content is None:
            raise ContentNotFoundError(content_id)
        return content

    def _default_final_checks(self) -> list[FinalCheck]:
        return [FinalCheck(text=text) for text in self.rules.content.default_final_checks]

    # --- Mutations ---

    async def create_content(self, form: ContentFormData) -> Content:
        validation = validate_content_data(form, 0, self.rules)
        if not validation.is_valid:
            raise ContentValidationError("Validation failed", validation.errors)

        if await self.store.get_by_topic(form.topic) is not None:
            raise DuplicateTopicError(form.topic)

        dep_validation = await self.dependencies.validate_dependencies(
            form.publish_after, form.publish_before
        )
        if not dep_validation.is_valid:
            raise ContentValidationError("Dependency validation failed", dep_validation.errors)

        content = Content(
            topic=form.topic,
            category=form.category,
            current_stage=0,
            title=_clean_optional(form.title),
            script=_clean_optional(form.script),
            link=_clean_optional(form.link),
            publish_after=_clean_optional(form.publish_after),
            publish_before=_clean_optional(form.publish_before),
            morals=list(form.morals),
            final_checks=self._default_final_checks(),
            flags=[],
        )
        created = await self.store.insert(content)
        logger.info("Created content %s (%s)", created.id, created.topic)
        return created

    async def update_content(self, content_id: UUID, updates: dict[str, Any]) -> Content:
        unknown = set(updates) - _FORM_FIELDS
        if unknown:
            raise ContentValidationError(
                "Validation failed", [f"Unknown field: {name}" for name in sorted(unknown)]
            )

        existing = await self._require(content_id)

        try:
            merged = ContentFormData.model_validate(
                {**existing.model_dump(include=set(_FORM_FIELDS)), **updates}
            )
        except ValidationError as e:
            raise ContentValidationError(
                "Validation failed",
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
            ) from e
        validation = validate_content_data(merged, existing.current_stage, self.rules)
        if not validation.is_valid:
            raise ContentValidationError("Validation failed", validation.errors)

        if merged.topic != existing.topic:
            if await self.store.get_by_topic(merged.topic) is not None:
                raise DuplicateTopicError(merged.topic)

        dep_validation = await self.dependencies.validate_dependencies(
            merged.publish_after, merged.publish_before, existing.topic
        )
        if not dep_validation.is_valid:
            raise ContentValidationError("Dependency validation failed", dep_validation.errors)

        changes: dict[str, Any] = {}
        for name in updates:
            value = getattr(merged, name)
            if name in _OPTIONAL_TEXT_FIELDS:
                value = _clean_optional(value)
            changes[name] = value

        updated = await self.store.update_fields(content_id, changes)
        logger.info("Updated content %s fields: %s", content_id, ", ".join(sorted(changes)))
        return updated

    async def update_content_stage(self, content_id: UUID, new_stage: int) -> Content:
        content = await self._require(content_id)

        stage_validation = validate_stage_requirements(content, new_stage, self.rules)
        if not stage_validation.is_valid:
            raise StageTransitionError("Stage validation failed", stage_validation.errors)

        if is_terminal(new_stage):
            dep_validation = await self.dependencies.validate_publish_dependencies(content)
            if not dep_validation.is_valid:
                raise StageTransitionError("Cannot publish", dep_validation.errors)

        updated = await self.store.update_stage(content_id, new_stage)
        logger.info(
            "Content %s advanced to stage %d (%s)", content_id, new_stage, stage_name(new_stage)
        )
        return updated

    async def set_final_check(self, content_id: UUID, check_id: str, completed: bool) -> Content:
        content = await self._require(content_id)
        if not any(check.id == check_id for check in content.final_checks):
            raise ContentValidationError(f'Final check "{check_id}" not found')

        checks = [
            check.model_copy(update={"completed": completed}) if check.id == check_id else check
            for check in content.final_checks
        ]
        return await self.store.update_fields(
            content_id, {"final_checks": [c.model_dump() for c in checks]}
        )

    async def add_content_flag(self, content_id: UUID, flag: ContentFlag) -> Content:
        content = await self._require(content_id)
        if flag in content.flags:
            return content
        return await self.store.update_fields(content_id, {"flags": [*content.flags, flag]})

    async def remove_content_flag(self, content_id: UUID, flag: ContentFlag) -> Content:
        content = await self._require(content_id)
        flags = [f for f in content.flags if f != flag]
        return await self.store.update_fields(content_id, {"flags": flags})

    # --- Queries ---

    async def get_contents(self, filters: ContentFilters | None = None) -> list[Content]:
        contents = await self.store.get_all()
        if filters is None:
            return contents
        return apply_filters(contents, filters)

    async def search_contents(self, term: str) -> list[Content]:
        if not term.strip():
            return await self.get_contents()
        return await self.get_contents(ContentFilters(search=term.strip()))

    async def get_contents_ready_for_next_stage(self) -> list[Content]:
        ready: list[Content] = []
        for content in await self.store.get_all():
            if await self.suggestions.is_content_ready_for_next_stage(content):
                ready.append(content)
        return ready

    async def get_contents_with_incomplete_final_checks(self) -> list[Content]:
        return [
            content
            for content in await self.store.get_all()
            if any(not check.completed for check in content.final_checks)
        ]

    async def get_contents_with_dependencies(self) -> list[Content]:
        return [
            content
            for content in await self.store.get_all()
            if content.publish_after or content.publish_before
        ]

    async def get_content_dependencies(self, topic: str) -> ContentDependency:
        return await self.dependencies.get_content_dependencies(topic)

    async def get_content_statistics(self) -> ContentStatistics:
        stats = ContentStatistics()
        for content in await self.store.get_all():
            stats.total += 1
            if content.current_stage == 0:
                stats.pending += 1
            elif content.current_stage == TERMINAL_STAGE:
                stats.published += 1
            else:
                stats.in_progress += 1

            stats.by_category[content.category] = stats.by_category.get(content.category, 0) + 1
            name = stage_name(content.current_stage)
            stats.by_stage[name] = stats.by_stage.get(name, 0) + 1

        return stats
