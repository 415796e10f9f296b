"""
Dependencies component - publication ordering between content items.

Dependencies are weak references by topic: ``publish_after`` names content
that must be published first, ``publish_before`` names content this item
should precede. Only ``publish_after`` blocks publication; ``publish_before``
is descriptive and is enforced, if at all, by the other item's own
``publish_after``.

Store lookups may fail; those failures propagate to the caller.
"""

from __future__ import annotations

from stagegate.domain.entities import Content, ContentDependency
from stagegate.domain.stages import is_terminal
from stagegate.domain.validation import ValidationResult

from .models import GetDependenciesInput, ValidateDependenciesInput, ValidatePublishInput
from .ports import ContentLookupPort


def normalize_topic(topic: str | None) -> str | None:
    """Blank references count as unset."""
    if topic is None:
        return None
    stripped = topic.strip()
    return stripped or None


class DependencyValidator:
    """Existence, self-reference and ordering checks for topic dependencies."""

    def __init__(self, store: ContentLookupPort) -> None:
        self._store = store

    async def run(
        self,
        input_data: ValidateDependenciesInput | ValidatePublishInput | GetDependenciesInput,
    ) -> ValidationResult | ContentDependency:
        """Main dispatcher - routes to appropriate handler based on input type."""
        if isinstance(input_data, ValidateDependenciesInput):
            return await self.validate_dependencies(
                input_data.publish_after, input_data.publish_before, input_data.own_topic
            )
        elif isinstance(input_data, ValidatePublishInput):
            return await self.validate_publish_dependencies(input_data.content)
        elif isinstance(input_data, GetDependenciesInput):
            return await self.get_content_dependencies(input_data.topic)
        else:
            raise TypeError(f"Unknown input type: {type(input_data)}")

    async def validate_dependencies(
        self,
        publish_after: str | None = None,
        publish_before: str | None = None,
        own_topic: str | None = None,
    ) -> ValidationResult:
        """Structural check used when content is created or edited."""
        errors: list[str] = []
        after = normalize_topic(publish_after)
        before = normalize_topic(publish_before)
        own = normalize_topic(own_topic)

        # Existence, self-references included
        for reference in (after, before):
            if reference:
                if await self._store.get_by_topic(reference) is None:
                    errors.append(f'Dependency "{reference}" does not exist')

        if after and before and after == before:
            errors.append("Cannot have the same content as both publish_after and publish_before")

        if own:
            if after == own:
                errors.append("Content cannot depend on itself (publish_after)")
            if before == own:
                errors.append("Content cannot depend on itself (publish_before)")

            if after and after != own:
                cycle = await self._find_cycle(own, after)
                if cycle:
                    errors.append(f"Circular dependency detected: {' -> '.join(cycle)}")

        return ValidationResult.from_errors(errors)

    async def validate_publish_dependencies(self, content: Content) -> ValidationResult:
        """Check that the item's ``publish_after`` dependency is already published."""
        errors: list[str] = []
        after = normalize_topic(content.publish_after)

        if after:
            dependency = await self._store.get_by_topic(after)
            if dependency is None:
                errors.append(f'Dependency "{after}" not found')
            elif not is_terminal(dependency.current_stage):
                errors.append(f'Cannot publish until "{after}" is published')

        return ValidationResult.from_errors(errors)

    async def check_dependency_blocks(self, content: Content) -> list[str]:
        """
        Reasons this item cannot be suggested for publication.
        An unresolvable dependency blocks (fail-closed).
        """
        blocked_by: list[str] = []
        after = normalize_topic(content.publish_after)

        if after:
            dependency = await self._store.get_by_topic(after)
            if dependency is None:
                blocked_by.append(f"Missing dependency: {after}")
            elif not is_terminal(dependency.current_stage):
                blocked_by.append(f'Waiting for "{after}" to be published')

        return blocked_by

    async def get_content_dependencies(self, topic: str) -> ContentDependency:
        """What ``topic`` waits on, and which topics wait on it."""
        depends_on: list[str] = []
        content = await self._store.get_by_topic(topic)
        if content is not None:
            after = normalize_topic(content.publish_after)
            if after:
                depends_on.append(after)

        dependents = [
            item.topic
            for item in await self._store.get_all()
            if normalize_topic(item.publish_after) == topic
        ]

        return ContentDependency(
            content_topic=topic,
            depends_on=depends_on,
            dependents=sorted(dependents),
        )

    async def _find_cycle(self, own_topic: str, start: str) -> list[str] | None:
        """Follow the ``publish_after`` chain from ``start``; return it if it reaches ``own_topic``."""
        chain = [own_topic, start]
        seen = {own_topic, start}
        current = start

        while True:
            item = await self._store.get_by_topic(current)
            if item is None:
                return None
            nxt = normalize_topic(item.publish_after)
            if nxt is None:
                return None
            chain.append(nxt)
            if nxt == own_topic:
                return chain
            if nxt in seen:
                # A cycle that does not involve this item; not ours to report
                return None
            seen.add(nxt)
            current = nxt
