from collections.abc import Iterable
from typing import Any
from uuid import UUID

from stagegate.adapters.clock import SystemClock
from stagegate.domain.entities import Content
from stagegate.domain.errors import ContentNotFoundError, DuplicateTopicError
from stagegate.ports.clock import ClockPort

# Fields the store manages itself
_READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at", "current_stage"})


class InMemoryContentStore:
    """
    Process-local content store keyed by id, with a unique topic index.

    Snapshots handed out are copies; mutating them does not touch the store.
    """

    def __init__(self, clock: ClockPort | None = None) -> None:
        self._clock = clock or SystemClock()
        self._items: dict[UUID, Content] = {}

    def load(self, contents: Iterable[Content]) -> None:
        """Seed the store with existing snapshots, keeping ids, stages and timestamps."""
        for content in contents:
            if content.id in self._items:
                raise ValueError(f"Content {content.id} already exists")
            if any(item.topic == content.topic for item in self._items.values()):
                raise DuplicateTopicError(content.topic)
            self._items[content.id] = content.model_copy(deep=True)

    async def get_all(self) -> list[Content]:
        items = sorted(self._items.values(), key=lambda c: c.created_at, reverse=True)
        return [item.model_copy(deep=True) for item in items]

    async def get_by_id(self, content_id: UUID) -> Content | None:
        item = self._items.get(content_id)
        return item.model_copy(deep=True) if item else None

    async def get_by_topic(self, topic: str) -> Content | None:
        for item in self._items.values():
            if item.topic == topic:
                return item.model_copy(deep=True)
        return None

    async def insert(self, content: Content) -> Content:
        if content.id in self._items:
            raise ValueError(f"Content {content.id} already exists")
        if await self.get_by_topic(content.topic):
            raise DuplicateTopicError(content.topic)

        now = self._clock.now()
        stored = content.model_copy(deep=True, update={"created_at": now, "updated_at": now})
        self._items[stored.id] = stored
        return stored.model_copy(deep=True)

    async def update_fields(self, content_id: UUID, updates: dict[str, Any]) -> Content:
        existing = self._require(content_id)

        illegal = _READ_ONLY_FIELDS.intersection(updates)
        if illegal:
            raise ValueError(f"Fields cannot be updated directly: {', '.join(sorted(illegal))}")

        new_topic = updates.get("topic")
        if new_topic and new_topic != existing.topic:
            clash = await self.get_by_topic(new_topic)
            if clash:
                raise DuplicateTopicError(new_topic)

        merged = existing.model_dump()
        merged.update(updates)
        merged["updated_at"] = self._clock.now()
        stored = Content.model_validate(merged)
        self._items[content_id] = stored
        return stored.model_copy(deep=True)

    async def update_stage(self, content_id: UUID, stage: int) -> Content:
        existing = self._require(content_id)
        merged = existing.model_dump()
        merged["current_stage"] = stage
        merged["updated_at"] = self._clock.now()
        # Re-validation enforces the 0..11 stage bounds
        stored = Content.model_validate(merged)
        self._items[content_id] = stored
        return stored.model_copy(deep=True)

    def _require(self, content_id: UUID) -> Content:
        item = self._items.get(content_id)
        if item is None:
            raise ContentNotFoundError(content_id)
        return item
