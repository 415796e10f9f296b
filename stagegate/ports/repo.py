from typing import Any, Protocol
from uuid import UUID

from stagegate.domain.entities import Content


class ContentStorePort(Protocol):
    """
    Asynchronous content store.

    The store owns ids and timestamps and serializes writes to a record;
    callers only ever see snapshots.
    """

    async def get_all(self) -> list[Content]:
        ...

    async def get_by_id(self, content_id: UUID) -> Content | None:
        ...

    async def get_by_topic(self, topic: str) -> Content | None:
        ...

    async def insert(self, content: Content) -> Content:
        ...

    async def update_fields(self, content_id: UUID, updates: dict[str, Any]) -> Content:
        ...

    async def update_stage(self, content_id: UUID, stage: int) -> Content:
        ...
