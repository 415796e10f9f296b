"""Dependencies component port definitions - protocols for dependencies."""

from typing import Protocol

from stagegate.domain.entities import Content


class ContentLookupPort(Protocol):
    """Protocol for the store lookups dependency checks need."""

    async def get_by_topic(self, topic: str) -> Content | None:
        """Retrieve a content item by its unique topic."""
        ...

    async def get_all(self) -> list[Content]:
        """List every content item."""
        ...
