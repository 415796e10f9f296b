"""Suggestions component port definitions - protocols for dependencies."""

from typing import Protocol

from stagegate.domain.entities import Content


class ContentSourcePort(Protocol):
    """Protocol for the store reads the aggregator performs."""

    async def get_all(self) -> list[Content]:
        """List every content item."""
        ...

    async def get_by_topic(self, topic: str) -> Content | None:
        """Retrieve a content item by its unique topic."""
        ...
