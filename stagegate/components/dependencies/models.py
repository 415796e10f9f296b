"""Dependencies component models - frozen dataclass inputs and outputs."""

from dataclasses import dataclass

from stagegate.domain.entities import Content


@dataclass(frozen=True)
class ValidateDependenciesInput:
    """Input for the structural check run on create/update."""

    publish_after: str | None = None
    publish_before: str | None = None
    own_topic: str | None = None


@dataclass(frozen=True)
class ValidatePublishInput:
    """Input for the check run before a content item is published."""

    content: Content


@dataclass(frozen=True)
class GetDependenciesInput:
    """Input for listing what a topic waits on and what waits on it."""

    topic: str
