"""Dependencies component - publication ordering between content items."""

from stagegate.components.dependencies.component import DependencyValidator, normalize_topic
from stagegate.components.dependencies.models import (
    GetDependenciesInput,
    ValidateDependenciesInput,
    ValidatePublishInput,
)
from stagegate.components.dependencies.ports import ContentLookupPort

__all__ = [
    # Component
    "DependencyValidator",
    "normalize_topic",
    # Models
    "ValidateDependenciesInput",
    "ValidatePublishInput",
    "GetDependenciesInput",
    # Ports
    "ContentLookupPort",
]
