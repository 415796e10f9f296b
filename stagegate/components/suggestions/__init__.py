"""Suggestions component - ranks unpublished content by closeness to publication."""

from stagegate.components.suggestions.component import SuggestionAggregator
from stagegate.components.suggestions.models import (
    ContentSuggestion,
    GetContentSuggestionInput,
    GetStatisticsInput,
    GetSuggestionsInput,
    SuggestionStatistics,
    SuggestionType,
)
from stagegate.components.suggestions.ports import ContentSourcePort

__all__ = [
    # Component
    "SuggestionAggregator",
    # Models
    "ContentSuggestion",
    "SuggestionStatistics",
    "SuggestionType",
    "GetSuggestionsInput",
    "GetStatisticsInput",
    "GetContentSuggestionInput",
    # Ports
    "ContentSourcePort",
]
