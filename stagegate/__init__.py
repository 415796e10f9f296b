"""Stage gate rule engine for a twelve-stage content production pipeline."""

from stagegate.components.dependencies import DependencyValidator
from stagegate.components.readiness import assess_readiness
from stagegate.components.suggestions import (
    ContentSuggestion,
    SuggestionAggregator,
    SuggestionStatistics,
)
from stagegate.components.transition import advance_stage, validate_stage_requirements
from stagegate.domain.entities import Content, ContentFormData, FinalCheck
from stagegate.domain.stages import STAGES, TERMINAL_STAGE
from stagegate.domain.validation import ValidationResult
from stagegate.rules.loader import load_rules, resolve_rules
from stagegate.rules.models import PipelineRules

__version__ = "0.1.0"

__all__ = [
    "STAGES",
    "TERMINAL_STAGE",
    "Content",
    "ContentFormData",
    "FinalCheck",
    "ValidationResult",
    "PipelineRules",
    "load_rules",
    "resolve_rules",
    "validate_stage_requirements",
    "advance_stage",
    "DependencyValidator",
    "assess_readiness",
    "SuggestionAggregator",
    "ContentSuggestion",
    "SuggestionStatistics",
]
