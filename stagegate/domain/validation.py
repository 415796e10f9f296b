"""
Field-level content validation.

Form rules for topic, category, title, script, link and morals. Title,
script and link become mandatory once the item's current stage reaches the
stage that gates them; every violation is reported, nothing is raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import AnyUrl, TypeAdapter, ValidationError

from stagegate.domain.entities import Content, ContentFormData
from stagegate.domain.stages import threshold_for
from stagegate.rules.models import PipelineRules

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a rule check. Validation failures are data, not exceptions."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> ValidationResult:
        return cls(is_valid=not errors, errors=list(errors))


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_field_present(content: Content, field_name: str) -> bool:
    """Presence check used for scoring: a non-blank value."""
    value = getattr(content, field_name)
    return not is_blank(value)


def is_valid_url(url: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    return True


def validate_content_data(
    data: ContentFormData,
    current_stage: int = 0,
    rules: PipelineRules | None = None,
) -> ValidationResult:
    rules = rules or PipelineRules()
    limits = rules.validation
    errors: list[str] = []

    # Topic
    topic_min, topic_max = limits.topic.min, limits.topic.max
    if is_blank(data.topic) or len(data.topic.strip()) < topic_min:
        errors.append(f"Topic must be at least {topic_min} characters long")
    if data.topic and len(data.topic) > topic_max:
        errors.append(f"Topic must be no more than {topic_max} characters long")

    # Category: free text, suggestions only
    if is_blank(data.category):
        errors.append("Category is required")
    elif len(data.category) > limits.max_category_length:
        errors.append(
            f"Category must be no more than {limits.max_category_length} characters long"
        )

    # Title
    title_min, title_max = limits.title.min, limits.title.max
    if current_stage >= threshold_for("title"):
        if is_blank(data.title) or len((data.title or "").strip()) < title_min:
            errors.append(
                f"Title is required and must be at least {title_min} characters long"
            )
    if data.title and len(data.title) > title_max:
        errors.append(f"Title must be no more than {title_max} characters long")

    # Script
    min_script = limits.min_script_length
    if current_stage >= threshold_for("script"):
        if is_blank(data.script) or len((data.script or "").strip()) < min_script:
            errors.append(
                f"Script is required and must be at least {min_script} characters long"
            )
    elif data.script and len(data.script) < min_script:
        errors.append(f"Script must be at least {min_script} characters long")

    # Link
    if current_stage >= threshold_for("link") and is_blank(data.link):
        errors.append("Link is required for published content")
    if data.link and not is_blank(data.link) and not is_valid_url(data.link.strip()):
        errors.append("Link must be a valid URL")

    # Morals
    if len(data.morals) > limits.max_morals_count:
        errors.append(f"Cannot have more than {limits.max_morals_count} morals")

    return ValidationResult.from_errors(errors)
