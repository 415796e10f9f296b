from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# --- Enums / Literals ---
ContentFlag = Literal["fans_feedback_analysed", "overall_feedback_analysed"]

SUGGESTED_CATEGORIES: tuple[str, ...] = (
    "Demanding",
    "Innovative",
    "Farmer",
    "Educational",
    "Entertainment",
    "Tutorial",
    "Review",
    "News",
    "Opinion",
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Content ---

class FinalCheck(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    text: str
    completed: bool = False


class Content(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    topic: str
    category: str
    current_stage: int = Field(default=0, ge=0, le=11)

    title: str | None = None
    script: str | None = None
    link: str | None = None

    final_checks: list[FinalCheck] = Field(default_factory=list)

    # Weak references to other content by topic
    publish_after: str | None = None
    publish_before: str | None = None

    morals: list[str] = Field(default_factory=list)
    flags: list[ContentFlag] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ContentFormData(BaseModel):
    """Editable fields of a content item, as submitted by a form."""

    topic: str
    category: str
    title: str | None = None
    script: str | None = None
    link: str | None = None
    publish_after: str | None = None
    publish_before: str | None = None
    morals: list[str] = Field(default_factory=list)


class ContentDependency(BaseModel):
    content_topic: str
    depends_on: list[str] = Field(default_factory=list)
    dependents: list[str] = Field(default_factory=list)


class ContentStatistics(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    published: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    by_stage: dict[str, int] = Field(default_factory=dict)
