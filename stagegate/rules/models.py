from pydantic import BaseModel, Field, model_validator


class RangeRule(BaseModel):
    min: int
    max: int

    @model_validator(mode="after")
    def _check_bounds(self) -> "RangeRule":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class ValidationRules(BaseModel):
    topic: RangeRule = Field(default_factory=lambda: RangeRule(min=3, max=100))
    title: RangeRule = Field(default_factory=lambda: RangeRule(min=5, max=200))
    min_script_length: int = Field(default=50, ge=0)
    max_category_length: int = Field(default=50, ge=1)
    max_morals_count: int = Field(default=10, ge=0)


class ContentRules(BaseModel):
    suggested_categories: list[str] = Field(
        default_factory=lambda: [
            "Demanding",
            "Innovative",
            "Farmer",
            "Educational",
            "Entertainment",
            "Tutorial",
            "Review",
            "News",
            "Opinion",
        ]
    )
    default_final_checks: list[str] = Field(
        default_factory=lambda: [
            "Content reviewed for accuracy",
            "SEO optimization completed",
            "Thumbnail approved",
            "Description finalized",
            "Tags and categories set",
        ]
    )


class SuggestionRules(BaseModel):
    max_suggestions: int = Field(default=2, ge=0)
    high_priority_above: float = 80
    medium_priority_above: float = 50


class ScoringRules(BaseModel):
    stage_weight: float = 100
    field_bonus: dict[str, float] = Field(
        default_factory=lambda: {"title": 5, "script": 10, "link": 15}
    )
    final_checks_bonus: float = 20
    missing_field_penalty: dict[str, float] = Field(
        default_factory=lambda: {"title": 10, "script": 15, "link": 20}
    )
    min_score: float = 0
    max_score: float = 150
    missing_field_step: float = 0.5
    incomplete_check_step: float = 0.1


class PipelineRules(BaseModel):
    validation: ValidationRules = Field(default_factory=ValidationRules)
    content: ContentRules = Field(default_factory=ContentRules)
    suggestions: SuggestionRules = Field(default_factory=SuggestionRules)
    scoring: ScoringRules = Field(default_factory=ScoringRules)
