"""
Content pipeline stage table.

Twelve fixed, ordered stages from Pending (0) to Published (11). Each stage
lists the fields that must be satisfied before a content item may enter it;
the requirements for a target stage are cumulative over every stage up to
and including that target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

GatedField = Literal["title", "script", "link", "final_checks"]


@dataclass(frozen=True)
class StageDefinition:
    """One row of the stage table."""

    index: int
    name: str
    required_fields: tuple[GatedField, ...] = ()


STAGES: tuple[StageDefinition, ...] = (
    StageDefinition(0, "Pending"),
    StageDefinition(1, "Title", ("title",)),
    StageDefinition(2, "Thumbnail"),
    StageDefinition(3, "ToC"),
    StageDefinition(4, "Ordered"),
    StageDefinition(5, "Scripted", ("script",)),
    StageDefinition(6, "Recorded"),
    StageDefinition(7, "Voice Edited"),
    StageDefinition(8, "Edited"),
    StageDefinition(9, "Revised"),
    StageDefinition(10, "SEO Optimised"),
    StageDefinition(11, "Published", ("link", "final_checks")),
)

TERMINAL_STAGE = len(STAGES) - 1


def is_valid_stage(index: int) -> bool:
    return 0 <= index <= TERMINAL_STAGE


def is_terminal(index: int) -> bool:
    return index == TERMINAL_STAGE


def stage_name(index: int) -> str:
    if not is_valid_stage(index):
        raise ValueError(f"Stage {index} does not exist")
    return STAGES[index].name


def required_fields_for(target_stage: int) -> tuple[GatedField, ...]:
    """All fields that must be satisfied to enter ``target_stage``, in table order."""
    upper = min(target_stage, TERMINAL_STAGE)
    fields: list[GatedField] = []
    for stage in STAGES[: upper + 1]:
        fields.extend(stage.required_fields)
    return tuple(fields)


def threshold_for(field: GatedField) -> int:
    """Index of the first stage that requires ``field``."""
    for stage in STAGES:
        if field in stage.required_fields:
            return stage.index
    raise ValueError(f"Field {field!r} is not gated by any stage")
