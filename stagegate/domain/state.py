"""
Caller-owned pipeline state.

The application keeps one ``PipelineState`` value and replaces it with the
result of ``reduce(state, action)``. Nothing here is global and nothing
mutates its input; the rule engine never reads this state.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from uuid import UUID

from stagegate.domain.entities import Content


@dataclass(frozen=True)
class ContentFilters:
    category: str | None = None
    stage: int | None = None
    search: str | None = None


@dataclass(frozen=True)
class PipelineState:
    items: tuple[Content, ...] = ()
    filters: ContentFilters = field(default_factory=ContentFilters)
    loading: bool = False
    error: str | None = None


# --- Actions ---


@dataclass(frozen=True)
class SetContents:
    items: tuple[Content, ...]


@dataclass(frozen=True)
class AddContent:
    item: Content


@dataclass(frozen=True)
class UpdateContent:
    item: Content


@dataclass(frozen=True)
class DeleteContent:
    content_id: UUID


class _Unset(Enum):
    UNSET = "unset"


# Marks a filter the action leaves untouched; None clears that filter
UNSET = _Unset.UNSET


@dataclass(frozen=True)
class SetFilters:
    category: str | None | _Unset = UNSET
    stage: int | None | _Unset = UNSET
    search: str | None | _Unset = UNSET
    clear: bool = False


@dataclass(frozen=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True)
class SetError:
    error: str | None


PipelineAction = (
    SetContents
    | AddContent
    | UpdateContent
    | DeleteContent
    | SetFilters
    | SetLoading
    | SetError
)


def reduce(state: PipelineState, action: PipelineAction) -> PipelineState:
    """Return the state that results from applying ``action``."""
    if isinstance(action, SetContents):
        return replace(state, items=tuple(action.items), loading=False)

    if isinstance(action, AddContent):
        return replace(state, items=(*state.items, action.item))

    if isinstance(action, UpdateContent):
        items = tuple(
            action.item if item.id == action.item.id else item for item in state.items
        )
        return replace(state, items=items)

    if isinstance(action, DeleteContent):
        items = tuple(item for item in state.items if item.id != action.content_id)
        return replace(state, items=items)

    if isinstance(action, SetFilters):
        if action.clear:
            return replace(state, filters=ContentFilters())
        # Merge: only fields given in the action override the current filters
        current = state.filters
        filters = ContentFilters(
            category=current.category if action.category is _Unset.UNSET else action.category,
            stage=current.stage if action.stage is _Unset.UNSET else action.stage,
            search=current.search if action.search is _Unset.UNSET else action.search,
        )
        return replace(state, filters=filters)

    if isinstance(action, SetLoading):
        return replace(state, loading=action.loading)

    if isinstance(action, SetError):
        return replace(state, error=action.error, loading=False)

    return state


def visible_items(state: PipelineState) -> list[Content]:
    """Items that pass the current filters, in state order."""
    return apply_filters(state.items, state.filters)


def apply_filters(items: Iterable[Content], filters: ContentFilters) -> list[Content]:
    items = list(items)

    if filters.category:
        items = [i for i in items if i.category == filters.category]
    if filters.stage is not None:
        items = [i for i in items if i.current_stage == filters.stage]
    if filters.search:
        needle = filters.search.lower()
        items = [i for i in items if needle in i.topic.lower()]

    return items
