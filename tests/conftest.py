from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from stagegate.adapters.memory_store import InMemoryContentStore
from stagegate.domain.entities import Content
from stagegate.rules.loader import load_rules
from stagegate.rules.models import PipelineRules

LONG_SCRIPT = (
    "This is a script long enough to clear the fifty character minimum for stage five."
)


class FixedClock:
    """Deterministic clock for testing."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def rules(project_root: Path) -> PipelineRules:
    """Rules loaded from the shipped rules file."""
    return load_rules(project_root / "pipeline_rules.yaml")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store(clock: FixedClock) -> InMemoryContentStore:
    return InMemoryContentStore(clock=clock)


@pytest.fixture
def make_content():
    """Factory for Content snapshots with sensible defaults."""

    def _make(**overrides: Any) -> Content:
        data: dict[str, Any] = {"topic": "test-topic", "category": "Demanding"}
        data.update(overrides)
        return Content(**data)

    return _make


@pytest.fixture
def long_script() -> str:
    return LONG_SCRIPT
