from datetime import UTC, datetime


class SystemClock:
    """Wall-clock ``ClockPort`` used when no clock is injected."""

    def now(self) -> datetime:
        return datetime.now(UTC)
