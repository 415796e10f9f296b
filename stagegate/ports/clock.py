from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    """Time source for ``created_at``/``updated_at`` stamps and stage advances."""

    def now(self) -> datetime:
        """Timezone-aware UTC now."""
        ...
