"""Protocol for timetable caching."""

from datetime import datetime, timedelta
from typing import Protocol

from smart_train_finder.domain.ports.timetable_repository import TimetableRepository


class TimetableCacheProtocol(TimetableRepository, Protocol):
    """Timetable repository that keeps slots in memory until they go stale."""

    def evict_stale(self, now: datetime, staleness: timedelta) -> int:
        """Drop slots whose civil hour began more than ``staleness`` before now.

        Returns:
            Number of evicted slots.
        """
        ...

    def __len__(self) -> int:
        """Number of cached slots, including in-flight fetches."""
        ...
