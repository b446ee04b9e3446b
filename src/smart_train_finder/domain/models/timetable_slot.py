"""Timetable slot domain model."""

from dataclasses import dataclass
from datetime import date

from .stop_event import StopEvent


@dataclass(frozen=True)
class TimetableSlot:
    """Planned stop events at one station during one civil hour."""

    station_id: str
    civil_date: date
    hour: int
    stop_events: tuple[StopEvent, ...]

    def find_train(self, train_id: str | None) -> StopEvent | None:
        """Return the first stop event of the given train, if any."""
        if train_id is None:
            return None
        for event in self.stop_events:
            if event.train_id == train_id:
                return event
        return None

    def contains_train(self, train_id: str | None) -> bool:
        """Check whether the given train stops here during this hour."""
        return self.find_train(train_id) is not None
