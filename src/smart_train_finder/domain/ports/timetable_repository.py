"""Timetable repository port."""

from datetime import date
from typing import Protocol

from smart_train_finder.domain.models.request_priority import RequestPriority
from smart_train_finder.domain.models.timetable_slot import TimetableSlot


class TimetableRepository(Protocol):
    """Port for retrieving planned timetable slots."""

    async def get_slot(
        self,
        station_id: str,
        civil_date: date,
        hour: int,
        priority: RequestPriority = RequestPriority.INTERACTIVE,
    ) -> TimetableSlot | None:
        """Get the planned stop events at a station during one civil hour."""
        ...
