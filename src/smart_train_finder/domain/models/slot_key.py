"""Slot key domain model for timetable caching."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SlotKey:
    """Key for one hour of planned timetable data at one station.

    The date and hour are civil (provider timezone) values, matching the way
    the provider addresses its hourly timetable documents.
    """

    station_id: str
    civil_date: date
    hour: int
