"""Ports (interfaces) for the ports-and-adapters architecture."""

from smart_train_finder.domain.ports.station_resolver import StationResolver
from smart_train_finder.domain.ports.timetable_repository import TimetableRepository

__all__ = [
    "StationResolver",
    "TimetableRepository",
]
