"""DB Timetables API adapters."""

from smart_train_finder.adapters.db_timetables.db_station_resolver import DbStationResolver
from smart_train_finder.adapters.db_timetables.db_timetable_repository import (
    DbTimetableRepository,
)
from smart_train_finder.adapters.db_timetables.http_client import DbTimetablesHttpClient
from smart_train_finder.adapters.db_timetables.timetable_parser import TimetableParser

__all__ = [
    "DbStationResolver",
    "DbTimetableRepository",
    "DbTimetablesHttpClient",
    "TimetableParser",
]
