"""Adapters layer - external system integrations."""

from smart_train_finder.adapters.config import AppConfig
from smart_train_finder.adapters.db_timetables import (
    DbStationResolver,
    DbTimetableRepository,
    DbTimetablesHttpClient,
)

__all__ = [
    "AppConfig",
    "DbStationResolver",
    "DbTimetableRepository",
    "DbTimetablesHttpClient",
]
