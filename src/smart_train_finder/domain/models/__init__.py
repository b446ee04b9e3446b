"""Domain models for smart train finder."""

from smart_train_finder.domain.models.cache_warming_settings import CacheWarmingSettings
from smart_train_finder.domain.models.corridor import Corridor
from smart_train_finder.domain.models.itinerary import Itinerary
from smart_train_finder.domain.models.journey_search_settings import JourneySearchSettings
from smart_train_finder.domain.models.leg import Leg
from smart_train_finder.domain.models.request_priority import RequestPriority
from smart_train_finder.domain.models.search_node import SearchNode
from smart_train_finder.domain.models.slot_key import SlotKey
from smart_train_finder.domain.models.station import Station
from smart_train_finder.domain.models.stop_event import StopEvent
from smart_train_finder.domain.models.timetable_slot import TimetableSlot
from smart_train_finder.domain.models.trip_query_limits import TripQueryLimits
from smart_train_finder.domain.models.trip_response import (
    SectionResponse,
    StationResponse,
    TripResponse,
)
from smart_train_finder.domain.models.trip_sort_order import TripSortOrder

__all__ = [
    "CacheWarmingSettings",
    "Corridor",
    "Itinerary",
    "JourneySearchSettings",
    "Leg",
    "RequestPriority",
    "SearchNode",
    "SectionResponse",
    "SlotKey",
    "Station",
    "StationResponse",
    "StopEvent",
    "TimetableSlot",
    "TripQueryLimits",
    "TripResponse",
    "TripSortOrder",
]
