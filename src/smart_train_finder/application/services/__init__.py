"""Application services (use cases)."""

from smart_train_finder.application.services.cache_warmer import CacheWarmer
from smart_train_finder.application.services.journey_search_service import JourneySearchService
from smart_train_finder.application.services.trip_query_service import (
    TripQueryService,
    sort_itineraries,
    to_trip_response,
)

__all__ = [
    "CacheWarmer",
    "JourneySearchService",
    "TripQueryService",
    "sort_itineraries",
    "to_trip_response",
]
