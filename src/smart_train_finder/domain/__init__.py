"""Domain layer - core business logic and models."""

from smart_train_finder.domain.models import (
    Corridor,
    Itinerary,
    Leg,
    RequestPriority,
    Station,
    TimetableSlot,
)
from smart_train_finder.domain.ports import (
    StationResolver,
    TimetableRepository,
)

__all__ = [
    "Corridor",
    "Itinerary",
    "Leg",
    "RequestPriority",
    "Station",
    "StationResolver",
    "TimetableRepository",
    "TimetableSlot",
]
