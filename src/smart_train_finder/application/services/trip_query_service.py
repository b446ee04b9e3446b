"""Trip query use case: answers a direction/date/hour query with trips."""

import logging
from datetime import date
from typing import TYPE_CHECKING

from smart_train_finder.domain.models import (
    Itinerary,
    Leg,
    RequestPriority,
    SectionResponse,
    Station,
    StationResponse,
    TripQueryLimits,
    TripResponse,
    TripSortOrder,
)
from smart_train_finder.domain.timetable_time import PROVIDER_TIMEZONE, civil_hour_start

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from smart_train_finder.application.services.journey_search_service import (
        JourneySearchService,
    )
    from smart_train_finder.domain.models import Corridor


def sort_itineraries(itineraries: list[Itinerary], order: TripSortOrder) -> list[Itinerary]:
    """Sort itineraries for display; ties keep their search order.

    Itineraries with an unknown departure or duration go last.
    """
    if order == TripSortOrder.EARLIEST:
        return sorted(itineraries, key=lambda i: (i.start is None, i.start or 0))
    if order == TripSortOrder.FASTEST:
        return sorted(
            itineraries,
            key=lambda i: (i.duration_minutes is None, i.duration_minutes or 0.0),
        )
    return sorted(itineraries, key=lambda i: i.transfers)


def _station_response(station: Station) -> StationResponse:
    return StationResponse(eva=station.id, name=station.name)


def _section_response(leg: Leg) -> SectionResponse:
    return SectionResponse(
        train_id=leg.train_id,
        train_type=leg.train_type,
        from_station=_station_response(leg.origin),
        to_station=_station_response(leg.destination),
        departure=leg.departure,
        arrival=leg.arrival,
    )


def to_trip_response(itinerary: Itinerary) -> TripResponse:
    """Convert an itinerary into its client representation."""
    return TripResponse(
        departure_date_time=itinerary.start,
        arrival_date_time=itinerary.arrival,
        changes=itinerary.transfers,
        train=itinerary.train_types,
        sections=[_section_response(leg) for leg in itinerary.legs],
    )


class TripQueryService:
    """Service answering trip queries along the configured corridor."""

    def __init__(
        self,
        journey_search: "JourneySearchService",
        corridor: "Corridor",
        limits: TripQueryLimits | None = None,
        timezone: "ZoneInfo" = PROVIDER_TIMEZONE,
    ) -> None:
        """Initialize with the search service and the corridor it serves."""
        self._journey_search = journey_search
        self._corridor = corridor
        self._limits = limits or TripQueryLimits()
        self._timezone = timezone

    async def get_trips(
        self,
        outbound: bool,
        civil_date: date,
        hour: int = 0,
        sort: TripSortOrder | None = None,
    ) -> list[TripResponse]:
        """Find trips departing from the given civil hour on.

        Args:
            outbound: True for origin -> destination, False for the way back.
            civil_date: Departure date in the provider timezone.
            hour: Departure hour in the provider timezone (0-23).
            sort: Optional display order; search order is kept when omitted.

        Returns:
            Trips, empty if none were found.

        Raises:
            ValueError: If the hour is out of range.
        """
        if not 0 <= hour <= 23:
            raise ValueError(f"hour must be between 0 and 23, got {hour}")

        origin, destination = self._corridor.endpoints(outbound)
        start = civil_hour_start(civil_date, hour, self._timezone)
        logger.info(f"Trip query {origin.name} -> {destination.name} from {start.isoformat()}")

        itineraries = await self._journey_search.find_journeys(
            origin,
            destination,
            start,
            max_transfers=self._limits.max_transfers,
            max_stops=self._limits.max_stops,
            max_duration_minutes=self._limits.max_duration_minutes,
            priority=RequestPriority.INTERACTIVE,
        )
        if not itineraries:
            return []

        if sort is not None:
            itineraries = sort_itineraries(itineraries, sort)
        return [to_trip_response(itinerary) for itinerary in itineraries]
