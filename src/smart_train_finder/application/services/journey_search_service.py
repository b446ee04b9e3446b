"""Journey search over hourly planned timetables.

The search is a breadth-first exploration of (station, train) states. Each
state pulls the timetable slot of its station for the hour it arrives in,
then branches into every train that still heads towards the destination and
is reachable without breaking the transfer rules. Every station on a train's
remaining route becomes a child state, so a leg may skip intermediate stops.
"""

import logging
from collections import deque
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from smart_train_finder.domain.models import (
    Itinerary,
    JourneySearchSettings,
    Leg,
    RequestPriority,
    SearchNode,
    Station,
    StopEvent,
    TimetableSlot,
)
from smart_train_finder.domain.timetable_time import (
    PROVIDER_TIMEZONE,
    minutes_between,
    next_civil_hour,
    to_civil_hour,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from smart_train_finder.domain.ports import StationResolver, TimetableRepository


class JourneySearchService:
    """Finds itineraries between two stations along a fixed corridor."""

    def __init__(
        self,
        timetable_repository: "TimetableRepository",
        station_resolver: "StationResolver",
        transfer_stations: tuple[str, ...] | list[str],
        settings: JourneySearchSettings | None = None,
        timezone: "ZoneInfo" = PROVIDER_TIMEZONE,
    ) -> None:
        """Initialize the search service.

        Args:
            timetable_repository: Source of hourly timetable slots.
            station_resolver: Resolves station names to provider ids.
            transfer_stations: Station names that mark a train as heading the
                right way; the destination name is always added.
            settings: Search bounds; defaults apply when omitted.
            timezone: Provider timezone the timetable hours are expressed in.
        """
        self._timetable_repository = timetable_repository
        self._station_resolver = station_resolver
        self._transfer_stations = tuple(transfer_stations)
        self._settings = settings or JourneySearchSettings()
        self._timezone = timezone

    @property
    def settings(self) -> JourneySearchSettings:
        """Search bounds in effect."""
        return self._settings

    async def find_journeys(
        self,
        origin: Station,
        destination: Station,
        start: datetime,
        max_transfers: int = 1,
        max_stops: int = 20,
        max_duration_minutes: int = 960,
        priority: RequestPriority = RequestPriority.INTERACTIVE,
    ) -> list[Itinerary] | None:
        """Find itineraries from origin to destination departing from ``start`` on.

        Args:
            origin: Station to depart from.
            destination: Station to arrive at.
            start: Earliest departure instant (timezone-aware).
            max_transfers: Maximum number of train changes.
            max_stops: Maximum number of legs.
            max_duration_minutes: Maximum time from first departure to arrival.
            priority: Priority class of the provider requests issued.

        Returns:
            Itineraries in discovery order, or None if none were found.
        """
        start_date, start_hour = to_civil_hour(start, self._timezone)
        permitted = frozenset((*self._transfer_stations, destination.name))

        queue: deque[SearchNode] = deque(
            [
                SearchNode(
                    station=origin,
                    train_id=None,
                    legs=(),
                    transfers=0,
                    arrival=None,
                    start=None,
                )
            ]
        )
        visited: set[tuple[str, str, datetime | None]] = set()
        results: list[Itinerary] = []

        while queue:
            if len(results) >= self._settings.max_results:
                logger.debug(f"Reached {len(results)} journeys, stopping search")
                break

            node = queue.popleft()

            if len(node.legs) > max_stops:
                continue
            if node.start and node.arrival:
                if minutes_between(node.start, node.arrival) > max_duration_minutes:
                    continue

            if node.visited_key in visited:
                continue
            visited.add(node.visited_key)

            if node.station.id == destination.id:
                itinerary = await self._complete_itinerary(
                    node, start_date, start_hour, priority
                )
                if itinerary is not None:
                    results.append(itinerary)
                continue

            if node.transfers > max_transfers:
                continue

            queue.extend(
                await self._expand(node, start_date, start_hour, permitted, max_transfers, priority)
            )

        if not results:
            logger.info(f"No journey found from {origin.name} to {destination.name}")
            return None

        logger.info(f"Journeys found from {origin.name} to {destination.name}: {len(results)}")
        return results

    def _query_hour(self, node: SearchNode, start_date: date, start_hour: int) -> tuple[date, int]:
        """Civil hour whose timetable is consulted for a node."""
        if node.arrival is not None:
            return to_civil_hour(node.arrival, self._timezone)
        return start_date, start_hour

    async def _fetch_slot_with_train(
        self,
        station_id: str,
        civil_date: date,
        hour: int,
        train_id: str | None,
        priority: RequestPriority,
    ) -> TimetableSlot | None:
        """Fetch the slot in which the given train calls at the station.

        Without a train (at the origin) the requested hour is returned as is.
        Otherwise later hours are tried until the train shows up; the search
        gives up once it is still missing more than ``max_lookahead_hours``
        after the requested hour.
        """
        if train_id is None:
            return await self._timetable_repository.get_slot(
                station_id, civil_date, hour, priority
            )

        for _ in range(self._settings.max_lookahead_hours + 2):
            slot = await self._timetable_repository.get_slot(
                station_id, civil_date, hour, priority
            )
            if slot is not None and slot.contains_train(train_id):
                return slot
            civil_date, hour = next_civil_hour(civil_date, hour)

        logger.debug(f"Train {train_id} not found at {station_id} within lookahead")
        return None

    async def _complete_itinerary(
        self,
        node: SearchNode,
        start_date: date,
        start_hour: int,
        priority: RequestPriority,
    ) -> Itinerary | None:
        """Resolve the final arrival time of a node at the destination."""
        if not node.legs:
            return None

        legs = node.legs
        civil_date, hour = self._query_hour(node, start_date, start_hour)
        slot = await self._fetch_slot_with_train(
            node.station.id, civil_date, hour, node.train_id, priority
        )
        event = slot.find_train(node.train_id) if slot is not None else None
        if event is not None and event.arrival is not None:
            last_leg = legs[-1]
            legs = (
                *legs[:-1],
                Leg(
                    train_id=last_leg.train_id,
                    train_type=last_leg.train_type,
                    origin=last_leg.origin,
                    destination=last_leg.destination,
                    departure=last_leg.departure,
                    arrival=event.arrival,
                ),
            )

        return Itinerary(
            legs=legs,
            transfers=node.transfers,
            start=node.start or legs[0].departure,
            arrival=legs[-1].arrival,
        )

    async def _expand(
        self,
        node: SearchNode,
        start_date: date,
        start_hour: int,
        permitted: frozenset[str],
        max_transfers: int,
        priority: RequestPriority,
    ) -> list[SearchNode]:
        """Build the child nodes reachable from a node."""
        civil_date, hour = self._query_hour(node, start_date, start_hour)
        slot = await self._fetch_slot_with_train(
            node.station.id, civil_date, hour, node.train_id, priority
        )
        if slot is None:
            return []

        visited_names = node.visited_station_names()
        current_train = slot.find_train(node.train_id)
        current_arrival = current_train.arrival if current_train is not None else None

        events = list(slot.stop_events)
        if node.train_id is not None and current_arrival is not None:
            events.extend(
                await self._connecting_events(slot, node.train_id, current_arrival, priority)
            )

        children: list[SearchNode] = []
        for event in events:
            if event.departure is None:
                continue
            if any(name in visited_names for name in event.planned_path):
                continue
            if not any(name in permitted for name in event.planned_path):
                continue

            transfers = self._transfers_after_boarding(
                node, event, current_arrival, max_transfers
            )
            if transfers is None:
                continue

            for next_name in event.planned_path:
                next_id = await self._station_resolver.resolve(next_name, priority)
                if not next_id:
                    continue

                leg = Leg(
                    train_id=event.train_id,
                    train_type=event.category,
                    origin=node.station,
                    destination=Station(id=next_id, name=next_name),
                    departure=event.departure,
                )
                children.append(
                    SearchNode(
                        station=leg.destination,
                        train_id=event.train_id,
                        legs=(*node.legs, leg),
                        transfers=transfers,
                        arrival=event.departure,
                        start=node.start or event.departure,
                    )
                )

        return children

    async def _connecting_events(
        self,
        slot: TimetableSlot,
        train_id: str,
        arrival: datetime,
        priority: RequestPriority,
    ) -> list[StopEvent]:
        """Stop events of the hours after ``slot`` that fall within the transfer window.

        A train arriving at 10:40 may connect to one leaving at 11:10, which
        the provider lists in the next hour's timetable.
        """
        window_end = arrival + timedelta(minutes=self._settings.max_transfer_wait_minutes)
        last_hour = to_civil_hour(window_end, self._timezone)

        seen = {(event.train_id, event.departure) for event in slot.stop_events}
        events: list[StopEvent] = []
        civil_date, hour = slot.civil_date, slot.hour
        while (civil_date, hour) < last_hour:
            civil_date, hour = next_civil_hour(civil_date, hour)
            later_slot = await self._timetable_repository.get_slot(
                slot.station_id, civil_date, hour, priority
            )
            if later_slot is None:
                continue
            for event in later_slot.stop_events:
                key = (event.train_id, event.departure)
                if event.train_id == train_id or key in seen:
                    continue
                seen.add(key)
                events.append(event)
        return events

    def _transfers_after_boarding(
        self,
        node: SearchNode,
        event: StopEvent,
        current_arrival: datetime | None,
        max_transfers: int,
    ) -> int | None:
        """Transfer count after boarding the event's train, or None if not allowed."""
        departure = event.departure
        if departure is None:
            return None

        if node.train_id is None or node.train_id == event.train_id:
            # Boarding at the origin or staying on the same train
            if current_arrival is not None and departure < current_arrival:
                return None
            return node.transfers

        # Changing trains needs a known arrival to check the connection against
        if current_arrival is None or departure <= current_arrival:
            return None
        wait_minutes = (departure - current_arrival).total_seconds() / 60
        if wait_minutes > self._settings.max_transfer_wait_minutes:
            return None

        transfers = node.transfers + 1
        if transfers > max_transfers:
            return None
        return transfers
