"""DB station resolver adapter using the Timetables station lookup."""

import logging
import time
from collections.abc import Callable
from datetime import timedelta
from functools import partial

from smart_train_finder.adapters.cache.inflight_cache import InFlightCache
from smart_train_finder.adapters.db_timetables.http_client import DbTimetablesHttpClient
from smart_train_finder.adapters.db_timetables.timetable_parser import TimetableParser
from smart_train_finder.domain.exceptions import TimetableParseError
from smart_train_finder.domain.models.request_priority import RequestPriority
from smart_train_finder.domain.models.station import Station
from smart_train_finder.domain.ports.station_resolver import StationResolver

logger = logging.getLogger(__name__)

DEFAULT_CACHE_LIFETIME = timedelta(days=1)


class DbStationResolver(StationResolver):
    """Resolves station names to EVA numbers, caching hits and misses.

    Unknown names are cached as None so doomed lookups are not repeated. The
    whole cache is dropped once its lifetime has elapsed, which lets
    corrections on the provider side come through.
    """

    def __init__(
        self,
        http_client: DbTimetablesHttpClient,
        cache_lifetime: timedelta = DEFAULT_CACHE_LIFETIME,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the resolver.

        Args:
            http_client: Rate-limited client for the Timetables API.
            cache_lifetime: How long resolved names are kept.
            clock: Monotonic clock in seconds.
        """
        self._http_client = http_client
        self._cache_lifetime_seconds = cache_lifetime.total_seconds()
        self._clock = clock
        self._cache: InFlightCache[str, str] = InFlightCache("station", cache_none=True)
        self._epoch_started = clock()

    async def resolve(
        self, name: str, priority: RequestPriority = RequestPriority.INTERACTIVE
    ) -> str | None:
        """Resolve a station name to its EVA number.

        Args:
            name: Station name, matched case-insensitively.
            priority: Priority class used if the name has to be looked up.

        Returns:
            EVA number, or None if the station could not be resolved.
        """
        name = name.strip() if name else ""
        if not name:
            return None

        self._expire_if_due()
        key = name.lower()
        return await self._cache.get_or_populate(key, partial(self._lookup, name, priority))

    def clear(self) -> None:
        """Forget every cached resolution and start a new cache epoch."""
        logger.info(f"Clearing {len(self._cache)} cached station resolution(s)")
        self._cache.clear()
        self._epoch_started = self._clock()

    def _expire_if_due(self) -> None:
        if self._clock() - self._epoch_started >= self._cache_lifetime_seconds:
            self.clear()

    async def _lookup(self, name: str, priority: RequestPriority) -> str | None:
        xml_text = await self._http_client.search_stations(name, priority)
        if xml_text is None:
            logger.warning(f"Station lookup failed for '{name}'")
            return None

        try:
            candidates = TimetableParser.parse_stations(xml_text)
        except TimetableParseError as e:
            logger.error(f"Failed to parse station lookup for '{name}': {e}")
            return None

        station = self._select_candidate(candidates, name)
        if station is None:
            logger.warning(f"No station found for '{name}'")
            return None

        logger.debug(f"Resolved '{name}' to {station.name} ({station.id})")
        return station.id

    @staticmethod
    def _select_candidate(candidates: list[Station], name: str) -> Station | None:
        """Prefer an exact case-insensitive name match, else the first candidate."""
        if not candidates:
            return None
        name_lower = name.lower()
        for station in candidates:
            if station.name.lower() == name_lower:
                return station
        return candidates[0]
