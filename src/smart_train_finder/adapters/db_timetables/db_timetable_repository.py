"""DB timetable repository adapter with an hour-slot cache.

Planned timetable data never changes once published, so a fetched slot stays
cached until its hour has receded into the past.
"""

import logging
from datetime import date, datetime, timedelta
from functools import partial
from zoneinfo import ZoneInfo

from smart_train_finder.adapters.cache.inflight_cache import InFlightCache
from smart_train_finder.adapters.db_timetables.http_client import DbTimetablesHttpClient
from smart_train_finder.adapters.db_timetables.timetable_parser import TimetableParser
from smart_train_finder.domain.contracts.timetable_cache import TimetableCacheProtocol
from smart_train_finder.domain.exceptions import TimetableParseError
from smart_train_finder.domain.models.request_priority import RequestPriority
from smart_train_finder.domain.models.slot_key import SlotKey
from smart_train_finder.domain.models.timetable_slot import TimetableSlot
from smart_train_finder.domain.timetable_time import PROVIDER_TIMEZONE, civil_hour_start

logger = logging.getLogger(__name__)


class DbTimetableRepository(TimetableCacheProtocol):
    """Caching adapter for planned timetable slots from the DB Timetables API."""

    def __init__(
        self, http_client: DbTimetablesHttpClient, timezone: ZoneInfo = PROVIDER_TIMEZONE
    ) -> None:
        """Initialize the repository.

        Args:
            http_client: Rate-limited client for the Timetables API.
            timezone: Provider timezone used for slot keys.
        """
        self._http_client = http_client
        self._timezone = timezone
        self._cache: InFlightCache[SlotKey, TimetableSlot] = InFlightCache("timetable")

    async def get_slot(
        self,
        station_id: str,
        civil_date: date,
        hour: int,
        priority: RequestPriority = RequestPriority.INTERACTIVE,
    ) -> TimetableSlot | None:
        """Get the planned stop events of a station for one civil hour.

        Concurrent requests for the same slot share a single API call. Failed
        fetches are not cached, so a later request retries.

        Args:
            station_id: EVA number of the station.
            civil_date: Provider-local date.
            hour: Provider-local hour (0-23).
            priority: Priority class used if the slot has to be fetched.

        Returns:
            TimetableSlot, or None if no data could be obtained.
        """
        key = SlotKey(station_id=station_id, civil_date=civil_date, hour=hour)
        return await self._cache.get_or_populate(key, partial(self._fetch_slot, key, priority))

    async def _fetch_slot(self, key: SlotKey, priority: RequestPriority) -> TimetableSlot | None:
        xml_text = await self._http_client.fetch_plan(
            key.station_id, key.civil_date, key.hour, priority
        )
        if xml_text is None:
            logger.debug(f"No timetable data for {key}")
            return None

        try:
            slot = TimetableParser.parse_timetable(
                xml_text, key.station_id, key.civil_date, key.hour, self._timezone
            )
        except TimetableParseError as e:
            logger.error(f"Failed to parse timetable for {key}: {e}")
            return None

        logger.debug(f"Fetched {len(slot.stop_events)} stop events for {key}")
        return slot

    def evict_stale(self, now: datetime, staleness: timedelta) -> int:
        """Drop slots whose civil hour began more than ``staleness`` before now.

        Args:
            now: Current instant (timezone-aware).
            staleness: How long a past slot is kept.

        Returns:
            Number of evicted slots.
        """
        threshold = now - staleness
        evicted = self._cache.evict(
            lambda key: civil_hour_start(key.civil_date, key.hour, self._timezone) < threshold
        )
        logger.info(f"Evicted {evicted} stale timetable slot(s), {len(self._cache)} remaining")
        return evicted

    def __len__(self) -> int:
        return len(self._cache)
