"""Background cache warming for the timetable cache."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from smart_train_finder.domain.contracts.cache_warmer import CacheWarmerProtocol
from smart_train_finder.domain.models import CacheWarmingSettings, RequestPriority
from smart_train_finder.domain.timetable_time import truncate_to_hour

if TYPE_CHECKING:
    from smart_train_finder.application.services.journey_search_service import (
        JourneySearchService,
    )
    from smart_train_finder.domain.contracts.timetable_cache import TimetableCacheProtocol
    from smart_train_finder.domain.models import Corridor

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CacheWarmer(CacheWarmerProtocol):
    """Keeps the timetable cache filled by running background searches.

    On start it sweeps every hour from a little before now to
    ``sweep_ahead_hours`` ahead. Afterwards, at the top of every hour, it drops
    stale slots and sweeps the hour that just entered the window.
    """

    def __init__(
        self,
        journey_search: JourneySearchService,
        timetable_cache: TimetableCacheProtocol,
        corridor: Corridor,
        settings: CacheWarmingSettings | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the cache warmer.

        Args:
            journey_search: Search service used to pull timetables into the cache.
            timetable_cache: Cache to prune.
            corridor: Stations to sweep between.
            settings: Sweep window and limits; defaults apply when omitted.
            clock: Returns the current aware instant.
        """
        self.journey_search = journey_search
        self.timetable_cache = timetable_cache
        self.corridor = corridor
        self.settings = settings or CacheWarmingSettings()
        self._clock = clock
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start the cache warmer."""
        if self._task is not None and not self._task.done():
            logger.warning("Cache warmer already running")
            return

        self._task = asyncio.create_task(self._run_loop())
        logger.info("Started cache warmer task")

    async def stop(self) -> None:
        """Stop the cache warmer."""
        if self._task and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            logger.info("Stopped cache warmer")

    async def warm_up(self, now: datetime | None = None) -> int:
        """Sweep every hour of the warming window.

        Args:
            now: Current instant; the clock is used when omitted.

        Returns:
            Number of sweeps that found at least one journey.
        """
        now = now or self._clock()
        first = truncate_to_hour(now - timedelta(hours=self.settings.sweep_behind_hours))
        last = now + timedelta(hours=self.settings.sweep_ahead_hours)

        sweep_starts = []
        current = first
        while current <= last:
            sweep_starts.append(current)
            current += timedelta(hours=1)

        logger.info(
            f"Warming timetable cache for {len(sweep_starts)} hour(s) "
            f"from {first.isoformat()} to {last.isoformat()}"
        )
        outcomes = await asyncio.gather(
            *(self._sweep(start) for start in sweep_starts), return_exceptions=True
        )

        confirmed = 0
        for start, outcome in zip(sweep_starts, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.error(f"Cache warming sweep for {start.isoformat()} failed: {outcome!r}")
            else:
                confirmed += outcome

        logger.info(
            f"Cache warm-up finished: {confirmed} sweep(s) with journeys, "
            f"{len(self.timetable_cache)} slot(s) cached"
        )
        return confirmed

    async def refresh(self, now: datetime | None = None) -> int:
        """Evict stale slots and sweep the newest hour of the window.

        Args:
            now: Current instant; the clock is used when omitted.

        Returns:
            Number of sweeps that found at least one journey.
        """
        now = now or self._clock()
        self.timetable_cache.evict_stale(now, self.settings.staleness)

        newest = truncate_to_hour(now + timedelta(hours=self.settings.sweep_ahead_hours))
        logger.info(f"Refreshing timetable cache for {newest.isoformat()}")
        return await self._sweep(newest)

    async def _sweep(self, start: datetime) -> int:
        """Run background searches for one start hour.

        Returns:
            Number of directions that produced journeys. A search without
            results still fills the cache but does not count as confirmation.
        """
        directions = [True, False] if self.settings.both_directions else [True]

        confirmed = 0
        for outbound in directions:
            origin, destination = self.corridor.endpoints(outbound)
            journeys = await self.journey_search.find_journeys(
                origin,
                destination,
                start,
                max_transfers=self.settings.max_transfers,
                priority=RequestPriority.BACKGROUND,
            )
            if journeys is None:
                logger.debug(f"Sweep {origin.name} -> {destination.name} at {start} found nothing")
            else:
                confirmed += 1
        return confirmed

    def _seconds_until_next_hour(self) -> float:
        now = self._clock()
        next_hour = truncate_to_hour(now) + timedelta(hours=1)
        return (next_hour - now).total_seconds()

    async def _run_loop(self) -> None:
        """Warm up once, then refresh at the top of every hour."""
        try:
            await self.warm_up()
            while True:
                await asyncio.sleep(self._seconds_until_next_hour())
                try:
                    await self.refresh()
                except Exception:
                    # Keep the hourly schedule alive; the next tick retries
                    logger.exception("Cache refresh failed")
        except asyncio.CancelledError:
            logger.info("Cache warmer cancelled")
            raise
