"""Wiring of adapters and application services."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from smart_train_finder.adapters.config import AppConfig
from smart_train_finder.adapters.db_timetables import (
    DbStationResolver,
    DbTimetableRepository,
    DbTimetablesHttpClient,
)
from smart_train_finder.application.services import (
    CacheWarmer,
    JourneySearchService,
    TripQueryService,
)
from smart_train_finder.domain.models import (
    CacheWarmingSettings,
    Corridor,
    JourneySearchSettings,
    TripQueryLimits,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Services:
    """Fully wired services sharing one timetable cache and station resolver."""

    timetable_repository: DbTimetableRepository
    station_resolver: DbStationResolver
    journey_search: JourneySearchService
    trip_query: TripQueryService
    cache_warmer: CacheWarmer


def create_services(config: AppConfig, corridor: Corridor, session: "ClientSession") -> Services:
    """Create all services for one process.

    Args:
        config: Application configuration.
        corridor: Corridor to search along.
        session: aiohttp session used for every provider request.
    """
    if not config.db_client_id or not config.db_api_key:
        logger.warning("DB_CLIENT_ID / DB_API_KEY not set, provider requests will be rejected")

    timezone = config.zone_info
    http_client = DbTimetablesHttpClient(
        session=session,
        client_id=config.db_client_id,
        api_key=config.db_api_key,
        base_url=config.db_api_base_url,
        min_delay_seconds=config.db_api_min_delay_seconds,
    )
    timetable_repository = DbTimetableRepository(http_client, timezone=timezone)
    station_resolver = DbStationResolver(
        http_client, cache_lifetime=config.station_cache_lifetime
    )

    journey_search = JourneySearchService(
        timetable_repository,
        station_resolver,
        corridor.transfer_stations,
        settings=JourneySearchSettings(
            max_lookahead_hours=config.max_lookahead_hours,
            max_transfer_wait_minutes=config.max_transfer_wait_minutes,
            max_results=config.max_results,
        ),
        timezone=timezone,
    )
    trip_query = TripQueryService(
        journey_search,
        corridor,
        limits=TripQueryLimits(
            max_transfers=config.max_transfers,
            max_stops=config.max_stops,
            max_duration_minutes=config.max_duration_minutes,
        ),
        timezone=timezone,
    )
    cache_warmer = CacheWarmer(
        journey_search,
        timetable_repository,
        corridor,
        settings=CacheWarmingSettings(
            sweep_behind_hours=config.sweep_behind_hours,
            sweep_ahead_hours=config.sweep_ahead_hours,
            max_transfers=config.warm_max_transfers,
            staleness=config.staleness,
            both_directions=config.warm_both_directions,
        ),
    )

    return Services(
        timetable_repository=timetable_repository,
        station_resolver=station_resolver,
        journey_search=journey_search,
        trip_query=trip_query,
        cache_warmer=cache_warmer,
    )
