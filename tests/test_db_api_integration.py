"""Integration tests against the live DB Timetables API.

Skipped unless DB_CLIENT_ID and DB_API_KEY are set.
"""

import os
from datetime import UTC, datetime, timedelta

import aiohttp
import pytest

from smart_train_finder.adapters.api_rate_limiter import ApiRateLimiter
from smart_train_finder.adapters.db_timetables import (
    DbStationResolver,
    DbTimetableRepository,
    DbTimetablesHttpClient,
)
from smart_train_finder.domain.timetable_time import to_civil_hour

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (os.getenv("DB_CLIENT_ID") and os.getenv("DB_API_KEY")),
        reason="DB API credentials not configured",
    ),
]


@pytest.fixture(autouse=True)
def reset_rate_limiters() -> None:
    """Reset the shared rate limiters before each test."""
    ApiRateLimiter._instances.clear()
    ApiRateLimiter._registry_lock = None


def _client(session: aiohttp.ClientSession) -> DbTimetablesHttpClient:
    return DbTimetablesHttpClient(
        session=session,
        client_id=os.environ["DB_CLIENT_ID"],
        api_key=os.environ["DB_API_KEY"],
    )


@pytest.mark.asyncio
async def test_resolves_hamburg_hbf() -> None:
    """Given live credentials, when resolving Hamburg Hbf, then its EVA number is returned."""
    async with aiohttp.ClientSession() as session:
        resolver = DbStationResolver(_client(session))

        assert await resolver.resolve("Hamburg Hbf") == "8002549"


@pytest.mark.asyncio
async def test_fetches_next_hour_at_hamburg_hbf() -> None:
    """Given live credentials, when fetching the next hour, then departures with paths are parsed."""
    civil_date, hour = to_civil_hour(datetime.now(UTC) + timedelta(hours=1))

    async with aiohttp.ClientSession() as session:
        repository = DbTimetableRepository(_client(session))
        slot = await repository.get_slot("8002549", civil_date, hour)

    assert slot is not None
    assert any(event.planned_path for event in slot.stop_events)
