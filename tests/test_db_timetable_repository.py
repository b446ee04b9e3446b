"""Tests for the DB timetable repository and its HTTP client."""

import asyncio
from datetime import UTC, date, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from smart_train_finder.adapters.api_rate_limiter import ApiRateLimiter
from smart_train_finder.adapters.db_timetables import (
    DbTimetableRepository,
    DbTimetablesHttpClient,
)
from smart_train_finder.domain.models import RequestPriority

PLAN_XML = """<timetable station="Osnabrück Hbf">
  <s id="-111-2506071012-4">
    <tl c="IC"/>
    <ar pt="2506071010"/>
    <dp pt="2506071012" ppth="Münster(Westf)Hbf|Duisburg Hbf"/>
  </s>
</timetable>"""


def _http_client(return_value: str | None = PLAN_XML) -> MagicMock:
    client = MagicMock(spec=DbTimetablesHttpClient)
    client.fetch_plan = AsyncMock(return_value=return_value)
    return client


class TestDbTimetableRepository:
    """Tests for DbTimetableRepository."""

    @pytest.mark.asyncio
    async def test_get_slot_parses_fetched_plan(self) -> None:
        """Given a plan document, when getting a slot, then parsed stop events are returned."""
        client = _http_client()
        repository = DbTimetableRepository(client)

        slot = await repository.get_slot("8000294", date(2025, 6, 7), 10)

        assert slot is not None
        assert slot.stop_events[0].train_id == "111"
        client.fetch_plan.assert_awaited_once_with(
            "8000294", date(2025, 6, 7), 10, RequestPriority.INTERACTIVE
        )

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_fetch(self) -> None:
        """Given many concurrent requests for one slot, when fetched, then the API is called once."""
        client = _http_client()
        repository = DbTimetableRepository(client)

        slots = await asyncio.gather(
            *(repository.get_slot("8000294", date(2025, 6, 7), 10) for _ in range(10))
        )

        assert client.fetch_plan.await_count == 1
        assert all(slot is slots[0] for slot in slots)
        assert len(repository) == 1

    @pytest.mark.asyncio
    async def test_later_requests_are_served_from_cache(self) -> None:
        """Given a cached slot, when requested again, then no further call is made."""
        client = _http_client()
        repository = DbTimetableRepository(client)

        await repository.get_slot("8000294", date(2025, 6, 7), 10, RequestPriority.BACKGROUND)
        await repository.get_slot("8000294", date(2025, 6, 7), 10)

        client.fetch_plan.assert_awaited_once_with(
            "8000294", date(2025, 6, 7), 10, RequestPriority.BACKGROUND
        )

    @pytest.mark.asyncio
    async def test_failed_fetch_is_not_cached(self) -> None:
        """Given a failing fetch, when requested again, then the API is retried."""
        client = _http_client(return_value=None)
        repository = DbTimetableRepository(client)

        assert await repository.get_slot("8000294", date(2025, 6, 7), 10) is None
        assert await repository.get_slot("8000294", date(2025, 6, 7), 10) is None

        assert client.fetch_plan.await_count == 2
        assert len(repository) == 0

    @pytest.mark.asyncio
    async def test_unparseable_document_returns_none(self) -> None:
        """Given a document that is not a timetable, when getting a slot, then None."""
        client = _http_client(return_value="<error>quota</error>")
        repository = DbTimetableRepository(client)

        assert await repository.get_slot("8000294", date(2025, 6, 7), 10) is None
        assert len(repository) == 0

    @pytest.mark.asyncio
    async def test_evict_stale_drops_only_old_slots(self) -> None:
        """Given slots 14 and 2 hours old, when evicting with 13h staleness, then only the old one goes."""
        repository = DbTimetableRepository(_http_client())
        await repository.get_slot("8000294", date(2025, 6, 7), 0)
        await repository.get_slot("8000294", date(2025, 6, 7), 12)

        # 14:00 Berlin on 2025-06-07
        now = datetime(2025, 6, 7, 12, 0, tzinfo=UTC)
        evicted = repository.evict_stale(now, timedelta(hours=13))

        assert evicted == 1
        assert len(repository) == 1


class TestDbTimetablesHttpClient:
    """Tests for DbTimetablesHttpClient."""

    @pytest.fixture(autouse=True)
    def reset_rate_limiters(self) -> None:
        """Reset the shared rate limiters before each test."""
        ApiRateLimiter._instances.clear()
        ApiRateLimiter._registry_lock = None

    @staticmethod
    def _session(status: int = 200, text: str = PLAN_XML) -> MagicMock:
        response = MagicMock()
        response.status = status
        response.text = AsyncMock(return_value=text)
        response.headers = {}
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=None)
        session = MagicMock()
        session.get = MagicMock(return_value=context)
        return session

    @pytest.mark.asyncio
    async def test_fetch_plan_builds_url_and_headers(self) -> None:
        """Given credentials, when fetching a plan, then the documented URL and headers are used."""
        session = self._session()
        client = DbTimetablesHttpClient(
            session=session,
            client_id="client",
            api_key="secret",
            base_url="https://example.com/timetables/v1/",
            min_delay_seconds=0,
        )

        result = await client.fetch_plan("8002549", date(2025, 6, 7), 8)

        assert result == PLAN_XML
        url = session.get.call_args[0][0]
        headers = session.get.call_args[1]["headers"]
        assert url == "https://example.com/timetables/v1/plan/8002549/250607/08"
        assert headers["DB-Client-Id"] == "client"
        assert headers["DB-Api-Key"] == "secret"
        assert headers["Accept"] == "application/xml"

    @pytest.mark.asyncio
    async def test_search_stations_quotes_pattern(self) -> None:
        """Given a name with spaces and umlauts, when searching, then it is URL-encoded."""
        session = self._session(text="<stations/>")
        client = DbTimetablesHttpClient(
            session=session, base_url="https://example.com", min_delay_seconds=0
        )

        await client.search_stations("Münster(Westf) Hbf")

        url = session.get.call_args[0][0]
        assert url == "https://example.com/station/M%C3%BCnster%28Westf%29%20Hbf"

    @pytest.mark.asyncio
    async def test_non_200_status_returns_none(self) -> None:
        """Given a 429 response, when fetching, then None is returned."""
        client = DbTimetablesHttpClient(session=self._session(status=429), min_delay_seconds=0)

        assert await client.fetch_plan("8002549", date(2025, 6, 7), 8) is None

    @pytest.mark.asyncio
    async def test_network_error_returns_none(self) -> None:
        """Given a connection error, when fetching, then None is returned."""
        session = MagicMock()
        session.get = MagicMock(side_effect=aiohttp.ClientConnectionError("down"))
        client = DbTimetablesHttpClient(session=session, min_delay_seconds=0)

        assert await client.fetch_plan("8002549", date(2025, 6, 7), 8) is None

    @pytest.mark.asyncio
    async def test_without_session_returns_none(self) -> None:
        """Given no session, when fetching, then None is returned without a request."""
        client = DbTimetablesHttpClient()

        assert await client.search_stations("Hamburg Hbf") is None

    @pytest.mark.asyncio
    async def test_undecodable_body_returns_none(self) -> None:
        """Given a body that is not valid text, when fetching, then None is returned."""
        session = self._session()
        response = session.get.return_value.__aenter__.return_value
        response.text = AsyncMock(
            side_effect=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        )
        client = DbTimetablesHttpClient(session=session, min_delay_seconds=0)

        assert await client.fetch_plan("8002549", date(2025, 6, 7), 8) is None
