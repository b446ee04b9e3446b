"""HTTP client for DB Timetables API requests."""

import logging
from datetime import date
from typing import TYPE_CHECKING
from urllib.parse import quote

import aiohttp

from smart_train_finder.adapters.api_rate_limiter import ApiRateLimiter
from smart_train_finder.adapters.api_request_logger import log_api_request
from smart_train_finder.adapters.db_timetables.constants import (
    ACCEPT_XML,
    API_KEY_HEADER,
    CLIENT_ID_HEADER,
    DB_API_MIN_DELAY_SECONDS,
    DB_TIMETABLES_API_NAME,
    DB_TIMETABLES_BASE_URL,
)
from smart_train_finder.domain.models.request_priority import RequestPriority
from smart_train_finder.domain.timetable_time import format_provider_date, format_provider_hour

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class DbTimetablesHttpClient:
    """HTTP client for the DB Timetables plan and station endpoints.

    Every request waits for the shared rate limiter first. Failures are logged
    and reported as None; callers never see HTTP or network exceptions.
    """

    def __init__(
        self,
        session: "ClientSession | None" = None,
        client_id: str = "",
        api_key: str = "",
        base_url: str = DB_TIMETABLES_BASE_URL,
        min_delay_seconds: float = DB_API_MIN_DELAY_SECONDS,
    ) -> None:
        """Initialize with optional aiohttp session and API credentials.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            client_id: DB API Marketplace client id.
            api_key: DB API Marketplace API key.
            base_url: Base URL of the Timetables API.
            min_delay_seconds: Minimum delay between two requests.
        """
        self._session = session
        self._client_id = client_id
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._min_delay_seconds = min_delay_seconds
        self._rate_limiter: ApiRateLimiter | None = None

    async def _get_rate_limiter(self) -> ApiRateLimiter:
        """Get the shared rate limiter for the Timetables API."""
        if self._rate_limiter is None:
            self._rate_limiter = await ApiRateLimiter.get_instance(
                DB_TIMETABLES_API_NAME, self._min_delay_seconds
            )
        return self._rate_limiter

    def _headers(self) -> dict[str, str]:
        return {
            CLIENT_ID_HEADER: self._client_id,
            API_KEY_HEADER: self._api_key,
            "Accept": ACCEPT_XML,
        }

    async def _log_error_response(self, response: "ClientResponse", url: str) -> None:
        """Log error response details."""
        error_text = await response.text()
        error_body = error_text[:300] if error_text else "(empty response body)"
        retry_after = response.headers.get("Retry-After")
        extra_info = f" [Retry-After: {retry_after}]" if retry_after else ""
        logger.warning(
            f"DB Timetables API returned status {response.status} for {url}: "
            f"{error_body}{extra_info}"
        )

    async def _get_xml(self, url: str, priority: RequestPriority) -> str | None:
        """GET a URL under the rate limit and return the XML body on success."""
        if not self._session:
            return None

        headers = self._headers()
        rate_limiter = await self._get_rate_limiter()
        await rate_limiter.acquire(priority)
        log_api_request("GET", url, headers=headers, priority=priority.name)

        try:
            async with self._session.get(url, headers=headers) as response:
                if response.status != 200:
                    await self._log_error_response(response, url)
                    return None
                return await response.text()
        except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as e:
            logger.warning(f"Error requesting {url}: {e!r}")
            return None

    async def fetch_plan(
        self,
        station_id: str,
        civil_date: date,
        hour: int,
        priority: RequestPriority = RequestPriority.INTERACTIVE,
    ) -> str | None:
        """Fetch the planned timetable of a station for one civil hour.

        Args:
            station_id: EVA number of the station.
            civil_date: Provider-local date.
            hour: Provider-local hour (0-23).
            priority: Priority class of the request.

        Returns:
            Raw XML document or None if the request failed.
        """
        url = (
            f"{self._base_url}/plan/{station_id}/"
            f"{format_provider_date(civil_date)}/{format_provider_hour(hour)}"
        )
        return await self._get_xml(url, priority)

    async def search_stations(
        self, pattern: str, priority: RequestPriority = RequestPriority.INTERACTIVE
    ) -> str | None:
        """Look up stations matching a name pattern.

        Args:
            pattern: Free-text station name.
            priority: Priority class of the request.

        Returns:
            Raw XML document or None if the request failed.
        """
        url = f"{self._base_url}/station/{quote(pattern, safe='')}"
        return await self._get_xml(url, priority)
