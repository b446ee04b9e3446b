"""Rate limiter for outgoing API requests.

Provides one shared gate per API so every caller in the process, interactive
searches and background cache warming alike, respects the provider's limit.
Uses a minimum delay between requests; waiting requests are granted by
priority, first come first served within the same priority.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from typing import ClassVar

from smart_train_finder.domain.models.request_priority import RequestPriority

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Priority-aware rate limiter for outgoing API requests.

    Ensures a minimum delay between requests to a specific API. A single
    dispatcher task hands out permits, so a background request can hold up an
    interactive one by at most the permit already granted.
    """

    # Class-level registry of rate limiters by API name
    _instances: ClassVar[dict[str, ApiRateLimiter]] = {}
    _registry_lock: ClassVar[asyncio.Lock | None] = None

    def __init__(self, api_name: str, min_delay_seconds: float = 1.0) -> None:
        """Initialize the rate limiter.

        Args:
            api_name: Name of the API (for logging).
            min_delay_seconds: Minimum delay between requests in seconds.
        """
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._last_request_time: float = 0.0
        self._waiters: list[tuple[int, int, asyncio.Future[None]]] = []
        self._sequence = itertools.count()
        self._dispatcher: asyncio.Task[None] | None = None

    @classmethod
    async def get_instance(cls, api_name: str, min_delay_seconds: float = 1.0) -> ApiRateLimiter:
        """Get or create a rate limiter instance for an API.

        This ensures all calls to the same API share the same rate limiter.

        Args:
            api_name: Name of the API.
            min_delay_seconds: Minimum delay between requests in seconds.

        Returns:
            Shared ApiRateLimiter instance for the API.
        """
        # Lazy init the registry lock
        if cls._registry_lock is None:
            cls._registry_lock = asyncio.Lock()

        async with cls._registry_lock:
            if api_name not in cls._instances:
                cls._instances[api_name] = cls(api_name, min_delay_seconds)
                logger.info(
                    f"Created rate limiter for {api_name} with {min_delay_seconds}s minimum delay"
                )
            return cls._instances[api_name]

    @property
    def pending(self) -> int:
        """Number of requests currently waiting for a permit."""
        return sum(1 for _, _, future in self._waiters if not future.done())

    async def acquire(self, priority: RequestPriority = RequestPriority.INTERACTIVE) -> None:
        """Acquire permission to make a request.

        Blocks until enough time has passed since the last request and no
        higher-priority request is waiting.

        Args:
            priority: Priority class of the request.
        """
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        heapq.heappush(self._waiters, (-int(priority), next(self._sequence), future))

        if self._dispatcher is None or self._dispatcher.done():
            self._dispatcher = asyncio.create_task(self._dispatch())

        await future

    async def _dispatch(self) -> None:
        """Grant permits one at a time, honouring the minimum delay."""
        while self._waiters:
            wait_time = self.min_delay_seconds - (time.monotonic() - self._last_request_time)
            if wait_time > 0:
                logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                await asyncio.sleep(wait_time)

            # Pop after sleeping so requests queued meanwhile compete by priority
            while self._waiters:
                _, _, future = heapq.heappop(self._waiters)
                if not future.done():
                    self._last_request_time = time.monotonic()
                    future.set_result(None)
                    break
