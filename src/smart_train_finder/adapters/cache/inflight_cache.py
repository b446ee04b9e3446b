"""In-memory cache that coalesces concurrent lookups of the same key."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Hashable
from functools import partial
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class InFlightCache(Generic[K, V]):
    """Get-or-populate cache whose entries are the populating tasks themselves.

    An entry is absent, pending (task running) or resolved (task done). Every
    caller asking for a pending key awaits the same task, so one key never
    triggers more than one populate call at a time. Results of None are kept
    only when ``cache_none`` is set; failed or cancelled populations are
    always dropped so a later call can retry.
    """

    def __init__(self, name: str, cache_none: bool = False) -> None:
        """Initialize the cache.

        Args:
            name: Name of the cache (for logging).
            cache_none: Keep None results as negative cache entries.
        """
        self.name = name
        self.cache_none = cache_none
        self._entries: dict[K, asyncio.Task[V | None]] = {}

    async def get_or_populate(
        self, key: K, populate: Callable[[], Coroutine[Any, Any, V | None]]
    ) -> V | None:
        """Return the cached value for key, populating it on first request.

        Args:
            key: Cache key.
            populate: Coroutine factory producing the value; only called on a miss.

        Returns:
            The cached or freshly populated value.
        """
        entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"{self.name}: miss for {key}")
            entry = asyncio.ensure_future(populate())
            self._entries[key] = entry
            entry.add_done_callback(partial(self._on_populated, key))
        else:
            logger.debug(f"{self.name}: hit for {key} (pending: {not entry.done()})")

        # A cancelled caller must not cancel the population shared with others
        return await asyncio.shield(entry)

    def _on_populated(self, key: K, task: asyncio.Task[V | None]) -> None:
        """Drop entries that should not stay cached."""
        if task.cancelled() or task.exception() is not None:
            keep = False
        else:
            keep = task.result() is not None or self.cache_none

        if not keep and self._entries.get(key) is task:
            del self._entries[key]

    def evict(self, predicate: Callable[[K], bool]) -> int:
        """Remove every entry whose key matches the predicate.

        Returns:
            Number of removed entries.
        """
        stale_keys = [key for key in self._entries if predicate(key)]
        for key in stale_keys:
            del self._entries[key]
        return len(stale_keys)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
