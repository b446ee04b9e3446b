"""Protocol for background cache warming."""

from typing import Protocol


class CacheWarmerProtocol(Protocol):
    """Protocol for keeping the timetable cache populated ahead of demand."""

    async def start(self) -> None:
        """Start the cache warmer."""
        ...

    async def stop(self) -> None:
        """Stop the cache warmer."""
        ...
