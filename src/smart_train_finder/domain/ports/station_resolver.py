"""Station resolver port."""

from typing import Protocol

from smart_train_finder.domain.models.request_priority import RequestPriority


class StationResolver(Protocol):
    """Port for turning station names into provider identifiers."""

    async def resolve(
        self, name: str, priority: RequestPriority = RequestPriority.INTERACTIVE
    ) -> str | None:
        """Resolve a station name to its provider id, or None if unknown."""
        ...
