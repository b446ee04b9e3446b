"""Journey search settings domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class JourneySearchSettings:
    """Fixed bounds of the journey search that are not part of a single query."""

    max_lookahead_hours: int = 3  # lookahead gives up only once this bound is exceeded
    max_transfer_wait_minutes: int = 60
    max_results: int = 60  # search stops once this many itineraries were found
