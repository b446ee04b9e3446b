"""Trip sort order domain model."""

from enum import StrEnum


class TripSortOrder(StrEnum):
    """Ways a list of trips can be ordered for display."""

    EARLIEST = "earliest"  # by departure
    FASTEST = "fastest"  # by total duration
    FEWEST_CHANGES = "fewest_changes"
