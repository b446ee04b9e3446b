"""Trip query limits domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TripQueryLimits:
    """Bounds applied to every interactive trip search."""

    max_transfers: int = 4
    max_stops: int = 12
    max_duration_minutes: int = 960
