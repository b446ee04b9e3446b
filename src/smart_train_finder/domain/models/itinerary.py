"""Itinerary domain model."""

from dataclasses import dataclass
from datetime import datetime

from .leg import Leg


@dataclass(frozen=True)
class Itinerary:
    """A completed journey from origin to destination."""

    legs: tuple[Leg, ...]
    transfers: int
    start: datetime | None
    arrival: datetime | None

    @property
    def train_types(self) -> str:
        """Distinct train categories along the path, joined with '+'."""
        seen: list[str] = []
        for leg in self.legs:
            if leg.train_type and leg.train_type not in seen:
                seen.append(leg.train_type)
        return "+".join(seen)

    @property
    def duration_minutes(self) -> float | None:
        """Total travel time, if both ends are known."""
        if self.start is None or self.arrival is None:
            return None
        return (self.arrival - self.start).total_seconds() / 60
