"""Stop event domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StopEvent:
    """One train's scheduled stop at a station."""

    train_id: str
    category: str | None  # e.g. "ICE", "IC", "RE"
    arrival: datetime | None
    departure: datetime | None
    planned_path: tuple[str, ...] = ()  # station names after this stop, in travel order
