"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """A station as known to the timetable provider."""

    id: str  # EVA number, e.g. "8002549"
    name: str
