"""Search node domain model."""

from dataclasses import dataclass
from datetime import datetime

from .leg import Leg
from .station import Station


@dataclass(frozen=True)
class SearchNode:
    """A partial journey waiting to be explored.

    ``arrival`` is the departure instant of the train that brought the
    traveller here; it is the lower bound used to pick the next timetable hour.
    It is None at the origin, as is ``start`` until the first train is boarded.
    """

    station: Station
    train_id: str | None
    legs: tuple[Leg, ...]
    transfers: int
    arrival: datetime | None
    start: datetime | None

    @property
    def visited_key(self) -> tuple[str, str, datetime | None]:
        """Identity used to avoid exploring the same state twice."""
        return self.station.id, self.train_id or "", self.arrival

    def visited_station_names(self) -> set[str]:
        """Names of all stations already on this path, including the current one."""
        names = {self.station.name}
        for leg in self.legs:
            names.add(leg.origin.name)
            names.add(leg.destination.name)
        names.discard("")
        return names
