"""Corridor domain model."""

from dataclasses import dataclass

from .station import Station


@dataclass(frozen=True)
class Corridor:
    """The fixed station pair served, plus the stations a sensible path may use.

    ``transfer_stations`` doubles as the direction filter: a train is only
    worth boarding if its remaining route passes one of these stations or the
    destination itself.
    """

    origin: Station
    destination: Station
    transfer_stations: tuple[str, ...]

    def endpoints(self, outbound: bool) -> tuple[Station, Station]:
        """Return (origin, destination) for the requested travel direction."""
        if outbound:
            return self.origin, self.destination
        return self.destination, self.origin
