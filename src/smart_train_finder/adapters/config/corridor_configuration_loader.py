"""Corridor configuration loader."""

from typing import Any

from smart_train_finder.adapters.config.app_config import AppConfig
from smart_train_finder.domain.exceptions import CorridorConfigurationError
from smart_train_finder.domain.models.corridor import Corridor
from smart_train_finder.domain.models.station import Station


class CorridorConfigurationLoader:
    """Loads the corridor (endpoint stations and transfer stations) from app config."""

    @staticmethod
    def load_station_from_data(station_data: Any, role: str) -> Station:
        """Load one endpoint station from its TOML table."""
        if not isinstance(station_data, dict):
            raise CorridorConfigurationError(f"Corridor {role} must be a table")

        station_id = station_data.get("station_id")
        station_name = station_data.get("station_name")
        if not station_id or not station_name:
            raise CorridorConfigurationError(
                f"Corridor {role} needs both 'station_id' and 'station_name'"
            )
        return Station(id=str(station_id), name=str(station_name))

    @staticmethod
    def load(config: AppConfig) -> Corridor:
        """Load the corridor from app config."""
        corridor_data = config.get_corridor_config()

        origin = CorridorConfigurationLoader.load_station_from_data(
            corridor_data.get("origin"), "origin"
        )
        destination = CorridorConfigurationLoader.load_station_from_data(
            corridor_data.get("destination"), "destination"
        )
        if origin.id == destination.id:
            raise CorridorConfigurationError("Corridor origin and destination must differ")

        transfer_stations = corridor_data.get("transfer_stations", [])
        if not isinstance(transfer_stations, list):
            raise CorridorConfigurationError("Corridor 'transfer_stations' must be a list")

        return Corridor(
            origin=origin,
            destination=destination,
            transfer_stations=tuple(str(name) for name in transfer_stations if name),
        )
