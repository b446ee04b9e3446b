"""Leg domain model."""

from dataclasses import dataclass
from datetime import datetime

from .station import Station


@dataclass(frozen=True)
class Leg:
    """One ride on a single train between two stations of a journey."""

    train_id: str
    train_type: str | None
    origin: Station
    destination: Station
    departure: datetime
    arrival: datetime | None = None  # only known once the train's arrival record is looked up
