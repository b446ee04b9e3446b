"""Cache warming settings domain model."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class CacheWarmingSettings:
    """How far around now the timetable cache is kept populated."""

    sweep_behind_hours: int = 10
    sweep_ahead_hours: int = 18
    max_transfers: int = 3
    staleness: timedelta = timedelta(hours=13)
    both_directions: bool = False  # also sweep destination -> origin
