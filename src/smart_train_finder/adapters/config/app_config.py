"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from smart_train_finder.adapters.db_timetables.constants import (
    DB_API_MIN_DELAY_SECONDS,
    DB_TIMETABLES_BASE_URL,
)


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # DB Timetables API configuration
    db_client_id: str = Field(default="", description="DB API Marketplace client id")
    db_api_key: str = Field(default="", description="DB API Marketplace API key")
    db_api_base_url: str = Field(
        default=DB_TIMETABLES_BASE_URL, description="Base URL of the DB Timetables API"
    )
    db_api_min_delay_seconds: float = Field(
        default=DB_API_MIN_DELAY_SECONDS,
        ge=0,
        description="Minimum delay between two DB API requests in seconds",
    )
    timezone: str = Field(
        default="Europe/Berlin",
        description="Civil timezone of the timetable provider (IANA timezone name)",
    )

    # Query limits for interactive searches
    max_transfers: int = Field(default=4, ge=0, description="Maximum number of train changes")
    max_stops: int = Field(default=12, ge=1, description="Maximum number of legs per journey")
    max_duration_minutes: int = Field(
        default=960, ge=1, description="Maximum journey duration in minutes"
    )

    # Search engine bounds
    max_lookahead_hours: int = Field(
        default=3,
        ge=0,
        description="Hours past the query hour after which the train being ridden is given up",
    )
    max_transfer_wait_minutes: int = Field(
        default=60, ge=0, description="Maximum wait between two trains at a transfer"
    )
    max_results: int = Field(
        default=60, ge=1, description="Search stops after this many journeys were found"
    )

    # Cache configuration
    staleness_hours: int = Field(
        default=13, ge=0, description="Hours a past timetable slot stays cached"
    )
    station_cache_lifetime_hours: int = Field(
        default=24, ge=1, description="Hours before all cached station resolutions are dropped"
    )

    # Cache warming configuration
    sweep_behind_hours: int = Field(
        default=10, ge=0, description="Hours before now covered by the start-up sweep"
    )
    sweep_ahead_hours: int = Field(
        default=18, ge=0, description="Hours after now kept warm in the cache"
    )
    warm_max_transfers: int = Field(
        default=3, ge=0, description="Maximum number of train changes for warming searches"
    )
    warm_both_directions: bool = Field(
        default=False, description="Also warm the cache for the return direction"
    )

    # TOML config file path holding the corridor definition
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file with the corridor stations",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA timezone name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @property
    def zone_info(self) -> ZoneInfo:
        """Provider timezone as a ZoneInfo object."""
        return ZoneInfo(self.timezone)

    @property
    def staleness(self) -> timedelta:
        """How long a past timetable slot stays cached."""
        return timedelta(hours=self.staleness_hours)

    @property
    def station_cache_lifetime(self) -> timedelta:
        """How long station resolutions stay cached."""
        return timedelta(hours=self.station_cache_lifetime_hours)

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load the corridor configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_corridor_config(self) -> dict[str, Any]:
        """Parse and return the [corridor] table from the TOML file.

        Raises:
            ValueError: If the file has no [corridor] table.
        """
        toml_data = self._load_toml_data()

        corridor = toml_data.get("corridor")
        if not isinstance(corridor, dict):
            raise ValueError("TOML config must contain a [corridor] table")
        return corridor
