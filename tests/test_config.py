"""Tests for configuration adapter."""

from datetime import timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest

from smart_train_finder.adapters.config import AppConfig, CorridorConfigurationLoader
from smart_train_finder.domain.exceptions import CorridorConfigurationError

VALID_CORRIDOR = """
[corridor]
transfer_stations = ["Osnabrück Hbf", "Utrecht Centraal"]

[corridor.origin]
station_id = "8002549"
station_name = "Hamburg Hbf"

[corridor.destination]
station_id = 8400058
station_name = "Amsterdam Centraal"
"""


def _load_corridor_from(toml_content: str):
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False, encoding="utf-8") as f:
        f.write(toml_content)
        temp_path = f.name

    try:
        return CorridorConfigurationLoader.load(AppConfig(config_file=temp_path))
    finally:
        Path(temp_path).unlink()


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig()

    assert config.db_api_min_delay_seconds == 0.02
    assert config.max_transfers == 4
    assert config.max_stops == 12
    assert config.max_duration_minutes == 960
    assert config.max_lookahead_hours == 3
    assert config.max_transfer_wait_minutes == 60
    assert config.max_results == 60
    assert config.staleness == timedelta(hours=13)
    assert config.station_cache_lifetime == timedelta(days=1)
    assert config.sweep_behind_hours == 10
    assert config.sweep_ahead_hours == 18
    assert config.warm_max_transfers == 3
    assert config.warm_both_directions is False
    assert str(config.zone_info) == "Europe/Berlin"


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("DB_CLIENT_ID", "client")
    monkeypatch.setenv("DB_API_KEY", "secret")
    monkeypatch.setenv("MAX_TRANSFERS", "2")
    monkeypatch.setenv("WARM_BOTH_DIRECTIONS", "true")

    config = AppConfig()

    assert config.db_client_id == "client"
    assert config.db_api_key == "secret"
    assert config.max_transfers == 2
    assert config.warm_both_directions is True


def test_config_validates_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown timezone, when loading config, then validation error is raised."""
    monkeypatch.setenv("TIMEZONE", "Europe/Atlantis")

    with pytest.raises(ValueError, match="valid IANA timezone"):
        AppConfig()


def test_config_rejects_negative_limits(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a negative transfer limit, when loading config, then validation error is raised."""
    monkeypatch.setenv("MAX_TRANSFERS", "-1")

    with pytest.raises(ValueError):
        AppConfig()


def test_config_raises_error_when_file_not_found() -> None:
    """Given non-existent config file, when loading config, then FileNotFoundError is raised."""
    config = AppConfig(config_file="nonexistent.toml")

    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        config.get_corridor_config()


def test_config_raises_error_when_config_file_not_set() -> None:
    """Given config_file is None, when loading config, then ValueError is raised."""
    config = AppConfig(config_file=None)

    with pytest.raises(ValueError, match="config_file must be set"):
        config.get_corridor_config()


def test_config_requires_corridor_table() -> None:
    """Given TOML without [corridor], when loading the corridor, then ValueError is raised."""
    with pytest.raises(ValueError, match=r"\[corridor\] table"):
        _load_corridor_from('title = "no corridor"\n')


def test_corridor_loader_loads_corridor() -> None:
    """Given a valid corridor, when loading, then stations and transfer stations are set."""
    corridor = _load_corridor_from(VALID_CORRIDOR)

    assert corridor.origin.id == "8002549"
    assert corridor.origin.name == "Hamburg Hbf"
    assert corridor.destination.id == "8400058"
    assert corridor.transfer_stations == ("Osnabrück Hbf", "Utrecht Centraal")
    assert corridor.endpoints(False) == (corridor.destination, corridor.origin)


def test_corridor_loader_accepts_missing_transfer_stations() -> None:
    """Given no transfer_stations, when loading, then the list is empty."""
    toml_content = VALID_CORRIDOR.replace(
        'transfer_stations = ["Osnabrück Hbf", "Utrecht Centraal"]', ""
    )

    assert _load_corridor_from(toml_content).transfer_stations == ()


def test_corridor_loader_requires_station_fields() -> None:
    """Given an origin without a name, when loading, then CorridorConfigurationError is raised."""
    toml_content = VALID_CORRIDOR.replace('station_name = "Hamburg Hbf"', "")

    with pytest.raises(CorridorConfigurationError, match="origin needs both"):
        _load_corridor_from(toml_content)


def test_corridor_loader_rejects_identical_endpoints() -> None:
    """Given origin equal to destination, when loading, then CorridorConfigurationError is raised."""
    toml_content = VALID_CORRIDOR.replace("8400058", '"8002549"')

    with pytest.raises(CorridorConfigurationError, match="must differ"):
        _load_corridor_from(toml_content)


def test_corridor_loader_rejects_non_list_transfer_stations() -> None:
    """Given transfer_stations as a string, when loading, then CorridorConfigurationError is raised."""
    toml_content = VALID_CORRIDOR.replace(
        '["Osnabrück Hbf", "Utrecht Centraal"]', '"Osnabrück Hbf"'
    )

    with pytest.raises(CorridorConfigurationError, match="must be a list"):
        _load_corridor_from(toml_content)


def test_example_config_is_valid() -> None:
    """Given the shipped example config, when loading, then the Hamburg-Amsterdam corridor is returned."""
    example = Path(__file__).resolve().parent.parent / "config.example.toml"

    corridor = CorridorConfigurationLoader.load(AppConfig(config_file=str(example)))

    assert corridor.origin.id == "8002549"
    assert corridor.destination.id == "8400058"
    assert "Osnabrück Hbf" in corridor.transfer_stations
