"""Configuration adapters."""

from smart_train_finder.adapters.config.app_config import AppConfig
from smart_train_finder.adapters.config.corridor_configuration_loader import (
    CorridorConfigurationLoader,
)

__all__ = ["AppConfig", "CorridorConfigurationLoader"]
