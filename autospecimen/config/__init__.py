"""Configuration management for autospecimen."""

from .loader import (
    ConfigLoader,
    ConfigurationError,
    get_active_config,
    load_config,
    set_active_config,
)
from .models import AutoSpecimenConfig, FixtureConfig

__all__ = [
    "AutoSpecimenConfig",
    "FixtureConfig",
    "ConfigLoader",
    "ConfigurationError",
    "load_config",
    "get_active_config",
    "set_active_config",
]
