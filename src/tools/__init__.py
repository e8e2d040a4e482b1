"""Configuration tools for clustering runs."""

from .config_loader import (
    ConfigLoader,
    get_config,
    load_config,
    save_config,
    PROFILE_ENV_VAR,
    DEFAULT_PROFILE,
)

__all__ = [
    "ConfigLoader",
    "get_config",
    "load_config",
    "save_config",
    "PROFILE_ENV_VAR",
    "DEFAULT_PROFILE",
]
