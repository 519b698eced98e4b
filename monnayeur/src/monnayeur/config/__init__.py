"""Monnayeur configuration."""

from monnayeur.config.settings import (
    MonnayeurConfig,
    ProgramConfig,
    get_settings,
    load_config,
)

__all__ = ["MonnayeurConfig", "ProgramConfig", "get_settings", "load_config"]
