"""Configuration management for the SF news aggregator."""

from .loader import Config, load_config, load_sources, save_config, save_sources
from .models import (
    BackupConfig,
    ConfigModel,
    FetchSettings,
    RankingDefaults,
    SourceConfig,
    SourceKind,
    default_sources,
)

__all__ = [
    "Config",
    "ConfigModel",
    "BackupConfig",
    "FetchSettings",
    "RankingDefaults",
    "SourceConfig",
    "SourceKind",
    "default_sources",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]
