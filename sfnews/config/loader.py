"""Configuration loader."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel, SourceConfig, default_sources

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = Path.home() / ".config" / "sfnews" / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None
        self._sources: Optional[List[SourceConfig]] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, or defaults if no config file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    @property
    def sources_path(self) -> Path:
        """Path of sources.yaml next to the config file."""
        return self.config_path.parent / "sources.yaml"

    @property
    def sources(self) -> List[SourceConfig]:
        """Get configured sources, or the built-in list if none are saved."""
        if self._sources is None:
            if self.sources_path.exists():
                self._sources = load_sources(self.sources_path)
            else:
                self._sources = default_sources()
        return self._sources

    def get_backup_config(self) -> Dict[str, Any]:
        """Get backup API configuration dict."""
        backup_config = self.config.backup.model_dump()

        # Handle API key from environment if specified
        if backup_config.get("api_key_env"):
            api_key = os.environ.get(backup_config["api_key_env"])
            if api_key:
                backup_config["api_key"] = api_key

        return backup_config


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_sources(sources_path: Path) -> List[SourceConfig]:
    """Load sources from YAML file."""
    if not sources_path.exists():
        raise FileNotFoundError(f"Sources file not found: {sources_path}")

    try:
        with open(sources_path) as f:
            sources_data = yaml.safe_load(f)

        if sources_data is None or "sources" not in sources_data:
            return []

        sources = []
        for source_data in sources_data["sources"]:
            try:
                sources.append(SourceConfig(**source_data))
            except ValidationError as e:
                logger.warning("Skipping invalid source %s: %s", source_data.get("name", "unknown"), e)

        return sources
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in sources file: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def save_sources(sources: List[SourceConfig], sources_path: Path) -> None:
    """Save sources to YAML file."""
    sources_path.parent.mkdir(parents=True, exist_ok=True)

    sources_data = {"sources": [s.model_dump(mode="json") for s in sources]}

    with open(sources_path, "w") as f:
        yaml.dump(sources_data, f, default_flow_style=False, sort_keys=False)
