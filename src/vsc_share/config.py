"""Configuration management for vsc-share CLI."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import VscShareConfig
from .utils import get_vsc_share_config_path

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages loading and saving of vsc-share's own configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or get_vsc_share_config_path()

    def load_config(self) -> VscShareConfig:
        """Load configuration from disk, falling back to defaults if not present."""
        if not self.config_path.exists():
            logger.debug(f"No configuration file at {self.config_path}, using defaults")
            return VscShareConfig()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config_data = json.load(f)

            config = VscShareConfig(**config_data)
            logger.debug(f"Loaded configuration from {self.config_path}")
            return config

        except (OSError, ValueError, TypeError, ValidationError) as e:
            raise ConfigError(
                f"Failed to load configuration from {self.config_path}: {e}"
            )

    def save_config(self, config: VscShareConfig) -> None:
        """Save configuration to disk."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            config_dict = config.model_dump(mode="json")

            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
                f.write("\n")

            logger.debug(f"Saved configuration to {self.config_path}")

        except (OSError, TypeError, ValueError) as e:
            raise ConfigError(
                f"Failed to save configuration to {self.config_path}: {e}"
            )

