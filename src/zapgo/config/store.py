"""
JSON persistence for the command configuration document.

The store never raises on I/O or format problems: a missing, unreadable or
corrupt document loads as None ("use defaults") and a failed write returns
False. The failures are logged.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .models import AppConfig
from ..utils.logging import get_logger


class JsonConfigStore:
    """Config store backed by a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.logger = get_logger(__name__)

    def load(self) -> Optional[AppConfig]:
        """Read and validate the document.

        Returns:
            AppConfig, or None when the defaults should be used
        """
        if not self.path.exists():
            self.logger.info(f"No configuration at {self.path}, using defaults")
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Cannot read configuration {self.path}: {e}")
            return None

        if not isinstance(data, dict):
            self.logger.error(f"Configuration {self.path} must contain a JSON object")
            return None

        try:
            config = AppConfig.model_validate(data)
        except ValidationError as e:
            self.logger.error(f"Invalid configuration {self.path}: {e}")
            return None

        self.logger.debug(f"Loaded {len(config.commands)} commands from {self.path}")
        return config

    def save(self, config: AppConfig) -> bool:
        """Write the document.

        Returns:
            True on success
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(config.to_document(), f, ensure_ascii=False, indent=2)
        except OSError as e:
            self.logger.error(f"Cannot save configuration {self.path}: {e}")
            return False

        self.logger.info(f"Saved configuration to {self.path}")
        return True
