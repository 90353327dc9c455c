"""
Settings loading for ZapGo.

This module loads the application settings from YAML files and environment
variables, merges them and validates the result.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, Union

import yaml
from pydantic import ValidationError
from dotenv import load_dotenv

from .models import ZapgoSettings
from ..utils.error_handling import ConfigurationError

ENV_PREFIX = "ZAPGO_"


class SettingsLoader:
    """
    Settings loader that supports multiple sources and validation.

    Loading priority (highest to lowest):
    1. Environment variables (ZAPGO_<SECTION>_<KEY>)
    2. Explicitly specified settings file
    3. Environment-specific settings (e.g., configs/development.yaml)
    4. Default settings file
    5. Built-in defaults (from Pydantic models)
    """

    def __init__(self, search_dir: Optional[Union[str, Path]] = None):
        """Initialize the settings loader.

        Args:
            search_dir: Directory to look for default files in (defaults to cwd)
        """
        self.search_dir = Path(search_dir) if search_dir else Path(".")
        self._settings: Optional[ZapgoSettings] = None
        self._settings_path: Optional[Path] = None

        env_file = self.search_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

    def load_settings(self, settings_path: Optional[Union[str, Path]] = None) -> ZapgoSettings:
        """
        Load settings from all sources and validate them.

        Args:
            settings_path: Optional path to a specific settings file

        Returns:
            Validated ZapgoSettings instance

        Raises:
            ConfigurationError: If loading or validation fails
        """
        try:
            data: Dict[str, Any] = {}

            default_path = self._find_file("default")
            if default_path:
                data = self._deep_merge(data, self._load_yaml_file(default_path))

            env_name = os.getenv("ZAPGO_ENV")
            if env_name:
                env_path = self._find_file(env_name)
                if env_path and env_path != default_path:
                    data = self._deep_merge(data, self._load_yaml_file(env_path))

            if settings_path:
                explicit_path = Path(settings_path)
                if not explicit_path.exists():
                    raise ConfigurationError(f"Specified settings file not found: {settings_path}")

                data = self._deep_merge(data, self._load_yaml_file(explicit_path))
                self._settings_path = explicit_path

            data = self._apply_env_overrides(data)

            self._settings = ZapgoSettings(**data)
            return self._settings

        except ConfigurationError:
            raise
        except ValidationError as e:
            raise ConfigurationError(f"Settings validation failed: {self._format_validation_error(e)}") from e
        except Exception as e:
            raise ConfigurationError(f"Failed to load settings: {str(e)}") from e

    def get_settings(self) -> ZapgoSettings:
        """Get the current settings, loading them if necessary."""
        if self._settings is None:
            self._settings = self.load_settings()
        return self._settings

    @property
    def settings_path(self) -> Optional[Path]:
        return self._settings_path

    def _find_file(self, stem: str) -> Optional[Path]:
        """Find configs/<stem>.yaml or a variant of it."""
        candidates = [
            self.search_dir / "configs" / f"{stem}.yaml",
            self.search_dir / "configs" / f"{stem}.yml",
            self.search_dir / "config" / f"{stem}.yaml",
            self.search_dir / "config" / f"{stem}.yml",
        ]

        for path in candidates:
            if path.exists():
                return path

        return None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a YAML settings file.

        Raises:
            ConfigurationError: If the file cannot be loaded or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {file_path}: {str(e)}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read settings file {file_path}: {str(e)}") from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {file_path} must contain a YAML object (dictionary)")

        return data

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two settings dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides.

        The first segment after the prefix names the section and the rest is
        the key: ZAPGO_ENGINE_DEBOUNCE_MS overrides engine.debounce_ms.
        ZAPGO_ENV only selects the environment file.
        """
        result = {key: (value.copy() if isinstance(value, dict) else value) for key, value in data.items()}

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX) or env_key == "ZAPGO_ENV":
                continue

            section, _, key = env_key[len(ENV_PREFIX):].lower().partition('_')
            if not key:
                continue

            section_data = result.setdefault(section, {})
            if not isinstance(section_data, dict):
                continue
            section_data[key] = self._convert_env_value(env_value)

        return result

    def _convert_env_value(self, value: str) -> Any:
        """Convert an environment variable string to bool, int, float or str."""
        if value.lower() in ('true', 'yes', 'on'):
            return True
        elif value.lower() in ('false', 'no', 'off'):
            return False

        try:
            if '.' not in value:
                return int(value)
            else:
                return float(value)
        except ValueError:
            pass

        return value

    def _format_validation_error(self, error: ValidationError) -> str:
        """Format a Pydantic validation error for display."""
        messages = []
        for err in error.errors():
            location = " -> ".join(str(loc) for loc in err['loc'])
            message = err['msg']
            value = err.get('input', 'N/A')
            messages.append(f"  {location}: {message} (got: {value})")

        return "Validation errors:\n" + "\n".join(messages)


def load_settings(
    settings_path: Optional[Union[str, Path]] = None,
    search_dir: Optional[Union[str, Path]] = None,
) -> ZapgoSettings:
    """Load settings with a fresh loader."""
    return SettingsLoader(search_dir).load_settings(settings_path)


def validate_settings_file(settings_path: Union[str, Path]) -> tuple:
    """
    Validate a settings file without keeping the result.

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        SettingsLoader().load_settings(settings_path)
        return True, None
    except ConfigurationError as e:
        return False, str(e)
