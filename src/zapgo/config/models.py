"""
Pydantic models for ZapGo configuration.

Two documents are modelled here:

- the command configuration document persisted by the config store
  (JSON, camelCase keys), describing which commands exist and how they are
  triggered;
- the application settings (YAML plus environment overrides) controlling
  logging, the resolution engine and where the command document lives.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommandConfig(BaseModel):
    """One configured command: a plugin bound to triggers and display metadata."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="Command identifier")
    plugin_id: str = Field(alias="pluginId", description="Catalog id of the plugin")
    enabled: bool = Field(default=True, description="Whether the command is registered")
    triggers: List[str] = Field(default_factory=list, description="Trigger words")
    name: Optional[str] = Field(default=None, description="Display name override")
    description: Optional[str] = Field(default=None, description="Description override")
    icon: Optional[str] = Field(default=None, description="Icon override")
    plugin_params: Optional[Dict[str, str]] = Field(
        default=None, alias="pluginParams", description="Plugin specific configuration"
    )

    @field_validator('triggers')
    @classmethod
    def strip_triggers(cls, v):
        """Drop blank triggers and surrounding whitespace."""
        return [t.strip() for t in v if t and t.strip()]


def default_fallback_command() -> CommandConfig:
    """Fallback used when nothing else is configured: open the settings."""
    return CommandConfig(
        id="",
        plugin_id="config",
        enabled=True,
        triggers=["fallback"],
        plugin_params={},
    )


class AppConfig(BaseModel):
    """The command configuration document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    commands: List[CommandConfig] = Field(default_factory=list)
    fallback_command: Optional[CommandConfig] = Field(
        default_factory=default_fallback_command, alias="fallbackCommand"
    )

    def to_document(self) -> dict:
        """Serialize with the camelCase keys of the on-disk document."""
        document = self.model_dump(by_alias=True, exclude_none=True)
        # An explicit null keeps a removed fallback from reverting to the default.
        if self.fallback_command is None:
            document["fallbackCommand"] = None
        return document


def default_app_config() -> AppConfig:
    return AppConfig()


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppSettings(BaseModel):
    """Application-level settings."""

    name: str = Field(default="ZapGo", description="Application display name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    verbose_logging: bool = Field(default=False, description="Enable verbose debug logging")
    data_dir: str = Field(default="~/.zapgo", validate_default=True, description="Application data directory")
    log_file: Optional[str] = Field(default="~/.zapgo/logs/zapgo.log", validate_default=True, description="Log file, empty to disable")
    max_log_size_mb: int = Field(default=10, ge=1, le=1000, description="Maximum log file size")
    backup_count: int = Field(default=5, ge=1, le=100, description="Number of backup log files")

    @field_validator('data_dir', 'log_file')
    @classmethod
    def expand_path(cls, v):
        """Expand user home directory in paths."""
        if not v:
            return None
        return str(Path(v).expanduser())


class EngineSettings(BaseModel):
    """Resolution engine settings."""

    debounce_ms: int = Field(default=150, ge=0, le=5000, description="Quiet period before re-resolving input")
    execution_timeout_seconds: Optional[float] = Field(
        default=None, gt=0, le=600, description="Timeout applied to command execution"
    )
    result_time_format: str = Field(default="%H:%M", description="strftime format for result timestamps")


class StoreSettings(BaseModel):
    """Command configuration store settings."""

    config_file: str = Field(default="~/.zapgo/config.json", validate_default=True, description="Command configuration document")

    @field_validator('config_file')
    @classmethod
    def expand_config_file(cls, v):
        return str(Path(v).expanduser())


class ZapgoSettings(BaseModel):
    """Main settings model."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    app: AppSettings = Field(default_factory=AppSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
