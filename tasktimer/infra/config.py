"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import os
from pathlib import Path
from typing import Optional
import yaml

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from tasktimer.domain.models import UserPreferences


# Keys of settings.yaml that map onto Settings fields; everything else is ignored
_YAML_FIELDS = ("storage_key", "refresh_interval_ms", "log_level", "database_url")


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. YAML config file
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='TASKTIMER_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        validate_assignment=True
    )

    # Application paths
    app_name: str = "TaskTimer"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # Database
    database_url: Optional[str] = None

    # Key the serialized task list is stored under
    storage_key: str = Field(default="tasks", min_length=1)

    # Display refresh period of the shared UI tick
    refresh_interval_ms: int = Field(default=1000, ge=100, le=60000)

    log_level: str = "INFO"

    # User preferences
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.config'
            self.config_dir = base / self.app_name.lower()

        if self.data_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.local' / 'share'
            self.data_dir = base / self.app_name.lower()

        # Create directories if they don't exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _find_config_file(self) -> Optional[Path]:
        # First check in workspace config folder
        config_file = Path("config/settings.yaml")
        if not config_file.exists():
            # Then check in user's config directory
            config_file = self.config_dir / "settings.yaml"
        return config_file if config_file.exists() else None

    def _load_yaml_config(self):
        """Load configuration from YAML file"""
        config_file = self._find_config_file()
        if config_file is None:
            return

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
        if not config_data:
            return

        # Values given explicitly (kwargs or environment) win over the file.
        # Assignment is validated, so out-of-range values raise here.
        explicit = self.model_fields_set
        for name in _YAML_FIELDS:
            if name in config_data and name not in explicit:
                setattr(self, name, config_data[name])

        prefs = config_data.get("preferences")
        if prefs and "preferences" not in explicit:
            self.preferences = UserPreferences(**prefs)

    def save_preferences(self):
        """Save current preferences to YAML file"""
        config_file = self.config_dir / "settings.yaml"
        data = {}
        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        data["preferences"] = self.preferences.model_dump()
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False)

    def get_db_url(self) -> str:
        """Get database URL, creating default if not set"""
        if self.database_url:
            return self.database_url

        db_path = self.data_dir / 'tasktimer.db'
        return f"sqlite+aiosqlite:///{db_path}"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings from file"""
    global _settings
    _settings = Settings()
    return _settings
