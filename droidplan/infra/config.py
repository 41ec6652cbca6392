"""
Settings for DroidPlan.

Values come from three places, later ones winning:
defaults on the Settings class, DROIDPLAN_* environment variables (or a
.env file), and, for UserPreferences only, a settings.yaml file.

The preferences file is looked up in ./config first so a checkout can carry
its own preferences; otherwise the per-user config directory is used, and
that is also where save_preferences() writes.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional
import yaml

from pydantic_settings import BaseSettings, SettingsConfigDict
from droidplan.domain.models import UserPreferences

logger = logging.getLogger(__name__)

PREFERENCES_FILENAME = "settings.yaml"
WORKSPACE_CONFIG_DIR = Path("config")


def _user_base_dir(kind: str) -> Path:
    """Per-user base directory for 'config' or 'data' files"""
    if os.name == 'nt':
        return Path(os.getenv('APPDATA'))
    if kind == 'config':
        return Path.home() / '.config'
    return Path.home() / '.local' / 'share'


class Settings(BaseSettings):
    """
    Process-wide configuration.

    gemini_api_key and database_url are usually set through the environment
    (DROIDPLAN_GEMINI_API_KEY, DROIDPLAN_DATABASE_URL); everything the user
    edits lives in `preferences`.
    """
    model_config = SettingsConfigDict(
        env_prefix='DROIDPLAN_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    app_name: str = "DroidPlan"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # SQLAlchemy async URL; defaults to a SQLite file in data_dir
    database_url: Optional[str] = None

    # The AI breakdown reports UNAVAILABLE while this is unset
    gemini_api_key: Optional[str] = None

    preferences: UserPreferences = UserPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._resolve_dirs()
        self._load_preferences()

    def _resolve_dirs(self):
        folder = self.app_name.lower()
        if self.config_dir is None:
            self.config_dir = _user_base_dir('config') / folder
        if self.data_dir is None:
            self.data_dir = _user_base_dir('data') / folder

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def preference_files(self) -> List[Path]:
        """Candidate preference files in lookup order"""
        return [WORKSPACE_CONFIG_DIR / PREFERENCES_FILENAME, self.config_dir / PREFERENCES_FILENAME]

    def _load_preferences(self):
        source = next((path for path in self.preference_files() if path.exists()), None)
        if source is None:
            return

        with open(source, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if data:
            self.preferences = UserPreferences(**data)
            logger.info(f"Preferences loaded from {source}")

    def save_preferences(self):
        """Write the current preferences to the per-user settings.yaml"""
        target = self.config_dir / PREFERENCES_FILENAME
        with open(target, 'w', encoding='utf-8') as f:
            yaml.dump(self.preferences.model_dump(), f, default_flow_style=False, allow_unicode=True)
        logger.info(f"Preferences saved to {target}")

    def get_db_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / 'droidplan.db'}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Shared Settings instance, created on first use"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Discard the shared instance and read environment and files again"""
    global _settings
    _settings = Settings()
    return _settings
