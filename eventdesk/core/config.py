"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

from eventdesk import __version__


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EventDesk"
    APP_VERSION: str = __version__
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "WARNING"  # keep the console quiet unless asked

    # Storage
    STORAGE_BACKEND: str = "file"  # file, memory
    DATA_DIR: Path = Path("data")
    USERS_FILE: str = "users.txt"
    EVENTS_FILE: str = "events.txt"
    ATTENDEES_FILE: str = "attendees.txt"
    INVENTORY_FILE: str = "inventory.txt"
    EXPORT_DIR: Path = Path("exports")

    # Capacity ceilings (None = unbounded)
    MAX_USERS: Optional[int] = None
    MAX_EVENTS: Optional[int] = None
    MAX_ATTENDEES: Optional[int] = None
    MAX_INVENTORY_ITEMS: Optional[int] = None

    # Seed account
    SEED_DEFAULT_ADMIN: bool = True
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    model_config = {
        "env_file": ".env",
        "env_prefix": "EVENTDESK_",
        "case_sensitive": True,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
