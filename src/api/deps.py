import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.memory import get_memory_repo
from src.adapters.sqlite.repos import SQLiteContactRepo
from src.app_shell.config import AppConfig, load_config
from src.components.contacts import ContactRepoPort, ContactService


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("CONTACTS_DATA_DIR", "./data"))
        self.config_path = Path(os.environ.get("CONTACTS_CONFIG", self.base_dir / "contacts.yaml"))
        self.migrations_dir = self.base_dir / "migrations"

    def db_path(self, config: AppConfig) -> str:
        return str(self.data_dir / config.store.db_filename)


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Config ---
@lru_cache
def get_app_config(settings: Settings = Depends(get_settings)) -> AppConfig:
    return load_config(settings.config_path)


# --- Repos ---
def get_contact_repo(
    settings: Settings = Depends(get_settings),
    config: AppConfig = Depends(get_app_config),
) -> ContactRepoPort:
    if config.store.backend == "sqlite":
        return SQLiteContactRepo(
            settings.db_path(config), case_sensitive=config.search.case_sensitive
        )
    return get_memory_repo()


# --- Component Services ---
def get_contact_service(
    repo: ContactRepoPort = Depends(get_contact_repo),
) -> ContactService:
    """Get contact component service."""
    return ContactService(repo=repo)


# --- Route Params ---


def require_param(value: str | None, name: str = "contactId") -> str:
    """
    Fail fast on a missing route parameter.

    Raises ValueError when the identifier is missing or blank.
    """
    if value is None or not value.strip():
        raise ValueError(f"Missing {name} param")
    return value
