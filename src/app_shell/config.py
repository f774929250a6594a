import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

StoreBackend = Literal["memory", "sqlite"]

STORE_ENV_VAR = "CONTACTS_STORE"


class AppSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = "Contacts"
    docs_url: str = "https://fastapi.tiangolo.com"


class StoreSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    backend: StoreBackend = "memory"
    seed_on_start: bool = True
    db_filename: str = "contacts.db"


class SearchSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    case_sensitive: bool = False


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app: AppSection = AppSection()
    store: StoreSection = StoreSection()
    search: SearchSection = SearchSection()


def load_config(path: Path | None) -> AppConfig:
    """
    Load and validate the app config file.

    A missing file yields the defaults. Raises ValueError if the YAML or
    its schema is invalid. CONTACTS_STORE overrides store.backend.
    """
    data: dict = {}
    if path is not None and path.exists():
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML syntax in config file: {e}") from e
    elif path is not None:
        logger.warning("Config file %s not found, using defaults", path)

    backend = os.environ.get(STORE_ENV_VAR)
    if backend:
        data = {**data, "store": {**(data.get("store") or {}), "backend": backend}}

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed:\n{e}") from e


def validate_app_config(config: AppConfig, data_dir: Path, migrations_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    """
    if config.store.backend == "sqlite":
        if not migrations_dir.is_dir():
            raise FileNotFoundError(f"Migrations directory not found at: {migrations_dir}")
        data_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(data_dir, os.W_OK):
            raise ValueError(f"Data directory is not writable: {data_dir}")

    logger.info("Configuration validated (store=%s).", config.store.backend)
