import pytest
from fastapi.testclient import TestClient

from src.adapters.memory import InMemoryContactRepo
from src.api.deps import get_app_config, get_contact_repo
from src.api.main import app
from src.app_shell.config import AppConfig
from src.domain.entities import Contact


@pytest.fixture
def contact_repo() -> InMemoryContactRepo:
    """Empty in-memory store per test."""
    return InMemoryContactRepo()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def client(contact_repo, app_config):
    """
    TestClient wired to the per-test store.

    Used without a context manager so the lifespan (config file, seeding)
    does not run.
    """
    app.dependency_overrides[get_contact_repo] = lambda: contact_repo
    app.dependency_overrides[get_app_config] = lambda: app_config
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sarah(contact_repo) -> Contact:
    return contact_repo.save(Contact(id="1", first="Sarah", last="Doe"))
