import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapters.memory import reset_memory_repo
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteContactRepo
from src.api.deps import get_settings
from src.app_shell.config import AppConfig, load_config, validate_app_config
from src.components.contacts import ContactRepoPort, ContactService
from src.services.bootstrap import seed_if_empty
from src.shell.http.health import (
    create_health_router,
    mark_startup_complete,
    setup_health_checks,
)

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _build_store(config: AppConfig) -> ContactRepoPort:
    """Prepare the configured store once at startup."""
    settings = get_settings()
    if config.store.backend == "sqlite":
        db_path = settings.db_path(config)
        SQLiteMigrator(db_path, str(settings.migrations_dir)).run_migrations()
        return SQLiteContactRepo(db_path, case_sensitive=config.search.case_sensitive)
    return reset_memory_repo(case_sensitive=config.search.case_sensitive)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    settings = get_settings()

    # Load config and prepare the store on startup (fail-fast)
    try:
        config = load_config(settings.config_path)
        validate_app_config(config, settings.data_dir, settings.migrations_dir)
        store = _build_store(config)
        if config.store.seed_on_start:
            seed_if_empty(ContactService(repo=store))
        logger.info("Config loaded from %s (store=%s)", settings.config_path, config.store.backend)
    except Exception as e:
        logger.critical("Startup failed: %s", e)
        sys.exit(1)

    setup_health_checks(store_probe=lambda: store.search(None))
    mark_startup_complete()

    yield
    # Shutdown cleanup if needed


app = FastAPI(
    title="Contacts",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_errors(request: Request, exc: StarletteHTTPException) -> Response:
    """Pages get a plain-text body ("Not found"); the JSON API keeps FastAPI's format."""
    if request.url.path.startswith("/api/"):
        return await http_exception_handler(request, exc)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


# --- Routers ---
from src.api.routes import contacts, contacts_ssr  # noqa: E402

app.include_router(create_health_router(version=__version__))
app.include_router(contacts.router, prefix="/api/contacts", tags=["Contacts"])
app.include_router(contacts_ssr.router, prefix="", tags=["SSR"])
