import argparse
import logging
import sys

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteContactRepo
from src.api.deps import Settings
from src.app_shell.config import AppConfig, load_config
from src.components.contacts import ContactService, SearchContactsInput, run_search
from src.services.bootstrap import seed_contacts

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def get_config(settings: Settings) -> AppConfig:
    try:
        return load_config(settings.config_path)
    except ValueError as e:
        logger.error(f"Invalid config {settings.config_path}: {e}")
        sys.exit(1)


def get_sqlite_service(settings: Settings, config: AppConfig) -> ContactService:
    """The CLI only manages the persistent store; the memory store dies with its process."""
    db_path = settings.db_path(config)
    SQLiteMigrator(db_path, str(settings.migrations_dir)).run_migrations()
    repo = SQLiteContactRepo(db_path, case_sensitive=config.search.case_sensitive)
    return ContactService(repo=repo)


def handle_serve(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run("src.api.main:app", host=args.host, port=args.port, reload=args.reload)


def handle_migrate(settings: Settings, config: AppConfig, args: argparse.Namespace) -> None:
    db_path = settings.db_path(config)
    applied = SQLiteMigrator(db_path, str(settings.migrations_dir)).run_migrations()
    print(f"Applied {len(applied)} migration(s) to {db_path}.")


def handle_seed(settings: Settings, config: AppConfig, args: argparse.Namespace) -> None:
    service = get_sqlite_service(settings, config)
    if service.search(None) and not args.force:
        logger.warning("Store already has contacts. Use --force to seed anyway.")
        return
    count = seed_contacts(service)
    print(f"Seeded {count} contacts.")


def handle_list(settings: Settings, config: AppConfig, args: argparse.Namespace) -> None:
    service = get_sqlite_service(settings, config)
    result = run_search(SearchContactsInput(query=args.q), service)
    if not result.contacts:
        print("No contacts")
        return
    for contact in result.contacts:
        star = " ★" if contact.favorite else ""
        print(f"{contact.id}  {contact.display_name or 'No Name'}{star}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Contacts CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the web app")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # migrate
    subparsers.add_parser("migrate", help="Apply pending SQLite migrations")

    # seed
    seed_parser = subparsers.add_parser("seed", help="Add sample contacts to the SQLite store")
    seed_parser.add_argument("--force", action="store_true", help="Seed even if not empty")

    # list
    list_parser = subparsers.add_parser("list", help="List contacts in the SQLite store")
    list_parser.add_argument("q", nargs="?", default=None, help="Name substring to filter by")

    args = parser.parse_args()

    if args.command == "serve":
        handle_serve(args)
        return

    settings = Settings()
    config = get_config(settings)

    if args.command == "migrate":
        handle_migrate(settings, config, args)
    elif args.command == "seed":
        handle_seed(settings, config, args)
    elif args.command == "list":
        handle_list(settings, config, args)


if __name__ == "__main__":
    main()
