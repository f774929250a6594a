import os
import sys

# Add root to pythonpath
sys.path.append(os.getcwd())

from src.adapters.sqlite.migrator import SQLiteMigrator  # noqa: E402
from src.adapters.sqlite.repos import SQLiteContactRepo  # noqa: E402
from src.components.contacts import ContactService  # noqa: E402
from src.services.bootstrap import seed_if_empty  # noqa: E402


def seed():
    data_dir = os.environ.get("CONTACTS_DATA_DIR", "./data")
    os.makedirs(data_dir, exist_ok=True)

    db_path = f"{data_dir}/contacts.db"
    print(f"Seeding to {db_path}")

    SQLiteMigrator(db_path, "migrations").run_migrations()

    service = ContactService(repo=SQLiteContactRepo(db_path))
    created = seed_if_empty(service)
    if created:
        print(f"Seeded {created} contacts.")
    else:
        print("Contacts already present; nothing to do.")


if __name__ == "__main__":
    seed()
