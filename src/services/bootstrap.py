import logging

from src.components.contacts import ContactService

logger = logging.getLogger(__name__)

# Sample records so a fresh store has something to browse.
SEED_CONTACTS: list[dict[str, str]] = [
    {
        "first": "Sarah",
        "last": "Doe",
        "twitter": "@sarahdoe",
        "avatar": "https://example.com/avatars/sarah-doe.jpg",
        "notes": "Met at the spring meetup.",
    },
    {
        "first": "Jordan",
        "last": "Blake",
        "twitter": "@jblake",
        "avatar": "https://example.com/avatars/jordan-blake.jpg",
    },
    {
        "first": "Priya",
        "last": "Raman",
        "avatar": "https://example.com/avatars/priya-raman.jpg",
        "notes": "Prefers email over calls.",
    },
    {
        "first": "Tomás",
        "last": "Ortega",
        "twitter": "@tortega",
        "avatar": "https://example.com/avatars/tomas-ortega.jpg",
    },
    {
        "first": "Mei",
        "last": "Chen",
        "avatar": "https://example.com/avatars/mei-chen.jpg",
    },
]


def seed_contacts(service: ContactService, records: list[dict[str, str]] | None = None) -> int:
    """Create the sample contacts. Returns how many were created."""
    records = SEED_CONTACTS if records is None else records
    for record in records:
        service.create(**record)
    logger.info("Seeded %d contacts", len(records))
    return len(records)


def seed_if_empty(service: ContactService) -> int:
    """
    Seed only when the store holds no contacts (Day 0).
    """
    if service.search(None):
        logger.info("Store already has contacts, skipping seed")
        return 0
    return seed_contacts(service)
