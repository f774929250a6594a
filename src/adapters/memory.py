"""
In-memory contact store.

Stand-in for a real database: records live in a dict for the life of
the process.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from src.components.contacts import matches_query, sort_contacts
from src.domain.entities import Contact


class InMemoryContactRepo:
    """Thread-safe dict-backed ContactRepoPort."""

    def __init__(self, contacts: Iterable[Contact] = (), case_sensitive: bool = False) -> None:
        self._contacts: dict[str, Contact] = {c.id: c for c in contacts}
        self._case_sensitive = case_sensitive
        self._lock = threading.Lock()

    def save(self, contact: Contact) -> Contact:
        with self._lock:
            self._contacts[contact.id] = contact
        return contact

    def get_by_id(self, contact_id: str) -> Contact | None:
        with self._lock:
            return self._contacts.get(contact_id)

    def search(self, query: str | None) -> list[Contact]:
        with self._lock:
            contacts = list(self._contacts.values())
        return sort_contacts(c for c in contacts if matches_query(c, query, self._case_sensitive))

    def delete(self, contact_id: str) -> None:
        with self._lock:
            self._contacts.pop(contact_id, None)

    def count(self) -> int:
        with self._lock:
            return len(self._contacts)


# Process-wide store used when the memory backend is configured
_memory_repo_instance: InMemoryContactRepo | None = None


def get_memory_repo() -> InMemoryContactRepo:
    """Get in-memory repo singleton."""
    global _memory_repo_instance
    if _memory_repo_instance is None:
        _memory_repo_instance = InMemoryContactRepo()
    return _memory_repo_instance


def reset_memory_repo(contacts: Iterable[Contact] = (), case_sensitive: bool = False) -> InMemoryContactRepo:
    """Replace the singleton, e.g. after seeding or between tests."""
    global _memory_repo_instance
    _memory_repo_instance = InMemoryContactRepo(contacts, case_sensitive=case_sensitive)
    return _memory_repo_instance
