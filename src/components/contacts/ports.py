"""
Contacts component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import Contact


class ContactRepoPort(Protocol):
    """Repository interface for contacts."""

    def save(self, contact: Contact) -> Contact:
        """Insert or overwrite a contact."""
        ...

    def get_by_id(self, contact_id: str) -> Contact | None:
        """Get contact by ID."""
        ...

    def search(self, query: str | None) -> list[Contact]:
        """List contacts whose first or last name contains query."""
        ...

    def delete(self, contact_id: str) -> None:
        """Delete contact."""
        ...
